import pytest

from leaderdex.segment import (
    SegmentKind,
    Segments,
    TermPosition,
    calculate_weight,
    segment_plain_text,
    segment_weight,
)


def test_segment_kind_order():
    positions = [TermPosition(0, kind) for kind in reversed(list(SegmentKind))]
    assert [position.segment_kind for position in sorted(positions)] == [
        SegmentKind.FILENAME,
        SegmentKind.TITLE,
        SegmentKind.AUTHORS,
        SegmentKind.BODY,
        SegmentKind.EPIGRAPH,
    ]
    assert SegmentKind.FILENAME == 0


def test_segment_kind_str():
    assert str(TermPosition(0, SegmentKind.BODY)) == "Document(0)[Body]"
    assert str(TermPosition(0, SegmentKind.FILENAME)) == "Document(0)[Filename]"


def test_term_position_str():
    assert str(TermPosition(3, SegmentKind.BODY)) == "Document(3)[Body]"


def test_term_position_ordering_and_hash():
    positions = {TermPosition(1, SegmentKind.BODY), TermPosition(0, SegmentKind.TITLE)}
    assert sorted(positions) == [
        TermPosition(0, SegmentKind.TITLE),
        TermPosition(1, SegmentKind.BODY),
    ]
    assert TermPosition(1, SegmentKind.BODY) in positions


def test_segment_weights():
    assert segment_weight(SegmentKind.FILENAME) == 0.2
    assert segment_weight(SegmentKind.AUTHORS) == 0.1
    assert segment_weight(SegmentKind.TITLE) == 0.4
    assert segment_weight(SegmentKind.EPIGRAPH) == 0.1
    assert segment_weight(SegmentKind.BODY) == 0.2


def test_calculate_weight():
    assert calculate_weight([SegmentKind.TITLE, SegmentKind.BODY]) == pytest.approx(0.6)
    assert calculate_weight([]) == 0


def test_segments_add_and_get():
    segments = Segments()
    segments.add(SegmentKind.TITLE, "Hamlet")
    segments.add(SegmentKind.TITLE, "Prince")
    assert segments.get(SegmentKind.TITLE) == ["Hamlet", "Prince"]
    assert segments.get(SegmentKind.BODY) is None
    assert dict(segments.items()) == {SegmentKind.TITLE: ["Hamlet", "Prince"]}


def test_segment_plain_text():
    segments = segment_plain_text("To be or not to be")
    assert dict(segments.items()) == {SegmentKind.BODY: ["To be or not to be"]}
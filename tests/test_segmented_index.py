import json

import pytest

from leaderdex.context import InfContext
from leaderdex.segment import SegmentKind, TermPosition, calculate_weight
from leaderdex.segmented_index import (
    SegmentedIndex,
    index_segmented_document,
    rank_positions,
    segment_document,
)

FB2_TEXT = (
    "<FictionBook><description><title-info>"
    "<author><first-name>William</first-name><last-name>Shakespeare</last-name></author>"
    "<book-title>Hamlet</book-title></title-info></description>"
    "<body><section><p>Denmark rots</p></section></body></FictionBook>"
)


@pytest.fixture
def ctx(tmp_path):
    (tmp_path / "play.txt").write_text("Hamlet is a prince", encoding="utf-8")
    (tmp_path / "book.fb2").write_text(FB2_TEXT, encoding="utf-8")
    return InfContext.from_directory(tmp_path)


def _document_id(ctx, file_name):
    return next(
        document_id
        for document_id in ctx.document_ids()
        if ctx.document(document_id).path.name == file_name
    )


def test_add_term_and_lookup():
    index = SegmentedIndex()
    index.add_term("cat", TermPosition(1, SegmentKind.BODY))
    index.add_term("cat", TermPosition(1, SegmentKind.TITLE))
    assert index.term_positions("cat") == {
        TermPosition(1, SegmentKind.BODY),
        TermPosition(1, SegmentKind.TITLE),
    }
    assert index.term_positions("dog") == set()
    assert index.unique_word_count() == 1


def test_merge():
    first = SegmentedIndex()
    first.add_term("cat", TermPosition(0, SegmentKind.BODY))
    second = SegmentedIndex()
    second.add_term("cat", TermPosition(2, SegmentKind.TITLE))
    second.add_term("dog", TermPosition(2, SegmentKind.BODY))
    first.merge(second)
    assert first.term_positions("cat") == {
        TermPosition(0, SegmentKind.BODY),
        TermPosition(2, SegmentKind.TITLE),
    }
    assert first.unique_word_count() == 2


def test_to_json():
    index = SegmentedIndex()
    index.add_term("cat", TermPosition(2, SegmentKind.TITLE))
    assert json.loads(index.to_json()) == {
        "cat": [{"document": 2, "segment_kind": "Title"}]
    }


def test_segment_plain_document(ctx):
    document_id = _document_id(ctx, "play.txt")
    segments = segment_document(document_id, ctx)
    assert segments.get(SegmentKind.BODY) == ["Hamlet is a prince"]
    path = ctx.document(document_id).path
    assert segments.get(SegmentKind.FILENAME) == list(path.parts)


def test_segment_fb2_document(ctx):
    document_id = _document_id(ctx, "book.fb2")
    segments = segment_document(document_id, ctx)
    assert segments.get(SegmentKind.TITLE) == ["Hamlet"]
    assert segments.get(SegmentKind.AUTHORS) == ["William", "Shakespeare"]
    assert segments.get(SegmentKind.BODY) == ["Denmark rots"]
    assert segments.get(SegmentKind.FILENAME)[-1] == "book.fb2"


def test_index_segmented_document(ctx):
    play = _document_id(ctx, "play.txt")
    index, stats = index_segmented_document(play, ctx)
    assert index.term_positions("hamlet") == {TermPosition(play, SegmentKind.BODY)}
    assert TermPosition(play, SegmentKind.FILENAME) in index.term_positions("txt")
    assert stats.characters_read >= len("Hamlet is a prince")


def test_index_fb2_document_marks_title(ctx):
    book = _document_id(ctx, "book.fb2")
    index, _ = index_segmented_document(book, ctx)
    assert index.term_positions("hamlet") == {TermPosition(book, SegmentKind.TITLE)}
    assert index.term_positions("shakespeare") == {TermPosition(book, SegmentKind.AUTHORS)}
    assert index.term_positions("denmark") == {TermPosition(book, SegmentKind.BODY)}


def test_rank_positions_orders_by_weight():
    positions = {
        TermPosition(0, SegmentKind.BODY),
        TermPosition(1, SegmentKind.TITLE),
        TermPosition(1, SegmentKind.BODY),
    }
    ranked = rank_positions(positions)
    assert [document_id for document_id, _, _ in ranked] == [1, 0]
    assert ranked[0][1] == [SegmentKind.TITLE, SegmentKind.BODY]
    assert ranked[0][2] == calculate_weight(ranked[0][1])
    assert ranked[0][2] > ranked[1][2]


def test_rank_positions_empty():
    assert rank_positions([]) == []
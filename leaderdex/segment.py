"""Document segments: parts of a document such as its title or body."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, ItemsView, Optional


class SegmentKind(IntEnum):
    """The part of a document a piece of text comes from."""

    FILENAME = 0
    TITLE = 1
    AUTHORS = 2
    BODY = 3
    EPIGRAPH = 4

    def __str__(self) -> str:
        return self.name.capitalize()


_SEGMENT_WEIGHTS = {
    SegmentKind.FILENAME: 0.2,
    SegmentKind.AUTHORS: 0.1,
    SegmentKind.TITLE: 0.4,
    SegmentKind.EPIGRAPH: 0.1,
    SegmentKind.BODY: 0.2,
}


def segment_weight(segment_kind: SegmentKind) -> float:
    """How much a match in this kind of segment counts when ranking."""
    return _SEGMENT_WEIGHTS[segment_kind]


def calculate_weight(segment_kinds: Iterable[SegmentKind]) -> float:
    """Total weight of matches in the given segments."""
    return sum(segment_weight(kind) for kind in segment_kinds)


@dataclass(frozen=True, order=True)
class TermPosition:
    """Where a term occurs: a document and a segment of it."""

    document: int
    segment_kind: SegmentKind

    def __str__(self) -> str:
        return f"Document({self.document})[{self.segment_kind}]"


@dataclass
class Segments:
    """Pieces of text of a document, grouped by segment kind."""

    _segments: dict[SegmentKind, list[str]] = field(default_factory=dict)

    def add(self, segment_kind: SegmentKind, segment: str) -> None:
        self._segments.setdefault(segment_kind, []).append(segment)

    def get(self, segment_kind: SegmentKind) -> Optional[list[str]]:
        """Texts of a segment kind, or ``None`` if none were added."""
        return self._segments.get(segment_kind)

    def items(self) -> ItemsView[SegmentKind, list[str]]:
        return self._segments.items()


def segment_plain_text(text: str) -> Segments:
    """Treat the whole text as the body."""
    segments = Segments()
    segments.add(SegmentKind.BODY, text)
    return segments
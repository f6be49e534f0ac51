"""An inverted index that records which segment of a document a term is in."""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from leaderdex.context import InfContext
from leaderdex.fb2 import segment_fb2
from leaderdex.lexer import LexerStats, lex
from leaderdex.segment import (
    SegmentKind,
    Segments,
    TermPosition,
    calculate_weight,
    segment_plain_text,
)


@dataclass
class SegmentedIndex:
    """Terms mapped to the document segments they occur in."""

    _documents: set[int] = field(default_factory=set)
    _index: dict[str, set[TermPosition]] = field(default_factory=dict)

    def add_term(self, term: str, term_position: TermPosition) -> None:
        self._index.setdefault(term, set()).add(term_position)
        self._documents.add(term_position.document)

    def merge(self, other: "SegmentedIndex") -> None:
        """Add all terms of another index into this one."""
        for term, positions in other._index.items():
            self._documents.update(position.document for position in positions)
            self._index.setdefault(term, set()).update(positions)

    def unique_word_count(self) -> int:
        return len(self._index)

    def term_positions(self, term: str) -> set[TermPosition]:
        """Positions of ``term``; empty if it is unknown."""
        return set(self._index.get(term, ()))

    def to_json(self) -> str:
        """The index as a pretty-printed JSON object keyed by term."""
        data = {
            term: [
                {"document": position.document, "segment_kind": str(position.segment_kind)}
                for position in sorted(self._index[term])
            ]
            for term in sorted(self._index)
        }
        return json.dumps(data, indent=2, ensure_ascii=False)


def segment_document(document_id: int, ctx: InfContext) -> Segments:
    """Split a document into segments, adding its path parts as file names.

    Files with an ``.fb2`` extension are read as FictionBook documents;
    anything else is plain text.
    """
    document = ctx.document(document_id)
    data = ctx.document_data(document_id)
    if document is not None and document.path.suffix == ".fb2":
        segments = segment_fb2(data)
    else:
        segments = segment_plain_text(data)

    if document is not None:
        for component in document.path.parts:
            segments.add(SegmentKind.FILENAME, component)
    return segments


def index_segmented_document(document_id: int, ctx: InfContext) -> tuple[SegmentedIndex, LexerStats]:
    """Build an index holding the terms of every segment of one document."""
    index = SegmentedIndex()
    stats = LexerStats()
    for segment_kind, texts in segment_document(document_id, ctx).items():
        position = TermPosition(document_id, segment_kind)
        for text in texts:
            stats.merge(lex(text, lambda term: index.add_term(term, position)))
    return index, stats


def rank_positions(
    positions: Iterable[TermPosition],
) -> list[tuple[int, list[SegmentKind], float]]:
    """Group positions by document and order documents by segment weight.

    Returns ``(document_id, segment_kinds, weight)`` triples, heaviest first.
    """
    grouped: defaultdict[int, list[SegmentKind]] = defaultdict(list)
    for position in sorted(set(positions)):
        grouped[position.document].append(position.segment_kind)
    ranked = [(document_id, kinds, calculate_weight(kinds)) for document_id, kinds in grouped.items()]
    ranked.sort(key=lambda entry: entry[2], reverse=True)
    return ranked
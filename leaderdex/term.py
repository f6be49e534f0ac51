"""Per-term occurrence counts, keyed by document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ItemsView


@dataclass
class TermPositions:
    """How many times a term occurs in each document."""

    _positions: dict[int, int] = field(default_factory=dict)

    def documents(self) -> set[int]:
        """Ids of the documents the term occurs in."""
        return set(self._positions)

    def document_count(self) -> int:
        return len(self._positions)

    def count(self, document_id: int) -> int:
        """Occurrences in a document; zero if the term is absent from it."""
        return self._positions.get(document_id, 0)

    def add_position(self, document_id: int) -> None:
        self.add_position_with_count(document_id, 1)

    def add_position_with_count(self, document_id: int, delta: int) -> None:
        self._positions[document_id] = self._positions.get(document_id, 0) + delta

    def merge(self, other: "TermPositions") -> None:
        """Add the counts of another instance into this one."""
        for document_id, other_count in other._positions.items():
            self.add_position_with_count(document_id, other_count)

    def items(self) -> ItemsView[int, int]:
        return self._positions.items()
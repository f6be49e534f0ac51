"""Documents known to the indexer and the registry that numbers them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional


@dataclass(frozen=True)
class Document:
    """A document backed by a file in a :class:`~leaderdex.files.FilePool`."""

    path: Path
    file_id: int

    def name(self) -> str:
        """Human-readable name of the document: its path."""
        return str(self.path)


@dataclass
class DocumentRegistry:
    """Assigns sequential integer ids to documents."""

    _documents: list[Document] = field(default_factory=list)

    def document_count(self) -> int:
        return len(self._documents)

    def document(self, document_id: int) -> Optional[Document]:
        """Return the document with the given id, or ``None`` if unknown."""
        if 0 <= document_id < len(self._documents):
            return self._documents[document_id]
        return None

    def document_ids(self) -> range:
        return range(len(self._documents))

    def documents(self) -> Iterator[Document]:
        return iter(self._documents)

    def add_document(self, document: Document) -> int:
        """Register a document and return its new id."""
        self._documents.append(document)
        return len(self._documents) - 1
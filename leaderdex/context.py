"""The set of documents being indexed, loaded from a directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from leaderdex.document import Document, DocumentRegistry
from leaderdex.files import FilePool

PathLike = Union[str, Path]


def list_files(path: PathLike) -> list[Path]:
    """Regular files directly inside ``path``, in name order."""
    return sorted(entry for entry in Path(path).iterdir() if entry.is_file())


@dataclass
class InfContext:
    """Documents together with the files that hold their text."""

    documents: DocumentRegistry = field(default_factory=DocumentRegistry)
    file_pool: FilePool = field(default_factory=FilePool)

    @classmethod
    def from_directory(
        cls, base_path: PathLike, file_limit: Optional[int] = None
    ) -> "InfContext":
        """Load up to ``file_limit`` files from a directory.

        Files that cannot be read are reported and skipped; they still count
        towards the limit.
        """
        ctx = cls()
        for attempted, path in enumerate(list_files(base_path)):
            if file_limit is not None and attempted >= file_limit:
                break
            try:
                file_id = ctx.file_pool.add_file(path)
            except (OSError, ValueError) as err:
                cause = err.__cause__ or err
                print(f"Ignoring file {str(path)!r}. Error: {err}. Caused by: {cause}")
                continue
            ctx.documents.add_document(Document(path, file_id))
        return ctx

    def document_count(self) -> int:
        return self.documents.document_count()

    def document_ids(self) -> range:
        return self.documents.document_ids()

    def document(self, document_id: int) -> Optional[Document]:
        return self.documents.document(document_id)

    def document_data(self, document_id: int) -> str:
        """Text of a document; raises LookupError if it is unknown."""
        document = self.documents.document(document_id)
        if document is None:
            raise LookupError(f"Document with id Document({document_id}) doesn't exist")
        loaded = self.file_pool.file(document.file_id)
        if loaded is None:
            raise LookupError(f"File with id File({document.file_id}) doesn't exist")
        return loaded.text()

    def files(self) -> FilePool:
        return self.file_pool
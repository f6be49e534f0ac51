"""Loaded text files and the pool that numbers them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

PathLike = Union[str, Path]


class FileDecodeError(ValueError):
    """Raised when a file does not hold valid UTF-8 text."""


@dataclass(frozen=True)
class File:
    """The contents of a UTF-8 text file."""

    _data: bytes = b""

    @classmethod
    def open(cls, path: PathLike) -> "File":
        """Read a file, checking that it is valid UTF-8."""
        data = Path(path).read_bytes()
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as err:
            raise FileDecodeError("File contains non UTF-8 data") from err
        return cls(data)

    def text(self) -> str:
        return self._data.decode("utf-8")

    def data(self) -> bytes:
        return self._data


@dataclass
class FilePool:
    """Holds loaded files under sequential integer ids."""

    _files: list[File] = field(default_factory=list)

    def file_count(self) -> int:
        return len(self._files)

    def files(self) -> Iterator[File]:
        return iter(self._files)

    def file(self, file_id: int) -> Optional[File]:
        """Return the file with the given id, or ``None`` if unknown."""
        if 0 <= file_id < len(self._files):
            return self._files[file_id]
        return None

    def add_file(self, path: PathLike) -> int:
        """Load a file into the pool and return its id."""
        self._files.append(File.open(path))
        return len(self._files) - 1
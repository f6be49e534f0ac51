"""An inverted index mapping each term to the set of documents holding it.

Besides a plain text form, the index can be written in a compact binary
form: a front-coded, sorted dictionary of terms followed by the
variable-byte encoded gaps between the document ids of each term.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import BinaryIO, TextIO

from leaderdex.context import InfContext
from leaderdex.encoding import vb_decode, vb_encode
from leaderdex.lexer import LexerStats, lex

TERM_POSITIONS_SEPARATOR = ":"
POSITIONS_SEPARATOR = ","

_DICTIONARY_END = 0
_DICTIONARY_ENTRY = re.compile(rb"([0-9]*)([^0-9\x00]*)")


def longest_prefix(anchor: str, term: str) -> int:
    """Length in UTF-8 bytes of the common leading characters of two terms.

    If ``term`` runs out before a difference is found, the whole length of
    ``anchor`` is returned.
    """
    length = 0
    for left, right in zip(anchor, term):
        if left != right:
            return length
        length += len(left.encode("utf-8"))
    return len(anchor.encode("utf-8"))


def _parse_count(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"invalid number: {text!r}")
    return int(text)


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


@dataclass
class DocumentSetIndex:
    """Terms mapped to the ids of the documents they occur in."""

    _documents: set[int] = field(default_factory=set)
    _index: dict[str, set[int]] = field(default_factory=dict)

    def add_term(self, term: str, document_id: int) -> None:
        """Record that ``term`` occurs in a document."""
        self._index.setdefault(term, set()).add(document_id)
        self._documents.add(document_id)

    def merge(self, other: "DocumentSetIndex") -> None:
        """Add all terms of another index into this one."""
        for term, positions in other._index.items():
            self._documents.update(positions)
            self._index.setdefault(term, set()).update(positions)

    def unique_word_count(self) -> int:
        return len(self._index)

    def term_positions(self, term: str) -> set[int]:
        """Ids of the documents holding ``term``; empty if it is unknown."""
        return set(self._index.get(term, ()))

    def documents(self) -> set[int]:
        """Ids of every document that contributed a term."""
        return set(self._documents)

    def save(self, stream: TextIO) -> None:
        """Write one ``term:id,id,...`` line per term."""
        for term in sorted(self._index):
            ids = POSITIONS_SEPARATOR.join(str(document_id) for document_id in sorted(self._index[term]))
            stream.write(f"{term}{TERM_POSITIONS_SEPARATOR}{ids}\n")

    @classmethod
    def load(cls, stream: TextIO) -> "DocumentSetIndex":
        """Read an index written by :meth:`save`; raises ValueError if malformed."""
        index = cls()
        for raw_line in stream:
            parts = _strip_line_end(raw_line).split(TERM_POSITIONS_SEPARATOR)
            if len(parts) != 2:
                raise ValueError("Expected term and document ids")
            term, positions_str = parts
            index._index[term] = {
                _parse_count(position) for position in positions_str.split(POSITIONS_SEPARATOR)
            }
        index._documents = set().union(*index._index.values())
        return index

    def save_compressed(self, stream: BinaryIO) -> None:
        """Write the front-coded dictionary and the gap-encoded postings."""
        terms = sorted(self._index)
        anchor = None
        for term in terms:
            prefix_len = longest_prefix(anchor, term) if anchor is not None else 0
            anchor = term
            stream.write(str(prefix_len).encode("ascii"))
            stream.write(term.encode("utf-8")[prefix_len:])
        stream.write(bytes([_DICTIONARY_END]))

        for term in terms:
            documents = sorted(self._index[term])
            stream.write(vb_encode(len(documents)))
            previous = 0
            for document_id in documents:
                stream.write(vb_encode(document_id - previous))
                previous = document_id

    @classmethod
    def read_compressed(cls, stream: BinaryIO) -> "DocumentSetIndex":
        """Read an index written by :meth:`save_compressed`.

        Raises ValueError if the dictionary is malformed.
        """
        data = stream.read()
        terms, postings_start = _read_dictionary(data)

        postings = iter(data[postings_start:])
        index = cls()
        for term in terms:
            document_count = vb_decode(postings)
            documents: set[int] = set()
            previous = 0
            for _ in range(document_count):
                previous += vb_decode(postings)
                documents.add(previous)
            index._index[term] = documents
        index._documents = set().union(*index._index.values())
        return index


def _read_dictionary(data: bytes) -> tuple[list[str], int]:
    """Decode the term dictionary; return the terms and where postings begin."""
    raw_terms: list[bytes] = []
    pos = 0
    while pos < len(data) and data[pos] != _DICTIONARY_END:
        match = _DICTIONARY_ENTRY.match(data, pos)
        digits, text = match.group(1), match.group(2)
        if not digits:
            raise ValueError("Expected prefix length in term dictionary")
        prefix_len = int(digits)
        if raw_terms:
            anchor = raw_terms[-1]
            if prefix_len > len(anchor):
                raise ValueError("Prefix length exceeds previous term")
            raw_terms.append(anchor[:prefix_len] + text)
        else:
            raw_terms.append(text)
        pos = match.end()
    if pos < len(data):
        pos += 1
    return [raw.decode("utf-8") for raw in raw_terms], pos


def index_document_set(document_id: int, ctx: InfContext) -> tuple[DocumentSetIndex, LexerStats]:
    """Build an index holding the terms of a single document."""
    index = DocumentSetIndex()
    stats = lex(ctx.document_data(document_id), lambda term: index.add_term(term, document_id))
    return index, stats
"""An inverted index with term counts and leader/follower clustering.

Documents are turned into tf-idf vectors. A random subset of about the
square root of the documents is chosen as leaders; every other document
becomes a follower of some leaders. A query is compared with the leaders
and with their followers only.
"""

from __future__ import annotations

import math
import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional, TextIO

import numpy as np

from leaderdex.context import InfContext
from leaderdex.lexer import LexerStats, lex
from leaderdex.term import TermPositions

TERM_POSITIONS_SEPARATOR = "|"
KEY_VALUE_SEPARATOR = ":"
VALUE_SEPARATOR = ","
DOCUMENT_POSITIONS_SEPARATOR = "#"


def cosine_sim(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity; zero if either vector has zero length."""
    a_mag = float(np.linalg.norm(a))
    b_mag = float(np.linalg.norm(b))
    if a_mag == 0.0 or b_mag == 0.0:
        return 0.0
    return float(np.dot(a, b)) / (a_mag * b_mag)


def _parse_count(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"invalid number: {text!r}")
    return int(text)


def _split_pair(text: str, separator: str, message: str) -> tuple[str, str]:
    parts = text.split(separator)
    if len(parts) != 2:
        raise ValueError(message)
    return parts[0], parts[1]


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


@dataclass
class InvertedIndex:
    """Term counts per document, with tf-idf clustering for queries."""

    _documents: dict[int, int] = field(default_factory=dict)
    _index: dict[str, TermPositions] = field(default_factory=dict)
    _vectors: dict[int, np.ndarray] = field(
        default_factory=dict, compare=False, repr=False
    )
    _leaders: set[int] = field(default_factory=set, compare=False, repr=False)
    _followers: dict[int, list[int]] = field(
        default_factory=dict, compare=False, repr=False
    )

    def add_term(self, term: str, document_id: int) -> None:
        """Record one occurrence of ``term`` in a document."""
        self._index.setdefault(term, TermPositions()).add_position(document_id)
        self._documents[document_id] = self._documents.get(document_id, 0) + 1

    def merge(self, other: "InvertedIndex") -> None:
        """Add all counts of another index into this one."""
        for document_id, other_count in other._documents.items():
            self._documents[document_id] = self._documents.get(document_id, 0) + other_count
        for term, other_positions in other._index.items():
            self._index.setdefault(term, TermPositions()).merge(other_positions)

    def term_count(self) -> int:
        return len(self._index)

    def terms(self) -> set[str]:
        return set(self._index)

    def term_documents(self, term: str) -> set[int]:
        positions = self._index.get(term)
        return positions.documents() if positions is not None else set()

    def document_term_count(self, document_id: int) -> int:
        """Number of terms (with repeats) read from a document."""
        return self._documents.get(document_id, 0)

    def _sorted_positions(self) -> list[TermPositions]:
        return [self._index[term] for term in sorted(self._index)]

    def _terms_frequency(self, document_id: int) -> np.ndarray:
        total = float(self._documents.get(document_id, 0))
        counts = np.array(
            [positions.count(document_id) for positions in self._sorted_positions()],
            dtype=float,
        )
        return counts / total

    def _inverse_document_frequency(self) -> np.ndarray:
        total = float(len(self._documents))
        document_counts = np.array(
            [positions.document_count() for positions in self._sorted_positions()],
            dtype=float,
        )
        return np.log2((total + 1.0) / (document_counts + 1.0))

    def _query_vector(self, terms: Iterable[str]) -> np.ndarray:
        wanted = set(terms)
        return np.array(
            [1.0 if term in wanted else 0.0 for term in sorted(self._index)],
            dtype=float,
        )

    def _closest_documents(
        self, count: int, needle: np.ndarray, haystack: Iterable[int]
    ) -> list[tuple[int, float]]:
        scored = [
            (document_id, cosine_sim(self._vectors[document_id], needle))
            for document_id in haystack
        ]
        scored.sort(key=lambda pair: pair[1])
        return scored[:count]

    def preprocess(
        self, follower_leader_count: int, rng: Optional[random.Random] = None
    ) -> None:
        """Compute document vectors and pick leaders and their followers.

        Each follower is attached to ``follower_leader_count`` leaders.
        """
        rng = rng if rng is not None else random.Random()
        document_ids = sorted(self._documents)
        leader_count = math.isqrt(len(document_ids))
        rng.shuffle(document_ids)
        leader_ids = document_ids[:leader_count]
        follower_ids = document_ids[leader_count:]

        idf = self._inverse_document_frequency()
        self._vectors = {
            document_id: self._terms_frequency(document_id) * idf
            for document_id in self._documents
        }
        self._leaders = set(leader_ids)

        leaders = sorted(self._leaders)
        followers: defaultdict[int, list[int]] = defaultdict(list)
        for follower in sorted(follower_ids):
            closest = self._closest_documents(
                follower_leader_count, self._vectors[follower], leaders
            )
            for leader, _ in closest:
                followers[leader].append(follower)
        self._followers = dict(followers)

    def query(
        self, terms: Iterable[str], leader_count: int
    ) -> list[tuple[int, float]]:
        """Rank documents against a set of query terms.

        Returns ``(document_id, similarity)`` pairs, most similar first.
        Raises ValueError if no query term is in the index.
        """
        needle = self._query_vector(terms)
        if float(np.dot(needle, needle)) == 0.0:
            raise ValueError("Index doesn't contain any word from the query")

        leaders = self._closest_documents(leader_count, needle, sorted(self._leaders))
        followers = [
            (follower, cosine_sim(needle, self._vectors[follower]))
            for leader, _ in leaders
            for follower in self._followers.get(leader, [])
        ]
        return sorted(leaders + followers, key=lambda pair: pair[1], reverse=True)

    def save(self, stream: TextIO) -> None:
        """Write document term counts and term positions as text."""
        for document_id in sorted(self._documents):
            stream.write(
                f"{document_id}{KEY_VALUE_SEPARATOR}{self._documents[document_id]}\n"
            )
        stream.write(f"{DOCUMENT_POSITIONS_SEPARATOR}\n")

        for term in sorted(self._index):
            entries = VALUE_SEPARATOR.join(
                f"{document_id}{KEY_VALUE_SEPARATOR}{count}"
                for document_id, count in sorted(self._index[term].items())
            )
            stream.write(f"{term}{TERM_POSITIONS_SEPARATOR}{entries}\n")

    @classmethod
    def load(cls, stream: TextIO) -> "InvertedIndex":
        """Read an index written by :meth:`save`; raises ValueError if malformed."""
        index = cls()
        lines = (_strip_line_end(line) for line in stream)

        for line in lines:
            if line == DOCUMENT_POSITIONS_SEPARATOR:
                break
            document_str, count_str = _split_pair(
                line, KEY_VALUE_SEPARATOR, "Expected document id and term count"
            )
            index._documents[_parse_count(document_str)] = _parse_count(count_str)

        for line in lines:
            term, positions_str = _split_pair(
                line, TERM_POSITIONS_SEPARATOR, "Expected term and document ids"
            )
            positions = TermPositions()
            for position_str in positions_str.split(VALUE_SEPARATOR):
                document_str, count_str = _split_pair(
                    position_str, KEY_VALUE_SEPARATOR, "Expected document and count"
                )
                positions.add_position_with_count(
                    _parse_count(document_str), _parse_count(count_str)
                )
            index._index[term] = positions

        return index


def index_document(
    document_id: int, ctx: InfContext
) -> tuple[InvertedIndex, LexerStats]:
    """Build an index holding the terms of a single document."""
    index = InvertedIndex()
    stats = lex(
        ctx.document_data(document_id),
        lambda term: index.add_term(term, document_id),
    )
    return index, stats
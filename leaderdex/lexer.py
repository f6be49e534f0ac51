"""Splitting text into lower-case word terms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass
class LexerStats:
    """Counters gathered while lexing."""

    characters_read: int = 0
    characters_ignored: int = 0
    lines: int = 0

    def merge(self, other: "LexerStats") -> None:
        """Add another set of counters into this one."""
        self.characters_read += other.characters_read
        self.characters_ignored += other.characters_ignored
        self.lines += other.lines


def lex(text: str, add_term: Callable[[str], None]) -> LexerStats:
    """Pass each word of ``text`` to ``add_term`` and return the counters.

    A word is a run of letters, lower-cased; an apostrophe continues a word
    but cannot start one. Every other character ends the current word.
    """
    stats = LexerStats(lines=1)
    word: list[str] = []

    for ch in text:
        stats.characters_read += 1
        if ch.isalpha() or (ch == "'" and word):
            word.append(ch.lower())
            continue

        stats.characters_ignored += 1
        if ch == "\n":
            stats.lines += 1
        if word:
            add_term("".join(word))
            word.clear()

    if word:
        add_term("".join(word))

    return stats
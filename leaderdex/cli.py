"""Command line: index a directory, then answer queries from standard input."""

from __future__ import annotations

import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO, TypeVar

from leaderdex.cluster_index import InvertedIndex, index_document
from leaderdex.context import InfContext
from leaderdex.lexer import LexerStats, lex

DEFAULT_BASE_PATH = "data/shakespeare"
INDEX_PATH = Path("data/index.txt")
PREPROCESS_LEADER_COUNT = 2
QUERY_LEADER_COUNT = 2

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")

T = TypeVar("T")


def format_bytes(size: float) -> str:
    """Human-readable size with binary units, e.g. ``1.5 KiB``."""
    if size <= 0:
        return "0 B"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(_UNITS) - 1:
        value /= 1024
        exponent += 1
    return f"{value:.1f}".removesuffix(".0") + " " + _UNITS[exponent]


def _format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.3f}µs"
    return f"{seconds * 1e9:.0f}ns"


def _time_call(func: Callable[[], T]) -> tuple[T, float]:
    start = time.perf_counter()
    result = func()
    return result, time.perf_counter() - start


def _parse_limit(text: str) -> Optional[int]:
    return int(text) if text.isascii() and text.isdigit() else None


def run_query(
    query_text: str,
    index: InvertedIndex,
    ctx: InfContext,
    out: Optional[TextIO] = None,
) -> list[tuple[int, float]]:
    """Answer a free-text query, print the ranking and return it."""
    out = out if out is not None else sys.stdout
    if not query_text:
        raise ValueError("Query can't be empty")

    terms: set[str] = set()
    lex(query_text, terms.add)

    result, elapsed = _time_call(lambda: index.query(terms, QUERY_LEADER_COUNT))

    print(f"Query time: {_format_duration(elapsed)}.", file=out)
    if result:
        named = (
            (document_id, document, weight)
            for document_id, weight in result
            if (document := ctx.document(document_id)) is not None
        )
        lines = "\n".join(
            f"\t{i}. [Document({document_id})][W: {weight:.4f}] {document.name()}"
            for i, (document_id, document, weight) in enumerate(named)
        )
        print(f"Result:\n{lines}", file=out)
    else:
        print("No matches found.", file=out)
    return result


def _build_index(
    ctx: InfContext, document_ids: Sequence[int]
) -> tuple[InvertedIndex, LexerStats]:
    index = InvertedIndex()
    stats = LexerStats()
    workers = max((os.cpu_count() or 1) - 1, 1)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for document_index, document_stats in pool.map(
            lambda document_id: index_document(document_id, ctx), document_ids
        ):
            index.merge(document_index)
            stats.merge(document_stats)
    return index, stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    base_path = args[0] if args else DEFAULT_BASE_PATH
    file_limit = _parse_limit(args[1]) if len(args) > 1 else None

    print("Processing...")
    ctx, opening_time = _time_call(lambda: InfContext.from_directory(base_path, file_limit))
    print(f"Opening files took: {_format_duration(opening_time)}")
    document_ids = list(ctx.document_ids())
    print(f'Processing {len(document_ids)} documents in folder "{base_path}"')

    (index, stats), index_time = _time_call(lambda: _build_index(ctx, document_ids))

    print(f"Indexing took: {_format_duration(index_time)}")
    total_time = opening_time + index_time
    print(f"Total time: {_format_duration(total_time)}")
    data_size = sum(len(loaded.data()) for loaded in ctx.files().files())
    print(f"Amount of data indexed: {format_bytes(data_size)}")
    speed = data_size / total_time if total_time > 0 else float(data_size)
    print(f"Speed is: {format_bytes(speed)}/s")

    print(f"Unique word count: {index.term_count()}.")
    print(
        f"Lines read: {stats.lines}. Characters read: {stats.characters_read}. "
        f"Characters ignored: {stats.characters_ignored}"
    )

    print("Writing index to a file...")
    with INDEX_PATH.open("w", encoding="utf-8", newline="\n") as stream:
        index.save(stream)
    print(f"Index size: {format_bytes(INDEX_PATH.stat().st_size)}")

    index.preprocess(PREPROCESS_LEADER_COUNT)

    while True:
        print("Please input your query or 'q' to exit: ")
        line = sys.stdin.readline()
        if not line or line.strip() == "q":
            break
        try:
            run_query(line, index, ctx)
        except (ValueError, LookupError) as err:
            cause = err.__cause__ or err
            print(f"Error: {err}. Caused by: {cause}")
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
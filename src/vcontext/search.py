"""Recursive literal text search over a corpus.

Two variants share the walk, matching, ranking and truncation steps:

- ``search_docs`` attaches a paragraph-bounded context block to each hit and
  rewards lines that start with the query or sit inside a larger paragraph.
- ``search_directory`` returns bare line hits, used for code corpora.

Queries are always matched as literal, case-insensitive text. Per-file read
failures are absorbed: that file simply contributes no results.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import SearchResult
from vcontext.reader import read_text
from vcontext.walker import iter_files, relative_path

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = structlog.get_logger()

MIN_PATTERN_LENGTH = 2
CONTEXT_RADIUS = 3

BASE_SCORE = 1.0
CONTAINS_BONUS = 0.5
STARTS_WITH_BONUS = 0.3
CONTEXT_BONUS = 0.2


def validate_pattern(pattern: str) -> str:
    """Return the trimmed pattern, or raise INVALID_INPUT if it is too short."""
    trimmed = pattern.strip()
    if len(trimmed) < MIN_PATTERN_LENGTH:
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=f"query must be at least {MIN_PATTERN_LENGTH} characters after trimming",
            suggestion="Provide a longer search term.",
        )
    return trimmed


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` as a case-insensitive literal matcher."""
    try:
        return re.compile(re.escape(pattern), re.IGNORECASE)
    except re.error as exc:
        raise VContextError(
            code=ErrorCode.PATTERN_INVALID,
            message=f"Could not compile query {pattern!r}: {exc}",
            suggestion="Simplify the search term.",
        ) from exc


def extract_context(lines: list[str], index: int, radius: int = CONTEXT_RADIUS) -> str:
    """Return the paragraph-bounded block of lines around ``lines[index]``.

    Starts from ``index`` ± ``radius`` (clamped), then grows in each direction
    until a blank line or the start/end of the file.
    """
    start = max(0, index - radius)
    end = min(len(lines) - 1, index + radius)
    while start > 0 and lines[start - 1].strip():
        start -= 1
    while end < len(lines) - 1 and lines[end + 1].strip():
        end += 1
    return "\n".join(lines[start : end + 1]).strip()


def search_docs(
    root: Path,
    pattern: str,
    max_results: int,
    *,
    extension: str = ".md",
) -> list[SearchResult]:
    """Search documentation pages, with context blocks and the full bonus set."""
    query = validate_pattern(pattern)
    folded_query = query.casefold()

    results: list[SearchResult] = []
    for file, lines, index in _iter_matches(root, query, extension):
        line = lines[index]
        context = extract_context(lines, index)

        score = BASE_SCORE
        if folded_query in line.casefold():
            score += CONTAINS_BONUS
        if line.casefold().startswith(folded_query):
            score += STARTS_WITH_BONUS
        if len(context) > len(line):
            score += CONTEXT_BONUS

        results.append(
            SearchResult(
                line=index + 1,
                content=line.strip(),
                context=context,
                file=file,
                score=score,
                pattern=pattern,
            )
        )

    return rank_results(results, max_results)


def search_directory(
    root: Path,
    pattern: str,
    max_results: int,
    *,
    extension: str = ".v",
) -> list[SearchResult]:
    """Search a code corpus; hits carry no context."""
    query = validate_pattern(pattern)
    folded_query = query.casefold()

    results: list[SearchResult] = []
    for file, lines, index in _iter_matches(root, query, extension):
        line = lines[index]
        score = BASE_SCORE
        if folded_query in line.casefold():
            score += CONTAINS_BONUS

        results.append(
            SearchResult(
                line=index + 1,
                content=line.strip(),
                file=file,
                score=score,
                pattern=pattern,
            )
        )

    return rank_results(results, max_results)


def rank_results(results: list[SearchResult], max_results: int) -> list[SearchResult]:
    """Sort by score descending, keeping discovery order on ties, then truncate."""
    ranked = sorted(results, key=lambda r: r.score, reverse=True)
    return ranked[:max_results]


def _iter_matches(root: Path, query: str, extension: str) -> Iterator[tuple[str, list[str], int]]:
    """Yield ``(relative_file, lines, line_index)`` for every matching line.

    At most one hit per line: a line matches if the query occurs anywhere in it.
    """
    files_scanned = 0
    files_skipped = 0

    for path in iter_files(root, extension):
        file = relative_path(path, root)
        try:
            matcher = compile_pattern(query)
            text = read_text(path)
        except VContextError as exc:
            files_skipped += 1
            log.debug("search_file_skipped", file=file, code=exc.code, reason=exc.message)
            continue

        files_scanned += 1
        lines = text.splitlines()
        for index, line in enumerate(lines):
            if matcher.search(line) is not None:
                yield file, lines, index

    log.debug(
        "search_walk_complete",
        root=str(root),
        files_scanned=files_scanned,
        files_skipped=files_skipped,
    )

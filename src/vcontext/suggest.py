"""Fuzzy "did you mean" suggestions for names that were not found."""

from __future__ import annotations

from rapidfuzz import fuzz, process

SUGGESTION_LIMIT = 3
SUGGESTION_SCORE_CUTOFF = 60


def suggest_names(
    query: str,
    candidates: list[str],
    *,
    limit: int = SUGGESTION_LIMIT,
    score_cutoff: int = SUGGESTION_SCORE_CUTOFF,
) -> list[str]:
    """Return up to ``limit`` candidates closest to ``query`` by Levenshtein ratio.

    Matching is case-insensitive; candidates are returned in their original
    spelling, best first.
    """
    if not query or not candidates:
        return []
    folded = [candidate.lower() for candidate in candidates]
    results = process.extract(
        query.lower(),
        folded,
        scorer=fuzz.ratio,
        limit=limit,
        score_cutoff=score_cutoff,
    )
    seen: set[str] = set()
    names: list[str] = []
    for _term, _score, idx in results:
        name = candidates[idx]
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def format_suggestion(base: str, names: list[str]) -> str:
    if not names:
        return base
    return f"Did you mean: {', '.join(names)}? {base}"

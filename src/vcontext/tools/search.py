"""Tool handler for the search tools.

Receives AppState, validates input, consults the cache, runs the matching
search variant (documentation pages get context blocks, code corpora do not)
and returns a structured dict. No MCP or FastMCP imports; server.py handles
the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import CorpusId
from vcontext.models.tools import SearchInput, SearchOutput
from vcontext.search import search_directory, search_docs, validate_pattern

if TYPE_CHECKING:
    from vcontext.state import AppState


def handle(corpus: str, query: str, state: AppState) -> dict:
    """Handle a search tool call."""
    log = structlog.get_logger().bind(tool="search", corpus=corpus, query=query)
    log.info("handler_called")

    try:
        validated = SearchInput(corpus=corpus, query=query)
    except ValueError as exc:
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a search term of 2 to 500 characters.",
            recoverable=False,
        ) from exc

    # Reject short queries before any filesystem access.
    validate_pattern(validated.query)

    cache_key = f"search:{validated.corpus}:{validated.query}"
    cached = state.cache.get(cache_key)
    if cached is not None:
        log.info("cache_hit")
        return cached

    log.info("cache_miss")
    target = state.corpora.require(validated.corpus)
    max_results = state.settings.search.max_results

    if target.id is CorpusId.DOCS:
        results = search_docs(
            target.root, validated.query, max_results, extension=target.extension
        )
    else:
        results = search_directory(
            target.root, validated.query, max_results, extension=target.extension
        )
    log.info("search_complete", result_count=len(results))

    output = SearchOutput(corpus=target.id, query=validated.query, results=results)
    # Code-corpus hits carry no context; drop the key rather than sending null.
    payload = output.model_dump(mode="json", exclude_none=True)
    state.cache.set(cache_key, payload)
    return payload

"""Tool handler for the listing tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.listing import list_files
from vcontext.models.tools import ListInput, ListOutput

if TYPE_CHECKING:
    from vcontext.state import AppState


def handle(corpus: str, state: AppState) -> dict:
    """Handle a list tool call."""
    log = structlog.get_logger().bind(tool="list", corpus=corpus)
    log.info("handler_called")

    try:
        validated = ListInput(corpus=corpus)
    except ValueError as exc:
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Use a known corpus: docs, examples, stdlib or ui_examples.",
            recoverable=False,
        ) from exc

    cache_key = f"list:{validated.corpus}"
    cached = state.cache.get(cache_key)
    if cached is not None:
        log.info("cache_hit")
        return cached

    log.info("cache_miss")
    target = state.corpora.require(validated.corpus)
    items = list_files(target.root, target.extension, target.fallback_description)
    log.info("list_complete", item_count=len(items))

    payload = ListOutput(corpus=target.id, items=items).model_dump(mode="json")
    state.cache.set(cache_key, payload)
    return payload

"""Tool handler for single-item retrieval.

Unlike search and listing, read failures are surfaced to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.listing import find_file
from vcontext.models.corpus import Item
from vcontext.models.tools import GetItemInput
from vcontext.reader import read_text
from vcontext.suggest import format_suggestion, suggest_names
from vcontext.walker import iter_files, relative_path, strip_extension

if TYPE_CHECKING:
    from vcontext.models.corpus import Corpus
    from vcontext.state import AppState


def handle(corpus: str, name: str, state: AppState) -> dict:
    """Handle a get-item tool call."""
    log = structlog.get_logger().bind(tool="get_item", corpus=corpus, name=name)
    log.info("handler_called")

    try:
        validated = GetItemInput(corpus=corpus, name=name)
    except ValueError as exc:
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide an item name such as 'hello_world' or 'gg/rectangles'.",
            recoverable=False,
        ) from exc

    cache_key = f"item:{validated.corpus}:{validated.name}"
    cached = state.cache.get(cache_key)
    if cached is not None:
        log.info("cache_hit")
        return cached

    log.info("cache_miss")
    target = state.corpora.require(validated.corpus)
    path = find_file(target.root, validated.name, target.extension)
    if path is None:
        raise VContextError(
            code=ErrorCode.ITEM_NOT_FOUND,
            message=f"'{validated.name}' not found in corpus '{target.id}'.",
            suggestion=format_suggestion(
                "List the corpus to see which items are available.",
                suggest_names(validated.name, _item_names(target)),
            ),
            recoverable=False,
        )

    content = read_text(path)
    log.info("item_read", path=str(path), content_length=len(content))

    item = Item(
        name=strip_extension(path.name, target.extension),
        path=relative_path(path, target.root),
        content=content,
    )
    payload = item.model_dump(mode="json")
    state.cache.set(cache_key, payload)
    return payload


def _item_names(target: Corpus) -> list[str]:
    return [
        strip_extension(path.name, target.extension)
        for path in iter_files(target.root, target.extension)
    ]

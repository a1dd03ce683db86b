"""Tool handlers for cache and configuration introspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.models.tools import CacheClearOutput, CacheStatsOutput, ConfigOutput

if TYPE_CHECKING:
    from vcontext.state import AppState


def handle_clear(state: AppState) -> dict:
    """Handle a clear_v_cache tool call."""
    log = structlog.get_logger().bind(tool="cache_clear")
    log.info("handler_called")
    removed = state.cache.clear()
    return CacheClearOutput(removed=removed).model_dump(mode="json")


def handle_stats(state: AppState) -> dict:
    return CacheStatsOutput(
        entry_count=state.cache.size(),
        ttl_seconds=state.cache.ttl_seconds,
    ).model_dump(mode="json")


def handle_config(state: AppState) -> dict:
    """Handle a get_v_config tool call: paths, corpus availability and cache limits."""
    log = structlog.get_logger().bind(tool="get_config")
    log.info("handler_called")
    corpora = state.corpora
    return ConfigOutput(
        v_repo_path=str(corpora.v_repo_path),
        v_ui_path=str(corpora.v_ui_path) if corpora.v_ui_path is not None else None,
        availability=corpora.flags,
        ttl_seconds=state.cache.ttl_seconds,
        max_results=state.settings.search.max_results,
    ).model_dump(mode="json")

"""Background scheduler coroutine for sweeping expired cache entries."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from vcontext.state import AppState

log = structlog.get_logger()


async def run_cache_sweep_scheduler(state: AppState) -> None:
    """Periodically evict expired cache entries (HTTP mode only).

    stdio sessions are short-lived and evict lazily on access, so the
    scheduler returns immediately for them.
    """
    if state.settings.server.transport != "http":
        return

    interval_seconds = state.settings.cache.sweep_interval_seconds
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            state.cache.clear_expired()
        except Exception:
            log.warning("cache_sweep_error", exc_info=True)

"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the correct transport (stdio or streamable HTTP)
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING, Any

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import vcontext.tools.cache_admin as t_cache
import vcontext.tools.describe_module as t_module
import vcontext.tools.get_doc_section as t_doc_section
import vcontext.tools.get_item as t_get_item
import vcontext.tools.list_items as t_list
import vcontext.tools.search as t_search
from vcontext import __version__
from vcontext.cache import TTLCache
from vcontext.config import Settings
from vcontext.corpora import CorpusResolver
from vcontext.errors import VContextError
from vcontext.models.corpus import CorpusId
from vcontext.schedulers import run_cache_sweep_scheduler
from vcontext.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr: stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Resolve corpora and create the cache. No background tasks."""
    corpora = CorpusResolver(settings.corpus.v_repo_path, settings.corpus.v_ui_path)
    cache = TTLCache(settings.cache.ttl_seconds)
    return AppState(settings=settings, corpora=corpora, cache=cache)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
    )

    state = build_state(settings)
    if not state.corpora.flags.docs and not state.corpora.flags.examples:
        log.warning(
            "v_repo_not_found",
            v_repo_path=str(state.corpora.v_repo_path),
            message="Neither doc/ nor examples/ found. Set VCONTEXT__CORPUS__V_REPO_PATH.",
        )

    sweep_task = asyncio.create_task(run_cache_sweep_scheduler(state))

    log.info(
        "server_started",
        version=__version__,
        transport=settings.server.transport,
        **state.corpora.flags.model_dump(),
    )

    try:
        yield state
    finally:
        sweep_task.cancel()
        with suppress(asyncio.CancelledError):
            await sweep_task
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("vcontext", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg. Set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: VContextError) -> CallToolResult:
    """Convert a VContextError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


def _run_tool(tool: str, handler: Callable[..., dict], *args: Any) -> object:
    """Invoke a synchronous handler, converting expected failures to error results.

    Handlers run inline on the event loop, so calls never interleave and the
    cache needs no locking.
    """
    try:
        return handler(*args)
    except VContextError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise


def _state(ctx: Context) -> AppState:
    return ctx.request_context.lifespan_context


@mcp.tool()
async def search_v_docs(query: str, ctx: Context) -> object:
    """Search the V documentation pages. Each hit includes its surrounding paragraph."""
    return _run_tool("search_v_docs", t_search.handle, CorpusId.DOCS, query, _state(ctx))


@mcp.tool()
async def search_v_examples(query: str, ctx: Context) -> object:
    """Search the V example programs for a literal, case-insensitive term."""
    return _run_tool("search_v_examples", t_search.handle, CorpusId.EXAMPLES, query, _state(ctx))


@mcp.tool()
async def search_v_stdlib(query: str, ctx: Context) -> object:
    """Search the V standard library (vlib) sources for a literal, case-insensitive term."""
    return _run_tool("search_v_stdlib", t_search.handle, CorpusId.STDLIB, query, _state(ctx))


@mcp.tool()
async def search_v_ui_examples(query: str, ctx: Context) -> object:
    """Search the V UI library examples for a literal, case-insensitive term."""
    return _run_tool(
        "search_v_ui_examples", t_search.handle, CorpusId.UI_EXAMPLES, query, _state(ctx)
    )


@mcp.tool()
async def list_v_examples(ctx: Context) -> object:
    """List all V example programs with a one-line description each."""
    return _run_tool("list_v_examples", t_list.handle, CorpusId.EXAMPLES, _state(ctx))


@mcp.tool()
async def list_v_ui_examples(ctx: Context) -> object:
    """List all V UI library examples with a one-line description each."""
    return _run_tool("list_v_ui_examples", t_list.handle, CorpusId.UI_EXAMPLES, _state(ctx))


@mcp.tool()
async def get_v_example(name: str, ctx: Context) -> object:
    """Return the full source of a V example, e.g. 'hello_world' or 'gg/rectangles'."""
    return _run_tool("get_v_example", t_get_item.handle, CorpusId.EXAMPLES, name, _state(ctx))


@mcp.tool()
async def get_v_ui_example(name: str, ctx: Context) -> object:
    """Return the full source of a V UI library example."""
    return _run_tool(
        "get_v_ui_example", t_get_item.handle, CorpusId.UI_EXAMPLES, name, _state(ctx)
    )


@mcp.tool()
async def get_v_doc_page(name: str, ctx: Context) -> object:
    """Return the full Markdown of a documentation page, e.g. 'docs' or 'upcoming'."""
    return _run_tool("get_v_doc_page", t_get_item.handle, CorpusId.DOCS, name, _state(ctx))


@mcp.tool()
async def get_v_documentation(ctx: Context, topic: str = "") -> object:
    """Return a section of the main V docs page by title.

    Without a topic, returns the heading map (line numbers + headings) of the
    page. Use a heading title as the topic to fetch that section.
    """
    return _run_tool("get_v_documentation", t_doc_section.handle, topic, _state(ctx))


@mcp.tool()
async def list_v_stdlib_modules(ctx: Context) -> object:
    """List the top-level modules of the V standard library."""
    return _run_tool("list_v_stdlib_modules", t_module.handle_list, _state(ctx))


@mcp.tool()
async def get_v_stdlib_module(module_name: str, ctx: Context) -> object:
    """Describe a standard library module: its README and source files ('os', 'net.http')."""
    return _run_tool("get_v_stdlib_module", t_module.handle, module_name, _state(ctx))


@mcp.tool()
async def clear_v_cache(ctx: Context) -> object:
    """Drop every cached query result. Returns the number of entries removed."""
    return _run_tool("clear_v_cache", t_cache.handle_clear, _state(ctx))


@mcp.tool()
async def get_v_cache_stats(ctx: Context) -> object:
    """Return the number of cached entries and the cache TTL in seconds."""
    return _run_tool("get_v_cache_stats", t_cache.handle_stats, _state(ctx))


@mcp.tool()
async def get_v_config(ctx: Context) -> object:
    """Return the configured repository paths, corpus availability and limits."""
    return _run_tool("get_v_config", t_cache.handle_config, _state(ctx))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        mcp.settings.host = settings.server.host
        mcp.settings.port = settings.server.port
        mcp.run(transport="streamable-http")
        return

    mcp.run()


if __name__ == "__main__":
    main()

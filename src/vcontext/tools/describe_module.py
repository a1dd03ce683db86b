"""Tool handlers for standard-library module introspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import CorpusId
from vcontext.models.tools import DescribeModuleInput, ListModulesOutput
from vcontext.modules import describe_module, list_modules

if TYPE_CHECKING:
    from vcontext.state import AppState


def handle(module_name: str, state: AppState) -> dict:
    """Handle a get_v_stdlib_module tool call."""
    log = structlog.get_logger().bind(tool="describe_module", module_name=module_name)
    log.info("handler_called")

    try:
        validated = DescribeModuleInput(module_name=module_name)
    except ValueError as exc:
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a module name such as 'os' or 'net.http'.",
            recoverable=False,
        ) from exc

    cache_key = f"module:{validated.module_name}"
    cached = state.cache.get(cache_key)
    if cached is not None:
        log.info("cache_hit")
        return cached

    log.info("cache_miss")
    stdlib = state.corpora.require(CorpusId.STDLIB)
    info = describe_module(stdlib.root, validated.module_name, stdlib.extension)
    log.info("module_described", file_count=len(info.files), has_readme=info.readme is not None)

    payload = info.model_dump(mode="json")
    state.cache.set(cache_key, payload)
    return payload


def handle_list(state: AppState) -> dict:
    """Handle a list_v_stdlib_modules tool call."""
    log = structlog.get_logger().bind(tool="list_modules")
    log.info("handler_called")

    cache_key = "modules"
    cached = state.cache.get(cache_key)
    if cached is not None:
        log.info("cache_hit")
        return cached

    log.info("cache_miss")
    stdlib = state.corpora.require(CorpusId.STDLIB)
    modules = list_modules(stdlib.root)
    log.info("list_complete", module_count=len(modules))

    payload = ListModulesOutput(modules=modules).model_dump(mode="json")
    state.cache.set(cache_key, payload)
    return payload

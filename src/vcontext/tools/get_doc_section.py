"""Tool handler for get_v_documentation.

With no topic, returns the heading map of the main documentation page so the
agent can pick a section. With a topic, returns that section's full text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import CorpusId
from vcontext.models.tools import DocHeadingsOutput, DocSectionInput
from vcontext.parser import find_section, parse_headings, parse_sections
from vcontext.reader import read_text
from vcontext.suggest import format_suggestion, suggest_names

if TYPE_CHECKING:
    from vcontext.state import AppState

MAIN_DOCS_PAGE = "docs.md"


def handle(topic: str, state: AppState) -> dict:
    """Handle a get_v_documentation tool call."""
    log = structlog.get_logger().bind(tool="get_doc_section", topic=topic)
    log.info("handler_called")

    try:
        validated = DocSectionInput(topic=topic)
    except ValueError as exc:
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a section title such as 'Structs' or leave it empty.",
            recoverable=False,
        ) from exc

    cache_key = f"doc_section:{validated.topic.casefold()}"
    cached = state.cache.get(cache_key)
    if cached is not None:
        log.info("cache_hit")
        return cached

    log.info("cache_miss")
    docs = state.corpora.require(CorpusId.DOCS)
    content = read_text(docs.root / MAIN_DOCS_PAGE)

    if not validated.topic:
        payload = DocHeadingsOutput(
            path=MAIN_DOCS_PAGE, headings=parse_headings(content)
        ).model_dump(mode="json")
    else:
        section = find_section(content, validated.topic)
        if section is None:
            titles = [s.title for s in parse_sections(content)]
            raise VContextError(
                code=ErrorCode.SECTION_NOT_FOUND,
                message=f"No documentation section matches '{validated.topic}'.",
                suggestion=format_suggestion(
                    "Call get_v_documentation without a topic to see all headings.",
                    suggest_names(validated.topic, titles),
                ),
                recoverable=False,
            )
        log.info("section_found", title=section.title, line=section.line)
        payload = section.model_dump(mode="json")

    state.cache.set(cache_key, payload)
    return payload

"""Heading parser for the V documentation pages.

Single-pass scan that finds H1–H4 headings in Markdown content, suppressing
headings inside fenced code blocks (V's docs are full of ``// comment`` and
``# directive`` lines inside fences). Used to build the heading map of a page
and to cut a page into heading-delimited sections.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from vcontext.models.corpus import DocSection

if TYPE_CHECKING:
    from collections.abc import Iterator

_HEADING_RE = re.compile(r"^(#{1,4}) (.+)")


def _iter_headings(lines: list[str]) -> Iterator[tuple[int, int, str]]:
    """Yield ``(line_index, level, title)`` for each heading outside code fences."""
    in_code_block = False
    fence: str | None = None

    for index, line in enumerate(lines):
        stripped = line.strip()

        if stripped.startswith("```") or stripped.startswith("~~~"):
            current_fence = stripped[:3]
            if not in_code_block:
                in_code_block = True
                fence = current_fence
            elif current_fence == fence:
                in_code_block = False
                fence = None
            continue

        if in_code_block:
            continue

        match = _HEADING_RE.match(line)
        if match:
            yield index, len(match.group(1)), match.group(2).strip()


def parse_headings(content: str) -> str:
    """Return one ``"<lineno>: <heading line>"`` entry per heading, newline-joined."""
    lines = content.splitlines()
    return "\n".join(f"{index + 1}: {lines[index]}" for index, _, _ in _iter_headings(lines))


def parse_sections(content: str) -> list[DocSection]:
    """Split ``content`` into sections, one per heading.

    A section runs from its heading up to the next heading of the same or a
    higher level, so an H2 section includes its H3 subsections.
    """
    lines = content.splitlines()
    headings = list(_iter_headings(lines))

    sections: list[DocSection] = []
    for position, (index, level, title) in enumerate(headings):
        end = len(lines)
        for next_index, next_level, _ in headings[position + 1 :]:
            if next_level <= level:
                end = next_index
                break
        sections.append(
            DocSection(
                title=title,
                level=level,
                line=index + 1,
                content="\n".join(lines[index:end]).strip(),
            )
        )
    return sections


def find_section(content: str, topic: str) -> DocSection | None:
    """Return the first section titled ``topic``, falling back to a title containing it."""
    folded = topic.strip().casefold()
    if not folded:
        return None
    sections = parse_sections(content)
    for section in sections:
        if section.title.casefold() == folded:
            return section
    for section in sections:
        if folded in section.title.casefold():
            return section
    return None

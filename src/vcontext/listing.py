"""Recursive corpus listing with one-line descriptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import ListingEntry
from vcontext.reader import read_text
from vcontext.walker import (
    is_directory,
    is_regular_file,
    iter_files,
    relative_path,
    strip_extension,
)

if TYPE_CHECKING:
    from pathlib import Path

log = structlog.get_logger()

MIN_DESCRIPTION_LENGTH = 10
_SKIP_PREFIXES = ("//", "/*", "*", "#")


def extract_description(text: str) -> str | None:
    """Return the first trimmed line that reads like prose, or None.

    Comment lines and Markdown headings are skipped, as are lines of
    ``MIN_DESCRIPTION_LENGTH`` characters or fewer.
    """
    for raw in text.splitlines():
        line = raw.strip()
        if len(line) <= MIN_DESCRIPTION_LENGTH:
            continue
        if line.startswith(_SKIP_PREFIXES):
            continue
        return line
    return None


def list_files(root: Path, extension: str, fallback_description: str) -> list[ListingEntry]:
    """List every ``extension`` file under ``root``, sorted by name.

    Raises CORPUS_NOT_FOUND if ``root`` is not a directory. An existing
    directory with no matching files yields an empty list.
    """
    if not is_directory(root):
        raise VContextError(
            code=ErrorCode.CORPUS_NOT_FOUND,
            message=f"Directory not found: {root}",
            suggestion="Check that VCONTEXT__CORPUS__V_REPO_PATH points at a V checkout.",
        )

    entries: list[ListingEntry] = []
    for path in iter_files(root, extension):
        try:
            description = extract_description(read_text(path)) or fallback_description
        except VContextError as exc:
            log.debug("listing_file_unreadable", path=str(path), code=exc.code)
            description = fallback_description

        entries.append(
            ListingEntry(
                name=strip_extension(path.name, extension),
                path=relative_path(path, root),
                description=description,
            )
        )

    # Ordinal comparison; path breaks ties between same-named files in different folders.
    return sorted(entries, key=lambda e: (e.name, e.path))


def find_file(root: Path, name: str, extension: str) -> Path | None:
    """Locate the file for item ``name`` under ``root``.

    ``name`` is either a path relative to ``root`` without the extension
    (``gg/rectangles``) or a bare file name found anywhere in the tree.
    The first match in walk order wins.
    """
    resolved_root = root.resolve()
    direct = root / f"{name}{extension}"
    if is_regular_file(direct) and direct.resolve().is_relative_to(resolved_root):
        return direct

    if "/" in name:
        return None
    for path in iter_files(root, extension):
        if strip_extension(path.name, extension) == name:
            return path
    return None

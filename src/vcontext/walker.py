"""Bounded recursive directory traversal shared by the listing and search engines.

Children are visited in name order so that discovery order, and therefore
tie-breaking in ranked search results, is deterministic across platforms.
Each directory is entered at most once (by resolved real path) and the walk
never descends more than ``MAX_WALK_DEPTH`` levels, so symlink cycles cannot
loop forever.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = structlog.get_logger()

MAX_WALK_DEPTH = 32


def iter_files(root: Path, extension: str) -> Iterator[Path]:
    """Yield every file under ``root`` whose name ends with ``extension``.

    A missing or unreadable ``root`` yields nothing.
    """
    visited: set[Path] = set()
    yield from _walk(root, extension, depth=0, visited=visited)


def _walk(directory: Path, extension: str, *, depth: int, visited: set[Path]) -> Iterator[Path]:
    try:
        real = directory.resolve()
    except OSError:
        log.debug("walk_resolve_failed", path=str(directory), exc_info=True)
        return
    if real in visited:
        log.debug("walk_cycle_skipped", path=str(directory))
        return
    visited.add(real)

    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError:
        log.debug("walk_directory_unreadable", path=str(directory), exc_info=True)
        return

    for child in children:
        try:
            child_is_dir = child.is_dir()
            child_is_file = not child_is_dir and child.is_file()
        except OSError:
            log.debug("walk_entry_unreadable", path=str(child), exc_info=True)
            continue

        if child_is_dir:
            if depth + 1 > MAX_WALK_DEPTH:
                log.warning("walk_depth_limit_reached", path=str(child), max_depth=MAX_WALK_DEPTH)
                continue
            yield from _walk(child, extension, depth=depth + 1, visited=visited)
        elif child_is_file and child.name.endswith(extension):
            yield child


def is_directory(path: Path) -> bool:
    """``Path.is_dir`` that reports an entry it cannot stat as not a directory."""
    try:
        return path.is_dir()
    except OSError:
        log.debug("stat_failed", path=str(path), exc_info=True)
        return False


def is_regular_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        log.debug("stat_failed", path=str(path), exc_info=True)
        return False


def relative_path(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes."""
    return path.relative_to(root).as_posix()


def strip_extension(filename: str, extension: str) -> str:
    if extension and filename.endswith(extension):
        return filename[: -len(extension)]
    return filename

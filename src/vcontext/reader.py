"""File content reader.

Missing files and unreadable files are reported as distinct error codes so
callers can decide whether to absorb the failure (multi-file walks) or
surface it (single-item retrieval).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vcontext.errors import ErrorCode, VContextError

if TYPE_CHECKING:
    from pathlib import Path


def read_text(path: Path) -> str:
    """Return the full text of ``path``.

    Raises ``VContextError`` with ITEM_NOT_FOUND if the file does not exist,
    or READ_FAILED if it exists but cannot be read. Undecodable bytes are
    replaced, not treated as a failure.
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise VContextError(
            code=ErrorCode.ITEM_NOT_FOUND,
            message=f"File not found: {path.name}",
            suggestion="List the corpus to see which items are available.",
        ) from exc
    except OSError as exc:
        raise VContextError(
            code=ErrorCode.READ_FAILED,
            message=f"Could not read {path.name}: {exc.strerror or exc}",
            suggestion="Check the file permissions of the V repository checkout.",
            recoverable=True,
        ) from exc

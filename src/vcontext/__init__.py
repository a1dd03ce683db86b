"""vcontext: MCP server for the V language docs, examples and standard library."""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

UNKNOWN_VERSION = "0.0.0+unknown"

try:
    __version__ = version("vcontext")
except PackageNotFoundError:
    # Running from a checkout that was never installed (no dist-info on sys.path).
    warnings.warn(
        f"vcontext is not installed; reporting version {UNKNOWN_VERSION}.",
        RuntimeWarning,
        stacklevel=2,
    )
    __version__ = UNKNOWN_VERSION

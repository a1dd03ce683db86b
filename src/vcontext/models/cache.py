from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """A cached payload and the monotonic instant it was stored at."""

    value: Any
    timestamp: float

"""Protocol interfaces for swappable components.

Tool handlers and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight fakes
- Future backends (e.g. a shared cache) to be swapped without changing tool code
"""

from __future__ import annotations

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Interface for the query result cache."""

    @property
    def ttl_seconds(self) -> int: ...

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def clear(self) -> int: ...

    def clear_expired(self) -> int: ...

    def size(self) -> int: ...

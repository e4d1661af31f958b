"""Expiring cache for remote lookup results."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Cache interface for lookup results keyed by normalized query."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache measured against a monotonic clock."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[float, object]] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            self._entries.pop(key, None)
            return
        self._entries[key] = (self.clock() + ttl_seconds, value)

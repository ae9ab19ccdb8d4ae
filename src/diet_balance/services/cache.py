"""Cache abstractions for computed reports."""

import hashlib
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry time to live."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; expired entries are dropped on access and on write."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[float, object]] = field(default_factory=dict, init=False)

    def get(self, key: str) -> object | None:
        """Return a cached value unless it has expired."""
        item = self._entries.get(key)
        if item is None:
            return None
        expires_at, value = item
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value and purge anything already expired."""
        now = self.clock()
        self._entries = {
            cached_key: item
            for cached_key, item in self._entries.items()
            if item[0] > now
        }
        self._entries[key] = (now + ttl_seconds, value)

    def __len__(self) -> int:
        return len(self._entries)


def snapshot_key(prefix: str, *snapshots: object) -> str:
    """Build a cache key that changes whenever any snapshot changes.

    Snapshots must be plain values (dataclasses, lists, dicts) whose repr
    reflects their full content.
    """
    digest = hashlib.sha256()
    for snapshot in snapshots:
        digest.update(repr(snapshot).encode("utf-8"))
        digest.update(b"\x00")
    return f"{prefix}:{digest.hexdigest()}"

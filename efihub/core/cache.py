"""Cache backends used to hold the access token between requests."""

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """
    Minimal key/value store with per-entry time-to-live.

    Any shared store (Redis, memcached, a framework cache) can be adapted
    to this interface and handed to the client.
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if missing or expired."""
        ...

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. No-op if absent."""
        ...


@dataclass(frozen=True, slots=True)
class _Entry:
    value: Any
    expires_at: float


class MemoryCache:
    """
    In-process LRU cache with per-entry expiry.

    Not shared across processes. Not locked: concurrent writers simply
    overwrite each other.
    """

    def __init__(
        self,
        max_size: int = 1000,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            max_size: Maximum number of entries to keep.
            clock: Monotonic time source, replaceable in tests.
        """
        if max_size <= 0:
            msg = "max_size must be positive"
            raise ValueError(msg)
        self._max_size = max_size
        self._clock = clock
        self._cache: OrderedDict[str, _Entry] = OrderedDict()

    def get(self, key: str) -> Any | None:
        """
        Get item from cache, moving it to end (most recently used).

        Args:
            key: Cache key.

        Returns:
            Cached value, or None if missing or expired.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None

        if self._clock() >= entry.expires_at:
            self._cache.pop(key, None)
            return None

        # Another caller may have deleted the key since the lookup.
        try:
            self._cache.move_to_end(key)
        except KeyError:
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Put item in cache.

        Args:
            key: Cache key.
            value: Value to cache.
            ttl: Seconds until the entry expires.
        """
        if ttl <= 0:
            msg = "ttl must be positive"
            raise ValueError(msg)

        if key in self._cache:
            self._cache.move_to_end(key)
        elif len(self._cache) >= self._max_size:
            # Remove oldest item
            self._cache.popitem(last=False)

        self._cache[key] = _Entry(value=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> None:
        """Remove item from cache."""
        self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all items from cache."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return number of items in cache, expired ones included."""
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Simple TTL cache using stdlib dict + time.monotonic.

Bounded two ways: entries expire ``ttl`` seconds after being stored, and
the oldest inserted entry is evicted (FIFO) once ``max_size`` is reached.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional


class TTLCache:
    """In-memory cache with TTL expiration and max-size eviction (FIFO).

    Values are stored and returned as-is; callers store immutable objects.
    """

    def __init__(
        self,
        ttl: float = 900.0,
        max_size: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the TTL cache.

        Args:
            ttl (float): Time-to-live in seconds for each cached entry.
            max_size (int): Maximum number of entries before FIFO eviction.
            clock (Callable[[], float]): Monotonic time source in seconds.
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._ttl = ttl
        self._max_size = max_size
        self._clock = clock
        self._store: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value if present and not expired, else None.

        Args:
            key (str): The cache key to look up.

        Returns:
            Optional[Any]: The cached value, or None if the key is missing
                or expired.
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expire_time = entry
            if self._clock() >= expire_time:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        """Store a value with TTL. Evicts oldest entries if over max_size.

        Args:
            key (str): The cache key under which to store the value.
            value (Any): The value to cache.
        """
        with self._lock:
            self._evict_expired()
            # Re-inserting moves the key to the back of the FIFO order
            self._store.pop(key, None)
            while len(self._store) >= self._max_size:
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
            self._store[key] = (value, self._clock() + self._ttl)

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def _evict_expired(self) -> None:
        """Remove all expired entries. Caller holds the lock."""
        now = self._clock()
        expired = [k for k, (_, exp) in self._store.items() if now >= exp]
        for k in expired:
            del self._store[k]

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Sliding-window rate limiter.

One window for the whole process: it caps the call budget spent on the
downstream search provider, not per-caller fairness.
"""
from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable


class SlidingWindowRateLimiter:
    """Admit at most ``max_requests`` calls within any trailing ``window`` seconds."""

    def __init__(
        self,
        max_requests: int = 30,
        window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests (int): Number of admissions allowed per window.
            window (float): Window length in seconds.
            clock (Callable[[], float]): Monotonic time source in seconds.
        """
        self._max_requests = max_requests
        self._window = window
        self._clock = clock
        self._timestamps: deque[float] = deque()
        self._lock = threading.Lock()

    def check(self) -> bool:
        """Record and admit the current request if the window has room.

        Denied requests are not recorded.

        Returns:
            bool: True if the request is admitted, False if rate limited.
        """
        with self._lock:
            now = self._clock()
            while self._timestamps and now - self._timestamps[0] >= self._window:
                self._timestamps.popleft()
            if len(self._timestamps) >= self._max_requests:
                return False
            self._timestamps.append(now)
            return True

    def reset(self) -> None:
        """Forget all admitted requests."""
        with self._lock:
            self._timestamps.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps)

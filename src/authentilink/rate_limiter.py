# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Sliding-window rate limiter for externally billable operations.

Standalone leaf module.  Uses stdlib only (time, threading, logging,
collections, dataclasses).

Design choices:

- **Sliding log**: one timestamp per admitted request, pruned once it is
  ``window`` seconds old.  Exact count over the trailing window.
- **Deny does not record**: a rejected request never occupies a slot.
- **Clock**: ``time.monotonic()`` (consistent with cache.py).
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_MINUTE = 30
WINDOW_SECONDS = 60.0


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LimiterSnapshot:
    """Immutable view of the current window."""

    requests_this_window: int
    max_per_minute: int
    ms_until_reset: int

    def to_dict(self) -> dict[str, int]:
        return {
            "requestsThisWindow": self.requests_this_window,
            "maxPerMinute": self.max_per_minute,
            "msUntilReset": self.ms_until_reset,
        }


# ---------------------------------------------------------------------------
# SlidingWindowLimiter
# ---------------------------------------------------------------------------


class SlidingWindowLimiter:
    """Admit at most ``max_per_minute`` requests per rolling window.

    Usage::

        limiter = SlidingWindowLimiter(max_per_minute=30)
        if not limiter.try_acquire():
            wait = limiter.time_until_reset()
    """

    def __init__(self, max_per_minute: int = DEFAULT_MAX_PER_MINUTE, window: float = WINDOW_SECONDS) -> None:
        if max_per_minute <= 0:
            raise ValueError(f"max_per_minute must be > 0, got {max_per_minute}")
        if window <= 0:
            raise ValueError(f"window must be > 0, got {window}")
        self._max = max_per_minute
        self._window = window
        self._requests: deque[float] = deque()
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        while self._requests and now - self._requests[0] >= self._window:
            self._requests.popleft()

    # -- Public API --

    def try_acquire(self) -> bool:
        """Record a request and return True, or return False if the window is full."""
        with self._lock:
            now = time.monotonic()
            self._prune(now)
            if len(self._requests) >= self._max:
                logger.warning("Rate limit reached: %d/%d requests per window", len(self._requests), self._max)
                return False
            self._requests.append(now)
            return True

    def time_until_reset(self) -> float:
        """Seconds until the oldest recorded request leaves the window (0.0 if none)."""
        with self._lock:
            now = time.monotonic()
            oldest = next((ts for ts in self._requests if now - ts < self._window), None)
            if oldest is None:
                return 0.0
            return max(0.0, oldest + self._window - now)

    @property
    def requests_in_window(self) -> int:
        """Requests still inside the window.  Does not prune."""
        with self._lock:
            now = time.monotonic()
            return sum(1 for ts in self._requests if now - ts < self._window)

    @property
    def max_per_minute(self) -> int:
        return self._max

    def snapshot(self) -> LimiterSnapshot:
        return LimiterSnapshot(
            requests_this_window=self.requests_in_window,
            max_per_minute=self._max,
            ms_until_reset=math.ceil(self.time_until_reset() * 1000),
        )

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()

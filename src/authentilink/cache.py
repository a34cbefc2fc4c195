# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Bounded, time-limited cache of classification results.

Pure Python module, no feature/scoring dependencies.

- Keys: ``content_fingerprint(text)``; the text itself is kept in the entry
  and compared on lookup, so a hash collision reads as a miss.
- Eviction: FIFO by insertion order.  Reads never reorder entries.
- Expiry: an entry older than ``ttl`` seconds is dropped when read.
- Clock: ``time.monotonic()``.

Thread-safe: every public operation holds a single ``threading.Lock``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass

from . import ClassificationResult
from .hashing import content_fingerprint

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000
DEFAULT_TTL = 3600.0  # 1 hour


# ---------------------------------------------------------------------------
# Cache entry
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached result with the text it was computed from."""

    key: str
    text: str
    result: ClassificationResult
    inserted_at: float  # time.monotonic()

    def is_expired(self, ttl: float, now: float) -> bool:
        return (now - self.inserted_at) > ttl


# ---------------------------------------------------------------------------
# Cache stats (observability)
# ---------------------------------------------------------------------------


@dataclass
class CacheStats:
    """Counters for cache behaviour."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0
    collisions: int = 0

    @property
    def hit_rate(self) -> int:
        """Percentage of lookups that hit, rounded half up (0 with no lookups)."""
        total = self.hits + self.misses
        if total == 0:
            return 0
        # Half up in integer arithmetic: 12.5 -> 13
        return (self.hits * 200 + total) // (total * 2)


# ---------------------------------------------------------------------------
# ResultCache
# ---------------------------------------------------------------------------


class ResultCache:
    """Fixed-capacity FIFO cache with per-entry TTL."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, ttl: float = DEFAULT_TTL) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        if ttl < 0:
            raise ValueError(f"ttl must be >= 0, got {ttl}")
        self._capacity = capacity
        self._ttl = ttl
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._stats = CacheStats()
        self._lock = threading.Lock()

    # -- Lookup --

    def get(self, text: str) -> ClassificationResult | None:
        """Return the cached result for *text*, or None if missing, expired or aliased."""
        key = content_fingerprint(text)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                return None
            if entry.is_expired(self._ttl, time.monotonic()):
                del self._entries[key]
                self._stats.expirations += 1
                self._stats.misses += 1
                logger.debug("Cache TTL expired: key=%s", key)
                return None
            if entry.text != text:
                self._stats.collisions += 1
                self._stats.misses += 1
                logger.debug("Cache key collision: key=%s", key)
                return None
            self._stats.hits += 1
            return entry.result

    # -- Store --

    def put(self, text: str, result: ClassificationResult) -> None:
        """Store *result* for *text*, evicting the earliest-inserted entry when full.

        The store is checked before the key: a full cache evicts one entry even
        when *text* is already present and is only being overwritten.
        """
        key = content_fingerprint(text)
        entry = CacheEntry(key=key, text=text, result=result, inserted_at=time.monotonic())
        with self._lock:
            if len(self._entries) >= self._capacity:
                evicted_key, _ = self._entries.popitem(last=False)
                self._stats.evictions += 1
                logger.debug("Cache eviction: key=%s", evicted_key)
            # Overwrite counts as a fresh insertion
            self._entries.pop(key, None)
            self._entries[key] = entry

    def entry(self, text: str) -> CacheEntry | None:
        """Raw entry for *text* (no stats, no expiry check)."""
        with self._lock:
            entry = self._entries.get(content_fingerprint(text))
        if entry is None or entry.text != text:
            return None
        return entry

    def clear(self) -> None:
        """Drop every entry and reset hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self._stats = CacheStats()
        logger.debug("Cache cleared")

    # -- Stats --

    def hit_rate(self) -> int:
        with self._lock:
            return self._stats.hit_rate

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.entry(text) is not None

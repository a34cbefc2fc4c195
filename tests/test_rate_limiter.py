# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for authentilink.rate_limiter: leaf module, no detector imports."""

from __future__ import annotations

import threading

import pytest

from authentilink.rate_limiter import (
    DEFAULT_MAX_PER_MINUTE,
    WINDOW_SECONDS,
    LimiterSnapshot,
    SlidingWindowLimiter,
)

# ── Config validation ───────────────────────────────────────────


class TestLimiterConfig:
    def test_defaults(self):
        limiter = SlidingWindowLimiter()
        assert limiter.max_per_minute == DEFAULT_MAX_PER_MINUTE == 30
        assert WINDOW_SECONDS == 60.0

    def test_invalid_max(self):
        with pytest.raises(ValueError, match="max_per_minute"):
            SlidingWindowLimiter(max_per_minute=0)

    def test_invalid_window(self):
        with pytest.raises(ValueError, match="window"):
            SlidingWindowLimiter(window=0)


# ── Window boundary ─────────────────────────────────────────────


class TestTryAcquire:
    def test_exactly_max_admitted_then_denied(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=5)
        for _ in range(5):
            assert limiter.try_acquire() is True
            clock.advance(1.0)
        assert limiter.try_acquire() is False

    def test_denied_request_is_not_recorded(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=2)
        assert limiter.try_acquire()
        assert limiter.try_acquire()
        for _ in range(10):
            assert limiter.try_acquire() is False
        assert limiter.requests_in_window == 2

    def test_admits_again_after_window(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=3)
        for _ in range(3):
            assert limiter.try_acquire()
        assert not limiter.try_acquire()
        clock.advance(60.001)
        assert limiter.try_acquire() is True

    def test_request_exactly_window_old_is_pruned(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=1)
        assert limiter.try_acquire()
        clock.advance(59.5)
        assert not limiter.try_acquire()
        clock.advance(0.5)
        assert limiter.try_acquire()

    def test_window_slides_one_slot_at_a_time(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=2)
        assert limiter.try_acquire()  # t=0
        clock.advance(30.0)
        assert limiter.try_acquire()  # t=30
        clock.advance(30.0)  # t=60: first request ages out
        assert limiter.try_acquire()
        assert not limiter.try_acquire()


# ── Reset timing ────────────────────────────────────────────────


class TestTimeUntilReset:
    def test_zero_when_empty(self):
        assert SlidingWindowLimiter().time_until_reset() == 0.0

    def test_measures_from_oldest(self, clock):
        limiter = SlidingWindowLimiter()
        limiter.try_acquire()
        clock.advance(15.0)
        limiter.try_acquire()
        assert limiter.time_until_reset() == pytest.approx(45.0)

    def test_never_negative(self, clock):
        limiter = SlidingWindowLimiter()
        limiter.try_acquire()
        clock.advance(120.0)
        assert limiter.time_until_reset() == 0.0


# ── Snapshot ────────────────────────────────────────────────────


class TestSnapshot:
    def test_snapshot_fields(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=10)
        limiter.try_acquire()
        limiter.try_acquire()
        clock.advance(20.0)
        snap = limiter.snapshot()
        assert snap == LimiterSnapshot(requests_this_window=2, max_per_minute=10, ms_until_reset=40000)

    def test_snapshot_excludes_expired_without_pruning(self, clock):
        limiter = SlidingWindowLimiter(max_per_minute=10)
        limiter.try_acquire()
        clock.advance(61.0)
        assert limiter.snapshot().requests_this_window == 0

    def test_to_dict_keys(self):
        snap = LimiterSnapshot(requests_this_window=1, max_per_minute=30, ms_until_reset=500)
        assert snap.to_dict() == {"requestsThisWindow": 1, "maxPerMinute": 30, "msUntilReset": 500}

    def test_reset_clears_window(self):
        limiter = SlidingWindowLimiter(max_per_minute=1)
        limiter.try_acquire()
        limiter.reset()
        assert limiter.try_acquire()


# ── Concurrency ─────────────────────────────────────────────────


class TestConcurrency:
    def test_concurrent_acquire_never_over_admits(self):
        limiter = SlidingWindowLimiter(max_per_minute=30)
        admitted: list[bool] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(20):
                ok = limiter.try_acquire()
                with lock:
                    admitted.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(admitted) == 30
        assert len(admitted) == 200

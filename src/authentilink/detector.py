# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Classification service: validate → cache → extract → score → store.

Single synchronous entry point ``ClassificationService.classify(text)``.
Cache and limiter are constructor-injected so tests and embedders can run
isolated instances; nothing here is a module-level singleton.

``classify`` never raises: invalid input, short input and internal failures
all come back as fully-formed ClassificationResult objects.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from . import ClassificationResult, DetectionMethod
from .cache import ResultCache
from .config import DetectorConfig
from .errors import ClassificationError, InvalidInputError, TextTooShortError
from .features import extract_features
from .hashing import content_fingerprint
from .rate_limiter import LimiterSnapshot, SlidingWindowLimiter
from .scoring import classify_score, score_features

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass
class RunningStats:
    """Process-wide counters owned by one ClassificationService."""

    total_analyzed: int = 0
    ai_detected: int = 0
    human_detected: int = 0
    local_detections: int = 0
    errors: int = 0


@dataclass(frozen=True, slots=True)
class DetectorStats:
    """Read-only snapshot returned by ``get_stats()``."""

    total_analyzed: int
    ai_detected: int
    human_detected: int
    local_detections: int
    errors: int
    cache_hit_rate: int  # 0–100
    cache_size: int
    limiter: LimiterSnapshot

    def to_dict(self) -> dict:
        return {
            "totalAnalyzed": self.total_analyzed,
            "aiDetected": self.ai_detected,
            "humanDetected": self.human_detected,
            "localDetections": self.local_detections,
            "errors": self.errors,
            "cacheHitRate": self.cache_hit_rate,
            "cacheSize": self.cache_size,
            "limiter": self.limiter.to_dict(),
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_text(text: object, min_length: int) -> str:
    """Return the trimmed text, or raise InvalidInputError / TextTooShortError."""
    if not isinstance(text, str) or not text:
        raise InvalidInputError("Invalid text input")
    cleaned = text.strip()
    if len(cleaned) < min_length:
        raise TextTooShortError("Text too short for analysis", length=len(cleaned), minimum=min_length)
    return cleaned


def _unscored(method: DetectionMethod, description: str) -> ClassificationResult:
    return ClassificationResult(is_ai=False, confidence=0.0, method=method, description=description)


# ---------------------------------------------------------------------------
# ClassificationService
# ---------------------------------------------------------------------------


class ClassificationService:
    """Local heuristic AI-text detector with result cache and rate governor.

    Usage::

        service = ClassificationService()
        result = service.classify(post_text)
        if result.is_ai:
            ...
    """

    def __init__(
        self,
        config: DetectorConfig | None = None,
        *,
        cache: ResultCache | None = None,
        limiter: SlidingWindowLimiter | None = None,
    ) -> None:
        self._config = config if config is not None else DetectorConfig()
        self._cache = cache if cache is not None else ResultCache(self._config.cache_capacity, self._config.cache_ttl)
        self._limiter = limiter if limiter is not None else SlidingWindowLimiter(self._config.max_requests_per_minute)
        self._stats = RunningStats()
        self._stats_lock = threading.Lock()

    # -- Public API --

    def classify(self, text: object) -> ClassificationResult:
        """Classify *text* as AI-generated or human-written."""
        try:
            cleaned = validate_text(text, self._config.min_text_length)
        except InvalidInputError as e:
            return _unscored(DetectionMethod.INVALID_INPUT, str(e))
        except TextTooShortError as e:
            return _unscored(DetectionMethod.TOO_SHORT, str(e))

        with self._stats_lock:
            self._stats.total_analyzed += 1

        with structlog.contextvars.bound_contextvars(fingerprint=content_fingerprint(cleaned), text_preview=cleaned):
            try:
                return self._classify_cleaned(cleaned)
            except Exception as e:
                with self._stats_lock:
                    self._stats.errors += 1
                logger.exception("Classification failed: %s", e)
                return _unscored(DetectionMethod.ERROR, f"Classification failed: {type(e).__name__}")

    def classify_many(self, texts: Iterable[object]) -> list[ClassificationResult]:
        """Classify each text in order."""
        return [self.classify(t) for t in texts]

    def get_stats(self) -> DetectorStats:
        """Snapshot of running counters plus cache and limiter state."""
        with self._stats_lock:
            s = self._stats
            counters = (s.total_analyzed, s.ai_detected, s.human_detected, s.local_detections, s.errors)
        return DetectorStats(
            *counters,
            cache_hit_rate=self._cache.hit_rate(),
            cache_size=self._cache.size,
            limiter=self._limiter.snapshot(),
        )

    def reset(self) -> None:
        """Clear the cache and zero every counter."""
        with self._stats_lock:
            self._cache.clear()
            self._stats = RunningStats()
        logger.info("Detector reset")

    @property
    def config(self) -> DetectorConfig:
        return self._config

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def limiter(self) -> SlidingWindowLimiter:
        """Governor for callers that add externally billed detection paths."""
        return self._limiter

    # -- Internal --

    def _classify_cleaned(self, cleaned: str) -> ClassificationResult:
        cached = self._cache.get(cleaned)
        if cached is not None:
            logger.debug("Cache hit")
            return cached

        result = self._detect_with_patterns(cleaned)
        self._cache.put(cleaned, result)
        return result

    def _detect_with_patterns(self, text: str) -> ClassificationResult:
        features = extract_features(text)
        breakdown = score_features(features)
        confidence = round(breakdown.score, 2)
        if not 0.0 <= confidence <= 1.0:
            raise ClassificationError(f"score out of range: {confidence}")
        is_ai = classify_score(confidence, self._config.ai_threshold)

        with self._stats_lock:
            self._stats.local_detections += 1
            if is_ai:
                self._stats.ai_detected += 1
            else:
                self._stats.human_detected += 1

        logger.debug(
            "Local detection: %d%% AI confidence, signals=%s",
            round(confidence * 100),
            ",".join(breakdown.signals) or "-",
        )
        return ClassificationResult(
            is_ai=is_ai,
            confidence=confidence,
            method=DetectionMethod.LOCAL_PATTERNS,
            description="Local pattern analysis",
            features=features,
            signals=breakdown.signals,
        )

# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""AuthentiLink: local heuristic detection of machine-generated text.

Classifies a block of text as AI-generated or human-written from cheap,
deterministic signals:
- lexical: formal transition phrases, buzzwords, politeness markers
- structural: bullet/numbered lists, "Label: Value" headers
- statistical: sentence length, burstiness, typos, punctuation regularity
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from enum import StrEnum

__version__ = "0.3.0"


class DetectionMethod(StrEnum):
    """How a ClassificationResult was produced."""

    LOCAL_PATTERNS = "local_patterns"
    INVALID_INPUT = "invalid_input"
    TOO_SHORT = "too_short"
    ERROR = "error"


_FEATURE_KEYS: dict[str, str] = {
    "formal_phrase_count": "formalPhraseCount",
    "buzzword_density": "buzzwordDensity",
    "politeness_score": "politenessScore",
    "bullet_list_count": "bulletListCount",
    "numbered_list_count": "numberedListCount",
    "colon_header_count": "colonHeaderCount",
    "avg_sentence_length": "avgSentenceLength",
    "sentence_variance": "sentenceVariance",
    "burstiness": "burstiness",
    "typo_count": "typoCount",
    "perfect_punctuation": "perfectPunctuation",
    "word_count": "wordCount",
    "sentence_count": "sentenceCount",
    "character_count": "characterCount",
}


@dataclass(frozen=True, slots=True)
class FeatureSet:
    """Linguistic features extracted once per classified text."""

    formal_phrase_count: int = 0
    buzzword_density: float = 0.0  # 0.0–1.0
    politeness_score: float = 0.0  # 0.0–1.0
    bullet_list_count: int = 0
    numbered_list_count: int = 0
    colon_header_count: int = 0
    avg_sentence_length: float = 0.0  # words per sentence
    sentence_variance: float = 0.0
    burstiness: float = 0.0  # stddev / mean of sentence lengths
    typo_count: int = 0
    perfect_punctuation: bool = False
    word_count: int = 0
    sentence_count: int = 0
    character_count: int = 0

    @classmethod
    def empty(cls) -> FeatureSet:
        return cls()

    def to_dict(self) -> dict:
        return {_FEATURE_KEYS[k]: v for k, v in asdict(self).items()}


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of classifying one text.

    ``confidence`` is always the rounded score that decided ``is_ai``; it is
    not flipped for the human branch.
    """

    is_ai: bool
    confidence: float  # 0.0–1.0, 2 decimal places
    method: DetectionMethod
    description: str
    features: FeatureSet | None = None
    produced_at: float = field(default_factory=time.time)  # epoch seconds
    signals: tuple[str, ...] = ()  # scoring rules that fired

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys consumed by the UI layer."""
        return {
            "isAI": self.is_ai,
            "confidence": self.confidence,
            "method": self.method.value,
            "description": self.description,
            "features": self.features.to_dict() if self.features is not None else {},
            "producedAt": int(self.produced_at * 1000),
            "signals": list(self.signals),
        }

# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Additive rule scoring: FeatureSet -> AI-likelihood score.

Each rule is an independent predicate over the FeatureSet with a fixed
weight.  Fired weights are summed and capped at 1.0; a text is AI when the
score is strictly greater than the threshold (0.65 by default), so a score
of exactly 0.65 is human.

Weights are integer hundredths: sums stay exact and threshold comparisons
never drift on float rounding.

Family budgets: vocabulary 40, structure 30, statistics 30.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from . import FeatureSet

DEFAULT_AI_THRESHOLD = 0.65
_MAX_POINTS = 100

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScoringRule:
    """A single rule that adds ``points`` (hundredths) when ``check`` holds."""

    name: str
    points: int
    check: Callable[[FeatureSet], bool]

    @property
    def weight(self) -> float:
        return self.points / _MAX_POINTS


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Result of scoring one FeatureSet."""

    score: float  # 0.0–1.0, capped
    points: int  # raw sum of fired rule points (uncapped)
    signals: tuple[str, ...]  # names of fired rules


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

SCORING_RULES: tuple[ScoringRule, ...] = (
    # ---- vocabulary ----
    ScoringRule("formal_phrases", 15, lambda f: f.formal_phrase_count > 0),
    ScoringRule("buzzword_density", 15, lambda f: f.buzzword_density > 0.02),
    ScoringRule("politeness", 10, lambda f: f.politeness_score > 0.5),
    # ---- structure ----
    ScoringRule("bullet_lists", 10, lambda f: f.bullet_list_count > 2),
    ScoringRule("numbered_lists", 10, lambda f: f.numbered_list_count > 1),
    ScoringRule("colon_headers", 10, lambda f: f.colon_header_count > 0),
    # ---- statistics ----
    ScoringRule("long_sentences", 10, lambda f: f.avg_sentence_length > 20),
    ScoringRule("low_burstiness", 10, lambda f: f.burstiness < 0.3),
    ScoringRule("no_typos", 5, lambda f: f.typo_count == 0 and f.word_count > 20),
    ScoringRule("perfect_punctuation", 5, lambda f: f.perfect_punctuation),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_features(features: FeatureSet, rules: tuple[ScoringRule, ...] = SCORING_RULES) -> ScoreBreakdown:
    """Sum the points of every rule that fires on *features*."""
    points = 0
    fired: list[str] = []
    for rule in rules:
        if rule.check(features):
            points += rule.points
            fired.append(rule.name)
    return ScoreBreakdown(
        score=min(points, _MAX_POINTS) / _MAX_POINTS,
        points=points,
        signals=tuple(fired),
    )


def classify_score(score: float, threshold: float = DEFAULT_AI_THRESHOLD) -> bool:
    """True (AI) iff *score* is strictly above *threshold*."""
    return score > threshold

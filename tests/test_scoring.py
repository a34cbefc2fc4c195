# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for the additive rule scorer and threshold classification."""

from __future__ import annotations

import dataclasses

import pytest

from authentilink import FeatureSet
from authentilink.scoring import (
    DEFAULT_AI_THRESHOLD,
    SCORING_RULES,
    ScoringRule,
    classify_score,
    score_features,
)

# Baseline that fires nothing: one typo, burstiness above the cutoff.
_QUIET = FeatureSet(burstiness=1.0, typo_count=1, word_count=30, sentence_count=3, character_count=200)


class TestRuleTable:
    def test_rule_weights(self):
        weights = {r.name: r.weight for r in SCORING_RULES}
        assert weights == {
            "formal_phrases": 0.15,
            "buzzword_density": 0.15,
            "politeness": 0.10,
            "bullet_lists": 0.10,
            "numbered_lists": 0.10,
            "colon_headers": 0.10,
            "long_sentences": 0.10,
            "low_burstiness": 0.10,
            "no_typos": 0.05,
            "perfect_punctuation": 0.05,
        }

    def test_total_points_is_one(self):
        assert sum(r.points for r in SCORING_RULES) == 100

    def test_quiet_baseline_scores_zero(self):
        breakdown = score_features(_QUIET)
        assert breakdown.score == 0.0
        assert breakdown.signals == ()


class TestIndividualRules:
    @pytest.mark.parametrize(
        "overrides,signal",
        [
            ({"formal_phrase_count": 1}, "formal_phrases"),
            ({"buzzword_density": 0.021}, "buzzword_density"),
            ({"politeness_score": 0.6}, "politeness"),
            ({"bullet_list_count": 3}, "bullet_lists"),
            ({"numbered_list_count": 2}, "numbered_lists"),
            ({"colon_header_count": 1}, "colon_headers"),
            ({"avg_sentence_length": 20.5}, "long_sentences"),
            ({"burstiness": 0.29}, "low_burstiness"),
            ({"typo_count": 0, "word_count": 21}, "no_typos"),
            ({"perfect_punctuation": True}, "perfect_punctuation"),
        ],
    )
    def test_rule_fires(self, overrides, signal):
        breakdown = score_features(dataclasses.replace(_QUIET, **overrides))
        assert breakdown.signals == (signal,)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"buzzword_density": 0.02},
            {"politeness_score": 0.5},
            {"bullet_list_count": 2},
            {"numbered_list_count": 1},
            {"avg_sentence_length": 20.0},
            {"burstiness": 0.3},
            {"typo_count": 0, "word_count": 20},
        ],
    )
    def test_boundaries_are_strict(self, overrides):
        assert score_features(dataclasses.replace(_QUIET, **overrides)).signals == ()


class TestScoreCap:
    def test_all_rules_score_one(self):
        features = FeatureSet(
            formal_phrase_count=3,
            buzzword_density=0.1,
            politeness_score=0.9,
            bullet_list_count=5,
            numbered_list_count=5,
            colon_header_count=2,
            avg_sentence_length=25.0,
            burstiness=0.1,
            typo_count=0,
            perfect_punctuation=True,
            word_count=200,
        )
        assert score_features(features).score == 1.0

    def test_score_capped_with_custom_rules(self):
        rules = (
            ScoringRule("a", 80, lambda f: True),
            ScoringRule("b", 80, lambda f: True),
        )
        breakdown = score_features(_QUIET, rules)
        assert breakdown.points == 160
        assert breakdown.score == 1.0


class TestThreshold:
    def test_default_threshold(self):
        assert DEFAULT_AI_THRESHOLD == 0.65

    def test_strictly_greater(self):
        assert classify_score(0.65) is False
        assert classify_score(0.66) is True
        assert classify_score(0.0) is False

    def test_custom_threshold(self):
        assert classify_score(0.5, threshold=0.4) is True


class TestWorkedExample:
    """Score 0.50 → 0.65 (still human) → 0.75 (AI)."""

    BASE = FeatureSet(
        formal_phrase_count=1,
        buzzword_density=2 / 20,
        avg_sentence_length=22.0,
        burstiness=0.2,
        typo_count=1,
        word_count=20,
        sentence_count=1,
        character_count=120,
    )

    def test_base_is_human(self):
        breakdown = score_features(self.BASE)
        assert breakdown.score == 0.5
        assert classify_score(breakdown.score) is False

    def test_exactly_threshold_is_human(self):
        features = dataclasses.replace(self.BASE, colon_header_count=1, perfect_punctuation=True)
        breakdown = score_features(features)
        assert breakdown.score == 0.65
        assert classify_score(breakdown.score) is False

    def test_one_more_rule_is_ai(self):
        features = dataclasses.replace(
            self.BASE, colon_header_count=1, perfect_punctuation=True, bullet_list_count=3
        )
        breakdown = score_features(features)
        assert breakdown.score == 0.75
        assert classify_score(breakdown.score) is True

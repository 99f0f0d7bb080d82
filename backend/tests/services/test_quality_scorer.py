"""
Tests for QualityScorer
质量评分测试
"""

import pytest

from voxbridge.core.config import Settings
from voxbridge.core.exceptions import InvalidConfigError
from voxbridge.services.translation import QualityScorer, ScoringWeights


@pytest.fixture
def scorer(small_table):
    return QualityScorer(small_table)


class TestQualityScorer:
    """评分规则"""

    def test_good_candidate_clamped_to_one(self, scorer):
        assert scorer.score("hello", "مرحبا", "en", "ar") == 1.0

    def test_empty_candidate_scores_zero(self, scorer):
        assert scorer.score("hello", "", "en", "ar") == 0.0
        assert scorer.score("hello", "   ", "en", "ar") == 0.0

    def test_candidate_equal_to_original_penalized(self, scorer):
        # 0.5 + 0.2 * 1.0 + 0.3 * 1.0 - 0.3
        assert scorer.score("hello", "Hello", "en", "ar") == pytest.approx(0.7)

    def test_error_token_penalized(self, scorer):
        good = scorer.score("hello", "مرحبا", "en", "ar")
        bad = scorer.score("hello", "TRANSLATION FAILED", "en", "ar")
        assert bad < good

    def test_unresolved_markers_lower_score(self, scorer):
        full = scorer.score("hello world", "مرحبا عالم", "en", "ar")
        partial = scorer.score("hello world", "مرحبا [world]", "en", "ar")
        assert partial < full

    def test_never_negative(self, scorer):
        assert scorer.score("a", "[a] [b] [c] [d]", "en", "ar") == 0.0

    def test_script_bonus(self, scorer):
        # 原文不在词表中，两个候选长度相同，避免被截断到 1.0
        arabic = scorer.score("novel", "رواية", "en", "ar")
        latin = scorer.score("novel", "roman", "en", "ar")
        assert arabic - latin == pytest.approx(0.2)

    def test_deterministic(self, scorer):
        first = scorer.score("good morning", "صباح الخير", "en", "ar")
        assert all(scorer.score("good morning", "صباح الخير", "en", "ar") == first for _ in range(5))


class TestScoringHelpers:
    """辅助指标"""

    def test_length_ratio(self):
        assert QualityScorer.length_ratio("abcd", "ab") == 0.5
        assert QualityScorer.length_ratio("", "") == 0.0

    def test_dictionary_coverage(self, scorer):
        assert scorer.dictionary_coverage("hello stranger", "en", "ar") == 0.5

    def test_coverage_neutral_without_table(self, scorer):
        assert scorer.dictionary_coverage("hello", "en", "xx") == 0.5


class TestScoringWeights:
    """权重配置"""

    def test_defaults(self):
        weights = ScoringWeights()
        assert (weights.length, weights.coverage, weights.error_penalty, weights.script_bonus) == (
            0.2,
            0.3,
            0.3,
            0.2,
        )

    def test_from_settings(self):
        weights = ScoringWeights.from_settings(Settings(SCORE_SCRIPT_BONUS=0.5))
        assert weights.script_bonus == 0.5
        assert weights.base == 0.5

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            ScoringWeights(error_penalty=-0.1)
        assert "error_penalty" in exc_info.value.message

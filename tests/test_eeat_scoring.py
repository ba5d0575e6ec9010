"""
Test Suite for E-E-A-T Aggregation

Tests:
- Weighted overall score and grade thresholds
- YMYL penalty
- Strengths, weaknesses, critical issues and recommendations
- Weight overrides and validation
- Determinism and serialization
"""

import json
import logging

import pytest

from eeat_engine.exceptions import InvalidInputError, WeightConfigurationError
from eeat_engine.quality import (
    EEATWeights,
    ExternalSignals,
    QuickCheckResult,
    calculate_eeat_score,
    get_grade,
    quick_eeat_check,
)
from eeat_engine.utils.text import round_half_up


class TestGrades:
    """Test grade thresholds."""

    @pytest.mark.parametrize("score,grade", [
        (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"),
        (70, "C"), (69, "D"), (60, "D"), (59, "F"), (0, "F"),
    ])
    def test_thresholds(self, score, grade):
        assert get_grade(score) == grade


class TestCalculateEEATScore:
    """Test the full E-E-A-T calculation."""

    def test_thin_article_floor(self, thin_article, fixed_time):
        """
        50 words, no citations, no first-person language, no author:
        0.25 × 15 + 0.30 × 13 + 0.20 × 35 + 0.25 × 33 = 22.9 → 23 (F)
        """
        result = calculate_eeat_score(thin_article, analyzed_at=fixed_time)

        assert result.word_count == 50
        assert result.experience.score == 15
        assert result.expertise.score == 13
        assert result.authoritativeness.score == 35
        assert result.trustworthiness.score == 33
        assert result.overall == 23
        assert result.overall < 60
        assert result.grade in {"D", "F"}
        assert result.grade == "F"
        assert not result.passed

    def test_rich_article_scores_higher(self, rich_article, thin_article, author):
        rich = calculate_eeat_score(rich_article, author=author, site_da_score=55)
        thin = calculate_eeat_score(thin_article)

        assert rich.overall > thin.overall
        assert rich.citation_analysis.total >= 4

    def test_scores_bounded(self, rich_article, thin_article, author):
        for html in (rich_article, thin_article, ""):
            result = calculate_eeat_score(html, author=author, site_da_score=250)
            for score in (
                result.overall,
                result.experience.score,
                result.expertise.score,
                result.authoritativeness.score,
                result.trustworthiness.score,
            ):
                assert 0 <= score <= 100

    def test_pre_penalty_invariant(self, rich_article):
        """Overall (before YMYL) is the rounded weighted sum."""
        result = calculate_eeat_score(rich_article)
        expected = round_half_up(
            result.experience.score * 0.25
            + result.expertise.score * 0.30
            + result.authoritativeness.score * 0.20
            + result.trustworthiness.score * 0.25
        )

        assert result.pre_penalty_overall == expected
        assert result.overall == expected

    def test_empty_content(self):
        """Empty content scores without raising."""
        result = calculate_eeat_score("")

        assert result.word_count == 0
        assert result.citation_analysis.density == 0
        assert result.grade == "F"

    def test_author_mapping(self, thin_article, author):
        """Plain author data is accepted alongside AuthorProfile."""
        data = {"credentials": ["MD"], "bio": "x" * 60, "expertise": ["health"]}
        result = calculate_eeat_score(thin_article, author=data)

        assert result.authoritativeness.score == 40
        assert result.authoritativeness.topical_authority == 55

        as_dict = {"credentials": author.credentials, "bio": author.bio, "expertise": author.expertise}
        assert (
            calculate_eeat_score(thin_article, author=as_dict).overall
            == calculate_eeat_score(thin_article, author=author).overall
        )

    def test_bad_author_rejected(self, thin_article):
        with pytest.raises(InvalidInputError):
            calculate_eeat_score(thin_article, author=42)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_eeat_score(None)


class TestYMYLPenalty:
    """Test the Your-Money-Your-Life penalty."""

    def test_penalty_applied_once(self, thin_article):
        result = calculate_eeat_score(thin_article, is_ymyl=True)

        assert result.pre_penalty_overall == 23
        assert result.overall == 21  # round(23 × 0.9 = 20.7)
        assert result.is_ymyl

    def test_penalty_never_raises_score(self, thin_article, rich_article, author):
        for html in (thin_article, rich_article, ""):
            result = calculate_eeat_score(html, author=author, is_ymyl=True)
            assert result.overall <= result.pre_penalty_overall

    def test_no_penalty_at_or_above_80(self, thin_article):
        """Scores of 80+ are left alone."""
        weights = EEATWeights(experience=0, expertise=0, authoritativeness=0, trustworthiness=1.0)
        external = ExternalSignals(fact_check_score=300)  # Trust clamps to 100
        result = calculate_eeat_score(thin_article, weights=weights, external=external, is_ymyl=True)

        assert result.pre_penalty_overall == 100
        assert result.overall == 100

    def test_ymyl_risk_flag(self, thin_article):
        result = calculate_eeat_score(thin_article, is_ymyl=True)
        assert "YMYL content with low E-E-A-T score - high risk" in result.critical_issues

    def test_grade_uses_post_penalty_score(self, thin_article):
        weights = EEATWeights(experience=0, expertise=0, authoritativeness=1.0, trustworthiness=0)
        result = calculate_eeat_score(thin_article, weights=weights, site_da_score=100, is_ymyl=True)

        # Authority 100 × 0.35 + 40 × 0.35 + 50 × 0.2 = 59
        assert result.pre_penalty_overall == 59
        assert result.overall == 53
        assert result.grade == get_grade(53)


class TestFeedback:
    """Test strengths, weaknesses, critical issues and recommendations."""

    def test_thin_article_feedback(self, thin_article):
        result = calculate_eeat_score(thin_article)

        assert result.strengths == []
        assert result.weaknesses == [
            "Lacks personal experience indicators",
            "Weak expertise demonstration",
            "Lacking author authority",
            "Missing trust indicators",
        ]
        assert result.critical_issues == ["Too few citations - add authoritative sources"]

    def test_recommendations_capped_in_source_order(self, thin_article):
        """Experience advice comes first; the list stops at 10."""
        result = calculate_eeat_score(thin_article)

        assert len(result.recommendations) == 10
        assert result.recommendations[:4] == result.experience.recommendations
        assert result.recommendations[4:10] == result.expertise.recommendations[:6]

    def test_strength_reported(self):
        html = (
            "<p>By Jane Smith. Last updated: 2025-01-10. Disclaimer: this post is for fun. "
            "Contact us anytime. Affiliate disclosure: links earn us money at no extra cost.</p>"
        )
        result = calculate_eeat_score(html)

        assert result.trustworthiness.score >= 70
        assert "Strong trust signals present" in result.strengths


class TestWeights:
    """Test weight overrides and validation."""

    def test_partial_override(self, thin_article):
        """Overrides merge over the defaults."""
        result = calculate_eeat_score(
            thin_article,
            weights={"experience": 1.0, "expertise": 0, "authoritativeness": 0, "trustworthiness": 0},
        )
        assert result.overall == result.experience.score

    def test_unknown_weight_rejected(self, thin_article):
        with pytest.raises(WeightConfigurationError):
            calculate_eeat_score(thin_article, weights={"freshness": 0.1})

    def test_bad_sum_warns(self, thin_article, caplog):
        """A weight sum other than 1.0 is logged and used as-is."""
        with caplog.at_level(logging.WARNING):
            result = calculate_eeat_score(thin_article, weights={"experience": 0.5})

        assert "sum to 1.2500" in caplog.text
        assert result.pre_penalty_overall == round_half_up(
            15 * 0.5 + 13 * 0.30 + 35 * 0.20 + 33 * 0.25
        )

    def test_oversized_weights_clamped(self, thin_article, rich_article):
        """
        Weights summing to 8.0 would give 2 × (15 + 13 + 35 + 33) = 192;
        the overall score stops at 100.
        """
        doubled = {"experience": 2.0, "expertise": 2.0, "authoritativeness": 2.0, "trustworthiness": 2.0}
        result = calculate_eeat_score(thin_article, weights=doubled)

        assert result.pre_penalty_overall == 100
        assert result.overall == 100
        assert result.grade == "A"

        ones = {"experience": 1.0, "expertise": 1.0, "authoritativeness": 1.0, "trustworthiness": 1.0}
        assert 0 <= calculate_eeat_score(rich_article, weights=ones).overall <= 100

    def test_negative_weights_clamped(self, thin_article):
        negative = {"experience": -1.0, "expertise": -1.0, "authoritativeness": -1.0, "trustworthiness": -1.0}
        result = calculate_eeat_score(thin_article, weights=negative, is_ymyl=True)

        assert result.pre_penalty_overall == 0
        assert result.overall == 0
        assert result.grade == "F"

    def test_bad_sum_strict(self, thin_article):
        with pytest.raises(WeightConfigurationError):
            calculate_eeat_score(thin_article, weights={"experience": 0.5}, strict_weights=True)

    def test_weight_error_is_value_error(self):
        with pytest.raises(ValueError):
            EEATWeights().merged({"bogus": 1.0})


class TestDeterminismAndSerialization:
    """Test reproducible, JSON-safe output."""

    def test_identical_results(self, rich_article, author, fixed_time):
        first = calculate_eeat_score(rich_article, author=author, analyzed_at=fixed_time)
        second = calculate_eeat_score(rich_article, author=author, analyzed_at=fixed_time)

        assert first.to_dict() == second.to_dict()

    def test_json_serializable(self, rich_article, fixed_time):
        data = calculate_eeat_score(rich_article, analyzed_at=fixed_time).to_dict()
        encoded = json.dumps(data)

        assert data["analyzed_at"] == fixed_time.isoformat()
        assert data["citation_analysis"]["by_tier"]["authoritative"] >= 1
        assert '"quality_tier"' not in encoded  # Citations themselves are not embedded

    def test_default_timestamp_is_utc(self, thin_article):
        result = calculate_eeat_score(thin_article)
        assert result.analyzed_at.tzinfo is not None


class TestQuickCheck:
    """Test the quick E-E-A-T check."""

    def test_thin_article(self, thin_article):
        assert quick_eeat_check(thin_article) == QuickCheckResult(score=23, grade="F", passed=False)

    def test_matches_full_score(self, rich_article):
        quick = quick_eeat_check(rich_article)
        full = calculate_eeat_score(rich_article)

        assert quick.score == full.overall
        assert quick.passed == (full.overall >= 60)

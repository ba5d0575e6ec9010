"""
E-E-A-T Aggregator

Combines the four dimension scores into one overall score and grade.

Formula:
    Overall = round(Experience × W_exp + Expertise × W_ext
                  + Authoritativeness × W_auth + Trustworthiness × W_trust)
              clamped to 0-100

    YMYL and Overall < 80  →  Overall = round(Overall × 0.9)   (applied once)

Grade (post-penalty):
    >= 90 A, >= 80 B, >= 70 C, >= 60 D, else F
"""

import logging
from datetime import datetime, timezone
from typing import List, Mapping, Optional, Union

from .citations import analyze_citations, extract_citations
from .dimensions import score_authoritativeness, score_expertise, score_trustworthiness
from .experience import score_experience
from .helpers import (
    DEFAULT_EEAT_WEIGHTS,
    MAX_RECOMMENDATIONS,
    MIN_CITATIONS_BEFORE_CRITICAL,
    PASS_SCORE,
    STRENGTH_THRESHOLD,
    WEAKNESS_THRESHOLD,
    YMYL_PENALTY_BELOW,
    YMYL_PENALTY_FACTOR,
    YMYL_RISK_BELOW,
    EEATWeights,
    ExternalSignals,
    get_grade,
)
from .models import AuthorInput, EEATScore, QuickCheckResult
from ..utils.text import clamp, count_words, require_text, round_half_up

logger = logging.getLogger(__name__)

WeightsInput = Union[EEATWeights, Mapping[str, float]]

# (dimension attribute, strength message, weakness message)
DIMENSION_MESSAGES = [
    ("experience",
     "Strong first-hand experience signals",
     "Lacks personal experience indicators"),
    ("expertise",
     "Good source quality and expertise signals",
     "Weak expertise demonstration"),
    ("authoritativeness",
     "Good author authority signals",
     "Lacking author authority"),
    ("trustworthiness",
     "Strong trust signals present",
     "Missing trust indicators"),
]


def resolve_weights(weights: Optional[WeightsInput] = None, strict: bool = False) -> EEATWeights:
    """
    Build the effective weight set.

    Args:
        weights: Full EEATWeights, or a partial mapping merged over the defaults
        strict: Raise instead of warning when the weights do not sum to 1.0

    Returns:
        EEATWeights ready for aggregation
    """
    if isinstance(weights, EEATWeights):
        resolved = weights
    else:
        resolved = DEFAULT_EEAT_WEIGHTS.merged(weights)
    resolved.validate(strict=strict)
    return resolved


def calculate_eeat_score(
    html: str,
    author: Optional[AuthorInput] = None,
    site_da_score: Optional[float] = None,
    weights: Optional[WeightsInput] = None,
    is_ymyl: bool = False,
    external: Optional[ExternalSignals] = None,
    site_domain: Optional[str] = None,
    analyzed_at: Optional[datetime] = None,
    strict_weights: bool = False,
) -> EEATScore:
    """
    Calculate the complete E-E-A-T score for a piece of content.

    Args:
        html: Article HTML
        author: AuthorProfile or a plain mapping with the same keys
        site_da_score: Site domain authority override (0-100)
        weights: Weight overrides (partial mapping or full EEATWeights)
        is_ymyl: Apply the "Your Money Your Life" penalty rule
        external: Enrichment values from fact-check/backlink services
        site_domain: Publishing site's domain, for internal link detection
        analyzed_at: Timestamp to stamp on the result (defaults to now, UTC)
        strict_weights: Raise WeightConfigurationError on a bad weight sum

    Returns:
        EEATScore with all four dimensions and aggregated feedback
    """
    require_text(html, "html")
    w = resolve_weights(weights, strict=strict_weights)

    word_count = count_words(html)

    citations = extract_citations(html)
    citation_analysis = analyze_citations(citations, word_count, site_domain=site_domain)

    experience = score_experience(html, word_count)
    expertise = score_expertise(html, word_count, citation_analysis, external=external)
    authoritativeness = score_authoritativeness(
        html, author=author, site_da_score=site_da_score, external=external
    )
    trustworthiness = score_trustworthiness(html, external=external)

    # Weights off 1.0 can overshoot; the sum is clamped to 0-100
    pre_penalty_overall = round_half_up(clamp(
        experience.score * w.experience
        + expertise.score * w.expertise
        + authoritativeness.score * w.authoritativeness
        + trustworthiness.score * w.trustworthiness
    ))

    overall = pre_penalty_overall
    if is_ymyl and overall < YMYL_PENALTY_BELOW:
        overall = round_half_up(overall * YMYL_PENALTY_FACTOR)

    grade = get_grade(overall)

    dimension_scores = {
        "experience": experience.score,
        "expertise": expertise.score,
        "authoritativeness": authoritativeness.score,
        "trustworthiness": trustworthiness.score,
    }

    strengths: List[str] = []
    weaknesses: List[str] = []
    for attribute, strength, weakness in DIMENSION_MESSAGES:
        dimension_score = dimension_scores[attribute]
        if dimension_score >= STRENGTH_THRESHOLD:
            strengths.append(strength)
        elif dimension_score < WEAKNESS_THRESHOLD:
            weaknesses.append(weakness)

    critical_issues: List[str] = []
    if citation_analysis.total < MIN_CITATIONS_BEFORE_CRITICAL:
        critical_issues.append("Too few citations - add authoritative sources")
    if is_ymyl and overall < YMYL_RISK_BELOW:
        critical_issues.append("YMYL content with low E-E-A-T score - high risk")

    # Source order, truncated without reprioritizing
    recommendations = (
        experience.recommendations
        + expertise.recommendations
        + authoritativeness.recommendations
        + trustworthiness.recommendations
    )[:MAX_RECOMMENDATIONS]

    logger.debug(
        f"E-E-A-T {overall} ({grade}) - experience {experience.score}, "
        f"expertise {expertise.score}, authority {authoritativeness.score}, "
        f"trust {trustworthiness.score}, {word_count} words"
    )

    return EEATScore(
        overall=overall,
        grade=grade,
        experience=experience,
        expertise=expertise,
        authoritativeness=authoritativeness,
        trustworthiness=trustworthiness,
        strengths=strengths,
        weaknesses=weaknesses,
        critical_issues=critical_issues,
        recommendations=recommendations,
        analyzed_at=analyzed_at or datetime.now(timezone.utc),
        word_count=word_count,
        citation_analysis=citation_analysis,
        pre_penalty_overall=pre_penalty_overall,
        is_ymyl=is_ymyl,
    )


def quick_eeat_check(html: str) -> QuickCheckResult:
    """Quick E-E-A-T check for real-time feedback."""
    result = calculate_eeat_score(html)
    return QuickCheckResult(
        score=result.overall,
        grade=result.grade,
        passed=result.overall >= PASS_SCORE,
    )

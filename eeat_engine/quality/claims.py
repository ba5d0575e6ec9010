"""
Verifiable Claim Extraction and Offline Fact-Check Scoring

Finds sentences that make checkable claims (statistics, findings, quotes,
factual assertions) and scores content structure without calling a
fact-check service. A fact-check integration looks claims up, maps the
ratings with status_from_ratings() and aggregates them with
summarize_fact_checks(); the resulting overall_score is what feeds
ExternalSignals.fact_check_score.

Fact-check summary:
    Score = 100 - 20 × Disputed - 5 × Unverified   (clamped 0-100)
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .models import Serializable
from ..utils.text import clamp, count_words, plain_text, require_text, round_half_up, split_sentences

logger = logging.getLogger(__name__)


class ClaimStatus(Enum):
    """Outcome of looking a claim up in a fact-check database."""
    VERIFIED = "verified"
    DISPUTED = "disputed"
    UNVERIFIED = "unverified"
    NO_DATA = "no_data"  # Lookup failed


@dataclass
class ExtractedClaim(Serializable):
    text: str
    confidence: float
    category: str  # "statistic", "quote", "fact", "claim", "finding"
    source: Optional[str] = None


@dataclass
class FactCheckDetail(Serializable):
    claim: ExtractedClaim
    status: ClaimStatus
    confidence: float


@dataclass
class FactCheckSummary(Serializable):
    overall_score: int
    claims_checked: int
    claims_verified: int
    claims_disputed: int
    claims_unverified: int
    details: List[FactCheckDetail] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuickFactCheck(Serializable):
    score: int
    claim_density: float  # Claims per 1000 words
    has_attributions: bool


# ============================================================================
# CLAIM PATTERNS
# ============================================================================

CLAIM_PATTERNS = [
    # Statistics
    (re.compile(r"(\d+(?:\.\d+)?%?\s+(?:of|percent|people|users|studies|experts))", re.IGNORECASE), "statistic"),
    (re.compile(r"(according to\s+(?:a\s+)?(?:study|research|survey|report|data))", re.IGNORECASE), "finding"),
    (re.compile(r"(research shows|studies show|data shows|evidence suggests)", re.IGNORECASE), "finding"),

    # Quotes and attributions
    (re.compile(r'("[^"]{20,200}")'), "quote"),
    (re.compile(r"(said|stated|claimed|reported)\s+that", re.IGNORECASE), "quote"),

    # Facts and claims
    (re.compile(r"(it is (?:a )?fact that|the fact is|factually)", re.IGNORECASE), "fact"),
    (re.compile(r"(has been proven|scientifically proven|medically proven)", re.IGNORECASE), "claim"),
    (re.compile(r"(causes?|prevents?|cures?|treats?)\s+\w+", re.IGNORECASE), "claim"),
]

ATTRIBUTION_PATTERN = re.compile(r"according to|source:|cited from|research by", re.IGNORECASE)
DISPUTED_RATING_WORDS = ("false", "misleading", "incorrect")

MIN_CLAIM_SENTENCE = 20
MAX_CLAIM_LENGTH = 300
MAX_CLAIMS = 10
DEFAULT_CLAIM_CONFIDENCE = 0.7

STATUS_CONFIDENCE = {
    ClaimStatus.VERIFIED: 0.85,
    ClaimStatus.DISPUTED: 0.85,
    ClaimStatus.UNVERIFIED: 0.5,
    ClaimStatus.NO_DATA: 0.0,
}


def extract_claims(html: str) -> List[ExtractedClaim]:
    """
    Extract verifiable claims from content.

    One claim per sentence (first matching pattern decides the category),
    unique by text, at most 10.
    """
    require_text(html, "html")
    claims: List[ExtractedClaim] = []
    seen = set()

    for sentence in split_sentences(plain_text(html)):
        trimmed = sentence.strip()
        if len(trimmed) <= MIN_CLAIM_SENTENCE:
            continue

        for pattern, category in CLAIM_PATTERNS:
            if not pattern.search(trimmed):
                continue
            text = trimmed[:MAX_CLAIM_LENGTH]
            if text not in seen:
                seen.add(text)
                claims.append(ExtractedClaim(
                    text=text,
                    confidence=DEFAULT_CLAIM_CONFIDENCE,
                    category=category,
                ))
            break

    claims.sort(key=lambda c: c.confidence, reverse=True)
    return claims[:MAX_CLAIMS]


def quick_fact_check_score(html: str) -> QuickFactCheck:
    """Structure-based fact-check score, no lookups."""
    claims = extract_claims(html)
    word_count = count_words(html)
    claim_density = (len(claims) / word_count) * 1000 if word_count > 0 else 0.0

    has_attributions = bool(ATTRIBUTION_PATTERN.search(html))

    score = 70
    if has_attributions:
        score += 15
    if 2 <= claim_density <= 10:
        score += 15
    if claim_density > 15:
        score -= 10  # Too many unverified claims

    return QuickFactCheck(
        score=round_half_up(clamp(score)),
        claim_density=claim_density,
        has_attributions=has_attributions,
    )


# ============================================================================
# FACT-CHECK AGGREGATION
# ============================================================================

def status_from_ratings(textual_ratings: Sequence[str]) -> ClaimStatus:
    """
    Map fact-check review ratings ("True", "Mostly False", ...) to a status.

    No reviews means the claim is unverified; any false, misleading or
    incorrect rating disputes it.
    """
    if not textual_ratings:
        return ClaimStatus.UNVERIFIED
    for rating in textual_ratings:
        lowered = rating.lower()
        if any(word in lowered for word in DISPUTED_RATING_WORDS):
            return ClaimStatus.DISPUTED
    return ClaimStatus.VERIFIED


def summarize_fact_checks(
    claims: Sequence[ExtractedClaim],
    statuses: Sequence[ClaimStatus],
) -> FactCheckSummary:
    """
    Aggregate externally obtained claim statuses.

    Args:
        claims: Claims that were looked up
        statuses: One status per claim, same order

    Returns:
        FactCheckSummary; no_data counts as unverified

    Raises:
        ValueError: If claims and statuses differ in length
    """
    if len(claims) != len(statuses):
        raise ValueError(
            f"Got {len(statuses)} statuses for {len(claims)} claims"
        )

    verified = sum(1 for s in statuses if s == ClaimStatus.VERIFIED)
    disputed = sum(1 for s in statuses if s == ClaimStatus.DISPUTED)
    unverified = len(statuses) - verified - disputed

    total = len(claims)
    overall_score = 100
    if total > 0:
        overall_score = clamp(100 - disputed * 20 - unverified * 5)

    details = [
        FactCheckDetail(claim=claim, status=status, confidence=STATUS_CONFIDENCE[status])
        for claim, status in zip(claims, statuses)
    ]

    recommendations = []
    if disputed > 0:
        recommendations.append(f"Review {disputed} disputed claim(s) for accuracy")
    if unverified > total * 0.5:
        recommendations.append("Add more authoritative sources to verify claims")
    if total == 0:
        recommendations.append("Content has few verifiable claims - consider adding data/studies")

    if disputed:
        logger.warning(f"{disputed} of {total} claims disputed by fact-checkers")

    return FactCheckSummary(
        overall_score=round_half_up(overall_score),
        claims_checked=total,
        claims_verified=verified,
        claims_disputed=disputed,
        claims_unverified=unverified,
        details=details,
        recommendations=recommendations,
    )

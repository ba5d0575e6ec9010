"""
Expertise, Authoritativeness and Trustworthiness Scorers

Each scorer is a pure function of the article HTML plus caller-supplied
context (citation analysis, author profile, site domain authority).

Expertise:
    Score = Source_Quality × 0.35 + Density_Score × 0.25
          + Credibility_Signals × 0.25 + Technical_Accuracy × 0.15

Authoritativeness:
    Score = Domain_Authority × 0.35 + Topical_Authority × 0.35
          + Backlinks_Quality × 0.20 + (10 if Person schema present)

Trustworthiness:
    Score = Fact_Check × 0.30 + 15 × Disclaimer + Date_Relevance × 0.20
          + 15 × Authorship + 10 × Contact_Info + 10 × Transparent_Affiliate

Technical_Accuracy, Backlinks_Quality and Fact_Check come from
ExternalSignals and fall back to fixed placeholders.
"""

import logging
import re
from typing import List, Optional

from .citations import get_citation_recommendations
from .helpers import BASE_TOPICAL_AUTHORITY, DEFAULT_EXTERNAL_SIGNALS, ExternalSignals
from .models import (
    AuthorInput,
    AuthoritativenessScore,
    AuthoritySignals,
    CitationAnalysis,
    ExpertiseScore,
    ExpertiseSignals,
    TrustSignals,
    TrustworthinessScore,
    coerce_author,
)
from ..utils.text import clamp, require_text, round_half_up, strip_tags

logger = logging.getLogger(__name__)


# ============================================================================
# EXPERTISE
# ============================================================================

BASIC_INDICATORS = [
    re.compile(r"\b(simple|easy|basic|beginner|introduction|overview)\b", re.IGNORECASE),
]

ADVANCED_INDICATORS = [
    re.compile(r"\b(advanced|expert|professional|technical|comprehensive|in-depth)\b", re.IGNORECASE),
    re.compile(r"\b(algorithm|optimization|implementation|architecture|methodology)\b", re.IGNORECASE),
]

ADVANCED_MATCH_THRESHOLD = 5

TECHNICAL_TERM_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")
ABBREVIATION_PATTERN = re.compile(r"\b[A-Z]{2,5}\b")
MAX_TECHNICAL_TERMS = 20

CREDENTIAL_PATTERNS = [
    re.compile(r"As a (certified|licensed|qualified|professional) ([^,.\n]+)", re.IGNORECASE),
    re.compile(r"With my (degree|certification|license|training) in ([^,.\n]+)", re.IGNORECASE),
    re.compile(r"Having (worked|practiced|studied) ([^,.\n]+) for (\d+|\w+) years", re.IGNORECASE),
]

COMPLEXITY_BONUS = {
    "advanced": 20,
    "intermediate": 10,
    "basic": 0,
}


def detect_complexity_level(text: str) -> str:
    """Classify text as "basic", "intermediate" or "advanced"."""
    basic_matches = sum(len(p.findall(text)) for p in BASIC_INDICATORS)
    advanced_matches = sum(len(p.findall(text)) for p in ADVANCED_INDICATORS)

    if advanced_matches > ADVANCED_MATCH_THRESHOLD:
        return "advanced"
    if basic_matches > advanced_matches:
        return "basic"
    return "intermediate"


def detect_technical_terms(text: str) -> List[str]:
    """Capitalized multi-word terms and 2-5 letter abbreviations, first 20 unique."""
    terms = TECHNICAL_TERM_PATTERN.findall(text)
    abbreviations = ABBREVIATION_PATTERN.findall(text)
    unique = list(dict.fromkeys(terms + abbreviations))
    return unique[:MAX_TECHNICAL_TERMS]


def detect_credential_mentions(text: str) -> List[str]:
    mentions = []
    for pattern in CREDENTIAL_PATTERNS:
        mentions.extend(match.group(0) for match in pattern.finditer(text))
    return mentions


def score_expertise(
    html: str,
    word_count: int,
    citation_analysis: CitationAnalysis,
    external: Optional[ExternalSignals] = None,
) -> ExpertiseScore:
    """
    Score the Expertise dimension.

    Args:
        html: Article HTML
        word_count: Document word count
        citation_analysis: Result of analyze_citations() for the same HTML
        external: Enrichment values; technical_accuracy is used here

    Returns:
        ExpertiseScore with sub-metrics, signals and recommendations
    """
    require_text(html, "html")
    external = external or DEFAULT_EXTERNAL_SIGNALS
    text = strip_tags(html)

    signals = ExpertiseSignals(
        technical_terms=detect_technical_terms(text),
        credential_mentions=detect_credential_mentions(text),
        complexity_level=detect_complexity_level(text),
    )

    source_quality = citation_analysis.average_authority
    density_score = min(100, citation_analysis.density * 25)

    credibility_signals = (
        len(signals.technical_terms) * 2
        + len(signals.credential_mentions) * 15
        + COMPLEXITY_BONUS[signals.complexity_level]
    )
    credibility_signals = min(100, credibility_signals)

    technical_accuracy = external.technical_accuracy

    score = round_half_up(clamp(
        source_quality * 0.35
        + density_score * 0.25
        + credibility_signals * 0.25
        + technical_accuracy * 0.15
    ))

    recommendations = get_citation_recommendations(citation_analysis)
    if not signals.credential_mentions:
        recommendations.append("Mention your relevant credentials or expertise")
    if signals.complexity_level == "basic":
        recommendations.append("Add more in-depth technical detail to demonstrate expertise")

    logger.debug(
        f"Expertise score {score} over {word_count} words "
        f"(sources {source_quality}, density {density_score:.1f}, credibility {credibility_signals})"
    )

    return ExpertiseScore(
        score=score,
        source_quality=source_quality,
        citation_density=citation_analysis.density,
        credibility_signals=credibility_signals,
        technical_accuracy=technical_accuracy,
        signals=signals,
        recommendations=recommendations,
    )


# ============================================================================
# AUTHORITATIVENESS
# ============================================================================

PERSON_SCHEMA_MARKERS = ('"@type":"Person"', '@type": "Person"')
MIN_BIO_LENGTH = 50


def score_authoritativeness(
    html: str,
    author: Optional[AuthorInput] = None,
    site_da_score: Optional[float] = None,
    external: Optional[ExternalSignals] = None,
) -> AuthoritativenessScore:
    """
    Score the Authoritativeness dimension.

    Args:
        html: Article HTML (checked for Person schema markup)
        author: Author profile (AuthorProfile or a plain mapping), if known
        site_da_score: Site domain authority (0-100) from an external source.
            Falls back to external.fallback_domain_authority when None.
        external: Enrichment values; backlinks_quality is used here

    Returns:
        AuthoritativenessScore with sub-metrics, signals and recommendations
    """
    require_text(html, "html")
    external = external or DEFAULT_EXTERNAL_SIGNALS
    author = coerce_author(author)

    signals = AuthoritySignals(
        author_credentials_present=bool(author and author.credentials),
        author_bio_present=bool(author and len(author.bio or "") > MIN_BIO_LENGTH),
        author_schema_present=any(marker in html for marker in PERSON_SCHEMA_MARKERS),
    )

    if site_da_score is None:
        domain_authority = external.fallback_domain_authority
    else:
        domain_authority = round_half_up(clamp(site_da_score))

    topical_authority = BASE_TOPICAL_AUTHORITY
    if author:
        topical_authority += len(author.credentials) * 10
        topical_authority += len(author.expertise) * 5
        topical_authority = min(100, topical_authority)

    backlinks_quality = external.backlinks_quality

    score = round_half_up(clamp(
        domain_authority * 0.35
        + topical_authority * 0.35
        + backlinks_quality * 0.20
        + (10 if signals.author_schema_present else 0)
    ))

    recommendations = []
    if not signals.author_credentials_present:
        recommendations.append("Add author credentials to build authority")
    if not signals.author_bio_present:
        recommendations.append("Include a detailed author bio")
    if not signals.author_schema_present:
        recommendations.append("Add Person schema markup for the author")

    return AuthoritativenessScore(
        score=score,
        domain_authority=domain_authority,
        topical_authority=topical_authority,
        backlinks_quality=backlinks_quality,
        signals=signals,
        recommendations=recommendations,
    )


# ============================================================================
# TRUSTWORTHINESS
# ============================================================================

DISCLAIMER_PATTERNS = [
    re.compile(r"\bdisclaimer\b"),
    re.compile(r"\bthis (article|content|post) is (for|provided)"),
]
AFFILIATE_PATTERNS = [
    re.compile(r"affiliate (link|disclosure|commission)"),
    re.compile(r"we (may )?earn (a )?commission"),
]
LAST_UPDATED_PATTERN = re.compile(r"last (updated|modified|reviewed):\s*\d")
TIME_ELEMENT_PATTERN = re.compile(r"<time[^>]*datetime=", re.IGNORECASE)
# Bylines are matched on the original casing so "by far" is not a byline
BYLINE_PATTERN = re.compile(r"\b[Bb]y\s+[A-Z][a-z]+\s+[A-Z]")
AUTHOR_LINK_PATTERN = re.compile(r"""<a[^>]*class="[^"]*author""", re.IGNORECASE)
CONTACT_PATTERN = re.compile(r"contact (us|me)|email:\s*\S+@")
TRANSPARENT_AFFILIATE_PATTERN = re.compile(r"affiliate (disclosure|disclaimer)")
NO_EXTRA_COST_PATTERN = re.compile(r"at no (extra|additional) cost")
RECENT_YEAR_PATTERN = re.compile(r"202[4-6]")

DATE_RELEVANCE_RECENT = 85
DATE_RELEVANCE_UPDATED = 70
DATE_RELEVANCE_UNKNOWN = 50


def detect_trust_signals(html: str) -> TrustSignals:
    """Detect the eight trust signals in content."""
    require_text(html, "html")
    text = html.lower()

    return TrustSignals(
        has_disclaimer=any(p.search(text) for p in DISCLAIMER_PATTERNS),
        has_affiliate_disclosure=any(p.search(text) for p in AFFILIATE_PATTERNS),
        has_last_updated_date=bool(
            LAST_UPDATED_PATTERN.search(text) or TIME_ELEMENT_PATTERN.search(html)
        ),
        has_author_attribution=bool(
            BYLINE_PATTERN.search(strip_tags(html)) or AUTHOR_LINK_PATTERN.search(html)
        ),
        has_contact_info=bool(CONTACT_PATTERN.search(text)),
        has_privacy_policy="privacy policy" in text,  # Usually in footer
        transparent_affiliate=bool(
            TRANSPARENT_AFFILIATE_PATTERN.search(text) and NO_EXTRA_COST_PATTERN.search(text)
        ),
        no_misleading_claims=True,
    )


def score_trustworthiness(
    html: str,
    external: Optional[ExternalSignals] = None,
) -> TrustworthinessScore:
    """
    Score the Trustworthiness dimension.

    Args:
        html: Article HTML
        external: Enrichment values; fact_check_score is used here

    Returns:
        TrustworthinessScore clamped to 0-100
    """
    signals = detect_trust_signals(html)
    external = external or DEFAULT_EXTERNAL_SIGNALS

    fact_check_score = external.fact_check_score
    disclaimer_presence = signals.has_disclaimer or signals.has_affiliate_disclosure

    if RECENT_YEAR_PATTERN.search(html):
        date_relevance = DATE_RELEVANCE_RECENT
    elif signals.has_last_updated_date:
        date_relevance = DATE_RELEVANCE_UPDATED
    else:
        date_relevance = DATE_RELEVANCE_UNKNOWN

    transparent_authorship = signals.has_author_attribution

    score = 0.0
    score += fact_check_score * 0.30
    score += 15 if disclaimer_presence else 0
    score += date_relevance * 0.20
    score += 15 if transparent_authorship else 0
    score += 10 if signals.has_contact_info else 0
    score += 10 if signals.transparent_affiliate else 0
    score = round_half_up(clamp(score))

    recommendations = []
    if not signals.has_last_updated_date:
        recommendations.append('Add a "Last Updated" date to show content freshness')
    if not signals.has_author_attribution:
        recommendations.append("Include clear author attribution with byline")
    if not signals.has_affiliate_disclosure:
        recommendations.append("Add affiliate disclosure if applicable")
    if not signals.has_disclaimer:
        recommendations.append("Consider adding appropriate disclaimers for your content type")

    return TrustworthinessScore(
        score=score,
        fact_check_score=fact_check_score,
        disclaimer_presence=disclaimer_presence,
        date_relevance=date_relevance,
        transparent_authorship=transparent_authorship,
        signals=signals,
        recommendations=recommendations,
    )

"""
Citation Extractor and Classifier

Extracts hyperlinked and textual citations from article HTML, grades the
source domains into quality tiers and summarizes the citation set for
the Expertise dimension.

Domain authority:
    A deterministic stand-in for a real authority lookup (Moz/Ahrefs).
    Each tier owns a score band; the position inside the band comes from
    a CRC32 of the domain, so the same domain always scores the same.

        authoritative  90-100
        reputable      70-85
        standard       40-65
        low            20-35
        problematic     0-15
"""

import logging
import re
import zlib
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from .models import CitationAnalysis, SourceCitation, SourceQualityTier
from ..utils.domain_tiers import (
    LOW_QUALITY_DOMAINS,
    PROBLEMATIC_DOMAINS,
    REPUTABLE_DOMAINS,
    extract_domain,
    is_authoritative_domain,
    is_same_site,
    matches_domain,
    normalize_domain,
)
from ..utils.text import collapse_whitespace, require_text, round_half_up, strip_tags

logger = logging.getLogger(__name__)

AuthorityLookup = Callable[[str], int]


# ============================================================================
# PATTERNS
# ============================================================================

LINK_PATTERN = re.compile(
    r"""<a[^>]+href=["']([^"']+)["'][^>]*>([^<]+)</a>""",
    re.IGNORECASE,
)

NON_CITATION_LINK = re.compile(r"\.(jpg|jpeg|png|gif|svg|pdf)$", re.IGNORECASE)

# Un-linked attributions: "according to X", "source: X", ...
REFERENCE_PATTERNS = [
    re.compile(r"according to ([^,.\n]+)", re.IGNORECASE),
    re.compile(r"cited by ([^,.\n]+)", re.IGNORECASE),
    re.compile(r"research (?:from|by) ([^,.\n]+)", re.IGNORECASE),
    re.compile(r"study (?:from|by|in) ([^,.\n]+)", re.IGNORECASE),
    re.compile(r"source:\s*([^,.\n]+)", re.IGNORECASE),
]

CONTEXT_BEFORE = 100
CONTEXT_AFTER = 200
MIN_SOURCE_NAME = 3
MAX_SOURCE_NAME = 100

INTRO_CUTOFF = 0.15
CONCLUSION_CUTOFF = 0.85

AUTHORITY_BANDS: Dict[SourceQualityTier, Tuple[int, int]] = {
    SourceQualityTier.AUTHORITATIVE: (90, 100),
    SourceQualityTier.REPUTABLE: (70, 85),
    SourceQualityTier.STANDARD: (40, 65),
    SourceQualityTier.LOW: (20, 35),
    SourceQualityTier.PROBLEMATIC: (0, 15),
}


# ============================================================================
# EXTRACTION
# ============================================================================

def extract_citations(
    html: str,
    authority_lookup: Optional[AuthorityLookup] = None,
) -> List[SourceCitation]:
    """
    Extract citations/sources from HTML content.

    Hyperlinks are collected first, then un-linked attributions whose
    source name was not already captured by a link.

    Args:
        html: Article HTML (or plain text)
        authority_lookup: Optional callable mapping a domain to a 0-100
            authority score. Defaults to calculate_domain_authority.

    Returns:
        Citations in extraction order, ids "cite_1", "cite_2", ...
    """
    require_text(html, "html")
    lookup = authority_lookup or calculate_domain_authority

    citations: List[SourceCitation] = []
    total_text_length = len(strip_tags(html, ""))

    for match in LINK_PATTERN.finditer(html):
        url = match.group(1)
        anchor_text = match.group(2).strip()

        # Internal links: fragments and relative paths without a domain
        if url.startswith("#") or ("://" not in url and not url.startswith("//")):
            continue

        if NON_CITATION_LINK.search(url):
            continue

        domain = extract_domain(url)
        if not domain:
            continue

        position = match.start()
        context = collapse_whitespace(
            strip_tags(html[max(0, position - CONTEXT_BEFORE):position + CONTEXT_AFTER])
        ).strip()

        text_before_length = len(strip_tags(html[:position], ""))

        citations.append(SourceCitation(
            id=f"cite_{len(citations) + 1}",
            text=anchor_text,
            url=url,
            domain=domain,
            anchor_text=anchor_text,
            context=context,
            quality_tier=classify_domain(domain),
            authority_score=lookup(domain),
            verified=True,  # URL present; reachability needs an HTTP check
            position=_position_label(text_before_length, total_text_length),
        ))

    text = strip_tags(html)
    for pattern in REFERENCE_PATTERNS:
        for ref_match in pattern.finditer(text):
            source_name = ref_match.group(1).strip()

            if len(source_name) < MIN_SOURCE_NAME or len(source_name) > MAX_SOURCE_NAME:
                continue

            source_lower = source_name.lower()
            if any(source_lower in c.text.lower() for c in citations):
                continue

            citations.append(SourceCitation(
                id=f"cite_{len(citations) + 1}",
                text=source_name,
                context=ref_match.group(0),
                verified=False,
                verification_error="No URL provided",
                position="body",
            ))

    logger.debug(f"Extracted {len(citations)} citations")
    return citations


def _position_label(offset: int, total: int) -> str:
    """Classify a text offset as intro / body / conclusion."""
    if total <= 0:
        return "body"
    relative = offset / total
    if relative < INTRO_CUTOFF:
        return "intro"
    if relative > CONCLUSION_CUTOFF:
        return "conclusion"
    return "body"


# ============================================================================
# DOMAIN CLASSIFICATION
# ============================================================================

def classify_domain(domain: str) -> SourceQualityTier:
    """
    Classify a domain into a quality tier.

    Order: curated authoritative list, reputable list, problematic and
    low-quality lists, then TLD heuristics (.edu/.gov authoritative,
    .org reputable). Anything else is standard.
    """
    domain_lower = normalize_domain(require_text(domain, "domain"))

    if is_authoritative_domain(domain_lower):
        return SourceQualityTier.AUTHORITATIVE

    if matches_domain(domain_lower, REPUTABLE_DOMAINS):
        return SourceQualityTier.REPUTABLE

    if matches_domain(domain_lower, PROBLEMATIC_DOMAINS):
        return SourceQualityTier.PROBLEMATIC

    if matches_domain(domain_lower, LOW_QUALITY_DOMAINS):
        return SourceQualityTier.LOW

    if domain_lower.endswith(".edu") or domain_lower.endswith(".gov"):
        return SourceQualityTier.AUTHORITATIVE
    if domain_lower.endswith(".org"):
        return SourceQualityTier.REPUTABLE

    return SourceQualityTier.STANDARD


def calculate_domain_authority(domain: str) -> int:
    """
    Deterministic domain authority score (0-100) within the tier's band.

    Stub for a real authority-lookup integration; pass such an integration
    to extract_citations(authority_lookup=...) to replace it.
    """
    domain_lower = normalize_domain(require_text(domain, "domain"))
    low, high = AUTHORITY_BANDS[classify_domain(domain_lower)]
    jitter = zlib.crc32(domain_lower.encode("utf-8")) % (high - low + 1)
    return low + jitter


# ============================================================================
# ANALYSIS
# ============================================================================

def analyze_citations(
    citations: List[SourceCitation],
    word_count: int,
    site_domain: Optional[str] = None,
) -> CitationAnalysis:
    """
    Summarize a citation set.

    Args:
        citations: Extracted citations
        word_count: Words in the source document
        site_domain: The publishing site's domain. Links to it count as
            internal; every other link counts as external.

    Returns:
        CitationAnalysis with counts, density and average authority
    """
    by_tier = {tier.value: 0 for tier in SourceQualityTier}
    verified = 0
    failed = 0
    total_authority = 0
    has_external = False
    has_internal = False

    for citation in citations:
        if citation.quality_tier:
            by_tier[citation.quality_tier.value] += 1

        if citation.verified:
            verified += 1
        else:
            failed += 1

        if citation.authority_score:
            total_authority += citation.authority_score

        if citation.url:
            root_relative = citation.url.startswith("/") and not citation.url.startswith("//")
            if root_relative or is_same_site(citation.domain, site_domain):
                has_internal = True
            else:
                has_external = True

    total = len(citations)
    return CitationAnalysis(
        total=total,
        verified=verified,
        failed=failed,
        by_tier=by_tier,
        density=(total / word_count) * 1000 if word_count > 0 else 0.0,
        average_authority=round_half_up(total_authority / total) if total > 0 else 0,
        has_external_links=has_external,
        has_internal_links=has_internal,
    )


def validate_citations(citations: List[SourceCitation]) -> List[SourceCitation]:
    """
    Offline validation: a citation counts as verified iff it carries a URL.

    Returns new citation objects; the inputs are left untouched.
    """
    return [
        replace(
            citation,
            verified=bool(citation.url),
            verification_error=None if citation.url else "No URL to verify",
        )
        for citation in citations
    ]


def get_citation_recommendations(analysis: CitationAnalysis) -> List[str]:
    """Advisory recommendations for improving citation quality."""
    recommendations = []

    if analysis.total < 3:
        recommendations.append("Add more citations - aim for at least 3-5 authoritative sources")

    if analysis.by_tier.get(SourceQualityTier.AUTHORITATIVE.value, 0) == 0:
        recommendations.append(
            "Include at least one authoritative source (.gov, .edu, or major institution)"
        )

    if analysis.density < 1:
        recommendations.append("Citation density is low - add more sources throughout the content")

    if analysis.by_tier.get(SourceQualityTier.PROBLEMATIC.value, 0) > 0:
        recommendations.append("Remove or replace citations from low-quality or problematic sources")

    if not analysis.has_external_links:
        recommendations.append("Add external links to authoritative sources to build credibility")

    if analysis.average_authority < 50:
        recommendations.append("Improve source quality - cite more authoritative domains")

    return recommendations

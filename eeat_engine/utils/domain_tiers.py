"""
Source Domain Tiers

Curated domain lists used to grade cited sources:
- Authoritative: government, education, research institutions
- Reputable: major publications, reference sites, industry leaders
- Low: link shorteners and redirectors that hide the real source
- Problematic: sites with documented misinformation records

Matching follows the same strategies as competitor filtering elsewhere:
exact match, then subdomain match (news.bbc.com -> bbc.com).
"""

import logging
from typing import Iterable, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


# =============================================================================
# AUTHORITATIVE - suffix entries (leading dot) match by TLD
# =============================================================================

AUTHORITATIVE_SUFFIXES = (
    # Government
    ".gov", ".gov.uk", ".gov.au", ".gov.ca",
    # Education
    ".edu", ".ac.uk", ".edu.au",
)

AUTHORITATIVE_DOMAINS = {
    # Health & science authorities
    "who.int", "cdc.gov", "nih.gov", "fda.gov",
    "nature.com", "science.org", "ncbi.nlm.nih.gov",
    # Universities
    "harvard.edu", "stanford.edu", "mit.edu", "oxford.ac.uk",
}

# =============================================================================
# REPUTABLE
# =============================================================================

NEWS_MEDIA = {
    "nytimes.com", "washingtonpost.com", "bbc.com", "reuters.com",
    "theguardian.com", "bloomberg.com", "forbes.com", "wsj.com",
}

TECH_MEDIA = {
    "techcrunch.com", "wired.com", "theverge.com", "arstechnica.com",
    "zdnet.com", "cnet.com",
}

REFERENCE_SITES = {
    "wikipedia.org", "britannica.com", "investopedia.com",
}

MAJOR_BRANDS = {
    "google.com", "microsoft.com", "apple.com", "amazon.com",
    "github.com", "stackoverflow.com",
}

REPUTABLE_DOMAINS = NEWS_MEDIA | TECH_MEDIA | REFERENCE_SITES | MAJOR_BRANDS

# =============================================================================
# LOW / PROBLEMATIC
# =============================================================================

LINK_SHORTENERS = {
    "bit.ly", "tinyurl.com", "goo.gl", "t.co", "ow.ly", "is.gd", "buff.ly",
}

LOW_QUALITY_DOMAINS = LINK_SHORTENERS

# Simplified list; a real deployment should source this from a
# reputation API.
PROBLEMATIC_DOMAINS = {
    "naturalnews.com",
    "infowars.com",
    "beforeitsnews.com",
}


def normalize_domain(domain: Optional[str]) -> str:
    """Lower-case, trim and drop a leading 'www.'."""
    if not domain:
        return ""
    domain_lower = domain.lower().strip()
    if domain_lower.startswith("www."):
        domain_lower = domain_lower[4:]
    return domain_lower


def extract_domain(url: str) -> Optional[str]:
    """
    Extract the normalized hostname from an absolute or protocol-relative URL.

    Returns:
        Domain without 'www.', or None if the URL has no hostname
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        logger.debug(f"Unparsable URL skipped: {url}")
        return None
    if not hostname:
        return None
    return normalize_domain(hostname)


def matches_domain(domain: str, candidates: Iterable[str]) -> bool:
    """True if domain equals a candidate or is a subdomain of one."""
    for candidate in candidates:
        if domain == candidate or domain.endswith("." + candidate):
            return True
    return False


def is_authoritative_domain(domain: str) -> bool:
    """Authoritative by suffix (.gov, .ac.uk, ...) or by the curated list."""
    if any(domain.endswith(suffix) for suffix in AUTHORITATIVE_SUFFIXES):
        return True
    return matches_domain(domain, AUTHORITATIVE_DOMAINS)


def is_same_site(domain: Optional[str], site_domain: Optional[str]) -> bool:
    """True if domain belongs to site_domain (exact or subdomain)."""
    if not domain or not site_domain:
        return False
    return matches_domain(normalize_domain(domain), [normalize_domain(site_domain)])

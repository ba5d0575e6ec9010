"""
Keyword Intent Classification

Signal-word lists checked in strict priority order:
    navigational > transactional > commercial > informational

First match wins; keywords matching no list default to informational.
Signals are substring checks, so "app" also matches "apple".
"""

from enum import Enum
from typing import Dict, List

from ..utils.text import require_text


class SearchIntent(Enum):
    """Search intent classification."""
    TRANSACTIONAL = "transactional"
    COMMERCIAL = "commercial"
    INFORMATIONAL = "informational"
    NAVIGATIONAL = "navigational"


TRANSACTIONAL_SIGNALS = [
    "buy", "purchase", "order", "price", "pricing", "cost", "cheap", "affordable",
    "deal", "discount", "coupon", "sale", "shop", "store", "subscription",
]

COMMERCIAL_SIGNALS = [
    "best", "top", "review", "reviews", "comparison", "vs", "versus", "alternative",
    "alternatives", "compare", "rated", "recommended", "worth",
]

INFORMATIONAL_SIGNALS = [
    "how to", "what is", "what are", "why", "when", "where", "guide", "tutorial",
    "tips", "learn", "example", "examples", "definition", "meaning", "understand",
]

NAVIGATIONAL_SIGNALS = [
    "login", "sign in", "download", "website", "official", "app", "account",
]

# Priority order matters
INTENT_SIGNALS: List = [
    (SearchIntent.NAVIGATIONAL, NAVIGATIONAL_SIGNALS),
    (SearchIntent.TRANSACTIONAL, TRANSACTIONAL_SIGNALS),
    (SearchIntent.COMMERCIAL, COMMERCIAL_SIGNALS),
    (SearchIntent.INFORMATIONAL, INFORMATIONAL_SIGNALS),
]


def classify_intent(keyword: str) -> SearchIntent:
    """
    Classify keyword intent based on signal words.

    Args:
        keyword: Keyword phrase

    Returns:
        SearchIntent (INFORMATIONAL when nothing matches)
    """
    lower = require_text(keyword, "keyword").lower()

    for intent, signals in INTENT_SIGNALS:
        if any(signal in lower for signal in signals):
            return intent

    return SearchIntent.INFORMATIONAL


def empty_intent_counts() -> Dict[str, int]:
    """Zeroed count per intent, in enum order."""
    return {intent.value: 0 for intent in SearchIntent}

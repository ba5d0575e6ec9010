"""
Text Helpers

Tag stripping, word counting and rounding shared by every scorer.
"""

import math
import re
from typing import Any, List

from ..exceptions import InvalidInputError

TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")


def require_text(value: Any, name: str = "html") -> str:
    """Return value unchanged if it is a str, otherwise raise InvalidInputError."""
    if not isinstance(value, str):
        raise InvalidInputError(name, value)
    return value


def strip_tags(html: str, replacement: str = " ") -> str:
    """Remove HTML tags, replacing each with `replacement`."""
    return TAG_PATTERN.sub(replacement, html)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return WHITESPACE_PATTERN.sub(" ", text)


def plain_text(html: str) -> str:
    """Tags replaced by spaces and whitespace collapsed (not trimmed)."""
    return collapse_whitespace(strip_tags(html))


def count_words(html: str) -> int:
    """Count whitespace-separated words after stripping tags."""
    return len(strip_tags(html).split())


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence terminators. Fragments are not trimmed."""
    return SENTENCE_SPLIT_PATTERN.split(text)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going up.

    Python's round() uses banker's rounding (round(34.5) == 34); scores
    here round 34.5 to 35.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))

"""
Topic Normalization and Hashing

simple_hash is a 32-bit rolling hash, not a cryptographic one:

    h = (h << 5) - h + code_unit     (wrapped to signed 32-bit)
    result = base36(abs(h))

It runs over UTF-16 code units so hashes match records written by
earlier releases of the publishing pipeline. Lone surrogates are hashed
as their own code unit.
"""

import re
from typing import Set

from ..utils.text import require_text

WHITESPACE_PATTERN = re.compile(r"\s+")
NON_ALPHANUMERIC_PATTERN = re.compile(r"[^a-z0-9\s]")
TOPIC_STOP_WORDS_PATTERN = re.compile(r"\b(the|a|an|and|or|but|in|on|at|to|for|of|with|by)\b")

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def simple_hash(text: str) -> str:
    """Hash a string after lower-casing, trimming and collapsing whitespace."""
    normalized = WHITESPACE_PATTERN.sub(" ", require_text(text, "text").lower().strip())
    encoded = normalized.encode("utf-16-le", "surrogatepass")

    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + code_unit)

    return _to_base36(abs(h))


def normalize_topic(topic: str) -> str:
    """
    Normalize a topic for comparison.

    Lower-cases, strips punctuation, collapses whitespace and removes
    common stop words. Removing a stop word can leave a double space;
    that is kept so topic hashes stay stable.
    """
    text = require_text(topic, "topic").lower().strip()
    text = NON_ALPHANUMERIC_PATTERN.sub("", text)
    text = WHITESPACE_PATTERN.sub(" ", text)
    text = TOPIC_STOP_WORDS_PATTERN.sub("", text)
    return text.strip()


def topic_words(topic: str) -> Set[str]:
    return set(normalize_topic(topic).split())


def similarity_score(topic1: str, topic2: str) -> float:
    """
    Jaccard similarity of two topics' normalized word sets (0.0-1.0).

    Identical normalized topics score 1.0; an empty union scores 0.0.
    """
    if normalize_topic(topic1) == normalize_topic(topic2):
        return 1.0

    words1 = topic_words(topic1)
    words2 = topic_words(topic2)

    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)

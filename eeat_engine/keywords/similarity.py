"""
Keyword Similarity

Two primitives:
    calculate_similarity  Jaccard index over whitespace tokens
    semantic_similarity   key-term overlap, substring-inclusive,
                          normalized by the longer term list

semantic_similarity drives every clustering decision and falls back to
calculate_similarity when either phrase has no key terms.
"""

from typing import List

STOP_WORDS = frozenset([
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "can", "this", "that",
])

MIN_TERM_LENGTH = 3


def calculate_similarity(keyword1: str, keyword2: str) -> float:
    """Jaccard index of the two word sets (0.0 when both are empty)."""
    words1 = set(keyword1.lower().split())
    words2 = set(keyword2.lower().split())

    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def extract_key_terms(keyword: str) -> List[str]:
    """Lower-cased words of 3+ characters that are not stop words."""
    return [
        w for w in keyword.lower().split()
        if len(w) >= MIN_TERM_LENGTH and w not in STOP_WORDS
    ]


def semantic_similarity(keyword1: str, keyword2: str) -> float:
    """
    Key-term similarity between two keyword phrases.

    A term of the first phrase matches when it equals, contains, or is
    contained in any term of the second. "shoe" and "shoes" match.

    Returns:
        Matching terms / max(len(terms1), len(terms2)), 0.0-1.0
    """
    terms1 = extract_key_terms(keyword1)
    terms2 = extract_key_terms(keyword2)

    if not terms1 or not terms2:
        return calculate_similarity(keyword1, keyword2)

    matches = [
        t1 for t1 in terms1
        if any(t1 == t2 or t2 in t1 or t1 in t2 for t2 in terms2)
    ]

    return len(matches) / max(len(terms1), len(terms2))

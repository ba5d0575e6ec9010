"""
Experience Signal Detector

Detects first-hand experience signals for the Experience dimension of
E-E-A-T scoring:

1. First-hand phrases - "I tested", "In my experience", "After using"
2. Personal anecdotes - story openers, "For example, I..."
3. Original insights - "Contrary to popular belief", "Here's what nobody tells you"
4. Testing / experience verbs - "(I|we) (have )?VERB"

Formula:
    Original_Content   = min(100, 50 + Insights × 10 + Story_Anecdotes × 5)
    Author_Perspective = min(100, (Phrases × 5 + Testing × 8 + Experience_Verbs × 3) × 2)
    Unique_Insights    = min(100, Insights × 20)

    Experience_Score = Original_Content × 0.3 + Author_Perspective × 0.5 + Unique_Insights × 0.2
"""

import logging
import re
from typing import List

from .models import ExperienceScore, ExperienceSignals, FirstHandPhrase, PersonalAnecdote
from ..utils.text import plain_text, require_text, round_half_up, split_sentences

logger = logging.getLogger(__name__)


# ============================================================================
# PATTERN DEFINITIONS
# ============================================================================

FIRST_HAND_PATTERNS = [
    # Direct experience
    r"\b(I|we)\s+(tested|tried|used|experimented|examined|evaluated|reviewed)",
    r"\b(I|we)\s+(found|discovered|noticed|observed|realized|learned)",
    r"\b(I|we)\s+(recommend|suggest|advise|personally prefer)",
    r"\bIn my (experience|opinion|view|testing)",
    r"\bFrom my (experience|perspective|point of view)",
    r"\bHaving (used|tested|worked with|spent time)",
    r"\bAfter (using|testing|trying|evaluating)",
    r"\bWhen I (first|actually|personally)",

    # Results and outcomes
    r"\b(I|we)\s+(saw|achieved|got|experienced)\s+\w+\s+results",
    r"\bThis worked (well|great|perfectly) for (me|us)",
    r"\bIn my case",

    # Comparisons from experience
    r"\bCompared to (other|previous).*(I|we) (used|tested)",
    r"\bUnlike (other|some).*I've (used|tried)",
]

ANECDOTE_PATTERNS = [
    # Story indicators
    r"\b(Let me (share|tell you)|Here's what happened)",
    r"\b(One time|Once|Recently),?\s+(I|we)",
    r"\b(A few (months|weeks|years) ago)",
    r"\bI remember when",

    # Example sharing
    r"\bFor example,?\s+(I|we|in my)",
    r"\bHere's an example from my",
    r"\bTo illustrate,?\s+(I|we)",
]

INSIGHT_PATTERNS = [
    r"What (I|we) (found|discovered) was",
    r"The surprising thing (is|was)",
    r"Contrary to (popular belief|what you might think)",
    r"Most people don't (know|realize)",
    r"The (real|actual|hidden) (secret|truth|reason)",
    r"Here's what (nobody|few people) (tells|tell) you",
]

TESTING_VERBS = [
    "tested", "tried", "evaluated", "reviewed", "examined",
    "experimented", "measured", "benchmarked", "compared", "analyzed",
]

EXPERIENCE_VERBS = [
    "found", "discovered", "noticed", "observed", "realized",
    "learned", "experienced", "witnessed", "encountered", "saw",
]

_FIRST_HAND = [re.compile(p, re.IGNORECASE) for p in FIRST_HAND_PATTERNS]
_ANECDOTES = [re.compile(p, re.IGNORECASE) for p in ANECDOTE_PATTERNS]
_INSIGHTS = [re.compile(p, re.IGNORECASE) for p in INSIGHT_PATTERNS]


def _verb_patterns(verbs: List[str]) -> List[re.Pattern]:
    return [re.compile(rf"\b(I|we)\s+(have\s+)?{verb}\b", re.IGNORECASE) for verb in verbs]


_TESTING = _verb_patterns(TESTING_VERBS)
_EXPERIENCE = _verb_patterns(EXPERIENCE_VERBS)

_EXAMPLE_HINT = re.compile(r"example|illustrate", re.IGNORECASE)
_COMPARISON_HINT = re.compile(r"compared|unlike|versus", re.IGNORECASE)
_RESULT_HINT = re.compile(r"result|outcome|achieved", re.IGNORECASE)

MIN_ANECDOTE_LENGTH = 20
MAX_INSIGHTS = 5

# Recommendation thresholds
MIN_FIRST_HAND_PHRASES = 3


# ============================================================================
# DETECTION
# ============================================================================

def _extract_first_hand_phrases(text: str) -> List[FirstHandPhrase]:
    """One match per sentence, first matching pattern wins."""
    phrases = []
    for index, raw_line in enumerate(split_sentences(text)):
        line = raw_line.strip()
        for pattern in _FIRST_HAND:
            match = pattern.search(line)
            if match:
                phrases.append(FirstHandPhrase(
                    phrase=match.group(0),
                    context=line[:150],
                    line_number=index + 1,
                ))
                break
    return phrases


def _classify_anecdote(sentence: str) -> str:
    anecdote_type = "story"
    if _EXAMPLE_HINT.search(sentence):
        anecdote_type = "example"
    if _COMPARISON_HINT.search(sentence):
        anecdote_type = "comparison"
    if _RESULT_HINT.search(sentence):
        anecdote_type = "result"
    return anecdote_type


def _extract_personal_anecdotes(text: str) -> List[PersonalAnecdote]:
    anecdotes = []
    for raw_sentence in split_sentences(text):
        sentence = raw_sentence.strip()
        if len(sentence) < MIN_ANECDOTE_LENGTH:
            continue
        if any(pattern.search(sentence) for pattern in _ANECDOTES):
            anecdotes.append(PersonalAnecdote(
                text=sentence[:200],
                type=_classify_anecdote(sentence),
            ))
    return anecdotes


def _count_verb_mentions(text: str, patterns: List[re.Pattern]) -> int:
    lower_text = text.lower()
    return sum(len(pattern.findall(lower_text)) for pattern in patterns)


def _detect_original_insights(text: str) -> List[str]:
    """Simplified: a full version would compare against competing articles."""
    insights = []
    for sentence in split_sentences(text):
        if any(pattern.search(sentence) for pattern in _INSIGHTS):
            insights.append(sentence.strip()[:150])
    return insights[:MAX_INSIGHTS]


def detect_experience_signals(html: str) -> ExperienceSignals:
    """
    Detect all experience signals in content.

    Args:
        html: Article HTML (or plain text)

    Returns:
        ExperienceSignals snapshot for this document
    """
    require_text(html, "html")
    text = plain_text(html)

    return ExperienceSignals(
        first_hand_phrases=_extract_first_hand_phrases(text),
        personal_anecdotes=_extract_personal_anecdotes(text),
        original_insights=_detect_original_insights(text),
        testing_mentions=_count_verb_mentions(text, _TESTING),
        experience_verbs=_count_verb_mentions(text, _EXPERIENCE),
    )


# ============================================================================
# SCORING
# ============================================================================

def score_experience(html: str, word_count: int = 0) -> ExperienceScore:
    """
    Score the Experience dimension.

    Args:
        html: Article HTML
        word_count: Document word count. Experience signals are absolute
            counts, so it does not change the score.

    Returns:
        ExperienceScore with sub-metrics, signals and recommendations
    """
    signals = detect_experience_signals(html)
    insights = len(signals.original_insights)
    stories = sum(1 for a in signals.personal_anecdotes if a.type == "story")

    # Estimated from experience signals; a plagiarism check would sharpen it
    original_content = min(100, 50 + insights * 10 + stories * 5)

    perspective_signals = (
        len(signals.first_hand_phrases) * 5
        + signals.testing_mentions * 8
        + signals.experience_verbs * 3
    )
    author_perspective = min(100, perspective_signals * 2)

    unique_insights = min(100, insights * 20)

    score = round_half_up(
        original_content * 0.3
        + author_perspective * 0.5
        + unique_insights * 0.2
    )

    recommendations = []
    if len(signals.first_hand_phrases) < MIN_FIRST_HAND_PHRASES:
        recommendations.append(
            'Add more first-hand experience phrases like "I tested" or "In my experience"'
        )
    if not signals.personal_anecdotes:
        recommendations.append("Include a personal story or example from your experience")
    if signals.testing_mentions == 0:
        recommendations.append("Mention actual testing or evaluation you performed")
    if insights == 0:
        recommendations.append("Share unique insights or discoveries not commonly known")

    logger.debug(
        f"Experience score {score} ({len(signals.first_hand_phrases)} phrases, "
        f"{signals.testing_mentions} testing mentions, {insights} insights, "
        f"{word_count} words)"
    )

    return ExperienceScore(
        score=score,
        original_content=original_content,
        author_perspective=author_perspective,
        unique_insights=unique_insights,
        signals=signals,
        recommendations=recommendations,
    )

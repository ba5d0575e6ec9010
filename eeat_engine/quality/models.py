"""
Content Quality Data Models

Result types for citation analysis and the four E-E-A-T dimensions
(Experience, Expertise, Authoritativeness, Trustworthiness).

Every type converts to JSON-serializable plain data via to_dict().
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .helpers import PASS_SCORE
from ..exceptions import InvalidInputError


def to_plain(value: Any) -> Any:
    """Recursively convert dataclasses, enums and datetimes to plain data."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


class Serializable:
    """Mixin adding to_dict() to dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return to_plain(self)


# ============================================================================
# SOURCES & CITATIONS
# ============================================================================

class SourceQualityTier(Enum):
    """Quality tier for source domains."""
    AUTHORITATIVE = "authoritative"  # .gov, .edu, major institutions
    REPUTABLE = "reputable"          # Major publications, industry sites
    STANDARD = "standard"            # Regular websites
    LOW = "low"                      # Shorteners, unknown origin
    PROBLEMATIC = "problematic"      # Known misinformation sources


@dataclass(frozen=True)
class SourceCitation(Serializable):
    """One reference extracted from content. Never mutated after creation."""
    id: str
    text: str
    context: str
    position: str  # "intro", "body", "conclusion"
    verified: bool
    url: Optional[str] = None
    domain: Optional[str] = None
    anchor_text: Optional[str] = None
    quality_tier: Optional[SourceQualityTier] = None
    authority_score: Optional[int] = None  # 0-100
    verification_error: Optional[str] = None


@dataclass
class CitationAnalysis(Serializable):
    """Aggregate over a citation set."""
    total: int
    verified: int
    failed: int
    by_tier: Dict[str, int]
    density: float            # Citations per 1000 words
    average_authority: int
    has_external_links: bool
    has_internal_links: bool


# ============================================================================
# EXPERIENCE
# ============================================================================

@dataclass
class FirstHandPhrase(Serializable):
    phrase: str
    context: str
    line_number: int


@dataclass
class PersonalAnecdote(Serializable):
    text: str
    type: str  # "story", "example", "comparison", "result"


@dataclass
class ExperienceSignals(Serializable):
    """First-hand experience signals detected in content."""
    first_hand_phrases: List[FirstHandPhrase] = field(default_factory=list)
    personal_anecdotes: List[PersonalAnecdote] = field(default_factory=list)
    original_insights: List[str] = field(default_factory=list)
    testing_mentions: int = 0
    experience_verbs: int = 0


@dataclass
class ExperienceScore(Serializable):
    score: int
    original_content: int
    author_perspective: int
    unique_insights: int
    signals: ExperienceSignals
    recommendations: List[str] = field(default_factory=list)


# ============================================================================
# EXPERTISE
# ============================================================================

@dataclass
class ExpertiseSignals(Serializable):
    technical_terms: List[str] = field(default_factory=list)
    credential_mentions: List[str] = field(default_factory=list)
    accurate_statements: int = 0    # Needs fact-check integration
    inaccurate_statements: int = 0  # Needs fact-check integration
    complexity_level: str = "intermediate"  # "basic", "intermediate", "advanced"


@dataclass
class ExpertiseScore(Serializable):
    score: int
    source_quality: int
    citation_density: float
    credibility_signals: int
    technical_accuracy: int
    signals: ExpertiseSignals
    recommendations: List[str] = field(default_factory=list)


# ============================================================================
# AUTHORITATIVENESS
# ============================================================================

@dataclass
class AuthorProfile(Serializable):
    """Author data supplied by the caller."""
    credentials: List[str] = field(default_factory=list)
    bio: str = ""
    expertise: List[str] = field(default_factory=list)
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthorProfile":
        """Build a profile from plain data; missing keys take the defaults."""
        return cls(
            credentials=list(data.get("credentials") or []),
            bio=data.get("bio") or "",
            expertise=list(data.get("expertise") or []),
            name=data.get("name"),
        )


AuthorInput = Union[AuthorProfile, Mapping[str, Any]]


def coerce_author(author: Optional[AuthorInput]) -> Optional[AuthorProfile]:
    """
    Accept an AuthorProfile, a plain mapping with the same keys, or None.

    Raises:
        InvalidInputError: For any other type
    """
    if author is None or isinstance(author, AuthorProfile):
        return author
    if isinstance(author, Mapping):
        return AuthorProfile.from_dict(author)
    raise InvalidInputError("author", author, "an AuthorProfile or a mapping")


@dataclass
class AuthoritySignals(Serializable):
    author_credentials_present: bool = False
    author_bio_present: bool = False
    author_schema_present: bool = False
    external_mentions: int = 0   # Requires external API
    backlinks_quality: int = 0   # Requires external API


@dataclass
class AuthoritativenessScore(Serializable):
    score: int
    domain_authority: int
    topical_authority: int
    backlinks_quality: int
    signals: AuthoritySignals
    recommendations: List[str] = field(default_factory=list)


# ============================================================================
# TRUSTWORTHINESS
# ============================================================================

@dataclass
class TrustSignals(Serializable):
    has_disclaimer: bool = False
    has_affiliate_disclosure: bool = False
    has_last_updated_date: bool = False
    has_author_attribution: bool = False
    has_contact_info: bool = False
    has_privacy_policy: bool = False
    transparent_affiliate: bool = False
    no_misleading_claims: bool = True  # Needs fact-check to verify


@dataclass
class TrustworthinessScore(Serializable):
    score: int
    fact_check_score: int
    disclaimer_presence: bool
    date_relevance: int
    transparent_authorship: bool
    signals: TrustSignals
    recommendations: List[str] = field(default_factory=list)


# ============================================================================
# COMBINED
# ============================================================================

@dataclass
class EEATScore(Serializable):
    """Complete E-E-A-T score for one piece of content."""
    overall: int
    grade: str  # "A" - "F"

    experience: ExperienceScore
    expertise: ExpertiseScore
    authoritativeness: AuthoritativenessScore
    trustworthiness: TrustworthinessScore

    strengths: List[str]
    weaknesses: List[str]
    critical_issues: List[str]
    recommendations: List[str]

    analyzed_at: datetime
    word_count: int
    citation_analysis: CitationAnalysis

    pre_penalty_overall: int
    is_ymyl: bool = False

    @property
    def passed(self) -> bool:
        return self.overall >= PASS_SCORE


@dataclass(frozen=True)
class QuickCheckResult(Serializable):
    score: int
    grade: str
    passed: bool

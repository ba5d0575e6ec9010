"""
E-E-A-T Helper Functions and Constants

Contains dimension weights, grade thresholds, placeholder scores and the
ExternalSignals seam used across all dimension scorers.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Mapping, Optional

from ..exceptions import WeightConfigurationError
from ..utils.config import Settings

logger = logging.getLogger(__name__)


# ============================================================================
# PLACEHOLDER SCORES (stand-ins for unbuilt external integrations)
# ============================================================================

DEFAULT_TECHNICAL_ACCURACY = 70     # Fact-check API not wired in
DEFAULT_BACKLINKS_QUALITY = 50      # Backlink API not wired in
DEFAULT_FACT_CHECK_SCORE = 75       # Fact-check API not wired in
DEFAULT_SITE_DOMAIN_AUTHORITY = 30  # Used when the caller has no DA figure
BASE_TOPICAL_AUTHORITY = 40


# ============================================================================
# GRADING
# ============================================================================

GRADE_THRESHOLDS = [
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
]

PASS_SCORE = 60
STRENGTH_THRESHOLD = 70
WEAKNESS_THRESHOLD = 40

# YMYL ("Your Money Your Life") handling
YMYL_PENALTY_BELOW = 80
YMYL_PENALTY_FACTOR = 0.9
YMYL_RISK_BELOW = 70

MIN_CITATIONS_BEFORE_CRITICAL = 2
MAX_RECOMMENDATIONS = 10


def get_grade(score: int) -> str:
    """
    Map an overall score to a letter grade.

    Args:
        score: Overall E-E-A-T score (0-100)

    Returns:
        "A" (>=90), "B" (>=80), "C" (>=70), "D" (>=60) or "F"
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


# ============================================================================
# WEIGHTS
# ============================================================================

WEIGHT_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class EEATWeights:
    """Weights for the four E-E-A-T dimensions. Expected to sum to 1.0."""
    experience: float = 0.25
    expertise: float = 0.30
    authoritativeness: float = 0.20
    trustworthiness: float = 0.25

    @classmethod
    def from_settings(cls, settings: Settings) -> "EEATWeights":
        return cls(
            experience=settings.WEIGHT_EXPERIENCE,
            expertise=settings.WEIGHT_EXPERTISE,
            authoritativeness=settings.WEIGHT_AUTHORITATIVENESS,
            trustworthiness=settings.WEIGHT_TRUSTWORTHINESS,
        )

    def merged(self, overrides: Optional[Mapping[str, float]]) -> "EEATWeights":
        """
        Return a copy with partial overrides applied.

        Raises:
            WeightConfigurationError: If an override names an unknown dimension
        """
        if not overrides:
            return self
        values = asdict(self)
        unknown = set(overrides) - set(values)
        if unknown:
            raise WeightConfigurationError(
                f"Unknown E-E-A-T weight(s): {', '.join(sorted(unknown))}"
            )
        values.update(overrides)
        return EEATWeights(**values)

    @property
    def total(self) -> float:
        return (
            self.experience
            + self.expertise
            + self.authoritativeness
            + self.trustworthiness
        )

    def validate(self, strict: bool = False) -> None:
        """
        Check the weights sum to 1.0.

        A drifting sum is logged and tolerated unless strict is set, in
        which case it raises WeightConfigurationError.
        """
        if abs(self.total - 1.0) <= WEIGHT_SUM_TOLERANCE:
            return
        message = f"E-E-A-T weights sum to {self.total:.4f}, expected 1.0"
        if strict:
            raise WeightConfigurationError(message)
        logger.warning(message)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT_EEAT_WEIGHTS = EEATWeights()


# ============================================================================
# EXTERNAL ENRICHMENT SEAM
# ============================================================================

@dataclass(frozen=True)
class ExternalSignals:
    """
    Scores normally supplied by external services.

    Until a fact-check or backlink integration exists, the defaults are
    the fixed placeholders above. An integration builds an instance with
    real values and passes it to calculate_eeat_score().
    """
    technical_accuracy: int = DEFAULT_TECHNICAL_ACCURACY
    backlinks_quality: int = DEFAULT_BACKLINKS_QUALITY
    fact_check_score: int = DEFAULT_FACT_CHECK_SCORE
    fallback_domain_authority: int = DEFAULT_SITE_DOMAIN_AUTHORITY

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExternalSignals":
        return cls(
            technical_accuracy=settings.TECHNICAL_ACCURACY_DEFAULT,
            backlinks_quality=settings.BACKLINKS_QUALITY_DEFAULT,
            fact_check_score=settings.FACT_CHECK_SCORE_DEFAULT,
            fallback_domain_authority=settings.SITE_DOMAIN_AUTHORITY_DEFAULT,
        )


DEFAULT_EXTERNAL_SIGNALS = ExternalSignals()

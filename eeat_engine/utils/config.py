"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.

Scoring functions never read these settings implicitly. Callers turn
them into explicit arguments via EEATWeights.from_settings(),
ExternalSignals.from_settings(), ReviewPolicy.from_settings() and
DedupThresholds.from_settings().
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # E-E-A-T dimension weights (must sum to 1.0)
    WEIGHT_EXPERIENCE: float = 0.25
    WEIGHT_EXPERTISE: float = 0.30
    WEIGHT_AUTHORITATIVENESS: float = 0.20
    WEIGHT_TRUSTWORTHINESS: float = 0.25
    STRICT_WEIGHTS: bool = False  # Raise instead of warn on a bad weight sum

    # Placeholder scores until a fact-check / backlink integration exists
    TECHNICAL_ACCURACY_DEFAULT: int = 70
    BACKLINKS_QUALITY_DEFAULT: int = 50
    FACT_CHECK_SCORE_DEFAULT: int = 75
    SITE_DOMAIN_AUTHORITY_DEFAULT: int = 30

    # Quality gate thresholds
    MIN_EEAT_SCORE: int = 60
    YMYL_MIN_SCORE: int = 80
    MIN_EXPERIENCE_SCORE: int = 50
    MIN_EXPERTISE_SCORE: int = 60
    MIN_CITATION_COUNT: int = 3
    AUTO_APPROVE_ABOVE_SCORE: int = 85
    ENABLE_AUTO_APPROVAL: bool = True

    # Deduplication
    DEDUP_CAMPAIGN_THRESHOLD: float = 0.8
    DEDUP_GLOBAL_THRESHOLD: float = 0.9

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()

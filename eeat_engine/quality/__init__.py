"""
Content Quality

E-E-A-T scoring for generated articles.

Components:
- Citations: extraction, domain tiers, citation analysis
- Experience: first-hand experience signal detection
- Dimensions: Expertise, Authoritativeness, Trustworthiness scorers
- EEAT: weighted aggregation, YMYL penalty, grading
- Claims: verifiable claim extraction and offline fact-check scoring
- Gates: publishing gates and review routing
"""

from .models import (
    SourceQualityTier,
    SourceCitation,
    CitationAnalysis,
    ExperienceSignals,
    ExperienceScore,
    ExpertiseSignals,
    ExpertiseScore,
    AuthorProfile,
    AuthorInput,
    AuthoritySignals,
    AuthoritativenessScore,
    TrustSignals,
    TrustworthinessScore,
    EEATScore,
    QuickCheckResult,
)
from .helpers import EEATWeights, ExternalSignals, get_grade
from .citations import (
    extract_citations,
    classify_domain,
    calculate_domain_authority,
    analyze_citations,
    validate_citations,
    get_citation_recommendations,
)
from .experience import detect_experience_signals, score_experience
from .dimensions import (
    score_expertise,
    score_authoritativeness,
    score_trustworthiness,
    detect_trust_signals,
)
from .eeat import calculate_eeat_score, quick_eeat_check
from .claims import (
    ClaimStatus,
    ExtractedClaim,
    FactCheckSummary,
    QuickFactCheck,
    extract_claims,
    quick_fact_check_score,
    status_from_ratings,
    summarize_fact_checks,
)
from .gates import (
    GateStatus,
    QualityGate,
    QualityResult,
    ReviewPolicy,
    ContentGateResult,
    is_ymyl_topic,
    run_content_gate,
)

__all__ = [
    # Models
    "SourceQualityTier",
    "SourceCitation",
    "CitationAnalysis",
    "ExperienceSignals",
    "ExperienceScore",
    "ExpertiseSignals",
    "ExpertiseScore",
    "AuthorProfile",
    "AuthorInput",
    "AuthoritySignals",
    "AuthoritativenessScore",
    "TrustSignals",
    "TrustworthinessScore",
    "EEATScore",
    "QuickCheckResult",
    # Weights & enrichment
    "EEATWeights",
    "ExternalSignals",
    "get_grade",
    # Citations
    "extract_citations",
    "classify_domain",
    "calculate_domain_authority",
    "analyze_citations",
    "validate_citations",
    "get_citation_recommendations",
    # Dimension scorers
    "detect_experience_signals",
    "score_experience",
    "score_expertise",
    "score_authoritativeness",
    "score_trustworthiness",
    "detect_trust_signals",
    # Aggregation
    "calculate_eeat_score",
    "quick_eeat_check",
    # Claims
    "ClaimStatus",
    "ExtractedClaim",
    "FactCheckSummary",
    "QuickFactCheck",
    "extract_claims",
    "quick_fact_check_score",
    "status_from_ratings",
    "summarize_fact_checks",
    # Gates
    "GateStatus",
    "QualityGate",
    "QualityResult",
    "ReviewPolicy",
    "ContentGateResult",
    "is_ymyl_topic",
    "run_content_gate",
]

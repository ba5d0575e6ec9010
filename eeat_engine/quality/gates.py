"""
Content Quality Gates

Routes a scored article to auto-approval or human review.

Required gates (failure blocks publishing):
    eeat_minimum        overall >= 60 (80 for YMYL topics)
    experience_minimum  experience >= 50
    expertise_minimum   expertise >= 60
    citation_count      citations >= 3

Warning gates (reported, never blocking):
    source_quality      no citations from problematic domains
    citation_validation every citation carries a URL
    trust_signals       trustworthiness >= 60

Outcome:
    passed         no required gate failed
    auto_approved  passed, auto-approval enabled, overall >= 85,
                   not a YMYL topic needing manual review, citation
                   requirement met, and review not forced
    requires_review otherwise
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .eeat import calculate_eeat_score
from .models import AuthorInput, EEATScore, Serializable, SourceQualityTier
from ..utils.config import Settings

logger = logging.getLogger(__name__)

CheckResult = Tuple[float, str, Dict[str, Any]]

DEFAULT_YMYL_TOPICS = (
    "health", "medical", "medicine", "fitness", "nutrition", "diet",
    "finance", "investing", "insurance", "tax", "legal", "law",
)

TRUST_WARNING_THRESHOLD = 60


class GateStatus(Enum):
    """Quality gate status."""
    PASSED = "passed"
    FAILED = "failed"
    WARNING = "warning"
    SKIPPED = "skipped"


@dataclass
class QualityResult:
    """Result of a quality gate check."""
    gate_name: str
    status: GateStatus
    score: Optional[float] = None
    threshold: Optional[float] = None
    message: str = ""
    details: Dict = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "gate_name": self.gate_name,
            "status": self.status.value,
            "score": self.score,
            "threshold": self.threshold,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class QualityGate:
    """Definition of a quality gate."""
    name: str
    description: str
    threshold: float
    required: bool = True  # If True, failure blocks publishing
    check_fn: Optional[Callable[[EEATScore, Dict], CheckResult]] = None

    def check(self, data: EEATScore, context: Optional[Dict] = None) -> QualityResult:
        """
        Run the quality gate check.

        Args:
            data: E-E-A-T score to validate
            context: Additional context (policy, topic)

        Returns:
            QualityResult with pass/fail status
        """
        if not self.check_fn:
            return QualityResult(
                gate_name=self.name,
                status=GateStatus.SKIPPED,
                message="No check function defined",
            )

        score, message, details = self.check_fn(data, context or {})

        status = GateStatus.PASSED if score >= self.threshold else GateStatus.FAILED
        if not self.required and status == GateStatus.FAILED:
            status = GateStatus.WARNING

        return QualityResult(
            gate_name=self.name,
            status=status,
            score=score,
            threshold=self.threshold,
            message=message,
            details=details,
        )


# ============================================================================
# REVIEW POLICY
# ============================================================================

@dataclass(frozen=True)
class ReviewPolicy:
    """Thresholds deciding between auto-approval and human review."""
    min_eeat_score: int = 60
    min_experience_score: int = 50
    min_expertise_score: int = 60
    min_citation_count: int = 3

    enable_auto_approval: bool = True
    auto_approve_above_score: int = 85
    auto_approve_requires_citations: bool = True

    ymyl_min_score: int = 80
    ymyl_requires_manual_review: bool = True
    ymyl_topics: Tuple[str, ...] = DEFAULT_YMYL_TOPICS

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReviewPolicy":
        return cls(
            min_eeat_score=settings.MIN_EEAT_SCORE,
            min_experience_score=settings.MIN_EXPERIENCE_SCORE,
            min_expertise_score=settings.MIN_EXPERTISE_SCORE,
            min_citation_count=settings.MIN_CITATION_COUNT,
            enable_auto_approval=settings.ENABLE_AUTO_APPROVAL,
            auto_approve_above_score=settings.AUTO_APPROVE_ABOVE_SCORE,
            ymyl_min_score=settings.YMYL_MIN_SCORE,
        )


DEFAULT_REVIEW_POLICY = ReviewPolicy()


def is_ymyl_topic(topic: str, policy: Optional[ReviewPolicy] = None) -> bool:
    """True if the topic mentions any of the policy's YMYL categories."""
    policy = policy or DEFAULT_REVIEW_POLICY
    topic_lower = topic.lower()
    return any(t in topic_lower for t in policy.ymyl_topics)


# ============================================================================
# GATE CHECK FUNCTIONS
# ============================================================================

def _check_eeat_minimum(data: EEATScore, context: Dict) -> CheckResult:
    minimum = context["min_score"]
    return data.overall, f"E-E-A-T score {data.overall}, minimum {minimum}", {
        "is_ymyl": data.is_ymyl,
        "grade": data.grade,
    }


def _check_experience(data: EEATScore, context: Dict) -> CheckResult:
    score = data.experience.score
    return score, f"Experience score {score}, minimum {context['policy'].min_experience_score}", {}


def _check_expertise(data: EEATScore, context: Dict) -> CheckResult:
    score = data.expertise.score
    return score, f"Expertise score {score}, minimum {context['policy'].min_expertise_score}", {}


def _check_citation_count(data: EEATScore, context: Dict) -> CheckResult:
    total = data.citation_analysis.total
    required = context["policy"].min_citation_count
    return total, f"{total} citations, minimum {required} required", {
        "by_tier": dict(data.citation_analysis.by_tier),
    }


def _check_source_quality(data: EEATScore, context: Dict) -> CheckResult:
    analysis = data.citation_analysis
    problematic = analysis.by_tier.get(SourceQualityTier.PROBLEMATIC.value, 0)
    clean_share = 1 - problematic / analysis.total if analysis.total > 0 else 1.0
    return clean_share, f"{problematic} citations from problematic sources", {
        "problematic": problematic,
    }


def _check_citation_validation(data: EEATScore, context: Dict) -> CheckResult:
    analysis = data.citation_analysis
    verified_share = analysis.verified / analysis.total if analysis.total > 0 else 1.0
    return verified_share, f"{analysis.failed} citations could not be validated", {
        "failed": analysis.failed,
    }


def _check_trust(data: EEATScore, context: Dict) -> CheckResult:
    score = data.trustworthiness.score
    message = f"Trust score {score}"
    if score < TRUST_WARNING_THRESHOLD:
        message = "Consider adding more trust signals (disclosures, dates, attribution)"
    return score, message, {}


def build_content_gates(policy: ReviewPolicy, is_ymyl: bool) -> List[QualityGate]:
    """Gate list for one run; the E-E-A-T minimum depends on YMYL status."""
    min_score = policy.ymyl_min_score if is_ymyl else policy.min_eeat_score
    return [
        QualityGate(
            name="eeat_minimum",
            description="Overall E-E-A-T score meets the publishing minimum",
            threshold=min_score,
            check_fn=_check_eeat_minimum,
        ),
        QualityGate(
            name="experience_minimum",
            description="Content shows first-hand experience",
            threshold=policy.min_experience_score,
            check_fn=_check_experience,
        ),
        QualityGate(
            name="expertise_minimum",
            description="Content demonstrates expertise and sourcing",
            threshold=policy.min_expertise_score,
            check_fn=_check_expertise,
        ),
        QualityGate(
            name="citation_count",
            description="Enough citations back the content",
            threshold=policy.min_citation_count,
            check_fn=_check_citation_count,
        ),
        QualityGate(
            name="source_quality",
            description="No citations from problematic domains",
            threshold=1.0,
            required=False,
            check_fn=_check_source_quality,
        ),
        QualityGate(
            name="citation_validation",
            description="Every citation can be validated",
            threshold=1.0,
            required=False,
            check_fn=_check_citation_validation,
        ),
        QualityGate(
            name="trust_signals",
            description="Trust signals are present",
            threshold=TRUST_WARNING_THRESHOLD,
            required=False,
            check_fn=_check_trust,
        ),
    ]


# ============================================================================
# CONTENT GATE
# ============================================================================

@dataclass
class ContentGateResult(Serializable):
    """Outcome of running an article through the content gates."""
    passed: bool
    auto_approved: bool
    requires_review: bool
    is_ymyl: bool
    scores: Dict[str, int]
    issues: List[str]
    warnings: List[str]
    gate_results: List[QualityResult]
    eeat: EEATScore


def run_content_gate(
    html: str,
    topic: str,
    policy: Optional[ReviewPolicy] = None,
    author: Optional[AuthorInput] = None,
    site_da_score: Optional[float] = None,
    force_manual_review: bool = False,
    analyzed_at: Optional[datetime] = None,
) -> ContentGateResult:
    """
    Score content and decide whether it can be auto-approved.

    Args:
        html: Article HTML
        topic: Article topic, used for YMYL detection
        policy: Review policy (defaults to DEFAULT_REVIEW_POLICY)
        author: AuthorProfile or a plain mapping with the same keys
        site_da_score: Site domain authority override
        force_manual_review: Always route to review
        analyzed_at: Timestamp for the E-E-A-T result

    Returns:
        ContentGateResult with gate outcomes, issues and warnings
    """
    policy = policy or DEFAULT_REVIEW_POLICY
    is_ymyl = is_ymyl_topic(topic, policy)

    eeat = calculate_eeat_score(
        html,
        author=author,
        site_da_score=site_da_score,
        is_ymyl=is_ymyl,
        analyzed_at=analyzed_at,
    )

    context = {
        "policy": policy,
        "topic": topic,
        "min_score": policy.ymyl_min_score if is_ymyl else policy.min_eeat_score,
    }

    gate_results = []
    issues = []
    warnings = []
    for gate in build_content_gates(policy, is_ymyl):
        result = gate.check(eeat, context)
        gate_results.append(result)

        if result.status == GateStatus.FAILED:
            issues.append(result.message)
        elif result.status == GateStatus.WARNING:
            warnings.append(result.message)

        log_fn = logger.debug if result.status == GateStatus.PASSED else logger.warning
        log_fn(f"Gate {gate.name}: {result.status.value} (score: {result.score})")

    passed = not issues
    auto_approved = False

    if passed and policy.enable_auto_approval and eeat.overall >= policy.auto_approve_above_score:
        ymyl_blocked = is_ymyl and policy.ymyl_requires_manual_review
        citations_short = (
            policy.auto_approve_requires_citations
            and eeat.citation_analysis.total < policy.min_citation_count
        )
        auto_approved = not ymyl_blocked and not citations_short

    if force_manual_review:
        auto_approved = False

    requires_review = not auto_approved

    logger.info(
        f"Content gate for '{topic}': passed={passed}, auto_approved={auto_approved}, "
        f"E-E-A-T {eeat.overall} ({eeat.grade}), {len(issues)} issues, {len(warnings)} warnings"
    )

    return ContentGateResult(
        passed=passed,
        auto_approved=auto_approved,
        requires_review=requires_review,
        is_ymyl=is_ymyl,
        scores={
            "eeat": eeat.overall,
            "experience": eeat.experience.score,
            "expertise": eeat.expertise.score,
            "authoritativeness": eeat.authoritativeness.score,
            "trustworthiness": eeat.trustworthiness.score,
            "overall": eeat.overall,
        },
        issues=issues,
        warnings=warnings,
        gate_results=gate_results,
        eeat=eeat,
    )

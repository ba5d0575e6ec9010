"""
Duplicate Topic Gate

Decides whether a topic should be skipped before an article is generated.

Thresholds:
    campaign  similarity > 0.8 against this campaign's records
    global    similarity > 0.9 against every record for the site
              (only when check_global is set)

The site-wide bar is higher so that related topics from other campaigns
are not rejected.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .hashing import similarity_score
from .store import PostRecord, PostRecordIndex
from ..quality.models import Serializable
from ..utils.config import Settings
from ..utils.text import round_half_up

logger = logging.getLogger(__name__)

CAMPAIGN_THRESHOLD = 0.8
GLOBAL_THRESHOLD = 0.9


@dataclass(frozen=True)
class DedupThresholds:
    campaign: float = CAMPAIGN_THRESHOLD
    site: float = GLOBAL_THRESHOLD

    @classmethod
    def from_settings(cls, settings: Settings) -> "DedupThresholds":
        return cls(
            campaign=settings.DEDUP_CAMPAIGN_THRESHOLD,
            site=settings.DEDUP_GLOBAL_THRESHOLD,
        )


DEFAULT_DEDUP_THRESHOLDS = DedupThresholds()


@dataclass(frozen=True)
class SkipDecision(Serializable):
    skip: bool
    reason: Optional[str] = None
    similar_to: Optional[str] = None  # Title of the matching record
    similarity: Optional[float] = None


def should_skip_topic(
    store: PostRecordIndex,
    topic: str,
    campaign_id: str,
    site_id: str,
    check_global: bool = False,
    thresholds: Optional[DedupThresholds] = None,
) -> SkipDecision:
    """
    Check a topic against previously generated posts.

    Args:
        store: Record store to check against
        topic: Candidate topic
        campaign_id: Campaign the topic belongs to
        site_id: Site the article would be published on
        check_global: Also check every record for the site
        thresholds: Campaign and site-wide similarity thresholds

    Returns:
        SkipDecision naming the first matching record, if any
    """
    thresholds = thresholds or DEFAULT_DEDUP_THRESHOLDS

    for record in store.get_records_by_campaign(campaign_id):
        similarity = similarity_score(topic, record.topic)
        if similarity > thresholds.campaign:
            logger.info(f"Skipping '{topic}': {similarity:.2f} similar to '{record.title}'")
            return SkipDecision(
                skip=True,
                reason=f"Similar to previously generated content ({round_half_up(similarity * 100)}% match)",
                similar_to=record.title,
                similarity=similarity,
            )

    if check_global:
        for record in store.get_records_by_site(site_id):
            similarity = similarity_score(topic, record.topic)
            if similarity > thresholds.site:
                logger.info(f"Skipping '{topic}': already on site {site_id} as '{record.title}'")
                return SkipDecision(
                    skip=True,
                    reason="Very similar content already exists on this site",
                    similar_to=record.title,
                    similarity=similarity,
                )

    return SkipDecision(skip=False)


def record_generated_post(
    store: PostRecordIndex,
    campaign_id: str,
    site_id: str,
    topic: str,
    title: str,
    slug: str,
    wp_post_id: Optional[int] = None,
    wp_post_url: Optional[str] = None,
) -> PostRecord:
    """Record a successful post generation."""
    return store.add_record(
        campaign_id=campaign_id,
        site_id=site_id,
        topic=topic,
        title=title,
        slug=slug,
        wp_post_id=wp_post_id,
        wp_post_url=wp_post_url,
    )

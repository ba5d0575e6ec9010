"""
Post Record Store

Tracks generated posts so the same topic is not written twice.

A persistent backend only has to provide query() and append();
PostRecordIndex builds every duplicate check on top of those two.
InMemoryPostRecordStore is the list-backed reference implementation.
It is not thread-safe: callers serialize writers.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from .hashing import normalize_topic, similarity_score, simple_hash
from ..quality.models import Serializable

logger = logging.getLogger(__name__)

DUPLICATE_SIMILARITY = 0.8
RELATED_TOPIC_SIMILARITY = 0.5


@dataclass
class PostRecord(Serializable):
    """One generated or published article."""
    id: str
    campaign_id: str
    site_id: str
    topic: str
    topic_hash: str
    title: str
    title_hash: str
    slug: str
    wp_post_id: Optional[int] = None
    wp_post_url: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


RecordFilter = Callable[[PostRecord], bool]


class PostRecordIndex(ABC):
    """
    Duplicate checks over a record backend.

    Subclasses implement query(predicate) and append(record).
    """

    @abstractmethod
    def query(self, predicate: RecordFilter) -> List[PostRecord]:
        """Return stored records matching predicate, in insertion order."""
        pass

    @abstractmethod
    def append(self, record: PostRecord) -> None:
        """Store one record."""
        pass

    # =========================================================================
    # Duplicate checks
    # =========================================================================

    def is_duplicate(
        self,
        topic: str,
        campaign_id: Optional[str] = None,
        site_id: Optional[str] = None,
    ) -> bool:
        """
        True if a record has the same normalized topic hash or a topic
        similarity above 0.8. Campaign and site narrow the search.
        """
        topic_hash = simple_hash(normalize_topic(topic))

        def matches(record: PostRecord) -> bool:
            if campaign_id and record.campaign_id != campaign_id:
                return False
            if site_id and record.site_id != site_id:
                return False
            if record.topic_hash == topic_hash:
                return True
            return similarity_score(topic, record.topic) > DUPLICATE_SIMILARITY

        return bool(self.query(matches))

    def is_title_used(self, title: str, site_id: str) -> bool:
        title_hash = simple_hash(title)
        return bool(self.query(lambda r: r.site_id == site_id and r.title_hash == title_hash))

    def is_slug_used(self, slug: str, site_id: str) -> bool:
        return bool(self.query(lambda r: r.site_id == site_id and r.slug == slug))

    # =========================================================================
    # Record management
    # =========================================================================

    def add_record(
        self,
        campaign_id: str,
        site_id: str,
        topic: str,
        title: str,
        slug: str,
        wp_post_id: Optional[int] = None,
        wp_post_url: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> PostRecord:
        """Create, store and return a record with derived hashes."""
        record = PostRecord(
            id=f"rec_{uuid.uuid4().hex[:8]}",
            campaign_id=campaign_id,
            site_id=site_id,
            topic=topic,
            topic_hash=simple_hash(normalize_topic(topic)),
            title=title,
            title_hash=simple_hash(title),
            slug=slug,
            wp_post_id=wp_post_id,
            wp_post_url=wp_post_url,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self.append(record)
        logger.debug(f"Recorded post {record.id} for campaign {campaign_id}: '{title}'")
        return record

    def get_records_by_topic(self, topic: str) -> List[PostRecord]:
        """Records whose topic similarity exceeds 0.5."""
        return self.query(lambda r: similarity_score(r.topic, topic) > RELATED_TOPIC_SIMILARITY)

    def get_records_by_campaign(self, campaign_id: str) -> List[PostRecord]:
        return self.query(lambda r: r.campaign_id == campaign_id)

    def get_records_by_site(self, site_id: str) -> List[PostRecord]:
        return self.query(lambda r: r.site_id == site_id)


class InMemoryPostRecordStore(PostRecordIndex):
    """List-backed store owned by the caller."""

    def __init__(self, records: Optional[List[PostRecord]] = None):
        self._records: List[PostRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[PostRecord]:
        return list(self._records)

    def query(self, predicate: RecordFilter) -> List[PostRecord]:
        return [r for r in self._records if predicate(r)]

    def append(self, record: PostRecord) -> None:
        self._records.append(record)

    def clear_records(
        self,
        older_than_days: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """
        Remove records created before the cutoff, or all records.

        Returns:
            Number of records removed
        """
        before = len(self._records)
        if older_than_days is None:
            self._records = []
        else:
            cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=older_than_days)
            self._records = [r for r in self._records if r.created_at > cutoff]

        removed = before - len(self._records)
        logger.info(f"Cleared {removed} post records")
        return removed

    def clear_by_campaign(self, campaign_id: str) -> int:
        before = len(self._records)
        self._records = [r for r in self._records if r.campaign_id != campaign_id]
        removed = before - len(self._records)
        logger.info(f"Cleared {removed} post records for campaign {campaign_id}")
        return removed

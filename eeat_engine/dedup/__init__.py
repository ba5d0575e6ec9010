"""
Deduplication

Topic hashing, similarity and the duplicate-topic gate used before
generating new articles.
"""

from .hashing import normalize_topic, similarity_score, simple_hash
from .store import InMemoryPostRecordStore, PostRecord, PostRecordIndex
from .gate import DedupThresholds, SkipDecision, record_generated_post, should_skip_topic

__all__ = [
    "normalize_topic",
    "similarity_score",
    "simple_hash",
    "PostRecord",
    "PostRecordIndex",
    "InMemoryPostRecordStore",
    "DedupThresholds",
    "SkipDecision",
    "should_skip_topic",
    "record_generated_post",
]

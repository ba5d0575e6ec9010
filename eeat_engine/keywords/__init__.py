"""
Keyword Clustering

Intent classification, keyword similarity and topic clustering for
keyword batches.
"""

from .intent import SearchIntent, classify_intent
from .similarity import calculate_similarity, extract_key_terms, semantic_similarity
from .clustering import (
    EnrichedKeywordInput,
    ClusteredKeyword,
    ClusterMetrics,
    KeywordCluster,
    cluster_keywords,
    get_cluster_summary,
    find_related_clusters,
)

__all__ = [
    # Intent
    "SearchIntent",
    "classify_intent",
    # Similarity
    "calculate_similarity",
    "extract_key_terms",
    "semantic_similarity",
    # Clustering
    "EnrichedKeywordInput",
    "ClusteredKeyword",
    "ClusterMetrics",
    "KeywordCluster",
    "cluster_keywords",
    "get_cluster_summary",
    "find_related_clusters",
]

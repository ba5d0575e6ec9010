"""
Keyword Clustering

Groups a keyword batch into topic clusters with a two-pass greedy
algorithm:

1. Sort by descending volume (ties keep input order).
2. First pass: compare each keyword to every cluster's primary keyword.
   Attach it to the best match at or above min_similarity; otherwise
   start a new cluster with it as head, as long as fewer than
   max_clusters exist.
3. Second pass: compare leftovers to every member of every cluster and
   attach them to the best match, or leave them unclustered.
4. Recompute metrics, name each cluster and suggest article titles.
5. Sort clusters by descending potential value (Σ volume × cpc).

Ties go to the first cluster that reached the best similarity.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from .intent import SearchIntent, classify_intent, empty_intent_counts
from .similarity import extract_key_terms, semantic_similarity
from ..quality.models import Serializable

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIMILARITY = 0.3
DEFAULT_MAX_CLUSTERS = 20
RELATED_MIN_SIMILARITY = 0.2
MAX_RELATED_CLUSTERS = 5
SUMMARY_TOP_CLUSTERS = 5
NAME_TERMS = 3


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass(frozen=True)
class EnrichedKeywordInput(Serializable):
    """A keyword phrase with optional search metrics."""
    keyword: str
    volume: Optional[int] = None
    cpc: Optional[float] = None
    competition: Optional[float] = None
    trend: Optional[str] = None  # "rising", "stable", "falling"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnrichedKeywordInput":
        keyword = data["keyword"]
        if not isinstance(keyword, str):
            raise TypeError(f"keyword must be a str, got {type(keyword).__name__}")
        return cls(
            keyword=keyword,
            volume=data.get("volume"),
            cpc=data.get("cpc"),
            competition=data.get("competition"),
            trend=data.get("trend"),
        )


@dataclass
class ClusteredKeyword(Serializable):
    keyword: str
    similarity: float  # To the cluster head
    is_head: bool
    volume: Optional[int] = None
    cpc: Optional[float] = None
    competition: Optional[float] = None
    trend: Optional[str] = None


@dataclass
class ClusterMetrics(Serializable):
    total_volume: int = 0
    avg_cpc: float = 0.0
    avg_competition: float = 0.0
    keyword_count: int = 0
    potential_value: float = 0.0  # Σ volume × cpc


@dataclass
class KeywordCluster(Serializable):
    """A topic group of related keywords."""
    id: str
    name: str
    intent: SearchIntent
    primary_keyword: str
    keywords: List[ClusteredKeyword]
    metrics: ClusterMetrics = field(default_factory=ClusterMetrics)
    suggested_articles: List[str] = field(default_factory=list)


KeywordInput = Union[EnrichedKeywordInput, Dict[str, Any]]


# ============================================================================
# CLUSTERING
# ============================================================================

def _coerce_keywords(keywords: Iterable[KeywordInput]) -> List[EnrichedKeywordInput]:
    """Accept dataclasses or plain dicts; malformed items are skipped."""
    results = []
    for item in keywords:
        if isinstance(item, EnrichedKeywordInput):
            results.append(item)
            continue
        try:
            results.append(EnrichedKeywordInput.from_dict(item))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed keyword {item!r}: {e}")
    return results


def _clustered(keyword: EnrichedKeywordInput, similarity: float, is_head: bool) -> ClusteredKeyword:
    return ClusteredKeyword(
        keyword=keyword.keyword,
        similarity=similarity,
        is_head=is_head,
        volume=keyword.volume,
        cpc=keyword.cpc,
        competition=keyword.competition,
        trend=keyword.trend,
    )


def cluster_keywords(
    keywords: Iterable[KeywordInput],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    max_clusters: int = DEFAULT_MAX_CLUSTERS,
    legacy_cap_check: bool = False,
    year: Optional[int] = None,
) -> List[KeywordCluster]:
    """
    Cluster keywords into topic groups.

    Args:
        keywords: EnrichedKeywordInput items or dicts with the same keys
        min_similarity: Minimum semantic similarity to join a cluster
        max_clusters: Cluster cap for the first pass
        legacy_cap_check: Only join existing clusters once max_clusters
            exist, creating a new cluster for every other keyword. This
            reproduces clusters produced by earlier releases. Leave it
            off: the default keeps "buy running shoes" (1000) and "best
            running shoes" (500) in one cluster worth 2750, and legacy
            mode splits them.
        year: Year used in commercial title suggestions (defaults to now)

    Returns:
        Clusters sorted by descending potential value
    """
    inputs = _coerce_keywords(keywords)
    if not inputs:
        return []

    year = year or datetime.now().year
    ordered = sorted(inputs, key=lambda k: -(k.volume or 0))

    clusters: List[KeywordCluster] = []
    assigned = set()

    # First pass: compare to cluster heads
    for keyword in ordered:
        if keyword.keyword in assigned:
            continue

        best_cluster = None
        best_similarity = 0.0
        for cluster in clusters:
            similarity = semantic_similarity(keyword.keyword, cluster.primary_keyword)
            if similarity >= min_similarity and similarity > best_similarity:
                best_similarity = similarity
                best_cluster = cluster

        if legacy_cap_check:
            attach = best_cluster is not None and len(clusters) >= max_clusters
            create = not attach
        else:
            attach = best_cluster is not None
            create = not attach and len(clusters) < max_clusters

        if attach:
            best_cluster.keywords.append(_clustered(keyword, best_similarity, False))
            assigned.add(keyword.keyword)
        elif create:
            clusters.append(KeywordCluster(
                id=f"cluster_{len(clusters) + 1}",
                name=generate_cluster_name(keyword.keyword),
                intent=classify_intent(keyword.keyword),
                primary_keyword=keyword.keyword,
                keywords=[_clustered(keyword, 1.0, True)],
            ))
            assigned.add(keyword.keyword)

    # Second pass: compare leftovers to every member
    for keyword in ordered:
        if keyword.keyword in assigned:
            continue

        best_cluster = None
        best_similarity = 0.0
        for cluster in clusters:
            for existing in cluster.keywords:
                similarity = semantic_similarity(keyword.keyword, existing.keyword)
                if similarity >= min_similarity and similarity > best_similarity:
                    best_similarity = similarity
                    best_cluster = cluster

        if best_cluster:
            best_cluster.keywords.append(_clustered(keyword, best_similarity, False))
            assigned.add(keyword.keyword)

    for cluster in clusters:
        cluster.metrics = calculate_cluster_metrics(cluster.keywords)
        cluster.suggested_articles = generate_article_suggestions(cluster, year)

    clusters.sort(key=lambda c: -c.metrics.potential_value)

    unclustered = len({k.keyword for k in ordered}) - len(assigned)
    logger.debug(
        f"Clustered {len(assigned)} keywords into {len(clusters)} clusters "
        f"({unclustered} unclustered)"
    )
    return clusters


# ============================================================================
# CLUSTER UTILITIES
# ============================================================================

def generate_cluster_name(primary_keyword: str) -> str:
    """First three key terms, capitalized. Falls back to the keyword itself."""
    terms = extract_key_terms(primary_keyword)
    if not terms:
        return primary_keyword
    return " ".join(t[:1].upper() + t[1:] for t in terms[:NAME_TERMS])


def calculate_cluster_metrics(keywords: List[ClusteredKeyword]) -> ClusterMetrics:
    count = len(keywords)
    if count == 0:
        return ClusterMetrics()

    return ClusterMetrics(
        keyword_count=count,
        total_volume=sum(k.volume or 0 for k in keywords),
        avg_cpc=sum(k.cpc or 0 for k in keywords) / count,
        avg_competition=sum(k.competition or 0 for k in keywords) / count,
        potential_value=sum((k.volume or 0) * (k.cpc or 0) for k in keywords),
    )


ARTICLE_TEMPLATES: Dict[SearchIntent, List[str]] = {
    SearchIntent.INFORMATIONAL: [
        "Complete Guide to {primary}",
        "What is {primary}? Everything You Need to Know",
        "{primary}: Tips and Best Practices",
    ],
    SearchIntent.COMMERCIAL: [
        "Best {primary} in {year}",
        "{primary} Review: Pros, Cons, and Verdict",
        "Top 10 {primary} Compared",
    ],
    SearchIntent.TRANSACTIONAL: [
        "Where to Buy {primary} (Best Deals)",
        "{primary} Buying Guide",
        "How to Get the Best Price on {primary}",
    ],
    SearchIntent.NAVIGATIONAL: [
        "How to Access {primary}",
        "{primary} Official Resources",
    ],
}


def generate_article_suggestions(cluster: KeywordCluster, year: Optional[int] = None) -> List[str]:
    """Article title suggestions templated by cluster intent."""
    year = year or datetime.now().year
    return [
        template.format(primary=cluster.primary_keyword, year=year)
        for template in ARTICLE_TEMPLATES[cluster.intent]
    ]


def get_cluster_summary(clusters: List[KeywordCluster]) -> Dict[str, Any]:
    """
    Get summary statistics for a set of clusters.

    Args:
        clusters: Clusters from cluster_keywords()

    Returns:
        Summary dict with totals, intent distribution and top clusters
    """
    by_intent = empty_intent_counts()
    total_keywords = 0
    total_volume = 0

    for cluster in clusters:
        by_intent[cluster.intent.value] += 1
        total_keywords += len(cluster.keywords)
        total_volume += cluster.metrics.total_volume

    return {
        "total_clusters": len(clusters),
        "total_keywords": total_keywords,
        "total_volume": total_volume,
        "by_intent": by_intent,
        "top_clusters": [
            {"name": c.name, "volume": c.metrics.total_volume}
            for c in clusters[:SUMMARY_TOP_CLUSTERS]
        ],
    }


def find_related_clusters(
    cluster: KeywordCluster,
    all_clusters: List[KeywordCluster],
    min_similarity: float = RELATED_MIN_SIMILARITY,
) -> List[KeywordCluster]:
    """
    Find clusters whose primary keyword is similar to this one's.

    Returns:
        Up to 5 clusters, most similar first
    """
    scored = [
        (semantic_similarity(cluster.primary_keyword, c.primary_keyword), c)
        for c in all_clusters
        if c.id != cluster.id
    ]
    related = [(s, c) for s, c in scored if s >= min_similarity]
    related.sort(key=lambda pair: -pair[0])
    return [c for _, c in related[:MAX_RELATED_CLUSTERS]]

"""
Test Suite for Keyword Clustering

Tests:
- Jaccard and key-term similarity
- Intent classification priority
- Two-pass clustering, cluster cap and legacy cap behaviour
- Metrics, naming, suggestions, summaries and related clusters
"""

import logging

import pytest

from eeat_engine.exceptions import InvalidInputError
from eeat_engine.keywords import (
    EnrichedKeywordInput,
    SearchIntent,
    calculate_similarity,
    classify_intent,
    cluster_keywords,
    extract_key_terms,
    find_related_clusters,
    get_cluster_summary,
    semantic_similarity,
)


class TestSimilarity:
    """Test keyword similarity primitives."""

    def test_jaccard(self):
        assert calculate_similarity("running shoes", "Shoes Running") == 1.0
        assert calculate_similarity("best running shoes", "buy running shoes") == pytest.approx(0.5)

    def test_jaccard_symmetric(self):
        a, b = "cheap flights to rome", "rome flights"
        assert calculate_similarity(a, b) == calculate_similarity(b, a)

    def test_jaccard_empty(self):
        assert calculate_similarity("", "") == 0.0
        assert calculate_similarity("", "coffee") == 0.0

    def test_key_terms(self):
        assert extract_key_terms("How to do the best SEO") == ["how", "best", "seo"]

    def test_plural_matches(self):
        """'shoe' is contained in 'shoes'."""
        assert semantic_similarity("running shoe", "running shoes") == 1.0

    def test_partial_overlap(self):
        assert semantic_similarity("buy running shoes", "best running shoes") == pytest.approx(2 / 3)

    def test_falls_back_to_jaccard(self):
        """Phrases made only of short or stop words use the Jaccard index."""
        assert semantic_similarity("is it", "is it") == 1.0
        assert semantic_similarity("is it", "so it") == pytest.approx(1 / 3)


class TestClassifyIntent:
    """Test search intent classification."""

    @pytest.mark.parametrize("keyword,intent", [
        ("vpn login", SearchIntent.NAVIGATIONAL),
        ("buy running shoes", SearchIntent.TRANSACTIONAL),
        ("best vpn", SearchIntent.COMMERCIAL),
        ("how to bake sourdough", SearchIntent.INFORMATIONAL),
        ("zebra stripes", SearchIntent.INFORMATIONAL),
    ])
    def test_intents(self, keyword, intent):
        assert classify_intent(keyword) == intent

    def test_priority(self):
        """Navigational beats transactional beats commercial."""
        assert classify_intent("login to buy the best vpn") == SearchIntent.NAVIGATIONAL
        assert classify_intent("buy the best vpn") == SearchIntent.TRANSACTIONAL

    def test_substring_signals(self):
        """Signals match inside words: 'apple' contains 'app'."""
        assert classify_intent("apple pie recipe") == SearchIntent.NAVIGATIONAL

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInputError):
            classify_intent(None)


class TestClusterKeywords:
    """Test the clustering algorithm."""

    def test_running_shoes(self, running_shoe_keywords):
        clusters = cluster_keywords(running_shoe_keywords, year=2030)

        assert len(clusters) == 1
        cluster = clusters[0]
        assert cluster.id == "cluster_1"
        assert cluster.primary_keyword == "buy running shoes"
        assert cluster.name == "Buy Running Shoes"
        assert cluster.intent == SearchIntent.TRANSACTIONAL
        assert cluster.metrics.total_volume == 1500
        assert cluster.metrics.keyword_count == 2
        assert cluster.metrics.avg_cpc == pytest.approx(1.75)
        assert cluster.metrics.potential_value == pytest.approx(2750.0)

        head, member = cluster.keywords
        assert head.is_head and head.similarity == 1.0
        assert not member.is_head
        assert member.similarity == pytest.approx(2 / 3)

    def test_legacy_cap_check(self, running_shoe_keywords):
        """Earlier releases only joined clusters once the cap was reached."""
        clusters = cluster_keywords(running_shoe_keywords, legacy_cap_check=True)

        assert len(clusters) == 2
        assert all(len(c.keywords) == 1 for c in clusters)

    def test_mixed_batch(self, mixed_keywords):
        clusters = cluster_keywords(mixed_keywords)

        assert [c.primary_keyword for c in clusters] == [
            "best vpn",
            "cheap espresso machine",
            "how to bake sourdough",
        ]
        assert [k.keyword for k in clusters[0].keywords] == [
            "best vpn", "best vpn for streaming", "vpn login",
        ]
        assert [k.keyword for k in clusters[2].keywords] == [
            "how to bake sourdough", "sourdough starter guide",
        ]
        assert clusters[0].metrics.potential_value == pytest.approx(24650.0)

    def test_sorted_by_potential_value(self, mixed_keywords):
        values = [c.metrics.potential_value for c in cluster_keywords(mixed_keywords)]
        assert values == sorted(values, reverse=True)

    def test_ids_follow_creation_order(self, mixed_keywords):
        ids = {c.primary_keyword: c.id for c in cluster_keywords(mixed_keywords)}

        assert ids == {
            "best vpn": "cluster_1",
            "how to bake sourdough": "cluster_2",
            "cheap espresso machine": "cluster_3",
        }

    def test_single_keyword(self):
        clusters = cluster_keywords([{"keyword": "best vpn", "volume": 100}], year=2030)

        assert len(clusters) == 1
        assert clusters[0].name == "Best Vpn"
        assert clusters[0].suggested_articles == [
            "Best best vpn in 2030",
            "best vpn Review: Pros, Cons, and Verdict",
            "Top 10 best vpn Compared",
        ]

    def test_empty_input(self):
        assert cluster_keywords([]) == []

    def test_duplicates_collapse(self):
        clusters = cluster_keywords([
            {"keyword": "best vpn", "volume": 100},
            {"keyword": "best vpn", "volume": 50},
        ])

        assert len(clusters) == 1
        assert len(clusters[0].keywords) == 1
        assert clusters[0].keywords[0].volume == 100

    def test_dataclass_input(self):
        clusters = cluster_keywords([EnrichedKeywordInput("coffee grinder", volume=10, cpc=1.0)])
        assert clusters[0].metrics.potential_value == pytest.approx(10.0)

    def test_missing_metrics_treated_as_zero(self):
        clusters = cluster_keywords([{"keyword": "coffee grinder"}])
        metrics = clusters[0].metrics

        assert metrics.total_volume == 0
        assert metrics.avg_cpc == 0
        assert metrics.potential_value == 0

    def test_cluster_cap(self):
        """Keywords that fit no cluster once the cap is hit stay unclustered."""
        clusters = cluster_keywords(
            [
                {"keyword": "apple pie", "volume": 300},
                {"keyword": "tax return", "volume": 200},
                {"keyword": "dog training", "volume": 100},
            ],
            max_clusters=2,
        )
        keywords = [k.keyword for c in clusters for k in c.keywords]

        assert len(clusters) == 2
        assert "dog training" not in keywords

    def test_second_pass_matches_members(self):
        """A leftover joins via a non-head member."""
        clusters = cluster_keywords(
            [
                {"keyword": "running shoes", "volume": 300},
                {"keyword": "trail running gear", "volume": 200},
                {"keyword": "trail running shoes", "volume": 100},
            ],
            min_similarity=0.5,
            max_clusters=1,
        )

        assert len(clusters) == 1
        members = clusters[0].keywords
        assert [k.keyword for k in members] == [
            "running shoes", "trail running shoes", "trail running gear",
        ]
        assert members[2].similarity == pytest.approx(2 / 3)

    def test_each_keyword_in_one_cluster(self, mixed_keywords):
        clusters = cluster_keywords(mixed_keywords)
        keywords = [k.keyword for c in clusters for k in c.keywords]

        assert len(keywords) == len(set(keywords))

    def test_malformed_items_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            clusters = cluster_keywords([
                {"volume": 10},
                {"keyword": 5},
                "coffee",
                {"keyword": "coffee beans", "volume": 10},
            ])

        assert [c.primary_keyword for c in clusters] == ["coffee beans"]
        assert caplog.text.count("Skipping malformed keyword") == 3


class TestClusterUtilities:
    """Test summaries and related clusters."""

    def test_summary(self, mixed_keywords):
        summary = get_cluster_summary(cluster_keywords(mixed_keywords))

        assert summary["total_clusters"] == 3
        assert summary["total_keywords"] == 6
        assert summary["total_volume"] == 11600
        assert summary["by_intent"] == {
            "transactional": 1,
            "commercial": 1,
            "informational": 1,
            "navigational": 0,
        }
        assert summary["top_clusters"][0] == {"name": "Best Vpn", "volume": 7100}

    def test_empty_summary(self):
        summary = get_cluster_summary([])

        assert summary["total_clusters"] == 0
        assert summary["top_clusters"] == []

    def test_related_clusters(self):
        clusters = cluster_keywords(
            [
                {"keyword": "running shoes", "volume": 300},
                {"keyword": "trail running", "volume": 200},
                {"keyword": "knitting patterns", "volume": 100},
            ],
            min_similarity=0.9,
        )
        by_head = {c.primary_keyword: c for c in clusters}
        related = find_related_clusters(by_head["running shoes"], clusters)

        assert [c.primary_keyword for c in related] == ["trail running"]

    def test_related_excludes_self(self, running_shoe_keywords):
        clusters = cluster_keywords(running_shoe_keywords)
        assert find_related_clusters(clusters[0], clusters) == []

    def test_to_dict(self, running_shoe_keywords):
        data = cluster_keywords(running_shoe_keywords)[0].to_dict()

        assert data["intent"] == "transactional"
        assert data["keywords"][0]["is_head"] is True

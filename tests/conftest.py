"""
Pytest Configuration and Shared Fixtures

Provides sample articles, keyword batches, author profiles and a
populated post-record store for all test modules.
"""

import pytest
from datetime import datetime, timezone
from typing import Any, Dict, List

from eeat_engine.dedup import InMemoryPostRecordStore
from eeat_engine.quality import AuthorProfile


FIXED_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def filler(word_count: int, word: str = "lorem") -> str:
    """Neutral filler text with no detectable signals."""
    return " ".join([word] * word_count)


# ============================================================================
# Article Fixtures
# ============================================================================

@pytest.fixture
def fixed_time() -> datetime:
    return FIXED_TIME


@pytest.fixture
def thin_article() -> str:
    """50 words, no citations, no first-person language, no author."""
    return (
        "<p>Gardening is a popular hobby. Plants need water, light and good soil "
        "to grow well. Many plants prefer morning sun while others like shade. "
        "Compost adds nutrients to soil. Regular pruning keeps shrubs healthy and "
        "tidy. Mulch helps retain moisture during summer months. Seeds should be "
        "planted carefully in spring.</p>"
    )


@pytest.fixture
def nih_article() -> str:
    """500 words with a single NIH citation in the middle."""
    return (
        f"<p>{filler(250)} "
        '<a href="https://nih.gov/study">NIH study</a> '
        f"{filler(248)}</p>"
    )


@pytest.fixture
def rich_article() -> str:
    """First-hand, well-cited article with trust signals."""
    return """
<article>
<p class="byline">By Jane Smith</p>
<p>Last updated: 2025-03-01</p>
<p>I tested twelve espresso machines over three months in my own kitchen.
In my experience, the grinder matters more than the boiler.
We found that cheap machines lose temperature after the third shot.
A few months ago I started logging every shot I pulled.</p>
<p>According to <a href="https://www.nih.gov/caffeine">research from the NIH</a>,
moderate caffeine intake is safe for most adults.
The <a href="https://www.bbc.com/news/coffee">BBC reported</a> on rising bean prices,
and <a href="https://www.reuters.com/markets/coffee">Reuters market data</a> confirms it.
A <a href="https://www.harvard.edu/coffee-study">Harvard review</a> covers the health effects.</p>
<p>Contrary to popular belief, darker roasts contain slightly less caffeine.
What I found was that water temperature stability is the real secret.</p>
<p>Disclaimer: this post is for informational purposes only.
Affiliate disclosure: we may earn a commission at no extra cost to you.
Contact us at email: hello@example.com</p>
</article>
"""


@pytest.fixture
def author() -> AuthorProfile:
    return AuthorProfile(
        name="Jane Smith",
        credentials=["Certified Q Grader", "SCA Barista Skills"],
        bio="Jane has reviewed coffee equipment for a decade and trains baristas.",
        expertise=["espresso", "coffee roasting", "grinders"],
    )


# ============================================================================
# Keyword Fixtures
# ============================================================================

@pytest.fixture
def running_shoe_keywords() -> List[Dict[str, Any]]:
    return [
        {"keyword": "buy running shoes", "volume": 1000, "cpc": 2.0},
        {"keyword": "best running shoes", "volume": 500, "cpc": 1.5},
    ]


@pytest.fixture
def mixed_keywords() -> List[Dict[str, Any]]:
    return [
        {"keyword": "best vpn", "volume": 5000, "cpc": 4.0, "competition": 0.8},
        {"keyword": "best vpn for streaming", "volume": 1200, "cpc": 3.5, "competition": 0.7},
        {"keyword": "vpn login", "volume": 900, "cpc": 0.5, "competition": 0.2},
        {"keyword": "how to bake sourdough", "volume": 3000, "cpc": 0.3, "competition": 0.1},
        {"keyword": "sourdough starter guide", "volume": 800, "cpc": 0.2, "competition": 0.1},
        {"keyword": "cheap espresso machine", "volume": 700, "cpc": 1.8, "competition": 0.6},
    ]


# ============================================================================
# Dedup Fixtures
# ============================================================================

@pytest.fixture
def record_store() -> InMemoryPostRecordStore:
    """Store with three posts across two campaigns on one site."""
    store = InMemoryPostRecordStore()
    store.add_record(
        campaign_id="camp_coffee",
        site_id="site_1",
        topic="alpha beta gamma delta epsilon zeta",
        title="Alpha Beta Guide",
        slug="alpha-beta-guide",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    store.add_record(
        campaign_id="camp_coffee",
        site_id="site_1",
        topic="Best Espresso Machines",
        title="The 10 Best Espresso Machines",
        slug="best-espresso-machines",
        created_at=datetime(2025, 5, 20, tzinfo=timezone.utc),
    )
    store.add_record(
        campaign_id="camp_tea",
        site_id="site_1",
        topic="green tea health benefits",
        title="Green Tea Benefits",
        slug="green-tea-benefits",
        wp_post_id=42,
        wp_post_url="https://example.com/green-tea-benefits",
        created_at=datetime(2025, 5, 25, tzinfo=timezone.utc),
    )
    return store

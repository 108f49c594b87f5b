import pandas as pd
import pytest

from linkedin_insights.data_prep import prepare_posts
from linkedin_insights.metrics import (
    author_performance,
    build_analytics,
    controversial_posts,
    daily_trends,
    engagement_tiers,
    extract_keywords,
    percent,
    round_half_up,
    safe_ratio,
    sentiment_counts,
    summarize_totals,
    top_posts,
)


@pytest.fixture
def empty_posts(now):
    return prepare_posts(pd.DataFrame(), now=now)


class TestHelpers:
    @pytest.mark.parametrize("x,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (0.0, 0)])
    def test_round_half_up(self, x, expected):
        assert round_half_up(x) == expected

    def test_division_guards(self):
        assert safe_ratio(5, 0) == 0.0
        assert percent(1, 0) == 0
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67


class TestTotals:
    def test_totals_and_averages(self, posts):
        t = summarize_totals(posts)
        assert t["totalPosts"] == 5
        assert t["totalEngagement"] == 303
        assert t["totalLikes"] == 273
        assert t["totalComments"] == 22
        assert t["totalShares"] == 8
        assert t["avgEngagement"] == pytest.approx(60.6)

    def test_empty_input_has_no_nan(self, empty_posts):
        t = summarize_totals(empty_posts)
        assert t["totalPosts"] == 0
        assert t["avgEngagement"] == 0.0
        assert t["avgLikes"] == 0.0

    def test_sentiment_counts_sum_to_total(self, posts):
        counts = sentiment_counts(posts)
        assert counts == {"positive": 2, "negative": 2, "neutral": 1}
        assert list(counts) == ["positive", "negative", "neutral"]
        assert sum(counts.values()) == len(posts)

    def test_engagement_tiers(self, posts):
        assert engagement_tiers(posts) == {"high": 1, "medium": 2, "low": 2}

    def test_tier_boundaries(self, now):
        raw = pd.DataFrame({"likes": [100, 101, 20, 19]})
        tiers = engagement_tiers(prepare_posts(raw, now=now))
        assert tiers == {"high": 1, "medium": 2, "low": 1}


class TestRankings:
    def test_top_posts_sorted_and_bounded(self, posts):
        top = top_posts(posts, 3)
        assert list(top["id"]) == [1, 4, 3]

    def test_top_posts_ties_keep_source_order(self, now):
        raw = pd.DataFrame({"likes": [5, 9, 5, 9, 5]})
        top = top_posts(prepare_posts(raw, now=now), 10)
        assert list(top["id"]) == [2, 4, 1, 3, 5]

    def test_controversial_requires_likes_and_comments(self, posts):
        assert list(controversial_posts(posts)["id"]) == [2, 3, 4, 1]

    def test_author_performance(self, posts):
        authors = author_performance(posts)
        assert [a["author"] for a in authors] == ["Asha", "Meera", "Shoffr", "Ravi", "Unknown"]
        assert authors[0] == {
            "author": "Asha",
            "posts": 1,
            "totalEngagement": 165,
            "totalLikes": 150,
            "totalComments": 10,
            "totalShares": 5,
            "avgEngagement": 165,
        }


class TestKeywords:
    def test_counts_and_tie_order(self, posts):
        words = extract_keywords(posts["content"])
        assert words[0] == ("driver", 3)
        assert words[1] == ("shoffr", 2)
        assert words[2] == ("proud", 1)

    def test_stop_words_and_short_tokens_dropped(self):
        words = dict(extract_keywords(["this is with that and the cat sat on a mat"]))
        assert words == {}

    def test_vocabulary_whitelist(self):
        words = extract_keywords(["bad bad rude driver"], stop_words=(), min_len=3, vocabulary={"bad", "rude"})
        assert words == [("bad", 2), ("rude", 1)]

    def test_drop_numeric(self):
        assert extract_keywords(["12345 hello"], drop_numeric=True) == [("hello", 1)]

    def test_bounded(self):
        text = " ".join(f"word{i:03d}" for i in range(50))
        assert len(extract_keywords([text], top_n=30)) == 30


class TestTrends:
    def test_daily_buckets(self, posts):
        assert daily_trends(posts) == [
            {"day": "12", "positive": 4, "negative": 8, "queries": 5},
            {"day": "13", "positive": 0, "negative": 4, "queries": 0},
            {"day": "14", "positive": 12, "negative": 16, "queries": 18},
            {"day": "15", "positive": 0, "negative": 0, "queries": 0},
        ]

    def test_keeps_most_recent_days(self, posts):
        assert [t["day"] for t in daily_trends(posts, days=2)] == ["14", "15"]

    def test_empty(self, empty_posts):
        assert daily_trends(empty_posts) == []


class TestBuildAnalytics:
    def test_shape(self, posts):
        a = build_analytics(posts)
        for key in ("totalPosts", "sentimentCounts", "engagementTiers", "topPosts", "controversialPosts",
                    "keywords", "trends", "authorPerformance"):
            assert key in a
        assert len(a["topPosts"]) == 5
        assert a["topPosts"][0]["id"] == 1
        assert a["keywords"][0] == {"word": "driver", "count": 3}

    def test_empty(self, empty_posts):
        a = build_analytics(empty_posts)
        assert a["totalPosts"] == 0
        assert a["sentimentCounts"] == {}
        assert a["topPosts"] == []
        assert a["keywords"] == []
        assert a["authorPerformance"] == []

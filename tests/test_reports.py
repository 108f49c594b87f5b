import dataclasses

import pandas as pd

from linkedin_insights.data_prep import prepare_posts
from linkedin_insights.lexicons import DEFAULT_LEXICONS
from linkedin_insights.reports import (
    build_reports,
    experience_posts,
    key_insights,
    negative_brand_posts,
    negative_keywords,
    negative_problem_areas,
    negative_review_metrics,
    positive_brand_posts,
    positive_feedback_categories,
    positive_keywords,
    positive_review_metrics,
    recent_complaints,
    recent_praises,
    time_ago,
)

NOW = pd.Timestamp("2024-06-15T12:00:00Z")


class TestFilters:
    def test_brand_filters(self, posts):
        assert list(experience_posts(posts)["id"]) == [2, 4]
        assert list(positive_brand_posts(posts)["id"]) == [4]
        assert list(negative_brand_posts(posts)["id"]) == [2]

    def test_other_brand(self, posts):
        lex = dataclasses.replace(DEFAULT_LEXICONS, brand="uber")
        assert experience_posts(posts, lex).empty


class TestTimeAgo:
    def test_buckets(self):
        assert time_ago(NOW - pd.Timedelta(minutes=59), NOW) == "Just now"
        assert time_ago(NOW - pd.Timedelta(hours=5, minutes=30), NOW) == "5 hrs ago"
        assert time_ago(NOW - pd.Timedelta(hours=52), NOW) == "2 days ago"


class TestInsights:
    def test_fallbacks_when_thresholds_not_met(self, posts):
        insights = key_insights(posts)
        assert insights == [
            {"type": "positive",
             "text": "Shoffr experience posts average 47 engagement, showing strong customer interest",
             "percentage": 5},
            {"type": "growth",
             "text": "2 posts discuss Shoffr experience, indicating strong brand awareness",
             "percentage": 40},
        ]

    def test_positive_rate_insight(self, now):
        raw = pd.DataFrame({"text": ["Shoffr ride was great", "Loved my Shoffr trip, good service"],
                            "Likes": [10, 10]})
        insights = key_insights(prepare_posts(raw, now=now))
        assert len(insights) == 2
        assert insights[0]["percentage"] == 100
        assert "100% of posts express positive experiences" in insights[0]["text"]
        assert insights[1]["text"].startswith("Customer experience quality is strong - 100% positive vs 0%")

    def test_empty_posts(self, now):
        insights = key_insights(prepare_posts(pd.DataFrame(), now=now))
        assert [i["percentage"] for i in insights] == [0, 0]


class TestPositiveTab:
    def test_categories(self, posts):
        assert positive_feedback_categories(posts) == [
            {"name": "Overall Experience", "count": 1, "percentage": 100},
            {"name": "Vehicle Condition", "count": 1, "percentage": 100},
            {"name": "Driver Professionalism", "count": 1, "percentage": 100},
            {"name": "Customer Service", "count": 0, "percentage": 0},
        ]

    def test_keywords(self, posts):
        words = positive_keywords(posts)
        assert [(w["word"], w["count"]) for w in words] == [("Great", 1), ("Clean", 1), ("Professional", 1)]
        assert words[0]["color"] == "bg-green-100 text-green-800"

    def test_review_metrics(self, posts):
        assert positive_review_metrics(posts) == {
            "avgDriverRating": 5.0,
            "avgWaitTime": 5.0,
            "vehiclePraise": 100,
            "appUXWins": 0,
            "driverEngagement": 88,
            "vehicleEngagement": 88,
            "appEngagement": 0,
            "totalPositivePosts": 1,
        }

    def test_review_metrics_without_praise(self, now):
        m = positive_review_metrics(prepare_posts(pd.DataFrame(), now=now))
        assert m["avgDriverRating"] == 3.5
        assert m["avgWaitTime"] == 5.0
        assert m["vehiclePraise"] == 0
        assert m["totalPositivePosts"] == 0

    def test_recent_praises(self, posts, now):
        praises = recent_praises(posts, now)
        assert len(praises) == 3
        assert praises[0] == {"praise": "Proud to share our milestone #growth...", "time": "1 days ago",
                              "rating": 1}
        assert praises[1]["time"] == "17 hrs ago"


class TestNegativeTab:
    def test_review_metrics(self, posts):
        assert negative_review_metrics(posts) == {
            "avgDriverRating": 1.5,
            "avgWaitTime": 5.0,
            "vehicleIssues": 0,
            "appIssues": 0,
            "driverEngagement": 5,
            "waitEngagement": 0,
            "vehicleEngagement": 0,
            "appEngagement": 0,
            "totalNegativePosts": 1,
        }

    def test_problem_areas(self, posts):
        areas = negative_problem_areas(posts)
        assert [(a["name"], a["count"], a["percentage"]) for a in areas] == [
            ("Reliability Issues", 1, 100),
            ("Service Quality", 1, 100),
            ("Communication Problems", 0, 0),
            ("Pricing Issues", 0, 0),
        ]

    def test_keywords_padded_with_common_words(self, posts):
        words = negative_keywords(posts)
        assert [w["word"] for w in words] == [
            "Terrible", "Rude", "Late", "Cancelled", "Bad", "Poor", "Awful", "Horrible",
        ]
        assert [w["count"] for w in words[4:]] == [1, 1, 1, 1]

    def test_keywords_on_empty_input(self, now):
        words = negative_keywords(prepare_posts(pd.DataFrame(), now=now))
        assert [w["word"] for w in words] == list(DEFAULT_LEXICONS.common_negative_words)

    def test_recent_complaints(self, posts, now):
        assert recent_complaints(posts, now) == [{
            "issue": "Shoffr ride was terrible, driver was rude and late. Cancelled twice!...",
            "severity": "high",
            "time": "2 days ago",
            "engagement": 5,
        }]

    def test_complaints_newest_first(self, now):
        raw = pd.DataFrame({
            "text": ["shoffr was late", "shoffr was rude", "shoffr was dirty", "shoffr was awful"],
            "postedAtISO": ["2024-06-10T00:00:00Z", "2024-06-14T00:00:00Z",
                            "2024-06-12T00:00:00Z", "2024-06-11T00:00:00Z"],
            "Likes": [5, 25, 40, 0],
        })
        complaints = recent_complaints(prepare_posts(raw, now=now), now)
        assert [c["issue"] for c in complaints] == [
            "shoffr was rude...", "shoffr was dirty...", "shoffr was awful...",
        ]
        assert [c["severity"] for c in complaints] == ["medium", "low", "high"]


class TestBuildReports:
    def test_keys(self, posts, now):
        reports = build_reports(posts, now=now)
        assert set(reports) == {
            "keyInsights", "positiveFeedbackCategories", "positiveKeywords", "positiveReviewMetrics",
            "recentPraises", "negativeReviewMetrics", "negativeProblemAreas", "negativeKeywords",
            "recentComplaints",
        }

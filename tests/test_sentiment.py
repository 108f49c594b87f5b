import dataclasses

import pandas as pd
import pytest

from linkedin_insights.lexicons import DEFAULT_LEXICONS
from linkedin_insights.sentiment import (
    NEGATIVE,
    NEUTRAL,
    POSITIVE,
    classify_sentiment,
    engagement_bonus,
    label_posts,
    lexical_scores,
)


class TestOverrides:
    def test_hiring_post_is_neutral_regardless_of_engagement(self):
        assert classify_sentiment("We are hiring a driver", likes=500, comments=50, shares=20) == NEUTRAL
        assert classify_sentiment("We are hiring a driver") == NEUTRAL

    def test_direct_complaint_is_negative(self):
        text = "Terrible, unreliable service, very disappointed"
        assert classify_sentiment(text, likes=2, comments=1, shares=0) == NEGATIVE

    def test_positive_override_beats_engagement(self):
        assert classify_sentiment("Proud to share our milestone", likes=150) == POSITIVE
        assert classify_sentiment("Proud to share our milestone", likes=0) == POSITIVE

    def test_hiring_wins_over_positive_override(self):
        assert classify_sentiment("Excited to say we are hiring!") == NEUTRAL


class TestScoring:
    def test_no_matches_with_low_engagement_is_negative(self):
        # bonus -1 makes finalNegative 1 > finalPositive -1 and > business 0
        assert classify_sentiment("Sunday walk by the lake", likes=5) == NEGATIVE

    def test_no_matches_with_medium_engagement_is_neutral(self):
        assert classify_sentiment("Sunday walk by the lake", likes=20) == NEUTRAL

    def test_business_ties_are_neutral(self):
        # positive 1 + bonus 0 equals business 1
        assert classify_sentiment("Great company", likes=20) == NEUTRAL

    def test_lexical_scores_weights(self):
        pos, neg, biz = lexical_scores("amazing and good but slow and terrible team")
        assert pos == 3 + 1
        assert neg == 3 + 1
        assert biz == 1

    def test_hits_count_distinct_words_once(self):
        pos, _, _ = lexical_scores("good good good")
        assert pos == 1


class TestEngagementBonus:
    @pytest.mark.parametrize("likes,expected", [(101, 2), (100, 1), (51, 1), (50, 0), (10, 0), (9, -1)])
    def test_thresholds(self, likes, expected):
        assert engagement_bonus(likes, 0, 0) == expected

    def test_controversy_penalty(self):
        # 6 comments on 20 likes: ratio 0.3 with more than 5 comments
        assert engagement_bonus(20, 6, 0) == -1

    def test_zero_likes_has_no_ratio_penalty(self):
        assert engagement_bonus(0, 30, 0) == 0


class TestLabelPosts:
    def test_aligned_and_deterministic(self):
        frame = pd.DataFrame({
            "content": ["proud moment", "", "hiring now"],
            "likes": [1, 0, 300],
            "comments": [0, 0, 0],
            "shares": [0, 0, 0],
        }, index=[7, 8, 9])
        first = label_posts(frame)
        assert list(first.index) == [7, 8, 9]
        assert list(first) == [POSITIVE, NEGATIVE, NEUTRAL]
        assert list(label_posts(frame)) == list(first)

    def test_empty_frame(self):
        frame = pd.DataFrame(columns=["content", "likes", "comments", "shares"])
        assert label_posts(frame).empty

    def test_custom_lexicons(self):
        lex = dataclasses.replace(DEFAULT_LEXICONS, positive_overrides=("stellar",))
        assert classify_sentiment("A stellar quarter", lexicons=lex) == POSITIVE
        # "proud" is now only a scored word: 3 - 1 (low engagement) vs 0 + 1
        assert classify_sentiment("proud", lexicons=lex) == POSITIVE

"""
Rule-based sentiment labelling for LinkedIn posts.

The label is driven by override phrases first, then by weighted lexicon hits
adjusted with an engagement bonus. No model, no randomness: the same
(text, likes, comments, shares) always yields the same label.
"""
from __future__ import annotations

import pandas as pd

from linkedin_insights.lexicons import DEFAULT_LEXICONS, Lexicons, count_hits

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"

STRONG_WEIGHT = 3
MODERATE_WEIGHT = 1
BUSINESS_WEIGHT = 1

HIGH_ENGAGEMENT = 100   # > : +2
MEDIUM_ENGAGEMENT = 50  # > : +1
LOW_ENGAGEMENT = 10     # < : -1
CONTROVERSY_RATIO = 0.1
CONTROVERSY_MIN_COMMENTS = 5


def engagement_bonus(likes: int, comments: int, shares: int) -> int:
    total = likes + comments + shares
    if total > HIGH_ENGAGEMENT:
        bonus = 2
    elif total > MEDIUM_ENGAGEMENT:
        bonus = 1
    elif total < LOW_ENGAGEMENT:
        bonus = -1
    else:
        bonus = 0

    # many comments relative to likes reads as controversy
    ratio = comments / likes if likes > 0 else 0
    if ratio > CONTROVERSY_RATIO and comments > CONTROVERSY_MIN_COMMENTS:
        bonus -= 1
    return bonus


def lexical_scores(text: str, lexicons: Lexicons = DEFAULT_LEXICONS):
    """Return (positive, negative, business) scores for lower-cased text."""
    positive = (count_hits(text, lexicons.strong_positive) * STRONG_WEIGHT
                + count_hits(text, lexicons.moderate_positive) * MODERATE_WEIGHT)
    negative = (count_hits(text, lexicons.strong_negative) * STRONG_WEIGHT
                + count_hits(text, lexicons.moderate_negative) * MODERATE_WEIGHT)
    business = count_hits(text, lexicons.business) * BUSINESS_WEIGHT
    return positive, negative, business


def classify_sentiment(
    text: str,
    likes: int = 0,
    comments: int = 0,
    shares: int = 0,
    lexicons: Lexicons = DEFAULT_LEXICONS,
) -> str:
    lower = (text or "").lower()

    # override phrases short-circuit in priority order
    if any(p in lower for p in lexicons.hiring_phrases):
        return NEUTRAL
    if any(p in lower for p in lexicons.complaint_phrases):
        return NEGATIVE
    if any(p in lower for p in lexicons.positive_overrides):
        return POSITIVE

    positive, negative, business = lexical_scores(lower, lexicons)
    bonus = engagement_bonus(likes, comments, shares)
    final_positive = positive + bonus
    final_negative = negative - bonus

    if final_positive > final_negative and final_positive > business:
        return POSITIVE
    if final_negative > final_positive and final_negative > business:
        return NEGATIVE
    return NEUTRAL


def label_posts(posts: pd.DataFrame, lexicons: Lexicons = DEFAULT_LEXICONS) -> pd.Series:
    """Vector of labels aligned with `posts` (needs content/likes/comments/shares)."""
    if posts.empty:
        return pd.Series([], index=posts.index, dtype=object)
    return pd.Series(
        [
            classify_sentiment(text, int(lk), int(cm), int(sh), lexicons)
            for text, lk, cm, sh in zip(posts["content"], posts["likes"], posts["comments"], posts["shares"])
        ],
        index=posts.index,
        dtype=object,
    )

# linkedin_insights/reports.py
"""
Brand-focused report generators for the dashboard tabs.

Each function is a filter -> reduce -> format pass over the posts frame:
posts that mention the brand together with an experience / praise / complaint
term are tallied into categories, keyword leaderboards, excerpts and insight
sentences. Empty subsets yield 0 rates instead of NaN.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

import pandas as pd

from linkedin_insights.lexicons import DEFAULT_LEXICONS, Lexicons, Rule, matches
from linkedin_insights.metrics import (
    HIGH_ENGAGEMENT,
    extract_keywords,
    percent,
    round_half_up,
    safe_ratio,
    top_posts,
)

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 4
TOP_LEADERBOARD = 8
RECENT_COMPLAINTS = 3
RECENT_PRAISES = 3
COMPLAINT_EXCERPT = 80
PRAISE_EXCERPT = 100

POSITIVE_RATE_THRESHOLD = 50
ENGAGEMENT_INSIGHT_THRESHOLD = 80
HIGH_ENGAGEMENT_RATE_THRESHOLD = 15
MAX_INSIGHTS = 2

POSITIVE_PALETTE = [
    "bg-green-100 text-green-800",
    "bg-blue-100 text-blue-800",
    "bg-purple-100 text-purple-800",
    "bg-emerald-100 text-emerald-800",
    "bg-cyan-100 text-cyan-800",
    "bg-indigo-100 text-indigo-800",
    "bg-teal-100 text-teal-800",
    "bg-lime-100 text-lime-800",
]
NEGATIVE_PALETTE = [
    "bg-red-100 text-red-800",
    "bg-orange-100 text-orange-800",
    "bg-pink-100 text-pink-800",
    "bg-rose-100 text-rose-800",
    "bg-amber-100 text-amber-800",
    "bg-yellow-100 text-yellow-800",
]


# ----------------------------
# Filters
# ----------------------------
def _select(posts: pd.DataFrame, rule: Rule) -> pd.DataFrame:
    text = posts["content"].str.lower()
    mask = text.map(lambda t: matches(t, rule)).astype(bool)
    return posts.loc[mask]


def _brand_rule(lex: Lexicons, terms) -> Rule:
    return {"all": [lex.brand, list(terms)]}


def experience_posts(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> pd.DataFrame:
    return _select(posts, _brand_rule(lex, lex.experience_terms))


def positive_brand_posts(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> pd.DataFrame:
    return _select(posts, _brand_rule(lex, lex.positive_brand_terms))


def negative_brand_posts(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> pd.DataFrame:
    return _select(posts, _brand_rule(lex, lex.negative_brand_terms))


def _avg_engagement(sub: pd.DataFrame) -> int:
    return round_half_up(safe_ratio(int(sub["engagement"].sum()), len(sub)))


def _round1(x: float) -> float:
    return round_half_up(x * 10) / 10


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _ranked(counts: Dict[str, int], base: int, top_n: int) -> List[Dict[str, Any]]:
    # stable on ties: declaration order of the categories
    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:top_n]
    return [{"name": name, "count": count, "percentage": percent(count, base)} for name, count in ordered]


def time_ago(ts, now) -> str:
    hours = math.floor((pd.Timestamp(now) - pd.Timestamp(ts)).total_seconds() / 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hrs ago"
    return f"{hours // 24} days ago"


# ----------------------------
# Insights
# ----------------------------
def key_insights(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> List[Dict[str, Any]]:
    """
    Up to two narrative insights about brand experience posts. Threshold-gated
    templates first; two guaranteed fallbacks when fewer than two fired.
    """
    exp = experience_posts(posts, lex)
    n = len(exp)
    positive = _select(exp, list(lex.positive_experience_terms))
    negative = _select(exp, list(lex.negative_experience_terms))

    avg_eng = _avg_engagement(exp)
    positive_rate = percent(len(positive), n)
    negative_rate = percent(len(negative), n)
    high_rate = percent(int((exp["engagement"] > HIGH_ENGAGEMENT).sum()), n)
    brand = _capitalize(lex.brand)

    insights: List[Dict[str, Any]] = []
    if positive_rate > POSITIVE_RATE_THRESHOLD:
        insights.append({
            "type": "positive",
            "text": f"{brand} experience posts show strong satisfaction - {positive_rate}% of posts express positive experiences",
            "percentage": positive_rate,
        })
    elif avg_eng > ENGAGEMENT_INSIGHT_THRESHOLD:
        insights.append({
            "type": "positive",
            "text": f"{brand} experience content generates strong engagement with {avg_eng} average engagement",
            "percentage": round_half_up(avg_eng / 10),
        })

    if high_rate > HIGH_ENGAGEMENT_RATE_THRESHOLD:
        insights.append({
            "type": "growth",
            "text": f"{high_rate}% of {brand} experience posts achieve exceptional engagement (>{HIGH_ENGAGEMENT}), indicating strong brand resonance",
            "percentage": high_rate,
        })

    if positive_rate > negative_rate:
        insights.append({
            "type": "positive",
            "text": f"Customer experience quality is strong - {positive_rate}% positive vs {negative_rate}% negative mentions",
            "percentage": positive_rate,
        })

    if len(insights) < MAX_INSIGHTS:
        insights.append({
            "type": "positive",
            "text": f"{brand} experience posts average {avg_eng} engagement, showing strong customer interest",
            "percentage": round_half_up(avg_eng / 10),
        })
        insights.append({
            "type": "growth",
            "text": f"{n} posts discuss {brand} experience, indicating strong brand awareness",
            "percentage": percent(n, len(posts)),
        })

    logger.debug("Experience posts: %d (positive %d%%, negative %d%%)", n, positive_rate, negative_rate)
    return insights[:MAX_INSIGHTS]


# ----------------------------
# Positive tab
# ----------------------------
def positive_feedback_categories(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> List[Dict[str, Any]]:
    praise = positive_brand_posts(posts, lex)
    counts = {name: len(_select(praise, rule)) for name, rule in lex.feedback_categories.items()}
    return _ranked(counts, len(praise), TOP_CATEGORIES)


def positive_keywords(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> List[Dict[str, Any]]:
    praise = positive_brand_posts(posts, lex)
    words = extract_keywords(
        praise["content"],
        stop_words=lex.stop_words | lex.brand_stop_words,
        min_len=5,
        top_n=TOP_LEADERBOARD,
        drop_numeric=True,
    )
    return [
        {"word": _capitalize(w), "count": c, "color": POSITIVE_PALETTE[i % len(POSITIVE_PALETTE)]}
        for i, (w, c) in enumerate(words)
    ]


def positive_review_metrics(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> Dict[str, Any]:
    praise = positive_brand_posts(posts, lex)
    n = len(praise)
    driver = _select(praise, lex.praise_rules["driver"])
    wait = _select(praise, lex.praise_rules["wait_time"])
    vehicle = _select(praise, lex.praise_rules["vehicle"])
    app = _select(praise, lex.praise_rules["app"])

    driver_rating = min(5.0, max(3.5, 3.5 + safe_ratio(len(driver), n) * 1.5))
    wait_minutes = max(1.0, min(10.0, 5 - safe_ratio(len(wait), n) * 3))
    return {
        "avgDriverRating": _round1(driver_rating),
        "avgWaitTime": _round1(wait_minutes),
        "vehiclePraise": percent(len(vehicle), n),
        "appUXWins": percent(len(app), n),
        "driverEngagement": _avg_engagement(driver),
        "vehicleEngagement": _avg_engagement(vehicle),
        "appEngagement": _avg_engagement(app),
        "totalPositivePosts": n,
    }


def recent_praises(posts: pd.DataFrame, now) -> List[Dict[str, Any]]:
    return [
        {
            "praise": row.content[:PRAISE_EXCERPT] + "...",
            "time": time_ago(row.published_at, now),
            "rating": min(5, max(1, round_half_up(row.engagement / 200))),
        }
        for row in top_posts(posts, RECENT_PRAISES).itertuples(index=False)
    ]


# ----------------------------
# Negative tab
# ----------------------------
def negative_review_metrics(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> Dict[str, Any]:
    complaints = negative_brand_posts(posts, lex)
    n = len(complaints)
    driver = _select(complaints, lex.complaint_rules["driver"])
    wait = _select(complaints, lex.complaint_rules["wait_time"])
    vehicle = _select(complaints, lex.complaint_rules["vehicle"])
    app = _select(complaints, lex.complaint_rules["app"])

    driver_rating = max(1.0, min(3.5, 3.5 - safe_ratio(len(driver), n) * 2))
    wait_minutes = max(5.0, min(15.0, 5 + safe_ratio(len(wait), n) * 8))
    return {
        "avgDriverRating": _round1(driver_rating),
        "avgWaitTime": _round1(wait_minutes),
        "vehicleIssues": percent(len(vehicle), n),
        "appIssues": percent(len(app), n),
        "driverEngagement": _avg_engagement(driver),
        "waitEngagement": _avg_engagement(wait),
        "vehicleEngagement": _avg_engagement(vehicle),
        "appEngagement": _avg_engagement(app),
        "totalNegativePosts": n,
    }


def negative_problem_areas(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> List[Dict[str, Any]]:
    complaints = negative_brand_posts(posts, lex)
    counts = {name: len(_select(complaints, rule)) for name, rule in lex.problem_areas.items()}
    return _ranked(counts, len(complaints), TOP_CATEGORIES)


def negative_keywords(posts: pd.DataFrame, lex: Lexicons = DEFAULT_LEXICONS) -> List[Dict[str, Any]]:
    """
    Top negative words from complaint posts, padded to a full leaderboard with
    common negative words (count 1) that are not already listed.
    """
    complaints = negative_brand_posts(posts, lex)
    words = [
        (_capitalize(w), c)
        for w, c in extract_keywords(
            complaints["content"],
            stop_words=(),
            min_len=3,
            top_n=TOP_LEADERBOARD,
            vocabulary=lex.negative_vocabulary,
        )
    ]
    seen = {w.lower() for w, _ in words}
    for filler in lex.common_negative_words:
        if len(words) >= TOP_LEADERBOARD:
            break
        if filler.lower() not in seen:
            words.append((filler, 1))
            seen.add(filler.lower())
    return [
        {"word": w, "count": c, "color": NEGATIVE_PALETTE[i % len(NEGATIVE_PALETTE)]}
        for i, (w, c) in enumerate(words)
    ]


def _severity(engagement: int) -> str:
    # quiet complaints are the ones nobody answered
    if engagement < 10:
        return "high"
    if engagement < 30:
        return "medium"
    return "low"


def recent_complaints(posts: pd.DataFrame, now, lex: Lexicons = DEFAULT_LEXICONS) -> List[Dict[str, Any]]:
    complaints = negative_brand_posts(posts, lex)
    latest = complaints.sort_values("published_at", ascending=False, kind="stable").head(RECENT_COMPLAINTS)
    return [
        {
            "issue": row.content[:COMPLAINT_EXCERPT] + "...",
            "severity": _severity(int(row.engagement)),
            "time": time_ago(row.published_at, now),
            "engagement": int(row.engagement),
        }
        for row in latest.itertuples(index=False)
    ]


# ----------------------------
# Public entrypoint
# ----------------------------
def build_reports(posts: pd.DataFrame, *, now, lex: Lexicons = DEFAULT_LEXICONS) -> Dict[str, Any]:
    """All rule-derived sub-reports the dashboard needs, keyed by section field."""
    reports = {
        "keyInsights": key_insights(posts, lex),
        "positiveFeedbackCategories": positive_feedback_categories(posts, lex),
        "positiveKeywords": positive_keywords(posts, lex),
        "positiveReviewMetrics": positive_review_metrics(posts, lex),
        "recentPraises": recent_praises(posts, now),
        "negativeReviewMetrics": negative_review_metrics(posts, lex),
        "negativeProblemAreas": negative_problem_areas(posts, lex),
        "negativeKeywords": negative_keywords(posts, lex),
        "recentComplaints": recent_complaints(posts, now, lex),
    }
    logger.info(
        "Brand '%s': %d positive, %d negative posts",
        lex.brand,
        reports["positiveReviewMetrics"]["totalPositivePosts"],
        reports["negativeReviewMetrics"]["totalNegativePosts"],
    )
    return reports

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer

from linkedin_insights.data_prep import post_records
from linkedin_insights.lexicons import DEFAULT_LEXICONS, Lexicons

logger = logging.getLogger(__name__)

TOP_POSTS = 10
TOP_CONTROVERSIAL = 5
TOP_KEYWORDS = 30
TOP_AUTHORS = 5
TREND_DAYS = 7

HIGH_ENGAGEMENT = 100   # strictly above
LOW_ENGAGEMENT = 20     # strictly below; medium is the inclusive band between


@dataclass(frozen=True)
class TrendScale:
    """Linear proxy over a per-day average: avg(column) * factor / divisor."""
    column: str
    factor: float = 1.0
    divisor: float = 1.0


TREND_SCALES: Dict[str, TrendScale] = {
    "positive": TrendScale("likes", divisor=10),
    "negative": TrendScale("comments", factor=2),
    "queries": TrendScale("shares", factor=5),
}


def round_half_up(x: float) -> int:
    # the dashboard runtime rounds .5 up, not to even
    return int(math.floor(x + 0.5))


def safe_ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def percent(num: float, den: float) -> int:
    return round_half_up(safe_ratio(num, den) * 100)


def summarize_totals(posts: pd.DataFrame) -> Dict[str, float]:
    n = len(posts)
    out: Dict[str, float] = {"totalPosts": n}
    for col, key in (("engagement", "Engagement"), ("likes", "Likes"),
                     ("comments", "Comments"), ("shares", "Shares")):
        total = int(posts[col].sum()) if n else 0
        out[f"total{key}"] = total
    for col, key in (("engagement", "Engagement"), ("likes", "Likes"),
                     ("comments", "Comments"), ("shares", "Shares")):
        out[f"avg{key}"] = safe_ratio(out[f"total{key}"], n)
    return out


def sentiment_counts(posts: pd.DataFrame) -> Dict[str, int]:
    """Label -> count, only labels that occur, in first-seen order."""
    counts: Dict[str, int] = {}
    for label in posts["sentiment"]:
        counts[label] = counts.get(label, 0) + 1
    return counts


def engagement_tiers(posts: pd.DataFrame) -> Dict[str, int]:
    eng = posts["engagement"]
    return {
        "high": int((eng > HIGH_ENGAGEMENT).sum()),
        "medium": int(((eng >= LOW_ENGAGEMENT) & (eng <= HIGH_ENGAGEMENT)).sum()),
        "low": int((eng < LOW_ENGAGEMENT).sum()),
    }


def top_posts(posts: pd.DataFrame, n: int = TOP_POSTS) -> pd.DataFrame:
    # stable: equal engagement keeps source order
    return posts.sort_values("engagement", ascending=False, kind="stable").head(n)


def controversial_posts(posts: pd.DataFrame, n: int = TOP_CONTROVERSIAL) -> pd.DataFrame:
    sub = posts[(posts["likes"] > 0) & (posts["comments"] > 0)]
    ratio = sub["comments"] / sub["likes"]
    order = ratio.sort_values(ascending=False, kind="stable").index
    return sub.loc[order].head(n)


def _keyword_analyzer(stop_words: Iterable[str], min_len: int):
    vec = CountVectorizer(
        lowercase=True,
        token_pattern=rf"(?u)\b\w{{{min_len},}}\b",
        stop_words=sorted(stop_words) or None,
    )
    return vec.build_analyzer()


def extract_keywords(
    texts: Iterable[str],
    *,
    stop_words: Iterable[str] = DEFAULT_LEXICONS.stop_words,
    min_len: int = 4,
    top_n: int = TOP_KEYWORDS,
    vocabulary: Optional[Iterable[str]] = None,
    drop_numeric: bool = False,
) -> List[Tuple[str, int]]:
    """
    Word frequencies over the concatenated texts. Tokens shorter than `min_len`
    and stop words are dropped; `vocabulary` restricts to a whitelist.
    Ties keep first-occurrence order.
    """
    analyzer = _keyword_analyzer(stop_words, min_len)
    tokens = analyzer(" ".join(str(t) for t in texts))
    if vocabulary is not None:
        allowed = set(vocabulary)
        tokens = [t for t in tokens if t in allowed]
    if drop_numeric:
        tokens = [t for t in tokens if not t.isdigit()]
    if not tokens:
        return []
    s = pd.Series(tokens)
    counts = s.groupby(s, sort=False).size().sort_values(ascending=False, kind="stable").head(top_n)
    return [(str(word), int(count)) for word, count in counts.items()]


def daily_trends(
    posts: pd.DataFrame,
    days: int = TREND_DAYS,
    scales: Dict[str, TrendScale] = TREND_SCALES,
) -> List[Dict[str, object]]:
    """
    Bucket by UTC calendar day, keep the most recent `days` buckets present in
    the data (chronological), and map per-day averages to proxy metrics.
    """
    if posts.empty:
        return []
    day = posts["published_at"].dt.tz_convert("UTC").dt.strftime("%Y-%m-%d")
    daily = (posts.assign(day=day)
                  .groupby("day")
                  .agg(posts=("id", "size"),
                       engagement=("engagement", "sum"),
                       likes=("likes", "sum"),
                       comments=("comments", "sum"),
                       shares=("shares", "sum"))
                  .sort_index()
                  .tail(days))
    rows = []
    for key, d in daily.iterrows():
        row: Dict[str, object] = {"day": key.split("-")[2]}
        for name, scale in scales.items():
            avg = d[scale.column] / d["posts"]
            row[name] = round_half_up(avg * scale.factor / scale.divisor)
        rows.append(row)
    return rows


def author_performance(posts: pd.DataFrame, n: int = TOP_AUTHORS) -> List[Dict[str, object]]:
    if posts.empty:
        return []
    agg = posts.groupby("author", sort=False).agg(
        posts=("id", "size"),
        totalEngagement=("engagement", "sum"),
        totalLikes=("likes", "sum"),
        totalComments=("comments", "sum"),
        totalShares=("shares", "sum"),
    ).reset_index()
    agg["avgEngagement"] = [round_half_up(t / p) for t, p in zip(agg["totalEngagement"], agg["posts"])]
    agg = agg.sort_values("avgEngagement", ascending=False, kind="stable").head(n)
    return [
        {k: (v.item() if isinstance(v, np.generic) else v) for k, v in rec.items()}
        for rec in agg.to_dict(orient="records")
    ]


def build_analytics(
    posts: pd.DataFrame,
    lexicons: Lexicons = DEFAULT_LEXICONS,
    *,
    top_keywords: int = TOP_KEYWORDS,
    trend_days: int = TREND_DAYS,
) -> Dict[str, object]:
    """Corpus-level aggregates, recomputed from scratch on every run."""
    analytics: Dict[str, object] = dict(summarize_totals(posts))
    analytics["sentimentCounts"] = sentiment_counts(posts)
    analytics["engagementTiers"] = engagement_tiers(posts)
    analytics["topPosts"] = post_records(top_posts(posts))
    analytics["controversialPosts"] = post_records(controversial_posts(posts))
    analytics["keywords"] = [
        {"word": w, "count": c}
        for w, c in extract_keywords(posts["content"], stop_words=lexicons.stop_words, top_n=top_keywords)
    ]
    analytics["trends"] = daily_trends(posts, days=trend_days)
    analytics["authorPerformance"] = author_performance(posts)
    logger.info(
        "Analytics: %d posts, %d total engagement, sentiment %s",
        analytics["totalPosts"], analytics["totalEngagement"], analytics["sentimentCounts"],
    )
    return analytics

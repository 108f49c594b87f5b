"""
High-level orchestration: read sheet -> prepare posts -> analytics -> brand
reports -> dashboard document -> write outputs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from linkedin_insights.dashboard import build_dashboard
from linkedin_insights.data_prep import as_utc, load_raw_posts, post_records, prepare_posts, utc_now
from linkedin_insights.lexicons import DEFAULT_LEXICONS, Lexicons
from linkedin_insights.metrics import TOP_KEYWORDS, TREND_DAYS, build_analytics
from linkedin_insights.reports import build_reports
from linkedin_insights.storage import write_outputs

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    posts: pd.DataFrame
    analytics: Dict[str, Any]
    dashboard: Dict[str, Any]
    written: List[Path] = field(default_factory=list)

    def post_list(self) -> List[Dict[str, Any]]:
        return post_records(self.posts)


def process(
    raw: pd.DataFrame,
    *,
    now=None,
    lexicons: Lexicons = DEFAULT_LEXICONS,
    top_keywords: int = TOP_KEYWORDS,
    trend_days: int = TREND_DAYS,
) -> PipelineResult:
    """In-memory transformation; deterministic for the same `raw` and `now`."""
    clock = as_utc(now) if now is not None else utc_now()
    posts = prepare_posts(raw, now=clock, lexicons=lexicons)
    analytics = build_analytics(posts, lexicons, top_keywords=top_keywords, trend_days=trend_days)
    reports = build_reports(posts, now=clock, lex=lexicons)
    dashboard = build_dashboard(analytics, reports)
    return PipelineResult(posts=posts, analytics=analytics, dashboard=dashboard)


def export_charts(result: PipelineResult, charts_dir: Path) -> List[Path]:
    # matplotlib is only pulled in when charts are requested
    from linkedin_insights.viz import export_top_posts, plot_daily_trends, plot_sentiment_share

    charts_dir = Path(charts_dir)
    paths = [charts_dir / "daily_trends.png", charts_dir / "sentiment_share.png", charts_dir / "top_posts.csv"]
    plot_daily_trends(result.analytics["trends"], out_path=str(paths[0]))
    plot_sentiment_share(result.analytics["sentimentCounts"], out_path=str(paths[1]))
    export_top_posts(result.posts, out_csv_path=str(paths[2]))
    logger.info("Exported charts to %s", charts_dir)
    return paths


def run_pipeline(
    input_path: Path,
    output_dir: Path,
    *,
    sheet: Optional[str] = None,
    now=None,
    lexicons: Lexicons = DEFAULT_LEXICONS,
    top_keywords: int = TOP_KEYWORDS,
    trend_days: int = TREND_DAYS,
    charts_dir: Optional[Path] = None,
) -> PipelineResult:
    raw = load_raw_posts(input_path, sheet=sheet)
    result = process(raw, now=now, lexicons=lexicons, top_keywords=top_keywords, trend_days=trend_days)
    result.written = write_outputs(output_dir, result.post_list(), result.analytics, result.dashboard)
    if charts_dir:
        result.written.extend(export_charts(result, charts_dir))
    a = result.analytics
    logger.info(
        "Processed %d posts: engagement %d (avg %.1f), tiers %s, sentiment %s",
        a["totalPosts"], a["totalEngagement"], a["avgEngagement"], a["engagementTiers"], a["sentimentCounts"],
    )
    return result

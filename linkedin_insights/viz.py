from __future__ import annotations
import os, textwrap
from typing import Dict, List, Optional, Tuple
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from linkedin_insights.dashboard import sentiment_color
from linkedin_insights.metrics import top_posts

def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)

def _wrap(s: str, width: int) -> str:
    s = (s or "").strip()
    return "\n".join(textwrap.wrap(s, width=width)) if s else ""

def _finish(fig: plt.Figure, out_path: Optional[str], show: bool) -> Optional[str]:
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
        saved = out_path
    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved


def plot_daily_trends(
    trends: List[Dict[str, object]],
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """
    Line chart of the per-day proxies (positive / negative / queries) for the
    trend window. Expects the `trends` list from build_analytics.
    """
    fig, ax = plt.subplots(figsize=(10, 4))
    if trends:
        x = np.arange(len(trends))
        labels = [str(t["day"]) for t in trends]
        for key, color in (("positive", sentiment_color("positive")),
                           ("negative", sentiment_color("negative")),
                           ("queries", sentiment_color("neutral"))):
            ax.plot(x, [t[key] for t in trends], marker="o", linewidth=1.8, color=color, label=key)
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.legend(fontsize=9)
    else:
        ax.text(0.5, 0.5, "No dated posts", ha="center", va="center", transform=ax.transAxes)
    ax.set_title(f"Daily engagement proxies (last {len(trends)} days with posts)")
    ax.set_xlabel("Day of month")
    ax.set_ylabel("Normalized value")
    fig.tight_layout()
    return fig, ax, _finish(fig, out_path, show)


def plot_sentiment_share(
    sentiment_counts: Dict[str, int],
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Horizontal bars: share of posts per sentiment label, with counts."""
    total = sum(sentiment_counts.values())
    labels = list(sentiment_counts)
    shares = [100.0 * sentiment_counts[k] / total if total else 0.0 for k in labels]

    fig, ax = plt.subplots(figsize=(7, 3))
    bars = ax.barh(labels, shares, color=[sentiment_color(k) for k in labels])
    for bar, label in zip(bars, labels):
        ax.text(bar.get_width() + 1, bar.get_y() + bar.get_height() / 2,
                f"{sentiment_counts[label]} posts", va="center", fontsize=9)
    ax.set_xlim(0, 110)
    ax.set_xlabel("% of posts")
    ax.set_title(f"Sentiment share ({total} posts)")
    fig.tight_layout()
    return fig, ax, _finish(fig, out_path, show)


def export_top_posts(
    posts: pd.DataFrame,
    out_csv_path: Optional[str] = None,
    top_n: int = 20,
    wrap_content: int = 0,
) -> pd.DataFrame:
    """
    Save (and return) the top posts by engagement.

    Requires columns: ['id','author','content','likes','comments','shares','engagement','sentiment','published_at'].
    """
    required = {"id", "author", "content", "likes", "comments", "shares", "engagement", "sentiment", "published_at"}
    missing = required - set(posts.columns)
    if missing:
        raise ValueError(f"posts is missing columns: {missing}")

    top = top_posts(posts, top_n)[sorted(required, key=list(posts.columns).index)].copy()
    if wrap_content:
        top["content"] = top["content"].map(lambda s: _wrap(s, wrap_content))
    if out_csv_path:
        _ensure_dir(out_csv_path)
        top.to_csv(out_csv_path, index=False)
    return top

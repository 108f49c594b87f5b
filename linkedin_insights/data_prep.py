# --- ingestion: raw spreadsheet rows -> canonical posts frame ---
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from linkedin_insights.lexicons import DEFAULT_LEXICONS, Lexicons
from linkedin_insights.sentiment import label_posts

logger = logging.getLogger(__name__)

# first present, parseable column wins
FIELD_ALIASES: Dict[str, Sequence[str]] = {
    "content":     ("text", "content", "post"),
    "author":      ("authorName", "author", "user"),
    "occupation":  ("occupation",),
    "published_at": ("postedAtISO", "date", "timestamp"),
    "likes":       ("Likes", "likes", "reactions"),
    "comments":    ("Comments", "comments"),
    "shares":      ("Shares", "shares", "reposts"),
    "source_url":  ("url",),
    "is_repost":   ("isRepost",),
    "author_type": ("authorType",),
    "post_type":   ("type",),
}

TEXT_DEFAULTS = {
    "content": "",
    "author": "Unknown",
    "occupation": "",
    "source_url": "",
    "author_type": "Person",
    "post_type": "text",
}

HASHTAG_RX = re.compile(r"#(\w+)")
REACH_PER_LIKE = 10
CLICKS_PER_LIKE = 0.1

# internal column -> serialized key, in output order
POST_FIELDS = {
    "id": "id",
    "content": "content",
    "author": "author",
    "occupation": "occupation",
    "published_at": "publishedAt",
    "likes": "likes",
    "comments": "comments",
    "shares": "shares",
    "engagement": "engagement",
    "sentiment": "sentiment",
    "hashtags": "hashtags",
    "reach": "reach",
    "clicks_estimate": "clicksEstimate",
    "source_url": "sourceUrl",
    "is_repost": "isRepost",
    "author_type": "authorType",
    "post_type": "postType",
}


def utc_now() -> pd.Timestamp:
    return pd.Timestamp(datetime.now(timezone.utc))


def as_utc(ts) -> pd.Timestamp:
    ts = pd.Timestamp(ts)
    return ts.tz_localize("UTC") if ts.tz is None else ts.tz_convert("UTC")


def iso_utc(ts: pd.Timestamp) -> str:
    """Millisecond ISO-8601 with a Z suffix, the format the dashboard parses."""
    ts = as_utc(ts)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def load_raw_posts(path, sheet: Optional[str] = None) -> pd.DataFrame:
    """
    Read the source sheet as-is. Supports .xlsx/.xls (first sheet unless `sheet`
    is given) and .csv. Missing files raise FileNotFoundError.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input dataset not found: {path}")
    suffix = path.suffix.lower()
    if suffix in (".xlsx", ".xls"):
        df = pd.read_excel(path, sheet_name=sheet if sheet else 0)
    elif suffix == ".csv":
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported input format '{suffix}' for {path}; expected .xlsx, .xls or .csv")
    logger.info("Loaded %d raw rows (%d columns) from %s", len(df), len(df.columns), path)
    return df


# ----------------------------
# Per-field coercion
# ----------------------------
def _is_blank(v) -> bool:
    if v is None:
        return True
    if isinstance(v, str):
        return v.strip() == ""
    try:
        return bool(pd.isna(v))
    except (TypeError, ValueError):
        return False


def _present(col: pd.Series) -> pd.Series:
    """Mask of cells holding a usable (non-blank, non-NA) value."""
    return ~col.astype(object).map(_is_blank).astype(bool)


def _first_text(raw: pd.DataFrame, aliases: Sequence[str], default: str) -> pd.Series:
    out = pd.Series(default, index=raw.index, dtype=object)
    filled = pd.Series(False, index=raw.index, dtype=bool)
    for name in aliases:
        if name not in raw.columns:
            continue
        col = raw[name].astype(object)
        take = _present(col) & ~filled
        # only non-blank cells are stringified; NA never becomes "nan"
        out.loc[take] = col[take].map(str)
        filled |= take
    return out.astype(str)


def _first_count(raw: pd.DataFrame, aliases: Sequence[str]) -> pd.Series:
    out = pd.Series(np.nan, index=raw.index, dtype=float)
    for name in aliases:
        if name not in raw.columns:
            continue
        col = raw[name]
        if not pd.api.types.is_numeric_dtype(col):
            col = col.astype(object).map(lambda v: None if _is_blank(v) else str(v).replace(",", "").strip())
        parsed = pd.to_numeric(col, errors="coerce").astype(float)
        # "inf" / "1e400" parse, but are not counts
        parsed = parsed.replace([np.inf, -np.inf], np.nan)
        out = out.fillna(parsed)
    bad = int(out.isna().sum())
    if bad and len(raw):
        logger.debug("%d row(s) without a usable %s value; defaulting to 0", bad, aliases[0])
    # truncate like an integer parse, never below zero
    return np.trunc(out.fillna(0)).clip(lower=0).astype(int)


def _first_timestamp(raw: pd.DataFrame, aliases: Sequence[str], now: pd.Timestamp) -> pd.Series:
    out = pd.Series(pd.NaT, index=raw.index, dtype="datetime64[ns, UTC]")
    for name in aliases:
        if name not in raw.columns:
            continue
        # strip zero-width/BOM before parsing, keep UTC
        ts_norm = (raw[name].astype(str)
                   .str.strip()
                   .str.replace(r"[\u200b\u200e\ufeff]", "", regex=True))
        parsed = pd.to_datetime(ts_norm, errors="coerce", utc=True, format="mixed")
        out = out.fillna(parsed)
    return out.fillna(now)


def _to_bool(v) -> bool:
    if isinstance(v, (bool, np.bool_)):
        return bool(v)
    if isinstance(v, (int, float, np.integer, np.floating)):
        return bool(v) and not pd.isna(v)
    return str(v).strip().lower() in {"true", "1", "yes", "y"}


def _first_flag(raw: pd.DataFrame, aliases: Sequence[str]) -> pd.Series:
    for name in aliases:
        if name in raw.columns:
            col = raw[name].astype(object)
            return col.map(lambda v: False if _is_blank(v) else _to_bool(v)).astype(bool)
    return pd.Series(False, index=raw.index, dtype=bool)


def normalize_posts(raw: pd.DataFrame, *, now=None) -> pd.DataFrame:
    """
    One canonical row per raw row, in source order. Rows are never dropped:
    missing text -> defaults, bad counters -> 0, bad timestamps -> `now`.
    """
    clock = as_utc(now) if now is not None else utc_now()
    raw = raw.reset_index(drop=True)
    out = pd.DataFrame(index=raw.index)
    out["id"] = np.arange(1, len(raw) + 1, dtype=int)
    for name in ("content", "author", "occupation"):
        out[name] = _first_text(raw, FIELD_ALIASES[name], TEXT_DEFAULTS[name])
    out["published_at"] = _first_timestamp(raw, FIELD_ALIASES["published_at"], clock)
    for name in ("likes", "comments", "shares"):
        out[name] = _first_count(raw, FIELD_ALIASES[name])
    for name in ("source_url", "author_type", "post_type"):
        out[name] = _first_text(raw, FIELD_ALIASES[name], TEXT_DEFAULTS[name])
    out["is_repost"] = _first_flag(raw, FIELD_ALIASES["is_repost"])
    return out


def extract_hashtags(text: str) -> List[str]:
    tags: List[str] = []
    for tag in HASHTAG_RX.findall(text or ""):
        if tag not in tags:
            tags.append(tag)
    return tags


def enrich_posts(posts: pd.DataFrame, lexicons: Lexicons = DEFAULT_LEXICONS) -> pd.DataFrame:
    """
    Add derived features:
      engagement, hashtags, reach/clicks heuristics, sentiment label
    """
    out = posts.copy()
    out["engagement"] = out["likes"] + out["comments"] + out["shares"]
    out["hashtags"] = out["content"].map(extract_hashtags)
    out["reach"] = out["likes"] * REACH_PER_LIKE
    out["clicks_estimate"] = np.floor(out["likes"] * CLICKS_PER_LIKE).astype(int)
    out["sentiment"] = label_posts(out, lexicons)
    return out[[c for c in POST_FIELDS if c in out.columns]]


def prepare_posts(raw: pd.DataFrame, *, now=None, lexicons: Lexicons = DEFAULT_LEXICONS) -> pd.DataFrame:
    posts = enrich_posts(normalize_posts(raw, now=now), lexicons)
    logger.info("Prepared %d posts", len(posts))
    return posts


def post_records(posts: pd.DataFrame) -> List[dict]:
    """Serialize a posts frame (or a slice of it) to JSON-ready camelCase dicts."""
    records = []
    for row in posts.itertuples(index=False):
        rec = {}
        for col, key in POST_FIELDS.items():
            value = getattr(row, col)
            if col == "published_at":
                value = iso_utc(value)
            elif isinstance(value, (np.integer,)):
                value = int(value)
            elif isinstance(value, np.bool_):
                value = bool(value)
            elif isinstance(value, list):
                value = list(value)
            rec[key] = value
        records.append(rec)
    return records

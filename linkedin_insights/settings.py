"""
Centralised settings for the insights pipeline (env-first, code-light).

CLI options override these; everything has a default so a bare
`linkedin-insights run` works from the project root.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_INPUT = Path("data") / "linkedin_posts_dataset.xlsx"
DEFAULT_OUTPUT_DIR = Path("data")


@dataclass
class PipelineSettings:
    input_path: Path
    output_dir: Path
    sheet: Optional[str]
    brand: Optional[str]  # None: lexicon file or built-in default decides
    lexicons_path: Optional[Path]
    top_keywords: int
    trend_days: int


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
        return value if value > 0 else default
    except ValueError:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default


def _path_from_env(key: str) -> Optional[Path]:
    raw = (os.getenv(key) or "").strip()
    return Path(raw) if raw else None


def load_settings() -> PipelineSettings:
    return PipelineSettings(
        input_path=_path_from_env("LINKEDIN_INPUT_PATH") or DEFAULT_INPUT,
        output_dir=_path_from_env("LINKEDIN_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
        sheet=(os.getenv("LINKEDIN_SHEET") or "").strip() or None,
        brand=(os.getenv("LINKEDIN_BRAND") or "").strip().lower() or None,
        lexicons_path=_path_from_env("LINKEDIN_LEXICONS_PATH"),
        top_keywords=_int_from_env("LINKEDIN_TOP_KEYWORDS", 30),
        trend_days=_int_from_env("LINKEDIN_TREND_DAYS", 7),
    )

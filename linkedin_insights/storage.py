"""Writers for the three pipeline documents."""
from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

POSTS_FILE = "linkedinData.json"
ANALYTICS_FILE = "linkedinAnalytics.json"
DASHBOARD_FILE = "dashboardData.json"


def dumps(data: Any) -> str:
    """Unified formatting: UTF-8 text, indent=2, trailing newline."""
    return json.dumps(data, ensure_ascii=False, indent=2, allow_nan=False) + "\n"


def _stage(path: Path, text: str) -> Path:
    """Write `text` to a temp sibling of `path` and return the temp path."""
    if path.is_dir():
        raise IsADirectoryError(f"Output target is a directory: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as fp:
            fp.write(text)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def write_outputs(
    output_dir: Path,
    posts: List[Dict[str, Any]],
    analytics: Dict[str, Any],
    dashboard: Dict[str, Any],
) -> List[Path]:
    """
    Serialize all documents, stage every file as a temp sibling, and only then
    rename them into place. A serialization or staging error (a NaN that
    slipped through, an unwritable target) leaves every existing output as it
    was.
    """
    output_dir = Path(output_dir)
    rendered: List[Tuple[Path, str]] = [
        (output_dir / POSTS_FILE, dumps({"posts": posts})),
        (output_dir / ANALYTICS_FILE, dumps(analytics)),
        (output_dir / DASHBOARD_FILE, dumps(dashboard)),
    ]
    staged: List[Tuple[Path, Path]] = []
    try:
        for path, text in rendered:
            staged.append((path, _stage(path, text)))
        for path, tmp_path in staged:
            tmp_path.replace(path)
    finally:
        for _, tmp_path in staged:
            tmp_path.unlink(missing_ok=True)

    written = []
    for path, text in rendered:
        written.append(path)
        logger.info("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))
    return written

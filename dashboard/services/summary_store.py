"""
Summary Store — load the built summary table for the dashboard.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from stormimpact.build.aggregate import SUMMARY_COLUMNS
from stormimpact.build.build_summary import SUMMARY_FILENAME
from stormimpact.config_paths import FINAL_DATA_DIR
from stormimpact.logging_config import setup_logger

logger = setup_logger("dashboard.summary_store")


def summary_path() -> Path:
    return FINAL_DATA_DIR / SUMMARY_FILENAME


def load_summary() -> pd.DataFrame | None:
    """Return the summary table, or None if the build step has not run."""
    path = summary_path()
    if not path.exists():
        logger.warning("Summary not built yet: %s", path)
        return None
    df = pd.read_csv(path, encoding="utf-8")
    missing = [c for c in SUMMARY_COLUMNS if c not in df.columns]
    if missing:
        logger.error("Summary file %s is missing columns %s", path.name, missing)
        return None
    return df[SUMMARY_COLUMNS]


def to_records(df: pd.DataFrame) -> list[dict]:
    """JSON-ready rows."""
    return df.to_dict(orient="records")

"""
Shared Cleaning Utilities
=========================

Helpers used by the storm data clean step.
"""

from __future__ import annotations

import pandas as pd

from stormimpact.clean.classify import EventCategory
from stormimpact.logging_config import setup_logger

logger = setup_logger("clean.utils")


# ---------------------------------------------------------------------------
# check_missing_values
# ---------------------------------------------------------------------------

def check_missing_values(df: pd.DataFrame) -> dict:
    """Return a dict {col_name: {count, pct}} for columns with any nulls."""
    missing: dict = {}
    for col in df.columns:
        n_null = int(df[col].isna().sum())
        if n_null > 0:
            missing[col] = {
                "count": n_null,
                "pct": round(n_null / len(df) * 100, 2) if len(df) > 0 else 0.0,
            }
    return missing


# ---------------------------------------------------------------------------
# standardize_column_names
# ---------------------------------------------------------------------------

def standardize_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """Uppercase and strip column names to match the NOAA header."""
    df = df.copy()
    df.columns = [str(c).strip().upper() for c in df.columns]
    return df


# ---------------------------------------------------------------------------
# top_unmatched_event_types
# ---------------------------------------------------------------------------

def top_unmatched_event_types(
    raw_event_types: pd.Series,
    categories: pd.Series,
    limit: int = 10,
) -> dict[str, int]:
    """Most frequent raw labels that fell through to Other."""
    unmatched = raw_event_types[categories == EventCategory.OTHER.value]
    counts = unmatched.fillna("").astype(str).str.strip().str.upper().value_counts()
    return {label: int(n) for label, n in counts.head(limit).items()}


# ---------------------------------------------------------------------------
# generate_cleaning_report
# ---------------------------------------------------------------------------

def generate_cleaning_report(
    df_before: pd.DataFrame,
    df_after: pd.DataFrame,
    dataset_name: str,
) -> dict:
    """Return a summary dict describing what changed during cleaning."""
    report = {
        "dataset_name": dataset_name,
        "rows_before": len(df_before),
        "rows_after": len(df_after),
        "rows_dropped": len(df_before) - len(df_after),
        "columns_cleaned": list(df_after.columns),
        "null_summary": check_missing_values(df_before),
    }
    if "category" in df_after.columns:
        report["category_counts"] = {
            str(k): int(v) for k, v in df_after["category"].value_counts().items()
        }
        if "event_type" in df_after.columns:
            report["top_unmatched"] = top_unmatched_event_types(
                df_after["event_type"], df_after["category"]
            )
    return report

"""
Clean NOAA Storm Data
=====================

Reads the raw Storm Data table (StormData.csv.bz2 or any CSV with the
same header) from RAW_DATA_DIR, classifies event types, decodes
property and crop damage, and writes a tidy table to PROCESSED_DATA_DIR:

    event_type, category, fatalities, injuries, property_damage, crop_damage
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import numpy as np
import pandas as pd

from stormimpact.clean.classify import classify_series
from stormimpact.clean.clean_utils import generate_cleaning_report, standardize_column_names
from stormimpact.clean.damage import UNIT_DIVISOR, compute_damage_series
from stormimpact.config_manager import load_config
from stormimpact.config_paths import PROCESSED_DATA_DIR, RAW_DATA_DIR
from stormimpact.exceptions import RecordShapeError
from stormimpact.logging_config import setup_logger
from stormimpact.records import COUNT_LIMIT, NOAA_FIELDS, StormEventRecord

logger = setup_logger("clean.storm_data")

REQUIRED_COLUMNS = list(NOAA_FIELDS)
CLEANED_FILENAME = "cleaned_storm_events.csv"


def load_storm_events(path: Path) -> pd.DataFrame:
    """Read the seven Storm Data columns; compression is inferred from the suffix."""
    header = standardize_column_names(pd.read_csv(path, nrows=0))
    missing = [c for c in REQUIRED_COLUMNS if c not in header.columns]
    if missing:
        raise RecordShapeError(missing)

    # Magnitude codes mix digits and letters; read everything as text and
    # let the clean step coerce the numeric columns.
    df = pd.read_csv(
        path,
        usecols=lambda c: str(c).strip().upper() in NOAA_FIELDS,
        dtype=str,
        keep_default_na=False,
        low_memory=False,
    )
    df = standardize_column_names(df)
    logger.info("  Loaded %s: %s rows", path.name, f"{len(df):,}")
    return df[REQUIRED_COLUMNS]


def _to_count(values: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(values, errors="coerce")
    valid = numeric.notna() & np.isfinite(numeric) & (numeric >= 0) & (numeric < COUNT_LIMIT)
    n_bad = int((~valid & (values.astype(str).str.strip() != "")).sum())
    if n_bad:
        logger.warning("  %d unparseable, negative or oversized count value(s); using 0", n_bad)
    return numeric.where(valid, 0).astype("int64")


def clean_storm_events(df: pd.DataFrame, unit_divisor: float = UNIT_DIVISOR) -> pd.DataFrame:
    """Classify and decode a raw Storm Data table."""
    df = standardize_column_names(df)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise RecordShapeError(missing)

    cleaned = pd.DataFrame(index=df.index)
    cleaned["event_type"] = df["EVTYPE"].fillna("").astype(str).str.strip()

    # 1. Categories
    cleaned["category"] = classify_series(df["EVTYPE"])

    # 2. Health counts
    cleaned["fatalities"] = _to_count(df["FATALITIES"])
    cleaned["injuries"] = _to_count(df["INJURIES"])

    # 3. Damage in reporting units
    cleaned["property_damage"] = compute_damage_series(df["PROPDMG"], df["PROPDMGEXP"], unit_divisor)
    cleaned["crop_damage"] = compute_damage_series(df["CROPDMG"], df["CROPDMGEXP"], unit_divisor)

    return cleaned.reset_index(drop=True)


def iter_records(df: pd.DataFrame) -> Iterator[StormEventRecord]:
    """Yield one StormEventRecord per row of a raw Storm Data table."""
    df = standardize_column_names(df)
    for index, row in enumerate(df.to_dict(orient="records")):
        yield StormEventRecord.from_mapping(row, index=index)


def main(input_path: Path | None = None, unit_divisor: float | None = None) -> Path:
    logger.info("=" * 60)
    logger.info("CLEAN STORM DATA")
    logger.info("=" * 60)

    config = load_config()
    input_path = input_path or RAW_DATA_DIR / config["raw_filename"]
    if unit_divisor is None:
        unit_divisor = float(config["unit_divisor"])

    if not input_path.exists():
        raise FileNotFoundError(f"Storm data not found: {input_path}")

    df_raw = load_storm_events(input_path)
    cleaned = clean_storm_events(df_raw, unit_divisor=unit_divisor)

    report = generate_cleaning_report(df_raw, cleaned, input_path.name)
    logger.info(
        "  %s: rows %d -> %d, %d categories",
        input_path.name,
        report["rows_before"],
        report["rows_after"],
        len(report.get("category_counts", {})),
    )
    if report.get("top_unmatched"):
        logger.info("  Most frequent unmatched event types: %s", report["top_unmatched"])

    PROCESSED_DATA_DIR.mkdir(parents=True, exist_ok=True)
    out_path = PROCESSED_DATA_DIR / CLEANED_FILENAME
    cleaned.to_csv(out_path, index=False)
    logger.info("  Saved -> %s", out_path.name)
    return out_path


if __name__ == "__main__":
    main()

"""
Build Storm Impact Summary
==========================

Turns the cleaned event table into the presentation tables:

1. storm_impact_summary.csv   one row per category (FINAL_DATA_DIR)
2. health_impact_long.csv     category, metric, count (TABLES_DIR)
3. economic_impact_long.csv   category, metric, amount (TABLES_DIR)
4. health_ranked.csv / economic_ranked.csv
                              categories ordered by total impact (TABLES_DIR)
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from stormimpact.build.aggregate import melt_economic, melt_health, summarize_frame
from stormimpact.clean.clean_storm_data import CLEANED_FILENAME
from stormimpact.config_manager import load_config
from stormimpact.config_paths import FINAL_DATA_DIR, PROCESSED_DATA_DIR, TABLES_DIR
from stormimpact.logging_config import setup_logger

logger = setup_logger("build.summary")

SUMMARY_FILENAME = "storm_impact_summary.csv"
TABLE_FILENAMES = {
    "health_long": "health_impact_long.csv",
    "economic_long": "economic_impact_long.csv",
    "health_ranked": "health_ranked.csv",
    "economic_ranked": "economic_ranked.csv",
}


def _rank(summary: pd.DataFrame, total_col: str, parts: list[str], top_n: int | None) -> pd.DataFrame:
    if top_n is not None and top_n < 1:
        raise ValueError(f"top_n must be at least 1, got {top_n}")
    ranked = summary.copy()
    ranked[total_col] = ranked[parts].sum(axis=1)
    # Ties break on category name so the order is stable across runs
    ranked = ranked.sort_values([total_col, "category"], ascending=[False, True])
    if top_n is not None:
        ranked = ranked.head(top_n)
    return ranked.reset_index(drop=True)


def rank_by_health(summary: pd.DataFrame, top_n: int | None = None) -> pd.DataFrame:
    """Categories ordered by fatalities + injuries, highest first."""
    return _rank(summary, "total_health", ["fatalities", "injuries"], top_n)


def rank_by_economic(summary: pd.DataFrame, top_n: int | None = None) -> pd.DataFrame:
    """Categories ordered by property + crop damage, highest first."""
    return _rank(summary, "total_damage", ["property_damage", "crop_damage"], top_n)


def build_summary_tables(cleaned: pd.DataFrame, top_n: int | None = None) -> dict[str, pd.DataFrame]:
    summary = summarize_frame(cleaned)
    return {
        "summary": summary,
        "health_long": melt_health(summary),
        "economic_long": melt_economic(summary),
        "health_ranked": rank_by_health(summary, top_n),
        "economic_ranked": rank_by_economic(summary, top_n),
    }


def write_summary_tables(
    tables: dict[str, pd.DataFrame],
    final_dir: Path | None = None,
    tables_dir: Path | None = None,
) -> dict[str, Path]:
    final_dir = final_dir or FINAL_DATA_DIR
    tables_dir = tables_dir or TABLES_DIR
    final_dir.mkdir(parents=True, exist_ok=True)
    tables_dir.mkdir(parents=True, exist_ok=True)

    written = {"summary": final_dir / SUMMARY_FILENAME}
    tables["summary"].to_csv(written["summary"], index=False, encoding="utf-8")
    for key, filename in TABLE_FILENAMES.items():
        written[key] = tables_dir / filename
        tables[key].to_csv(written[key], index=False, encoding="utf-8")
    return written


def main(cleaned_path: Path | None = None, top_n: int | None = None) -> dict[str, pd.DataFrame]:
    logger.info("=" * 60)
    logger.info("BUILD STORM IMPACT SUMMARY")
    logger.info("=" * 60)

    cleaned_path = cleaned_path or PROCESSED_DATA_DIR / CLEANED_FILENAME
    if top_n is None:
        top_n = load_config()["top_n"]

    if not cleaned_path.exists():
        raise FileNotFoundError(f"Cleaned storm data not found: {cleaned_path}")

    logger.info("[1/2] Summarizing %s ...", cleaned_path.name)
    cleaned = pd.read_csv(cleaned_path, encoding="utf-8", keep_default_na=False)
    tables = build_summary_tables(cleaned, top_n=top_n)
    summary = tables["summary"]
    logger.info(
        "  %d categories, %s fatalities, %s injuries",
        len(summary), f"{summary['fatalities'].sum():,}", f"{summary['injuries'].sum():,}",
    )

    logger.info("[2/2] Writing tables ...")
    written = write_summary_tables(tables)
    for key, path in written.items():
        logger.info("  %s -> %s", key, path)

    logger.info("BUILD COMPLETE")
    return tables


if __name__ == "__main__":
    main()

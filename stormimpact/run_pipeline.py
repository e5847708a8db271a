#!/usr/bin/env python3
"""Run the storm impact pipeline: clean -> build.

Usage
-----
    stormimpact                              # configured raw file
    stormimpact --input data/raw/StormData.csv.bz2 --top 5
    stormimpact --skip-clean                 # rebuild from the cleaned table
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.table import Table

from stormimpact.build import build_summary
from stormimpact.clean import clean_storm_data
from stormimpact.logging_config import setup_logger

logger = setup_logger("pipeline.run")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stormimpact",
        description="Summarize storm fatalities, injuries and damage by event category.",
    )
    parser.add_argument("--input", type=Path, default=None,
                        help="Raw Storm Data CSV (default: configured file in data/raw/)")
    parser.add_argument("--top", type=int, default=None,
                        help="Categories to keep in the ranked tables")
    parser.add_argument("--unit-divisor", type=float, default=None,
                        help="Divide dollar amounts by this (default 1e9, billions)")
    parser.add_argument("--skip-clean", action="store_true",
                        help="Reuse the existing cleaned table")
    args = parser.parse_args(argv)
    if args.top is not None and args.top < 1:
        parser.error("--top must be at least 1")
    if args.unit_divisor is not None and args.unit_divisor <= 0:
        parser.error("--unit-divisor must be positive")
    return args


def _ranked_table(title: str, ranked: pd.DataFrame, columns: list[str]) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Category", style="cyan", no_wrap=True)
    for col in columns:
        table.add_column(col.replace("_", " ").title(), justify="right", style="green")
    for record in ranked.to_dict(orient="records"):
        cells = [
            f"{float(record[col]):,.3f}" if "damage" in col else f"{int(record[col]):,}"
            for col in columns
        ]
        table.add_row(str(record["category"]), *cells)
    return table


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    console = Console()

    try:
        if args.skip_clean:
            cleaned_path = None
        else:
            logger.info("Running clean step ...")
            cleaned_path = clean_storm_data.main(args.input, unit_divisor=args.unit_divisor)
        logger.info("Running build step ...")
        tables = build_summary.main(cleaned_path, top_n=args.top)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Pipeline failed: %s", exc)
        return 1

    console.print(_ranked_table(
        "Most harmful to population health",
        tables["health_ranked"],
        ["fatalities", "injuries", "total_health"],
    ))
    console.print(_ranked_table(
        "Greatest economic consequences",
        tables["economic_ranked"],
        ["property_damage", "crop_damage", "total_damage"],
    ))
    logger.info("Pipeline complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Aggregate storm impact by event category
========================================

Two equivalent paths:

* aggregate(records): record-at-a-time. Each record is classified and
  its damage computed independently, then added to per-category
  running totals. Totals from separate shards combine with
  merge_totals(), so the input can be split and summed in any order.
* summarize_frame(cleaned): the pandas path used by the build step,
  a groupby-sum over a table already produced by clean_storm_events().

Both emit one row per category that occurs in the input, sorted by
category name. Categories with no records get no row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

import pandas as pd

from stormimpact.clean.classify import classify_event
from stormimpact.clean.damage import UNIT_DIVISOR, compute_damage
from stormimpact.exceptions import RecordShapeError
from stormimpact.logging_config import setup_logger
from stormimpact.records import StormEventRecord, SummaryRow

logger = setup_logger("build.aggregate")

SUMMARY_COLUMNS = ["category", "fatalities", "injuries", "property_damage", "crop_damage"]

HEALTH_METRICS = {"fatalities": "Fatalities", "injuries": "Injuries"}
ECONOMIC_METRICS = {"property_damage": "Property Damage", "crop_damage": "Crop Damage"}


@dataclass(frozen=True)
class RecordError:
    index: int
    message: str


@dataclass
class CategoryTotals:
    """Running fatality, injury and damage sums keyed by category label."""

    unit_divisor: float = UNIT_DIVISOR
    totals: dict[str, list] = field(default_factory=dict)

    def add(self, record: StormEventRecord) -> None:
        category = classify_event(record.event_type).value
        row = self.totals.setdefault(category, [0, 0, 0.0, 0.0])
        row[0] += record.fatalities
        row[1] += record.injuries
        row[2] += compute_damage(record.prop_dmg, record.prop_dmg_exp, self.unit_divisor)
        row[3] += compute_damage(record.crop_dmg, record.crop_dmg_exp, self.unit_divisor)

    def merge(self, other: "CategoryTotals") -> "CategoryTotals":
        if other.unit_divisor != self.unit_divisor:
            raise ValueError("Cannot merge totals computed with different unit divisors")
        merged = CategoryTotals(unit_divisor=self.unit_divisor)
        for source in (self.totals, other.totals):
            for category, values in source.items():
                row = merged.totals.setdefault(category, [0, 0, 0.0, 0.0])
                for i, value in enumerate(values):
                    row[i] += value
        return merged

    def rows(self) -> list[SummaryRow]:
        return [
            SummaryRow(category, *self.totals[category])
            for category in sorted(self.totals)
        ]


@dataclass
class AggregationResult:
    rows: list[SummaryRow]
    errors: list[RecordError] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([r.to_dict() for r in self.rows], columns=SUMMARY_COLUMNS)


def merge_totals(parts: Iterable[CategoryTotals]) -> CategoryTotals:
    """Combine per-shard totals into one."""
    merged = None
    for part in parts:
        merged = part if merged is None else merged.merge(part)
    return merged if merged is not None else CategoryTotals()


def aggregate(
    records: Iterable[StormEventRecord | Mapping],
    unit_divisor: float = UNIT_DIVISOR,
) -> AggregationResult:
    """Sum fatalities, injuries and damage per category.

    Mappings are converted with StormEventRecord.from_mapping; a mapping
    missing required columns is skipped and reported in ``errors``
    rather than failing the run.
    """
    totals = CategoryTotals(unit_divisor=unit_divisor)
    errors: list[RecordError] = []
    n_records = 0

    for index, item in enumerate(records):
        if not isinstance(item, StormEventRecord):
            try:
                item = StormEventRecord.from_mapping(item, index=index)
            except RecordShapeError as exc:
                logger.warning("Skipping %s", exc)
                errors.append(RecordError(index, str(exc)))
                continue
        totals.add(item)
        n_records += 1

    logger.info(
        "Aggregated %d record(s) into %d categories (%d skipped)",
        n_records, len(totals.totals), len(errors),
    )
    return AggregationResult(rows=totals.rows(), errors=errors)


def summarize_frame(cleaned: pd.DataFrame) -> pd.DataFrame:
    """Group a cleaned event table by category and sum the impact columns."""
    missing = [c for c in SUMMARY_COLUMNS if c not in cleaned.columns]
    if missing:
        raise RecordShapeError(missing)

    summary = (
        cleaned[SUMMARY_COLUMNS]
        .groupby("category", sort=True, as_index=False)
        .sum()
    )
    summary["fatalities"] = summary["fatalities"].astype("int64")
    summary["injuries"] = summary["injuries"].astype("int64")
    return summary.reset_index(drop=True)


def _melt(summary: pd.DataFrame, metrics: dict[str, str], value_name: str) -> pd.DataFrame:
    long = summary.melt(
        id_vars="category",
        value_vars=list(metrics),
        var_name="metric",
        value_name=value_name,
    )
    long["metric"] = long["metric"].map(metrics)
    return long.sort_values(["category", "metric"], kind="stable").reset_index(drop=True)


def melt_health(summary: pd.DataFrame) -> pd.DataFrame:
    """Long form: category, metric (Fatalities/Injuries), count."""
    return _melt(summary, HEALTH_METRICS, "count")


def melt_economic(summary: pd.DataFrame) -> pd.DataFrame:
    """Long form: category, metric (Property Damage/Crop Damage), amount."""
    return _melt(summary, ECONOMIC_METRICS, "amount")

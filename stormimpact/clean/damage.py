"""
Damage value reconstruction
===========================

normalized = base_value * multiplier(code) / unit_divisor

The divisor rescales raw dollars into the reporting unit (billions by
default).
"""

from __future__ import annotations

import math

import pandas as pd

from stormimpact.clean.magnitude import resolve_magnitude_or_zero, resolve_magnitude_series
from stormimpact.logging_config import setup_logger

logger = setup_logger("clean.damage")

UNIT_DIVISOR = 1e9


def _check_divisor(unit_divisor: float) -> None:
    if not unit_divisor > 0:
        raise ValueError(f"unit_divisor must be positive, got {unit_divisor!r}")


def parse_base_value(value) -> float:
    """Convert a base damage value to a non-negative float; bad input -> 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug("Unparseable damage value %r; using 0", value)
        return 0.0
    if math.isnan(number) or number < 0 or math.isinf(number):
        logger.debug("Out-of-range damage value %r; using 0", value)
        return 0.0
    return number


def compute_damage(base_value, code, unit_divisor: float = UNIT_DIVISOR) -> float:
    """Damage for one field in reporting units."""
    _check_divisor(unit_divisor)
    return parse_base_value(base_value) * resolve_magnitude_or_zero(code) / unit_divisor


def compute_damage_series(
    values: pd.Series,
    codes: pd.Series,
    unit_divisor: float = UNIT_DIVISOR,
) -> pd.Series:
    """Vectorized compute_damage over aligned value/code columns."""
    _check_divisor(unit_divisor)
    numeric = pd.to_numeric(values, errors="coerce")
    bad = numeric.isna() | (numeric < 0) | numeric.isin([float("inf")])
    n_bad = int((bad & values.notna() & (values.astype(str).str.strip() != "")).sum())
    if n_bad:
        logger.warning("  %d unparseable or negative damage value(s); using 0", n_bad)
    numeric = numeric.mask(bad, 0.0).astype(float)
    return numeric * resolve_magnitude_series(codes) / unit_divisor

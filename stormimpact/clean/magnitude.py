"""
Damage magnitude codes
======================

NOAA Storm Data stores damage as a base value plus a one-character
magnitude code (PROPDMGEXP / CROPDMGEXP). The alphabet is a mix of
letters, digits and stray punctuation:

    ""  -  ?  +     -> 0  (no usable magnitude, zeroed out)
    0               -> 0  (zeroed out with the other non-magnitudes)
    1 .. 9          -> 10 ** d
    H  K  M  B      -> 1e2, 1e3, 1e6, 1e9  (case-insensitive)

Anything else is unexpected input.
"""

from __future__ import annotations

import pandas as pd

from stormimpact.exceptions import UnrecognizedCodeError
from stormimpact.logging_config import setup_logger

logger = setup_logger("clean.magnitude")

MAGNITUDE_MULTIPLIERS: dict[str, int] = {
    "": 0,
    "-": 0,
    "?": 0,
    "+": 0,
    "0": 0,
    **{str(d): 10 ** d for d in range(1, 10)},
    "H": 100,
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}


def _normalize_code(code) -> str:
    if code is None or (isinstance(code, float) and pd.isna(code)):
        return ""
    return str(code).strip().upper()


def resolve_magnitude(code) -> int:
    """Return the multiplier for *code*; raise UnrecognizedCodeError if unknown."""
    key = _normalize_code(code)
    try:
        return MAGNITUDE_MULTIPLIERS[key]
    except KeyError:
        raise UnrecognizedCodeError(key) from None


def resolve_magnitude_or_zero(code) -> int:
    """Like resolve_magnitude, but unknown codes contribute nothing."""
    try:
        return resolve_magnitude(code)
    except UnrecognizedCodeError as exc:
        logger.debug("%s; using multiplier 0", exc)
        return 0


def resolve_magnitude_series(codes: pd.Series) -> pd.Series:
    """Vectorized resolve_magnitude_or_zero over a column of codes."""
    keys = codes.fillna("").astype(str).str.strip().str.upper()
    multipliers = keys.map(MAGNITUDE_MULTIPLIERS)

    unknown = multipliers.isna()
    if unknown.any():
        logger.warning(
            "  %d value(s) with unrecognized magnitude codes %s; using multiplier 0",
            int(unknown.sum()),
            sorted(keys[unknown].unique().tolist()),
        )
    return multipliers.fillna(0).astype("int64")

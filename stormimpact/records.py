"""Storm event input records and per-category summary rows."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass

from stormimpact.exceptions import RecordShapeError

# NOAA Storm Data column -> record field
NOAA_FIELDS: dict[str, str] = {
    "EVTYPE": "event_type",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
    "PROPDMG": "prop_dmg",
    "PROPDMGEXP": "prop_dmg_exp",
    "CROPDMG": "crop_dmg",
    "CROPDMGEXP": "crop_dmg_exp",
}

# Counts are stored as int64; anything at or past this bound is unusable.
COUNT_LIMIT = float(2**63)


def _count(value) -> int:
    """Truncate to a non-negative whole count; unusable values count as 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number) or not 0 <= number < COUNT_LIMIT:
        return 0
    return int(number)


def _text(value) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


@dataclass(frozen=True)
class StormEventRecord:
    event_type: str
    fatalities: int = 0
    injuries: int = 0
    prop_dmg: float | str = 0.0
    prop_dmg_exp: str = ""
    crop_dmg: float | str = 0.0
    crop_dmg_exp: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping, index: int | None = None) -> "StormEventRecord":
        """Build a record from a row keyed by NOAA column names.

        Raises RecordShapeError when the row is not a mapping or any of the
        seven columns is absent.
        Damage base values are kept as given; they are parsed when the
        damage is computed so one bad field does not drop the record.
        """
        if not isinstance(row, Mapping):
            raise RecordShapeError(list(NOAA_FIELDS), index=index)
        missing = [col for col in NOAA_FIELDS if col not in row]
        if missing:
            raise RecordShapeError(missing, index=index)
        return cls(
            event_type=_text(row["EVTYPE"]),
            fatalities=_count(row["FATALITIES"]),
            injuries=_count(row["INJURIES"]),
            prop_dmg=row["PROPDMG"],
            prop_dmg_exp=_text(row["PROPDMGEXP"]),
            crop_dmg=row["CROPDMG"],
            crop_dmg_exp=_text(row["CROPDMGEXP"]),
        )


@dataclass(frozen=True)
class SummaryRow:
    category: str
    fatalities: int
    injuries: int
    property_damage: float
    crop_damage: float

    def to_dict(self) -> dict:
        return asdict(self)

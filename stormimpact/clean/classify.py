"""
Event type classification
=========================

Maps NOAA's free-text EVTYPE labels (close to a thousand spellings,
abbreviations and typos) onto 15 canonical categories.

Rules are checked top to bottom and the first rule with any token
contained in the label wins, so "FLOOD/WIND" is a Flood and
"TSTM WIND" is Thunder/Lightning. Matching is case-insensitive
substring containment. Labels matching no rule are Other.
"""

from __future__ import annotations

import re
from enum import Enum

import numpy as np
import pandas as pd


class EventCategory(str, Enum):
    THUNDER_LIGHTNING = "Thunder/Lightning"
    TORNADO = "Tornado"
    SNOW = "Snow"
    FLOOD = "Flood"
    WIND = "Wind"
    HEAT = "Heat"
    HAIL = "Hail"
    HURRICANE = "Hurricane"
    RAIN = "Rain"
    SMOKE_FIRE = "Smoke/Fire"
    LANDSLIDE_AVALANCHE = "Landslide/Avalanche"
    SEA_OCEAN = "Sea/Ocean"
    COLD = "Cold"
    FOG = "Fog"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


# Order matters: first match wins.
CLASSIFICATION_RULES: list[tuple[tuple[str, ...], EventCategory]] = [
    (("lightning", "thunder", "tstm"), EventCategory.THUNDER_LIGHTNING),
    (("funnel", "tornado", "torndao"), EventCategory.TORNADO),
    (("blizzard", "sleet", "snow"), EventCategory.SNOW),
    (("dam break", "dam failure", "fld", "fldg", "flood", "stream", "surf",
      "swells", "tsunami", "water"), EventCategory.FLOOD),
    (("wind", "wnd", "gustnado", "downburst", "microburst"), EventCategory.WIND),
    (("driest", "drought", "dry", "dust", "heat", "high", "hot", "warm"), EventCategory.HEAT),
    (("hail",), EventCategory.HAIL),
    (("hurricane", "tropical storm", "typhoon"), EventCategory.HURRICANE),
    (("depression", "percipi", "preci", "rain", "shower", "wet"), EventCategory.RAIN),
    (("fire", "smoke"), EventCategory.SMOKE_FIRE),
    (("land", "slide", "avalanc"), EventCategory.LANDSLIDE_AVALANCHE),
    (("current", "marine", "rough seas", "tide", "wave"), EventCategory.SEA_OCEAN),
    (("chill", "cold", "cool", "freez", "frost", "glaze", "hypothermia", "ice",
      "icy", "low"), EventCategory.COLD),
    (("fog",), EventCategory.FOG),
]

_RULE_PATTERNS: list[tuple[re.Pattern, EventCategory]] = [
    (re.compile("|".join(re.escape(t) for t in tokens), re.IGNORECASE), category)
    for tokens, category in CLASSIFICATION_RULES
]


def classify_event(raw_event_type) -> EventCategory:
    """Return the canonical category for one raw EVTYPE label."""
    if raw_event_type is None or (isinstance(raw_event_type, float) and pd.isna(raw_event_type)):
        return EventCategory.OTHER
    text = str(raw_event_type)
    for pattern, category in _RULE_PATTERNS:
        if pattern.search(text):
            return category
    return EventCategory.OTHER


def classify_series(event_types: pd.Series) -> pd.Series:
    """Vectorized classify_event; returns category labels as strings."""
    text = event_types.fillna("").astype(str)
    conditions = [
        text.str.contains(pattern, regex=True).to_numpy()
        for pattern, _ in _RULE_PATTERNS
    ]
    choices = [category.value for _, category in _RULE_PATTERNS]
    labels = np.select(conditions, choices, default=EventCategory.OTHER.value)
    return pd.Series(labels, index=event_types.index, name="category", dtype=object)

"""Storm event impact pipeline: classify NOAA event types, decode damage, summarize by category."""

from stormimpact.build.aggregate import aggregate
from stormimpact.clean.classify import EventCategory, classify_event
from stormimpact.clean.damage import compute_damage
from stormimpact.clean.magnitude import resolve_magnitude
from stormimpact.exceptions import RecordShapeError, StormImpactError, UnrecognizedCodeError
from stormimpact.records import StormEventRecord, SummaryRow

__version__ = "0.1.0"

__all__ = [
    "EventCategory",
    "RecordShapeError",
    "StormEventRecord",
    "StormImpactError",
    "SummaryRow",
    "UnrecognizedCodeError",
    "aggregate",
    "classify_event",
    "compute_damage",
    "resolve_magnitude",
]

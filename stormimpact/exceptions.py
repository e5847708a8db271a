"""Exceptions raised by the storm impact pipeline."""

from __future__ import annotations


class StormImpactError(Exception):
    """Base class for pipeline errors."""


class UnrecognizedCodeError(StormImpactError, ValueError):
    """A damage magnitude code outside the documented alphabet."""

    def __init__(self, code: str):
        super().__init__(f"Unrecognized magnitude code: {code!r}")
        self.code = code


class RecordShapeError(StormImpactError, ValueError):
    """A record or table is missing required fields."""

    def __init__(self, missing: list[str], index: int | None = None):
        where = f"record {index}" if index is not None else "input"
        super().__init__(f"{where} is missing required field(s): {', '.join(missing)}")
        self.missing = list(missing)
        self.index = index

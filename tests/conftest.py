"""Shared fixtures for the storm impact tests.

Fixture records follow the NOAA Storm Data header:
EVTYPE, FATALITIES, INJURIES, PROPDMG, PROPDMGEXP, CROPDMG, CROPDMGEXP.
"""

import pandas as pd
import pytest


@pytest.fixture
def two_event_rows() -> list[dict]:
    """Thunderstorm wind + flash flood, the canonical two-record scenario."""
    return [
        {"EVTYPE": "TSTM WIND", "FATALITIES": 1, "INJURIES": 0,
         "PROPDMG": 10, "PROPDMGEXP": "K", "CROPDMG": 0, "CROPDMGEXP": ""},
        {"EVTYPE": "FLASH FLOOD", "FATALITIES": 2, "INJURIES": 3,
         "PROPDMG": 5, "PROPDMGEXP": "M", "CROPDMG": 1, "CROPDMGEXP": "K"},
    ]


@pytest.fixture
def mixed_event_rows() -> list[dict]:
    """A noisier sample: typos, mixed case, odd codes, bad values."""
    return [
        {"EVTYPE": "TORNADO", "FATALITIES": 5, "INJURIES": 40,
         "PROPDMG": 2.5, "PROPDMGEXP": "M", "CROPDMG": 0, "CROPDMGEXP": ""},
        {"EVTYPE": "torndao", "FATALITIES": 0, "INJURIES": 2,
         "PROPDMG": 250, "PROPDMGEXP": "k", "CROPDMG": 0, "CROPDMGEXP": "?"},
        {"EVTYPE": "EXCESSIVE HEAT", "FATALITIES": 12, "INJURIES": 30,
         "PROPDMG": 0, "PROPDMGEXP": "", "CROPDMG": 1.2, "CROPDMGEXP": "B"},
        {"EVTYPE": "HIGH WIND", "FATALITIES": 0, "INJURIES": 1,
         "PROPDMG": 50, "PROPDMGEXP": "5", "CROPDMG": 0, "CROPDMGEXP": ""},
        {"EVTYPE": "HAIL", "FATALITIES": 0, "INJURIES": 0,
         "PROPDMG": 3, "PROPDMGEXP": "X", "CROPDMG": 20, "CROPDMGEXP": "M"},
        {"EVTYPE": "FLOOD/RAIN/WINDS", "FATALITIES": 1, "INJURIES": 0,
         "PROPDMG": "n/a", "PROPDMGEXP": "B", "CROPDMG": 7, "CROPDMGEXP": "h"},
        {"EVTYPE": "VOLCANIC ASH", "FATALITIES": 0, "INJURIES": 0,
         "PROPDMG": 500, "PROPDMGEXP": "K", "CROPDMG": 0, "CROPDMGEXP": ""},
        {"EVTYPE": "DENSE FOG", "FATALITIES": 3, "INJURIES": 8,
         "PROPDMG": 1, "PROPDMGEXP": "0", "CROPDMG": 0, "CROPDMGEXP": "+"},
    ]


@pytest.fixture
def raw_frame(mixed_event_rows) -> pd.DataFrame:
    """Raw Storm Data table as the loader would hand it over."""
    return pd.DataFrame(mixed_event_rows)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the settings file at a temp location."""
    config_file = tmp_path / "config" / "pipeline_config.json"
    monkeypatch.setattr("stormimpact.config_manager.CONFIG_FILE", config_file)
    return config_file


@pytest.fixture
def isolated_data_dirs(tmp_path, monkeypatch, isolated_config):
    """Redirect every pipeline output directory into tmp_path."""
    dirs = {
        "raw": tmp_path / "data" / "raw",
        "processed": tmp_path / "data" / "processed",
        "final": tmp_path / "data" / "final",
        "tables": tmp_path / "results" / "tables",
    }
    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)

    monkeypatch.setattr("stormimpact.clean.clean_storm_data.RAW_DATA_DIR", dirs["raw"])
    monkeypatch.setattr("stormimpact.clean.clean_storm_data.PROCESSED_DATA_DIR", dirs["processed"])
    monkeypatch.setattr("stormimpact.build.build_summary.PROCESSED_DATA_DIR", dirs["processed"])
    monkeypatch.setattr("stormimpact.build.build_summary.FINAL_DATA_DIR", dirs["final"])
    monkeypatch.setattr("stormimpact.build.build_summary.TABLES_DIR", dirs["tables"])
    monkeypatch.setattr("dashboard.services.summary_store.FINAL_DATA_DIR", dirs["final"])
    return dirs

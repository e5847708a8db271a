"""Tests for the Storm Data clean step."""

import pandas as pd
import pytest

from stormimpact.build.aggregate import summarize_frame
from stormimpact.clean.clean_storm_data import (
    CLEANED_FILENAME,
    clean_storm_events,
    iter_records,
    load_storm_events,
    main,
)
from stormimpact.clean.clean_utils import generate_cleaning_report, top_unmatched_event_types
from stormimpact.exceptions import RecordShapeError
from stormimpact.records import StormEventRecord


def _write_storm_csv(path, rows):
    frame = pd.DataFrame(rows)
    # Extra columns from the real file are ignored by the loader
    frame.insert(0, "STATE__", 1.0)
    frame["REMARKS"] = "narrative"
    frame.to_csv(path, index=False)
    return path


class TestLoadStormEvents:
    def test_reads_compressed_file(self, tmp_path, mixed_event_rows):
        path = _write_storm_csv(tmp_path / "StormData.csv.bz2", mixed_event_rows)
        df = load_storm_events(path)
        assert list(df.columns) == [
            "EVTYPE", "FATALITIES", "INJURIES", "PROPDMG", "PROPDMGEXP", "CROPDMG", "CROPDMGEXP",
        ]
        assert len(df) == len(mixed_event_rows)

    def test_codes_stay_text(self, tmp_path, mixed_event_rows):
        """Digit codes are not turned into floats and empty codes stay empty."""
        path = _write_storm_csv(tmp_path / "storm.csv", mixed_event_rows)
        df = load_storm_events(path)
        assert df["PROPDMGEXP"].tolist() == ["M", "k", "", "5", "X", "B", "K", "0"]

    def test_missing_column_raises(self, tmp_path, mixed_event_rows):
        rows = [{k: v for k, v in r.items() if k != "CROPDMGEXP"} for r in mixed_event_rows]
        path = _write_storm_csv(tmp_path / "storm.csv", rows)
        with pytest.raises(RecordShapeError) as excinfo:
            load_storm_events(path)
        assert excinfo.value.missing == ["CROPDMGEXP"]


class TestCleanStormEvents:
    def test_output_columns(self, raw_frame):
        cleaned = clean_storm_events(raw_frame)
        assert list(cleaned.columns) == [
            "event_type", "category", "fatalities", "injuries", "property_damage", "crop_damage",
        ]

    def test_categories(self, raw_frame):
        cleaned = clean_storm_events(raw_frame)
        assert cleaned["category"].tolist() == [
            "Tornado", "Tornado", "Heat", "Wind", "Hail", "Flood", "Other", "Fog",
        ]

    def test_damage_in_billions(self, raw_frame):
        cleaned = clean_storm_events(raw_frame)
        assert cleaned["property_damage"].tolist() == pytest.approx(
            [2.5e-3, 2.5e-4, 0.0, 5e-3, 0.0, 0.0, 5e-4, 0.0]
        )
        assert cleaned["crop_damage"].tolist() == pytest.approx(
            [0.0, 0.0, 1.2, 0.0, 2e-2, 7e-7, 0.0, 0.0]
        )

    def test_counts_truncated_and_floored(self):
        raw = pd.DataFrame([
            {"EVTYPE": "HAIL", "FATALITIES": "2.9", "INJURIES": "-4",
             "PROPDMG": 0, "PROPDMGEXP": "", "CROPDMG": 0, "CROPDMGEXP": ""},
            {"EVTYPE": "HAIL", "FATALITIES": "", "INJURIES": "bad",
             "PROPDMG": 0, "PROPDMGEXP": "", "CROPDMG": 0, "CROPDMGEXP": ""},
        ])
        cleaned = clean_storm_events(raw)
        assert cleaned["fatalities"].tolist() == [2, 0]
        assert cleaned["injuries"].tolist() == [0, 0]

    def test_oversized_counts_become_zero(self):
        raw = pd.DataFrame([
            {"EVTYPE": "HAIL", "FATALITIES": "1e30", "INJURIES": "3",
             "PROPDMG": 0, "PROPDMGEXP": "", "CROPDMG": 0, "CROPDMGEXP": ""},
        ])
        cleaned = clean_storm_events(raw)
        assert cleaned["fatalities"].tolist() == [0]
        assert cleaned["injuries"].tolist() == [3]
        assert summarize_frame(cleaned)["fatalities"].tolist() == [0]

    def test_lowercase_headers_accepted(self, raw_frame):
        cleaned = clean_storm_events(raw_frame.rename(columns=str.lower))
        assert len(cleaned) == len(raw_frame)

    def test_missing_column_raises(self, raw_frame):
        with pytest.raises(RecordShapeError):
            clean_storm_events(raw_frame.drop(columns=["INJURIES"]))


class TestIterRecords:
    def test_yields_records(self, raw_frame):
        records = list(iter_records(raw_frame))
        assert len(records) == len(raw_frame)
        assert all(isinstance(r, StormEventRecord) for r in records)
        assert records[1].event_type == "torndao"
        assert records[1].prop_dmg_exp == "k"


class TestCleaningReport:
    def test_report_counts_categories_and_unmatched(self, raw_frame):
        cleaned = clean_storm_events(raw_frame)
        report = generate_cleaning_report(raw_frame, cleaned, "sample")
        assert report["rows_before"] == report["rows_after"] == len(raw_frame)
        assert report["category_counts"]["Tornado"] == 2
        assert report["top_unmatched"] == {"VOLCANIC ASH": 1}

    def test_unmatched_labels_are_normalized(self):
        raw = pd.Series(["volcanic ash ", "VOLCANIC ASH", "HAIL"])
        categories = pd.Series(["Other", "Other", "Hail"])
        assert top_unmatched_event_types(raw, categories) == {"VOLCANIC ASH": 2}


class TestCleanMain:
    def test_writes_cleaned_table(self, isolated_data_dirs, mixed_event_rows):
        raw_path = _write_storm_csv(isolated_data_dirs["raw"] / "StormData.csv.bz2", mixed_event_rows)
        out_path = main(raw_path, unit_divisor=1e9)
        assert out_path == isolated_data_dirs["processed"] / CLEANED_FILENAME
        written = pd.read_csv(out_path)
        assert len(written) == len(mixed_event_rows)

    def test_uses_configured_raw_filename(self, isolated_data_dirs, mixed_event_rows):
        _write_storm_csv(isolated_data_dirs["raw"] / "StormData.csv.bz2", mixed_event_rows)
        assert main().exists()

    def test_missing_input_raises(self, isolated_data_dirs):
        with pytest.raises(FileNotFoundError):
            main(isolated_data_dirs["raw"] / "nope.csv")

"""
Tests for CSV dataset loading.
"""

from datetime import datetime

import pytest

from secmetrics.core.exceptions import DataLoadError
from secmetrics.ingestion.loader import load_alert_records, load_vulnerability_records


class TestAlertLoading:
    """Test EDR CSV parsing."""

    def test_rows_become_records(self, edr_csv):
        records = load_alert_records(edr_csv)

        # The blank line is skipped
        assert len(records) == 4
        first = records[0]
        assert first.severity == "Critical"
        assert first.ioc_type == "IP"
        assert first.alert_type == "Network Connection"
        assert first.status == "Open"
        assert first.hostname == "WS-01"

    def test_none_label_is_kept_and_blank_is_empty(self, edr_csv):
        records = load_alert_records(edr_csv)

        assert records[1].ioc_type == "None"
        assert records[2].ioc_type == ""

    def test_missing_column_is_blank(self, tmp_path):
        path = tmp_path / "edr.csv"
        path.write_text("Severity,Hostname\nHigh,WS-01\nLow,WS-02\n")

        records = load_alert_records(path)

        assert [r.alert_type for r in records] == ["", ""]
        assert [r.severity for r in records] == ["High", "Low"]

    def test_extra_columns_are_ignored(self, tmp_path):
        path = tmp_path / "edr.csv"
        path.write_text("AlertID,Severity,Hostname,Analyst\n1,High,WS-01,alice\n")

        records = load_alert_records(path)

        assert len(records) == 1
        assert records[0].hostname == "WS-01"

    def test_numeric_values_become_text(self, tmp_path):
        path = tmp_path / "edr.csv"
        path.write_text("Severity,Hostname\nHigh,1001\nLow,\n")

        records = load_alert_records(path)

        assert records[0].hostname == "1001"
        assert records[1].hostname == ""

    def test_rows_of_empty_cells_are_skipped(self, tmp_path):
        path = tmp_path / "edr.csv"
        path.write_text("Severity,Hostname\nHigh,WS-01\n,\nLow,WS-02\n")

        records = load_alert_records(path)

        assert len(records) == 2

    def test_header_only_file_has_no_records(self, tmp_path):
        path = tmp_path / "edr.csv"
        path.write_text("Severity,IOCType,AlertType,Status,Hostname\n")

        assert load_alert_records(path) == []


class TestVulnerabilityLoading:
    """Test vulnerability CSV parsing."""

    def test_dates_and_flags(self, vulnerabilities_csv):
        records = load_vulnerability_records(vulnerabilities_csv)

        assert len(records) == 4
        first = records[0]
        assert first.asset_id == "101"
        assert first.detection_date == datetime(2025, 1, 1)
        assert first.patch_applied_date == datetime(2025, 1, 3)
        assert first.is_critical is True
        assert first.is_patchable is False
        assert first.recommended_timeframe_days == 7
        assert first.remediation_days == 2

    def test_blank_patch_date_and_timeframe(self, vulnerabilities_csv):
        records = load_vulnerability_records(vulnerabilities_csv)

        assert records[1].recommended_timeframe_days is None
        assert records[2].patch_applied_date is None
        assert records[2].remediation_days is None

    def test_english_and_boolean_flags(self, tmp_path):
        path = tmp_path / "vulns.csv"
        path.write_text(
            "AssetID,IsCritical,IsPatchable\n"
            "A,Yes,No\n"
            "B,true,false\n"
            "C,1,0\n"
            "D,,\n"
        )

        records = load_vulnerability_records(path)

        assert [r.is_critical for r in records] == [True, True, True, False]
        # Blank patchable flag means patchable
        assert [r.is_patchable for r in records] == [False, False, False, True]

    def test_unparsable_date_becomes_none(self, tmp_path):
        path = tmp_path / "vulns.csv"
        path.write_text("AssetID,DetectionDate\nA,not-a-date\nB,2025-03-04T12:00:00\n")

        records = load_vulnerability_records(path)

        assert records[0].detection_date is None
        assert records[1].detection_date == datetime(2025, 3, 4, 12, 0)

    def test_zero_timeframe_means_no_deadline(self, tmp_path):
        path = tmp_path / "vulns.csv"
        path.write_text("AssetID,RecommendedTimeframe\nA,0\nB,\nC,14\n")

        records = load_vulnerability_records(path)

        assert [r.recommended_timeframe_days for r in records] == [None, None, 14.0]
        assert not any(r.timeframe_unreadable for r in records)

    def test_text_timeframe_is_unreadable(self, tmp_path):
        path = tmp_path / "vulns.csv"
        path.write_text("AssetID,RecommendedTimeframe\nA,soon\nB,14\n")

        records = load_vulnerability_records(path)

        assert records[0].recommended_timeframe_days is None
        assert records[0].timeframe_unreadable is True
        assert records[1].timeframe_unreadable is False


class TestLoadErrors:
    """Test failure reporting."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError) as exc_info:
            load_alert_records(tmp_path / "missing.csv")

        assert exc_info.value.source == "edr"
        assert "file not found" in str(exc_info.value)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "vulns.csv"
        path.write_text("")

        with pytest.raises(DataLoadError) as exc_info:
            load_vulnerability_records(path)

        assert exc_info.value.source == "vulnerabilities"
        assert exc_info.value.path == str(path)

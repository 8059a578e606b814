"""
Tests for the load-and-aggregate dashboard service.
"""

import asyncio

import pytest

from secmetrics.core.config import DataConfig
from secmetrics.dashboard.service import DashboardService


class TestDashboardService:
    """Test load cycles."""

    def test_load_both_sources(self, data_config):
        service = DashboardService(data_config)

        state = asyncio.run(service.load())

        assert state.errors == []
        assert state.has_errors is False
        assert state.loading is False

        assert state.edr.total_alerts == 4
        assert state.edr.critical_rate == 50.0
        assert state.edr.ioc_detection_rate == 50.0
        assert state.edr.suspicious_connection_rate == 100.0
        assert state.edr.unique_hostname_count == 3

        vulns = state.vulnerabilities
        assert vulns.total_vulnerabilities == 4
        assert vulns.remediation_rate == 75.0
        assert vulns.avg_remediation_time_days == pytest.approx(16 / 3)
        assert vulns.critical_asset_exposure_rate == 50.0
        assert vulns.on_time_patch_rate == pytest.approx(200 / 3)

    def test_load_sync(self, data_config):
        state = DashboardService(data_config).load_sync()

        assert state.edr.total_alerts == 4
        assert state.vulnerabilities.total_vulnerabilities == 4

    def test_failed_source_keeps_other_source(self, edr_csv, tmp_path):
        missing = tmp_path / "missing.csv"
        config = DataConfig(edr_path=str(edr_csv), vulnerabilities_path=str(missing))

        state = DashboardService(config).load_sync()

        assert state.has_errors is True
        assert len(state.errors) == 1
        assert state.errors[0].source == "vulnerabilities"
        assert state.errors[0].path == str(missing)
        assert state.failed("vulnerabilities")
        assert not state.failed("edr")

        # Failed source falls back to the all-zero summary
        assert state.vulnerabilities.total_vulnerabilities == 0
        assert state.vulnerabilities.remediation_rate == 0
        assert state.edr.total_alerts == 4

    def test_both_sources_failed(self, tmp_path):
        config = DataConfig(
            edr_path=str(tmp_path / "a.csv"),
            vulnerabilities_path=str(tmp_path / "b.csv"),
        )

        state = DashboardService(config).load_sync()

        assert {e.source for e in state.errors} == {"edr", "vulnerabilities"}
        assert state.edr.total_alerts == 0
        assert state.vulnerabilities.total_vulnerabilities == 0

    def test_reload_recomputes(self, data_config, edr_csv):
        service = DashboardService(data_config)
        first = service.load_sync()

        edr_csv.write_text("Severity,Hostname\nCritical,WS-09\n")
        second = service.load_sync()

        assert first.edr.total_alerts == 4
        assert second.edr.total_alerts == 1
        assert second.edr.critical_rate == 100.0

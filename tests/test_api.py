"""
Tests for the web dashboard and JSON API.
"""

import time

import pytest
from fastapi.testclient import TestClient

from secmetrics.core.config import DataConfig
from secmetrics.dashboard.models import DashboardState
from secmetrics.dashboard.service import DashboardService
from secmetrics.ui.api import create_app


@pytest.fixture
def client(data_config):
    app = create_app(DashboardService(data_config), background_load=False)
    with TestClient(app) as test_client:
        yield test_client


class TestJsonApi:
    """Test JSON endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_edr_summary(self, client):
        response = client.get("/api/edr")

        assert response.status_code == 200
        data = response.json()
        assert data["total_alerts"] == 4
        assert data["critical_rate"] == 50.0
        assert {e["name"] for e in data["severity_breakdown"]} == {"Critical", "High", "Low"}

    def test_vulnerability_summary(self, client):
        response = client.get("/api/vulnerabilities")

        assert response.status_code == 200
        data = response.json()
        assert data["total_vulnerabilities"] == 4
        assert data["remediation_rate"] == 75.0

    def test_dashboard_state(self, client):
        response = client.get("/api/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["loading"] is False
        assert data["errors"] == []
        assert data["has_errors"] is False
        assert data["edr"]["total_alerts"] == 4

    def test_reload(self, client, edr_csv):
        edr_csv.write_text("Severity,Hostname\nLow,WS-09\nLow,WS-10\n")

        response = client.post("/api/reload")

        assert response.status_code == 200
        assert response.json()["edr"]["total_alerts"] == 2
        assert client.get("/api/edr").json()["critical_rate"] == 0


class TestDashboardPage:
    """Test the HTML dashboard."""

    def test_renders_cards(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        body = response.text
        assert "Security KPI Dashboard" in body
        assert "Critical alert rate" in body
        assert "50.0%" in body
        assert "Out of 4 alerts" in body
        assert "5 d" in body

    def test_shows_load_errors(self, edr_csv, tmp_path):
        config = DataConfig(
            edr_path=str(edr_csv),
            vulnerabilities_path=str(tmp_path / "missing.csv"),
        )
        app = create_app(DashboardService(config), background_load=False)

        with TestClient(app) as client:
            response = client.get("/")
            api_state = client.get("/api/dashboard").json()

        assert response.status_code == 200
        assert "could not be loaded" in response.text
        assert api_state["errors"][0]["source"] == "vulnerabilities"
        assert api_state["has_errors"] is True


class TestBackgroundLoad:
    """Test the default startup, where the first load runs in the background."""

    def wait_until_loaded(self, client, attempts=100):
        for _ in range(attempts):
            state = client.get("/api/dashboard").json()
            if not state["loading"]:
                return state
            time.sleep(0.05)
        pytest.fail("first load did not complete")

    def test_first_load_completes(self, data_config):
        app = create_app(DashboardService(data_config))

        with TestClient(app) as client:
            state = self.wait_until_loaded(client)
            page = client.get("/")

        assert state["loading"] is False
        assert state["has_errors"] is False
        assert state["edr"]["total_alerts"] == 4
        assert state["vulnerabilities"]["total_vulnerabilities"] == 4
        assert page.status_code == 200
        assert "Critical alert rate" in page.text
        assert "Loading data..." not in page.text

    def test_loading_page(self, data_config):
        app = create_app(DashboardService(data_config), background_load=False)

        with TestClient(app) as client:
            app.state.dashboard = DashboardState(loading=True)
            response = client.get("/")

        assert response.status_code == 200
        assert "Loading data..." in response.text
        assert 'http-equiv="refresh"' in response.text
        assert "Critical alert rate" not in response.text

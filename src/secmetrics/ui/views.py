"""
View logic for UI pages.

Functions that turn a DashboardState into view models for templates.
"""

import logging
from typing import Any, Dict, List

from secmetrics.dashboard.models import DashboardState
from secmetrics.edr.models import EdrSummary
from secmetrics.ingestion.loader import EDR_SOURCE, VULNERABILITIES_SOURCE
from secmetrics.ui.charts import SEVERITY_COLORS, ChartFactory
from secmetrics.vulnerabilities.models import VulnSummary

logger = logging.getLogger(__name__)

# Number of alert types shown in the alert type chart
ALERT_TYPE_CHART_LIMIT = 6


def format_rate(value: float, decimals: int = 1) -> str:
    """Round a full-precision value for display."""
    return f"{value:.{decimals}f}"


def _card(title: str, value: str, caption: str, tone: str) -> Dict[str, str]:
    return {"title": title, "value": value, "caption": caption, "tone": tone}


def get_edr_cards(summary: EdrSummary) -> List[Dict[str, str]]:
    """KPI cards for the EDR section."""
    return [
        _card(
            "Critical alert rate",
            f"{format_rate(summary.critical_rate)}%",
            f"Out of {summary.total_alerts} alerts",
            "blue",
        ),
        _card(
            "IoC detection rate",
            f"{format_rate(summary.ioc_detection_rate)}%",
            "Alerts with indicators of compromise",
            "green",
        ),
        _card(
            "Suspicious connection rate",
            f"{format_rate(summary.suspicious_connection_rate)}%",
            "Critical or high severity network connections",
            "purple",
        ),
    ]


def get_vulnerability_cards(summary: VulnSummary) -> List[Dict[str, str]]:
    """KPI cards for the vulnerability section."""
    return [
        _card(
            "Critical asset exposure",
            f"{format_rate(summary.critical_asset_exposure_rate)}%",
            "Of critical assets cannot be patched",
            "red",
        ),
        _card(
            "Remediation rate",
            f"{format_rate(summary.remediation_rate)}%",
            f"Of {summary.total_vulnerabilities} vulnerabilities resolved",
            "amber",
        ),
        _card(
            "Remediation time",
            f"{format_rate(summary.avg_remediation_time_days, 0)} d",
            "Average time to resolve",
            "emerald",
        ),
        _card(
            "Patches on time",
            f"{format_rate(summary.on_time_patch_rate)}%",
            "Within the recommended timeframe",
            "teal",
        ),
    ]


def get_edr_charts(summary: EdrSummary) -> Dict[str, str]:
    """Chart HTML fragments for the EDR section."""
    severity = ChartFactory.build_proportion_chart(
        summary.severity_breakdown, "Alerts by severity", unit="alerts"
    )
    alert_types = ChartFactory.build_magnitude_chart(
        summary.alert_type_breakdown,
        "Alert types",
        unit="alerts",
        horizontal=True,
        top_n=ALERT_TYPE_CHART_LIMIT,
    )
    return {
        "severity": ChartFactory.to_html(severity),
        "alert_types": ChartFactory.to_html(alert_types),
    }


def get_vulnerability_charts(summary: VulnSummary) -> Dict[str, str]:
    """Chart HTML fragments for the vulnerability section."""
    severity = ChartFactory.build_proportion_chart(
        summary.severity_breakdown,
        "Vulnerabilities by severity",
        unit="vulnerabilities",
        color_map=SEVERITY_COLORS,
    )
    sources = ChartFactory.build_magnitude_chart(
        summary.source_breakdown, "Detection sources", unit="vulnerabilities"
    )
    return {
        "severity": ChartFactory.to_html(severity),
        "sources": ChartFactory.to_html(sources),
    }


def get_dashboard_view(state: DashboardState) -> Dict[str, Any]:
    """
    Get data for the dashboard page.

    Args:
        state: Result of the latest load cycle

    Returns:
        Dictionary with dashboard data
    """
    if state.loading:
        return {"loading": True, "errors": [], "generated_at": state.generated_at}

    for error in state.errors:
        logger.debug(f"Rendering dashboard with failed source {error.source}: {error.message}")

    return {
        "loading": False,
        "errors": state.errors,
        "edr": {
            "available": not state.failed(EDR_SOURCE),
            "summary": state.edr,
            "cards": get_edr_cards(state.edr),
            "charts": get_edr_charts(state.edr),
        },
        "vulnerabilities": {
            "available": not state.failed(VULNERABILITIES_SOURCE),
            "summary": state.vulnerabilities,
            "cards": get_vulnerability_cards(state.vulnerabilities),
            "charts": get_vulnerability_charts(state.vulnerabilities),
        },
        "generated_at": state.generated_at,
        "generated_on": state.generated_at.strftime("%d %B %Y"),
    }

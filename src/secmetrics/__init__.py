"""
Secmetrics - Security KPI Dashboard

Loads endpoint-detection (EDR) alerts and vulnerability records from CSV,
derives summary KPIs (rates, counts, breakdowns) and renders them as cards
and charts.

Main modules:
- edr: Alert aggregation (critical rate, IoC detection, breakdowns)
- vulnerabilities: Vulnerability aggregation (remediation, exposure, SLA)
- ingestion: CSV loading into typed records
- dashboard: Load-and-aggregate service
- ui: Charts, view models and the web dashboard
- cli: Operational CLI (secmetricsctl)
"""

__version__ = "0.1.0"
__author__ = "Secmetrics Team"

import os
from typing import Dict, Any

# Environment configuration defaults
DEFAULT_CONFIG: Dict[str, Any] = {
    "edr_path": "data/edr_data.csv",
    "vulnerabilities_path": "data/vulnerabilities_data.csv",
    "log_level": "INFO",
}


def get_log_level() -> str:
    """
    Get the log level from the environment.

    Entry points call this before the full configuration is built so that
    configuration errors are themselves logged at the right level.

    Returns:
        str: The log level name
    """
    return os.getenv("LOG_LEVEL", DEFAULT_CONFIG["log_level"]).upper()


__all__ = ["__version__", "__author__", "DEFAULT_CONFIG", "get_log_level"]

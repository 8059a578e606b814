"""
EDR alert data models.
"""

from typing import List

from pydantic import BaseModel, Field

from secmetrics.core.breakdown import BreakdownEntry

# Severity label counted by the critical rate
CRITICAL_SEVERITY = "Critical"

# Severities that make a network connection suspicious
SUSPICIOUS_SEVERITIES = frozenset({"Critical", "High"})

NETWORK_CONNECTION_ALERT = "Network Connection"

# IoC type values meaning "no indicator attached"
NO_IOC_VALUES = frozenset({"", "None"})


class AlertRecord(BaseModel):
    """
    One alert raised by the endpoint detection & response agent.

    Missing or blank fields are normalized to an empty string, which forms
    its own group in every breakdown.
    """

    severity: str = Field("", description="Severity label (Critical, High, Medium, Low)")
    ioc_type: str = Field("", description="Indicator of compromise type, blank or 'None' if absent")
    alert_type: str = Field("", description="Alert category (Network Connection, Malware, ...)")
    status: str = Field("", description="Triage status")
    hostname: str = Field("", description="Endpoint that raised the alert")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "severity": "Critical",
                "ioc_type": "IP",
                "alert_type": "Network Connection",
                "status": "Open",
                "hostname": "WS-FIN-042",
            }
        }


class EdrSummary(BaseModel):
    """
    KPIs computed over a set of EDR alerts.
    """

    total_alerts: int = 0
    critical_rate: float = 0.0
    ioc_detection_rate: float = 0.0
    severity_breakdown: List[BreakdownEntry] = Field(default_factory=list)
    alert_type_breakdown: List[BreakdownEntry] = Field(default_factory=list)
    suspicious_connection_rate: float = 0.0
    unique_hostname_count: int = 0
    status_breakdown: List[BreakdownEntry] = Field(default_factory=list)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "total_alerts": 3,
                "critical_rate": 66.67,
                "ioc_detection_rate": 33.33,
                "severity_breakdown": [
                    {"name": "Critical", "value": 2, "percentage": 66.67},
                    {"name": "Low", "value": 1, "percentage": 33.33},
                ],
                "alert_type_breakdown": [],
                "suspicious_connection_rate": 0.0,
                "unique_hostname_count": 2,
                "status_breakdown": [],
            }
        }

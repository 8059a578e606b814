"""
Vulnerability data models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from secmetrics.core.breakdown import BreakdownEntry

RESOLVED_STATUS = "Resolved"


class VulnerabilityRecord(BaseModel):
    """
    One vulnerability detected on an asset.

    ``patch_applied_date`` is only present once the vulnerability has been
    remediated. A missing ``recommended_timeframe_days`` means there is no
    patching deadline. An unreadable timeframe (``timeframe_unreadable``) is a
    deadline that cannot be met.
    """

    severity: str = Field("", description="Severity label")
    status: str = Field("", description="Lifecycle status (Open, In Progress, Resolved)")
    detection_source: str = Field("", description="Scanner or process that found it")
    detection_date: Optional[datetime] = Field(None, description="When it was detected")
    patch_applied_date: Optional[datetime] = Field(None, description="When the fix was applied")
    is_critical: bool = Field(False, description="Whether the affected asset is business-critical")
    is_patchable: bool = Field(True, description="Whether a patch can be applied to the asset")
    asset_id: str = Field("", description="Affected asset identifier")
    recommended_timeframe_days: Optional[float] = Field(
        None,
        description="Maximum days between detection and patch to count as on time (0 or None: no deadline)",
    )
    timeframe_unreadable: bool = Field(
        False,
        description="A timeframe was given but is not a number; the record is never on time",
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "severity": "Critical",
                "status": "Resolved",
                "detection_source": "Nessus",
                "detection_date": "2025-01-02T00:00:00",
                "patch_applied_date": "2025-01-06T00:00:00",
                "is_critical": True,
                "is_patchable": True,
                "asset_id": "SRV-DB-01",
                "recommended_timeframe_days": 7,
            }
        }

    @property
    def is_resolved(self) -> bool:
        return self.status == RESOLVED_STATUS

    @property
    def remediation_days(self) -> Optional[float]:
        """Fractional days from detection to patch, or None if either date is missing."""
        if self.detection_date is None or self.patch_applied_date is None:
            return None
        return (self.patch_applied_date - self.detection_date).total_seconds() / 86400


class VulnSummary(BaseModel):
    """
    KPIs computed over a set of vulnerability records.
    """

    total_vulnerabilities: int = 0
    severity_breakdown: List[BreakdownEntry] = Field(default_factory=list)
    status_breakdown: List[BreakdownEntry] = Field(default_factory=list)
    source_breakdown: List[BreakdownEntry] = Field(default_factory=list)
    remediation_rate: float = 0.0
    avg_remediation_time_days: float = 0.0
    critical_asset_exposure_rate: float = 0.0
    on_time_patch_rate: float = 0.0

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "total_vulnerabilities": 4,
                "severity_breakdown": [],
                "status_breakdown": [],
                "source_breakdown": [],
                "remediation_rate": 50.0,
                "avg_remediation_time_days": 3.0,
                "critical_asset_exposure_rate": 100.0,
                "on_time_patch_rate": 100.0,
            }
        }

"""
Dashboard state models.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, computed_field

from secmetrics.edr.models import EdrSummary
from secmetrics.vulnerabilities.models import VulnSummary


class LoadError(BaseModel):
    """A dataset that failed to load during a load cycle."""

    source: str = Field(..., description="Dataset name (edr, vulnerabilities)")
    path: str = Field(..., description="Path that was read")
    message: str = Field(..., description="Human-readable failure reason")

    class Config:
        frozen = True


class DashboardState(BaseModel):
    """
    Result of one load-and-aggregate cycle.

    A source that failed to load keeps its all-zero default summary and is
    listed in ``errors``.
    """

    edr: EdrSummary = Field(default_factory=EdrSummary)
    vulnerabilities: VulnSummary = Field(default_factory=VulnSummary)
    errors: List[LoadError] = Field(default_factory=list)
    loading: bool = False
    generated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        frozen = True

    @computed_field
    @property
    def has_errors(self) -> bool:
        """Whether any dataset failed to load."""
        return bool(self.errors)

    def failed(self, source: str) -> bool:
        """Whether the given dataset failed to load."""
        return any(e.source == source for e in self.errors)

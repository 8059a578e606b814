"""
Vulnerability aggregation logic.
"""

import logging
from typing import List, Sequence

from secmetrics.core.breakdown import compute_breakdown, safe_rate

from .models import VulnerabilityRecord, VulnSummary

logger = logging.getLogger(__name__)


class VulnerabilityAggregator:
    """
    Computes vulnerability management KPIs.

    Record-level rates use the total number of records as denominator,
    except:
    - Remediation time and on-time patching, computed over resolved records
      that carry both a detection and a patch date
    - Critical asset exposure, computed over distinct critical assets
    """

    def summarize(self, records: Sequence[VulnerabilityRecord]) -> VulnSummary:
        """
        Compute the vulnerability summary for a set of records.

        Args:
            records: Vulnerability records to summarize

        Returns:
            Freshly built vulnerability summary
        """
        total = len(records)
        resolved = sum(1 for r in records if r.is_resolved)
        remediated = self._remediated(records)

        summary = VulnSummary(
            total_vulnerabilities=total,
            severity_breakdown=compute_breakdown(records, lambda r: r.severity),
            status_breakdown=compute_breakdown(records, lambda r: r.status),
            source_breakdown=compute_breakdown(records, lambda r: r.detection_source),
            remediation_rate=safe_rate(resolved, total),
            avg_remediation_time_days=self._average_remediation_days(remediated),
            critical_asset_exposure_rate=self._critical_asset_exposure_rate(records),
            on_time_patch_rate=self._on_time_patch_rate(remediated),
        )

        logger.info(
            f"Vulnerability summary: {summary.total_vulnerabilities} records, "
            f"remediated {summary.remediation_rate:.1f}%, "
            f"avg {summary.avg_remediation_time_days:.1f} days, "
            f"on time {summary.on_time_patch_rate:.1f}%"
        )

        return summary

    def _remediated(self, records: Sequence[VulnerabilityRecord]) -> List[VulnerabilityRecord]:
        """Resolved records with both detection and patch dates."""
        return [
            r for r in records
            if r.is_resolved and r.detection_date is not None and r.patch_applied_date is not None
        ]

    def _average_remediation_days(self, remediated: List[VulnerabilityRecord]) -> float:
        if not remediated:
            return 0.0
        return sum(r.remediation_days for r in remediated) / len(remediated)

    def _critical_asset_exposure_rate(self, records: Sequence[VulnerabilityRecord]) -> float:
        """
        Share of distinct critical assets that cannot be patched.

        An asset with several records counts once.
        """
        critical_assets = {r.asset_id for r in records if r.is_critical}
        unpatchable = {r.asset_id for r in records if r.is_critical and not r.is_patchable}
        return safe_rate(len(unpatchable), len(critical_assets))

    def _on_time_patch_rate(self, remediated: List[VulnerabilityRecord]) -> float:
        """
        Share of remediated records patched within their recommended timeframe.

        Records without a timeframe have no deadline and are always on time;
        records with an unreadable timeframe are never on time.
        """
        on_time = 0
        for record in remediated:
            if record.timeframe_unreadable:
                continue
            deadline = record.recommended_timeframe_days or float("inf")
            if record.remediation_days <= deadline:
                on_time += 1
        return safe_rate(on_time, len(remediated))

"""
EDR alert aggregation logic.
"""

import logging
from typing import Sequence

from secmetrics.core.breakdown import compute_breakdown, safe_rate

from .models import (
    CRITICAL_SEVERITY,
    NETWORK_CONNECTION_ALERT,
    NO_IOC_VALUES,
    SUSPICIOUS_SEVERITIES,
    AlertRecord,
    EdrSummary,
)

logger = logging.getLogger(__name__)


class EdrAggregator:
    """
    Computes EDR KPIs from a set of alerts.

    Stateless: the same instance can summarize any number of alert sets.
    All rates are percentages (0-100) and are 0 when their denominator is 0.
    """

    def summarize(self, records: Sequence[AlertRecord]) -> EdrSummary:
        """
        Compute the EDR summary for a set of alerts.

        Args:
            records: Alerts to summarize

        Returns:
            Freshly built EDR summary
        """
        total = len(records)

        critical = sum(1 for r in records if r.severity == CRITICAL_SEVERITY)
        with_ioc = sum(1 for r in records if r.ioc_type not in NO_IOC_VALUES)

        summary = EdrSummary(
            total_alerts=total,
            critical_rate=safe_rate(critical, total),
            ioc_detection_rate=safe_rate(with_ioc, total),
            severity_breakdown=compute_breakdown(records, lambda r: r.severity),
            alert_type_breakdown=compute_breakdown(records, lambda r: r.alert_type),
            suspicious_connection_rate=self._suspicious_connection_rate(records),
            unique_hostname_count=len({r.hostname for r in records}),
            status_breakdown=compute_breakdown(records, lambda r: r.status),
        )

        logger.info(
            f"EDR summary: {summary.total_alerts} alerts, "
            f"critical {summary.critical_rate:.1f}%, "
            f"IoC {summary.ioc_detection_rate:.1f}%, "
            f"{summary.unique_hostname_count} endpoints"
        )

        return summary

    def _suspicious_connection_rate(self, records: Sequence[AlertRecord]) -> float:
        """Share of network-connection alerts with Critical or High severity."""
        connections = [r for r in records if r.alert_type == NETWORK_CONNECTION_ALERT]
        suspicious = sum(1 for r in connections if r.severity in SUSPICIOUS_SEVERITIES)
        return safe_rate(suspicious, len(connections))

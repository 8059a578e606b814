"""
Dashboard load-and-aggregate service.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from secmetrics.core.config import DataConfig, get_config
from secmetrics.core.exceptions import DataLoadError
from secmetrics.edr.aggregator import EdrAggregator
from secmetrics.edr.models import EdrSummary
from secmetrics.ingestion.loader import (
    EDR_SOURCE,
    VULNERABILITIES_SOURCE,
    load_alert_records,
    load_vulnerability_records,
)
from secmetrics.vulnerabilities.aggregator import VulnerabilityAggregator
from secmetrics.vulnerabilities.models import VulnSummary

from .models import DashboardState, LoadError

logger = logging.getLogger(__name__)

R = TypeVar("R")
S = TypeVar("S")


class DashboardService:
    """
    Loads both datasets and computes their summaries.

    One call to ``load`` is one load cycle:
    1. Read the EDR and vulnerability files (concurrently)
    2. Summarize each dataset as soon as its records are in
    3. Return a DashboardState with both summaries and any load errors

    The two paths share no state; a failure in one leaves the other intact.
    """

    def __init__(
        self,
        data_config: Optional[DataConfig] = None,
        edr_aggregator: Optional[EdrAggregator] = None,
        vulnerability_aggregator: Optional[VulnerabilityAggregator] = None,
    ):
        """
        Initialize dashboard service.

        Args:
            data_config: Dataset locations (defaults from environment)
            edr_aggregator: EDR aggregator
            vulnerability_aggregator: Vulnerability aggregator
        """
        self.data_config = data_config or get_config().data
        self.edr_aggregator = edr_aggregator or EdrAggregator()
        self.vulnerability_aggregator = vulnerability_aggregator or VulnerabilityAggregator()

    async def load(self) -> DashboardState:
        """
        Run one load cycle.

        Returns:
            Dashboard state for this cycle
        """
        edr_path = self.data_config.edr_path
        vuln_path = self.data_config.vulnerabilities_path

        logger.debug(f"Loading datasets: edr={edr_path}, vulnerabilities={vuln_path}")

        (edr, edr_error), (vulns, vuln_error) = await asyncio.gather(
            self._load_source(
                EDR_SOURCE, edr_path, load_alert_records,
                self.edr_aggregator.summarize, EdrSummary,
            ),
            self._load_source(
                VULNERABILITIES_SOURCE, vuln_path, load_vulnerability_records,
                self.vulnerability_aggregator.summarize, VulnSummary,
            ),
        )

        errors: List[LoadError] = [e for e in (edr_error, vuln_error) if e is not None]

        return DashboardState(edr=edr, vulnerabilities=vulns, errors=errors)

    def load_sync(self) -> DashboardState:
        """Run one load cycle outside an event loop."""
        return asyncio.run(self.load())

    async def _load_source(
        self,
        source: str,
        path: str,
        loader: Callable[[str], Sequence[R]],
        summarize: Callable[[Sequence[R]], S],
        default: Callable[[], S],
    ) -> Tuple[S, Optional[LoadError]]:
        """
        Load and summarize one dataset.

        A DataLoadError is logged and turned into a LoadError alongside the
        default (all-zero) summary.
        """
        try:
            records = await asyncio.to_thread(loader, path)
        except DataLoadError as e:
            logger.error(f"Error loading {source} data: {e}", exc_info=True)
            return default(), LoadError(source=source, path=path, message=str(e))

        return summarize(records), None

"""
Content Reporter.

Fetches the statistics summary and the status in one go and hands both
to the presentation layer. The two requests are independent and run
concurrently; results are joined before anything is returned.
"""

import asyncio
from typing import NamedTuple

from pihole_stats.api.client import APIClient, Endpoint
from pihole_stats.api.models import (
    ServiceStatus,
    StatisticsSnapshot,
    parse_statistics,
    parse_status,
)
from pihole_stats.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class Snapshot(NamedTuple):
    statistics: StatisticsSnapshot
    status: ServiceStatus


class ContentReporter:
    """Builds a complete Snapshot or fails as a whole."""

    def __init__(self, client: APIClient):
        self.client = client

    async def _statistics(self) -> StatisticsSnapshot:
        return parse_statistics(await self.client.fetch(Endpoint.SUMMARY))

    async def _status(self) -> ServiceStatus:
        return parse_status(await self.client.fetch(Endpoint.STATUS))

    async def get_snapshot(self) -> Snapshot:
        """
        Fetch statistics and status.

        Both requests always run to completion so neither is left pending
        when the client closes. If either failed, the first failure (in
        statistics, status order) is raised and no snapshot is returned.
        """
        statistics, status = await asyncio.gather(
            self._statistics(),
            self._status(),
            return_exceptions=True,
        )

        for result in (statistics, status):
            if isinstance(result, BaseException):
                raise result

        log_with_source(
            logger,
            "services",
            "debug",
            "Snapshot fetched",
            status=status.status.value,
        )
        return Snapshot(statistics=statistics, status=status)

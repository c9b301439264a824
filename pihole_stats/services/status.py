"""
Status Toggle.

Enables or disables Pi-hole blocking. The remote instance is the only
source of truth: the current state is read first, the action is skipped
if it would change nothing, and the final state is always read back
rather than inferred from the action response.

Usage:
    async with APIClient(config) as client:
        result = await StatusController(client).enable()
"""

from dataclasses import dataclass

from pihole_stats.api.client import APIClient, Endpoint
from pihole_stats.api.models import ServiceState, ServiceStatus, parse_status
from pihole_stats.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

ACTION_ENDPOINTS = {
    ServiceState.ENABLED: Endpoint.ENABLE,
    ServiceState.DISABLED: Endpoint.DISABLE,
}


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a toggle request."""

    action: ServiceState
    previous: ServiceStatus
    current: ServiceStatus
    changed: bool


class StatusController:
    """Reads and changes the blocking state of one Pi-hole instance."""

    def __init__(self, client: APIClient):
        self.client = client

    async def get_status(self) -> ServiceStatus:
        """Fetch and decode the current status."""
        return parse_status(await self.client.fetch(Endpoint.STATUS))

    async def toggle(self, action: ServiceState) -> ToggleResult:
        """
        Move Pi-hole to the requested state.

        Steps run strictly in order: read status, send the action only if
        the state differs, read status again. Any failure aborts the
        sequence and propagates unchanged.

        Args:
            action: Target state

        Returns:
            ToggleResult with the state before and after
        """
        previous = await self.get_status()

        if previous.status is action:
            log_with_source(
                logger,
                "services",
                "info",
                "Toggle skipped, already in requested state",
                state=action.value,
            )
            return ToggleResult(action=action, previous=previous, current=previous, changed=False)

        endpoint = ACTION_ENDPOINTS[action]
        log_with_source(
            logger,
            "services",
            "info",
            "Changing Pi-hole status",
            previous=previous.status.value,
            endpoint=endpoint.value,
        )
        # Response body is not trusted for the outcome
        await self.client.fetch(endpoint)

        current = await self.get_status()
        if current.status is not action:
            log_with_source(
                logger,
                "services",
                "warning",
                "Pi-hole did not reach requested state",
                requested=action.value,
                reported=current.status.value,
            )

        return ToggleResult(action=action, previous=previous, current=current, changed=True)

    async def enable(self) -> ToggleResult:
        return await self.toggle(ServiceState.ENABLED)

    async def disable(self) -> ToggleResult:
        return await self.toggle(ServiceState.DISABLED)

"""
Shared Test Fixtures.

FakePihole serves api.php through httpx.MockTransport and records every
action it receives, so tests can assert exactly which calls were made.
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest

from pihole_stats.api.client import APIClient
from pihole_stats.core.config import PiholeConfig

BASE_URL = "http://pi.hole/admin"
TOKEN = "s3cr3t"

SUMMARY_PAYLOAD: dict[str, Any] = {
    "domains_being_blocked": "121,860",
    "dns_queries_today": "18,312",
    "ads_blocked_today": "340",
    "ads_percentage_today": "1.9",
    "unique_domains": "1,604",
    "queries_forwarded": "9,822",
    "queries_cached": "8,150",
    "clients_ever_seen": "14",
    "unique_clients": "12",
    "status": "enabled",
    "gravity_last_updated": {
        "file_exists": True,
        "absolute": 1603000000,
        "relative": {"days": "3", "hours": "4", "minutes": "10"},
    },
}


class FakePihole:
    """
    In-memory stand-in for a Pi-hole admin API.

    enable/disable flip the reported status unless honor_actions is False.
    Setting responses[action] overrides the reply for that action.
    """

    def __init__(self, status: str = "enabled", honor_actions: bool = True):
        self.status = status
        self.honor_actions = honor_actions
        self.summary: Any = SUMMARY_PAYLOAD
        self.responses: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    @property
    def actions(self) -> list[str]:
        """Action names received, in order."""
        return [_action(request) for request in self.requests]

    def count(self, action: str) -> int:
        return self.actions.count(action)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        action = _action(request)

        if action in self.responses:
            return self.responses[action]
        if action == "summary":
            return httpx.Response(200, json=self.summary)
        if action == "status":
            return httpx.Response(200, json={"status": self.status})
        if action in ("enable", "disable"):
            if self.honor_actions:
                self.status = "enabled" if action == "enable" else "disabled"
            return httpx.Response(200, json={"status": self.status})
        return httpx.Response(200, json=[])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def _action(request: httpx.Request) -> str:
    # First query parameter is the bare action name, e.g. "summary&auth=..."
    return request.url.query.decode().split("&", 1)[0]


@pytest.fixture
def pihole_config() -> PiholeConfig:
    return PiholeConfig(base_url=BASE_URL, credential=TOKEN)


@pytest.fixture
def fake_pihole() -> FakePihole:
    return FakePihole()


@pytest.fixture
async def api_client(
    pihole_config: PiholeConfig,
    fake_pihole: FakePihole,
) -> AsyncGenerator[APIClient, None]:
    """APIClient wired to the fake_pihole fixture."""
    async with APIClient(pihole_config, transport=fake_pihole.transport()) as client:
        yield client

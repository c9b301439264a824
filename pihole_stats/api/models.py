"""
Pi-hole API response models.

Counters are kept as text, exactly as api.php?summary sends them
("1,234", "12.3"). Converting them to numbers is left to the point of
use. Unknown fields are ignored so newer Pi-hole releases keep decoding.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pihole_stats.core.exceptions import DecodeError, ProtocolError


class _WireModel(BaseModel):
    # summaryRaw sends plain numbers where summary sends strings
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class RelativeAge(_WireModel):
    """Time since gravity was last rebuilt, in human units."""

    days: str
    hours: str
    minutes: str

    def as_ints(self) -> tuple[int, int, int]:
        """
        Parse the age fields as integers.

        Raises:
            ValueError: If any field is not an integer string
        """
        return int(self.days), int(self.hours), int(self.minutes)


class GravityStatus(_WireModel):
    """The gravity_last_updated block of the summary payload."""

    file_exists: bool = False
    absolute: int | None = None
    relative: RelativeAge | None = None

    @field_validator("relative", mode="wrap")
    @classmethod
    def _only_when_file_exists(cls, value: Any, handler: Any, info: Any) -> Any:
        # Age is meaningless without a gravity file; skip it unparsed
        if not info.data.get("file_exists"):
            return None
        return handler(value)


class StatisticsSnapshot(_WireModel):
    """Summary statistics from api.php?summary."""

    unique_clients: str | None = None
    clients_ever_seen: str | None = None
    domains_being_blocked: str | None = None
    ads_blocked_today: str | None = None
    ads_percentage_today: str | None = None
    dns_queries_today: str | None = None
    queries_cached: str | None = None
    queries_forwarded: str | None = None
    unique_domains: str | None = None
    gravity_last_updated: GravityStatus = Field(default_factory=GravityStatus)

    @field_validator("gravity_last_updated", mode="before")
    @classmethod
    def _null_gravity_is_no_file(cls, value: Any) -> Any:
        # null decodes like an absent block: no gravity file
        if value is None:
            return {}
        return value


class ServiceState(str, Enum):
    """Blocking state reported by api.php?status."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class ServiceStatus(BaseModel):
    """Decoded api.php?status response."""

    model_config = ConfigDict(frozen=True)

    status: ServiceState

    @property
    def is_enabled(self) -> bool:
        return self.status is ServiceState.ENABLED


class _StatusPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = Field(strict=True)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "payload"
    return f"{location}: {first['msg']}"


def parse_statistics(payload: bytes | str) -> StatisticsSnapshot:
    """
    Decode a summary payload.

    Raises:
        DecodeError: If the payload is not a JSON object matching the schema
    """
    try:
        return StatisticsSnapshot.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(
            f"Invalid statistics payload ({_describe(e)})",
            details={"errors": e.error_count()},
        ) from e


def parse_status(payload: bytes | str) -> ServiceStatus:
    """
    Decode a status payload.

    The value must be exactly "enabled" or "disabled"; anything else,
    including a different case or surrounding whitespace, is rejected.

    Raises:
        DecodeError: If the payload is not a JSON object with a string status
        ProtocolError: If the status string is not a known state
    """
    try:
        raw = _StatusPayload.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(
            f"Invalid status payload ({_describe(e)})",
            details={"errors": e.error_count()},
        ) from e

    try:
        state = ServiceState(raw.status)
    except ValueError as e:
        raise ProtocolError(
            f"Unrecognized Pi-hole status {raw.status!r}",
            details={"status": raw.status},
        ) from e
    return ServiceStatus(status=state)

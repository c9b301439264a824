"""
Application Exceptions.

Every error raised by the API client and services derives from
PiholeStatsError, so the CLI can report any failure with one handler.
Nothing here is recovered locally; errors abort the current operation.
"""

from typing import Any


class PiholeStatsError(Exception):
    """
    Base exception for pihole-stats.

    Attributes:
        message: Human readable description
        code: Stable machine readable error code
        details: Extra context for logging
    """

    code = "PIHOLE_STATS_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class TransportError(PiholeStatsError):
    """Network or IO failure, or a non-success HTTP response."""

    code = "TRANSPORT_ERROR"

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details=details)
        self.cause = cause


class DecodeError(PiholeStatsError):
    """Payload is not valid JSON or does not match the expected schema."""

    code = "DECODE_ERROR"


class ProtocolError(PiholeStatsError):
    """Payload decoded but carries a value outside the documented set."""

    code = "PROTOCOL_ERROR"

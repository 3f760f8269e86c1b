"""Shared request data types."""

from dataclasses import dataclass
from enum import Enum

import httpx

from core.headers import RawHeaders


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    method: str
    target_url: str
    headers: RawHeaders
    body: bytes | None = None


class UpstreamOutcome(str, Enum):
    OK = "ok"
    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"


# Status returned to the caller when the backend never answered
FAILURE_STATUS = {
    UpstreamOutcome.UNREACHABLE: 502,
    UpstreamOutcome.TIMEOUT: 504,
}


@dataclass(frozen=True)
class UpstreamResult:
    """Result of a single upstream call.

    Attributes:
        outcome: Whether the backend answered, was unreachable, or timed out
        response: Backend response, set only when outcome is OK
        error: Transport error message for failed outcomes
    """

    outcome: UpstreamOutcome
    response: httpx.Response | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is UpstreamOutcome.OK

    @property
    def failure_status(self) -> int:
        """Caller-visible status for a failed outcome."""
        return FAILURE_STATUS[self.outcome]

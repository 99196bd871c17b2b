"""Monitored endpoint and its backend-computed health summary."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urlparse

from src.pulse.constants import (
    DEFAULT_EXPECTED_STATUS_CODES,
    DEFAULT_PROBE_INTERVAL_MINUTES,
    MAX_PROBE_INTERVAL_MINUTES,
    MIN_PROBE_INTERVAL_MINUTES,
    PROBE_TIMEOUT_SECONDS,
)


class HTTPMethod(Enum):
    """HTTP method used when probing an endpoint."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"


class EndpointStatus(Enum):
    """Health status reported by the backend."""

    HEALTHY = "healthy"  # Response time within baseline, no errors
    DEGRADED = "degraded"  # Response time above baseline or intermittent errors
    DOWN = "down"  # Consistent failures or timeouts
    UNKNOWN = "unknown"  # No probe data yet

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


def is_absolute_url(url: str) -> bool:
    """Check that a URL has a scheme and a host."""
    parsed = urlparse(url)
    return bool(parsed.scheme) and bool(parsed.netloc)


@dataclass(frozen=True)
class Endpoint:
    """A URL + method target under monitoring.

    Instances are immutable; use ``dataclasses.replace`` to derive an edited
    copy. The ``id`` is assigned by the backend.
    """

    id: str
    name: str
    url: str
    method: HTTPMethod
    probe_interval_minutes: int
    timeout_seconds: int
    expected_status_codes: list[int]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    headers: dict[str, str] | None = None
    body: str | None = None

    def __post_init__(self) -> None:
        """Validate endpoint after initialization."""
        if not MIN_PROBE_INTERVAL_MINUTES <= self.probe_interval_minutes <= MAX_PROBE_INTERVAL_MINUTES:
            raise ValueError(
                f"probe_interval_minutes must be between {MIN_PROBE_INTERVAL_MINUTES} "
                f"and {MAX_PROBE_INTERVAL_MINUTES}, got {self.probe_interval_minutes}"
            )

        if not self.expected_status_codes:
            raise ValueError("expected_status_codes must not be empty")

    @property
    def host(self) -> str | None:
        return urlparse(self.url).hostname

    @property
    def path(self) -> str:
        return urlparse(self.url).path or "/"

    @classmethod
    def new(cls, name: str, url: str, method: HTTPMethod = HTTPMethod.GET) -> "Endpoint":
        """Create a local endpoint draft with default probe settings.

        Args:
            name: Display name
            url: Absolute URL to probe
            method: HTTP method

        Returns:
            Endpoint with a client-generated id
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            url=url,
            method=method,
            probe_interval_minutes=DEFAULT_PROBE_INTERVAL_MINUTES,
            timeout_seconds=PROBE_TIMEOUT_SECONDS,
            expected_status_codes=list(DEFAULT_EXPECTED_STATUS_CODES),
            is_active=True,
            created_at=now,
            updated_at=now,
        )


@dataclass(frozen=True)
class EndpointHealthSummary:
    """Backend-computed health summary for one endpoint.

    Pulled from the backend; the client never recomputes it from probes.
    """

    endpoint_id: str
    status: EndpointStatus
    reliability_score: float  # 0.0 to 100.0
    error_rate: float  # 0.0 to 1.0
    uptime_percentage: float  # 0.0 to 100.0 (last 30 days)
    current_latency_ms: float | None = None
    baseline_latency_ms: float | None = None
    last_probe_at: datetime | None = None
    last_incident_at: datetime | None = None

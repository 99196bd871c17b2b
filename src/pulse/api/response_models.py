"""Response models for the monitoring backend.

Pydantic models for parsing and validating backend responses. Every response
is wrapped in a ``{success, data, error, meta}`` envelope; the payload DTOs
mirror the wire shape (snake_case keys, JSON-string columns, integer
booleans) and are converted to domain entities by the mapper.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for wire DTOs.

    Accepts snake_case keys (the wire convention) as well as camelCase
    spellings, and ignores unknown keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Envelope
# ============================================================================


class ResponseMeta(WireModel):
    """Pagination metadata."""

    total: int | None = Field(None, description="Total matching records")
    page: int | None = Field(None, description="Current page")
    limit: int | None = Field(None, description="Page size")


class APIResponse(WireModel):
    """Envelope wrapping every backend response."""

    success: bool = Field(..., description="Whether the request succeeded")
    data: Any = Field(None, description="Payload, null when absent")
    error: str | None = Field(None, description="Error message on failure")
    meta: ResponseMeta | None = Field(None, description="Pagination metadata")

    @property
    def has_data(self) -> bool:
        return self.success and self.data is not None


class EmptyDTO(WireModel):
    """Payload of mutation endpoints that return no resource."""

    deleted: bool | None = Field(None, description="Deletion acknowledgement")


# ============================================================================
# Endpoint models
# ============================================================================


class EndpointDTO(WireModel):
    """Endpoint row as stored by the backend.

    ``headers`` and ``expected_status_codes`` are JSON-encoded string columns;
    ``is_active`` is an integer flag.
    """

    id: str = Field(..., description="Endpoint ID")
    user_id: str | None = Field(None, description="Owning user ID")
    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Probed URL")
    method: str = Field(default="GET", description="HTTP method")
    headers: Any = Field(None, description="JSON object string of request headers")
    body: str | None = Field(None, description="Request body")
    probe_interval_minutes: int = Field(..., description="Probe interval in minutes")
    timeout_seconds: int = Field(..., description="Probe timeout in seconds")
    expected_status_codes: Any = Field(None, description="JSON array string of status codes")
    is_active: int = Field(default=1, description="Active flag (0 or 1)")
    created_at: str | None = Field(None, description="ISO-8601 creation time")
    updated_at: str | None = Field(None, description="ISO-8601 update time")


class EndpointBasicDTO(WireModel):
    """Minimal endpoint reference used on the dashboard."""

    id: str = Field(..., description="Endpoint ID")
    name: str = Field(..., description="Display name")


class HealthSummaryDTO(WireModel):
    """Backend-computed health summary."""

    endpoint_id: str = Field(..., description="Endpoint ID")
    status: str | None = Field(None, description="healthy, degraded, down or unknown")
    reliability_score: float = Field(..., description="Composite score 0-100")
    current_latency_ms: float | None = Field(None, description="Latest latency")
    baseline_latency_ms: float | None = Field(None, description="Baseline latency")
    error_rate: float = Field(..., description="Error rate 0.0-1.0")
    last_probe_at: str | None = Field(None, description="ISO-8601 time of last probe")
    last_incident_at: str | None = Field(None, description="ISO-8601 time of last incident")
    uptime_percentage: float = Field(..., description="Trailing 30-day uptime")


class EndpointWithHealthDTO(WireModel):
    """Dashboard endpoint row."""

    endpoint: EndpointBasicDTO
    health: HealthSummaryDTO | None = None


# ============================================================================
# Incident models
# ============================================================================


class IncidentDTO(WireModel):
    """Incident row; ``affected_regions`` is a JSON array string."""

    id: str = Field(..., description="Incident ID")
    endpoint_id: str = Field(..., description="Endpoint ID")
    type: str | None = Field(None, description="Incident type")
    severity: str | None = Field(None, description="minor, major or critical")
    status: str | None = Field(None, description="Lifecycle status")
    started_at: str | None = Field(None, description="ISO-8601 start time")
    resolved_at: str | None = Field(None, description="ISO-8601 resolution time")
    title: str = Field(..., description="Incident title")
    description: str | None = Field(None, description="Incident description")
    affected_regions: Any = Field(None, description="JSON array string of regions")
    created_at: str | None = Field(None, description="ISO-8601 creation time")
    updated_at: str | None = Field(None, description="ISO-8601 update time")


class TimelineEntryDTO(WireModel):
    """Incident timeline event."""

    id: str = Field(..., description="Entry ID")
    incident_id: str = Field(..., description="Incident ID")
    status: str | None = Field(None, description="Status snapshot")
    message: str = Field(default="", description="Entry message")
    timestamp: str | None = Field(None, description="ISO-8601 event time")


class IncidentWithTimelineDTO(WireModel):
    """Incident detail payload."""

    incident: IncidentDTO
    timeline: list[TimelineEntryDTO] = Field(default_factory=list)


class IncidentStatsDTO(WireModel):
    """Incident summary counts."""

    total: int = 0
    active: int = 0
    resolved: int = 0
    critical: int = 0
    major: int = 0
    minor: int = 0


# ============================================================================
# Probe models
# ============================================================================


class ProbeResultDTO(WireModel):
    """Single probe outcome."""

    id: str = Field(..., description="Probe ID")
    endpoint_id: str = Field(..., description="Endpoint ID")
    timestamp: str | None = Field(None, description="ISO-8601 probe time")
    status: str | None = Field(None, description="success, error or timeout")
    latency_ms: float | None = Field(None, description="Latency in milliseconds")
    status_code: int | None = Field(None, description="HTTP status returned")
    error_message: str | None = Field(None, description="Failure description")
    region: str = Field(..., description="Edge region that ran the probe")


class ProbeStatsDTO(WireModel):
    """Aggregate probe statistics for a window."""

    total_probes: int = Field(..., description="Probes in window")
    success_count: int = Field(..., description="Successful probes")
    error_count: int = Field(..., description="Errored probes")
    timeout_count: int = Field(..., description="Timed-out probes")
    avg_latency_ms: float | None = Field(None, description="Average latency")
    p50_latency_ms: float | None = Field(None, description="Median latency")
    p95_latency_ms: float | None = Field(None, description="95th percentile latency")
    p99_latency_ms: float | None = Field(None, description="99th percentile latency")
    min_latency_ms: float | None = Field(None, description="Minimum latency")
    max_latency_ms: float | None = Field(None, description="Maximum latency")


# ============================================================================
# Dashboard and user models
# ============================================================================


class DashboardDTO(WireModel):
    """Dashboard summary payload."""

    overall_health: int = Field(..., description="Overall health 0-100")
    endpoint_count: int = Field(..., description="Monitored endpoints")
    healthy_count: int = Field(..., description="Healthy endpoints")
    degraded_count: int = Field(..., description="Degraded endpoints")
    down_count: int = Field(..., description="Down endpoints")
    active_incident_count: int = Field(..., description="Open incidents")
    endpoints: list[EndpointWithHealthDTO] = Field(default_factory=list)
    recent_incidents: list[IncidentDTO] = Field(default_factory=list)


class UserDTO(WireModel):
    """Current user profile."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Account email")
    subscription_status: str = Field(default="free", description="Subscription tier state")
    subscription_expires_at: str | None = Field(None, description="ISO-8601 expiry")
    created_at: str | None = Field(None, description="ISO-8601 creation time")
    endpoint_count: int | None = Field(None, description="Endpoints owned")

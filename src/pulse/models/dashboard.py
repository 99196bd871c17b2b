"""Dashboard overview returned by the backend."""

from dataclasses import dataclass, field

from src.pulse.models.endpoint import EndpointHealthSummary, EndpointStatus
from src.pulse.models.incident import Incident


@dataclass(frozen=True)
class DashboardEndpoint:
    """Endpoint row on the dashboard with its optional health summary."""

    id: str
    name: str
    health: EndpointHealthSummary | None = None

    @property
    def status(self) -> EndpointStatus:
        """Health status, or UNKNOWN when the backend sent no health."""
        if self.health is None:
            return EndpointStatus.UNKNOWN
        return self.health.status

    @property
    def latency(self) -> float | None:
        if self.health is None:
            return None
        return self.health.current_latency_ms


@dataclass(frozen=True)
class DashboardData:
    """Aggregated account overview."""

    overall_health: int
    endpoint_count: int
    healthy_count: int
    degraded_count: int
    down_count: int
    active_incident_count: int
    endpoints: list[DashboardEndpoint] = field(default_factory=list)
    recent_incidents: list[Incident] = field(default_factory=list)

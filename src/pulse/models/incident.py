"""Incident domain model.

An incident is a detected anomaly episode tied to one endpoint. Its status
moves through active -> investigating -> identified -> monitoring ->
resolved, but the client does not gate transitions: the backend validates
them and records each one as a timeline entry.
"""

import functools
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from src.pulse.display import format_duration


@functools.total_ordering
class IncidentSeverity(Enum):
    """Incident severity, ordered minor < major < critical."""

    MINOR = "minor"  # Degraded performance
    MAJOR = "major"  # Significant degradation
    CRITICAL = "critical"  # Complete outage

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def priority(self) -> int:
        return _SEVERITY_PRIORITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IncidentSeverity):
            return NotImplemented
        return self.priority < other.priority


_SEVERITY_PRIORITY = {
    IncidentSeverity.MINOR: 1,
    IncidentSeverity.MAJOR: 2,
    IncidentSeverity.CRITICAL: 3,
}


class IncidentStatus(Enum):
    """Incident lifecycle state. ``RESOLVED`` is terminal."""

    ACTIVE = "active"
    INVESTIGATING = "investigating"
    IDENTIFIED = "identified"
    MONITORING = "monitoring"
    RESOLVED = "resolved"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def is_active(self) -> bool:
        return self is not IncidentStatus.RESOLVED


class IncidentType(Enum):
    """Kind of anomaly that opened the incident."""

    LATENCY_SPIKE = "latency_spike"  # Response time significantly above baseline
    HIGH_ERROR_RATE = "high_error_rate"  # Error rate above threshold
    TIMEOUT = "timeout"  # Consistent timeouts
    COMPLETE_OUTAGE = "complete_outage"  # All probes failing

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class Incident:
    """Anomaly record for one endpoint.

    ``resolved_at`` is set if and only if the status is ``RESOLVED``.
    """

    id: str
    endpoint_id: str
    type: IncidentType
    severity: IncidentSeverity
    status: IncidentStatus
    started_at: datetime
    title: str
    created_at: datetime
    updated_at: datetime
    resolved_at: datetime | None = None
    description: str | None = None
    affected_regions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the resolved invariant."""
        is_resolved = self.status is IncidentStatus.RESOLVED
        if is_resolved != (self.resolved_at is not None):
            raise ValueError(
                f"resolved_at must be set iff status is resolved "
                f"(status={self.status.value}, resolved_at={self.resolved_at})"
            )

    @property
    def duration(self) -> timedelta:
        """Elapsed time since start; keeps growing until resolved.

        Computed on every access, so never cache the result of an open incident.
        """
        end = self.resolved_at or datetime.now(timezone.utc)
        return end - self.started_at

    @property
    def duration_string(self) -> str:
        return format_duration(self.duration.total_seconds())

    @property
    def is_resolved(self) -> bool:
        return self.status is IncidentStatus.RESOLVED

    @classmethod
    def create(
        cls,
        endpoint_id: str,
        type: IncidentType,
        severity: IncidentSeverity,
        title: str,
        description: str | None = None,
    ) -> "Incident":
        """Create a new active incident starting now."""
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            endpoint_id=endpoint_id,
            type=type,
            severity=severity,
            status=IncidentStatus.ACTIVE,
            started_at=now,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )


@dataclass(frozen=True)
class IncidentTimelineEntry:
    """Append-only event recorded by the backend for an incident."""

    id: str
    incident_id: str
    status: IncidentStatus
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class IncidentDetail:
    """Incident together with its timeline, ordered by timestamp ascending."""

    incident: Incident
    timeline: list[IncidentTimelineEntry] = field(default_factory=list)

    @property
    def latest_entry(self) -> IncidentTimelineEntry | None:
        return self.timeline[-1] if self.timeline else None


@dataclass(frozen=True)
class IncidentStats:
    """Incident counts from the backend summary endpoint."""

    total: int
    active: int
    resolved: int
    critical: int
    major: int
    minor: int

"""Domain models for the PulseAPI monitoring client."""

from src.pulse.models.dashboard import DashboardData, DashboardEndpoint
from src.pulse.models.endpoint import Endpoint, EndpointHealthSummary, EndpointStatus, HTTPMethod
from src.pulse.models.incident import (
    Incident,
    IncidentDetail,
    IncidentSeverity,
    IncidentStats,
    IncidentStatus,
    IncidentTimelineEntry,
    IncidentType,
)
from src.pulse.models.notification import AppNotification, NotificationType
from src.pulse.models.probe import LatencyDataPoint, ProbeResult, ProbeResultStatus, ProbeStatistics
from src.pulse.models.user import User

__all__ = [
    "HTTPMethod",
    "Endpoint",
    "EndpointStatus",
    "EndpointHealthSummary",
    "Incident",
    "IncidentDetail",
    "IncidentSeverity",
    "IncidentStats",
    "IncidentStatus",
    "IncidentTimelineEntry",
    "IncidentType",
    "ProbeResult",
    "ProbeResultStatus",
    "ProbeStatistics",
    "LatencyDataPoint",
    "DashboardData",
    "DashboardEndpoint",
    "AppNotification",
    "NotificationType",
    "User",
]

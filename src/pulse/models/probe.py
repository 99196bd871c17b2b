"""Probe results and aggregate probe statistics."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from src.pulse.display import format_latency, format_percentage


class ProbeResultStatus(Enum):
    """Outcome of a single health check."""

    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class ProbeResult:
    """One health check outcome from a given region.

    Latency is absent on errors and timeouts.
    """

    id: str
    endpoint_id: str
    timestamp: datetime
    status: ProbeResultStatus
    region: str
    latency_ms: float | None = None
    status_code: int | None = None
    error_message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status is ProbeResultStatus.SUCCESS

    @property
    def latency_string(self) -> str | None:
        if self.latency_ms is None:
            return None
        return format_latency(self.latency_ms)


@dataclass(frozen=True)
class ProbeStatistics:
    """Aggregate probe outcomes over a time window.

    Latency figures are None when no probe in the window reported one.
    """

    endpoint_id: str
    period_start: datetime
    period_end: datetime
    total_probes: int
    success_count: int
    error_count: int
    timeout_count: int
    average_latency_ms: float | None = None
    p50_latency_ms: float | None = None
    p95_latency_ms: float | None = None
    p99_latency_ms: float | None = None
    min_latency_ms: float | None = None
    max_latency_ms: float | None = None

    @property
    def success_rate(self) -> float:
        """Successful fraction of probes, 0.0 when there were none."""
        if self.total_probes <= 0:
            return 0.0
        return self.success_count / self.total_probes

    @property
    def error_rate(self) -> float:
        """Errored or timed-out fraction of probes, 0.0 when there were none."""
        if self.total_probes <= 0:
            return 0.0
        return (self.error_count + self.timeout_count) / self.total_probes

    @property
    def success_rate_percentage(self) -> str:
        return format_percentage(self.success_rate)


@dataclass(frozen=True)
class LatencyDataPoint:
    """Chart point for latency sparklines."""

    timestamp: datetime
    latency_ms: float
    is_anomaly: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

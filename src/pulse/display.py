"""Derived display values.

Pure formatting and chart aggregation helpers; no I/O.
"""

from datetime import date, timedelta
from typing import TYPE_CHECKING

from src.pulse.constants import CHART_DATA_POINTS

if TYPE_CHECKING:
    from src.pulse.models.probe import LatencyDataPoint, ProbeResult


def format_latency(latency_ms: float) -> str:
    """Format milliseconds for display (e.g. "123ms", "1.2s").

    Args:
        latency_ms: Latency in milliseconds

    Returns:
        Integer milliseconds below one second, otherwise seconds with one decimal
    """
    if latency_ms < 1000:
        return f"{int(latency_ms)}ms"
    return f"{latency_ms / 1000:.1f}s"


def format_duration(seconds: float) -> str:
    """Format a duration using its largest units (e.g. "2d 4h", "45m", "12s").

    Args:
        seconds: Duration in seconds

    Returns:
        Compact duration string
    """
    total_seconds = int(seconds)
    minutes = total_seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        remaining_hours = hours % 24
        return f"{days}d {remaining_hours}h" if remaining_hours > 0 else f"{days}d"
    if hours > 0:
        remaining_minutes = minutes % 60
        return f"{hours}h {remaining_minutes}m" if remaining_minutes > 0 else f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return f"{total_seconds}s"


def format_percentage(fraction: float) -> str:
    """Format a 0.0-1.0 fraction as a percentage with one decimal."""
    return f"{fraction * 100:.1f}%"


def _most_recent(items: list, count: int) -> list:
    return items[-count:] if count > 0 else []


def latency_series(
    probes: "list[ProbeResult]",
    limit: int = CHART_DATA_POINTS,
) -> list[float]:
    """Latency values of the most recent probes, oldest first.

    Probes without a latency (errors, timeouts) are skipped.

    Args:
        probes: Probe results in any order
        limit: Maximum number of points

    Returns:
        Chronologically ordered latency values
    """
    ordered = sorted(
        (probe for probe in probes if probe.latency_ms is not None),
        key=lambda probe: probe.timestamp,
    )
    return [probe.latency_ms for probe in _most_recent(ordered, limit)]  # type: ignore[misc]


def error_rate_series(
    probes: "list[ProbeResult]",
    bucket: timedelta = timedelta(hours=1),
    limit: int = CHART_DATA_POINTS,
) -> list[float]:
    """Failure ratio per time bucket, oldest bucket first.

    Args:
        probes: Probe results in any order
        bucket: Bucket width
        limit: Maximum number of buckets (most recent kept)

    Returns:
        Error ratio (0.0 to 1.0) for each non-empty bucket
    """
    if bucket.total_seconds() <= 0:
        raise ValueError("bucket must be a positive duration")

    width = bucket.total_seconds()
    buckets: dict[int, list[bool]] = {}
    for probe in probes:
        key = int(probe.timestamp.timestamp() // width)
        buckets.setdefault(key, []).append(probe.is_success)

    rates = [
        sum(1 for ok in outcomes if not ok) / len(outcomes)
        for _, outcomes in sorted(buckets.items())
    ]
    return _most_recent(rates, limit)


def latency_points(probes: "list[ProbeResult]") -> "list[LatencyDataPoint]":
    """Chart points for every probe that reported a latency, oldest first."""
    from src.pulse.models.probe import LatencyDataPoint

    return [
        LatencyDataPoint(timestamp=probe.timestamp, latency_ms=probe.latency_ms)
        for probe in sorted(probes, key=lambda probe: probe.timestamp)
        if probe.latency_ms is not None
    ]


def daily_uptime(probes: "list[ProbeResult]", days: int = 7) -> list[tuple[date, float]]:
    """Uptime percentage (0-100) per calendar day, most recent ``days`` kept.

    Days are taken from the probe timestamps as given.
    """
    by_day: dict[date, list[bool]] = {}
    for probe in probes:
        by_day.setdefault(probe.timestamp.date(), []).append(probe.is_success)

    uptime = [
        (day, sum(1 for ok in outcomes if ok) / len(outcomes) * 100)
        for day, outcomes in sorted(by_day.items())
    ]
    return _most_recent(uptime, days)

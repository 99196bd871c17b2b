"""Unit tests for display formatting and chart aggregation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from src.pulse.display import (
    daily_uptime,
    error_rate_series,
    format_duration,
    format_latency,
    format_percentage,
    latency_points,
    latency_series,
)
from src.pulse.models.probe import ProbeResult, ProbeResultStatus

T0 = datetime(2026, 1, 16, 0, 0, tzinfo=timezone.utc)


def make_probe(
    minutes: int,
    status: ProbeResultStatus = ProbeResultStatus.SUCCESS,
    latency_ms: float | None = 200.0,
) -> ProbeResult:
    return ProbeResult(
        id=f"pr-{minutes}",
        endpoint_id="ep-1",
        timestamp=T0 + timedelta(minutes=minutes),
        status=status,
        region="us-east",
        latency_ms=latency_ms,
    )


class TestFormatLatency:
    """Test suite for format_latency."""

    @pytest.mark.parametrize(
        ("latency_ms", "expected"),
        [(0, "0ms"), (123.7, "123ms"), (999.9, "999ms"), (1000, "1.0s"), (1250, "1.2s"), (12500, "12.5s")],
    )
    def test_format_latency(self, latency_ms: float, expected: str) -> None:
        """Test milliseconds below a second, seconds above."""
        assert format_latency(latency_ms) == expected


class TestFormatDuration:
    """Test suite for format_duration."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (12, "12s"),
            (45 * 60, "45m"),
            (3 * 3600, "3h"),
            (3 * 3600 + 5 * 60, "3h 5m"),
            (2 * 86400, "2d"),
            (2 * 86400 + 4 * 3600, "2d 4h"),
        ],
    )
    def test_format_duration(self, seconds: float, expected: str) -> None:
        """Test the two largest units are shown."""
        assert format_duration(seconds) == expected

    def test_format_percentage(self) -> None:
        """Test fractions are shown as percentages."""
        assert format_percentage(0.9722) == "97.2%"
        assert format_percentage(0.0) == "0.0%"


class TestLatencySeries:
    """Test suite for latency chart helpers."""

    def test_series_is_chronological_and_skips_missing(self) -> None:
        """Test probes are sorted and failed probes skipped."""
        probes = [
            make_probe(10, latency_ms=300.0),
            make_probe(0, latency_ms=100.0),
            make_probe(5, ProbeResultStatus.TIMEOUT, latency_ms=None),
        ]

        assert latency_series(probes) == [100.0, 300.0]

    def test_series_keeps_most_recent(self) -> None:
        """Test only the last ``limit`` points are kept."""
        probes = [make_probe(i, latency_ms=float(i)) for i in range(30)]

        series = latency_series(probes, limit=24)

        assert len(series) == 24
        assert series[0] == 6.0
        assert series[-1] == 29.0

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_is_empty(self, limit: int) -> None:
        """Test a zero or negative limit yields no points."""
        probes = [make_probe(i, latency_ms=float(i)) for i in range(5)]

        assert latency_series(probes, limit=limit) == []

    def test_latency_points(self) -> None:
        """Test chart points carry timestamps and latency."""
        points = latency_points([make_probe(5, latency_ms=250.0), make_probe(0, latency_ms=None)])

        assert len(points) == 1
        assert points[0].timestamp == T0 + timedelta(minutes=5)
        assert points[0].latency_ms == 250.0
        assert points[0].is_anomaly is False


class TestErrorRateSeries:
    """Test suite for error_rate_series."""

    def test_rate_per_bucket(self) -> None:
        """Test failures are averaged per hourly bucket."""
        probes = [
            make_probe(0),
            make_probe(10, ProbeResultStatus.ERROR, None),
            make_probe(70),
            make_probe(80),
        ]

        assert error_rate_series(probes) == [0.5, 0.0]

    def test_empty(self) -> None:
        """Test no probes yields no buckets."""
        assert error_rate_series([]) == []

    def test_rejects_non_positive_bucket(self) -> None:
        """Test bucket width must be positive."""
        with pytest.raises(ValueError):
            error_rate_series([make_probe(0)], bucket=timedelta(0))

    def test_limit_boundaries(self) -> None:
        """Test the bucket limit at zero and one."""
        probes = [make_probe(i * 60) for i in range(5)]

        assert error_rate_series(probes, limit=0) == []
        assert error_rate_series(probes, limit=1) == [0.0]


class TestDailyUptime:
    """Test suite for daily_uptime."""

    def test_uptime_per_day(self) -> None:
        """Test uptime is computed per calendar day."""
        probes = [
            make_probe(0),
            make_probe(5, ProbeResultStatus.ERROR, None),
            make_probe(24 * 60),
        ]

        assert daily_uptime(probes) == [(date(2026, 1, 16), 50.0), (date(2026, 1, 17), 100.0)]

    def test_keeps_last_days(self) -> None:
        """Test only the most recent days are kept."""
        probes = [make_probe(day * 24 * 60) for day in range(10)]

        result = daily_uptime(probes, days=7)

        assert len(result) == 7
        assert result[0][0] == date(2026, 1, 19)

    def test_zero_days_is_empty(self) -> None:
        """Test asking for zero days yields nothing."""
        assert daily_uptime([make_probe(0)], days=0) == []

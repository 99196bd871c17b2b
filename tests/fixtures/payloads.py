"""Backend payload fixtures.

Rows mirror the wire format: snake_case keys, JSON-string columns and
integer booleans.
"""

import json
from typing import Any

import httpx

TEST_BASE_URL = "https://api.pulse.test"

ENDPOINT_ROW: dict[str, Any] = {
    "id": "ep-1",
    "user_id": "user-123",
    "name": "Checkout API",
    "url": "https://shop.example.com/api/checkout",
    "method": "POST",
    "headers": '{"Authorization": "Bearer abc"}',
    "body": '{"ping": true}',
    "probe_interval_minutes": 5,
    "timeout_seconds": 10,
    "expected_status_codes": "[200, 201]",
    "is_active": 1,
    "created_at": "2026-01-15T10:30:00Z",
    "updated_at": "2026-01-16T08:00:00Z",
}

HEALTH_ROW: dict[str, Any] = {
    "endpoint_id": "ep-1",
    "status": "degraded",
    "reliability_score": 87.5,
    "current_latency_ms": 850.0,
    "baseline_latency_ms": 240.0,
    "error_rate": 0.02,
    "last_probe_at": "2026-01-16T08:00:00Z",
    "last_incident_at": None,
    "uptime_percentage": 99.2,
}

INCIDENT_ROW: dict[str, Any] = {
    "id": "inc-1",
    "endpoint_id": "ep-1",
    "type": "latency_spike",
    "severity": "major",
    "status": "investigating",
    "started_at": "2026-01-16T07:00:00Z",
    "resolved_at": None,
    "title": "High latency on Checkout API",
    "description": "p95 latency is 3x baseline",
    "affected_regions": '["us-east", "eu-west"]',
    "created_at": "2026-01-16T07:00:00Z",
    "updated_at": "2026-01-16T07:30:00Z",
}

TIMELINE_ROWS: list[dict[str, Any]] = [
    {
        "id": "tl-2",
        "incident_id": "inc-1",
        "status": "investigating",
        "message": "Looking into it",
        "timestamp": "2026-01-16T07:30:00Z",
    },
    {
        "id": "tl-1",
        "incident_id": "inc-1",
        "status": "active",
        "message": "Incident opened",
        "timestamp": "2026-01-16T07:00:00Z",
    },
]

INCIDENT_STATS: dict[str, Any] = {
    "total": 12,
    "active": 2,
    "resolved": 10,
    "critical": 1,
    "major": 4,
    "minor": 7,
}

PROBE_ROWS: list[dict[str, Any]] = [
    {
        "id": "pr-1",
        "endpoint_id": "ep-1",
        "timestamp": "2026-01-16T06:00:00Z",
        "status": "success",
        "latency_ms": 230.0,
        "status_code": 200,
        "error_message": None,
        "region": "us-east",
    },
    {
        "id": "pr-2",
        "endpoint_id": "ep-1",
        "timestamp": "2026-01-16T06:05:00Z",
        "status": "timeout",
        "latency_ms": None,
        "status_code": None,
        "error_message": "Timed out after 10s",
        "region": "eu-west",
    },
]

PROBE_STATS: dict[str, Any] = {
    "total_probes": 288,
    "success_count": 280,
    "error_count": 5,
    "timeout_count": 3,
    "avg_latency_ms": 250.4,
    "p50_latency_ms": 240.0,
    "p95_latency_ms": 410.0,
    "p99_latency_ms": 720.0,
    "min_latency_ms": 180.0,
    "max_latency_ms": 950.0,
}

DASHBOARD: dict[str, Any] = {
    "overall_health": 92,
    "endpoint_count": 2,
    "healthy_count": 0,
    "degraded_count": 1,
    "down_count": 0,
    "active_incident_count": 1,
    "endpoints": [
        {"endpoint": {"id": "ep-1", "name": "Checkout API"}, "health": HEALTH_ROW},
        {"endpoint": {"id": "ep-2", "name": "Search API"}, "health": None},
    ],
    "recent_incidents": [INCIDENT_ROW],
}

USER: dict[str, Any] = {
    "id": "user-123",
    "email": "ops@example.com",
    "subscription_status": "pro",
    "subscription_expires_at": "2027-01-01T00:00:00Z",
    "created_at": "2025-06-01T12:00:00Z",
    "endpoint_count": 2,
}


def envelope(data: Any = None, success: bool = True, error: str | None = None) -> dict[str, Any]:
    """Wrap a payload in the response envelope."""
    return {"success": success, "data": data, "error": error}


def envelope_bytes(data: Any = None, success: bool = True, error: str | None = None) -> bytes:
    return json.dumps(envelope(data, success, error)).encode()


def json_response(data: Any = None, status_code: int = 200, **kwargs: Any) -> httpx.Response:
    """HTTP response carrying an enveloped payload."""
    return httpx.Response(status_code, json=envelope(data, **kwargs))

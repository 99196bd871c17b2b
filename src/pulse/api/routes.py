"""Request descriptors for the monitoring backend.

Each resource family exposes a closed set of constructors returning an
immutable ``APIRequest``. Paths are relative; the client prepends the base
URL and the API version prefix.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.pulse.constants import (
    DEFAULT_EXPECTED_STATUS_CODES,
    DEFAULT_INCIDENT_LIMIT,
    DEFAULT_PROBE_INTERVAL_MINUTES,
    DEFAULT_PROBE_WINDOW_HOURS,
    MAX_PROBE_INTERVAL_MINUTES,
    MIN_PROBE_INTERVAL_MINUTES,
    PROBE_TIMEOUT_SECONDS,
)
from src.pulse.models.endpoint import HTTPMethod, is_absolute_url
from src.pulse.models.incident import IncidentStatus

IDEMPOTENT_METHODS = frozenset({HTTPMethod.GET, HTTPMethod.HEAD, HTTPMethod.PUT, HTTPMethod.DELETE})


@dataclass(frozen=True)
class APIRequest:
    """Typed description of one backend call.

    Attributes:
        operation: Tag naming the operation (e.g. "endpoints.get")
        method: HTTP method
        path: Path relative to the versioned base URL
        body: Optional JSON body (pydantic model or mapping)
        query: Optional query parameters
    """

    operation: str
    method: HTTPMethod
    path: str
    body: BaseModel | dict[str, Any] | None = None
    query: dict[str, str | int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.path.startswith("/") or "://" in self.path:
            raise ValueError(f"path must be relative and start with '/', got {self.path!r}")

    @property
    def is_idempotent(self) -> bool:
        return self.method in IDEMPOTENT_METHODS


# ============================================================================
# Request DTOs
# ============================================================================


def _validate_url(v: str | None) -> str | None:
    if v is not None and not is_absolute_url(v):
        raise ValueError(f"url must be an absolute URL, got {v!r}")
    return v


class CreateEndpointRequest(BaseModel):
    """Body of ``POST /endpoints``."""

    name: str = Field(..., min_length=1, description="Display name")
    url: str = Field(..., description="Absolute URL to probe")
    method: HTTPMethod = Field(default=HTTPMethod.GET, description="HTTP method")
    probe_interval_minutes: int = Field(
        default=DEFAULT_PROBE_INTERVAL_MINUTES,
        ge=MIN_PROBE_INTERVAL_MINUTES,
        le=MAX_PROBE_INTERVAL_MINUTES,
        description="Probe interval in minutes",
    )
    timeout_seconds: int = Field(default=PROBE_TIMEOUT_SECONDS, ge=1, description="Probe timeout")
    expected_status_codes: list[int] = Field(
        default_factory=lambda: list(DEFAULT_EXPECTED_STATUS_CODES),
        min_length=1,
        description="Status codes counted as success",
    )
    headers: dict[str, str] | None = Field(None, description="Request headers")
    body: str | None = Field(None, description="Request body")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Ensure the URL is absolute."""
        return _validate_url(v)


class UpdateEndpointRequest(BaseModel):
    """Body of ``PUT /endpoints/{id}``; unset fields are left unchanged."""

    name: str | None = Field(None, min_length=1, description="Display name")
    url: str | None = Field(None, description="Absolute URL to probe")
    method: HTTPMethod | None = Field(None, description="HTTP method")
    probe_interval_minutes: int | None = Field(
        None,
        ge=MIN_PROBE_INTERVAL_MINUTES,
        le=MAX_PROBE_INTERVAL_MINUTES,
        description="Probe interval in minutes",
    )
    timeout_seconds: int | None = Field(None, ge=1, description="Probe timeout")
    expected_status_codes: list[int] | None = Field(
        None, min_length=1, description="Status codes counted as success"
    )
    is_active: bool | None = Field(None, description="Whether probing is enabled")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Ensure the URL is absolute."""
        return _validate_url(v)


class UpdateStatusRequest(BaseModel):
    """Body of ``PATCH /incidents/{id}/status``."""

    status: IncidentStatus
    message: str


class DeviceTokenRequest(BaseModel):
    """Body of ``POST /users/device-token``."""

    device_token: str = Field(..., min_length=1)


# ============================================================================
# Descriptor families
# ============================================================================


class EndpointsAPI:
    """Descriptors for endpoint management."""

    @staticmethod
    def list() -> APIRequest:
        return APIRequest("endpoints.list", HTTPMethod.GET, "/endpoints")

    @staticmethod
    def get(endpoint_id: str) -> APIRequest:
        return APIRequest("endpoints.get", HTTPMethod.GET, f"/endpoints/{endpoint_id}")

    @staticmethod
    def create(request: CreateEndpointRequest) -> APIRequest:
        return APIRequest("endpoints.create", HTTPMethod.POST, "/endpoints", body=request)

    @staticmethod
    def update(endpoint_id: str, request: UpdateEndpointRequest) -> APIRequest:
        return APIRequest(
            "endpoints.update", HTTPMethod.PUT, f"/endpoints/{endpoint_id}", body=request
        )

    @staticmethod
    def delete(endpoint_id: str) -> APIRequest:
        return APIRequest("endpoints.delete", HTTPMethod.DELETE, f"/endpoints/{endpoint_id}")

    @staticmethod
    def health(endpoint_id: str) -> APIRequest:
        return APIRequest("endpoints.health", HTTPMethod.GET, f"/endpoints/{endpoint_id}/health")


class IncidentsAPI:
    """Descriptors for incidents."""

    @staticmethod
    def list(
        status: IncidentStatus | None = None,
        limit: int = DEFAULT_INCIDENT_LIMIT,
    ) -> APIRequest:
        query: dict[str, str | int] = {"limit": limit}
        if status is not None:
            query["status"] = status.value
        return APIRequest("incidents.list", HTTPMethod.GET, "/incidents", query=query)

    @staticmethod
    def get(incident_id: str) -> APIRequest:
        return APIRequest("incidents.get", HTTPMethod.GET, f"/incidents/{incident_id}")

    @staticmethod
    def update_status(incident_id: str, status: IncidentStatus, message: str) -> APIRequest:
        return APIRequest(
            "incidents.update_status",
            HTTPMethod.PATCH,
            f"/incidents/{incident_id}/status",
            body=UpdateStatusRequest(status=status, message=message),
        )

    @staticmethod
    def stats() -> APIRequest:
        return APIRequest("incidents.stats", HTTPMethod.GET, "/incidents/stats/summary")


class ProbesAPI:
    """Descriptors for probe history and statistics."""

    @staticmethod
    def history(endpoint_id: str, hours: int = DEFAULT_PROBE_WINDOW_HOURS) -> APIRequest:
        return APIRequest(
            "probes.history",
            HTTPMethod.GET,
            f"/probes/history/{endpoint_id}",
            query={"hours": hours},
        )

    @staticmethod
    def stats(endpoint_id: str, hours: int = DEFAULT_PROBE_WINDOW_HOURS) -> APIRequest:
        return APIRequest(
            "probes.stats",
            HTTPMethod.GET,
            f"/probes/stats/{endpoint_id}",
            query={"hours": hours},
        )


class DashboardAPI:
    """Descriptor for the dashboard summary."""

    @staticmethod
    def summary() -> APIRequest:
        return APIRequest("dashboard.summary", HTTPMethod.GET, "/dashboard")


class UsersAPI:
    """Descriptors for the current user."""

    @staticmethod
    def me() -> APIRequest:
        return APIRequest("users.me", HTTPMethod.GET, "/users/me")

    @staticmethod
    def register_device_token(token: str) -> APIRequest:
        return APIRequest(
            "users.register_device_token",
            HTTPMethod.POST,
            "/users/device-token",
            body=DeviceTokenRequest(device_token=token),
        )

"""Unit tests for request descriptors."""

import pytest
from pydantic import ValidationError

from src.pulse.api.routes import (
    APIRequest,
    CreateEndpointRequest,
    DashboardAPI,
    EndpointsAPI,
    IncidentsAPI,
    ProbesAPI,
    UpdateEndpointRequest,
    UsersAPI,
)
from src.pulse.models import HTTPMethod, IncidentStatus


class TestAPIRequest:
    """Test suite for APIRequest."""

    @pytest.mark.parametrize("path", ["endpoints", "https://evil.example.com/x", ""])
    def test_path_must_be_relative(self, path: str) -> None:
        """Test descriptors only accept relative paths."""
        with pytest.raises(ValueError):
            APIRequest("bad", HTTPMethod.GET, path)

    @pytest.mark.parametrize(
        ("method", "idempotent"),
        [
            (HTTPMethod.GET, True),
            (HTTPMethod.HEAD, True),
            (HTTPMethod.PUT, True),
            (HTTPMethod.DELETE, True),
            (HTTPMethod.POST, False),
            (HTTPMethod.PATCH, False),
        ],
    )
    def test_idempotency(self, method: HTTPMethod, idempotent: bool) -> None:
        """Test only POST and PATCH are non-idempotent."""
        assert APIRequest("x", method, "/x").is_idempotent is idempotent


class TestDescriptors:
    """Test suite for descriptor families."""

    def test_endpoint_descriptors(self) -> None:
        """Test endpoint paths and methods."""
        assert EndpointsAPI.list().path == "/endpoints"
        assert EndpointsAPI.get("ep-1").path == "/endpoints/ep-1"
        assert EndpointsAPI.delete("ep-1").method is HTTPMethod.DELETE
        assert EndpointsAPI.health("ep-1").path == "/endpoints/ep-1/health"

        create = EndpointsAPI.create(CreateEndpointRequest(name="A", url="https://a.example.com"))
        assert create.method is HTTPMethod.POST
        assert create.operation == "endpoints.create"

        update = EndpointsAPI.update("ep-1", UpdateEndpointRequest(name="B"))
        assert update.method is HTTPMethod.PUT
        assert update.path == "/endpoints/ep-1"

    def test_incident_list_query(self) -> None:
        """Test incident list carries limit and optional status."""
        assert IncidentsAPI.list().query == {"limit": 50}
        assert IncidentsAPI.list(IncidentStatus.RESOLVED, 10).query == {
            "limit": 10,
            "status": "resolved",
        }

    def test_incident_update_status(self) -> None:
        """Test status updates are PATCH requests with status and message."""
        request = IncidentsAPI.update_status("inc-1", IncidentStatus.MONITORING, "Fix deployed")

        assert request.method is HTTPMethod.PATCH
        assert request.path == "/incidents/inc-1/status"
        assert request.body.model_dump(mode="json") == {"status": "monitoring", "message": "Fix deployed"}

    def test_other_descriptors(self) -> None:
        """Test stats, probes, dashboard and user paths."""
        assert IncidentsAPI.stats().path == "/incidents/stats/summary"
        assert ProbesAPI.history("ep-1").path == "/probes/history/ep-1"
        assert ProbesAPI.history("ep-1").query == {"hours": 24}
        assert ProbesAPI.stats("ep-1", hours=6).query == {"hours": 6}
        assert DashboardAPI.summary().path == "/dashboard"
        assert UsersAPI.me().path == "/users/me"

        register = UsersAPI.register_device_token("tok")
        assert register.method is HTTPMethod.POST
        assert register.path == "/users/device-token"


class TestRequestDTOs:
    """Test suite for request DTO validation."""

    def test_create_defaults(self) -> None:
        """Test create request defaults."""
        request = CreateEndpointRequest(name="A", url="https://a.example.com")

        assert request.method is HTTPMethod.GET
        assert request.probe_interval_minutes == 5
        assert request.timeout_seconds == 10
        assert request.expected_status_codes == [200, 201, 204]

    @pytest.mark.parametrize("url", ["a.example.com", "/relative", "not a url"])
    def test_create_rejects_relative_url(self, url: str) -> None:
        """Test URLs must be absolute."""
        with pytest.raises(ValidationError):
            CreateEndpointRequest(name="A", url=url)

    @pytest.mark.parametrize("interval", [0, 61])
    def test_interval_bounds(self, interval: int) -> None:
        """Test probe interval bounds."""
        with pytest.raises(ValidationError):
            CreateEndpointRequest(name="A", url="https://a.example.com", probe_interval_minutes=interval)
        with pytest.raises(ValidationError):
            UpdateEndpointRequest(probe_interval_minutes=interval)

    def test_empty_status_codes_rejected(self) -> None:
        """Test expected status codes may not be empty."""
        with pytest.raises(ValidationError):
            CreateEndpointRequest(name="A", url="https://a.example.com", expected_status_codes=[])

    def test_update_validates_url(self) -> None:
        """Test update requests validate the URL when given."""
        assert UpdateEndpointRequest().url is None
        with pytest.raises(ValidationError):
            UpdateEndpointRequest(url="relative/path")

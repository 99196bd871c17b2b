"""Transport client, request descriptors and response mapping."""

from src.pulse.api.client import PulseClient
from src.pulse.api.mapper import Decoded, parse_envelope, unwrap
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

__all__ = [
    "PulseClient",
    "APIRequest",
    "EndpointsAPI",
    "IncidentsAPI",
    "ProbesAPI",
    "DashboardAPI",
    "UsersAPI",
    "CreateEndpointRequest",
    "UpdateEndpointRequest",
    "Decoded",
    "parse_envelope",
    "unwrap",
]

"""Repositories over the monitoring backend.

Each repository turns request descriptors into domain entities via the
transport client and the response mapper.
"""

from src.pulse.repositories.base import BaseRepository
from src.pulse.repositories.dashboard import DashboardRepository
from src.pulse.repositories.endpoint import EndpointRepository
from src.pulse.repositories.incident import IncidentRepository
from src.pulse.repositories.probe import ProbeRepository
from src.pulse.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "EndpointRepository",
    "IncidentRepository",
    "ProbeRepository",
    "DashboardRepository",
    "UserRepository",
]

"""Incident repository.

Status changes are sent to the backend, which validates the transition and
appends the timeline entry. Nothing is recorded locally; re-fetch the
incident to see the new entry.
"""

from src.pulse.api.mapper import (
    decode_model,
    decode_model_list,
    incident_detail_from_dto,
    incident_from_dto,
    incident_stats_from_dto,
)
from src.pulse.api.response_models import IncidentDTO, IncidentStatsDTO, IncidentWithTimelineDTO
from src.pulse.api.routes import IncidentsAPI
from src.pulse.config.logging import get_logger
from src.pulse.constants import DEFAULT_INCIDENT_LIMIT
from src.pulse.errors import DecodingError, NotFoundError
from src.pulse.models.incident import Incident, IncidentDetail, IncidentStats, IncidentStatus
from src.pulse.repositories.base import BaseRepository

logger = get_logger(__name__)


class IncidentRepository(BaseRepository):
    """Repository for incidents and their timelines."""

    async def get_incidents(
        self,
        status: IncidentStatus | None = None,
        limit: int = DEFAULT_INCIDENT_LIMIT,
    ) -> list[Incident]:
        """Get incidents, optionally filtered by status.

        Args:
            status: Only return incidents in this status
            limit: Maximum incidents to return

        Returns:
            Incidents, empty when the backend returns no data
        """
        data = await self._fetch(IncidentsAPI.list(status=status, limit=limit))
        if data is None:
            return []
        return [incident_from_dto(dto) for dto in decode_model_list(IncidentDTO, data)]

    async def get_incident(self, incident_id: str) -> IncidentDetail:
        """Get an incident with its timeline (ordered oldest first).

        Raises:
            NotFoundError: If the backend returns no data
        """
        data = await self._fetch(IncidentsAPI.get(incident_id))
        if data is None:
            raise NotFoundError(details={"incident_id": incident_id})
        return incident_detail_from_dto(decode_model(IncidentWithTimelineDTO, data))

    async def update_status(
        self,
        incident_id: str,
        status: IncidentStatus,
        message: str,
    ) -> bool:
        """Request a status change.

        Any target status may be requested; the backend decides whether the
        transition is allowed.

        Returns:
            False if the backend answered with ``success: false``
        """
        accepted = await self._command(IncidentsAPI.update_status(incident_id, status, message))
        if accepted:
            logger.info("incident_status_updated", incident_id=incident_id, status=status.value)
        return accepted

    async def get_stats(self) -> IncidentStats:
        """Get incident summary counts.

        Raises:
            DecodingError: If the backend returns no data
        """
        data = await self._fetch(IncidentsAPI.stats())
        if data is None:
            raise DecodingError("missing incident stats")
        return incident_stats_from_dto(decode_model(IncidentStatsDTO, data))

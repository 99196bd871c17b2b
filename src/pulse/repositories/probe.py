"""Probe repository."""

from src.pulse.api.mapper import (
    decode_model,
    decode_model_list,
    probe_result_from_dto,
    probe_stats_from_dto,
)
from src.pulse.api.response_models import ProbeResultDTO, ProbeStatsDTO
from src.pulse.api.routes import ProbesAPI
from src.pulse.constants import DEFAULT_PROBE_WINDOW_HOURS
from src.pulse.errors import DecodingError
from src.pulse.models.probe import ProbeResult, ProbeStatistics
from src.pulse.repositories.base import BaseRepository


class ProbeRepository(BaseRepository):
    """Repository for probe history and aggregate statistics."""

    async def get_history(
        self,
        endpoint_id: str,
        hours: int = DEFAULT_PROBE_WINDOW_HOURS,
    ) -> list[ProbeResult]:
        """Get probe results for the trailing window.

        Returns:
            Probe results, empty when the backend returns no data
        """
        data = await self._fetch(ProbesAPI.history(endpoint_id, hours))
        if data is None:
            return []
        return [probe_result_from_dto(dto) for dto in decode_model_list(ProbeResultDTO, data)]

    async def get_stats(
        self,
        endpoint_id: str,
        hours: int = DEFAULT_PROBE_WINDOW_HOURS,
    ) -> ProbeStatistics:
        """Get aggregate statistics for the trailing window.

        Raises:
            DecodingError: If the backend returns no data
        """
        data = await self._fetch(ProbesAPI.stats(endpoint_id, hours))
        if data is None:
            raise DecodingError("missing probe statistics", details={"endpoint_id": endpoint_id})
        return probe_stats_from_dto(decode_model(ProbeStatsDTO, data), endpoint_id, hours)

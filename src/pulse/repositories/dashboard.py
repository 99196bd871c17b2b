"""Dashboard repository."""

from src.pulse.api.mapper import dashboard_from_dto, decode_model
from src.pulse.api.response_models import DashboardDTO
from src.pulse.api.routes import DashboardAPI
from src.pulse.errors import DecodingError
from src.pulse.models.dashboard import DashboardData
from src.pulse.repositories.base import BaseRepository


class DashboardRepository(BaseRepository):
    """Repository for the account overview."""

    async def get_dashboard(self) -> DashboardData:
        """Get the dashboard summary.

        Raises:
            DecodingError: If the backend returns no data
        """
        data = await self._fetch(DashboardAPI.summary())
        if data is None:
            raise DecodingError("missing dashboard data")
        return dashboard_from_dto(decode_model(DashboardDTO, data))

"""Endpoint repository.

Provides management of monitored endpoints and their health summaries.
"""

from src.pulse.api.mapper import (
    decode_model,
    decode_model_list,
    endpoint_from_dto,
    health_from_dto,
)
from src.pulse.api.response_models import EndpointDTO, HealthSummaryDTO
from src.pulse.api.routes import CreateEndpointRequest, EndpointsAPI, UpdateEndpointRequest
from src.pulse.config.logging import get_logger
from src.pulse.errors import DecodingError, NotFoundError
from src.pulse.models.endpoint import Endpoint, EndpointHealthSummary
from src.pulse.repositories.base import BaseRepository

logger = get_logger(__name__)


class EndpointRepository(BaseRepository):
    """Repository for monitored endpoints."""

    async def get_endpoints(self) -> list[Endpoint]:
        """Get all endpoints of the current user.

        Returns:
            Endpoints, empty when the backend returns no data
        """
        data = await self._fetch(EndpointsAPI.list())
        if data is None:
            return []
        endpoints = [endpoint_from_dto(dto) for dto in decode_model_list(EndpointDTO, data)]
        logger.debug("endpoints_fetched", count=len(endpoints))
        return endpoints

    async def get_endpoint(self, endpoint_id: str) -> Endpoint:
        """Get a single endpoint.

        Raises:
            NotFoundError: If the backend returns no data
        """
        data = await self._fetch(EndpointsAPI.get(endpoint_id))
        if data is None:
            raise NotFoundError(details={"endpoint_id": endpoint_id})
        return endpoint_from_dto(decode_model(EndpointDTO, data))

    async def get_health_summary(self, endpoint_id: str) -> EndpointHealthSummary:
        """Get the backend-computed health summary of an endpoint.

        Raises:
            DecodingError: If the backend returns no data
        """
        data = await self._fetch(EndpointsAPI.health(endpoint_id))
        if data is None:
            raise DecodingError("missing health summary", details={"endpoint_id": endpoint_id})
        return health_from_dto(decode_model(HealthSummaryDTO, data))

    async def create_endpoint(self, request: CreateEndpointRequest) -> Endpoint:
        """Create an endpoint; the backend assigns its id.

        Raises:
            DecodingError: If the backend returns no data
        """
        data = await self._fetch(EndpointsAPI.create(request))
        if data is None:
            raise DecodingError("missing created endpoint")
        endpoint = endpoint_from_dto(decode_model(EndpointDTO, data))
        logger.info("endpoint_created", endpoint_id=endpoint.id, url=endpoint.url)
        return endpoint

    async def update_endpoint(self, endpoint_id: str, request: UpdateEndpointRequest) -> Endpoint:
        """Update an endpoint; unset request fields are left unchanged.

        Raises:
            DecodingError: If the backend returns no data
        """
        data = await self._fetch(EndpointsAPI.update(endpoint_id, request))
        if data is None:
            raise DecodingError("missing updated endpoint", details={"endpoint_id": endpoint_id})
        endpoint = endpoint_from_dto(decode_model(EndpointDTO, data))
        logger.info("endpoint_updated", endpoint_id=endpoint.id)
        return endpoint

    async def delete_endpoint(self, endpoint_id: str) -> bool:
        """Delete an endpoint; returns False if the backend rejected it."""
        deleted = await self._command(EndpointsAPI.delete(endpoint_id))
        if deleted:
            logger.info("endpoint_deleted", endpoint_id=endpoint_id)
        return deleted

"""Base repository with the shared fetch path."""

from typing import Any

from src.pulse.api.client import PulseClient
from src.pulse.api.mapper import parse_envelope, unwrap
from src.pulse.api.routes import APIRequest
from src.pulse.config.logging import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """Base repository over the transport client.

    Idempotent requests go through the retry loop; POST and PATCH are sent
    once so a write is never replayed. Errors propagate unchanged.
    """

    def __init__(self, client: PulseClient) -> None:
        """Initialize repository.

        Args:
            client: Transport client shared by all repositories
        """
        self._client = client
        logger.debug("repository_initialized", repository=type(self).__name__)

    @property
    def client(self) -> PulseClient:
        return self._client

    async def _send(self, request: APIRequest) -> bytes:
        if request.is_idempotent:
            return await self._client.execute_with_retry(request)
        return await self._client.execute(request)

    async def _fetch(self, request: APIRequest) -> Any | None:
        """Execute a request and return the envelope payload.

        Returns:
            Payload, or None when the response carries no data
        """
        return unwrap(await self._send(request))

    async def _command(self, request: APIRequest) -> bool:
        """Execute a mutation whose response carries no resource.

        Returns:
            True if the backend accepted it; a 2xx envelope with
            ``success: false`` is logged as a warning and returns False
        """
        envelope = parse_envelope(await self._send(request))
        if not envelope.success:
            logger.warning(
                "command_rejected",
                operation=request.operation,
                error=envelope.error,
            )
        return envelope.success

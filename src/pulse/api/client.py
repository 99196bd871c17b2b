"""Async transport client for the monitoring backend.

Builds HTTP requests from ``APIRequest`` descriptors, executes them over
``httpx.AsyncClient``, classifies failures into the client error taxonomy and
retries retryable failures with exponential backoff. Cancellation of the
calling task aborts in-flight requests and backoff sleeps.
"""

import asyncio
import json
import time
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from src.pulse.api.routes import APIRequest
from src.pulse.config.logging import get_logger
from src.pulse.config.settings import Settings, get_settings
from src.pulse.constants import HEADER_API_VERSION, HEADER_USER_ID, JSON_CONTENT_TYPE
from src.pulse.errors import (
    EncodingError,
    InvalidURLError,
    PulseError,
    classify_exception,
    classify_status,
    get_retry_delay,
)
from src.pulse.session import SessionContext

logger = get_logger(__name__)


def snake_case_keys(value: Any) -> Any:
    """Recursively convert mapping keys to snake_case."""
    if isinstance(value, dict):
        return {to_snake(str(k)): snake_case_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snake_case_keys(item) for item in value]
    return value


class PulseClient:
    """Client for the monitoring backend.

    Stateless apart from the session, which is read when headers are built.

    Example:
        async with PulseClient(session=session) as client:
            raw = await client.execute_with_retry(EndpointsAPI.list())
    """

    def __init__(
        self,
        session: SessionContext | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            session: Session whose user id is sent as ``X-User-ID``
            settings: Client settings (defaults to the global settings)
            http_client: Preconfigured HTTP client (tests inject a mock transport)
        """
        self._settings = settings or get_settings()
        self.session = session or SessionContext()
        self._client = http_client
        self._owns_client = http_client is None

        logger.info(
            "pulse_client_initialized",
            base_url=self._settings.versioned_base_url,
            timeout=self._settings.request_timeout_seconds,
            max_retry_attempts=self._settings.max_retry_attempts,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.request_timeout_seconds)
            self._owns_client = True
        return self._client

    def build_url(self, request: APIRequest) -> str:
        return f"{self._settings.versioned_base_url}{request.path}"

    def build_headers(self) -> dict[str, str]:
        """Headers sent on every request."""
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
            HEADER_API_VERSION: self._settings.api_version,
        }
        user_id = self.session.user_id
        if user_id:
            headers[HEADER_USER_ID] = user_id
        return headers

    def encode_body(self, request: APIRequest) -> bytes | None:
        """Serialize the request body as JSON with snake_case keys.

        Raises:
            EncodingError: If the body cannot be serialized
        """
        if request.body is None:
            return None
        try:
            if isinstance(request.body, BaseModel):
                payload = request.body.model_dump(mode="json", exclude_none=True)
            else:
                payload = request.body
            return json.dumps(snake_case_keys(payload)).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(
                details={"operation": request.operation, "error": str(e)}
            ) from e

    async def execute(self, request: APIRequest) -> bytes:
        """Execute a single request.

        Args:
            request: Request descriptor

        Returns:
            Raw response body of a 2xx response

        Raises:
            TransportError: Classified failure
        """
        url = self.build_url(request)
        content = self.encode_body(request)
        details = {"operation": request.operation, "method": request.method.value}

        try:
            http_request = self._get_client().build_request(
                request.method.value,
                url,
                params=request.query or None,
                headers=self.build_headers(),
                content=content,
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURLError(url, details=details) from e

        start_time = time.time()
        try:
            response = await self._get_client().send(http_request)
        except Exception as e:
            raise classify_exception(e, details=details) from e
        latency_ms = (time.time() - start_time) * 1000

        logger.debug(
            "pulse_request",
            operation=request.operation,
            method=request.method.value,
            url=url,
            status_code=response.status_code,
            latency_ms=round(latency_ms, 1),
        )

        error = classify_status(response.status_code, response.content, details=details)
        if error is not None:
            raise error
        return response.content

    async def execute_with_retry(
        self,
        request: APIRequest,
        max_attempts: int | None = None,
    ) -> bytes:
        """Execute a request, retrying retryable failures with exponential backoff.

        The sleep after failed attempt ``k`` (0-indexed) is
        ``retry_delay_seconds * 2**k``; there is no sleep after the last
        attempt. Non-retryable errors are raised immediately.

        Args:
            request: Request descriptor
            max_attempts: Attempt budget (defaults to ``max_retry_attempts``)

        Returns:
            Raw response body of the first successful attempt

        Raises:
            PulseError: The last classified error
        """
        attempts = max_attempts if max_attempts is not None else self._settings.max_retry_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {attempts}")

        last_error: PulseError | None = None
        for attempt in range(attempts):
            try:
                return await self.execute(request)
            except PulseError as e:
                if not e.is_retryable:
                    raise
                last_error = e

            if attempt < attempts - 1:
                delay = get_retry_delay(
                    attempt,
                    self._settings.retry_delay_seconds,
                    self._settings.retry_jitter,
                )
                logger.warning(
                    "pulse_request_retry",
                    operation=request.operation,
                    attempt=attempt + 1,
                    max_attempts=attempts,
                    delay_seconds=delay,
                    error_code=last_error.error_code.name,
                )
                await asyncio.sleep(delay)

        # All retries exhausted
        if last_error is not None:
            raise last_error
        raise PulseError("All retries exhausted")

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PulseClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.aclose()

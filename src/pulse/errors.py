"""Centralized error handling for the monitoring client.

Provides a closed exception taxonomy (transport, decoding, storage) with
error codes, human-readable descriptions, retry hints, and structured
logging integration.
"""

import json
import random
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import httpx

from src.pulse.config.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(Enum):
    """Error codes for client exceptions."""

    # Network errors (1xxx)
    NETWORK_TIMEOUT = 1001
    NETWORK_NO_CONNECTION = 1002
    NETWORK_INVALID_URL = 1003
    NETWORK_ENCODING = 1004
    NETWORK_UNKNOWN = 1099

    # HTTP errors (2xxx)
    HTTP_UNAUTHORIZED = 2401
    HTTP_FORBIDDEN = 2403
    HTTP_NOT_FOUND = 2404
    HTTP_RATE_LIMIT = 2429
    HTTP_SERVER_ERROR = 2500

    # Data errors (4xxx)
    DATA_DECODING_FAILED = 4001

    # Storage errors (6xxx)
    STORAGE_SAVE_FAILED = 6001
    STORAGE_LOAD_FAILED = 6002
    STORAGE_DELETE_FAILED = 6003
    STORAGE_NOT_FOUND = 6004
    STORAGE_CORRUPTED = 6005

    # Unknown/Other
    UNKNOWN_ERROR = 9999


class PulseError(Exception):
    """Base exception for all client errors.

    Every error carries a human-readable ``description`` suitable for direct
    display and an ``is_retryable`` hint the caller can use to offer a retry.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize client error.

        Args:
            message: Human-readable error message
            error_code: Structured error code
            retryable: Whether the operation can be retried
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.retryable = retryable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

        logger.warning(
            "pulse_error",
            error_code=error_code.name,
            message=message,
            retryable=retryable,
            details=self.details,
        )

    @property
    def description(self) -> str:
        """Human-readable description for display."""
        return self.message

    @property
    def is_retryable(self) -> bool:
        """Whether retrying the same operation may succeed."""
        return self.retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_code": self.error_code.name,
            "error_value": self.error_code.value,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


# ============================================================================
# Transport errors
# ============================================================================


class TransportError(PulseError):
    """Errors raised while executing a request against the backend."""


class NoConnectionError(TransportError):
    """Connectivity lost or no route to the backend."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="No internet connection",
            error_code=ErrorCode.NETWORK_NO_CONNECTION,
            retryable=True,
            details=details,
        )


class RequestTimeoutError(TransportError):
    """Request exceeded its deadline."""

    def __init__(
        self,
        timeout_seconds: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize timeout error.

        Args:
            timeout_seconds: Timeout duration
            details: Additional context
        """
        details = dict(details or {})
        if timeout_seconds is not None:
            details["timeout_seconds"] = timeout_seconds

        super().__init__(
            message="Request timed out",
            error_code=ErrorCode.NETWORK_TIMEOUT,
            retryable=True,
            details=details,
        )


class ServerError(TransportError):
    """Non-2xx response not covered by a more specific error.

    Only 5xx responses are retryable.
    """

    def __init__(
        self,
        status_code: int,
        server_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize server error.

        Args:
            status_code: HTTP status code
            server_message: Message extracted from the response body, if any
            details: Additional context
        """
        details = dict(details or {})
        details["status_code"] = status_code

        super().__init__(
            message=server_message or f"Server error ({status_code})",
            error_code=ErrorCode.HTTP_SERVER_ERROR,
            retryable=status_code >= 500,
            details=details,
        )
        self.status_code = status_code
        self.server_message = server_message


class UnauthorizedError(TransportError):
    """HTTP 401."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Authentication required",
            error_code=ErrorCode.HTTP_UNAUTHORIZED,
            details=details,
        )


class ForbiddenError(TransportError):
    """HTTP 403."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Access denied",
            error_code=ErrorCode.HTTP_FORBIDDEN,
            details=details,
        )


class NotFoundError(TransportError):
    """HTTP 404, or a single resource missing from the response."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Resource not found",
            error_code=ErrorCode.HTTP_NOT_FOUND,
            details=details,
        )


class RateLimitedError(TransportError):
    """HTTP 429."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Too many requests. Please try again later.",
            error_code=ErrorCode.HTTP_RATE_LIMIT,
            details=details,
        )


class InvalidURLError(TransportError):
    """Request URL could not be built or is not supported."""

    def __init__(self, url: str | None = None, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        if url:
            details["url"] = url

        super().__init__(
            message="Invalid URL",
            error_code=ErrorCode.NETWORK_INVALID_URL,
            details=details,
        )


class EncodingError(TransportError):
    """Request body could not be serialized."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Failed to encode request",
            error_code=ErrorCode.NETWORK_ENCODING,
            details=details,
        )


class UnknownTransportError(TransportError):
    """Any other failure raised by the HTTP stack."""

    def __init__(self, cause: BaseException, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details["exception_type"] = type(cause).__name__

        super().__init__(
            message=str(cause) or type(cause).__name__,
            error_code=ErrorCode.NETWORK_UNKNOWN,
            details=details,
        )
        self.cause = cause


# ============================================================================
# Decoding errors
# ============================================================================


class DecodingError(PulseError):
    """Malformed or missing payload in a backend response."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Failed to parse response: {reason}",
            error_code=ErrorCode.DATA_DECODING_FAILED,
            details=details,
        )
        self.reason = reason


# ============================================================================
# Storage errors
# ============================================================================


class StorageError(PulseError):
    """Errors raised by local persistence (credentials, notification log)."""


class StorageSaveError(StorageError):
    def __init__(self, item: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Failed to save {item}",
            error_code=ErrorCode.STORAGE_SAVE_FAILED,
            details=details,
        )
        self.item = item


class StorageLoadError(StorageError):
    def __init__(self, item: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Failed to load {item}",
            error_code=ErrorCode.STORAGE_LOAD_FAILED,
            details=details,
        )
        self.item = item


class StorageDeleteError(StorageError):
    def __init__(self, item: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Failed to delete {item}",
            error_code=ErrorCode.STORAGE_DELETE_FAILED,
            details=details,
        )
        self.item = item


class StorageNotFoundError(StorageError):
    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Data not found",
            error_code=ErrorCode.STORAGE_NOT_FOUND,
            details=details,
        )


class StorageCorruptedError(StorageError):
    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Data is corrupted",
            error_code=ErrorCode.STORAGE_CORRUPTED,
            details=details,
        )


# ============================================================================
# Classification helpers
# ============================================================================


def extract_server_message(body: bytes) -> str | None:
    """Best-effort extraction of the ``error`` string from a JSON body.

    Args:
        body: Raw response body

    Returns:
        Error message, or None if the body carries none
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    return error if isinstance(error, str) and error else None


def classify_status(
    status_code: int,
    body: bytes = b"",
    details: dict[str, Any] | None = None,
) -> TransportError | None:
    """Map an HTTP status code to a transport error.

    Args:
        status_code: HTTP status code
        body: Raw response body (used for the server message)
        details: Additional context for the error

    Returns:
        Classified error, or None for 2xx responses
    """
    if 200 <= status_code < 300:
        return None
    if status_code == 401:
        return UnauthorizedError(details=details)
    if status_code == 403:
        return ForbiddenError(details=details)
    if status_code == 404:
        return NotFoundError(details=details)
    if status_code == 429:
        return RateLimitedError(details=details)
    return ServerError(status_code, extract_server_message(body), details=details)


def classify_exception(
    exception: BaseException,
    details: dict[str, Any] | None = None,
) -> PulseError:
    """Classify an exception raised by the HTTP stack into a client error.

    Args:
        exception: Exception to classify
        details: Additional context for the error

    Returns:
        Classified PulseError instance
    """
    if isinstance(exception, PulseError):
        return exception

    # TimeoutException must be checked first: ConnectTimeout is not a NetworkError
    if isinstance(exception, httpx.TimeoutException):
        return RequestTimeoutError(details=details)

    if isinstance(exception, httpx.NetworkError):
        return NoConnectionError(details=details)

    if isinstance(exception, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return InvalidURLError(details=details)

    return UnknownTransportError(exception, details=details)


def is_retryable(error: BaseException) -> bool:
    """Check if an error is retryable.

    Args:
        error: Exception to check

    Returns:
        True if error is retryable
    """
    if isinstance(error, PulseError):
        return error.is_retryable
    return classify_exception(error).is_retryable


def get_retry_delay(attempt: int, base_delay: float, jitter: float = 0.0) -> float:
    """Calculate the backoff delay after a failed attempt.

    Args:
        attempt: Failed attempt number (0-indexed)
        base_delay: Base delay in seconds
        jitter: Extra random delay as a fraction of the backoff

    Returns:
        Delay in seconds: ``base_delay * 2**attempt`` plus optional jitter
    """
    delay = base_delay * (2**attempt)
    if jitter > 0:
        delay += delay * random.uniform(0, jitter)
    return delay

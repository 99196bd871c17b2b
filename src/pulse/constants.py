"""Core constants for the PulseAPI monitoring client.

This module defines the constants shared across the client including
backend locations, retry policy defaults, and probe configuration limits.
"""

from typing import Final

# Backend base URLs per environment
BASE_URLS: Final[dict[str, str]] = {
    "development": "http://localhost:8787",
    "staging": "https://api-staging.pulseapi.dev",
    "production": "https://api.pulseapi.dev",
}

# API versioning (path prefix and X-API-Version header)
API_VERSION: Final[str] = "v1"

# Request headers
HEADER_API_VERSION: Final[str] = "X-API-Version"
HEADER_USER_ID: Final[str] = "X-User-ID"
JSON_CONTENT_TYPE: Final[str] = "application/json"

# Timeouts (seconds)
REQUEST_TIMEOUT_SECONDS: Final[float] = 30.0
PROBE_TIMEOUT_SECONDS: Final[int] = 10

# Retry configuration
MAX_RETRY_ATTEMPTS: Final[int] = 3
RETRY_DELAY_SECONDS: Final[float] = 1.0

# Probe settings
DEFAULT_PROBE_INTERVAL_MINUTES: Final[int] = 5
MIN_PROBE_INTERVAL_MINUTES: Final[int] = 1
MAX_PROBE_INTERVAL_MINUTES: Final[int] = 60
DEFAULT_EXPECTED_STATUS_CODES: Final[tuple[int, ...]] = (200, 201, 204)
FALLBACK_EXPECTED_STATUS_CODES: Final[tuple[int, ...]] = (200,)

# Query defaults
DEFAULT_INCIDENT_LIMIT: Final[int] = 50
DEFAULT_PROBE_WINDOW_HOURS: Final[int] = 24

# Charts
CHART_DATA_POINTS: Final[int] = 24  # Last 24 data points for sparklines

# Local storage
NOTIFICATION_STORE_FILENAME: Final[str] = "app_notifications.json"
CREDENTIAL_STORE_FILENAME: Final[str] = "credentials.json"
GUEST_ID_PREFIX: Final[str] = "guest-"

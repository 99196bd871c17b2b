"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest
import structlog

from src.pulse.api.client import PulseClient
from src.pulse.config.settings import Settings
from src.pulse.session import SessionContext
from tests.fixtures.payloads import TEST_BASE_URL

SETTINGS_ENV_PREFIXES = (
    "ENVIRONMENT",
    "API_",
    "REQUEST_",
    "MAX_RETRY_",
    "RETRY_",
    "LOG_",
    "NOTIFICATION_",
    "CREDENTIAL_",
)

Handler = Callable[[httpx.Request], Any]


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "chaos: mark test as a failure-scenario test")


@pytest.fixture(autouse=True)
def reset_settings_env() -> None:
    """Reset environment variables before each test."""
    # Store original env vars
    original_env = os.environ.copy()

    # Clear settings-related env vars
    for key in list(os.environ.keys()):
        if key.upper().startswith(SETTINGS_ENV_PREFIXES):
            del os.environ[key]

    yield

    # Restore original env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_settings_singleton() -> None:
    """Reset the settings singleton between tests."""
    from src.pulse.config import settings as settings_module

    settings_module._settings = None

    yield

    settings_module._settings = None


@pytest.fixture(autouse=True)
def reset_structlog() -> None:
    """Drop any logging configuration made by a test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the test backend with no backoff delay."""
    return Settings(
        _env_file=None,
        api_base_url=TEST_BASE_URL,
        retry_delay_seconds=0.0,
    )


@pytest.fixture
def session() -> SessionContext:
    """Signed-in session."""
    return SessionContext(user_id="user-123")


@pytest.fixture
def make_client(settings: Settings, session: SessionContext) -> Callable[[Handler], PulseClient]:
    """Build a PulseClient whose HTTP traffic goes to ``handler``."""

    def _make(handler: Handler, client_settings: Settings | None = None) -> PulseClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return PulseClient(
            session=session,
            settings=client_settings or settings,
            http_client=http_client,
        )

    return _make

"""Shared fixtures for integration tests."""

import pytest

from tests.fixtures.backend import FakeBackend


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest for integration tests."""
    config.addinivalue_line("markers", "integration: mark test as a multi-step flow test")


@pytest.fixture
def backend() -> FakeBackend:
    """Fresh backend seeded with one endpoint and one open incident."""
    return FakeBackend()

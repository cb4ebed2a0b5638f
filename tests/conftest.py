"""Test configuration."""

from collections.abc import Generator
from typing import List

import pytest
from pytest import Config

from area_geocoder.core.logging import configure_logging

fixture = pytest.fixture


pytest_plugins: List[str] = [
    "tests.fixtures.api",
    "tests.fixtures.boundaries",
]


@fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore the test logging configuration after each test.

    Some tests reconfigure structlog globally; later tests must not inherit it.
    """
    yield
    configure_logging(testing=True, level="debug")


@fixture(autouse=True)
def reset_geocoding_service() -> Generator[None, None, None]:
    """Drop the process-wide geocoding service between tests."""
    from area_geocoder.core.geocoding import service

    service._geocoding_service = None
    yield
    service._geocoding_service = None


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True, level="debug")
    config.addinivalue_line("markers", "integration: mark test as an integration test")

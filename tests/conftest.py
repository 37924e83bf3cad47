"""Shared pytest fixtures for the POS API e2e harness.

This module provides:
- Environment loading (.env) before settings are read
- structlog configuration for the whole run
- Marker registration

Usage:
    pytest -m unit          # Harness unit tests, no API needed
    pytest -m e2e           # End-to-end tests against HOST:PORT
"""

import os
from collections.abc import Generator

import pytest

from pos_e2e.config.logging import configure_logging
from pos_e2e.config.settings import get_settings

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers and set up logging."""
    config.addinivalue_line("markers", "unit: harness unit test, no network")
    config.addinivalue_line("markers", "e2e: end-to-end test against a running API")
    config.addinivalue_line(
        "markers",
        "unsettled: endpoint whose contract tolerates several status codes",
    )
    configure_logging()


# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Load .env, then make sure settings are re-read from the environment.

    Existing environment variables win over .env values.
    """
    from dotenv import load_dotenv

    original_env = os.environ.copy()

    load_dotenv()
    get_settings.cache_clear()

    yield

    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()

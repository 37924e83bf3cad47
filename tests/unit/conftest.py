"""Fixtures for harness unit tests.

HTTP traffic is intercepted with respx; nothing leaves the process.
"""

from collections.abc import AsyncGenerator

import pytest

from pos_e2e.config.settings import Settings
from pos_e2e.core.session import ApiSession
from pos_e2e.services.api_client import ApiClient

BASE_URL = "http://testserver:8080/api"


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake host, with zero-delay retries."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        host="testserver",
        port=8080,
        rate_limit_max_attempts=3,
        rate_limit_initial_delay=0,
        rate_limit_max_delay=0,
        rate_limit_jitter=0,
    )


@pytest.fixture
def api_session() -> ApiSession:
    return ApiSession()


@pytest.fixture
async def api_client(
    api_session: ApiSession, settings: Settings
) -> AsyncGenerator[ApiClient, None]:
    """ApiClient bound to a fresh session, closed after the test."""
    client = ApiClient(session=api_session, settings=settings)
    yield client
    await client.close()


@pytest.fixture
def base_url() -> str:
    return BASE_URL

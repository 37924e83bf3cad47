"""E2E fixtures for the POS API.

This module provides fixtures for:
- Probing the API once per run and skipping when it is unreachable
- A per-module ApiClient bound to its own ApiSession, cleaned up at teardown
- The authenticated test user and establishment most suites depend on
- A per-module namespace for ids shared between ordered tests

Usage:
    pytestmark = [pytest.mark.e2e, pytest.mark.asyncio(loop_scope="module")]

    async def test_create(auth, establishment, shared):
        res = await auth.post("/tables", json={...})
        assert res.status_code == 201
"""

from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
import pytest_asyncio
import structlog

from pos_e2e.config.settings import get_settings
from pos_e2e.core.lifecycle import cleanup_test_data, setup_test_establishment, setup_test_user
from pos_e2e.core.session import ApiSession
from pos_e2e.services.api_client import ApiClient, AuthenticatedRequests

log = structlog.get_logger(__name__)


# =============================================================================
# API Availability
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def require_api(setup_test_environment: None) -> None:
    """Skip every e2e test when GET /health cannot be reached.

    Any HTTP answer (even 503) counts as reachable. Set
    SKIP_IF_UNREACHABLE=false to fail instead.
    """
    settings = get_settings()
    log.info("api_target", base_url=settings.base_url)
    try:
        httpx.get(f"{settings.base_url}/health", timeout=settings.request_timeout)
    except httpx.RequestError as e:
        if settings.skip_if_unreachable:
            pytest.skip(f"API not reachable at {settings.base_url}: {e}")
        raise


# =============================================================================
# Per-module Session Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="module", loop_scope="module")
async def api() -> AsyncGenerator[ApiClient, None]:
    """ApiClient with a fresh session; tracked resources are deleted afterwards."""
    client = ApiClient(ApiSession())
    yield client
    try:
        await cleanup_test_data(client)
    finally:
        await client.close()


@pytest.fixture(scope="module")
def session(api: ApiClient) -> ApiSession:
    return api.session


@pytest_asyncio.fixture(scope="module", loop_scope="module")
async def auth(api: ApiClient) -> AuthenticatedRequests:
    """Register the module's test user and return the bearer-token view."""
    await setup_test_user(api)
    return api.authenticated()


@pytest_asyncio.fixture(scope="module", loop_scope="module")
async def establishment(api: ApiClient, auth: AuthenticatedRequests) -> dict[str, Any]:
    """Establishment owned by the module's test user."""
    return await setup_test_establishment(api)


@pytest.fixture(scope="module")
def shared() -> SimpleNamespace:
    """Ids produced by earlier tests in the module and read by later ones."""
    return SimpleNamespace()

"""HTTP client for the API under test.

This module provides:
- BearerTokenAuth, an httpx auth flow that reads the session token per request
- ApiClient for unauthenticated calls
- AuthenticatedRequests, the bearer-token view returned by ApiClient.authenticated()

Non-2xx responses never raise: every call returns an ApiResponse and tests
assert on its status code.
"""

from collections.abc import Generator
from typing import Any

import httpx
import structlog

from pos_e2e.config.settings import Settings, get_settings
from pos_e2e.core.exceptions import ApiConnectionError
from pos_e2e.core.session import ApiSession
from pos_e2e.services.envelope import ApiResponse

log = structlog.get_logger(__name__)


class BearerTokenAuth(httpx.Auth):
    """Attach ``Authorization: Bearer <token>`` from an ApiSession.

    The token is read when the request is sent, so a refreshed token applies
    to views created before the refresh. An explicit Authorization header on
    the request wins.
    """

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {self.session.access_token}"
        yield request


class ApiClient:
    """Async client bound to one ApiSession.

    Attributes:
        session: Token and fixture state shared with the lifecycle helpers.
        base_url: API root, e.g. http://localhost:3000/api.
        timeout: Request timeout in seconds.

    Example:
        async with ApiClient(session) as api:
            res = await api.get("/health")
            me = await api.authenticated().get("/users/me")
    """

    def __init__(
        self,
        session: ApiSession | None = None,
        settings: Settings | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.session = session or ApiSession()
        self.base_url = base_url or settings.base_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def request(
        self,
        method: str,
        path: str,
        *,
        auth: httpx.Auth | None = None,
        **kwargs: Any,
    ) -> ApiResponse:
        """Send a request and return its unwrapped response.

        Args:
            method: HTTP method.
            path: Path relative to base_url.
            auth: Optional httpx auth flow.
            **kwargs: Passed to httpx (json, params, headers, ...).

        Raises:
            ApiConnectionError: If no response was received.
        """
        client = self._get_client()
        if auth is not None:
            kwargs["auth"] = auth
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            log.warning(
                "request_connection_error",
                method=method,
                path=path,
                error=str(e),
            )
            raise ApiConnectionError(url=f"{self.base_url}{path}", message=str(e)) from e

        log.debug(
            "request_completed",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return ApiResponse.from_httpx(response)

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", path, **kwargs)

    def authenticated(self) -> "AuthenticatedRequests":
        """Return the bearer-token view of this client."""
        return AuthenticatedRequests(self)


class AuthenticatedRequests:
    """get/post/patch/delete carrying the session's current bearer token."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._auth = BearerTokenAuth(client.session)

    @property
    def session(self) -> ApiSession:
        return self._client.session

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self._client.request("GET", path, auth=self._auth, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return await self._client.request("POST", path, json=json, auth=self._auth, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return await self._client.request("PATCH", path, json=json, auth=self._auth, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self._client.request("DELETE", path, auth=self._auth, **kwargs)

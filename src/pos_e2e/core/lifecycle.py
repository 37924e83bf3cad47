"""Setup and teardown of the fixtures every e2e suite depends on.

This module provides:
- setup_test_user: register (or log in) a unique user and store its tokens
- setup_test_establishment: create an establishment owned by that user
- create_tracked: create a supporting resource and track it for cleanup
- cleanup_test_data: best-effort deletion of everything the suite tracked

Session lifecycle:
    unauthenticated -> authenticated -> (token refreshed)* -> cleaned up
"""

from typing import Any

import structlog

from pos_e2e.config.settings import Settings, get_settings
from pos_e2e.constants.api import CREATED_STATUSES, HTTP_OK
from pos_e2e.core.exceptions import ApiConnectionError, SetupError
from pos_e2e.core.session import ApiSession
from pos_e2e.factories.payloads import EstablishmentPayloadFactory, RegistrationPayloadFactory
from pos_e2e.services.api_client import ApiClient
from pos_e2e.services.envelope import ApiResponse
from pos_e2e.services.retry import with_rate_limit_retry

log = structlog.get_logger(__name__)


def _token(body: Any, snake: str, camel: str) -> str:
    """Read a token under either naming convention."""
    if not isinstance(body, dict):
        return ""
    return body.get(snake) or body.get(camel) or ""


def _user_id(body: Any) -> str:
    user = body.get("user") if isinstance(body, dict) else None
    return (user or {}).get("id") or ""


def _as_dict(body: Any) -> dict[str, Any]:
    return dict(body) if isinstance(body, dict) else {}


def store_auth_response(session: ApiSession, body: Any) -> None:
    """Copy tokens and user id from a register/login response into the session."""
    session.set_tokens(
        _token(body, "access_token", "accessToken"),
        _token(body, "refresh_token", "refreshToken"),
    )
    user_id = _user_id(body)
    if user_id:
        session.user_id = user_id


async def setup_test_user(
    client: ApiClient,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Register a unique user, falling back to login with the same credentials.

    Registration is retried while the API answers 429.

    Args:
        client: Client whose session receives the tokens.
        settings: Retry budget and password; defaults to cached settings.

    Returns:
        The register or login response body.

    Raises:
        SetupError: If neither registration nor login succeeded.
    """
    settings = settings or get_settings()
    session = client.session
    credentials = RegistrationPayloadFactory.build(password=settings.test_password)

    try:
        res = await with_rate_limit_retry(
            lambda: client.post("/auth/register", json=credentials),
            settings,
        )
        if res.status_code in CREATED_STATUSES:
            store_auth_response(session, res.data)
            session.tracked.add("users", session.user_id)
            log.info("test_user_registered", user_id=session.user_id)
            return _as_dict(res.data)
        log.warning("register_failed", status_code=res.status_code, body=res.data)
    except ApiConnectionError as e:
        log.warning("register_error", error=str(e))

    log.info("login_fallback", email=credentials["email"])
    last: ApiResponse | None = None
    try:
        last = await client.post(
            "/auth/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        )
        if last.status_code == HTTP_OK:
            store_auth_response(session, last.data)
            log.info("test_user_logged_in", user_id=session.user_id)
            return _as_dict(last.data)
        log.warning("login_failed", status_code=last.status_code, body=last.data)
    except ApiConnectionError as e:
        log.warning("login_error", error=str(e))

    raise SetupError(
        "Failed to setup test user",
        status_code=last.status_code if last else None,
        body=last.data if last else None,
    )


async def setup_test_establishment(
    client: ApiClient,
    settings: Settings | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Create an establishment as the session user.

    Args:
        client: Client whose session is already authenticated.
        settings: Retry budget; defaults to cached settings.
        **overrides: Fields replacing the generated payload values.

    Returns:
        The created establishment.

    Raises:
        SetupError: If the API did not answer 200/201.
    """
    auth = client.authenticated()
    body = EstablishmentPayloadFactory.build(**overrides)

    res = await with_rate_limit_retry(lambda: auth.post("/establishments", json=body), settings)
    if res.status_code not in CREATED_STATUSES or not res.get("id"):
        raise SetupError(
            "Failed to create test establishment",
            status_code=res.status_code,
            body=res.data,
        )

    establishment = _as_dict(res.data)
    client.session.establishment_id = establishment["id"]
    client.session.tracked.add("establishments", establishment["id"])
    log.info("test_establishment_created", establishment_id=establishment["id"])
    return establishment


async def create_tracked(
    client: ApiClient,
    path: str,
    body: dict[str, Any],
    category: str | None = None,
) -> dict[str, Any]:
    """Create a supporting resource as the session user.

    Args:
        client: Client whose session is already authenticated.
        path: Collection path, e.g. "/products".
        body: Request payload.
        category: Tracked-id category for cleanup; None leaves it untracked.

    Raises:
        SetupError: If the API did not answer 200/201 with an id.
    """
    res = await client.authenticated().post(path, json=body)
    if res.status_code not in CREATED_STATUSES or not res.get("id"):
        raise SetupError(f"Failed to create {path}", status_code=res.status_code, body=res.data)

    if category:
        client.session.tracked.add(category, res.data["id"])
    return _as_dict(res.data)


async def cleanup_test_data(client: ApiClient) -> int:
    """Delete every tracked resource, dependants first.

    Individual failures are logged and skipped so one stuck resource never
    blocks the rest. Tracked ids are cleared whatever the outcome.

    Returns:
        Number of resources whose DELETE answered with a 2xx status.
    """
    auth = client.authenticated()
    tracked = client.session.tracked
    deleted = 0

    for category, ids in tracked.in_cleanup_order():
        for resource_id in ids:
            try:
                res = await auth.delete(f"/{category}/{resource_id}")
            except ApiConnectionError as e:
                log.warning(
                    "cleanup_delete_failed",
                    category=category,
                    resource_id=resource_id,
                    error=str(e),
                )
                continue
            if res.is_success:
                deleted += 1
            else:
                log.warning(
                    "cleanup_delete_failed",
                    category=category,
                    resource_id=resource_id,
                    status_code=res.status_code,
                )

    tracked.clear()
    log.info("test_data_cleaned", deleted=deleted)
    return deleted

"""Retry policy for rate-limited (429) setup calls.

Setup requests register users and create establishments in bursts, which the
API answers with 429 under load. The policy backs off exponentially with
jitter, stops after a maximum number of attempts or a total deadline, and
then hands back the last response instead of raising.
"""

from collections.abc import Awaitable, Callable

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_random,
)

from pos_e2e.config.settings import Settings, get_settings
from pos_e2e.constants.api import HTTP_TOO_MANY_REQUESTS
from pos_e2e.services.envelope import ApiResponse

log = structlog.get_logger(__name__)


def is_rate_limited(response: ApiResponse) -> bool:
    return response.status_code == HTTP_TOO_MANY_REQUESTS


def _log_before_sleep(retry_state: RetryCallState) -> None:
    log.warning(
        "rate_limited_retry",
        attempt=retry_state.attempt_number,
        sleep_seconds=round(retry_state.upcoming_sleep, 2),
    )


def _return_last_response(retry_state: RetryCallState) -> ApiResponse:
    log.error("rate_limit_retries_exhausted", attempts=retry_state.attempt_number)
    if retry_state.outcome is None:
        raise RuntimeError("Retry budget spent before any attempt ran")
    response: ApiResponse = retry_state.outcome.result()
    return response


def rate_limit_retrying(settings: Settings | None = None) -> AsyncRetrying:
    """Build the tenacity controller for rate-limited calls."""
    settings = settings or get_settings()
    return AsyncRetrying(
        retry=retry_if_result(is_rate_limited),
        stop=(
            stop_after_attempt(settings.rate_limit_max_attempts)
            | stop_after_delay(settings.rate_limit_deadline)
        ),
        wait=(
            wait_exponential(
                multiplier=settings.rate_limit_initial_delay,
                min=settings.rate_limit_initial_delay,
                max=settings.rate_limit_max_delay,
            )
            + wait_random(0, settings.rate_limit_jitter)
        ),
        before_sleep=_log_before_sleep,
        retry_error_callback=_return_last_response,
    )


async def with_rate_limit_retry(
    call: Callable[[], Awaitable[ApiResponse]],
    settings: Settings | None = None,
) -> ApiResponse:
    """Run ``call`` until it is not rate limited or the retry budget is spent.

    Args:
        call: Zero-argument coroutine factory issuing the request.
        settings: Retry budget; defaults to the cached settings.

    Returns:
        The first non-429 response, or the last 429 response.

    Raises:
        ApiConnectionError: Transport errors are not retried.
    """

    async def attempt() -> ApiResponse:
        return await call()

    # tenacity only awaits coroutine functions; call is usually a plain lambda
    response: ApiResponse = await rate_limit_retrying(settings)(attempt)
    return response

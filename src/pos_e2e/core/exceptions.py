"""Harness exception hierarchy.

Expected API failures (400, 404, 409, ...) are never raised: tests assert on
status codes. These exceptions cover the cases where the harness itself
cannot do its job.
"""

from typing import Any


class PosE2EError(Exception):
    """Base exception for all harness errors."""

    pass


class ApiConnectionError(PosE2EError):
    """Raised when the API cannot be reached at the transport level.

    Attributes:
        url: Request URL that failed.

    Example:
        raise ApiConnectionError(url="http://localhost:3000/api/health", message="Connection refused")
    """

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{url}: {message}")


class SetupError(PosE2EError):
    """Raised when a fixture cannot be created (user, establishment).

    Dependent tests cannot run without the fixture, so this aborts them.

    Attributes:
        status_code: Last HTTP status seen, None if no response was received.
        body: Last response body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            message = f"{message}: {status_code} {body!r}"
        super().__init__(message)

"""Response normalisation for the API under test.

The API wraps most bodies as ``{"data": ..., "statusCode": ..., "timestamp": ...}``.
Tests assert on the payload, so the wrapper is removed here.
"""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from pos_e2e.constants.api import ENVELOPE_KEYS


def unwrap_envelope(body: Any) -> Any:
    """Return the inner payload of a wrapped body, or the body unchanged."""
    if isinstance(body, dict) and ENVELOPE_KEYS <= body.keys():
        return body["data"]
    return body


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when possible, text otherwise, None if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


@dataclass
class ApiResponse:
    """Status and unwrapped body of one API call.

    Attributes:
        status_code: HTTP status code.
        data: Unwrapped JSON payload, raw text for non-JSON bodies, None if empty.
        headers: Response headers.
    """

    status_code: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ApiResponse":
        return cls(
            status_code=response.status_code,
            data=unwrap_envelope(decode_body(response)),
            headers=dict(response.headers),
        )

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def get(self, key: str, default: Any = None) -> Any:
        """Read a field of an object payload; default for non-object payloads."""
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default

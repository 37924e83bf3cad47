"""HTTP access to the API under test."""

from pos_e2e.services.api_client import ApiClient, AuthenticatedRequests, BearerTokenAuth
from pos_e2e.services.envelope import ApiResponse, unwrap_envelope
from pos_e2e.services.retry import with_rate_limit_retry

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AuthenticatedRequests",
    "BearerTokenAuth",
    "unwrap_envelope",
    "with_rate_limit_retry",
]

"""Constants describing the API under test."""

from typing import Final

# Identifier that never matches an existing resource
NIL_UUID: Final = "00000000-0000-0000-0000-000000000000"

# Keys that mark a wrapped response body: {data, statusCode, timestamp}
ENVELOPE_KEYS: Final = frozenset({"data", "statusCode", "timestamp"})

HTTP_OK: Final = 200
HTTP_CREATED: Final = 201
HTTP_TOO_MANY_REQUESTS: Final = 429

CREATED_STATUSES: Final = frozenset({HTTP_OK, HTTP_CREATED})

# Deletion order for tracked resources; dependants go before what they reference
CLEANUP_ORDER: Final = (
    "orders",
    "products",
    "categories",
    "tables",
    "coupons",
    "customers",
    "establishments",
    "users",
)

TEST_USER_NAME: Final = "Test User E2E"

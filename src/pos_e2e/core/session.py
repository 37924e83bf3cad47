"""Per-suite test session state.

One ApiSession is created per e2e module. It owns the bearer tokens and the
ids of every resource the module created, so two modules never race on
shared state.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from pos_e2e.constants.api import CLEANUP_ORDER


@dataclass
class TrackedIds:
    """Ids of created resources, grouped by category, for later cleanup."""

    users: list[str] = field(default_factory=list)
    establishments: list[str] = field(default_factory=list)
    products: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    customers: list[str] = field(default_factory=list)
    orders: list[str] = field(default_factory=list)
    tables: list[str] = field(default_factory=list)
    coupons: list[str] = field(default_factory=list)

    def add(self, category: str, resource_id: str | None) -> None:
        """Track an id. Missing ids (failed creates) are ignored."""
        if resource_id:
            self._bucket(category).append(resource_id)

    def discard(self, category: str, resource_id: str) -> None:
        """Stop tracking an id that a test already deleted."""
        bucket = self._bucket(category)
        bucket[:] = [tracked for tracked in bucket if tracked != resource_id]

    def in_cleanup_order(self) -> Iterator[tuple[str, list[str]]]:
        """Yield (category, ids) with dependants before their parents."""
        for category in CLEANUP_ORDER:
            yield category, list(self._bucket(category))

    def clear(self) -> None:
        for category in CLEANUP_ORDER:
            self._bucket(category).clear()

    def total(self) -> int:
        return sum(len(self._bucket(category)) for category in CLEANUP_ORDER)

    def _bucket(self, category: str) -> list[str]:
        if category not in CLEANUP_ORDER:
            raise KeyError(f"Unknown resource category: {category}")
        bucket: list[str] = getattr(self, category)
        return bucket


@dataclass
class ApiSession:
    """Authentication and fixture state of one test suite.

    Attributes:
        access_token: Bearer token attached to authenticated calls.
        refresh_token: Token accepted by POST /auth/refresh.
        user_id: Id of the user created by setup_test_user.
        establishment_id: Id of the establishment created by setup_test_establishment.
        tracked: Ids to delete during cleanup.
    """

    access_token: str = ""
    refresh_token: str = ""
    user_id: str = ""
    establishment_id: str = ""
    tracked: TrackedIds = field(default_factory=TrackedIds)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def set_tokens(self, access_token: str | None, refresh_token: str | None = None) -> None:
        """Store tokens from a login, registration or refresh response.

        A response without a refresh token keeps the previous one.
        """
        self.access_token = access_token or ""
        if refresh_token:
            self.refresh_token = refresh_token

"""
User session context.

A UserSession holds the signed-in user, their access tier and their query
cache. Sessions are created on sign-in (or first authenticated request)
and torn down on sign-out, which clears the cache and runs any teardown
hooks registered for the user (e.g. cancelling their trackers).

Dependencies: estate_portal.core.query_cache
System role: Per-user context passed explicitly to services
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from estate_portal.core.query_cache import QueryCache

logger = logging.getLogger(__name__)


class Tier(str, Enum):
    USER = "user"
    PAID = "paid"
    ADMIN = "admin"


ADMIN_GROUP = "admin"
PAID_GROUP = "paid"


def tier_from_groups(
    groups: Iterable[str] | None,
    admin_group: str = ADMIN_GROUP,
    paid_group: str = PAID_GROUP,
) -> Tier:
    """Resolve the effective tier from Cognito group names (admin > paid > user)."""
    names = {group.lower() for group in groups or ()}
    if admin_group.lower() in names:
        return Tier.ADMIN
    if paid_group.lower() in names:
        return Tier.PAID
    return Tier.USER


@dataclass(frozen=True)
class AuthUser:
    """Identity resolved from a verified access token."""

    sub: str
    username: str
    access_token: str = field(repr=False)
    email: str | None = None
    groups: tuple[str, ...] = ()
    tier: Tier = Tier.USER


class UserSession:
    """Explicit per-user context: identity, tier and query cache."""

    def __init__(self, cache: QueryCache | None = None) -> None:
        self._user: AuthUser | None = None
        self.cache = cache or QueryCache()

    @property
    def user(self) -> AuthUser:
        if self._user is None:
            raise RuntimeError("Session is not initialized")
        return self._user

    @property
    def active(self) -> bool:
        return self._user is not None

    @property
    def tier(self) -> Tier:
        return self.user.tier

    @property
    def is_admin(self) -> bool:
        return self.active and self.tier is Tier.ADMIN

    @property
    def is_paid(self) -> bool:
        return self.active and self.tier in (Tier.PAID, Tier.ADMIN)

    def init(self, user: AuthUser) -> "UserSession":
        """Bind the session to ``user``; a different user resets the cache."""
        if self._user is not None and self._user.sub != user.sub:
            self.cache.clear()
        self._user = user
        return self

    def teardown(self) -> None:
        self.cache.clear()
        self._user = None


class SessionStore:
    """Live sessions keyed by user sub."""

    def __init__(self, cache_factory: Callable[[], QueryCache] = QueryCache) -> None:
        self._sessions: dict[str, UserSession] = {}
        self._cache_factory = cache_factory
        self._teardown_hooks: list[Callable[[str], None]] = []

    def __len__(self) -> int:
        return len(self._sessions)

    def on_teardown(self, hook: Callable[[str], None]) -> None:
        """Register ``hook(sub)`` to run when a user's session ends."""
        self._teardown_hooks.append(hook)

    def get(self, sub: str) -> UserSession | None:
        return self._sessions.get(sub)

    def open(self, user: AuthUser) -> UserSession:
        """Return the user's session, creating it on first use."""
        session = self._sessions.get(user.sub)
        if session is None:
            session = UserSession(cache=self._cache_factory())
            self._sessions[user.sub] = session
            logger.info(f"{__name__}:open - Session opened for {user.sub}")
        # Refresh identity so the newest token and groups are used
        return session.init(user)

    def close(self, sub: str) -> bool:
        """
        End the user's session.

        Returns:
            bool: False if no session was open
        """
        session = self._sessions.pop(sub, None)
        if session is None:
            return False
        for hook in self._teardown_hooks:
            try:
                hook(sub)
            except Exception as e:
                logger.error(f"{__name__}:close - teardown hook failed for {sub}: {e}")
        session.teardown()
        logger.info(f"{__name__}:close - Session closed for {sub}")
        return True

    def close_all(self) -> None:
        for sub in list(self._sessions):
            self.close(sub)

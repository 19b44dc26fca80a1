"""Domain models for users and subscription plans."""

from dataclasses import dataclass
from uuid import UUID

PLAN_FREE = "FREE"
PLAN_PREMIUM_MONTHLY = "PREMIUM_MONTHLY"
PLAN_PREMIUM_YEARLY = "PREMIUM_YEARLY"
PREMIUM_PLANS = frozenset({PLAN_PREMIUM_MONTHLY, PLAN_PREMIUM_YEARLY})


def is_premium(plan: str) -> bool:
    """Return true for the paid tiers."""
    return plan in PREMIUM_PLANS


@dataclass(frozen=True)
class UserProfile:
    """Profile row stored in the users table."""

    id: UUID
    email: str | None
    name: str | None
    image: str | None
    plan: str
    notifications_enabled: bool
    photos_taken: int
    food_count: int


@dataclass(frozen=True)
class AuthUser:
    """Identity returned by the auth provider."""

    id: UUID
    email: str | None
    name: str | None
    avatar_url: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued by the auth provider."""

    access_token: str
    refresh_token: str
    expires_in: int | None = None


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated user merged with their profile."""

    id: UUID
    email: str | None
    name: str | None
    image: str | None
    plan: str = PLAN_FREE
    notifications_enabled: bool = True
    food_count: int = 0

    @property
    def is_premium(self) -> bool:
        return is_premium(self.plan)

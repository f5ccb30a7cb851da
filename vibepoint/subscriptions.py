"""
Subscription status.

Billing lives elsewhere; the service only needs something that answers
"what is this user entitled to". Without a billing backend every user gets
the free tier.
"""

from datetime import datetime
from typing import Literal, Protocol

from pydantic import Field

from .models import CamelModel, User


class TierFeatures(CamelModel):
    ai_insights: bool = False
    emotion_recipes: bool = False
    advanced_patterns: bool = False
    export_data: bool = False


class TierLimits(CamelModel):
    recipes_per_week: int = 3
    ai_requests_per_hour: int = 5


class SubscriptionStatus(CamelModel):
    is_pro: bool = False
    tier: Literal["free", "premium"] = "free"
    status: Literal["active", "cancelled", "expired", "trial", "free"] = "free"
    features: TierFeatures = Field(default_factory=TierFeatures)
    limits: TierLimits = Field(default_factory=TierLimits)


class SubscriptionProvider(Protocol):
    async def status_for(self, user: User | None) -> SubscriptionStatus: ...


def free_tier_status() -> SubscriptionStatus:
    return SubscriptionStatus()


def is_subscription_active(
    status: str, subscription_end: datetime | None, now: datetime
) -> bool:
    """An active subscription with no end date never lapses."""
    if status != "active":
        return False
    if subscription_end is None:
        return True
    return subscription_end > now


class FreeTierProvider:
    """Answers the free tier for everyone."""

    async def status_for(self, user: User | None) -> SubscriptionStatus:
        return free_tier_status()

# auth/models.py
"""
User and Profile models.

Both records are owned by Supabase; this service only reads them and
links a Stripe customer id onto the profile.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from billing.products import SubscriptionPlan


@dataclass(frozen=True)
class User:
    """
    Authenticated identity resolved from a bearer token.

    Attributes:
        id: Supabase auth user id (UUID)
        email: User's email
    """
    id: str
    email: Optional[str] = None

    @classmethod
    def from_auth_user(cls, auth_user: Any) -> User:
        """Build from a supabase auth user object."""
        return cls(id=str(auth_user.id), email=getattr(auth_user, "email", None))


@dataclass(frozen=True)
class Profile:
    """
    Per-user application record.

    Attributes:
        user_id: Owning user id (unique)
        stripe_customer_id: Linked Stripe customer, None until provisioned
        subscription_plan: Current plan
        full_name: Display name, may be empty
    """
    user_id: str
    stripe_customer_id: Optional[str] = None
    subscription_plan: SubscriptionPlan = SubscriptionPlan.FREE
    full_name: Optional[str] = None

    @classmethod
    def from_row(cls, user_id: str, row: Mapping[str, Any]) -> Profile:
        """Build from a profiles row selected by user_id."""
        return cls(
            user_id=user_id,
            stripe_customer_id=row.get("stripe_customer_id") or None,
            subscription_plan=SubscriptionPlan.parse(row.get("subscription_plan")),
            full_name=row.get("full_name") or None,
        )

    @property
    def has_customer(self) -> bool:
        return bool(self.stripe_customer_id)

    def with_customer(self, customer_id: str) -> Profile:
        return replace(self, stripe_customer_id=customer_id)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "stripe_customer_id": self.stripe_customer_id,
            "subscription_plan": self.subscription_plan.value,
            "full_name": self.full_name,
        }

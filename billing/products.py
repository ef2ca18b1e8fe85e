# billing/products.py
"""
Subscription plans and the priced item sold at checkout.

Profiles carry a plan string; only "premium" marks an existing
subscriber. Everything else is treated as free.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_logger = logging.getLogger(__name__)


class SubscriptionPlan(str, Enum):
    """Plan recorded on a profile."""

    FREE = "free"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SubscriptionPlan":
        """
        Map a stored plan value to a SubscriptionPlan.

        Missing or unrecognised values fall through to FREE, so the
        caller is offered checkout rather than the portal.
        """
        if value is None:
            return cls.FREE
        try:
            return cls(value)
        except ValueError:
            _logger.warning(f"Unrecognised subscription_plan {value!r}; treating as free")
            return cls.FREE

    @property
    def has_subscription(self) -> bool:
        return self is SubscriptionPlan.PREMIUM


@dataclass(frozen=True)
class LineItem:
    """Single checkout line item."""
    price_id: str
    quantity: int = 1

    def to_params(self) -> dict:
        return {"price": self.price_id, "quantity": self.quantity}


def premium_line_item(price_id: str) -> LineItem:
    """The one item sold at checkout: the premium subscription price."""
    return LineItem(price_id=price_id, quantity=1)

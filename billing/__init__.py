# billing/__init__.py
"""
Billing module for Stripe subscriptions.

Provides:
- Stripe customer creation
- Stripe Checkout session creation
- Customer portal session creation
"""

from billing.products import SubscriptionPlan
from billing.service import (
    BillingSession,
    ProviderError,
    SessionKind,
    create_customer,
    create_checkout_session,
    create_portal_session,
)

__all__ = [
    "SubscriptionPlan",
    "BillingSession",
    "ProviderError",
    "SessionKind",
    "create_customer",
    "create_checkout_session",
    "create_portal_session",
]

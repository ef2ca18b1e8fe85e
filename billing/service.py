# billing/service.py
"""
Billing service for Stripe customer and session management.

Handles:
- Customer creation
- Checkout session creation (subscription mode)
- Customer portal session creation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import stripe

from app.config import AppConfig
from billing.products import premium_line_item
from billing.stripe_client import get_stripe
from provisioning.errors import ProvisioningError

_logger = logging.getLogger(__name__)


class ProviderError(ProvisioningError):
    """Stripe rejected or failed a request."""
    pass


class SessionKind(str, Enum):
    CHECKOUT = "checkout"
    PORTAL = "portal"


@dataclass(frozen=True)
class BillingSession:
    """Hosted Stripe session handed back to the caller."""
    kind: SessionKind
    id: str
    url: str


def _stripe_for(config: AppConfig):
    try:
        return get_stripe(config.stripe_secret_key, config.stripe_api_version)
    except RuntimeError as e:
        raise ProviderError(str(e)) from e


def _provider_message(error: Exception) -> str:
    return getattr(error, "user_message", None) or str(error)


def create_customer(
    config: AppConfig,
    email: str,
    name: Optional[str] = None,
    request_id: Optional[str] = None,
) -> str:
    """
    Create a Stripe customer for a user.

    Args:
        config: Application configuration
        email: User's email
        name: Display name (falls back to email)
        request_id: Correlation id for log records

    Returns:
        The new Stripe customer id

    Raises:
        ProviderError: If Stripe fails
    """
    client = _stripe_for(config)

    try:
        customer = client.Customer.create(
            email=email,
            name=name or email,
            description=f"Customer for {email}",
        )
    except stripe.StripeError as e:
        raise ProviderError(_provider_message(e)) from e

    _logger.info(
        f"Created Stripe customer: {customer.id}",
        extra={"request_id": request_id, "customer_id": customer.id},
    )
    return customer.id


def create_checkout_session(
    config: AppConfig,
    customer_id: str,
    success_url: str,
    cancel_url: str,
    request_id: Optional[str] = None,
) -> BillingSession:
    """
    Create a subscription Checkout session for the configured price.

    Raises:
        ProviderError: If Stripe fails
    """
    client = _stripe_for(config)
    item = premium_line_item(config.stripe_price_id)

    try:
        session = client.checkout.Session.create(
            customer=customer_id,
            line_items=[item.to_params()],
            mode="subscription",
            success_url=success_url,
            cancel_url=cancel_url,
        )
    except stripe.StripeError as e:
        raise ProviderError(_provider_message(e)) from e

    _logger.info(
        f"Created checkout session for customer {customer_id}",
        extra={"request_id": request_id, "session_id": session.id},
    )
    return BillingSession(kind=SessionKind.CHECKOUT, id=session.id, url=session.url)


def create_portal_session(
    config: AppConfig,
    customer_id: str,
    return_url: str,
    request_id: Optional[str] = None,
) -> BillingSession:
    """
    Create a Stripe Customer Portal session.

    Raises:
        ProviderError: If Stripe fails
    """
    client = _stripe_for(config)

    try:
        session = client.billing_portal.Session.create(
            customer=customer_id,
            return_url=return_url,
        )
    except stripe.StripeError as e:
        raise ProviderError(_provider_message(e)) from e

    _logger.info(
        f"Created portal session for customer {customer_id}",
        extra={"request_id": request_id, "session_id": session.id},
    )
    return BillingSession(kind=SessionKind.PORTAL, id=session.id, url=session.url)

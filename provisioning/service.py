# provisioning/service.py
"""
Session provisioning.

Turns an authenticated request into a Stripe-hosted session URL:

    authenticate -> load profile -> ensure customer -> create session

Each step blocks on its external call before the next one starts.
Any failure ends the request; nothing is retried or rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.config import AppConfig
from auth.models import Profile, User
from auth.service import verify_token
from billing.service import (
    BillingSession,
    create_checkout_session,
    create_customer,
    create_portal_session,
)
from persistence.db import get_supabase_client
from persistence.profiles import ProfileUpdateError, get_profile, set_stripe_customer_id

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedirectTargets:
    """Where Stripe sends the browser afterwards."""
    portal_return: str
    checkout_success: str
    checkout_cancel: str

    @classmethod
    def for_origin(cls, origin: str) -> RedirectTargets:
        return cls(
            portal_return=f"{origin}/profile",
            checkout_success=f"{origin}/profile?success=true",
            checkout_cancel=f"{origin}/profile?canceled=true",
        )


def resolve_origin(origin: Optional[str], config: AppConfig) -> str:
    """Origin header value, or the configured default when absent."""
    return origin if origin is not None else config.default_origin


def ensure_customer(
    client,
    config: AppConfig,
    user: User,
    profile: Profile,
    request_id: Optional[str] = None,
) -> Profile:
    """
    Make sure the profile is linked to a Stripe customer.

    A profile that already has a customer id is returned unchanged.
    Otherwise a customer is created and its id written to the profile.
    If that write fails the new customer is left unlinked in Stripe.

    Raises:
        ProviderError: If customer creation fails
        ProfileUpdateError: If the profile write fails
    """
    if profile.has_customer:
        return profile

    _logger.info(
        f"Creating new Stripe customer for user {user.id}",
        extra={"request_id": request_id, "user_id": user.id},
    )
    customer_id = create_customer(
        config,
        email=user.email,
        name=profile.full_name or user.email,
        request_id=request_id,
    )

    try:
        set_stripe_customer_id(client, user.id, customer_id)
    except ProfileUpdateError:
        _logger.error(
            f"Stripe customer {customer_id} created but not linked to user {user.id}",
            extra={"request_id": request_id, "user_id": user.id, "customer_id": customer_id},
        )
        raise

    return profile.with_customer(customer_id)


def create_session_for_profile(
    config: AppConfig,
    profile: Profile,
    origin: str,
    request_id: Optional[str] = None,
) -> BillingSession:
    """
    Portal for premium subscribers, checkout for everyone else.

    Raises:
        ProviderError: If Stripe fails
    """
    targets = RedirectTargets.for_origin(origin)

    if profile.subscription_plan.has_subscription:
        return create_portal_session(
            config,
            customer_id=profile.stripe_customer_id,
            return_url=targets.portal_return,
            request_id=request_id,
        )

    return create_checkout_session(
        config,
        customer_id=profile.stripe_customer_id,
        success_url=targets.checkout_success,
        cancel_url=targets.checkout_cancel,
        request_id=request_id,
    )


def create_stripe_session(
    config: AppConfig,
    token: str,
    origin: Optional[str] = None,
    request_id: Optional[str] = None,
) -> BillingSession:
    """
    Provision a Stripe session for the bearer of ``token``.

    Args:
        config: Application configuration
        token: Supabase access token (may be empty)
        origin: Request Origin header; redirect targets are built on it
        request_id: Correlation id for log records

    Returns:
        The created BillingSession; callers return only its url

    Raises:
        AuthError: Token rejected or no user
        ProfileError: Profile lookup failed or no profile row
        ProfileUpdateError: Customer created but not stored on the profile
        ProviderError: Stripe failed
    """
    client = get_supabase_client(config)

    _logger.info("Authenticating user...", extra={"request_id": request_id})
    user = verify_token(client, token)

    _logger.info(
        f"Looking for profile of user {user.id}",
        extra={"request_id": request_id, "user_id": user.id},
    )
    profile = get_profile(client, user.id)
    _logger.info(
        f"Found profile: {profile.to_dict()}",
        extra={"request_id": request_id, "user_id": user.id},
    )

    profile = ensure_customer(client, config, user, profile, request_id=request_id)

    session = create_session_for_profile(
        config,
        profile,
        resolve_origin(origin, config),
        request_id=request_id,
    )
    _logger.info(
        f"Issued {session.kind.value} session for user {user.id}",
        extra={"request_id": request_id, "user_id": user.id, "session_id": session.id},
    )
    return session

# persistence/profiles.py
"""
Profile storage (Supabase ``profiles`` table).

Handles:
- Loading the single profile row for a user
- Linking a Stripe customer id onto a profile
"""

from __future__ import annotations

import logging

from supabase import Client

from auth.models import Profile
from persistence.db import PROFILES_TABLE
from provisioning.errors import ProvisioningError

_logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("stripe_customer_id", "subscription_plan", "full_name")


class ProfileError(ProvisioningError):
    """Profile lookup failed or no row exists."""
    pass


class ProfileUpdateError(ProvisioningError):
    """Writing to the profile failed."""
    pass


def _error_message(error: Exception) -> str:
    """PostgREST errors carry a readable message; others fall back to str()."""
    return getattr(error, "message", None) or str(error)


def get_profile(client: Client, user_id: str) -> Profile:
    """
    Load the profile row keyed by user_id.

    Args:
        client: Service-role Supabase client
        user_id: Authenticated user id

    Returns:
        Profile

    Raises:
        ProfileError: If the query fails or returns no row
    """
    try:
        result = (
            client.table(PROFILES_TABLE)
            .select(", ".join(PROFILE_FIELDS))
            .eq("user_id", user_id)
            .single()
            .execute()
        )
    except Exception as e:
        _logger.warning(f"Profile lookup failed for user {user_id}: {e}")
        raise ProfileError(_error_message(e)) from e

    if not result.data:
        raise ProfileError("No profile found")

    return Profile.from_row(user_id, result.data)


def set_stripe_customer_id(client: Client, user_id: str, customer_id: str) -> None:
    """
    Store a Stripe customer id on the user's profile.

    Raises:
        ProfileUpdateError: If the update fails
    """
    try:
        (
            client.table(PROFILES_TABLE)
            .update({"stripe_customer_id": customer_id})
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as e:
        raise ProfileUpdateError(f"Failed to update profile: {_error_message(e)}") from e

    _logger.info(f"Updated profile for user {user_id} with Stripe customer ID")

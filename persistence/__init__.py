"""
Persistence layer.

Profiles are stored in Supabase; this package builds the client and
reads/writes the ``profiles`` table.
"""

from persistence.db import get_supabase_client, reset_clients
from persistence.profiles import (
    ProfileError,
    ProfileUpdateError,
    get_profile,
    set_stripe_customer_id,
)

__all__ = [
    "get_supabase_client",
    "reset_clients",
    "ProfileError",
    "ProfileUpdateError",
    "get_profile",
    "set_stripe_customer_id",
]

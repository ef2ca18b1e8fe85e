# auth/service.py
"""
Authentication service.

Handles:
- Bearer token extraction from the Authorization header
- Token verification against Supabase auth
"""

from __future__ import annotations

import logging
from typing import Optional

from supabase import Client

from auth.models import User
from provisioning.errors import ProvisioningError

_logger = logging.getLogger(__name__)


class AuthError(ProvisioningError):
    """Credential rejected or no user resolved."""
    pass


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the credential following the first space of the header.

    "Bearer abc" -> "abc". A missing header or one without a space
    yields an empty credential, which fails verification.
    """
    if not authorization:
        return ""
    parts = authorization.split(" ")
    return parts[1] if len(parts) > 1 else ""


def verify_token(client: Client, token: str) -> User:
    """
    Resolve the user owning a Supabase access token.

    Args:
        client: Service-role Supabase client
        token: Access token (may be empty)

    Returns:
        Authenticated User

    Raises:
        AuthError: If Supabase rejects the token or resolves no user
    """
    if not token:
        raise AuthError("Authentication failed: missing bearer token")

    try:
        response = client.auth.get_user(token)
    except Exception as e:
        _logger.warning(f"Token verification failed: {e}")
        raise AuthError(f"Authentication failed: {e}") from e

    auth_user = getattr(response, "user", None) if response is not None else None
    if auth_user is None:
        raise AuthError("No user found")

    return User.from_auth_user(auth_user)

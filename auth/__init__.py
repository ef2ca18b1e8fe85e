"""
Authentication module.

Provides:
- User and Profile models
- Bearer token extraction
- Token verification against Supabase auth
"""

from auth.models import User, Profile
from auth.service import AuthError, extract_bearer_token, verify_token

__all__ = [
    "User",
    "Profile",
    "AuthError",
    "extract_bearer_token",
    "verify_token",
]

# persistence/db.py
"""
Supabase client construction.

Users and profiles live in Supabase; this service talks to it with the
service-role key and never keeps an auth session of its own.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from supabase import Client, create_client
from supabase.client import ClientOptions

from app.config import AppConfig

_logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


@lru_cache(maxsize=4)
def _client_for(url: str, key: str) -> Client:
    _logger.info(f"Creating Supabase client for {url}")
    return create_client(
        url,
        key,
        options=ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        ),
    )


def get_supabase_client(config: AppConfig) -> Client:
    """
    Get a service-role Supabase client for the configured project.

    Clients are cached per (url, key) pair.

    Raises:
        RuntimeError: If the Supabase URL or key is not configured
    """
    if not config.supabase_url or not config.supabase_service_role_key:
        raise RuntimeError("Supabase not configured. Check SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY.")
    return _client_for(config.supabase_url, config.supabase_service_role_key)


def reset_clients() -> None:
    """Drop cached clients (used by tests)."""
    _client_for.cache_clear()

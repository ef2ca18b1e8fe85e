# billing/stripe_client.py
"""
Stripe SDK initialization and configuration.

The secret key and API version come from AppConfig; the SDK module is
configured once per process and reconfigured only if the key changes.
"""

from __future__ import annotations

import logging

import stripe

_logger = logging.getLogger(__name__)


def is_test_key(secret_key: str) -> bool:
    """Check if a secret key belongs to Stripe test mode."""
    return secret_key.startswith(("sk_test_", "rk_test_"))


def init_stripe(secret_key: str, api_version: str) -> bool:
    """
    Initialize Stripe SDK with API key.

    Returns:
        True if initialized successfully, False if no key was given
    """
    if not secret_key:
        _logger.warning("STRIPE_SECRET_KEY not set. Billing calls will fail.")
        return False

    stripe.api_key = secret_key

    # Pin the API version so responses keep a stable shape
    stripe.api_version = api_version

    mode = "test" if is_test_key(secret_key) else "live"
    _logger.info(f"Stripe initialized in {mode} mode (api_version={api_version})")

    return True


def get_stripe(secret_key: str, api_version: str):
    """
    Get the configured Stripe module.

    Raises:
        RuntimeError: If no secret key is configured
    """
    if stripe.api_key != secret_key or stripe.api_version != api_version:
        if not init_stripe(secret_key, api_version):
            raise RuntimeError("Stripe not initialized. Check STRIPE_SECRET_KEY.")

    return stripe

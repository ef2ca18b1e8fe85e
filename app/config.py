# app/config.py
"""
Centralized configuration management with startup validation.

Defines REQUIRED vs OPTIONAL environment variables and provides
safe configuration loading with validation and logging.

The loaded AppConfig is read-only for the life of the process and is
passed explicitly into the session provisioner.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

SERVICE_NAME = "stripe-session"
SERVICE_VERSION = "0.1.0"

DEFAULT_ORIGIN = "http://localhost:3000"
DEFAULT_STRIPE_API_VERSION = "2023-10-16"

REQUIRED_ENV_VARS = (
    "STRIPE_SECRET_KEY",
    "STRIPE_PRICE_ID",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
)

# Sensitive substrings that should never appear in logs
SENSITIVE_SUBSTRINGS = ("key", "token", "secret", "password", "credential", "auth")


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from environment."""

    # Service info
    service_name: str = SERVICE_NAME
    service_version: str = SERVICE_VERSION
    environment: str = "development"

    # Stripe
    stripe_secret_key: str = field(default="", repr=False)
    stripe_price_id: str = ""
    stripe_api_version: str = DEFAULT_STRIPE_API_VERSION

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = field(default="", repr=False)

    # Redirect base used when the request carries no Origin header
    default_origin: str = DEFAULT_ORIGIN

    # Warnings collected during config load
    warnings: tuple = ()

    @property
    def stripe_key_present(self) -> bool:
        return bool(self.stripe_secret_key)

    @property
    def supabase_key_present(self) -> bool:
        return bool(self.supabase_service_role_key)

    @property
    def is_complete(self) -> bool:
        """True when every required setting has a value."""
        return bool(
            self.stripe_secret_key
            and self.stripe_price_id
            and self.supabase_url
            and self.supabase_service_role_key
        )


# =============================================================================
# Configuration Loading
# =============================================================================


def _read_env(name: str, default: str = "") -> str:
    """Read and strip an environment variable."""
    return os.environ.get(name, default).strip()


def load_config(fail_fast: bool = True) -> AppConfig:
    """
    Load and validate application configuration from environment.

    Args:
        fail_fast: If True, raise ConfigurationError when required
                   variables are missing. If False, collect warnings
                   and continue; requests will fail downstream.

    Returns:
        AppConfig instance with validated configuration.

    Raises:
        ConfigurationError: If required configuration is missing
                           and fail_fast is True.
    """
    warnings = []

    missing = [name for name in REQUIRED_ENV_VARS if not _read_env(name)]
    if missing:
        message = f"Missing required environment variables: {', '.join(missing)}"
        if fail_fast:
            raise ConfigurationError(message)
        warnings.append(message)

    default_origin = _read_env("DEFAULT_ORIGIN", DEFAULT_ORIGIN) or DEFAULT_ORIGIN
    if default_origin.endswith("/"):
        warnings.append(
            f"DEFAULT_ORIGIN='{default_origin}' has a trailing slash; stripping it"
        )
        default_origin = default_origin.rstrip("/")

    for warning in warnings:
        logger.warning(f"[CONFIG] {warning}")

    return AppConfig(
        environment=_read_env("RAILWAY_ENVIRONMENT", "development") or "development",
        stripe_secret_key=_read_env("STRIPE_SECRET_KEY"),
        stripe_price_id=_read_env("STRIPE_PRICE_ID"),
        stripe_api_version=_read_env("STRIPE_API_VERSION", DEFAULT_STRIPE_API_VERSION)
        or DEFAULT_STRIPE_API_VERSION,
        supabase_url=_read_env("SUPABASE_URL"),
        supabase_service_role_key=_read_env("SUPABASE_SERVICE_ROLE_KEY"),
        default_origin=default_origin,
        warnings=tuple(warnings),
    )


def log_config_snapshot(config: AppConfig) -> str:
    """
    Generate and log a safe configuration snapshot.

    Returns the snapshot string for testing purposes.
    Never logs actual secret values - only boolean presence flags.
    """
    snapshot = (
        f"[STARTUP] service={config.service_name} "
        f"version={config.service_version} "
        f"environment={config.environment} "
        f"stripe_api_version={config.stripe_api_version} "
        f"stripe_price_configured={bool(config.stripe_price_id)} "
        f"supabase_url_configured={bool(config.supabase_url)} "
        f"stripe_key_present={config.stripe_key_present} "
        f"supabase_key_present={config.supabase_key_present} "
        f"default_origin={config.default_origin}"
    )
    logger.info(snapshot)
    return snapshot


def validate_config_snapshot_safety(snapshot: str, config: Optional[AppConfig] = None) -> bool:
    """
    Validate that a config snapshot doesn't contain sensitive values.

    Returns True if safe, False if potentially unsafe.
    """
    snapshot_lower = snapshot.lower()

    # "key_present=" is allowed, "key=" followed by a value is not
    for sensitive in SENSITIVE_SUBSTRINGS:
        pattern = rf"{sensitive}=(?!true|false)"
        if re.search(pattern, snapshot_lower):
            return False

    if config is not None:
        for secret in (config.stripe_secret_key, config.supabase_service_role_key):
            if secret and secret in snapshot:
                return False

    return True

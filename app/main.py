"""Stripe Session API - FastAPI application entrypoint."""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import load_config, log_config_snapshot
from app.correlation import CorrelationIdMiddleware
from app.routers import stripe_session
from billing.stripe_client import init_stripe

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Load configuration at startup; missing settings surface as per-request failures
_config = load_config(fail_fast=False)
log_config_snapshot(_config)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


# Capture service start time for uptime reporting
_SERVICE_START_TIME = datetime.now(timezone.utc)

app = FastAPI(
    title="Stripe Session",
    description="Creates Stripe checkout and billing-portal sessions for Supabase users",
    version=_config.service_version,
)
app.state.config = _config

# Added in reverse execution order: correlation id wraps everything
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(stripe_session.router)


@app.on_event("startup")
async def startup_event():
    """Configure the Stripe SDK."""
    init_stripe(_config.stripe_secret_key, _config.stripe_api_version)


@app.get("/health")
async def health():
    """Health check with service observability."""
    config = app.state.config
    return {
        "status": "healthy" if config.is_complete else "degraded",
        "service": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
        "started_at": _SERVICE_START_TIME.isoformat(),
        "stripe_key_present": config.stripe_key_present,
        "stripe_price_configured": bool(config.stripe_price_id),
        "supabase_configured": bool(config.supabase_url and config.supabase_key_present),
    }

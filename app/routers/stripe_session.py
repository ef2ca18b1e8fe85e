"""
Stripe session endpoint.

POST returns {"url": ...} for a checkout or billing-portal session.
OPTIONS answers browser preflight without touching any service.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import AppConfig
from app.correlation import get_request_id
from auth.service import extract_bearer_token
from provisioning.service import create_stripe_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["billing"])

FAILURE_STATUS_CODE = 400

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


# =============================================================================
# Response Schemas
# =============================================================================

class SessionResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str


# =============================================================================
# Dependencies
# =============================================================================

def get_config(request: Request) -> AppConfig:
    """Process-wide configuration stored on the app at startup."""
    return request.app.state.config


# =============================================================================
# Routes
# =============================================================================

@router.options("/create-stripe-session", status_code=204)
def preflight():
    """CORS preflight: empty body, permissive headers."""
    return Response(status_code=204, headers=CORS_HEADERS)


@router.post(
    "/create-stripe-session",
    response_model=SessionResponse,
    responses={FAILURE_STATUS_CODE: {"model": ErrorResponse}},
)
def create_session(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    origin: Optional[str] = Header(default=None),
    config: AppConfig = Depends(get_config),
):
    """Create or reuse the caller's Stripe customer and return a session URL."""
    request_id = get_request_id(request)

    try:
        session = create_stripe_session(
            config,
            token=extract_bearer_token(authorization),
            origin=origin,
            request_id=request_id,
        )
    except Exception as e:
        logger.error(
            f"Error in create-stripe-session: {e}",
            extra={"request_id": request_id, "error_type": type(e).__name__},
        )
        return JSONResponse(
            status_code=FAILURE_STATUS_CODE,
            content=ErrorResponse(error=str(e)).model_dump(),
            headers=CORS_HEADERS,
        )

    return JSONResponse(
        content=SessionResponse(url=session.url).model_dump(),
        headers=CORS_HEADERS,
    )

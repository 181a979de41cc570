"""
Auth Router — refresh-token exchange for the browser client.
"""

import logging
from fastapi import APIRouter
from adpulse.models import OAuthClient
from adpulse.services.token_service import refresh_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token")
async def exchange_token(payload: OAuthClient):
    """Exchange a refresh token for a short-lived access token."""
    token = await refresh_access_token(
        payload.refresh_token,
        payload.client_id,
        payload.client_secret,
    )
    return {"success": True, "data": token.to_wire()}

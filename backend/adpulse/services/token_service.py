"""
Token Service — OAuth refresh-token exchange for the Google Ads API.
A fresh access token is derived on every request; nothing is cached.
"""

import logging
from typing import Optional
import httpx
from adpulse.config import get_settings
from adpulse.errors import TokenExchangeError
from adpulse.models import AccessToken
from adpulse.utils import truncate

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 200


def _describe_failure(response: httpx.Response) -> str:
    text = response.text
    try:
        error = response.json()
    except ValueError:
        error = None
    if isinstance(error, dict):
        detail = error.get("error_description") or error.get("error")
        if detail:
            return f"Token exchange failed: {detail}"
    # HTML error pages and the like
    return f"Token exchange failed: {truncate(text, ERROR_BODY_LIMIT)}..."


async def refresh_access_token(
    refresh_token: str,
    client_id: str,
    client_secret: str,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AccessToken:
    """
    Exchange a refresh token for a new access token via Google OAuth.
    Returns AccessToken with access_token, expires_in, token_type.
    """
    settings = get_settings()
    form = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "client_id": client_id,
        "client_secret": client_secret,
    }
    headers = {"Content-Type": "application/x-www-form-urlencoded"}

    try:
        if http_client is not None:
            response = await http_client.post(
                settings.oauth_token_url, data=form, headers=headers, timeout=settings.http_timeout,
            )
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    settings.oauth_token_url, data=form, headers=headers, timeout=settings.http_timeout,
                )
    except httpx.HTTPError as e:
        raise TokenExchangeError(f"Token exchange failed: {e}") from e

    if response.is_error:
        message = _describe_failure(response)
        logger.error(f"{message} (HTTP {response.status_code})")
        raise TokenExchangeError(message)

    try:
        data = response.json()
    except ValueError:
        data = None
    if not isinstance(data, dict) or not data.get("access_token"):
        raise TokenExchangeError(
            f"Token exchange failed: {truncate(response.text, ERROR_BODY_LIMIT)}..."
        )

    token = AccessToken(
        access_token=data["access_token"],
        expires_in=data.get("expires_in") or 0,
        token_type=data.get("token_type") or "Bearer",
    )
    logger.info(f"Access token obtained, expires in {token.expires_in}s")
    return token

"""
Google Ads REST Client
Issues read-only GAQL queries against the googleAds:search endpoint.
One query, one POST: no retries and no page-token following.
"""

import logging
from typing import Any, Optional, Union
import httpx
from adpulse.config import get_settings
from adpulse.errors import GoogleAdsAPIError
from adpulse.models import AccessToken, GoogleAdsCredentials
from adpulse.utils import truncate

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 300


class GoogleAdsClient:
    """
    Wrapper around the Google Ads search endpoint.
    Each instance is bound to one access token and one credential set.
    """

    def __init__(
        self,
        access_token: Union[AccessToken, str],
        credentials: GoogleAdsCredentials,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if isinstance(access_token, AccessToken):
            access_token = access_token.access_token
        self.access_token = access_token
        self.credentials = credentials
        self.http_client = http_client
        self.settings = get_settings()

    @property
    def url(self) -> str:
        customer_id = self.credentials.customer_id_digits
        return f"{self.settings.google_ads_base_url}/customers/{customer_id}/googleAds:search"

    @property
    def headers(self) -> dict[str, str]:
        h = {
            "Authorization": f"Bearer {self.access_token}",
            "developer-token": self.credentials.developer_token,
            "Content-Type": "application/json",
        }
        # Required when reaching a client account through a manager (MCC) account
        login_customer_id = self.credentials.login_customer_id_digits
        if login_customer_id:
            h["login-customer-id"] = login_customer_id
        return h

    async def _post(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        return await client.post(
            self.url,
            json={"query": query},
            headers=self.headers,
            timeout=self.settings.http_timeout,
        )

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Run one GAQL query and return the raw ``results`` rows."""
        logger.info(f"Google Ads search: customer {self.credentials.customer_id_digits}")
        try:
            if self.http_client is not None:
                response = await self._post(self.http_client, query)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, query)
        except httpx.HTTPError as e:
            raise GoogleAdsAPIError(f"Google Ads API error: {e}") from e

        if response.is_error:
            raise GoogleAdsAPIError(
                f"Google Ads API error: {truncate(response.text, ERROR_BODY_LIMIT)}",
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            raise GoogleAdsAPIError(
                f"Google Ads API error (non-JSON): {truncate(response.text, ERROR_BODY_LIMIT)}",
                upstream_status=response.status_code,
            )
        results = data.get("results") if isinstance(data, dict) else None
        return results or []

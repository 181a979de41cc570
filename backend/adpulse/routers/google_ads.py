"""
Google Ads Router — campaign list with budgets, bidding config and metrics.
"""

import logging
from fastapi import APIRouter
from adpulse.models import GoogleAdsCredentials
from adpulse.services.reporting_service import ReportingService
from adpulse.utils import utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/campaigns")
async def fetch_campaigns(payload: GoogleAdsCredentials):
    """
    Fetch campaign data for the account:
    1. Exchange the refresh token
    2. Run the campaign GAQL query (custom range or LAST_30_DAYS)
    3. Normalize micros and ratios
    """
    service = ReportingService(payload)
    token = await service.get_access_token()
    campaigns = await service.fetch_campaigns(token)
    return {
        "success": True,
        "data": {
            "campaigns": [c.to_wire() for c in campaigns],
            "fetchedAt": utcnow_iso(),
            "count": len(campaigns),
        },
    }

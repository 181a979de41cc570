"""
Reporting Service — fetches and normalizes the campaign report and the
thirteen secondary reports for one account and one date window.

The aggregate path exchanges the OAuth token once, fetches campaigns, then
fans out every secondary report in parallel. A secondary report that fails is
logged and replaced by an empty result; the token exchange and the campaign
report are fatal.
"""

import asyncio
import logging
from typing import Optional
import httpx
from adpulse.google_ads_client import GoogleAdsClient
from adpulse.models import (
    AccessToken, AggregateReportSet, CampaignRecord, GoogleAdsCredentials, ReportKind,
)
from adpulse.services.gaql_queries import build_campaign_query, build_report_query
from adpulse.services.normalizers import normalize_campaign, normalize_row
from adpulse.services.token_service import refresh_access_token
from adpulse.utils import utcnow_iso

logger = logging.getLogger(__name__)

SECONDARY_REPORTS = tuple(ReportKind)


class ReportingService:
    def __init__(
        self,
        credentials: GoogleAdsCredentials,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.credentials = credentials
        self.http_client = http_client

    async def get_access_token(self) -> AccessToken:
        return await refresh_access_token(
            self.credentials.refresh_token,
            self.credentials.client_id,
            self.credentials.client_secret,
            http_client=self.http_client,
        )

    def _client(self, token: AccessToken) -> GoogleAdsClient:
        return GoogleAdsClient(token, self.credentials, http_client=self.http_client)

    async def fetch_campaigns(self, token: AccessToken) -> list[CampaignRecord]:
        date_range = self.credentials.date_range
        if date_range:
            logger.info(f"Campaigns: custom date range {date_range.start_date} to {date_range.end_date}")
        else:
            logger.info("Campaigns: default date range LAST_30_DAYS")
        rows = await self._client(token).search(build_campaign_query(date_range))
        logger.info(f"Campaigns: {len(rows)} raw rows")
        return [normalize_campaign(r) for r in rows]

    async def fetch_report(self, token: AccessToken, kind: ReportKind) -> list:
        kind = ReportKind(kind)
        query = build_report_query(kind, self.credentials.date_range)
        rows = await self._client(token).search(query)
        logger.info(f"Report {kind.value}: {len(rows)} records")
        return [normalize_row(kind, r) for r in rows]

    async def fetch_single_report(self, kind: ReportKind) -> list:
        """Token exchange plus one report; used by the per-report endpoints."""
        token = await self.get_access_token()
        return await self.fetch_report(token, kind)

    async def _fetch_or_empty(self, token: AccessToken, kind: ReportKind) -> list:
        try:
            return await self.fetch_report(token, kind)
        except Exception as e:
            logger.warning(f"Report {kind.value} failed, continuing with no rows: {e}")
            return []

    async def aggregate(self) -> AggregateReportSet:
        """
        Pull every report for the account:
        1. Exchange the refresh token (fatal on failure)
        2. Fetch campaigns (fatal on failure)
        3. Fetch all secondary reports in parallel (each failure absorbed)
        """
        token = await self.get_access_token()
        campaigns = await self.fetch_campaigns(token)

        results = await asyncio.gather(
            *(self._fetch_or_empty(token, kind) for kind in SECONDARY_REPORTS)
        )
        sections = {kind.field_name: tuple(rows) for kind, rows in zip(SECONDARY_REPORTS, results)}

        reports = AggregateReportSet(
            campaigns=tuple(campaigns),
            date_range=self.credentials.date_range,
            fetched_at=utcnow_iso(),
            **sections,
        )
        logger.info(f"Aggregate report counts: {reports.counts()}")
        return reports

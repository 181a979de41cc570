"""
Reports Router — one endpoint per secondary report kind, plus an aggregate
endpoint that pulls every report in one round trip.
"""

import logging
from fastapi import APIRouter
from adpulse.models import GoogleAdsCredentials, ReportKind
from adpulse.services.reporting_service import ReportingService
from adpulse.utils import utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/all")
async def fetch_all_reports(payload: GoogleAdsCredentials):
    """
    Campaigns plus all thirteen secondary reports. A failing secondary report
    comes back empty; a failing campaign report fails the request.
    """
    reports = await ReportingService(payload).aggregate()
    return {
        "success": True,
        "data": {
            "reports": reports.to_wire(),
            "counts": reports.counts(),
            "fetchedAt": reports.fetched_at,
        },
    }


@router.post("/{kind}")
async def fetch_report(kind: ReportKind, payload: GoogleAdsCredentials):
    """Fetch one normalized report. Snapshot reports ignore the date range."""
    date_range = payload.date_range
    if date_range:
        logger.info(f"Fetching {kind.value}: {date_range.start_date} to {date_range.end_date}")
    else:
        logger.info(f"Fetching {kind.value}: LAST_30_DAYS default")
    rows = await ReportingService(payload).fetch_single_report(kind)
    return {
        "success": True,
        "data": {
            "report": kind.value,
            "results": [r.to_wire() for r in rows],
            "count": len(rows),
            "fetchedAt": utcnow_iso(),
        },
    }

"""
Audit Router — quick (structured JSON) and comprehensive (markdown) AI audits.
The two endpoints keep separate response contracts on purpose.
"""

import logging
from typing import Optional
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from adpulse.models import AggregateReportSet, CampaignRecord, DateRange, WireModel
from adpulse.services.ai_service import AIService

logger = logging.getLogger(__name__)

router = APIRouter()


class QuickAuditRequest(WireModel):
    campaigns: list[CampaignRecord]
    openai_api_key: Optional[str] = None
    date_range: Optional[DateRange] = None


class ComprehensiveAuditRequest(WireModel):
    all_reports: AggregateReportSet
    openai_api_key: Optional[str] = None
    date_range: Optional[DateRange] = None


@router.post("/generate")
async def generate_audit(payload: QuickAuditRequest):
    """Generate a structured audit from a campaign list."""
    if not payload.campaigns:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "NO_CAMPAIGNS",
                "message": "No campaigns provided for audit",
            },
        )

    service = AIService(api_key=payload.openai_api_key)
    audit = await service.generate_audit(payload.campaigns, payload.date_range)
    return {"success": True, "data": audit.to_wire()}


@router.post("/comprehensive")
async def comprehensive_audit(payload: ComprehensiveAuditRequest):
    """Generate a markdown audit narrative from every report."""
    logger.info("Comprehensive audit request received")
    service = AIService(api_key=payload.openai_api_key)
    audit = await service.generate_comprehensive_audit(payload.all_reports, payload.date_range)
    return {"success": True, "data": audit.to_wire()}

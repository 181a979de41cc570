"""
Export Router — downloadable CSV of campaigns and Markdown of an audit.
"""

from fastapi import APIRouter
from fastapi.responses import Response
from adpulse.models import AuditResult, CampaignRecord, WireModel
from adpulse.services.export_service import audit_filename, audit_to_markdown, campaigns_to_csv
from adpulse.utils import utcnow_iso

router = APIRouter()


class CampaignExportRequest(WireModel):
    campaigns: list[CampaignRecord]


@router.post("/campaigns.csv")
async def export_campaigns_csv(payload: CampaignExportRequest):
    filename = f"adpulse-campaigns-{utcnow_iso()[:10]}.csv"
    return Response(
        content=campaigns_to_csv(payload.campaigns),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/audit.md")
async def export_audit_markdown(payload: AuditResult):
    return Response(
        content=audit_to_markdown(payload),
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={audit_filename(payload.generated_at)}"},
    )

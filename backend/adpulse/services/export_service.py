"""
Export Service — CSV and Markdown renderings for download.
"""

import csv
from io import StringIO
from typing import Iterable, Optional
from adpulse.models import AuditResult, CampaignRecord
from adpulse.utils import utcnow_iso

CAMPAIGN_CSV_COLUMNS = list(CampaignRecord.model_fields)


def campaigns_to_csv(campaigns: Iterable[CampaignRecord]) -> str:
    sio = StringIO()
    writer = csv.writer(sio)
    writer.writerow(CAMPAIGN_CSV_COLUMNS)
    for c in campaigns:
        row = c.model_dump(mode="json")
        writer.writerow(["" if row[col] is None else row[col] for col in CAMPAIGN_CSV_COLUMNS])
    return sio.getvalue()


def audit_to_markdown(result: AuditResult) -> str:
    if result.clean_report:
        return result.clean_report

    # No narrative came back; render what structure there is
    lines = ["# Google Ads Audit", ""]
    if result.generated_at:
        lines += [f"_Generated {result.generated_at} for {result.campaign_count} campaigns_", ""]
    lines += ["## Summary", "", result.summary or "No summary available.", ""]
    if result.recommendations:
        lines += [
            "## Recommendations",
            "",
            "| Priority | Category | Issue | Action |",
            "|---|---|---|---|",
        ]
        for r in result.recommendations:
            cells = [r.priority.value, r.category, r.issue, r.action]
            lines.append("| " + " | ".join(c.replace("|", "\\|") for c in cells) + " |")
        lines.append("")
    return "\n".join(lines)


def audit_filename(generated_at: Optional[str]) -> str:
    day = (generated_at or utcnow_iso())[:10]
    return f"adpulse-audit-{day}.md"

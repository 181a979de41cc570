"""
Prompt builders for the two audit modes.

Quick audits send a capped campaign summary and demand strict JSON back.
Comprehensive audits send a truncated slice of every report and ask for a
free-form markdown narrative.
"""

import json
from typing import Iterable, Optional
from adpulse.models import AggregateReportSet, CampaignRecord, DateRange

QUICK_SYSTEM_PROMPT = "You are an expert Google Ads auditor. You answer strictly in JSON."

COMPREHENSIVE_SYSTEM_PROMPT = (
    "You are a senior Google Ads strategist. Analyze all the data provided and "
    "create a comprehensive audit report with actionable recommendations."
)

QUICK_PROMPT_CAMPAIGN_LIMIT = 50

# (heading, AggregateReportSet attribute, row limit); None = every row
COMPREHENSIVE_SECTIONS = (
    ("CAMPAIGNS", "campaigns", 20),
    ("GEOGRAPHIC PERFORMANCE", "geographic", 10),
    ("DEVICE PERFORMANCE", "devices", 10),
    ("TOP SEARCH TERMS", "search_terms", 15),
    ("QUALITY SCORES", "quality_scores", 10),
    ("AUCTION INSIGHTS", "auction_insights", 10),
    ("CONVERSION ACTIONS", "conversion_actions", None),
    ("LANDING PAGES", "landing_pages", 10),
    ("SHOPPING PRODUCTS", "shopping_products", 10),
    ("RECENT CHANGES", "change_history", 10),
)

COMPREHENSIVE_TASKS = """Please provide a comprehensive audit covering:
1. **Executive Summary** - Overall account health
2. **Campaign Analysis** - Strengths and weaknesses
3. **Geographic Insights** - Where to focus/reduce spend
4. **Device Performance** - Mobile vs Desktop optimization
5. **Search Term Analysis** - Keywords to add as negatives, opportunities
6. **Quality Score Issues** - Low QS keywords to fix
7. **Competitive Position** - Auction insights assessment
8. **Conversion Tracking** - Attribution recommendations
9. **Landing Page Performance** - Pages needing optimization
10. **Top 5 Priority Actions** - Most impactful next steps

Format as clean Markdown."""

QUICK_OUTPUT_FORMAT = """## Output Format
You are strictly required to output valid JSON matching this schema:
{
  "summary": "Executive summary string...",
  "recommendations": [
    {
      "priority": "HIGH" | "MEDIUM" | "LOW",
      "category": "string",
      "issue": "string",
      "action": "string"
    }
  ],
  "cleanReport": "Markdown string..."
}

## Your Task
1. Provide an executive summary (2-3 sentences) of overall account health.
2. Identify performance bottlenecks and issues.
3. Generate actionable, prioritized recommendations.
4. Create a clean Markdown report in the 'cleanReport' field.

Focus on:
- Low-performing campaigns (high spend, low conversions)
- CTR optimization opportunities
- Budget allocation improvements
- Bidding strategy recommendations
- Channel type effectiveness
"""


def _to_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def summarize_campaign(c: CampaignRecord) -> dict:
    return {
        "name": c.name,
        "status": c.status.value,
        "type": c.channel_type,
        "bidding": c.bidding_strategy_type,
        "budget": f"${c.daily_budget:.2f}/day",
        "spend": f"${c.cost:.2f}",
        "impressions": c.impressions,
        "clicks": c.clicks,
        "ctr": f"{c.ctr * 100:.2f}%",
        "conversions": c.conversions,
        "cpc": f"${c.avg_cpc:.2f}",
    }


def build_quick_audit_prompt(
    campaigns: Iterable[CampaignRecord],
    date_range: Optional[DateRange] = None,
) -> str:
    campaigns = list(campaigns)[:QUICK_PROMPT_CAMPAIGN_LIMIT]
    summary = [summarize_campaign(c) for c in campaigns]
    date_context = (
        f"from {date_range.start_date} to {date_range.end_date}"
        if date_range else "from the last 30 days"
    )
    return (
        f"Analyze the following campaign data {date_context} and provide optimization recommendations.\n\n"
        f"## Campaign Data\n{_to_json(summary)}\n\n"
        f"{QUICK_OUTPUT_FORMAT}"
    )


def build_comprehensive_prompt(
    reports: AggregateReportSet,
    date_range: Optional[DateRange] = None,
) -> str:
    date_range = date_range or reports.date_range
    if date_range:
        date_context = f"Analysis period: {date_range.start_date} to {date_range.end_date}"
    else:
        date_context = "Analysis period: Last 90 days"

    parts = [date_context, ""]
    for heading, attr, limit in COMPREHENSIVE_SECTIONS:
        rows = getattr(reports, attr)
        shown = rows if limit is None else rows[:limit]
        parts.append(f"## {heading} ({len(rows)})")
        parts.append(_to_json([r.to_wire() for r in shown]))
        parts.append("")
    parts.append("---")
    parts.append("")
    parts.append(COMPREHENSIVE_TASKS)
    return "\n".join(parts)

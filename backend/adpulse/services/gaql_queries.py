# GAQL templates for the campaign report and the thirteen secondary reports.
# Date-aware templates carry a {date_clause} placeholder; snapshot templates
# describe current state and are sent as-is.

from typing import Optional
from adpulse.models import DateRange, ReportKind

DEFAULT_WINDOW = "LAST_30_DAYS"

CAMPAIGNS = """
SELECT
  campaign.id, campaign.name, campaign.status,
  campaign.advertising_channel_type, campaign_budget.amount_micros,
  campaign_budget.total_amount_micros,
  campaign.bidding_strategy_type,
  campaign.target_cpa.target_cpa_micros,
  campaign.maximize_conversions.target_cpa_micros,
  campaign.target_roas.target_roas,
  campaign.maximize_conversion_value.target_roas,
  metrics.impressions, metrics.clicks, metrics.cost_micros,
  metrics.conversions, metrics.conversions_value,
  metrics.ctr, metrics.average_cpc
FROM campaign
WHERE {date_clause}
AND campaign.status != 'REMOVED'
"""

GEOGRAPHIC = """
SELECT
  campaign.name,
  user_location_view.country_criterion_id,
  metrics.impressions,
  metrics.clicks,
  metrics.conversions,
  metrics.cost_micros
FROM user_location_view
WHERE {date_clause}
"""

DEVICES = """
SELECT
  campaign.name,
  segments.device,
  metrics.impressions,
  metrics.clicks,
  metrics.conversions,
  metrics.cost_micros
FROM campaign
WHERE {date_clause}
AND campaign.status != 'REMOVED'
"""

SEARCH_TERMS = """
SELECT
  search_term_view.search_term,
  campaign.name,
  metrics.impressions,
  metrics.clicks,
  metrics.conversions,
  metrics.cost_micros
FROM search_term_view
WHERE {date_clause}
ORDER BY metrics.impressions DESC
LIMIT 200
"""

AUCTION_INSIGHTS = """
SELECT
  campaign.name,
  metrics.search_impression_share,
  metrics.search_rank_lost_impression_share,
  metrics.search_budget_lost_impression_share,
  metrics.impressions,
  metrics.clicks
FROM campaign
WHERE {date_clause}
AND campaign.status = 'ENABLED'
AND campaign.advertising_channel_type = 'SEARCH'
"""

LANDING_PAGES = """
SELECT
  landing_page_view.unexpanded_final_url,
  metrics.impressions,
  metrics.clicks,
  metrics.conversions
FROM landing_page_view
WHERE {date_clause}
ORDER BY metrics.clicks DESC
LIMIT 50
"""

KEYWORDS = """
SELECT
  campaign.name,
  ad_group.name,
  ad_group_criterion.keyword.text,
  ad_group_criterion.keyword.match_type,
  metrics.impressions,
  metrics.clicks,
  metrics.conversions,
  metrics.cost_micros
FROM keyword_view
WHERE {date_clause}
ORDER BY metrics.impressions DESC
LIMIT 100
"""

SHOPPING_PRODUCTS = """
SELECT
  segments.product_item_id,
  segments.product_title,
  metrics.impressions,
  metrics.clicks,
  metrics.conversions,
  metrics.cost_micros
FROM shopping_performance_view
WHERE {date_clause}
ORDER BY metrics.impressions DESC
LIMIT 50
"""

# ── Snapshot queries (no date range) ─────────────────────────────────

QUALITY_SCORES = """
SELECT
  campaign.name,
  ad_group.name,
  ad_group_criterion.keyword.text,
  ad_group_criterion.quality_info.quality_score,
  ad_group_criterion.quality_info.creative_quality_score,
  ad_group_criterion.quality_info.search_predicted_ctr,
  ad_group_criterion.quality_info.post_click_quality_score
FROM keyword_view
WHERE ad_group_criterion.status = 'ENABLED'
AND ad_group_criterion.quality_info.quality_score IS NOT NULL
LIMIT 50
"""

CONVERSION_ACTIONS = """
SELECT
  conversion_action.name,
  conversion_action.type,
  conversion_action.status,
  conversion_action.category
FROM conversion_action
WHERE conversion_action.status = 'ENABLED'
"""

NEGATIVE_KEYWORDS = """
SELECT
  campaign.name,
  campaign_criterion.keyword.text,
  campaign_criterion.keyword.match_type
FROM campaign_criterion
WHERE campaign_criterion.type = 'KEYWORD'
AND campaign_criterion.negative = TRUE
"""

PRODUCT_GROUPS = """
SELECT
  campaign.name,
  ad_group.name,
  ad_group_criterion.listing_group.type,
  ad_group_criterion.cpc_bid_micros
FROM ad_group_criterion
WHERE ad_group_criterion.type = 'LISTING_GROUP'
AND ad_group_criterion.status != 'REMOVED'
"""

ASSET_GROUPS = """
SELECT
  campaign.name,
  asset_group.name,
  asset_group.status
FROM asset_group
WHERE asset_group.status != 'REMOVED'
"""

# change_event only supports a short look-back, so the window is fixed
CHANGE_HISTORY = """
SELECT
  change_event.change_date_time,
  change_event.change_resource_type,
  change_event.user_email
FROM change_event
WHERE change_event.change_date_time DURING LAST_14_DAYS
ORDER BY change_event.change_date_time DESC
LIMIT 50
"""

REPORT_QUERIES = {
    ReportKind.GEOGRAPHIC: GEOGRAPHIC,
    ReportKind.DEVICES: DEVICES,
    ReportKind.SEARCH_TERMS: SEARCH_TERMS,
    ReportKind.QUALITY_SCORES: QUALITY_SCORES,
    ReportKind.AUCTION_INSIGHTS: AUCTION_INSIGHTS,
    ReportKind.CONVERSION_ACTIONS: CONVERSION_ACTIONS,
    ReportKind.LANDING_PAGES: LANDING_PAGES,
    ReportKind.KEYWORDS: KEYWORDS,
    ReportKind.NEGATIVE_KEYWORDS: NEGATIVE_KEYWORDS,
    ReportKind.SHOPPING_PRODUCTS: SHOPPING_PRODUCTS,
    ReportKind.PRODUCT_GROUPS: PRODUCT_GROUPS,
    ReportKind.ASSET_GROUPS: ASSET_GROUPS,
    ReportKind.CHANGE_HISTORY: CHANGE_HISTORY,
}

SNAPSHOT_KINDS = frozenset({
    ReportKind.QUALITY_SCORES,
    ReportKind.CONVERSION_ACTIONS,
    ReportKind.NEGATIVE_KEYWORDS,
    ReportKind.PRODUCT_GROUPS,
    ReportKind.ASSET_GROUPS,
    ReportKind.CHANGE_HISTORY,
})


def build_date_clause(date_range: Optional[DateRange] = None, default_window: str = DEFAULT_WINDOW) -> str:
    if date_range and date_range.start_date and date_range.end_date:
        return f"segments.date BETWEEN '{date_range.start_date}' AND '{date_range.end_date}'"
    return f"segments.date DURING {default_window}"


def build_campaign_query(date_range: Optional[DateRange] = None) -> str:
    return CAMPAIGNS.format(date_clause=build_date_clause(date_range))


def build_report_query(kind: ReportKind, date_range: Optional[DateRange] = None) -> str:
    kind = ReportKind(kind)
    template = REPORT_QUERIES[kind]
    if kind in SNAPSHOT_KINDS:
        return template
    return template.format(date_clause=build_date_clause(date_range))

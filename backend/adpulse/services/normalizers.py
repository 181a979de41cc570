"""
Field normalization — maps raw googleAds:search rows (nested camelCase JSON)
onto flat typed records.

Every function here is total: missing or malformed input produces defaults
(0 for metrics, "UNKNOWN" for enums), never an exception.
Google returns int64 metrics as JSON strings, so numbers are coerced.
"""

import math
from typing import Any, Callable, Optional
from adpulse.models import (
    AssetGroupRow, AuctionInsightRow, CampaignRecord, CampaignStatus, ChangeEventRow,
    ConversionActionRow, DevicePerformanceRow, GeoPerformanceRow, KeywordRow,
    LandingPageRow, NegativeKeywordRow, ProductGroupRow, QualityScoreRow,
    ReportKind, ReportRow, SearchTermRow, ShoppingProductRow,
)

MICROS_PER_UNIT = 1_000_000
UNKNOWN = "UNKNOWN"


# ── Primitive helpers ─────────────────────────────────────────────────

def dig(row: Any, path: str) -> Any:
    """Follow a dotted path through nested dicts; None if any hop is missing."""
    current = row
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_present(row: Any, *paths: str) -> Any:
    """Value of the first path that is not None."""
    for path in paths:
        value = dig(row, path)
        if value is not None:
            return value
    return None


def to_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return number


def to_int(value: Any) -> int:
    return int(to_number(value))


def micros_to_currency(value: Any) -> float:
    return to_number(value) / MICROS_PER_UNIT


def safe_divide(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0
    return numerator / denominator


def text(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value)


def enum_or_unknown(value: Any) -> str:
    return text(value, UNKNOWN)


# ── Campaigns ─────────────────────────────────────────────────────────

def _campaign_status(value: Any) -> CampaignStatus:
    try:
        return CampaignStatus(value)
    except ValueError:
        return CampaignStatus.REMOVED


def _optional_micros(value: Any) -> Optional[float]:
    if value is None:
        return None
    return micros_to_currency(value)


def _optional_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    return to_number(value)


def normalize_campaign(row: dict) -> CampaignRecord:
    clicks = to_int(dig(row, "metrics.clicks"))
    conversions = to_number(dig(row, "metrics.conversions"))
    return CampaignRecord(
        id=text(dig(row, "campaign.id")),
        name=text(dig(row, "campaign.name")),
        status=_campaign_status(dig(row, "campaign.status")),
        channel_type=enum_or_unknown(dig(row, "campaign.advertisingChannelType")),
        bidding_strategy_type=enum_or_unknown(dig(row, "campaign.biddingStrategyType")),
        daily_budget=micros_to_currency(dig(row, "campaignBudget.amountMicros")),
        total_budget=micros_to_currency(dig(row, "campaignBudget.totalAmountMicros")),
        target_cpa=_optional_micros(first_present(
            row,
            "campaign.targetCpa.targetCpaMicros",
            "campaign.maximizeConversions.targetCpaMicros",
        )),
        target_roas=_optional_number(first_present(
            row,
            "campaign.targetRoas.targetRoas",
            "campaign.maximizeConversionValue.targetRoas",
        )),
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=clicks,
        cost=micros_to_currency(dig(row, "metrics.costMicros")),
        conversions=conversions,
        conversions_value=to_number(dig(row, "metrics.conversionsValue")),
        conversion_rate=safe_divide(conversions, clicks),
        ctr=to_number(dig(row, "metrics.ctr")),
        avg_cpc=micros_to_currency(dig(row, "metrics.averageCpc")),
    )


# ── Secondary reports ─────────────────────────────────────────────────

def normalize_geographic(row: dict) -> GeoPerformanceRow:
    return GeoPerformanceRow(
        country_code=enum_or_unknown(dig(row, "userLocationView.countryCriterionId")),
        campaign_name=text(dig(row, "campaign.name")),
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=to_int(dig(row, "metrics.clicks")),
        cost=micros_to_currency(dig(row, "metrics.costMicros")),
        conversions=to_number(dig(row, "metrics.conversions")),
    )


def normalize_device(row: dict) -> DevicePerformanceRow:
    clicks = to_int(dig(row, "metrics.clicks"))
    conversions = to_number(dig(row, "metrics.conversions"))
    return DevicePerformanceRow(
        device=enum_or_unknown(dig(row, "segments.device")),
        campaign_name=text(dig(row, "campaign.name")),
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=clicks,
        cost=micros_to_currency(dig(row, "metrics.costMicros")),
        conversions=conversions,
        conversion_rate=safe_divide(conversions, clicks) * 100,
    )


def normalize_search_term(row: dict) -> SearchTermRow:
    # search_term_view carries no match type in this projection
    return SearchTermRow(
        search_term=text(dig(row, "searchTermView.searchTerm")),
        campaign_name=text(dig(row, "campaign.name")),
        match_type="N/A",
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=to_int(dig(row, "metrics.clicks")),
        conversions=to_number(dig(row, "metrics.conversions")),
        cost=micros_to_currency(dig(row, "metrics.costMicros")),
    )


def normalize_quality_score(row: dict) -> QualityScoreRow:
    return QualityScoreRow(
        keyword=text(dig(row, "adGroupCriterion.keyword.text")),
        ad_group_name=text(dig(row, "adGroup.name")),
        quality_score=to_int(dig(row, "adGroupCriterion.qualityInfo.qualityScore")),
        expected_ctr=enum_or_unknown(dig(row, "adGroupCriterion.qualityInfo.searchPredictedCtr")),
        ad_relevance=enum_or_unknown(dig(row, "adGroupCriterion.qualityInfo.creativeQualityScore")),
        landing_page_experience=enum_or_unknown(dig(row, "adGroupCriterion.qualityInfo.postClickQualityScore")),
    )


def normalize_auction_insight(row: dict) -> AuctionInsightRow:
    return AuctionInsightRow(
        campaign_name=text(dig(row, "campaign.name")),
        impression_share=to_number(dig(row, "metrics.searchImpressionShare")),
        lost_is_rank=to_number(dig(row, "metrics.searchRankLostImpressionShare")),
        lost_is_budget=to_number(dig(row, "metrics.searchBudgetLostImpressionShare")),
    )


def normalize_conversion_action(row: dict) -> ConversionActionRow:
    return ConversionActionRow(
        name=text(dig(row, "conversionAction.name")),
        type=enum_or_unknown(dig(row, "conversionAction.type")),
        counting_type=enum_or_unknown(dig(row, "conversionAction.countingType")),
        attribution_model=enum_or_unknown(
            dig(row, "conversionAction.attributionModelSettings.attributionModel")
        ),
    )


def normalize_landing_page(row: dict) -> LandingPageRow:
    clicks = to_int(dig(row, "metrics.clicks"))
    conversions = to_number(dig(row, "metrics.conversions"))
    return LandingPageRow(
        url=text(dig(row, "landingPageView.unexpandedFinalUrl")),
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=clicks,
        conversions=conversions,
        conversion_rate=safe_divide(conversions, clicks),
    )


def normalize_keyword(row: dict) -> KeywordRow:
    return KeywordRow(
        keyword=text(dig(row, "adGroupCriterion.keyword.text")),
        ad_group_name=text(dig(row, "adGroup.name")),
        campaign_name=text(dig(row, "campaign.name")),
        match_type=enum_or_unknown(dig(row, "adGroupCriterion.keyword.matchType")),
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=to_int(dig(row, "metrics.clicks")),
        conversions=to_number(dig(row, "metrics.conversions")),
        cost=micros_to_currency(dig(row, "metrics.costMicros")),
    )


def normalize_negative_keyword(row: dict) -> NegativeKeywordRow:
    return NegativeKeywordRow(
        keyword=text(dig(row, "campaignCriterion.keyword.text")),
        campaign_name=text(dig(row, "campaign.name")),
    )


def normalize_shopping_product(row: dict) -> ShoppingProductRow:
    return ShoppingProductRow(
        product_id=text(dig(row, "segments.productItemId")),
        product_title=text(dig(row, "segments.productTitle")),
        impressions=to_int(dig(row, "metrics.impressions")),
        clicks=to_int(dig(row, "metrics.clicks")),
        conversions=to_number(dig(row, "metrics.conversions")),
        cost=micros_to_currency(dig(row, "metrics.costMicros")),
    )


def normalize_product_group(row: dict) -> ProductGroupRow:
    return ProductGroupRow(
        campaign_name=text(dig(row, "campaign.name")),
        ad_group_name=text(dig(row, "adGroup.name")),
        listing_group_type=enum_or_unknown(dig(row, "adGroupCriterion.listingGroup.type")),
        cpc_bid=micros_to_currency(dig(row, "adGroupCriterion.cpcBidMicros")),
    )


def normalize_asset_group(row: dict) -> AssetGroupRow:
    return AssetGroupRow(
        campaign_name=text(dig(row, "campaign.name")),
        asset_group_name=text(dig(row, "assetGroup.name")),
        status=enum_or_unknown(dig(row, "assetGroup.status")),
    )


def normalize_change_event(row: dict) -> ChangeEventRow:
    changed_fields = dig(row, "changeEvent.changedFields")
    if isinstance(changed_fields, list):
        changed_fields = ",".join(str(f) for f in changed_fields)
    return ChangeEventRow(
        change_date_time=text(dig(row, "changeEvent.changeDateTime")),
        resource_type=enum_or_unknown(dig(row, "changeEvent.changeResourceType")),
        user_email=text(dig(row, "changeEvent.userEmail")),
        changed_fields=text(changed_fields),
    )


NORMALIZERS: dict[ReportKind, Callable[[dict], ReportRow]] = {
    ReportKind.GEOGRAPHIC: normalize_geographic,
    ReportKind.DEVICES: normalize_device,
    ReportKind.SEARCH_TERMS: normalize_search_term,
    ReportKind.QUALITY_SCORES: normalize_quality_score,
    ReportKind.AUCTION_INSIGHTS: normalize_auction_insight,
    ReportKind.CONVERSION_ACTIONS: normalize_conversion_action,
    ReportKind.LANDING_PAGES: normalize_landing_page,
    ReportKind.KEYWORDS: normalize_keyword,
    ReportKind.NEGATIVE_KEYWORDS: normalize_negative_keyword,
    ReportKind.SHOPPING_PRODUCTS: normalize_shopping_product,
    ReportKind.PRODUCT_GROUPS: normalize_product_group,
    ReportKind.ASSET_GROUPS: normalize_asset_group,
    ReportKind.CHANGE_HISTORY: normalize_change_event,
}


def normalize_row(kind: ReportKind, row: dict) -> ReportRow:
    return NORMALIZERS[ReportKind(kind)](row)

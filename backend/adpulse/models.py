"""
Request and response DTOs.

Every record is an immutable pydantic model. Field names are snake_case in
Python and camelCase on the wire (the browser client's contract), and both
spellings are accepted on input.
"""

import re
from datetime import date
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import (
    AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field,
    field_validator, model_validator,
)
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _blank_to_none(value):
    return None if value == "" else value


ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _check_iso_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not ISO_DATE_RE.fullmatch(value):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return value


def _check_order(start: Optional[str], end: Optional[str]) -> None:
    if start and end and date.fromisoformat(start) > date.fromisoformat(end):
        raise ValueError("start_date must not be after end_date")


IsoDate = Annotated[str, AfterValidator(_check_iso_date)]
OptionalIsoDate = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_iso_date)]


# ── Credentials & tokens ──────────────────────────────────────────────

class DateRange(WireModel):
    """Inclusive reporting window."""

    start_date: IsoDate
    end_date: IsoDate

    @model_validator(mode="after")
    def _ordered(self) -> "DateRange":
        _check_order(self.start_date, self.end_date)
        return self


class OAuthClient(WireModel):
    refresh_token: str = Field(min_length=1)
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)


class GoogleAdsCredentials(OAuthClient):
    """Full per-request credential set. Never persisted server-side."""

    developer_token: str = Field(min_length=1)
    customer_id: str = Field(min_length=1)
    login_customer_id: Optional[str] = None
    start_date: OptionalIsoDate = None
    end_date: OptionalIsoDate = None

    @model_validator(mode="after")
    def _ordered(self) -> "GoogleAdsCredentials":
        _check_order(self.start_date, self.end_date)
        return self

    @property
    def date_range(self) -> Optional[DateRange]:
        if self.start_date and self.end_date:
            return DateRange(start_date=self.start_date, end_date=self.end_date)
        return None

    @property
    def customer_id_digits(self) -> str:
        return self.customer_id.replace("-", "")

    @property
    def login_customer_id_digits(self) -> Optional[str]:
        if not self.login_customer_id:
            return None
        return self.login_customer_id.replace("-", "")


class AccessToken(WireModel):
    access_token: str
    expires_in: int = 0
    token_type: str = "Bearer"


# ── Campaigns ─────────────────────────────────────────────────────────

class CampaignStatus(str, Enum):
    ENABLED = "ENABLED"
    PAUSED = "PAUSED"
    REMOVED = "REMOVED"


class CampaignRecord(WireModel):
    id: str = ""
    name: str = ""
    status: CampaignStatus = CampaignStatus.REMOVED
    channel_type: str = "UNKNOWN"
    bidding_strategy_type: str = "UNKNOWN"
    daily_budget: float = 0
    total_budget: float = 0
    target_cpa: Optional[float] = None
    target_roas: Optional[float] = None
    impressions: int = 0
    clicks: int = 0
    cost: float = 0
    conversions: float = 0
    conversions_value: float = 0
    conversion_rate: float = 0
    ctr: float = 0
    avg_cpc: float = 0


# ── Report rows ───────────────────────────────────────────────────────

class ReportKind(str, Enum):
    GEOGRAPHIC = "geographic"
    DEVICES = "devices"
    SEARCH_TERMS = "search-terms"
    QUALITY_SCORES = "quality-scores"
    AUCTION_INSIGHTS = "auction-insights"
    CONVERSION_ACTIONS = "conversion-actions"
    LANDING_PAGES = "landing-pages"
    KEYWORDS = "keywords"
    NEGATIVE_KEYWORDS = "negative-keywords"
    SHOPPING_PRODUCTS = "shopping-products"
    PRODUCT_GROUPS = "product-groups"
    ASSET_GROUPS = "asset-groups"
    CHANGE_HISTORY = "change-history"

    @property
    def field_name(self) -> str:
        """Attribute name on AggregateReportSet."""
        return self.value.replace("-", "_")


class GeoPerformanceRow(WireModel):
    country_code: str = "UNKNOWN"
    campaign_name: str = ""
    impressions: int = 0
    clicks: int = 0
    cost: float = 0
    conversions: float = 0


class DevicePerformanceRow(WireModel):
    device: str = "UNKNOWN"
    campaign_name: str = ""
    impressions: int = 0
    clicks: int = 0
    cost: float = 0
    conversions: float = 0
    conversion_rate: float = 0  # percent


class SearchTermRow(WireModel):
    search_term: str = ""
    campaign_name: str = ""
    match_type: str = "N/A"
    impressions: int = 0
    clicks: int = 0
    conversions: float = 0
    cost: float = 0


class QualityScoreRow(WireModel):
    keyword: str = ""
    ad_group_name: str = ""
    quality_score: int = 0
    expected_ctr: str = "UNKNOWN"
    ad_relevance: str = "UNKNOWN"
    landing_page_experience: str = "UNKNOWN"


class AuctionInsightRow(WireModel):
    campaign_name: str = ""
    impression_share: float = 0
    lost_is_rank: float = 0
    lost_is_budget: float = 0


class ConversionActionRow(WireModel):
    name: str = ""
    type: str = "UNKNOWN"
    counting_type: str = "UNKNOWN"
    attribution_model: str = "UNKNOWN"


class LandingPageRow(WireModel):
    url: str = ""
    impressions: int = 0
    clicks: int = 0
    conversions: float = 0
    conversion_rate: float = 0  # fraction


class KeywordRow(WireModel):
    keyword: str = ""
    ad_group_name: str = ""
    campaign_name: str = ""
    match_type: str = "UNKNOWN"
    impressions: int = 0
    clicks: int = 0
    conversions: float = 0
    cost: float = 0


class NegativeKeywordRow(WireModel):
    keyword: str = ""
    campaign_name: str = ""


class ShoppingProductRow(WireModel):
    product_id: str = ""
    product_title: str = ""
    impressions: int = 0
    clicks: int = 0
    conversions: float = 0
    cost: float = 0


class ProductGroupRow(WireModel):
    campaign_name: str = ""
    ad_group_name: str = ""
    listing_group_type: str = "UNKNOWN"
    cpc_bid: float = 0


class AssetGroupRow(WireModel):
    campaign_name: str = ""
    asset_group_name: str = ""
    status: str = "UNKNOWN"


class ChangeEventRow(WireModel):
    change_date_time: str = ""
    resource_type: str = "UNKNOWN"
    user_email: str = ""
    changed_fields: str = ""


ReportRow = Union[
    GeoPerformanceRow, DevicePerformanceRow, SearchTermRow, QualityScoreRow,
    AuctionInsightRow, ConversionActionRow, LandingPageRow, KeywordRow,
    NegativeKeywordRow, ShoppingProductRow, ProductGroupRow, AssetGroupRow,
    ChangeEventRow,
]

REPORT_ROW_MODELS: dict[ReportKind, type[WireModel]] = {
    ReportKind.GEOGRAPHIC: GeoPerformanceRow,
    ReportKind.DEVICES: DevicePerformanceRow,
    ReportKind.SEARCH_TERMS: SearchTermRow,
    ReportKind.QUALITY_SCORES: QualityScoreRow,
    ReportKind.AUCTION_INSIGHTS: AuctionInsightRow,
    ReportKind.CONVERSION_ACTIONS: ConversionActionRow,
    ReportKind.LANDING_PAGES: LandingPageRow,
    ReportKind.KEYWORDS: KeywordRow,
    ReportKind.NEGATIVE_KEYWORDS: NegativeKeywordRow,
    ReportKind.SHOPPING_PRODUCTS: ShoppingProductRow,
    ReportKind.PRODUCT_GROUPS: ProductGroupRow,
    ReportKind.ASSET_GROUPS: AssetGroupRow,
    ReportKind.CHANGE_HISTORY: ChangeEventRow,
}


class AggregateReportSet(WireModel):
    """Every report for one account and one date window."""

    campaigns: tuple[CampaignRecord, ...] = ()
    geographic: tuple[GeoPerformanceRow, ...] = ()
    devices: tuple[DevicePerformanceRow, ...] = ()
    search_terms: tuple[SearchTermRow, ...] = ()
    quality_scores: tuple[QualityScoreRow, ...] = ()
    auction_insights: tuple[AuctionInsightRow, ...] = ()
    conversion_actions: tuple[ConversionActionRow, ...] = ()
    landing_pages: tuple[LandingPageRow, ...] = ()
    keywords: tuple[KeywordRow, ...] = ()
    negative_keywords: tuple[NegativeKeywordRow, ...] = ()
    shopping_products: tuple[ShoppingProductRow, ...] = ()
    product_groups: tuple[ProductGroupRow, ...] = ()
    asset_groups: tuple[AssetGroupRow, ...] = ()
    change_history: tuple[ChangeEventRow, ...] = ()
    date_range: Optional[DateRange] = None
    fetched_at: Optional[str] = None

    def rows(self, kind: ReportKind) -> tuple:
        return getattr(self, kind.field_name)

    def counts(self) -> dict[str, int]:
        counts = {"campaigns": len(self.campaigns)}
        for kind in ReportKind:
            counts[to_camel(kind.field_name)] = len(self.rows(kind))
        return counts


# ── Audit ─────────────────────────────────────────────────────────────

class Priority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AuditRecommendation(WireModel):
    priority: Priority
    category: str = ""
    issue: str = ""
    action: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v


class AuditResult(WireModel):
    summary: str = ""
    recommendations: tuple[AuditRecommendation, ...] = ()
    clean_report: str = ""
    generated_at: Optional[str] = None
    campaign_count: int = 0

"""
Tests for GAQL query rendering.
"""

import pytest
from adpulse.models import DateRange, ReportKind
from adpulse.services.gaql_queries import (
    SNAPSHOT_KINDS, build_campaign_query, build_date_clause, build_report_query,
)

JANUARY = DateRange(start_date="2024-01-01", end_date="2024-01-31")
DATED_KINDS = [k for k in ReportKind if k not in SNAPSHOT_KINDS]


def test_date_clause_with_range():
    assert build_date_clause(JANUARY) == "segments.date BETWEEN '2024-01-01' AND '2024-01-31'"


def test_date_clause_defaults_to_trailing_window():
    assert build_date_clause(None) == "segments.date DURING LAST_30_DAYS"
    assert build_date_clause(None, "LAST_90_DAYS") == "segments.date DURING LAST_90_DAYS"


def test_campaign_query_uses_range_when_given():
    query = build_campaign_query(JANUARY)
    assert "BETWEEN '2024-01-01' AND '2024-01-31'" in query
    assert "LAST_30_DAYS" not in query
    assert "campaign.status != 'REMOVED'" in query


def test_campaign_query_defaults_to_last_30_days():
    assert "segments.date DURING LAST_30_DAYS" in build_campaign_query()


@pytest.mark.parametrize("kind", DATED_KINDS, ids=lambda k: k.value)
def test_dated_reports_honor_range(kind):
    assert "BETWEEN '2024-01-01' AND '2024-01-31'" in build_report_query(kind, JANUARY)
    assert "segments.date DURING LAST_30_DAYS" in build_report_query(kind)


@pytest.mark.parametrize("kind", sorted(SNAPSHOT_KINDS, key=lambda k: k.value), ids=lambda k: k.value)
def test_snapshot_reports_ignore_range(kind):
    with_range = build_report_query(kind, JANUARY)
    assert with_range == build_report_query(kind)
    assert "BETWEEN" not in with_range
    assert "{date_clause}" not in with_range


def test_change_history_keeps_fourteen_day_window():
    query = build_report_query(ReportKind.CHANGE_HISTORY, JANUARY)
    assert "change_event.change_date_time DURING LAST_14_DAYS" in query
    assert "LIMIT 50" in query


@pytest.mark.parametrize("kind, cap", [
    (ReportKind.SEARCH_TERMS, "LIMIT 200"),
    (ReportKind.KEYWORDS, "LIMIT 100"),
    (ReportKind.LANDING_PAGES, "LIMIT 50"),
    (ReportKind.SHOPPING_PRODUCTS, "LIMIT 50"),
    (ReportKind.QUALITY_SCORES, "LIMIT 50"),
])
def test_row_caps(kind, cap):
    assert cap in build_report_query(kind)


def test_accepts_kind_value_string():
    assert build_report_query("devices") == build_report_query(ReportKind.DEVICES)

"""
Tests for request DTO validation: date formats and range ordering.
"""

import pytest
from pydantic import ValidationError
from adpulse.models import AggregateReportSet, DateRange, GoogleAdsCredentials, SearchTermRow

BASE = dict(
    refresh_token="r", client_id="c", client_secret="s",
    developer_token="d", customer_id="123-456-7890",
)


def test_credentials_accept_ordered_range():
    creds = GoogleAdsCredentials(**BASE, start_date="2024-01-01", end_date="2024-01-31")
    assert creds.date_range == DateRange(start_date="2024-01-01", end_date="2024-01-31")


def test_credentials_blank_dates_mean_no_range():
    creds = GoogleAdsCredentials(**BASE, start_date="", end_date="")
    assert creds.date_range is None


def test_credentials_reject_reversed_range():
    with pytest.raises(ValidationError, match="start_date must not be after end_date"):
        GoogleAdsCredentials(**BASE, start_date="2024-03-01", end_date="2024-01-01")


def test_single_date_is_not_ordered_against_nothing():
    creds = GoogleAdsCredentials(**BASE, start_date="2024-03-01")
    assert creds.date_range is None


@pytest.mark.parametrize("value", ["20240101", "2024-1-05", "2024-02-30", "05/01/2024", "2024-01-01\n"])
def test_credentials_reject_non_extended_dates(value):
    with pytest.raises(ValidationError, match="Expected a YYYY-MM-DD date"):
        GoogleAdsCredentials(**BASE, start_date="2024-01-01", end_date=value)


def test_date_range_rejects_basic_format_end():
    with pytest.raises(ValidationError):
        DateRange(start_date="2024-01-05", end_date="20240101")


def test_date_range_single_day():
    dr = DateRange(start_date="2024-06-01", end_date="2024-06-01")
    assert dr.to_wire() == {"startDate": "2024-06-01", "endDate": "2024-06-01"}


def test_counts_use_wire_names():
    reports = AggregateReportSet(search_terms=(SearchTermRow(search_term="boiler"),))
    counts = reports.counts()
    assert counts["campaigns"] == 0
    assert counts["searchTerms"] == 1
    assert counts["changeHistory"] == 0
    assert set(counts) - {"campaigns"} == set(reports.to_wire()) - {"campaigns", "dateRange", "fetchedAt"}

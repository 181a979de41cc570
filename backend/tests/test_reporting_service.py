"""
Tests for the report aggregator: one token exchange, fatal campaign report,
parallel secondary reports with per-report failure absorption.
"""

import json
import anyio
import httpx
import pytest
from adpulse.errors import GoogleAdsAPIError, TokenExchangeError
from adpulse.models import ReportKind
from adpulse.services.reporting_service import ReportingService

TOKEN_BODY = {"access_token": "ya29.token", "expires_in": 3599, "token_type": "Bearer"}


class FakeUpstream:
    """Answers OAuth and googleAds:search calls; counts and fails on demand."""

    def __init__(self, fail_on=None, token_status=200):
        self.fail_on = fail_on
        self.token_status = token_status
        self.token_calls = 0
        self.queries = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "oauth2.googleapis.com":
            self.token_calls += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json=TOKEN_BODY)

        query = json.loads(request.content)["query"]
        self.queries.append(query)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await anyio.sleep(0.01)
        finally:
            self.in_flight -= 1
        if self.fail_on and self.fail_on in query:
            return httpx.Response(500, text="INTERNAL")
        return httpx.Response(200, json={"results": [{"campaign": {"name": "A"}}]})


@pytest.mark.anyio
async def test_aggregate_populates_every_kind(credentials, fake_http):
    upstream = FakeUpstream()
    async with fake_http(upstream) as http:
        reports = await ReportingService(credentials, http_client=http).aggregate()

    assert upstream.token_calls == 1
    assert len(upstream.queries) == 1 + len(ReportKind)
    assert len(reports.campaigns) == 1
    assert all(len(reports.rows(kind)) == 1 for kind in ReportKind)
    assert reports.fetched_at


@pytest.mark.anyio
async def test_secondary_fetches_run_in_parallel(credentials, fake_http):
    upstream = FakeUpstream()
    async with fake_http(upstream) as http:
        await ReportingService(credentials, http_client=http).aggregate()

    assert upstream.max_in_flight > 1


@pytest.mark.anyio
async def test_failing_secondary_report_becomes_empty(credentials, fake_http):
    upstream = FakeUpstream(fail_on="FROM search_term_view")
    async with fake_http(upstream) as http:
        reports = await ReportingService(credentials, http_client=http).aggregate()

    assert reports.search_terms == ()
    for kind in ReportKind:
        if kind is not ReportKind.SEARCH_TERMS:
            assert len(reports.rows(kind)) == 1, kind
    assert len(reports.campaigns) == 1


@pytest.mark.anyio
async def test_campaign_failure_aborts(credentials, fake_http):
    upstream = FakeUpstream(fail_on="campaign_budget.amount_micros")
    async with fake_http(upstream) as http:
        with pytest.raises(GoogleAdsAPIError):
            await ReportingService(credentials, http_client=http).aggregate()

    # secondary reports are never started
    assert len(upstream.queries) == 1


@pytest.mark.anyio
async def test_token_failure_aborts_before_any_query(credentials, fake_http):
    upstream = FakeUpstream(token_status=400)
    async with fake_http(upstream) as http:
        with pytest.raises(TokenExchangeError):
            await ReportingService(credentials, http_client=http).aggregate()

    assert upstream.queries == []


@pytest.mark.anyio
async def test_date_range_reaches_queries(credentials, fake_http):
    creds = credentials.model_copy(update={"start_date": "2024-02-01", "end_date": "2024-02-29"})
    upstream = FakeUpstream()
    async with fake_http(upstream) as http:
        reports = await ReportingService(creds, http_client=http).aggregate()

    assert reports.date_range.start_date == "2024-02-01"
    campaign_query = upstream.queries[0]
    assert "BETWEEN '2024-02-01' AND '2024-02-29'" in campaign_query


@pytest.mark.anyio
async def test_fetch_single_report(credentials, fake_http):
    upstream = FakeUpstream()
    async with fake_http(upstream) as http:
        rows = await ReportingService(credentials, http_client=http).fetch_single_report(ReportKind.ASSET_GROUPS)

    assert upstream.token_calls == 1
    assert rows[0].campaign_name == "A"
    assert "FROM asset_group" in upstream.queries[0]

"""
Tests for the OpenAI-backed audit service. The real SDK is used; only the
HTTP transport is faked.
"""

import json
import httpx
import pytest
from adpulse.errors import AuditParseError, AuditServiceError
from adpulse.models import AggregateReportSet, CampaignRecord, Priority
from adpulse.services.ai_service import AIService


def _completion(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o",
        "choices": [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }],
        "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
    }


class FakeOpenAI:
    def __init__(self, content=None, status=200, body=None):
        self.content = content
        self.status = status
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, text=self.body or "")
        return httpx.Response(200, json=_completion(self.content))

    @property
    def payload(self) -> dict:
        return json.loads(self.requests[-1].content)


CAMPAIGNS = [CampaignRecord(id="1", name="Brand", status="ENABLED", clicks=10, ctr=0.02)]

QUICK_RESPONSE = {
    "summary": "Healthy account with room to grow.",
    "recommendations": [
        {"priority": "high", "category": "Budget", "issue": "Capped", "action": "Raise budget"},
        {"priority": "LOW", "category": "Ads", "issue": "Few assets", "action": "Add headlines"},
    ],
    "cleanReport": "# Audit\n\nAll good.",
}


@pytest.mark.anyio
async def test_quick_audit_requests_json_and_parses(fake_http):
    fake = FakeOpenAI(content=json.dumps(QUICK_RESPONSE))
    async with fake_http(fake) as http:
        result = await AIService(api_key="sk-test", http_client=http).generate_audit(CAMPAIGNS)

    assert result.summary == "Healthy account with room to grow."
    assert [r.priority for r in result.recommendations] == [Priority.HIGH, Priority.LOW]
    assert result.clean_report == "# Audit\n\nAll good."
    assert result.campaign_count == 1
    assert result.generated_at

    request = fake.requests[0]
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-test"
    payload = fake.payload
    assert payload["model"] == "gpt-4o"
    assert payload["temperature"] == 0.7
    assert payload["response_format"] == {"type": "json_object"}
    assert "max_tokens" not in payload
    assert payload["messages"][0] == {
        "role": "system",
        "content": "You are an expert Google Ads auditor. You answer strictly in JSON.",
    }
    assert payload["messages"][1]["role"] == "user"
    assert '"name": "Brand"' in payload["messages"][1]["content"]


@pytest.mark.anyio
async def test_quick_audit_rejects_non_json(fake_http):
    fake = FakeOpenAI(content="Here is your audit: everything is fine.")
    async with fake_http(fake) as http:
        with pytest.raises(AuditParseError, match="Failed to parse OpenAI JSON response"):
            await AIService(api_key="sk-test", http_client=http).generate_audit(CAMPAIGNS)


@pytest.mark.anyio
async def test_quick_audit_rejects_wrong_shape(fake_http):
    fake = FakeOpenAI(content=json.dumps({"summary": "ok", "recommendations": [{"priority": "URGENT"}]}))
    async with fake_http(fake) as http:
        with pytest.raises(AuditParseError):
            await AIService(api_key="sk-test", http_client=http).generate_audit(CAMPAIGNS)


@pytest.mark.anyio
async def test_quick_audit_empty_content(fake_http):
    fake = FakeOpenAI(content=None)
    async with fake_http(fake) as http:
        with pytest.raises(AuditServiceError, match="No response from OpenAI"):
            await AIService(api_key="sk-test", http_client=http).generate_audit(CAMPAIGNS)


@pytest.mark.anyio
async def test_comprehensive_audit_keeps_raw_markdown(fake_http):
    narrative = "# Executive Summary\n\n" + "Spend is concentrated in brand terms. " * 40
    fake = FakeOpenAI(content=narrative)
    reports = AggregateReportSet(campaigns=tuple(CAMPAIGNS))
    async with fake_http(fake) as http:
        result = await AIService(api_key="sk-test", http_client=http).generate_comprehensive_audit(reports)

    assert result.clean_report == narrative
    assert result.summary == narrative[:500]
    assert result.recommendations == ()
    assert result.campaign_count == 1

    payload = fake.payload
    assert payload["max_tokens"] == 4000
    assert payload["temperature"] == 0.7
    assert "response_format" not in payload
    assert payload["messages"][0]["content"].startswith("You are a senior Google Ads strategist.")
    assert "## CAMPAIGNS (1)" in payload["messages"][1]["content"]


@pytest.mark.anyio
async def test_comprehensive_audit_does_not_parse_json(fake_http):
    fake = FakeOpenAI(content="not { json")
    async with fake_http(fake) as http:
        result = await AIService(api_key="sk-test", http_client=http).generate_comprehensive_audit(AggregateReportSet())
    assert result.clean_report == "not { json"


@pytest.mark.anyio
async def test_upstream_error_is_wrapped_and_truncated(fake_http):
    body = json.dumps({"error": {"message": "Incorrect API key provided" + "!" * 500, "type": "invalid_request_error"}})
    fake = FakeOpenAI(status=401, body=body)
    async with fake_http(fake) as http:
        with pytest.raises(AuditServiceError) as excinfo:
            await AIService(api_key="sk-bad", http_client=http).generate_audit(CAMPAIGNS)

    assert excinfo.value.message == f"OpenAI API error: {body[:200]}"
    # no retries
    assert len(fake.requests) == 1


def test_missing_api_key(monkeypatch):
    from adpulse.config import get_settings
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    get_settings.cache_clear()

    with pytest.raises(AuditServiceError, match="OpenAI API key not configured"):
        AIService(api_key=None)

"""
AI Service — OpenAI chat completions for Google Ads audits.

Two modes with different response contracts:
- quick: strict JSON (response_format json_object), parsed into AuditResult
- comprehensive: free-form markdown, stored verbatim as the clean report
"""

import json
import logging
from enum import Enum
from typing import Iterable, Optional
import httpx
from openai import AsyncOpenAI, APIError, APIStatusError
from pydantic import ValidationError
from adpulse.config import get_settings
from adpulse.errors import AuditParseError, AuditServiceError
from adpulse.models import AggregateReportSet, AuditResult, CampaignRecord, DateRange
from adpulse.services.prompts import (
    COMPREHENSIVE_SYSTEM_PROMPT, QUICK_SYSTEM_PROMPT,
    build_comprehensive_prompt, build_quick_audit_prompt,
)
from adpulse.utils import truncate, utcnow_iso

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
COMPREHENSIVE_MAX_TOKENS = 4000
SUMMARY_CHARS = 500
ERROR_BODY_LIMIT = 200


class AuditMode(str, Enum):
    QUICK = "quick"
    COMPREHENSIVE = "comprehensive"


class AIService:
    """OpenAI-backed audit generator. No retries: one failed call fails the audit."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        key = api_key or settings.openai_api_key
        if not key:
            raise AuditServiceError("OpenAI API key not configured. Provide openaiApiKey or set OPENAI_API_KEY.")
        self.model = model or settings.openai_model
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=settings.openai_base_url,
            max_retries=0,
            timeout=settings.http_timeout * 4,
            http_client=http_client,
        )

    async def _completion(self, messages: list[dict], mode: AuditMode) -> str:
        """Call the chat-completion endpoint with the settings for ``mode``."""
        kwargs = dict(
            model=self.model,
            messages=messages,
            temperature=TEMPERATURE,
        )
        if mode is AuditMode.QUICK:
            kwargs["response_format"] = {"type": "json_object"}
        else:
            kwargs["max_tokens"] = COMPREHENSIVE_MAX_TOKENS

        try:
            response = await self._client.chat.completions.create(**kwargs)
        except APIStatusError as e:
            body = truncate(e.response.text, ERROR_BODY_LIMIT)
            logger.error(f"OpenAI API error ({mode.value}): HTTP {e.status_code}")
            raise AuditServiceError(f"OpenAI API error: {body}") from e
        except APIError as e:
            logger.error(f"OpenAI request failed ({mode.value}): {e}")
            raise AuditServiceError(f"OpenAI API error: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def generate_audit(
        self,
        campaigns: Iterable[CampaignRecord],
        date_range: Optional[DateRange] = None,
    ) -> AuditResult:
        """Quick audit: campaign summary in, structured JSON out."""
        campaigns = list(campaigns)
        prompt = build_quick_audit_prompt(campaigns, date_range)
        content = await self._completion(
            [
                {"role": "system", "content": QUICK_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            AuditMode.QUICK,
        )
        if not content:
            raise AuditServiceError("No response from OpenAI")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise AuditParseError("Failed to parse OpenAI JSON response") from e
        if not isinstance(data, dict):
            raise AuditParseError("Failed to parse OpenAI JSON response")

        try:
            return AuditResult.model_validate({
                "summary": data.get("summary", ""),
                "recommendations": data.get("recommendations") or [],
                "clean_report": data.get("cleanReport", ""),
                "generated_at": utcnow_iso(),
                "campaign_count": len(campaigns),
            })
        except ValidationError as e:
            raise AuditParseError(f"OpenAI JSON response did not match the audit schema: {e.error_count()} errors") from e

    async def generate_comprehensive_audit(
        self,
        reports: AggregateReportSet,
        date_range: Optional[DateRange] = None,
    ) -> AuditResult:
        """
        Comprehensive audit: every report in, markdown narrative out.
        The summary is the first 500 characters of the narrative and no
        structured recommendations are extracted.
        """
        logger.info(f"Comprehensive audit data counts: {reports.counts()}")
        prompt = build_comprehensive_prompt(reports, date_range)
        logger.info(f"Comprehensive audit prompt length: {len(prompt)} characters")

        content = await self._completion(
            [
                {"role": "system", "content": COMPREHENSIVE_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            AuditMode.COMPREHENSIVE,
        )
        logger.info(f"Comprehensive audit generated, length: {len(content)}")
        return AuditResult(
            summary=content[:SUMMARY_CHARS],
            recommendations=(),
            clean_report=content,
            generated_at=utcnow_iso(),
            campaign_count=len(reports.campaigns),
        )

"""
Error taxonomy. Each error carries the API error code and HTTP status it maps
to; the handlers in main.py turn them into {success: false, error, message}.
"""

from typing import Optional


class AdPulseError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TokenExchangeError(AdPulseError):
    code = "OAUTH_TOKEN_EXCHANGE_FAILED"
    status_code = 400


class GoogleAdsAPIError(AdPulseError):
    """Non-2xx (or transport failure) from the Google Ads search endpoint."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.code, self.status_code = self._classify(message, upstream_status)

    @staticmethod
    def _classify(message: str, upstream_status: Optional[int]) -> tuple[str, int]:
        if upstream_status == 401 or "UNAUTHENTICATED" in message:
            return "GOOGLE_ADS_UNAUTHENTICATED", 401
        if upstream_status == 403 or "PERMISSION_DENIED" in message:
            return "GOOGLE_ADS_PERMISSION_DENIED", 403
        if upstream_status == 429 or "RESOURCE_EXHAUSTED" in message:
            return "GOOGLE_ADS_QUOTA_EXCEEDED", 429
        return "GOOGLE_ADS_API_ERROR", 502

    @property
    def user_message(self) -> str:
        if self.code == "GOOGLE_ADS_UNAUTHENTICATED":
            return "Invalid or expired access token. Please refresh your credentials."
        if self.code == "GOOGLE_ADS_PERMISSION_DENIED":
            return "Access denied. Check your Developer Token status and account permissions."
        if self.code == "GOOGLE_ADS_QUOTA_EXCEEDED":
            return "Google Ads API quota exhausted. Try again later."
        return self.message


class AuditServiceError(AdPulseError):
    code = "AUDIT_SERVICE_ERROR"
    status_code = 502


class AuditParseError(AuditServiceError):
    code = "AUDIT_PARSE_ERROR"

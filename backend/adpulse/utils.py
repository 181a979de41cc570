"""
Shared utility functions.
"""

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def truncate(text: str, limit: int) -> str:
    """First ``limit`` characters of an upstream body, for error messages."""
    return (text or "")[:limit]


def utcnow_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def safe_error_detail(exc: Exception, fallback: str = "An unexpected error occurred") -> str:
    """
    Return a sanitized error message safe for client consumption.
    Logs the real exception detail server-side.
    """
    logger.error(f"Operation failed: {exc}", exc_info=exc)
    return fallback

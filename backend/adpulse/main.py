"""
AdPulse AI — FastAPI Backend
Pulls Google Ads campaign and report data with per-request credentials and
generates AI optimization audits through OpenAI. Nothing is persisted.
"""

import logging
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from adpulse.config import get_settings
from adpulse.errors import AdPulseError, GoogleAdsAPIError
from adpulse.routers import audit, auth, export, google_ads, reports
from adpulse.utils import safe_error_detail, utcnow_iso

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting AdPulse AI ({settings.environment})...")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="AdPulse AI",
    description="Google Ads reporting and AI-generated optimization audits",
    version="1.0.0",
    lifespan=lifespan,
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request. Bodies carry credentials and are never logged."""

    async def dispatch(self, request: Request, call_next) -> Response:
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Error envelope: {success: false, error, message} ─────────────────

def _error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message, **extra},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    logger.info(f"Validation failed for {request.url.path}: {len(details)} errors")
    return _error_response(400, "VALIDATION_ERROR", "Invalid request data", details=details)


@app.exception_handler(AdPulseError)
async def adpulse_error_handler(request: Request, exc: AdPulseError):
    logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    message = exc.user_message if isinstance(exc, GoogleAdsAPIError) else exc.message
    return _error_response(exc.status_code, exc.code, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    if settings.is_production:
        message = safe_error_detail(exc)
    else:
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        message = str(exc) or "An unexpected error occurred"
    return _error_response(500, "INTERNAL_SERVER_ERROR", message)


# ── Routers ───────────────────────────────────────────────────────────
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(google_ads.router, prefix="/api/google-ads", tags=["Google Ads"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(audit.router, prefix="/api/audit", tags=["Audit"])
app.include_router(export.router, prefix="/api/export", tags=["Export"])


@app.get("/health")
async def health_check():
    return {"status": "ok", "timestamp": utcnow_iso()}

"""
main.py — Fight Analyzer API entry point

The FastAPI application instance lives here. All middleware, routers,
exception handlers and startup/shutdown events are registered in this file.

Usage
-----
Development (auto-reloads on file save):
    cd backend
    uvicorn api.main:app --reload --port 8000

Production (multiple worker processes):
    cd backend
    gunicorn api.main:app -c gunicorn.conf.py

Docs (once running):
    http://localhost:8000/docs    — Swagger UI (interactive)
    http://localhost:8000/redoc   — ReDoc (read-only)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google.genai import errors as genai_errors
from starlette.exceptions import HTTPException

from api.routers.health import router as health_router
from api.v1.router import v1_router
from core.config import settings
from core.exceptions import AnalysisFormatError, EncodingError
from core.logging import configure_logging
from core.middleware import RequestIDMiddleware, TimingMiddleware

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan — startup and shutdown hooks
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ────────────────────────────────────────────────────────────────
    configure_logging(settings.log_level)
    logger.info(
        "Fight Analyzer API starting",
        extra={
            "environment": settings.environment,
            "version": "1.0.0",
            "log_level": settings.log_level,
            "model": settings.gemini_model,
            "allowed_origins": settings.allowed_origins,
        },
    )
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; analysis requests will fail")
    yield
    # ── Shutdown ───────────────────────────────────────────────────────────────
    logger.info("Fight Analyzer API shutting down")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Fight Analyzer API",
    description=(
        "Upload fight footage of two fighters and get a Gemini-generated "
        "breakdown of both, a head-to-head prediction, and a game plan."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Middleware  (add_middleware order matters: last added = outermost = first to
# handle incoming requests)
#
#   Execution order for a request:
#     CORS → RequestID → Timing → route handler
# ---------------------------------------------------------------------------

app.add_middleware(TimingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "status_code": status_code,
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return structured JSON for all HTTP errors (404, 413, 415, 422, etc.)."""
    return _error(request, exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed form fields and files, in the same ErrorResponse shape."""
    fields = ", ".join(
        ".".join(str(part) for part in err["loc"] if part != "body") or "body"
        for err in exc.errors()
    )
    return _error(request, 422, f"Invalid or missing fields: {fields}")


@app.exception_handler(EncodingError)
async def encoding_error_handler(request: Request, exc: EncodingError) -> JSONResponse:
    """An uploaded video could not be read or encoded."""
    return _error(request, 400, str(exc))


@app.exception_handler(AnalysisFormatError)
async def analysis_format_error_handler(request: Request, exc: AnalysisFormatError) -> JSONResponse:
    """Gemini answered with something that is not an AnalysisResult.

    The raw reply was already logged by the client; only the fixed message goes out.
    """
    return _error(request, 502, exc.user_message)


@app.exception_handler(genai_errors.APIError)
async def provider_error_handler(request: Request, exc: genai_errors.APIError) -> JSONResponse:
    """Gemini rejected or failed the request (auth, quota, bad request, outage)."""
    logger.warning(
        "gemini request failed",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "provider_status": exc.code,
            "error": str(exc),
        },
    )
    return _error(request, 502, str(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log the traceback, return clean JSON."""
    logger.error(
        "unhandled exception",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "error": str(exc),
        },
        exc_info=True,
    )
    return _error(request, 500, "Internal server error")


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health_router)            # /health  (unversioned)
app.include_router(v1_router, prefix="/api/v1")


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["root"], summary="API root")
def root():
    """Confirms the API is running. Returns service name, version, and docs URL."""
    return {
        "service": "Fight Analyzer API",
        "version": "1.0.0",
        "docs":    "/docs",
    }

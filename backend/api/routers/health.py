"""api/routers/health.py — Health check endpoint.

Routes (mounted at root, no /api/v1 prefix):
    GET /health        Liveness check — returns env, version, model, timestamp

There is no readiness probe against Gemini: a missing or invalid key only
shows up on the first analysis request. `gemini_key_configured` is a hint.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from core.config import settings

router = APIRouter(tags=["health"])

_VERSION = "1.0.0"


@router.get("/health", summary="Liveness check")
def health():
    """Returns environment, version, configured model, and current UTC timestamp."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": _VERSION,
        "model": settings.gemini_model,
        "gemini_key_configured": bool(settings.gemini_api_key),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

"""
dependencies.py — FastAPI dependency injection

Provides get_analysis_client() for use with Depends() in route handlers.
A new AnalysisClient is built per request from the current settings, so the
Gemini key is read at call time and passed in explicitly.

Usage in a route handler:
    from fastapi import Depends
    from api.dependencies import get_analysis_client
    from services.analysis_client import AnalysisClient

    @router.post("/example")
    async def example(client: AnalysisClient = Depends(get_analysis_client)):
        result = await client.analyze(...)
        ...

Tests swap the client via app.dependency_overrides[get_analysis_client].
"""

from core.config import settings
from services.analysis_client import AnalysisClient


def get_analysis_client() -> AnalysisClient:
    """Return a fresh, stateless AnalysisClient configured from settings."""
    return AnalysisClient(api_key=settings.gemini_api_key, model=settings.gemini_model)

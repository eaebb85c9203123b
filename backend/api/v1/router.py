"""api/v1/router.py — Aggregates all v1 endpoint routers.

Included in api/main.py under the prefix /api/v1, so final paths are:
    /api/v1/analysis
    /api/v1/weight-classes
"""

from fastapi import APIRouter

from api.v1.endpoints import analysis, weight_classes

v1_router = APIRouter()

v1_router.include_router(analysis.router,       prefix="/analysis",       tags=["analysis"])
v1_router.include_router(weight_classes.router, prefix="/weight-classes", tags=["weight-classes"])

"""
schemas — Pydantic request/response schemas

Defines the shape of data going in and out of every API endpoint, and the
shape Gemini is constrained to answer with. FastAPI uses these to validate
inputs and auto-generate the OpenAPI (Swagger) documentation.

Schema classes defined here:
    Analysis:      FighterProfile, HeadToHead, GamePlan, AnalysisResult, MediaPayload
    Weight class:  WeightClass, WeightClassListResponse
    Shared:        ErrorResponse
"""
from schemas.shared import ErrorResponse
from schemas.analysis import AnalysisResult, FighterProfile, GamePlan, HeadToHead, MediaPayload
from schemas.weight_class import WeightClass, WeightClassListResponse

__all__ = [
    "ErrorResponse",
    "AnalysisResult", "FighterProfile", "GamePlan", "HeadToHead", "MediaPayload",
    "WeightClass", "WeightClassListResponse",
]

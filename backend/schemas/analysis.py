"""schemas/analysis.py — Gemini analysis result and media payload schemas.

The wire format is camelCase (what Gemini is told to produce and what the
React frontend reads); Python code uses the snake_case attribute names.

Every field is required and validation is strict (a string "85" is not a
number). AnalysisResult.model_validate_json() therefore either returns a
complete result or raises ValidationError; there is no partial result.
"""

from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    strict=True,
    from_attributes=False,
)


class FighterProfile(BaseModel):
    model_config = _CAMEL

    fighting_style: str
    strengths: list[str]
    weaknesses: list[str]
    fighting_habits: list[str]
    fighting_pattern: list[str]


class HeadToHead(BaseModel):
    model_config = _CAMEL

    prediction: str
    confidence: float = Field(..., ge=0, le=100)  # percent


class GamePlan(BaseModel):
    model_config = _CAMEL

    strategy: str
    key_tactics: list[str]
    drills: list[str]


class AnalysisResult(BaseModel):
    model_config = _CAMEL

    fighter_analysis: FighterProfile
    opponent_analysis: FighterProfile
    head_to_head: HeadToHead
    recommended_game_plan: GamePlan


class MediaPayload(BaseModel):
    """A file's declared MIME type plus its bytes as base64 text."""

    model_config = _CAMEL

    mime_type: str
    data: str

    def decode(self) -> bytes:
        return base64.b64decode(self.data, validate=True)

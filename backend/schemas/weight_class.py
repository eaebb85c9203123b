"""schemas/weight_class.py — Weight-class enumeration schemas.

Used by GET /api/v1/weight-classes to populate the frontend's selector.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WeightClass(BaseModel):
    model_config = ConfigDict(from_attributes=False)

    name: str
    pounds: int
    label: str   # exact string the analysis endpoint accepts, e.g. "Flyweight (125 lbs)"


class WeightClassListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=False)

    data: list[WeightClass]

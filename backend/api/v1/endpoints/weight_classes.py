"""api/v1/endpoints/weight_classes.py — Weight-class enumeration endpoint.

Routes:
    GET /weight-classes     The nine selectable weight classes, lightest first
"""

from __future__ import annotations

from fastapi import APIRouter

from core.constants import WEIGHT_CLASSES, weight_class_label
from schemas.weight_class import WeightClass, WeightClassListResponse

router = APIRouter()


@router.get("", response_model=WeightClassListResponse, summary="List weight classes")
def list_weight_classes():
    return WeightClassListResponse(
        data=[
            WeightClass(name=name, pounds=pounds, label=weight_class_label(name, pounds))
            for name, pounds in WEIGHT_CLASSES
        ]
    )

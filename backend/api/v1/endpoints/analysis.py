"""api/v1/endpoints/analysis.py — Fight analysis endpoint.

Routes:
    POST /analysis      multipart form: fighter_name, opponent_name, weight_class,
                        fighter_video, opponent_video -> AnalysisResult (camelCase)

Upload checks (weight class, video content type, 50 MB limit) happen here,
before AnalysisClient is invoked; the client itself trusts its inputs.
Domain errors raised by the client are turned into JSON by the exception
handlers registered in api/main.py.
"""

from __future__ import annotations

import logging
import os

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.dependencies import get_analysis_client
from core.config import settings
from core.constants import WEIGHT_CLASS_LABELS
from schemas.analysis import AnalysisResult
from schemas.shared import ErrorResponse
from services.analysis_client import AnalysisClient

logger = logging.getLogger(__name__)

router = APIRouter()


def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    pos = upload.file.tell()
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(pos)
    return size


def _check_video(field: str, upload: UploadFile) -> None:
    content_type = upload.content_type or ""
    if not content_type.startswith("video/"):
        raise HTTPException(
            status_code=415,
            detail=f"{field} must be a video file (got '{content_type or 'unknown'}')",
        )
    size = _upload_size(upload)
    if size > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise HTTPException(
            status_code=413,
            detail=f"{field} is larger than the {limit_mb} MB limit",
        )


@router.post(
    "",
    response_model=AnalysisResult,
    summary="Analyze two fighters from video",
    responses={
        400: {"model": ErrorResponse, "description": "A video could not be read"},
        413: {"model": ErrorResponse, "description": "A video exceeds the size limit"},
        415: {"model": ErrorResponse, "description": "An upload is not a video"},
        422: {"model": ErrorResponse, "description": "Unknown weight class"},
        502: {"model": ErrorResponse, "description": "Gemini failed or answered badly"},
    },
)
async def create_analysis(
    fighter_video: UploadFile = File(..., description="Footage of the fighter"),
    opponent_video: UploadFile = File(..., description="Footage of the opponent"),
    weight_class: str = Form(..., description="One of the labels from /weight-classes"),
    fighter_name: str = Form("", description="Name of the fighter the game plan is for"),
    opponent_name: str = Form("", description="Name of the opponent"),
    client: AnalysisClient = Depends(get_analysis_client),
):
    if weight_class not in WEIGHT_CLASS_LABELS:
        raise HTTPException(status_code=422, detail=f"Unknown weight class '{weight_class}'")

    _check_video("fighter_video", fighter_video)
    _check_video("opponent_video", opponent_video)

    logger.info(
        "analysis requested",
        extra={
            "fighter_name": fighter_name,
            "opponent_name": opponent_name,
            "weight_class": weight_class,
            "fighter_video": fighter_video.filename,
            "opponent_video": opponent_video.filename,
        },
    )
    return await client.analyze(
        fighter_name, opponent_name, weight_class, fighter_video, opponent_video
    )

"""services/analysis_client.py — One round-trip fight analysis against Gemini.

Usage:
    client = AnalysisClient(api_key=settings.gemini_api_key)
    result = await client.analyze(
        "Jones", "Smith", "Heavyweight (265 lbs)", fighter_upload, opponent_upload
    )

Flow per call:
    1. encode both videos concurrently (services.encoder)
    2. build the analyst instruction + response schema (services.prompts)
    3. one non-streaming generate_content request with both videos inline
    4. trim the reply text and validate it as schemas.analysis.AnalysisResult

Error contract:
    EncodingError        — from step 1, re-raised as is
    provider errors      — google.genai.errors.APIError etc., re-raised as is
    AnalysisFormatError  — reply is not valid JSON or does not match the schema
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from core.exceptions import AnalysisFormatError
from schemas.analysis import AnalysisResult, MediaPayload
from services.encoder import encode_upload
from services.prompts import build_prompt, build_response_schema, video_label

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


def _media_part(payload: MediaPayload) -> types.Part:
    # Blob takes raw bytes; the SDK base64-encodes them again on the wire.
    return types.Part(
        inline_data=types.Blob(mime_type=payload.mime_type, data=payload.decode())
    )


def parse_analysis(raw_text: Optional[str]) -> AnalysisResult:
    """Parse Gemini's reply text into an AnalysisResult.

    Raises:
        AnalysisFormatError: on malformed JSON or any missing/mistyped field.
            The raw text and the validation error are logged, not raised.
    """
    json_text = (raw_text or "").strip()
    try:
        return AnalysisResult.model_validate_json(json_text)
    except ValidationError as exc:
        logger.error(
            "Failed to parse JSON response from Gemini",
            extra={"raw_text": json_text, "error": str(exc)},
        )
        raise AnalysisFormatError() from exc


class AnalysisClient:
    """Stateless adapter between the API/CLI and Gemini.

    Args:
        api_key: Gemini API key. Not checked here; a missing or bad key
            fails at request time with the provider's own error.
        model: Gemini model name. Must accept video input.
        client: Pre-built google.genai.Client (tests pass a stub). When None
            a fresh client is created for every analyze() call.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        client: Any = None,
    ) -> None:
        self._api_key = api_key or None
        self.model = model
        self._client = client

    def _genai_client(self) -> Any:
        if self._client is not None:
            return self._client
        return genai.Client(api_key=self._api_key)

    def build_contents(
        self,
        fighter_name: str,
        opponent_name: str,
        weight_class: str,
        fighter_payload: MediaPayload,
        opponent_payload: MediaPayload,
    ) -> list[types.Content]:
        parts = [
            types.Part(text=build_prompt(fighter_name, opponent_name, weight_class)),
            types.Part(text=video_label("Fighter", fighter_name)),
            _media_part(fighter_payload),
            types.Part(text=video_label("Opponent", opponent_name)),
            _media_part(opponent_payload),
        ]
        return [types.Content(role="user", parts=parts)]

    def build_config(self, fighter_name: str, opponent_name: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=types.Schema.model_validate(
                build_response_schema(fighter_name, opponent_name)
            ),
        )

    async def analyze(
        self,
        fighter_name: str,
        opponent_name: str,
        weight_class: str,
        fighter_video: Any,
        opponent_video: Any,
    ) -> AnalysisResult:
        """Run one analysis. See module docstring for the error contract."""
        fighter_payload, opponent_payload = await asyncio.gather(
            encode_upload(fighter_video),
            encode_upload(opponent_video),
        )
        return await self.analyze_payloads(
            fighter_name, opponent_name, weight_class, fighter_payload, opponent_payload
        )

    async def analyze_payloads(
        self,
        fighter_name: str,
        opponent_name: str,
        weight_class: str,
        fighter_payload: MediaPayload,
        opponent_payload: MediaPayload,
    ) -> AnalysisResult:
        """Steps 2-4 for videos that are already encoded (the CLI uses encode_path)."""
        logger.info(
            "requesting fight analysis",
            extra={
                "model": self.model,
                "fighter_name": fighter_name,
                "opponent_name": opponent_name,
                "weight_class": weight_class,
                "fighter_video_type": fighter_payload.mime_type,
                "opponent_video_type": opponent_payload.mime_type,
            },
        )

        response = await self._genai_client().aio.models.generate_content(
            model=self.model,
            contents=self.build_contents(
                fighter_name, opponent_name, weight_class, fighter_payload, opponent_payload
            ),
            config=self.build_config(fighter_name, opponent_name),
        )

        result = parse_analysis(response.text)
        logger.info(
            "fight analysis complete",
            extra={"model": self.model, "confidence": result.head_to_head.confidence},
        )
        return result

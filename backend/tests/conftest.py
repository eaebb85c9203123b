"""
conftest.py for backend/tests/

Puts backend/ on sys.path and provides fixtures for a canned Gemini reply,
upload-like file handles, and a stub google.genai client, so no test needs
network access or a real GEMINI_API_KEY.
"""

import json
import os
import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend/ to sys.path (same as running from backend/ does).
_backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _backend_dir not in sys.path:
    sys.path.insert(0, _backend_dir)


class FakeUpload:
    """Minimal stand-in for fastapi.UploadFile: async read() + content_type."""

    def __init__(self, data: bytes, content_type="video/mp4", filename="clip.mp4"):
        self._data = data
        self.content_type = content_type
        self.filename = filename

    async def read(self):
        return self._data


@pytest.fixture
def analysis_dict():
    """A fully schema-conformant AnalysisResult, in Gemini's camelCase."""
    return {
        "fighterAnalysis": {
            "fightingStyle": "Pressure wrestler with heavy top control.",
            "strengths": ["Double-leg takedown", "Cardio"],
            "weaknesses": ["Drops hands when tired"],
            "fightingHabits": ["Circles left after jabbing"],
            "fightingPattern": ["Jab, level change, drive to the fence"],
        },
        "opponentAnalysis": {
            "fightingStyle": "Counter striker.",
            "strengths": ["Check hook", "Footwork"],
            "weaknesses": ["Takedown defence against the cage"],
            "fightingHabits": ["Pulls straight back from pressure"],
            "fightingPattern": ["Feints low, throws high kick"],
        },
        "headToHead": {
            "prediction": "Jones by decision",
            "confidence": 72,
        },
        "recommendedGamePlan": {
            "strategy": "Close distance early and wrestle against the fence.",
            "keyTactics": ["Feint jab into double-leg", "Stay off the centre line"],
            "drills": ["Cage wrestling rounds", "Counter-hook slip drill"],
        },
    }


@pytest.fixture
def analysis_json(analysis_dict):
    return json.dumps(analysis_dict)


@pytest.fixture
def fighter_upload():
    return FakeUpload(b"\x00\x00\x00\x20ftypisom fighter", filename="jones.mp4")


@pytest.fixture
def opponent_upload():
    return FakeUpload(b"\x00\x00\x00\x20ftypisom opponent", content_type="video/quicktime",
                      filename="smith.mov")


@pytest.fixture
def make_genai_client():
    """Return a factory: reply text (or exception) -> stub google.genai.Client."""

    def _make(text=None, error=None):
        client = MagicMock(name="genai.Client")
        if error is not None:
            client.aio.models.generate_content = AsyncMock(side_effect=error)
        else:
            client.aio.models.generate_content = AsyncMock(
                return_value=SimpleNamespace(text=text)
            )
        return client

    return _make

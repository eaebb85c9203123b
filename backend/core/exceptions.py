"""core/exceptions.py — Error taxonomy for the analysis pipeline.

  - EncodingError        : an uploaded file could not be read or base64-encoded
  - AnalysisFormatError  : Gemini answered, but not with a valid AnalysisResult

Provider failures (network, auth, quota, bad request) have no class here.
They arrive as google.genai.errors.APIError (or the transport error) and are
re-raised unchanged.
"""

from __future__ import annotations

ANALYSIS_FORMAT_MESSAGE = (
    "The analysis result was not in the expected format. Please try again."
)


class FightAnalyzerError(Exception):
    """Base class for errors raised by this application."""


class EncodingError(FightAnalyzerError):
    """Raised when a video cannot be turned into an inline media payload."""


class AnalysisFormatError(FightAnalyzerError):
    """Raised when the provider reply does not parse into an AnalysisResult.

    The message is always the fixed, user-facing ANALYSIS_FORMAT_MESSAGE.
    Raw provider text and parser details are logged, never attached here.
    """

    def __init__(self, user_message: str = ANALYSIS_FORMAT_MESSAGE) -> None:
        super().__init__(user_message)
        self.user_message = user_message

"""
Unit tests for services/analysis_client.py.

Gemini is replaced by a stub client (see conftest.make_genai_client), so
these tests check what is sent and how replies are parsed, not model quality.

Run from the project root:
    cd backend
    pytest tests/test_analysis_client.py -v
"""

import asyncio
import json
import logging

import pytest
from google.genai import errors as genai_errors
from google.genai import types

from conftest import FakeUpload
from core.exceptions import ANALYSIS_FORMAT_MESSAGE, AnalysisFormatError, EncodingError
from schemas.analysis import AnalysisResult
from services.analysis_client import AnalysisClient, parse_analysis


def _run(client, fighter_upload, opponent_upload,
         fighter="Jones", opponent="Smith", weight_class="Heavyweight (265 lbs)"):
    return asyncio.run(
        client.analyze(fighter, opponent, weight_class, fighter_upload, opponent_upload)
    )


def _sent(genai_client):
    """kwargs of the single generate_content call."""
    genai_client.aio.models.generate_content.assert_awaited_once()
    return genai_client.aio.models.generate_content.await_args.kwargs


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestAnalyze:

    def test_end_to_end_jones_vs_smith(self, make_genai_client, analysis_json,
                                       fighter_upload, opponent_upload):
        genai_client = make_genai_client(analysis_json)
        client = AnalysisClient(api_key="test-key", client=genai_client)

        result = _run(client, fighter_upload, opponent_upload)

        assert isinstance(result, AnalysisResult)
        assert result.fighter_analysis.strengths == ["Double-leg takedown", "Cardio"]
        assert result.opponent_analysis.fighting_style == "Counter striker."
        assert result.recommended_game_plan.drills
        assert 0 <= result.head_to_head.confidence <= 100

    def test_whitespace_around_reply_is_trimmed(self, make_genai_client, analysis_json,
                                                fighter_upload, opponent_upload):
        client = AnalysisClient("k", client=make_genai_client(f"\n  {analysis_json}\n\n"))
        assert _run(client, fighter_upload, opponent_upload).head_to_head.confidence == 72

    def test_prompt_contains_names_and_weight_class(self, make_genai_client, analysis_json,
                                                    fighter_upload, opponent_upload):
        genai_client = make_genai_client(analysis_json)
        _run(AnalysisClient("k", client=genai_client), fighter_upload, opponent_upload)

        prompt = _sent(genai_client)["contents"][0].parts[0].text
        assert "Jones" in prompt
        assert "Smith" in prompt
        assert "Heavyweight (265 lbs)" in prompt

    def test_empty_names_forwarded_as_is(self, make_genai_client, analysis_json,
                                         fighter_upload, opponent_upload):
        genai_client = make_genai_client(analysis_json)
        _run(AnalysisClient("k", client=genai_client), fighter_upload, opponent_upload,
             fighter="", opponent="")

        parts = _sent(genai_client)["contents"][0].parts
        assert "Fighter 1: \n" in parts[0].text
        assert parts[1].text == "\n\nFighter Video ():"

    def test_both_videos_sent_inline_in_order(self, make_genai_client, analysis_json,
                                              fighter_upload, opponent_upload):
        genai_client = make_genai_client(analysis_json)
        _run(AnalysisClient("k", client=genai_client), fighter_upload, opponent_upload)

        parts = _sent(genai_client)["contents"][0].parts
        assert len(parts) == 5
        assert parts[2].inline_data.mime_type == "video/mp4"
        assert parts[2].inline_data.data == b"\x00\x00\x00\x20ftypisom fighter"
        assert parts[4].inline_data.mime_type == "video/quicktime"
        assert parts[4].inline_data.data == b"\x00\x00\x00\x20ftypisom opponent"

    def test_json_schema_declared(self, make_genai_client, analysis_json,
                                  fighter_upload, opponent_upload):
        genai_client = make_genai_client(analysis_json)
        client = AnalysisClient("k", model="gemini-test", client=genai_client)
        _run(client, fighter_upload, opponent_upload)

        sent = _sent(genai_client)
        assert sent["model"] == "gemini-test"
        config = sent["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert config.response_mime_type == "application/json"
        assert set(config.response_schema.properties) == {
            "fighterAnalysis", "opponentAnalysis", "headToHead", "recommendedGamePlan",
        }

    def test_client_keeps_no_state_between_calls(self, make_genai_client, analysis_json,
                                                 fighter_upload, opponent_upload):
        genai_client = make_genai_client(analysis_json)
        client = AnalysisClient("k", client=genai_client)
        first = _run(client, fighter_upload, opponent_upload)
        second = _run(client, FakeUpload(b"a"), FakeUpload(b"b"))
        assert first == second
        assert genai_client.aio.models.generate_content.await_count == 2


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestAnalyzeErrors:

    def test_missing_confidence_is_format_error(self, make_genai_client, analysis_dict,
                                                fighter_upload, opponent_upload):
        del analysis_dict["headToHead"]["confidence"]
        client = AnalysisClient("k", client=make_genai_client(json.dumps(analysis_dict)))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_missing_substructure_is_format_error(self, make_genai_client, analysis_dict,
                                                  fighter_upload, opponent_upload):
        del analysis_dict["recommendedGamePlan"]
        client = AnalysisClient("k", client=make_genai_client(json.dumps(analysis_dict)))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_wrong_leaf_type_is_format_error(self, make_genai_client, analysis_dict,
                                             fighter_upload, opponent_upload):
        analysis_dict["fighterAnalysis"]["strengths"] = "just one string"
        client = AnalysisClient("k", client=make_genai_client(json.dumps(analysis_dict)))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_confidence_out_of_range_is_format_error(self, make_genai_client, analysis_dict,
                                                     fighter_upload, opponent_upload):
        analysis_dict["headToHead"]["confidence"] = 140
        client = AnalysisClient("k", client=make_genai_client(json.dumps(analysis_dict)))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_string_confidence_is_format_error(self, make_genai_client, analysis_dict,
                                               fighter_upload, opponent_upload):
        analysis_dict["headToHead"]["confidence"] = "85"
        client = AnalysisClient("k", client=make_genai_client(json.dumps(analysis_dict)))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_boolean_confidence_is_format_error(self, make_genai_client, analysis_dict,
                                                fighter_upload, opponent_upload):
        analysis_dict["headToHead"]["confidence"] = True
        client = AnalysisClient("k", client=make_genai_client(json.dumps(analysis_dict)))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_numeric_prediction_is_format_error(self, analysis_dict):
        analysis_dict["headToHead"]["prediction"] = 1
        with pytest.raises(AnalysisFormatError):
            parse_analysis(json.dumps(analysis_dict))

    def test_truncated_json_gives_fixed_message(self, make_genai_client, analysis_json,
                                                fighter_upload, opponent_upload):
        client = AnalysisClient("k", client=make_genai_client(analysis_json[:40]))
        with pytest.raises(AnalysisFormatError) as info:
            _run(client, fighter_upload, opponent_upload)
        assert str(info.value) == ANALYSIS_FORMAT_MESSAGE
        assert info.value.user_message == ANALYSIS_FORMAT_MESSAGE

    def test_raw_reply_is_logged(self, make_genai_client, fighter_upload, opponent_upload,
                                 caplog):
        client = AnalysisClient("k", client=make_genai_client('{"headToHead": '))
        with caplog.at_level(logging.ERROR, logger="services.analysis_client"):
            with pytest.raises(AnalysisFormatError):
                _run(client, fighter_upload, opponent_upload)
        record = next(r for r in caplog.records if r.name == "services.analysis_client")
        assert record.raw_text == '{"headToHead":'

    def test_empty_reply_is_format_error(self, make_genai_client, fighter_upload,
                                         opponent_upload):
        client = AnalysisClient("k", client=make_genai_client(None))
        with pytest.raises(AnalysisFormatError):
            _run(client, fighter_upload, opponent_upload)

    def test_provider_error_propagates_unwrapped(self, make_genai_client, fighter_upload,
                                                 opponent_upload):
        err = genai_errors.ClientError(
            403, {"error": {"code": 403, "message": "API key not valid", "status": "PERMISSION_DENIED"}}
        )
        client = AnalysisClient("bad-key", client=make_genai_client(error=err))
        with pytest.raises(genai_errors.ClientError) as info:
            _run(client, fighter_upload, opponent_upload)
        assert info.value is err

    def test_network_error_propagates_unwrapped(self, make_genai_client, fighter_upload,
                                                opponent_upload):
        err = ConnectionError("connection reset")
        client = AnalysisClient("k", client=make_genai_client(error=err))
        with pytest.raises(ConnectionError) as info:
            _run(client, fighter_upload, opponent_upload)
        assert info.value is err

    def test_encoding_error_stops_before_provider_call(self, make_genai_client, analysis_json,
                                                       fighter_upload):
        genai_client = make_genai_client(analysis_json)
        client = AnalysisClient("k", client=genai_client)
        with pytest.raises(EncodingError):
            _run(client, fighter_upload, FakeUpload(b"x", content_type=None))
        genai_client.aio.models.generate_content.assert_not_awaited()


# ---------------------------------------------------------------------------
# parse_analysis
# ---------------------------------------------------------------------------

class TestParseAnalysis:

    def test_result_serialises_back_to_camel_case(self, analysis_dict, analysis_json):
        result = parse_analysis(analysis_json)
        assert result.model_dump(by_alias=True) == analysis_dict

    def test_markdown_fenced_reply_rejected(self, analysis_json):
        with pytest.raises(AnalysisFormatError):
            parse_analysis(f"```json\n{analysis_json}\n```")

"""services/prompts.py — Instruction text and response schema sent to Gemini.

The response schema is a plain dict in Gemini's tagged schema dialect
(OBJECT / ARRAY / STRING / NUMBER with nested `properties` and `items`).
It mirrors schemas.analysis.AnalysisResult field for field; keep the two in
sync when either changes.
"""

from __future__ import annotations

ANALYST_PROMPT = """
You are an expert MMA analyst and coach. Analyze the two fighters based on the provided videos.

Fighter 1: {fighter_name}
Fighter 2: {opponent_name}
Weight Class: {weight_class}

Please provide a detailed analysis covering:
1. For {fighter_name}: A list of strengths, a list of weaknesses, a list of fighting patterns and habits with excruciating details and a description of their fighting style.
2. For {opponent_name}: A list of strengths, a list of weaknesses, a list of fighting patterns and habits with excruciating details and a description of their fighting style.
3. A head-to-head prediction with a confidence score (from 0 to 100).
4. A recommended game plan for {fighter_name} to defeat {opponent_name}, including an overall strategy, a list of key tactics, and a list of specific drills to practice.

Return the analysis in a structured JSON format according to the provided schema.
"""


def build_prompt(fighter_name: str, opponent_name: str, weight_class: str) -> str:
    """Fill in the analyst instruction. Names go in verbatim, empty or not."""
    return ANALYST_PROMPT.format(
        fighter_name=fighter_name,
        opponent_name=opponent_name,
        weight_class=weight_class,
    )


def video_label(role: str, name: str) -> str:
    """Text part placed right before a video so Gemini knows whose footage it is."""
    return f"\n\n{role} Video ({name}):"


def _string_list(description: str) -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}, "description": description}


def _object(description: str, properties: dict) -> dict:
    return {
        "type": "OBJECT",
        "description": description,
        "properties": properties,
        "required": list(properties),
    }


def _fighter_profile(name: str) -> dict:
    return _object(
        f"Analysis for {name}.",
        {
            "fightingStyle": {"type": "STRING", "description": "Description of fighting style."},
            "strengths": _string_list("List of strengths."),
            "weaknesses": _string_list("List of weaknesses."),
            "fightingHabits": _string_list("List of fighting habits."),
            "fightingPattern": _string_list("List of fighting patterns."),
        },
    )


def build_response_schema(fighter_name: str, opponent_name: str) -> dict:
    """Declare the exact shape of the reply: the four AnalysisResult substructures."""
    return {
        "type": "OBJECT",
        "properties": {
            "fighterAnalysis": _fighter_profile(fighter_name),
            "opponentAnalysis": _fighter_profile(opponent_name),
            "headToHead": _object(
                "Head-to-head comparison and prediction.",
                {
                    "prediction": {
                        "type": "STRING",
                        "description": "Prediction for the fight outcome.",
                    },
                    "confidence": {
                        "type": "NUMBER",
                        "description": "Confidence score in the prediction, from 0 to 100.",
                        "minimum": 0,
                        "maximum": 100,
                    },
                },
            ),
            "recommendedGamePlan": _object(
                f"Recommended game plan for {fighter_name}.",
                {
                    "strategy": {"type": "STRING", "description": "Overall strategy for the fighter."},
                    "keyTactics": _string_list("Specific tactics to employ."),
                    "drills": _string_list("Drills to practice for preparation."),
                },
            ),
        },
        "required": ["fighterAnalysis", "opponentAnalysis", "headToHead", "recommendedGamePlan"],
    }

"""services/report.py — Render an AnalysisResult as Markdown result cards.

Card order matches the frontend: head-to-head, the two fighter profiles,
then the game plan. Empty fighter names are only replaced here, at display
time; the request to Gemini always carries the names as typed.
"""

from __future__ import annotations

from schemas.analysis import AnalysisResult, FighterProfile

FIGHTER_PLACEHOLDER = "Fighter"
OPPONENT_PLACEHOLDER = "Opponent"


def display_name(name: str, fallback: str) -> str:
    return name.strip() or fallback


def _bullets(items: list[str]) -> list[str]:
    if not items:
        return ["- *None identified*"]
    return [f"- {item}" for item in items]


def _profile_card(name: str, profile: FighterProfile) -> str:
    lines = [f"## {name}'s Profile", "", "**Style:**", profile.fighting_style, ""]
    for heading, items in (
        ("Strengths", profile.strengths),
        ("Weaknesses", profile.weaknesses),
        ("Fighting habits", profile.fighting_habits),
        ("Fighting patterns", profile.fighting_pattern),
    ):
        lines.append(f"**{heading}:**")
        lines.extend(_bullets(items))
        lines.append("")
    return "\n".join(lines).rstrip()


def render_report(result: AnalysisResult, fighter_name: str, opponent_name: str) -> str:
    fighter = display_name(fighter_name, FIGHTER_PLACEHOLDER)
    opponent = display_name(opponent_name, OPPONENT_PLACEHOLDER)
    h2h = result.head_to_head
    plan = result.recommended_game_plan

    head_to_head = "\n".join([
        f"## Head-to-Head: {fighter} vs. {opponent}",
        "",
        f"**{h2h.prediction}**",
        "",
        f"Confidence: {h2h.confidence:g}%",
    ])

    game_plan = "\n".join([
        f"## Recommended Game Plan for {fighter}",
        "",
        "**Strategy:**",
        plan.strategy,
        "",
        "**Key tactics:**",
        *_bullets(plan.key_tactics),
        "",
        "**Drills:**",
        *_bullets(plan.drills),
    ])

    return "\n\n".join([
        "# Fight Analysis & Game Plan",
        head_to_head,
        _profile_card(fighter, result.fighter_analysis),
        _profile_card(opponent, result.opponent_analysis),
        game_plan,
    ]) + "\n"

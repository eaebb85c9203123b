"""cli.py — Run one fight analysis on two local video files.

Prints the Markdown report (or the raw JSON with --json). The API key comes
from --api-key, falling back to GEMINI_API_KEY via core.config.

Run from backend/:
    python cli.py --fighter-video jones.mp4 --opponent-video smith.mp4 \\
        --weight-class "Heavyweight (265 lbs)" --fighter-name Jones --opponent-name Smith

Or, once installed:
    fight-analyzer --fighter-video ... --opponent-video ... --weight-class ...
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx
from google.genai import errors as genai_errors

from core.config import settings
from core.constants import WEIGHT_CLASS_LABELS
from core.exceptions import FightAnalyzerError
from core.logging import configure_logging
from services.analysis_client import AnalysisClient
from services.encoder import encode_path
from services.report import render_report

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Analyze two fighters from video with Gemini and print a game plan."
    )
    parser.add_argument("--fighter-video", type=Path, required=True,
                        help="Footage of the fighter the game plan is for")
    parser.add_argument("--opponent-video", type=Path, required=True,
                        help="Footage of the opponent")
    parser.add_argument("--weight-class", required=True, choices=WEIGHT_CLASS_LABELS,
                        help='e.g. "Lightweight (155 lbs)"')
    parser.add_argument("--fighter-name", default="", help="Name of the fighter")
    parser.add_argument("--opponent-name", default="", help="Name of the opponent")
    parser.add_argument("--api-key", default=None,
                        help="Gemini API key (default: GEMINI_API_KEY)")
    parser.add_argument("--model", default=settings.gemini_model,
                        help=f"Gemini model (default: {settings.gemini_model})")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the report here instead of stdout")
    parser.add_argument("--json", action="store_true",
                        help="Emit the raw AnalysisResult JSON instead of Markdown")
    parser.add_argument("--log-level", default="WARNING",
                        help="Log level for JSON logs on stdout (default: WARNING)")
    return parser.parse_args(argv)


def check_size(path: Path, limit: int = settings.max_upload_bytes) -> None:
    """Reject files over the upload limit before anything is read into memory."""
    size = path.stat().st_size
    if size > limit:
        raise FightAnalyzerError(
            f"{path} is {size / (1024 * 1024):.1f} MB; the limit is {limit // (1024 * 1024)} MB"
        )


async def run(args) -> str:
    for path in (args.fighter_video, args.opponent_video):
        try:
            check_size(path)
        except OSError as exc:
            raise FightAnalyzerError(f"Could not read {path}: {exc}") from exc

    fighter_payload, opponent_payload = await asyncio.gather(
        encode_path(args.fighter_video),
        encode_path(args.opponent_video),
    )

    client = AnalysisClient(api_key=args.api_key or settings.gemini_api_key, model=args.model)
    result = await client.analyze_payloads(
        args.fighter_name, args.opponent_name, args.weight_class,
        fighter_payload, opponent_payload,
    )
    if args.json:
        return result.model_dump_json(by_alias=True, indent=2) + "\n"
    return render_report(result, args.fighter_name, args.opponent_name)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, log_to_file=False)

    try:
        report = asyncio.run(run(args))
    except (FightAnalyzerError, genai_errors.APIError, httpx.HTTPError) as exc:
        print(f"Analysis failed: {exc}", file=sys.stderr)
        return 1

    if args.output:
        try:
            args.output.write_text(report, encoding="utf-8")
        except OSError as exc:
            print(f"Could not write report to {args.output}: {exc}", file=sys.stderr)
            return 1
        print(f"Report saved to: {args.output}")
    else:
        sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())

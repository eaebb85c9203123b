"""core/logging.py — Structured JSON logging with rotating file output.

Call configure_logging() once at startup (lifespan in api/main.py, or the
CLI entry point). After that, use standard logging.getLogger(__name__)
throughout the app and pass structured fields via `extra=`.

Output:
  - Console — JSON lines to stdout
  - File    — JSON lines, rotated at 10 MB, 5 backups kept
              Written to logs/app.log relative to the project root.
              The CLI passes log_to_file=False.

Provider replies that fail to parse are logged here in full (raw text +
parser error); this is the only place that detail ends up.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys

from pythonjsonlogger.json import JsonFormatter


_LOG_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "logs")
_LOG_FILE = os.path.join(_LOG_DIR, "app.log")
_MAX_BYTES = 10 * 1024 * 1024   # 10 MB per file
_BACKUP_COUNT = 5                # keep 5 rotated files

# Chatty third-party loggers that would otherwise echo every Gemini request
_QUIET_LOGGERS = ("httpx", "httpcore", "google_genai")


def configure_logging(log_level: str = "DEBUG", log_to_file: bool = True) -> None:
    """Configure the root logger with JSON console (+ optional rotating file) handlers.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
                   Passed from settings.log_level at startup.
        log_to_file: Also write to logs/app.log. Disabled for one-shot CLI runs.
    """
    level = getattr(logging, log_level.upper(), logging.DEBUG)
    formatter = JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

    # ── Console handler ────────────────────────────────────────────────────────
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(console_handler)

    # ── Rotating file handler ──────────────────────────────────────────────────
    if log_to_file:
        os.makedirs(_LOG_DIR, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "log_level": log_level,
            "log_file": os.path.abspath(_LOG_FILE) if log_to_file else None,
        },
    )

"""Logging setup for cyclasar runs.

Everything goes to stderr (stdout may carry the TSV result when the output
path is ``-``), optionally mirrored as JSON lines into a file:

    from cyclasar.util.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_file="cyclasar-run.jsonl")
    get_logger(__name__).info("Loaded %d points", n, extra={"points": n})
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional


_configured = False
_root_logger_name = "cyclasar"

# extra={} fields copied into JSON records
_EXTRA_KEYS = ("mode", "points", "trend", "error_type", "duration_ms")


def _resolve_level(level: Optional[str], default_level: str) -> int:
    if level is None:
        if os.environ.get("CYCLASAR_DEBUG", "").strip() in ("1", "true", "yes"):
            level = "DEBUG"
        else:
            level = os.environ.get("CYCLASAR_LOG_LEVEL", default_level)
    return getattr(logging, level.strip().upper(), logging.INFO)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the pipeline's extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        output: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                output[key] = getattr(record, key)
        if record.exc_info:
            output["traceback"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(output, default=str)


class ConsoleFormatter(logging.Formatter):
    """``[ts] LEVEL [module] message``, level colored on a terminal."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"
        name = record.name.replace(f"{_root_logger_name}.", "")
        line = f"[{ts}] {level} [{name}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return line


def configure_logging(
    *,
    level: Optional[str] = None,
    json_file: Optional[str] = None,
    use_color: bool = True,
    default_level: str = "INFO",
) -> None:
    """Install the stderr handler and, with ``json_file``, a JSON-lines handler.

    Args:
        level: Explicit level name. Without it CYCLASAR_DEBUG=1 selects DEBUG,
               then CYCLASAR_LOG_LEVEL, then ``default_level``.
        json_file: Path the JSON records are appended to.
        use_color: Color the level column when stderr is a terminal.
        default_level: Level used when nothing else sets one; the CLI passes
               WARNING.

    Handlers from a previous call are closed and replaced.
    """
    global _configured

    numeric_level = _resolve_level(level, default_level)

    logger = logging.getLogger(_root_logger_name)
    logger.setLevel(numeric_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(console_handler)

    if json_file:
        try:
            file_handler = logging.FileHandler(json_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to open JSON log file %s: %s", json_file, exc)
        else:
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)

    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` under the ``cyclasar`` namespace, configuring defaults on first use."""
    if not _configured:
        configure_logging()

    if not name.startswith(_root_logger_name):
        name = f"{_root_logger_name}.{'main' if name == '__main__' else name}"
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    *,
    error_type: Optional[str] = None,
    **extra: Any,
) -> None:
    """Log the exception being handled, tagged with ``error_type`` and extra fields."""
    extra_dict = dict(extra)
    if error_type:
        extra_dict["error_type"] = error_type
    logger.exception(message, extra=extra_dict)

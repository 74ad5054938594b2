"""
Centralized Logging

Architectural Intent:
- One handler on the "keel" logger; every module logs via getLogger(__name__)
- Human-readable lines by default, one JSON object per line when requested
- Level comes from CLI flags (--verbose, --debug) or the log_level setting
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import IO, Optional, Union


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def resolve_level(level: Union[int, str]) -> int:
    """Map 'debug' / 'INFO' / 20 to a logging level, WARNING if unknown."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure logging for Keel.

    Args:
        level: Logging level as a number or name.
        json_format: If True, use JSON structured output. Otherwise human-readable.
        stream: Destination stream, stderr by default.
    """
    level = resolve_level(level)
    root = logging.getLogger("keel")
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Stdout logger implementation with structured JSON output."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .logger import Logger, redact_fields

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class StdoutLogger(Logger):
    """Logger that writes one JSON object per record to stdout.

    Each record is also forwarded to the stdlib logger of the same name so
    that pytest's ``caplog`` and any configured handlers see it.
    """

    def __init__(self, level: str = "INFO", name: str | None = None):
        """Initialize stdout logger.

        Args:
            level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR)
            name: Logger name, used as the stdlib logger name as well

        Raises:
            ValueError: If level is not recognized
        """
        self.level = level.upper()
        self.name = name or "secretsync"

        if self.level not in LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {list(LEVELS)}")

        self._stdlib_logger = logging.getLogger(self.name)
        self._stdlib_logger.setLevel(logging.NOTSET)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        if LEVELS[level] < LEVELS[self.level]:
            return

        exc_info = kwargs.pop("exc_info", None)
        fields = redact_fields(kwargs)

        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }
        if fields:
            entry["extra"] = fields

        try:
            print(json.dumps(entry, default=str), file=sys.stdout, flush=True)
        except (TypeError, ValueError) as e:
            print(f"{level}: {message} (JSON serialization failed: {e})", file=sys.stderr, flush=True)

        extra = {"extra": fields} if fields else None
        self._stdlib_logger.log(LEVELS[level], message, exc_info=exc_info, extra=extra)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log("ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

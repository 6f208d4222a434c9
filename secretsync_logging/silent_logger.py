# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""In-memory logger used by tests."""

from typing import Any

from .logger import Logger, redact_fields


class SilentLogger(Logger):
    """Logger that keeps records in memory and prints nothing.

    All levels are captured regardless of ``level``. Structured fields are
    redacted exactly as :class:`StdoutLogger` would redact them, so tests can
    assert on what would have been emitted.
    """

    def __init__(self, level: str = "INFO", name: str | None = None):
        self.level = level.upper()
        self.name = name or "secretsync"
        self.logs: list[dict[str, Any]] = []

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        kwargs.pop("exc_info", None)
        entry: dict[str, Any] = {"level": level, "message": message}
        if kwargs:
            entry["extra"] = redact_fields(kwargs)
        self.logs.append(entry)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def clear_logs(self) -> None:
        """Drop all captured records."""
        self.logs.clear()

    def get_logs(self, level: str | None = None) -> list[dict[str, Any]]:
        """Return captured records, optionally only those at ``level``."""
        if level is None:
            return self.logs
        return [log for log in self.logs if log["level"] == level]

    def has_log(self, message: str, level: str | None = None) -> bool:
        """Return True if any captured message contains ``message``."""
        return any(message in log["message"] for log in self.get_logs(level))

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Abstract logger interface and field redaction shared by all loggers."""

from abc import ABC, abstractmethod
from typing import Any

REDACTED = "***"

# Structured field names that may carry credential material.
SENSITIVE_FIELDS = frozenset({
    "fingerprint",
    "key_content",
    "passphrase",
    "password",
    "private_key",
    "secret",
    "token",
})


def redact_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``fields`` with credential-bearing values masked.

    Matching is case-insensitive on the field name. Nested dictionaries are
    redacted recursively.
    """
    redacted: dict[str, Any] = {}
    for name, value in fields.items():
        if name.lower() in SENSITIVE_FIELDS:
            redacted[name] = REDACTED
        elif isinstance(value, dict):
            redacted[name] = redact_fields(value)
        else:
            redacted[name] = value
    return redacted


class Logger(ABC):
    """Abstract base class for loggers."""

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info-level message.

        Args:
            message: The log message
            **kwargs: Additional structured data to log
        """

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning-level message."""

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error-level message."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug-level message."""

    @abstractmethod
    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error-level message from inside an exception handler."""

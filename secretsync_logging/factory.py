# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Factory function for creating logger instances."""

import os

from .logger import Logger
from .silent_logger import SilentLogger
from .stdout_logger import StdoutLogger


def _default(value: str | None, env_var: str, fallback: str) -> str:
    """Pick an explicit value, then the env var, then the fallback."""
    return value or os.getenv(env_var) or fallback


def create_logger(
    logger_type: str | None = None,
    level: str | None = None,
    name: str | None = None,
) -> Logger:
    """Create a logger instance.

    Args:
        logger_type: "stdout" or "silent". Defaults to LOG_TYPE env or "stdout".
        level: DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL env or "INFO".
        name: Logger name. Defaults to LOG_NAME env or "secretsync".

    Returns:
        Logger instance

    Raises:
        ValueError: If logger_type is not recognized

    Example:
        >>> logger = create_logger(name="secretsync_oracle.provider")
        >>> logger.info("Vault reachable", vault="ocid1.vault.oc1..example")
    """
    logger_type = _default(logger_type, "LOG_TYPE", "stdout").lower()
    level = _default(level, "LOG_LEVEL", "INFO").upper()
    name = _default(name, "LOG_NAME", "secretsync")

    if logger_type == "stdout":
        return StdoutLogger(level=level, name=name)
    if logger_type == "silent":
        return SilentLogger(level=level, name=name)
    raise ValueError(f"Unknown logger_type: {logger_type}. Must be one of: stdout, silent")

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Structured logging for secretsync adapters.

Example:
    >>> from secretsync_logging import create_logger
    >>> logger = create_logger(logger_type="stdout", level="INFO", name="my-adapter")
    >>> logger.info("Client constructed", region="us-ashburn-1")
"""

__version__ = "0.1.0"

from .factory import create_logger
from .logger import Logger, redact_fields
from .silent_logger import SilentLogger
from .stdout_logger import StdoutLogger

__all__ = [
    "__version__",
    "Logger",
    "SilentLogger",
    "StdoutLogger",
    "create_logger",
    "redact_fields",
]

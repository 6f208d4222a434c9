# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Capability interfaces over the vault transport."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import InvalidRetrySettingsError
from .models import RetrySettings

BASE64_CONTENT_TYPE = "BASE64"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration string such as "5s", "1m30s" or "250ms" into seconds.

    Raises:
        ValueError: If value is not a well-formed non-negative duration
    """
    if value == "0":
        return 0.0
    if not value:
        raise ValueError("empty duration")

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(value):
        if match.start() != position:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(value):
        raise ValueError(f"invalid duration {value!r}")
    return total


@dataclass(frozen=True)
class SecretBundle:
    """Content of one secret version as returned by the vault.

    Attributes:
        content_type: Encoding of ``content``; only BASE64 is decodable
        content: Encoded payload
        version_number: Version the bundle belongs to, when reported
        stages: Stages attached to that version
    """
    content_type: Optional[str]
    content: Any
    version_number: Optional[int] = None
    stages: tuple[str, ...] = ()


@dataclass(frozen=True)
class VaultMetadata:
    id: str
    display_name: str = ""
    lifecycle_state: str = ""


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration applied once to both vault clients.

    Attributes:
        max_attempts: Cap on attempts, None for the SDK default
        interval_seconds: Fixed wait between attempts, None for the SDK default
    """
    max_attempts: Optional[int] = None
    interval_seconds: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        """Build a policy from store retry settings.

        Raises:
            InvalidRetrySettingsError: If retry_interval is not a valid duration
        """
        interval = None
        if settings.retry_interval is not None:
            try:
                interval = parse_duration(settings.retry_interval)
            except ValueError as e:
                raise InvalidRetrySettingsError(f"invalid retryInterval: {e}") from e
        return cls(max_attempts=settings.max_retries, interval_seconds=interval)


class VaultSecretClient(ABC):
    """Fetches secret bundles from a vault."""

    @abstractmethod
    def get_bundle(self, vault_id: str, key: str, stage: str = "") -> SecretBundle:
        """Fetch the bundle of secret ``key`` in ``vault_id``.

        Args:
            vault_id: Vault OCID
            key: Secret name
            stage: Stage selector; empty for the service default

        Raises:
            VaultServiceError: If the service rejects the request
            VaultTransportError: If the request fails otherwise
        """


class VaultAdminClient(ABC):
    """Reads vault metadata; used only to validate reachability."""

    @abstractmethod
    def get_vault_metadata(self, vault_id: str) -> VaultMetadata:
        """Fetch metadata of ``vault_id``.

        Raises:
            VaultServiceError: If the service rejects the request
            VaultTransportError: If the request fails otherwise
        """

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Configuration and request data models for the OCI Vault provider."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from .exceptions import InvalidPrincipalTypeError, InvalidRetrySettingsError


class PrincipalType(str, Enum):
    """Identity strategy used to authenticate to the vault service."""

    WORKLOAD = "Workload"
    INSTANCE = "InstancePrincipal"
    USER = "UserPrincipal"


class StoreKind(str, Enum):
    """Scope of the store object that owns the provider configuration."""

    SECRET_STORE = "SecretStore"
    CLUSTER_SECRET_STORE = "ClusterSecretStore"


class ValidationResult(str, Enum):
    READY = "Ready"
    UNKNOWN = "Unknown"
    ERROR = "Error"


class Capabilities(str, Enum):
    READ_ONLY = "ReadOnly"
    WRITE_ONLY = "WriteOnly"
    READ_WRITE = "ReadWrite"


@dataclass(frozen=True)
class SecretFieldRef:
    """Pointer to one field of a key-value object (e.g. a Kubernetes Secret).

    Attributes:
        name: Name of the object holding the value
        key: Field within the object
        namespace: Namespace of the object; only honored for cluster stores
    """
    name: str = ""
    key: str = ""
    namespace: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SecretFieldRef":
        data = data or {}
        return cls(
            name=data.get("name") or "",
            key=data.get("key") or "",
            namespace=data.get("namespace"),
        )


@dataclass(frozen=True)
class AuthConfig:
    """Credentials for the user principal strategy.

    The private key and fingerprint are never held here; only references to
    where they are stored.
    """
    tenancy: str = ""
    user: str = ""
    private_key: SecretFieldRef = SecretFieldRef()
    fingerprint: SecretFieldRef = SecretFieldRef()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthConfig":
        secret_ref = data.get("secretRef") or {}
        return cls(
            tenancy=data.get("tenancy") or "",
            user=data.get("user") or "",
            private_key=SecretFieldRef.from_dict(secret_ref.get("privatekey")),
            fingerprint=SecretFieldRef.from_dict(secret_ref.get("fingerprint")),
        )


@dataclass(frozen=True)
class RetrySettings:
    max_retries: Optional[int] = None
    retry_interval: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RetrySettings":
        max_retries = data.get("maxRetries")
        if max_retries is not None:
            if isinstance(max_retries, bool) or not isinstance(max_retries, int) or max_retries < 0:
                raise InvalidRetrySettingsError(
                    f"maxRetries must be a non-negative integer, got {max_retries!r}"
                )
        return cls(max_retries=max_retries, retry_interval=data.get("retryInterval"))


@dataclass(frozen=True)
class ProviderConfig:
    """Declarative configuration of one OCI Vault secret store.

    Attributes:
        vault: OCID of the vault secrets are read from
        region: OCI region identifier, e.g. "us-ashburn-1"
        principal_type: Identity strategy; None selects user principal when
            auth is present and instance principal otherwise
        auth: User principal credentials, ignored by the other strategies
        retry: Retry policy applied to the vault clients
    """
    vault: str = ""
    region: str = ""
    principal_type: Optional[PrincipalType] = None
    auth: Optional[AuthConfig] = None
    retry: Optional[RetrySettings] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProviderConfig":
        """Build a config from the store resource's provider block.

        Args:
            data: Mapping shaped like ``{"vault": ..., "region": ...,
                "principalType": ..., "auth": {...}, "retrySettings": {...}}``

        Returns:
            ProviderConfig instance

        Raises:
            InvalidPrincipalTypeError: If principalType is not recognized
            InvalidRetrySettingsError: If maxRetries is not a non-negative integer
        """
        principal_type = None
        raw_principal = data.get("principalType")
        if raw_principal:
            try:
                principal_type = PrincipalType(raw_principal)
            except ValueError as e:
                allowed = ", ".join(p.value for p in PrincipalType)
                raise InvalidPrincipalTypeError(
                    f"Unknown principalType: {raw_principal}. Must be one of: {allowed}"
                ) from e

        auth = data.get("auth")
        retry = data.get("retrySettings")
        return cls(
            vault=data.get("vault") or "",
            region=data.get("region") or "",
            principal_type=principal_type,
            auth=AuthConfig.from_dict(auth) if auth is not None else None,
            retry=RetrySettings.from_dict(retry) if retry is not None else None,
        )


@dataclass(frozen=True)
class SecretRequest:
    """Remote reference to one secret.

    Attributes:
        key: Secret name within the vault
        version: Stage selector, e.g. "CURRENT" or "PREVIOUS"; empty for default
        property: JSON path into the decoded payload; empty for the whole payload
    """
    key: str
    version: str = ""
    property: str = ""


@dataclass(frozen=True)
class ValidationOutcome:
    result: ValidationResult
    cause: Optional[BaseException] = None

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Read-only OCI Vault secrets provider for secret synchronization.

The provider resolves OCI credentials from workload identity, instance
principal or a user API key stored in Kubernetes Secrets, fetches secret
bundles from an OCI Vault and optionally extracts one JSON property.

Example:
    >>> from secretsync_oracle import ProviderConfig, SecretRequest, create_secret_provider
    >>> from secretsync_oracle import KubernetesSecretStore
    >>> config = ProviderConfig.from_dict({
    ...     "vault": "ocid1.vault.oc1..example",
    ...     "region": "eu-frankfurt-1",
    ...     "auth": {
    ...         "tenancy": "ocid1.tenancy.oc1..example",
    ...         "user": "ocid1.user.oc1..example",
    ...         "secretRef": {
    ...             "privatekey": {"name": "oci-api-key", "key": "privateKey"},
    ...             "fingerprint": {"name": "oci-api-key", "key": "fingerprint"},
    ...         },
    ...     },
    ... })
    >>> client = create_secret_provider(
    ...     "oracle", config=config, kube_store=KubernetesSecretStore(), namespace="apps"
    ... )
    >>> client.get_secret(SecretRequest(key="db-credentials", property="password"))
"""

from .clients import RetryPolicy, SecretBundle, VaultAdminClient, VaultMetadata, VaultSecretClient
from .credentials import CredentialContext, CredentialResolver
from .exceptions import (
    ConfigurationError,
    CredentialSetupError,
    InvalidPrincipalTypeError,
    InvalidRetrySettingsError,
    InvalidSecretSelectorError,
    MissingAuthError,
    MissingFingerprintError,
    MissingKeyError,
    MissingNamespaceError,
    MissingPrivateKeyError,
    MissingRegionError,
    MissingSecretNameError,
    MissingTenancyError,
    MissingUserError,
    MissingVaultError,
    OperationNotImplementedError,
    ProviderClosedError,
    ProviderNotInitializedError,
    ProviderSetupError,
    SecretDecodeError,
    SecretError,
    SecretFetchError,
    SecretMapUnmarshalError,
    SecretNotFoundError,
    SecretProviderError,
    UnexpectedBundleContentError,
    VaultServiceError,
    VaultTransportError,
)
from .factory import create_secret_provider, get_provider, register_provider
from .kube_store import KubernetesSecretStore
from .models import (
    AuthConfig,
    Capabilities,
    PrincipalType,
    ProviderConfig,
    RetrySettings,
    SecretFieldRef,
    SecretRequest,
    StoreKind,
    ValidationOutcome,
    ValidationResult,
)
from .oracle_provider import OracleVaultProvider, ProviderState
from .provider import SecretsProvider
from .secret_loader import KeyValueStore, SecretReferenceLoader
from .store_validation import validate_store

__all__ = [
    "AuthConfig",
    "Capabilities",
    "ConfigurationError",
    "CredentialContext",
    "CredentialResolver",
    "CredentialSetupError",
    "InvalidPrincipalTypeError",
    "InvalidRetrySettingsError",
    "InvalidSecretSelectorError",
    "KeyValueStore",
    "KubernetesSecretStore",
    "MissingAuthError",
    "MissingFingerprintError",
    "MissingKeyError",
    "MissingNamespaceError",
    "MissingPrivateKeyError",
    "MissingRegionError",
    "MissingSecretNameError",
    "MissingTenancyError",
    "MissingUserError",
    "MissingVaultError",
    "OperationNotImplementedError",
    "OracleVaultProvider",
    "PrincipalType",
    "ProviderClosedError",
    "ProviderConfig",
    "ProviderNotInitializedError",
    "ProviderSetupError",
    "ProviderState",
    "RetryPolicy",
    "RetrySettings",
    "SecretBundle",
    "SecretDecodeError",
    "SecretError",
    "SecretFetchError",
    "SecretFieldRef",
    "SecretMapUnmarshalError",
    "SecretNotFoundError",
    "SecretProviderError",
    "SecretReferenceLoader",
    "SecretRequest",
    "SecretsProvider",
    "StoreKind",
    "UnexpectedBundleContentError",
    "ValidationOutcome",
    "ValidationResult",
    "VaultAdminClient",
    "VaultMetadata",
    "VaultSecretClient",
    "VaultServiceError",
    "VaultTransportError",
    "create_secret_provider",
    "get_provider",
    "register_provider",
    "validate_store",
]

__version__ = "0.1.0"

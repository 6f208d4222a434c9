# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Static validation of a store's provider configuration."""

from typing import Optional

from .exceptions import (
    InvalidSecretSelectorError,
    MissingAuthError,
    MissingRegionError,
    MissingSecretNameError,
    MissingTenancyError,
    MissingUserError,
    MissingVaultError,
)
from .models import PrincipalType, ProviderConfig, SecretFieldRef, StoreKind


def validate_secret_selector(
    ref: SecretFieldRef,
    store_kind: StoreKind,
    store_namespace: Optional[str] = None,
) -> None:
    """Check that a secret reference is allowed for the store's scope.

    Cluster stores must name the namespace of every referenced object.
    Namespaced stores may only reference their own namespace.

    Raises:
        InvalidSecretSelectorError: If the reference violates the scope rules
    """
    if store_kind == StoreKind.CLUSTER_SECRET_STORE:
        if ref.namespace is None:
            raise InvalidSecretSelectorError("cluster scope requires namespace")
        return

    if ref.namespace is not None and ref.namespace != store_namespace:
        raise InvalidSecretSelectorError("namespace not allowed with namespaced SecretStore")


def _validate_ref(label: str, ref: SecretFieldRef, store_kind: StoreKind, store_namespace: Optional[str]) -> None:
    if not ref.name:
        raise MissingSecretNameError(f"{label}.name cannot be empty")
    if not ref.key:
        raise MissingSecretNameError(f"{label}.key cannot be empty")
    validate_secret_selector(ref, store_kind, store_namespace)


def validate_store(
    config: ProviderConfig,
    store_kind: StoreKind = StoreKind.SECRET_STORE,
    store_namespace: Optional[str] = None,
) -> None:
    """Validate a provider configuration without contacting any service.

    Args:
        config: Provider configuration to check
        store_kind: Scope of the store holding the configuration
        store_namespace: Namespace of a namespaced store

    Raises:
        ConfigurationError: The first problem found, checked in the order
            vault, region, auth, user, tenancy, private key, fingerprint
    """
    if not config.vault:
        raise MissingVaultError("vault cannot be empty")

    if not config.region:
        raise MissingRegionError("region cannot be empty")

    if config.principal_type in (PrincipalType.WORKLOAD, PrincipalType.INSTANCE):
        return

    auth = config.auth
    if auth is None:
        if config.principal_type == PrincipalType.USER:
            raise MissingAuthError("auth cannot be empty for principalType UserPrincipal")
        return

    if not auth.user:
        raise MissingUserError("user cannot be empty")

    if not auth.tenancy:
        raise MissingTenancyError("tenant cannot be empty")

    _validate_ref("privateKey", auth.private_key, store_kind, store_namespace)
    _validate_ref("fingerprint", auth.fingerprint, store_kind, store_namespace)

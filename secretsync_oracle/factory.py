# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Registry and factory for secrets providers."""

from typing import Any

from .exceptions import SecretProviderError
from .oracle_provider import OracleVaultProvider
from .provider import SecretsProvider

_providers: dict[str, type[SecretsProvider]] = {
    "oracle": OracleVaultProvider,
}


def register_provider(provider_type: str, provider_class: type[SecretsProvider]) -> None:
    """Register a provider class under ``provider_type``.

    Raises:
        SecretProviderError: If the name is already taken by another class
    """
    existing = _providers.get(provider_type)
    if existing is not None and existing is not provider_class:
        raise SecretProviderError(f"Provider type already registered: {provider_type}")
    _providers[provider_type] = provider_class


def get_provider(provider_type: str) -> SecretsProvider:
    """Return a template instance of the provider registered as ``provider_type``.

    Raises:
        SecretProviderError: If provider_type is unknown
    """
    if provider_type not in _providers:
        raise SecretProviderError(
            f"Unknown provider type: {provider_type}. "
            f"Available: {', '.join(sorted(_providers))}"
        )
    return _providers[provider_type]()


def create_secret_provider(provider_type: str, **kwargs: Any) -> SecretsProvider:
    """Create a constructed client of the given provider type.

    Args:
        provider_type: Registered provider name, e.g. "oracle"
        **kwargs: Arguments for the provider's ``new_client``

    Returns:
        Constructed SecretsProvider

    Raises:
        SecretProviderError: If provider_type is unknown or construction fails

    Example:
        >>> client = create_secret_provider(
        ...     "oracle",
        ...     config=ProviderConfig(vault="ocid1.vault.oc1..example", region="us-phoenix-1"),
        ...     kube_store=None,
        ...     namespace="default",
        ... )
    """
    return get_provider(provider_type).new_client(**kwargs)

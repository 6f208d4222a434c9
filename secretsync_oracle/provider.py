# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Base secrets provider interface expected by the synchronization framework."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .models import Capabilities, ProviderConfig, SecretRequest, StoreKind, ValidationOutcome
from .secret_loader import KeyValueStore


class SecretsProvider(ABC):
    """Abstract base class for secret store backends.

    A provider instance is either a template, used to validate store
    configuration and to build clients, or a client returned by
    :meth:`new_client` that talks to one configured store.
    """

    @abstractmethod
    def new_client(
        self,
        config: ProviderConfig,
        kube_store: Optional[KeyValueStore],
        namespace: str,
        store_kind: StoreKind = StoreKind.SECRET_STORE,
    ) -> "SecretsProvider":
        """Build a client for one store.

        Args:
            config: Provider configuration of the store
            kube_store: Store used to read referenced credential material
            namespace: Namespace of the caller
            store_kind: Scope of the store

        Returns:
            A constructed provider

        Raises:
            ConfigurationError: If a required field is missing
            ProviderSetupError: If credentials or clients cannot be set up
        """

    @abstractmethod
    def validate_store(
        self,
        config: ProviderConfig,
        store_kind: StoreKind = StoreKind.SECRET_STORE,
        store_namespace: Optional[str] = None,
    ) -> None:
        """Check a store configuration statically.

        Raises:
            ConfigurationError: If the configuration is invalid
        """

    @abstractmethod
    def capabilities(self) -> Capabilities:
        """Return whether the provider can read, write or both."""

    @abstractmethod
    def get_secret(self, request: SecretRequest) -> bytes:
        """Retrieve one secret value.

        Raises:
            ProviderNotInitializedError: If called on a template instance
            SecretNotFoundError: If the requested property does not exist
            SecretProviderError: If retrieval fails
        """

    @abstractmethod
    def get_secret_map(self, request: SecretRequest) -> dict[str, bytes]:
        """Retrieve a secret holding a JSON object and split it into fields."""

    @abstractmethod
    def get_all_secrets(self, find: Any) -> dict[str, bytes]:
        """Retrieve every secret matching ``find``."""

    @abstractmethod
    def push_secret(self, value: bytes, remote_ref: Any) -> None:
        """Write a secret to the store."""

    @abstractmethod
    def delete_secret(self, remote_ref: Any) -> None:
        """Delete a secret from the store."""

    @abstractmethod
    def validate(self) -> ValidationOutcome:
        """Check that the configured store is reachable. Never raises."""

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by this provider."""

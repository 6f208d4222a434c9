# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Loading credential material referenced from a key-value object store."""

from abc import ABC, abstractmethod
from typing import Mapping

from secretsync_logging import create_logger

from .exceptions import MissingNamespaceError, MissingSecretNameError, SecretFetchError
from .models import SecretFieldRef, StoreKind

logger = create_logger(name="secretsync_oracle.secret_loader")


class KeyValueStore(ABC):
    """Read access to named key/value objects, e.g. Kubernetes Secrets."""

    @abstractmethod
    def get(self, namespace: str, name: str) -> Mapping[str, str]:
        """Return the decoded key/value pairs of the object ``namespace/name``.

        Raises:
            Exception: Any failure to read the object; callers wrap it
        """


class SecretReferenceLoader:
    """Resolves a :class:`SecretFieldRef` to the string it points at."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, ref: SecretFieldRef, namespace: str, store_kind: StoreKind) -> str:
        """Read the value named by ``ref``.

        Only cluster-scoped stores may point at another namespace, and for them
        the namespace is mandatory. Namespaced stores always read from the
        caller's own namespace.

        Args:
            ref: Reference to the object and field
            namespace: Namespace of the caller
            store_kind: Scope of the calling store

        Returns:
            The field value, or an empty string if the object lacks the field

        Raises:
            MissingSecretNameError: If ref does not name an object
            MissingNamespaceError: If a cluster store ref has no namespace
            SecretFetchError: If the object cannot be read
        """
        if not ref.name:
            raise MissingSecretNameError("invalid SecretStore resource: missing secret name in secret reference")

        object_namespace = namespace
        if store_kind == StoreKind.CLUSTER_SECRET_STORE:
            if ref.namespace is None:
                raise MissingNamespaceError("invalid ClusterSecretStore: missing namespace in secret reference")
            object_namespace = ref.namespace

        try:
            data = self.store.get(object_namespace, ref.name)
        except Exception as e:
            logger.warning(
                "Failed to read referenced secret object",
                namespace=object_namespace,
                name=ref.name,
                error=str(e),
            )
            raise SecretFetchError(f"could not fetch secret {object_namespace}/{ref.name}: {e}") from e

        return data.get(ref.key, "") or ""

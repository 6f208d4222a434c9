# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Kubernetes Secret backed key-value store."""

import base64
from typing import Any, Mapping

from secretsync_logging import create_logger

from .exceptions import SecretProviderError
from .secret_loader import KeyValueStore

logger = create_logger(name="secretsync_oracle.kube_store")


class KubernetesSecretStore(KeyValueStore):
    """Reads Kubernetes Secrets through the CoreV1 API.

    When no API object is supplied, the in-cluster service account config is
    loaded, falling back to the local kubeconfig for development.

    Attributes:
        api: CoreV1Api-compatible object exposing ``read_namespaced_secret``
    """

    def __init__(self, api: Any = None):
        """Initialize the store.

        Args:
            api: Optional pre-built CoreV1Api instance

        Raises:
            SecretProviderError: If the kubernetes client is not installed
        """
        if api is None:
            try:
                from kubernetes import client, config
            except ImportError as e:
                raise SecretProviderError(
                    "The kubernetes client is not installed. "
                    "Install with: pip install secretsync-oracle[kubernetes]"
                ) from e

            try:
                config.load_incluster_config()
            except config.ConfigException:
                logger.debug("Not running in a cluster, loading kubeconfig")
                config.load_kube_config()
            api = client.CoreV1Api()

        self.api = api

    def get(self, namespace: str, name: str) -> Mapping[str, str]:
        secret = self.api.read_namespaced_secret(name=name, namespace=namespace)
        data = secret.data or {}
        return {key: base64.b64decode(value).decode("utf-8") for key, value in data.items()}

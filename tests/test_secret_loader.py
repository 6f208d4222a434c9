# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Tests for loading secret references from the key-value store."""

import pytest

from fakes import NAMESPACE, InMemoryKeyValueStore
from secretsync_oracle import (
    MissingNamespaceError,
    MissingSecretNameError,
    SecretFetchError,
    SecretFieldRef,
    SecretReferenceLoader,
    StoreKind,
)


@pytest.fixture
def store():
    return InMemoryKeyValueStore({
        (NAMESPACE, "creds"): {"privateKey": "pem-data", "empty": ""},
        ("infra", "creds"): {"privateKey": "infra-pem"},
    })


@pytest.fixture
def loader(store):
    return SecretReferenceLoader(store)


class TestSecretReferenceLoader:
    """Test suite for SecretReferenceLoader."""

    def test_load_from_caller_namespace(self, loader, store):
        ref = SecretFieldRef(name="creds", key="privateKey")

        assert loader.load(ref, NAMESPACE, StoreKind.SECRET_STORE) == "pem-data"
        assert store.reads == [(NAMESPACE, "creds")]

    def test_namespaced_store_ignores_ref_namespace(self, loader, store):
        """Test that a namespaced store never reads another namespace."""
        ref = SecretFieldRef(name="creds", key="privateKey", namespace="infra")

        assert loader.load(ref, NAMESPACE, StoreKind.SECRET_STORE) == "pem-data"
        assert store.reads == [(NAMESPACE, "creds")]

    def test_cluster_store_uses_ref_namespace(self, loader, store):
        ref = SecretFieldRef(name="creds", key="privateKey", namespace="infra")

        assert loader.load(ref, NAMESPACE, StoreKind.CLUSTER_SECRET_STORE) == "infra-pem"
        assert store.reads == [("infra", "creds")]

    def test_cluster_store_requires_namespace(self, loader, store):
        ref = SecretFieldRef(name="creds", key="privateKey")

        with pytest.raises(MissingNamespaceError, match="missing namespace"):
            loader.load(ref, NAMESPACE, StoreKind.CLUSTER_SECRET_STORE)
        assert store.reads == []

    def test_missing_secret_name(self, loader, store):
        with pytest.raises(MissingSecretNameError):
            loader.load(SecretFieldRef(key="privateKey"), NAMESPACE, StoreKind.SECRET_STORE)
        assert store.reads == []

    def test_absent_field_is_empty_string(self, loader):
        ref = SecretFieldRef(name="creds", key="fingerprint")
        assert loader.load(ref, NAMESPACE, StoreKind.SECRET_STORE) == ""

    def test_present_but_empty_field(self, loader):
        ref = SecretFieldRef(name="creds", key="empty")
        assert loader.load(ref, NAMESPACE, StoreKind.SECRET_STORE) == ""

    def test_unreadable_object_wraps_cause(self, loader):
        ref = SecretFieldRef(name="missing", key="privateKey")

        with pytest.raises(SecretFetchError, match=f"could not fetch secret {NAMESPACE}/missing") as exc_info:
            loader.load(ref, NAMESPACE, StoreKind.SECRET_STORE)
        assert isinstance(exc_info.value.__cause__, LookupError)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Tests for provider configuration models."""

import dataclasses

import pytest

from secretsync_oracle import (
    InvalidPrincipalTypeError,
    InvalidRetrySettingsError,
    PrincipalType,
    ProviderConfig,
    SecretFieldRef,
)


class TestProviderConfigFromDict:
    """Test suite for ProviderConfig.from_dict."""

    def test_full_user_principal_config(self):
        """Test parsing a store block with auth and retry settings."""
        config = ProviderConfig.from_dict({
            "vault": "ocid1.vault.oc1..v",
            "region": "uk-london-1",
            "principalType": "UserPrincipal",
            "auth": {
                "tenancy": "ocid1.tenancy.oc1..t",
                "user": "ocid1.user.oc1..u",
                "secretRef": {
                    "privatekey": {"name": "oci", "key": "key", "namespace": "infra"},
                    "fingerprint": {"name": "oci", "key": "fp"},
                },
            },
            "retrySettings": {"maxRetries": 3, "retryInterval": "2s"},
        })

        assert config.vault == "ocid1.vault.oc1..v"
        assert config.region == "uk-london-1"
        assert config.principal_type is PrincipalType.USER
        assert config.auth.tenancy == "ocid1.tenancy.oc1..t"
        assert config.auth.user == "ocid1.user.oc1..u"
        assert config.auth.private_key == SecretFieldRef(name="oci", key="key", namespace="infra")
        assert config.auth.fingerprint == SecretFieldRef(name="oci", key="fp")
        assert config.retry.max_retries == 3
        assert config.retry.retry_interval == "2s"

    def test_minimal_config_defaults(self):
        """Test that absent fields become empty strings or None."""
        config = ProviderConfig.from_dict({})

        assert config.vault == ""
        assert config.region == ""
        assert config.principal_type is None
        assert config.auth is None
        assert config.retry is None

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Workload", PrincipalType.WORKLOAD),
            ("InstancePrincipal", PrincipalType.INSTANCE),
            ("UserPrincipal", PrincipalType.USER),
            ("", None),
        ],
    )
    def test_principal_types(self, raw, expected):
        config = ProviderConfig.from_dict({"principalType": raw})
        assert config.principal_type is expected

    def test_unknown_principal_type(self):
        with pytest.raises(InvalidPrincipalTypeError, match="Unknown principalType: Federated"):
            ProviderConfig.from_dict({"principalType": "Federated"})

    def test_auth_without_secret_refs(self):
        """Test that missing secret refs parse as empty references."""
        config = ProviderConfig.from_dict({"auth": {"tenancy": "t", "user": "u"}})

        assert config.auth.private_key == SecretFieldRef()
        assert config.auth.fingerprint.name == ""

    @pytest.mark.parametrize("max_retries", [-1, "3", 1.5, True])
    def test_invalid_max_retries(self, max_retries):
        with pytest.raises(InvalidRetrySettingsError):
            ProviderConfig.from_dict({"retrySettings": {"maxRetries": max_retries}})

    def test_config_is_immutable(self):
        config = ProviderConfig(vault="v", region="r")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.vault = "other"

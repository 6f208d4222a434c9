# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Vault capability clients backed by the OCI Python SDK."""

import time
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from secretsync_logging import create_logger

from .clients import RetryPolicy, SecretBundle, VaultAdminClient, VaultMetadata, VaultSecretClient
from .exceptions import SecretProviderError, VaultServiceError, VaultTransportError, sanitize_error_message

if TYPE_CHECKING:
    from .credentials import CredentialContext

logger = create_logger(name="secretsync_oracle.oci_clients")

T = TypeVar("T")


def import_oci() -> Any:
    """Import the OCI SDK, raising a provider error with an install hint."""
    try:
        import oci
    except ImportError as e:
        raise SecretProviderError(
            "The OCI SDK is not installed. "
            "Install with: pip install secretsync-oracle[oci]"
        ) from e
    return oci


def _call(oci: Any, operation: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    try:
        return fn(*args, **kwargs)
    except oci.exceptions.ServiceError as e:
        raise VaultServiceError(operation, e.code, message=e.message or "", status=e.status) from e
    except Exception as e:
        raise VaultTransportError(f"{operation} failed: {sanitize_error_message(str(e))}") from e


class OciVaultSecretClient(VaultSecretClient):
    """Reads secret bundles through ``oci.secrets.SecretsClient``."""

    def __init__(self, client: Any, oci: Any):
        self.client = client
        self._oci = oci

    def get_bundle(self, vault_id: str, key: str, stage: str = "") -> SecretBundle:
        kwargs = {"stage": stage} if stage else {}
        response = _call(
            self._oci,
            "GetSecretBundleByName",
            self.client.get_secret_bundle_by_name,
            secret_name=key,
            vault_id=vault_id,
            **kwargs,
        )
        bundle = response.data
        content = bundle.secret_bundle_content
        return SecretBundle(
            content_type=getattr(content, "content_type", None),
            content=getattr(content, "content", None),
            version_number=bundle.version_number,
            stages=tuple(bundle.stages or ()),
        )


class OciVaultAdminClient(VaultAdminClient):
    """Reads vault metadata through ``oci.key_management.KmsVaultClient``."""

    def __init__(self, client: Any, oci: Any):
        self.client = client
        self._oci = oci

    def get_vault_metadata(self, vault_id: str) -> VaultMetadata:
        response = _call(self._oci, "GetVault", self.client.get_vault, vault_id)
        vault = response.data
        return VaultMetadata(
            id=vault.id,
            display_name=vault.display_name or "",
            lifecycle_state=vault.lifecycle_state or "",
        )


def _fixed_interval_strategy(oci: Any, interval_seconds: float, checker_container: Any) -> Any:
    class FixedIntervalRetryStrategy(oci.retry.retry.ExponentialBackoffRetryStrategyBase):
        """Waits exactly ``base_sleep_time_seconds`` between attempts."""

        def do_sleep(self, attempt, exception):
            time.sleep(self.base_sleep_time_seconds)

    return FixedIntervalRetryStrategy(
        base_sleep_time_seconds=interval_seconds,
        exponent_growth_factor=1,
        max_wait_between_calls_seconds=interval_seconds,
        checker_container=checker_container,
    )


def to_retry_strategy(oci: Any, policy: RetryPolicy) -> Any:
    """Translate a :class:`RetryPolicy` into an OCI retry strategy.

    Retryability is decided by the SDK's service error and attempt checks,
    taken from the strategy ``RetryStrategyBuilder`` produces. When an
    interval is set, the wait between attempts is that interval, unjittered.
    """
    options: dict[str, Any] = {"service_error_check": True}
    if policy.max_attempts is not None:
        options["max_attempts_check"] = True
        options["max_attempts"] = max(policy.max_attempts, 1)
    strategy = oci.retry.RetryStrategyBuilder(**options).get_retry_strategy()

    if policy.interval_seconds is None:
        return strategy
    return _fixed_interval_strategy(oci, policy.interval_seconds, strategy.checkers)


def build_oci_clients(
    context: "CredentialContext",
    region: str,
    retry_policy: Optional[RetryPolicy] = None,
) -> tuple[VaultSecretClient, VaultAdminClient]:
    """Build the secrets and vault-admin clients bound to ``region``.

    Args:
        context: Resolved credentials shared by both clients
        region: OCI region both clients are pinned to
        retry_policy: Optional retry policy applied to both clients

    Returns:
        Tuple of (secret client, admin client)
    """
    oci = import_oci()

    config = dict(context.config)
    config["region"] = region

    signer = context.signer
    if signer is None:
        signer = oci.signer.Signer(
            tenancy=config["tenancy"],
            user=config["user"],
            fingerprint=config["fingerprint"],
            private_key_file_location=None,
            private_key_content=config["key_content"],
        )

    kwargs: dict[str, Any] = {"signer": signer}
    if retry_policy is not None:
        kwargs["retry_strategy"] = to_retry_strategy(oci, retry_policy)

    secrets_client = oci.secrets.SecretsClient(config, **kwargs)
    vault_client = oci.key_management.KmsVaultClient(config, **kwargs)

    logger.debug("Built OCI vault clients", region=region, principal=context.principal_type.value)
    return OciVaultSecretClient(secrets_client, oci), OciVaultAdminClient(vault_client, oci)

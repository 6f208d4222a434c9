# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""OCI Vault secrets provider."""

from enum import Enum
from typing import Any, Callable, Optional

from secretsync_logging import create_logger

from .clients import RetryPolicy, VaultAdminClient, VaultSecretClient
from .codec import decode_bundle, extract_property, to_secret_map
from .credentials import CredentialContext, CredentialResolver
from .exceptions import (
    MissingRegionError,
    MissingVaultError,
    OperationNotImplementedError,
    ProviderClosedError,
    ProviderNotInitializedError,
    ProviderSetupError,
    SecretFetchError,
    VaultServiceError,
)
from .models import (
    Capabilities,
    ProviderConfig,
    SecretFieldRef,
    SecretRequest,
    StoreKind,
    ValidationOutcome,
    ValidationResult,
)
from .oci_clients import build_oci_clients
from .provider import SecretsProvider
from .secret_loader import KeyValueStore, SecretReferenceLoader
from .store_validation import validate_store

logger = create_logger(name="secretsync_oracle.provider")

NOT_AUTHENTICATED = "NotAuthenticated"
NOT_AUTHORIZED_OR_NOT_FOUND = "NotAuthorizedOrNotFound"

ClientBuilder = Callable[
    [CredentialContext, str, Optional[RetryPolicy]],
    tuple[VaultSecretClient, VaultAdminClient],
]


class ProviderState(str, Enum):
    UNCONSTRUCTED = "Unconstructed"
    CONSTRUCTED = "Constructed"
    CLOSED = "Closed"


def classify_validation_error(error: BaseException) -> ValidationResult:
    """Map a failed vault metadata read to a validation result.

    ``NotAuthorizedOrNotFound`` yields UNKNOWN: reading vault metadata needs a
    different policy grant than reading secrets, so the identity may still be
    able to read secrets. Every other failure, including unrecognized codes,
    yields ERROR.
    """
    if isinstance(error, VaultServiceError):
        if error.code == NOT_AUTHENTICATED:
            return ValidationResult.ERROR
        if error.code == NOT_AUTHORIZED_OR_NOT_FOUND:
            return ValidationResult.UNKNOWN
    return ValidationResult.ERROR


class OracleVaultProvider(SecretsProvider):
    """Read-only secrets provider for OCI Vault.

    A freshly created instance is a template in the UNCONSTRUCTED state; it
    can validate store configuration and build clients. :meth:`new_client`
    returns a separate CONSTRUCTED instance bound to one vault.

    Example:
        >>> config = ProviderConfig.from_dict({
        ...     "vault": "ocid1.vault.oc1..example",
        ...     "region": "us-ashburn-1",
        ...     "principalType": "InstancePrincipal",
        ... })
        >>> client = OracleVaultProvider().new_client(config, None, "default")
        >>> password = client.get_secret(SecretRequest(key="db", property="password"))

    Attributes:
        resolver: Credential resolver used by :meth:`new_client`
        client_builder: Callable building the vault clients from credentials
        vault: OCID of the bound vault (empty on a template)
        state: Lifecycle state
    """

    def __init__(
        self,
        resolver: Optional[CredentialResolver] = None,
        client_builder: Optional[ClientBuilder] = None,
    ):
        self.resolver = resolver or CredentialResolver()
        self.client_builder = client_builder or build_oci_clients
        self.vault = ""
        self.secret_client: Optional[VaultSecretClient] = None
        self.admin_client: Optional[VaultAdminClient] = None
        self.state = ProviderState.UNCONSTRUCTED

    def new_client(
        self,
        config: ProviderConfig,
        kube_store: Optional[KeyValueStore],
        namespace: str,
        store_kind: StoreKind = StoreKind.SECRET_STORE,
    ) -> "OracleVaultProvider":
        if not config.vault:
            raise MissingVaultError("missing Vault")

        if not config.region:
            raise MissingRegionError("missing Region")

        def lookup(ref: SecretFieldRef) -> str:
            if kube_store is None:
                raise SecretFetchError("no key-value store available to read secret references")
            return SecretReferenceLoader(kube_store).load(ref, namespace, store_kind)

        try:
            retry_policy = RetryPolicy.from_settings(config.retry) if config.retry is not None else None
            context = self.resolver.resolve(config.principal_type, config.region, config.auth, lookup)
            secret_client, admin_client = self.client_builder(context, config.region, retry_policy)
        except Exception as e:
            logger.error(
                "Failed to set up OCI Vault client",
                vault=config.vault,
                region=config.region,
                error=str(e),
            )
            raise ProviderSetupError(f"cannot setup new oracle client: {e}") from e

        client = OracleVaultProvider(resolver=self.resolver, client_builder=self.client_builder)
        client.vault = config.vault
        client.secret_client = secret_client
        client.admin_client = admin_client
        client.state = ProviderState.CONSTRUCTED
        logger.info(
            "Initialized OCI Vault provider",
            vault=config.vault,
            region=config.region,
            principal=context.principal_type.value,
        )
        return client

    def validate_store(
        self,
        config: ProviderConfig,
        store_kind: StoreKind = StoreKind.SECRET_STORE,
        store_namespace: Optional[str] = None,
    ) -> None:
        validate_store(config, store_kind, store_namespace)

    def capabilities(self) -> Capabilities:
        return Capabilities.READ_ONLY

    def _require_constructed(self) -> None:
        if self.state == ProviderState.CLOSED:
            raise ProviderClosedError("provider oracle is closed")
        if self.state != ProviderState.CONSTRUCTED or self.secret_client is None or self.admin_client is None:
            raise ProviderNotInitializedError("provider oracle is not initialized")

    def _fetch_payload(self, request: SecretRequest) -> bytes:
        self._require_constructed()
        bundle = self.secret_client.get_bundle(self.vault, request.key, request.version)
        return decode_bundle(bundle)

    def get_secret(self, request: SecretRequest) -> bytes:
        """Retrieve a secret, or one property of its JSON payload.

        Args:
            request: Secret name, stage and optional property path

        Returns:
            Raw payload when ``request.property`` is empty, otherwise the
            string form of the selected value

        Raises:
            ProviderNotInitializedError: If called on a template or closed provider
            UnexpectedBundleContentError: If the bundle is not base64 content
            MissingKeyError: If the property does not exist
            VaultServiceError: If the vault rejects the request
        """
        payload = self._fetch_payload(request)
        return extract_property(payload, request.property, request.key)

    def get_secret_map(self, request: SecretRequest) -> dict[str, bytes]:
        """Retrieve a secret whose payload is a flat JSON object of strings.

        The whole payload is always parsed; ``request.property`` is not applied.

        Raises:
            SecretMapUnmarshalError: If the payload is not such an object
        """
        return to_secret_map(self._fetch_payload(request))

    def get_all_secrets(self, find: Any) -> dict[str, bytes]:
        raise OperationNotImplementedError("GetAllSecrets not implemented")

    def push_secret(self, value: bytes, remote_ref: Any) -> None:
        raise OperationNotImplementedError("PushSecret not implemented")

    def delete_secret(self, remote_ref: Any) -> None:
        raise OperationNotImplementedError("DeleteSecret not implemented")

    def validate(self) -> ValidationOutcome:
        """Check that the vault is reachable with the resolved identity.

        Returns:
            READY on success, UNKNOWN when the identity may only lack the
            permission to read vault metadata, ERROR otherwise. The failure
            is returned as the outcome's cause.
        """
        try:
            self._require_constructed()
        except ProviderNotInitializedError as e:
            return ValidationOutcome(ValidationResult.ERROR, e)

        try:
            self.admin_client.get_vault_metadata(self.vault)
        except Exception as e:
            result = classify_validation_error(e)
            logger.warning("OCI Vault validation failed", vault=self.vault, result=result.value, error=str(e))
            return ValidationOutcome(result, e)

        return ValidationOutcome(ValidationResult.READY)

    def close(self) -> None:
        self.state = ProviderState.CLOSED

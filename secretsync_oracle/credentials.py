# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Credential resolution for the supported OCI principal types.

Three strategies are supported:

- Workload identity: the pod's service account is exchanged for a resource
  principal token. The SDK only reads its parameters from the process
  environment, so the variables are set, used and removed under a process-wide
  lock.
- Instance principal: the node's instance identity is used. No environment
  access.
- User principal: an API signing key and its fingerprint are read from
  secret references and combined with the configured tenancy and user.
"""

import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Optional

from secretsync_logging import create_logger

from .exceptions import (
    CredentialSetupError,
    MissingAuthError,
    MissingFingerprintError,
    MissingPrivateKeyError,
    MissingTenancyError,
    MissingUserError,
)
from .models import AuthConfig, PrincipalType, SecretFieldRef
from .oci_clients import import_oci

logger = create_logger(name="secretsync_oracle.credentials")

RESOURCE_PRINCIPAL_VERSION_ENV = "OCI_RESOURCE_PRINCIPAL_VERSION"
RESOURCE_PRINCIPAL_VERSION = "2.2"
RESOURCE_PRINCIPAL_REGION_ENV = "OCI_RESOURCE_PRINCIPAL_REGION"

# Guards the process environment for every provider instance in the process.
_workload_identity_lock = threading.Lock()

SecretLookup = Callable[[SecretFieldRef], str]


@dataclass(frozen=True)
class CredentialContext:
    """Resolved credentials shared read-only by the vault clients.

    Attributes:
        principal_type: Strategy that produced this context
        region: Region the credentials were resolved for
        config: SDK configuration mapping (holds key material for user principals)
        signer: SDK request signer, or None when it is built from ``config``
    """
    principal_type: PrincipalType
    region: str
    config: Mapping[str, str] = field(default_factory=dict, repr=False)
    signer: Any = field(default=None, repr=False)


@contextmanager
def workload_identity_environment(region: str) -> Iterator[None]:
    """Expose the workload identity parameters for the duration of the block.

    Both variables are removed on exit, whether or not the block raised.
    """
    with _workload_identity_lock:
        try:
            os.environ[RESOURCE_PRINCIPAL_VERSION_ENV] = RESOURCE_PRINCIPAL_VERSION
            os.environ[RESOURCE_PRINCIPAL_REGION_ENV] = region
            yield
        finally:
            os.environ.pop(RESOURCE_PRINCIPAL_VERSION_ENV, None)
            os.environ.pop(RESOURCE_PRINCIPAL_REGION_ENV, None)


def discover_workload_identity() -> Any:
    oci = import_oci()
    return oci.auth.signers.get_oke_workload_identity_resource_principal_signer()


def discover_instance_identity() -> Any:
    oci = import_oci()
    return oci.auth.signers.InstancePrincipalsSecurityTokenSigner()


class CredentialResolver:
    """Turns a principal selection into a :class:`CredentialContext`.

    Attributes:
        workload_discovery: Callable returning a signer from ambient workload
            identity; called with the environment prepared
        instance_discovery: Callable returning a signer from instance identity
    """

    def __init__(
        self,
        workload_discovery: Optional[Callable[[], Any]] = None,
        instance_discovery: Optional[Callable[[], Any]] = None,
    ):
        self.workload_discovery = workload_discovery or discover_workload_identity
        self.instance_discovery = instance_discovery or discover_instance_identity

    def resolve(
        self,
        principal_type: Optional[PrincipalType],
        region: str,
        auth: Optional[AuthConfig],
        lookup: SecretLookup,
    ) -> CredentialContext:
        """Resolve credentials for the selected principal.

        Without an explicit principal type, the user principal is used when
        ``auth`` is given and the instance principal otherwise.

        Args:
            principal_type: Selected strategy, or None
            region: Region the credentials are for
            auth: User principal settings
            lookup: Reads the value behind a secret reference

        Returns:
            CredentialContext for the vault clients

        Raises:
            CredentialSetupError: If identity discovery fails, user principal
                settings are incomplete or a secret reference cannot be read;
                the specific error is the ``__cause__``
        """
        if principal_type == PrincipalType.WORKLOAD:
            return self._resolve_workload(region)
        if principal_type == PrincipalType.INSTANCE or (principal_type is None and auth is None):
            return self._resolve_instance(region)

        try:
            if auth is None:
                raise MissingAuthError("user principal requires an auth configuration")
            return self._resolve_user(region, auth, lookup)
        except Exception as e:
            raise CredentialSetupError(f"user principal setup failed: {e}") from e

    def _resolve_workload(self, region: str) -> CredentialContext:
        with workload_identity_environment(region):
            try:
                signer = self.workload_discovery()
            except Exception as e:
                raise CredentialSetupError(f"workload identity discovery failed: {e}") from e

        logger.info("Resolved workload identity credentials", region=region)
        return CredentialContext(PrincipalType.WORKLOAD, region, {"region": region}, signer)

    def _resolve_instance(self, region: str) -> CredentialContext:
        try:
            signer = self.instance_discovery()
        except Exception as e:
            raise CredentialSetupError(f"instance principal discovery failed: {e}") from e

        logger.info("Resolved instance principal credentials", region=region)
        return CredentialContext(PrincipalType.INSTANCE, region, {"region": region}, signer)

    def _resolve_user(self, region: str, auth: AuthConfig, lookup: SecretLookup) -> CredentialContext:
        private_key = lookup(auth.private_key)
        if not private_key:
            raise MissingPrivateKeyError("missing PrivateKey")

        fingerprint = lookup(auth.fingerprint)
        if not fingerprint:
            raise MissingFingerprintError("missing Fingerprint")

        if not auth.user:
            raise MissingUserError("missing User ID")

        if not auth.tenancy:
            raise MissingTenancyError("missing Tenancy ID")

        logger.info("Resolved user principal credentials", region=region, user=auth.user)
        config = {
            "tenancy": auth.tenancy,
            "user": auth.user,
            "region": region,
            "fingerprint": fingerprint,
            "key_content": private_key,
        }
        return CredentialContext(PrincipalType.USER, region, config)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Exceptions for the OCI Vault secret provider."""

import re

_REQUEST_ID_PATTERN = re.compile(r"(opc-request-id[\"']?\s*[:=]\s*[\"']?)[A-Za-z0-9/._-]+", re.IGNORECASE)


def sanitize_error_message(message: str) -> str:
    """Redact per-request identifiers from an SDK error message.

    Request ids change on every call; leaving them in makes otherwise
    identical errors look distinct to the framework's status reporting.
    """
    return _REQUEST_ID_PATTERN.sub(r"\g<1><redacted>", message)


class SecretError(Exception):
    """Base exception for secret management errors."""
    pass


class SecretNotFoundError(SecretError):
    """Raised when a requested secret or secret field does not exist."""
    pass


class SecretProviderError(SecretError):
    """Raised when the secret provider encounters an error."""
    pass


class ConfigurationError(SecretProviderError):
    """A required configuration field is missing or invalid."""
    pass


class MissingVaultError(ConfigurationError):
    pass


class MissingRegionError(ConfigurationError):
    pass


class MissingTenancyError(ConfigurationError):
    pass


class MissingUserError(ConfigurationError):
    pass


class MissingPrivateKeyError(ConfigurationError):
    pass


class MissingFingerprintError(ConfigurationError):
    pass


class MissingSecretNameError(ConfigurationError):
    """A secret reference does not name the object to read."""
    pass


class MissingNamespaceError(ConfigurationError):
    """A cluster-scoped store referenced a secret without a namespace."""
    pass


class MissingAuthError(ConfigurationError):
    """User principal selected without an auth block."""
    pass


class InvalidPrincipalTypeError(ConfigurationError):
    pass


class InvalidRetrySettingsError(ConfigurationError):
    pass


class InvalidSecretSelectorError(ConfigurationError):
    """A secret reference is not allowed for the store's scope."""
    pass


class CredentialSetupError(SecretProviderError):
    """Identity discovery for the selected principal failed."""
    pass


class ProviderSetupError(SecretProviderError):
    """Building a provider client failed; the cause is chained."""
    pass


class SecretFetchError(SecretProviderError):
    """A referenced key-value object could not be read."""
    pass


class UnexpectedBundleContentError(SecretProviderError):
    """The secret bundle is not base64 encoded content."""
    pass


class SecretDecodeError(SecretProviderError):
    """The bundle claims base64 content that does not decode."""
    pass


class MissingKeyError(SecretNotFoundError):
    """The property path does not exist in the secret payload."""

    def __init__(self, key: str):
        super().__init__(f"missing Key in secret: {key}")
        self.key = key


class SecretMapUnmarshalError(SecretProviderError):
    """The secret payload is not a flat JSON object of strings."""
    pass


class ProviderNotInitializedError(SecretProviderError):
    """Operation called on a provider that has no vault clients."""
    pass


class ProviderClosedError(ProviderNotInitializedError):
    pass


class OperationNotImplementedError(SecretProviderError, NotImplementedError):
    """Raised by the write and listing operations of the read-only provider."""
    pass


class VaultServiceError(SecretProviderError):
    """The vault service answered a request with an error.

    Attributes:
        operation: Name of the capability operation that failed
        code: Service error code, e.g. "NotAuthenticated"
        status: HTTP status returned by the service, when known
    """

    def __init__(self, operation: str, code: str, message: str = "", status: int | None = None):
        self.operation = operation
        self.code = code
        self.status = status
        self.message = sanitize_error_message(message)
        detail = f"{operation} failed with {code}"
        if status is not None:
            detail += f" ({status})"
        if self.message:
            detail += f": {self.message}"
        super().__init__(detail)


class VaultTransportError(SecretProviderError):
    """The vault request failed without a service error response."""
    pass

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Decoding secret bundles and extracting fields from their payloads."""

import base64
import binascii
import json
from functools import lru_cache
from typing import Any

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JSONPathError

from .clients import BASE64_CONTENT_TYPE, SecretBundle
from .exceptions import (
    MissingKeyError,
    SecretDecodeError,
    SecretMapUnmarshalError,
    UnexpectedBundleContentError,
)


def decode_bundle(bundle: SecretBundle) -> bytes:
    """Return the decoded payload of a base64 secret bundle.

    Raises:
        UnexpectedBundleContentError: If the bundle is not base64 content
        SecretDecodeError: If the content is not valid base64
    """
    if bundle.content_type != BASE64_CONTENT_TYPE or not isinstance(bundle.content, str):
        raise UnexpectedBundleContentError("unexpected secret bundle content")

    try:
        return base64.b64decode(bundle.content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SecretDecodeError(f"secret bundle content is not valid base64: {e}") from e


@lru_cache(maxsize=128)
def _compile(property_path: str) -> Any:
    return parse_jsonpath(property_path)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def extract_property(payload: bytes, property_path: str, key: str) -> bytes:
    """Select one field of a JSON payload.

    Args:
        payload: Decoded secret payload
        property_path: Dotted/bracket path such as ``db.hosts[0].name``;
            empty returns ``payload`` unchanged
        key: Secret name, used in the error message

    Returns:
        The located value as UTF-8 bytes. Strings are returned verbatim,
        JSON null as empty bytes, anything else as compact JSON.

    A top-level key equal to ``property_path`` is matched before the path is
    parsed, so keys such as ``1password`` or ``user name`` resolve even
    though they are not valid path expressions.

    Raises:
        MissingKeyError: If the payload is not JSON, the path is malformed,
            or nothing exists at the path
    """
    if not property_path:
        return payload

    try:
        document = json.loads(payload)
    except ValueError as e:
        raise MissingKeyError(key) from e

    if isinstance(document, dict) and property_path in document:
        return _stringify(document[property_path]).encode("utf-8")

    try:
        expression = _compile(property_path)
    except JSONPathError as e:
        raise MissingKeyError(key) from e

    matches = expression.find(document)
    if not matches:
        raise MissingKeyError(key)

    return _stringify(matches[0].value).encode("utf-8")


def to_secret_map(payload: bytes) -> dict[str, bytes]:
    """Parse a payload holding a flat JSON object of strings.

    Raises:
        SecretMapUnmarshalError: If the payload is not such an object
    """
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise SecretMapUnmarshalError(f"unable to unmarshal secret: {e}") from e

    if not isinstance(data, dict):
        raise SecretMapUnmarshalError(
            f"unable to unmarshal secret: expected a JSON object, got {type(data).__name__}"
        )

    secret_data: dict[str, bytes] = {}
    for name, value in data.items():
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise SecretMapUnmarshalError(
                f"unable to unmarshal secret: value of {name!r} is {type(value).__name__}, not a string"
            )
        secret_data[name] = value.encode("utf-8")
    return secret_data

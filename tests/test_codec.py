# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Tests for secret bundle decoding and property extraction."""

import json

import pytest

from fakes import b64_bundle
from secretsync_oracle import (
    MissingKeyError,
    SecretBundle,
    SecretDecodeError,
    SecretMapUnmarshalError,
    UnexpectedBundleContentError,
)
from secretsync_oracle.codec import decode_bundle, extract_property, to_secret_map

PAYLOAD = json.dumps({
    "username": "app",
    "password": "s3cr3t",
    "port": 5432,
    "ratio": 0.5,
    "tls": True,
    "replica": None,
    "nested": {"items": [{"name": "first"}, {"name": "second"}]},
}).encode("utf-8")


class TestDecodeBundle:
    """Test suite for decode_bundle."""

    def test_decodes_base64_content(self):
        assert decode_bundle(b64_bundle("hello")) == b"hello"

    def test_binary_payload_is_preserved(self):
        raw = bytes(range(256))
        assert decode_bundle(b64_bundle(raw)) == raw

    @pytest.mark.parametrize("content_type", ["TEXT", None, "base64"])
    def test_other_content_types_are_rejected(self, content_type):
        bundle = SecretBundle(content_type=content_type, content="aGVsbG8=")

        with pytest.raises(UnexpectedBundleContentError, match="unexpected secret bundle content"):
            decode_bundle(bundle)

    def test_missing_content_is_rejected(self):
        with pytest.raises(UnexpectedBundleContentError):
            decode_bundle(SecretBundle(content_type="BASE64", content=None))

    def test_invalid_base64(self):
        with pytest.raises(SecretDecodeError):
            decode_bundle(SecretBundle(content_type="BASE64", content="not base64!"))


class TestExtractProperty:
    """Test suite for extract_property."""

    def test_empty_path_returns_payload_verbatim(self):
        assert extract_property(PAYLOAD, "", "db") is PAYLOAD

    def test_empty_path_does_not_require_json(self):
        assert extract_property(b"plain text", "", "db") == b"plain text"

    def test_string_value(self):
        assert extract_property(PAYLOAD, "password", "db") == b"s3cr3t"

    def test_nested_path_with_index(self):
        assert extract_property(PAYLOAD, "nested.items[1].name", "db") == b"second"

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("port", b"5432"),
            ("ratio", b"0.5"),
            ("tls", b"true"),
            ("nested.items[0]", b'{"name":"first"}'),
            ("nested.items", b'[{"name":"first"},{"name":"second"}]'),
        ],
    )
    def test_non_string_values_are_rendered_as_json(self, path, expected):
        assert extract_property(PAYLOAD, path, "db") == expected

    def test_null_value_is_present_and_empty(self):
        assert extract_property(PAYLOAD, "replica", "db") == b""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("1password", b"one"),
            ("user name", b"spaced"),
            ("db.host", b"literal-dot"),
            ("where", b"reserved"),
            ("$", b"dollar"),
        ],
    )
    def test_top_level_keys_that_are_not_path_expressions(self, name, expected):
        payload = json.dumps({
            "1password": "one",
            "user name": "spaced",
            "db.host": "literal-dot",
            "db": {"host": "nested"},
            "where": "reserved",
            "$": "dollar",
        }).encode("utf-8")

        assert extract_property(payload, name, "db") == expected

    def test_nested_path_used_when_no_top_level_key_matches(self):
        payload = json.dumps({"db": {"host": "nested"}}).encode("utf-8")

        assert extract_property(payload, "db.host", "db") == b"nested"

    def test_unicode_value(self):
        payload = json.dumps({"greeting": "café"}).encode("utf-8")
        assert extract_property(payload, "greeting", "db") == "café".encode("utf-8")

    @pytest.mark.parametrize("path", ["missing", "nested.items[5].name", "password.inner"])
    def test_missing_path(self, path):
        with pytest.raises(MissingKeyError, match="missing Key in secret: db") as exc_info:
            extract_property(PAYLOAD, path, "db")
        assert exc_info.value.key == "db"

    def test_non_json_payload(self):
        with pytest.raises(MissingKeyError):
            extract_property(b"plain text", "password", "db")

    def test_malformed_path(self):
        with pytest.raises(MissingKeyError):
            extract_property(PAYLOAD, "nested.items[", "db")


class TestToSecretMap:
    """Test suite for to_secret_map."""

    def test_flat_object(self):
        assert to_secret_map(b'{"a":"1","b":"2"}') == {"a": b"1", "b": b"2"}

    def test_empty_object(self):
        assert to_secret_map(b"{}") == {}

    def test_null_value_maps_to_empty_bytes(self):
        assert to_secret_map(b'{"a":null}') == {"a": b""}

    @pytest.mark.parametrize("payload", [b'["a","b"]', b'"text"', b"42", b"null"])
    def test_non_object_payload(self, payload):
        with pytest.raises(SecretMapUnmarshalError, match="unable to unmarshal secret"):
            to_secret_map(payload)

    @pytest.mark.parametrize("payload", [b'{"a":1}', b'{"a":{"b":"c"}}', b'{"a":true}'])
    def test_non_string_values(self, payload):
        with pytest.raises(SecretMapUnmarshalError):
            to_secret_map(payload)

    def test_invalid_json(self):
        with pytest.raises(SecretMapUnmarshalError) as exc_info:
            to_secret_map(b"{not json")
        assert isinstance(exc_info.value.__cause__, ValueError)

"""Unit tests for the error hierarchy."""

from __future__ import annotations

import json

import pytest

from oidc_metadata.config import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from oidc_metadata.kernel.errors import (
    DecodeError,
    MetadataError,
    OidcMetadataError,
    RemoteFetchError,
    TransportError,
    TransportTimeoutError,
)


class TestOidcMetadataError:
    def test_default_code(self) -> None:
        assert OidcMetadataError("m").code == "oidc_metadata_error"

    def test_custom_code(self) -> None:
        assert OidcMetadataError("m", code="custom").code == "custom"

    def test_to_dict_includes_cause_repr(self) -> None:
        err = OidcMetadataError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]
        assert isinstance(err.__cause__, ValueError)

    def test_str_is_valid_json(self) -> None:
        err = OidcMetadataError("oops", code="oops", detail={"x": 1})
        parsed = json.loads(str(err))
        assert parsed == {"code": "oops", "message": "oops", "detail": {"x": 1}}

    def test_repr(self) -> None:
        assert repr(DecodeError("bad")) == "DecodeError(code='decode_error', message='bad')"


class TestFetchErrors:
    @pytest.mark.parametrize(
        "err",
        [
            TransportError("https://idp.example"),
            TransportTimeoutError("https://idp.example"),
            RemoteFetchError(500, "https://idp.example"),
            DecodeError("bad"),
        ],
    )
    def test_all_are_metadata_errors(self, err) -> None:
        assert isinstance(err, MetadataError)
        assert isinstance(err, OidcMetadataError)

    def test_remote_fetch_error_carries_status_and_uri(self) -> None:
        err = RemoteFetchError(404, "https://idp.example/keys")
        assert err.status == 404
        assert err.uri == "https://idp.example/keys"
        assert err.detail == {"status": 404, "uri": "https://idp.example/keys"}
        assert "404" in err.message and "https://idp.example/keys" in err.message

    def test_remote_fetch_error_equality(self) -> None:
        assert RemoteFetchError(500, "u") == RemoteFetchError(500, "u")
        assert RemoteFetchError(500, "u") != RemoteFetchError(502, "u")
        assert len({RemoteFetchError(500, "u"), RemoteFetchError(500, "u")}) == 1

    def test_transport_timeout_is_transport_error(self) -> None:
        err = TransportTimeoutError("https://idp.example")
        assert isinstance(err, TransportError)
        assert err.code == "transport_timeout"
        assert err.detail["uri"] == "https://idp.example"

    def test_decode_error_detail(self) -> None:
        err = DecodeError("bad", uri="u", model="KeySet")
        assert err.detail == {"uri": "u", "model": "KeySet"}


class TestConfigErrors:
    def test_missing_setting(self) -> None:
        err = MissingRequiredSettingError("discovery_uri")
        assert isinstance(err, ConfigError)
        assert isinstance(err, OidcMetadataError)
        assert err.setting_name == "discovery_uri"
        assert "discovery_uri" in err.message

    def test_invalid_value(self) -> None:
        err = InvalidSettingValueError("ttl", -1, "must be >= 0")
        assert err.value == -1
        assert err.reason == "must be >= 0"
        assert err.code == "invalid_setting_value"

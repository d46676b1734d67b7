"""Unit tests for MetadataCacheSettings and the environment loaders."""

from __future__ import annotations

import pytest

from oidc_metadata.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MetadataCacheSettings,
)


class TestMetadataCacheSettings:
    def test_defaults(self) -> None:
        settings = MetadataCacheSettings()
        assert settings.discovery_uri is None
        assert settings.default_ttl_seconds == 3600
        assert settings.sweep_interval_seconds == 300.0
        assert settings.http_timeout_seconds == 10.0
        assert settings.deduplicate_fetches is True

    def test_zero_ttl_allowed(self) -> None:
        assert MetadataCacheSettings(default_ttl_seconds=0).default_ttl_seconds == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"default_ttl_seconds": -1},
            {"sweep_interval_seconds": 0},
            {"http_timeout_seconds": -2.5},
        ],
    )
    def test_out_of_range_rejected(self, kwargs) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            MetadataCacheSettings(**kwargs)
        assert exc_info.value.setting_name == next(iter(kwargs))


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OIDC_METADATA_DISCOVERY_URI", "https://idp.example/.well-known/openid-configuration")
        monkeypatch.setenv("OIDC_METADATA_DEFAULT_TTL_SECONDS", "120")
        monkeypatch.setenv("OIDC_METADATA_SWEEP_INTERVAL_SECONDS", "2.5")
        monkeypatch.setenv("OIDC_METADATA_DEDUPLICATE_FETCHES", "false")

        settings = EnvSettingsLoader().load(MetadataCacheSettings)

        assert settings.discovery_uri == "https://idp.example/.well-known/openid-configuration"
        assert settings.default_ttl_seconds == 120
        assert settings.sweep_interval_seconds == 2.5
        assert settings.deduplicate_fetches is False

    def test_missing_variables_use_defaults(self) -> None:
        settings = EnvSettingsLoader(environ={}).load(MetadataCacheSettings)
        assert settings == MetadataCacheSettings()

    def test_explicit_environ_mapping(self) -> None:
        settings = EnvSettingsLoader(environ={"OIDC_METADATA_HTTP_TIMEOUT_SECONDS": "3"}).load(
            MetadataCacheSettings
        )
        assert settings.http_timeout_seconds == 3.0

    def test_non_numeric_value(self) -> None:
        loader = EnvSettingsLoader(environ={"OIDC_METADATA_DEFAULT_TTL_SECONDS": "soon"})
        with pytest.raises(InvalidSettingValueError) as exc_info:
            loader.load(MetadataCacheSettings)
        assert exc_info.value.setting_name == "OIDC_METADATA_DEFAULT_TTL_SECONDS"

    def test_out_of_range_value_is_config_error(self) -> None:
        loader = EnvSettingsLoader(environ={"OIDC_METADATA_DEFAULT_TTL_SECONDS": "-10"})
        with pytest.raises(ConfigError):
            loader.load(MetadataCacheSettings)

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_truthy_values(self, raw: str) -> None:
        loader = EnvSettingsLoader(environ={"OIDC_METADATA_DEDUPLICATE_FETCHES": raw})
        assert loader.load(MetadataCacheSettings).deduplicate_fetches is True


class TestDotenvSettingsLoader:
    def test_loads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OIDC_METADATA_DEFAULT_TTL_SECONDS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("OIDC_METADATA_DEFAULT_TTL_SECONDS=900\n")

        try:
            settings = DotenvSettingsLoader(str(env_file)).load(MetadataCacheSettings)
        finally:
            monkeypatch.delenv("OIDC_METADATA_DEFAULT_TTL_SECONDS", raising=False)

        assert settings.default_ttl_seconds == 900

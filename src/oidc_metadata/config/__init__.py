"""Config – settings dataclass, environment/.env loaders, and config errors."""

from oidc_metadata.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    MetadataCacheSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from oidc_metadata.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MetadataCacheSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]

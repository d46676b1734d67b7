from oidc_metadata.config.settings.base import MetadataCacheSettings, Settings
from oidc_metadata.config.settings.factory import SettingsFactory
from oidc_metadata.config.settings.loaders import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsLoader,
)

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MetadataCacheSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]

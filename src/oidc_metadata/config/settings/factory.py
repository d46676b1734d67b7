"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from oidc_metadata.config.settings.base import Settings
from oidc_metadata.config.settings.loaders import SettingsLoader
from oidc_metadata.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)
from oidc_metadata.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Merge the values of several loaders, apply overrides, build one settings object.

    Loaders are applied in order; later loaders win on overlapping fields.
    *overrides* take the highest priority. A loader that raises a
    :class:`ConfigError` is logged and skipped so the remaining sources may
    still contribute.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            A field without default is absent from every source.
        ConfigError
            The merged values were rejected by the settings class.
        """
        merged: dict[str, Any] = {}
        defaults = _defaults_of(settings_cls)

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except ConfigError as exc:
                logger.warning(
                    "settings.loader_skipped",
                    loader=type(loader).__name__,
                    error=exc.to_dict(),
                )
                continue
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                value = getattr(instance, field.name)
                # only explicitly loaded values override earlier loaders
                if field.name not in defaults or value != defaults[field.name]:
                    merged[field.name] = value

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name not in merged and field.name not in defaults:
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


def _defaults_of(settings_cls: type[Settings]) -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
        if field.default is not dataclasses.MISSING:
            defaults[field.name] = field.default
        elif field.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
            defaults[field.name] = field.default_factory()  # type: ignore[misc]
    return defaults


__all__ = ["SettingsFactory"]

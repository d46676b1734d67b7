"""Config settings – Settings base class and the metadata cache settings."""
from __future__ import annotations

import dataclasses

from oidc_metadata.config.validation import InvalidSettingValueError

DEFAULT_TTL_SECONDS = 3600
DEFAULT_SWEEP_INTERVAL_SECONDS = 300.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class MetadataCacheSettings(Settings):
    """Construction-time configuration of :class:`~oidc_metadata.MetadataService`.

    Environment variables use the ``OIDC_METADATA_`` prefix, e.g.
    ``OIDC_METADATA_DISCOVERY_URI`` or ``OIDC_METADATA_DEFAULT_TTL_SECONDS``.

    Attributes
    ----------
    discovery_uri:
        Discovery URI used when a call does not name one.
    default_ttl_seconds:
        Lifetime of a cached document when a call does not pass a TTL.
    sweep_interval_seconds:
        Pause between two background eviction passes.
    http_timeout_seconds:
        Timeout handed to the default httpx transport.
    deduplicate_fetches:
        Let concurrent callers on the same cold key share one fetch.
    """

    _prefix = "OIDC_METADATA"

    discovery_uri: str | None = None
    default_ttl_seconds: int = DEFAULT_TTL_SECONDS
    sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    deduplicate_fetches: bool = True

    def _validate(self) -> None:
        if self.default_ttl_seconds < 0:
            raise InvalidSettingValueError(
                "default_ttl_seconds", self.default_ttl_seconds, "must be >= 0"
            )
        if self.sweep_interval_seconds <= 0:
            raise InvalidSettingValueError(
                "sweep_interval_seconds", self.sweep_interval_seconds, "must be > 0"
            )
        if self.http_timeout_seconds <= 0:
            raise InvalidSettingValueError(
                "http_timeout_seconds", self.http_timeout_seconds, "must be > 0"
            )


__all__ = [
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "DEFAULT_TTL_SECONDS",
    "MetadataCacheSettings",
    "Settings",
]

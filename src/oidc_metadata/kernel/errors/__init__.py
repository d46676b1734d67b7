"""Kernel error hierarchy - public re-export surface.

Hierarchy::

    OidcMetadataError
    ├── MetadataError           (fetch.py)
    │   ├── TransportError
    │   │   └── TransportTimeoutError
    │   ├── RemoteFetchError
    │   └── DecodeError
    └── ConfigError             (oidc_metadata.config.validation)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from oidc_metadata.kernel.errors.base import OidcMetadataError
from oidc_metadata.kernel.errors.fetch import (
    DecodeError,
    MetadataError,
    RemoteFetchError,
    TransportError,
    TransportTimeoutError,
)

__all__ = [
    "DecodeError",
    "MetadataError",
    "OidcMetadataError",
    "RemoteFetchError",
    "TransportError",
    "TransportTimeoutError",
]

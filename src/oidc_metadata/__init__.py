"""
oidc_metadata – cached OpenID Connect discovery documents and key sets.

Import path convention::

    from oidc_metadata import MetadataService
    from oidc_metadata.kernel.errors import RemoteFetchError
    from oidc_metadata.config import MetadataCacheSettings
"""

from oidc_metadata.models import DiscoveryDocument, JsonWebKey, KeySet
from oidc_metadata.service import MetadataService, ServiceStats

__version__ = "0.1.0"
__all__ = [
    "DiscoveryDocument",
    "JsonWebKey",
    "KeySet",
    "MetadataService",
    "ServiceStats",
    "__version__",
]

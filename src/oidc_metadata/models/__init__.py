"""Models – discovery document, key set, and their JSON codec."""
from oidc_metadata.models.discovery import DiscoveryDocument
from oidc_metadata.models.codec import JsonModel, from_json, to_json
from oidc_metadata.models.jwks import JsonWebKey, KeySet

__all__ = [
    "DiscoveryDocument",
    "JsonModel",
    "JsonWebKey",
    "KeySet",
    "from_json",
    "to_json",
]

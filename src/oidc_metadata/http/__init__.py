"""HTTP – transport port, httpx adapter, and the metadata fetcher."""
from oidc_metadata.http.fetcher import MetadataFetcher
from oidc_metadata.http.transport import HttpTransport, HttpxTransport

__all__ = ["HttpTransport", "HttpxTransport", "MetadataFetcher"]

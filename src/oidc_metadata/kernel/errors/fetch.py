"""Fetch errors – the three ways retrieving a metadata document can fail."""

from __future__ import annotations

from typing import Any

from oidc_metadata.kernel.errors.base import OidcMetadataError


class MetadataError(OidcMetadataError):
    """A discovery document or key set could not be obtained."""

    default_code = "metadata_error"


class TransportError(MetadataError):
    """The HTTP exchange did not complete (connection refused, DNS, TLS, …)."""

    default_code = "transport_error"

    def __init__(self, uri: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Could not reach '{uri}'", **kwargs)
        self.uri = uri
        self.detail.setdefault("uri", uri)


class TransportTimeoutError(TransportError):
    """The HTTP exchange exceeded the client timeout."""

    default_code = "transport_timeout"


class RemoteFetchError(MetadataError):
    """The remote answered with a status other than ``200 OK``."""

    default_code = "remote_fetch_error"

    def __init__(self, status: int, uri: str, **kwargs: Any) -> None:
        super().__init__(
            f"Status code 200 expected, got {status} from '{uri}'",
            **kwargs,
        )
        self.status = status
        self.uri = uri
        self.detail.update({"status": status, "uri": uri})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteFetchError):
            return NotImplemented
        return (self.status, self.uri) == (other.status, other.uri)

    def __hash__(self) -> int:
        return hash((type(self), self.status, self.uri))


class DecodeError(MetadataError):
    """A ``200 OK`` body did not have the structure of the expected document."""

    default_code = "decode_error"

    def __init__(
        self,
        message: str,
        *,
        uri: str | None = None,
        model: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.uri = uri
        self.model = model
        if uri is not None:
            self.detail.setdefault("uri", uri)
        if model is not None:
            self.detail.setdefault("model", model)


__all__ = [
    "DecodeError",
    "MetadataError",
    "RemoteFetchError",
    "TransportError",
    "TransportTimeoutError",
]

"""HTTP – MetadataFetcher: one GET, status check, decode."""
from __future__ import annotations

from typing import TypeVar

from oidc_metadata.http.transport import HttpTransport
from oidc_metadata.kernel.errors import RemoteFetchError
from oidc_metadata.models.codec import JsonModel, from_json
from oidc_metadata.observability.logging import get_logger

M = TypeVar("M", bound=JsonModel)

logger = get_logger(__name__)


class MetadataFetcher:
    """Fetch a JSON document and decode it into a model.

    No retries are attempted; retry policy belongs to the caller.

    Raises
    ------
    TransportError
        No response was received.
    RemoteFetchError
        The status was anything other than ``200``.
    DecodeError
        A ``200`` body did not decode into the requested model.
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    async def fetch_json(self, uri: str, model: type[M]) -> M:
        status, body = await self._transport.get(uri)
        if status != 200:
            raise RemoteFetchError(status, uri)
        document = from_json(body, model, uri=uri)
        logger.debug("metadata.fetched", uri=uri, model=model.__name__, size=len(body))
        return document


__all__ = ["MetadataFetcher"]

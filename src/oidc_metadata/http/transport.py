"""HTTP – GET capability used by the fetcher, with an httpx implementation."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from oidc_metadata.kernel.errors import TransportError, TransportTimeoutError

__all__ = ["HttpTransport", "HttpxTransport"]


@runtime_checkable
class HttpTransport(Protocol):
    """Port: issue a GET and return ``(status, body)``.

    Implementations raise :class:`TransportError` when no response was
    received at all; any received status is returned, not raised.
    """

    async def get(self, url: str) -> tuple[int, bytes]: ...


class HttpxTransport:
    """:class:`HttpTransport` over :class:`httpx.AsyncClient`.

    Redirects are followed, so the status returned is the final one.
    Pass *client* to share a connection pool with the rest of an
    application; the transport then leaves closing it to the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        **kwargs: Any,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            kwargs.setdefault("follow_redirects", True)
            client = httpx.AsyncClient(timeout=timeout, **kwargs)
        self._client = client

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def get(self, url: str) -> tuple[int, bytes]:
        if self._client.is_closed:
            raise TransportError(url, f"HTTP client is closed: GET {url}")
        try:
            response = await self._client.get(
                url,
                headers={"Accept": "application/json"},
                follow_redirects=True,
            )
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(url, f"HTTP request timed out: GET {url}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(url, f"HTTP request failed: GET {url}: {exc}", cause=exc) from exc
        return response.status_code, response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

"""MetadataService – cached access to a provider's discovery document and key set.

Typical usage::

    async with MetadataService("https://idp.example/.well-known/openid-configuration") as svc:
        discovery = await svc.get_discovery()
        keys = await svc.get_keys()

Both caches are addressed by the *discovery* URI. A read returns the cached
value while ``expires_at >= now``; anything else (absent or stale) triggers a
fetch whose result replaces the entry. A failed fetch leaves the existing
entry as it was and the error propagates unchanged; stale data is never
returned.
"""
from __future__ import annotations

import asyncio
import threading
import weakref
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from oidc_metadata.cache import CacheStore, EvictionSweeper
from oidc_metadata.config.settings.base import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    DEFAULT_TTL_SECONDS,
    MetadataCacheSettings,
)
from oidc_metadata.config.validation import (
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from oidc_metadata.http import HttpTransport, HttpxTransport, MetadataFetcher
from oidc_metadata.kernel.errors import DecodeError, MetadataError
from oidc_metadata.kernel.time import Clock, SystemClock
from oidc_metadata.models import DiscoveryDocument, KeySet
from oidc_metadata.observability.logging import get_logger

__all__ = ["MetadataService", "ServiceStats"]

T = TypeVar("T")

logger = get_logger(__name__)

_DISCOVERY = "discovery"
_KEYS = "jwks"


@dataclass(frozen=True)
class ServiceStats:
    hits: int = 0
    misses: int = 0
    fetches: int = 0
    fetch_failures: int = 0
    evictions: int = 0


class MetadataService:
    """Cache in front of a provider's discovery and JWKS endpoints.

    Parameters
    ----------
    default_discovery_uri:
        URI used when a call omits ``uri``.
    default_ttl_seconds:
        Lifetime used when a call omits ``ttl_seconds``.
    transport:
        GET capability. Defaults to an :class:`HttpxTransport` owned (and
        closed) by the service.
    clock:
        Time source for expiry; tests pass a ``FrozenClock``.
    sweep_interval_seconds:
        Pause between background eviction passes.
    deduplicate_fetches:
        Concurrent callers on the same cold key in one event loop wait for a
        single fetch instead of each issuing their own.
    start_sweeper:
        Start the eviction thread right away.
    """

    def __init__(
        self,
        default_discovery_uri: str | None = None,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        *,
        transport: HttpTransport | None = None,
        clock: Clock | None = None,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        deduplicate_fetches: bool = True,
        start_sweeper: bool = True,
    ) -> None:
        _check_ttl("default_ttl_seconds", default_ttl_seconds)
        self._default_uri = default_discovery_uri
        self._default_ttl = default_ttl_seconds
        self._clock = clock or SystemClock()
        self._discovery_cache: CacheStore[DiscoveryDocument] = CacheStore(self._clock, name=_DISCOVERY)
        self._keys_cache: CacheStore[KeySet] = CacheStore(self._clock, name=_KEYS)

        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(timeout=http_timeout_seconds)
        self._fetcher = MetadataFetcher(self._transport)

        self._deduplicate = deduplicate_fetches
        self._locks: weakref.WeakKeyDictionary[
            asyncio.AbstractEventLoop, dict[tuple[str, str], asyncio.Lock]
        ] = weakref.WeakKeyDictionary()
        self._locks_guard = threading.Lock()

        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._fetch_failures = 0
        self._closing: asyncio.Task[None] | None = None

        self._sweeper = EvictionSweeper(
            [self._discovery_cache, self._keys_cache],
            interval=sweep_interval_seconds,
            clock=self._clock,
        )
        if start_sweeper:
            self._sweeper.start()

    @classmethod
    def from_settings(
        cls,
        settings: MetadataCacheSettings,
        *,
        transport: HttpTransport | None = None,
        clock: Clock | None = None,
        start_sweeper: bool = True,
    ) -> "MetadataService":
        return cls(
            settings.discovery_uri,
            settings.default_ttl_seconds,
            transport=transport,
            clock=clock,
            sweep_interval_seconds=settings.sweep_interval_seconds,
            http_timeout_seconds=settings.http_timeout_seconds,
            deduplicate_fetches=settings.deduplicate_fetches,
            start_sweeper=start_sweeper,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_discovery(
        self, uri: str | None = None, ttl_seconds: int | None = None
    ) -> DiscoveryDocument:
        """Return the discovery document for *uri*, from cache while valid.

        Raises
        ------
        TransportError, RemoteFetchError, DecodeError
            The fetch on a miss failed; the cache is left untouched.
        MissingRequiredSettingError
            No *uri* given and no default configured.
        """
        uri, ttl = self._resolve(uri, ttl_seconds)
        return await self._get(
            self._discovery_cache,
            uri,
            ttl,
            lambda: self._fetcher.fetch_json(uri, DiscoveryDocument),
        )

    async def get_keys(self, uri: str | None = None, ttl_seconds: int | None = None) -> KeySet:
        """Return the key set published by the provider at discovery URI *uri*.

        On a miss the discovery document is resolved first (through its own
        cache) and its ``jwks_uri`` fetched. The key set is cached under
        *uri*, not under ``jwks_uri``.
        """
        uri, ttl = self._resolve(uri, ttl_seconds)

        async def load() -> KeySet:
            discovery = await self.get_discovery(uri, ttl)
            if not discovery.jwks_uri:
                raise DecodeError(
                    "Discovery document has no 'jwks_uri'",
                    uri=uri,
                    model=DiscoveryDocument.__name__,
                )
            return await self._fetcher.fetch_json(discovery.jwks_uri, KeySet)

        return await self._get(self._keys_cache, uri, ttl, load)

    def invalidate(self, uri: str | None = None) -> None:
        """Forget both cached documents for *uri* so the next read refetches."""
        uri = uri if uri is not None else self._default_uri
        if uri is None:
            raise MissingRequiredSettingError("discovery_uri")
        self._discovery_cache.remove(uri)
        self._keys_cache.remove(uri)

    def stop(self) -> None:
        """Halt the eviction sweeper. Idempotent; fetches in flight still complete."""
        self._sweeper.stop()

    async def aclose(self) -> None:
        """Stop the sweeper and close the HTTP transport if the service created it."""
        self.stop()
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    def close(self) -> None:
        """Synchronous counterpart of :meth:`aclose`.

        Outside an event loop the owned transport is closed before returning;
        inside a running loop its closing is scheduled on that loop.
        """
        self.stop()
        if not (self._owns_transport and isinstance(self._transport, HttpxTransport)):
            return
        if self._transport.is_closed:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._transport.aclose())
            return
        if self._closing is None:
            self._closing = loop.create_task(self._transport.aclose())

    def __enter__(self) -> "MetadataService":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> "MetadataService":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @property
    def is_running(self) -> bool:
        return self._sweeper.is_running

    @property
    def sweeper(self) -> EvictionSweeper:
        return self._sweeper

    @property
    def discovery_cache(self) -> CacheStore[DiscoveryDocument]:
        return self._discovery_cache

    @property
    def key_set_cache(self) -> CacheStore[KeySet]:
        return self._keys_cache

    @property
    def stats(self) -> ServiceStats:
        with self._stats_lock:
            return ServiceStats(
                hits=self._hits,
                misses=self._misses,
                fetches=self._fetches,
                fetch_failures=self._fetch_failures,
                evictions=self._sweeper.evicted_total,
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, uri: str | None, ttl_seconds: int | None) -> tuple[str, int]:
        uri = uri if uri is not None else self._default_uri
        if uri is None:
            raise MissingRequiredSettingError("discovery_uri")
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        _check_ttl("ttl_seconds", ttl)
        return uri, ttl

    async def _get(
        self,
        store: CacheStore[T],
        key: str,
        ttl: int,
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        cached = store.get_valid(key)
        if cached is not None:
            self._count(hits=1)
            logger.debug("metadata.cache_hit", store=store.name, uri=key)
            return cached

        if not self._deduplicate:
            return await self._fetch_and_store(store, key, ttl, loader)

        async with self._lock_for(store.name, key):
            # another caller may have filled the entry while we waited
            cached = store.get_valid(key)
            if cached is not None:
                self._count(hits=1)
                logger.debug("metadata.cache_hit", store=store.name, uri=key, shared=True)
                return cached
            return await self._fetch_and_store(store, key, ttl, loader)

    async def _fetch_and_store(
        self,
        store: CacheStore[T],
        key: str,
        ttl: int,
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        self._count(misses=1, fetches=1)
        logger.debug("metadata.cache_miss", store=store.name, uri=key)
        try:
            value = await loader()
        except MetadataError as exc:
            self._count(fetch_failures=1)
            logger.warning("metadata.fetch_failed", store=store.name, uri=key, error=exc.to_dict())
            raise
        entry = store.put(key, value, ttl)
        logger.info("metadata.cached", store=store.name, uri=key, expires_at=entry.expires_at)
        return value

    def _lock_for(self, kind: str, key: str) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        with self._locks_guard:
            locks = self._locks.setdefault(loop, {})
            lock = locks.get((kind, key))
            if lock is None:
                lock = locks[(kind, key)] = asyncio.Lock()
            return lock

    def _count(
        self, *, hits: int = 0, misses: int = 0, fetches: int = 0, fetch_failures: int = 0
    ) -> None:
        with self._stats_lock:
            self._hits += hits
            self._misses += misses
            self._fetches += fetches
            self._fetch_failures += fetch_failures


def _check_ttl(name: str, value: int) -> None:
    if value < 0:
        raise InvalidSettingValueError(name, value, "must be >= 0")

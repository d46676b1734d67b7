"""Cache – EvictionSweeper, the background pass that drops expired entries.

The sweeper runs on its own daemon thread so it works the same whether the
caller drives the service from one event loop, several, or plain threads.
It sleeps on a :class:`threading.Event`; :meth:`EvictionSweeper.stop` sets
the event, which wakes the sleep immediately and ends any scan in progress
at the next key.
"""
from __future__ import annotations

import enum
import threading
from typing import Any, Sequence

from oidc_metadata.cache.store import CacheStore
from oidc_metadata.config.validation import InvalidSettingValueError
from oidc_metadata.kernel.time import Clock, SystemClock
from oidc_metadata.observability.logging import get_logger

__all__ = ["EvictionSweeper", "SweeperState"]

logger = get_logger(__name__)


class SweeperState(str, enum.Enum):
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class EvictionSweeper:
    """Periodically evicts expired entries from one or more stores.

    Parameters
    ----------
    stores:
        Stores scanned on every pass.
    interval:
        Seconds between two passes. Independent of any entry's TTL: an
        entry may outlive its expiry until the next pass, readers check
        expiry themselves.
    clock:
        Time source for the expiry comparison.
    """

    def __init__(
        self,
        stores: Sequence[CacheStore[Any]],
        interval: float = 300.0,
        clock: Clock | None = None,
        name: str = "oidc-metadata-sweeper",
    ) -> None:
        if interval <= 0:
            raise InvalidSettingValueError("interval", interval, "must be > 0")
        self._stores = tuple(stores)
        self._interval = interval
        self._clock = clock or SystemClock()
        self._name = name
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        self._state = SweeperState.CREATED
        self._thread: threading.Thread | None = None
        self.passes = 0
        self._count_lock = threading.Lock()
        self._evicted_total = 0

    @property
    def state(self) -> SweeperState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SweeperState.RUNNING

    def start(self) -> None:
        """Start the background thread. No-op unless the sweeper is fresh."""
        with self._state_lock:
            if self._state is not SweeperState.CREATED:
                return
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._state = SweeperState.RUNNING
            self._thread.start()
        logger.debug("sweeper.started", interval=self._interval, stores=len(self._stores))

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the loop to end and wait up to *timeout* seconds for it.

        Safe to call repeatedly and from any thread, including before
        :meth:`start`; once stopped the sweeper never scans again.
        """
        with self._state_lock:
            already_stopped = self._state is SweeperState.STOPPED
            self._state = SweeperState.STOPPED
            self._stop_event.set()
            thread = self._thread
        if already_stopped:
            return
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("sweeper.stopped", passes=self.passes)

    def sweep_once(self) -> int:
        """Run one pass over every store and return the number of evicted entries."""
        if self._stop_event.is_set():
            return 0
        now = self._clock.timestamp()
        evicted = 0
        try:
            for store in self._stores:
                for key in store.all_keys():
                    if self._stop_event.is_set():
                        return evicted
                    if store.remove_if_expired(key, now):
                        evicted += 1
                        logger.debug("sweeper.evicted", store=store.name, key=key)
            self.passes += 1
            return evicted
        finally:
            with self._count_lock:
                self._evicted_total += evicted

    @property
    def evicted_total(self) -> int:
        """Entries removed by every pass so far."""
        with self._count_lock:
            return self._evicted_total

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                evicted = self.sweep_once()
            except Exception:  # noqa: BLE001 – a failed pass must not end the loop
                logger.exception("sweeper.sweep_failed")
                continue
            if evicted:
                logger.info("sweeper.pass_completed", evicted=evicted)

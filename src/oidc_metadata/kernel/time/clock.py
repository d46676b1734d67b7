"""Kernel time – Clock port used to stamp and check cache expiry."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: source of the current instant.

    Expiry is kept as POSIX seconds; ``now`` exists for log and debug output.
    """

    def now(self) -> datetime: ...
    def timestamp(self) -> float: ...


class SystemClock:
    """Production clock reading the wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def timestamp(self) -> float:
        return datetime.now(UTC).timestamp()


class FrozenClock:
    """Test clock that only moves when :meth:`advance` is called."""

    def __init__(self, fixed: datetime | None = None) -> None:
        self._fixed = fixed or datetime(2024, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        return self._fixed

    def timestamp(self) -> float:
        return self._fixed.timestamp()

    def advance(self, seconds: float = 0.0, **kwargs: float) -> None:
        """Move time forward by *seconds* plus any extra ``timedelta`` kwargs."""
        self._fixed += timedelta(seconds=seconds, **kwargs)


__all__ = ["Clock", "FrozenClock", "SystemClock"]

"""Shared fakes for the unit suite: a scripted HTTP transport and a frozen clock."""
from __future__ import annotations

import asyncio
import json
from collections import defaultdict, deque
from datetime import UTC, datetime
from typing import Any

import pytest

from oidc_metadata.kernel.time import FrozenClock

class FakeTransport:
    """HttpTransport that replays scripted responses per URL.

    Each queued item is either ``(status, body)`` or an exception instance.
    The last item for a URL is repeated once the queue runs dry. When
    ``gate`` is set, every GET waits on it before answering.
    """

    def __init__(self) -> None:
        self._routes: dict[str, deque[Any]] = defaultdict(deque)
        self._last: dict[str, Any] = {}
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    def add(self, url: str, status: int = 200, body: Any = None) -> "FakeTransport":
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        elif isinstance(body, str):
            body = body.encode()
        self._routes[url].append((status, body or b""))
        return self

    def fail(self, url: str, exc: BaseException) -> "FakeTransport":
        self._routes[url].append(exc)
        return self

    def count(self, url: str) -> int:
        return self.calls.count(url)

    async def get(self, url: str) -> tuple[int, bytes]:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        queue = self._routes.get(url)
        if queue:
            item = queue.popleft()
            self._last[url] = item
        elif url in self._last:
            item = self._last[url]
        else:
            return 404, b""
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()

from __future__ import annotations

import asyncio
import enum
import logging
from collections import deque
from typing import Any, Callable

from models.event import ConsumedEvent

log = logging.getLogger(__name__)

DEFAULT_READ_LATENCY = 1.0
DEFAULT_WRITE_LATENCY = 3.0


class _Empty(enum.Enum):
    EMPTY = "NO_DATA_AVAILABLE"

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty.EMPTY
"""Sentinel returned by ``Resource.dequeue()`` when the queue has no data."""


class Resource:
    """Simulated data source with a FIFO queue and one-shot readiness
    notification.

    A producer calls ``enqueue()`` and a consumer calls ``dequeue()``; both
    suspend for a simulated I/O latency before touching the queue.  Anyone
    who wants to know when data arrives registers a callback with
    ``subscribe_ready()``.  Every callback outstanding when ``enqueue()``
    appends is invoked once, in registration order, and then dropped.
    """

    def __init__(
        self,
        name: str,
        *,
        read_latency: float = DEFAULT_READ_LATENCY,
        write_latency: float = DEFAULT_WRITE_LATENCY,
        sink: Callable[[ConsumedEvent], None] | None = None,
    ) -> None:
        self.name = name
        self.read_latency = read_latency
        self.write_latency = write_latency
        self._sink = sink
        self._queue: deque[Any] = deque()
        self._subscribers: list[Callable[[], None]] = []

    def __repr__(self) -> str:
        return f"Resource({self.name!r}, pending={len(self._queue)})"

    def __len__(self) -> int:
        return len(self._queue)

    @property
    def pending_subscriptions(self) -> int:
        return len(self._subscribers)

    async def enqueue(self, item: Any) -> None:
        """Append ``item`` after the write latency, then notify subscribers.

        Readers running during the latency still see the old queue state.
        """
        log.info("Trying to add data to %s: %r", self.name, item)
        await asyncio.sleep(self.write_latency)
        self._queue.append(item)
        self._emit()

    async def dequeue(self) -> Any:
        """Pop the oldest item after the read latency, or return ``EMPTY``.

        Never waits for future data.
        """
        await asyncio.sleep(self.read_latency)
        if not self._queue:
            return EMPTY
        return self._queue.popleft()

    def subscribe_ready(self, callback: Callable[[], None]) -> None:
        self._subscribers.append(callback)

    def consume(self, item: Any) -> None:
        """Hand a dequeued item to the sink as a ``ConsumedEvent``."""
        log.debug("%s: use %r", self.name, item)
        if self._sink is not None:
            self._sink(ConsumedEvent(self.name, item))

    def _emit(self) -> None:
        # Swap first: a callback that re-subscribes waits for the next enqueue.
        subscribers, self._subscribers = self._subscribers, []
        for callback in subscribers:
            try:
                callback()
            except Exception:
                log.exception("Readiness callback failed on %s", self.name)

from __future__ import annotations

import asyncio
import logging

from models.event import ConsumedEvent

log = logging.getLogger(__name__)


class EventBus:
    """Fans consumed items out to every subscriber queue.

    ``publish()`` never suspends, so it can be handed to a ``Resource`` as
    its sink and run inside the synchronous ``consume()`` call.  When a
    bounded subscriber queue is full the event is dropped for that
    subscriber only and counted in ``dropped``.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queues: list[asyncio.Queue[ConsumedEvent]] = []
        self._maxsize = maxsize
        self.dropped = 0

    def subscribe(self) -> asyncio.Queue[ConsumedEvent]:
        q: asyncio.Queue[ConsumedEvent] = asyncio.Queue(maxsize=self._maxsize)
        self._queues.append(q)
        return q

    def publish(self, event: ConsumedEvent) -> None:
        for q in self._queues:
            try:
                q.put_nowait(event)
            except asyncio.QueueFull:
                self.dropped += 1
                log.warning("Subscriber queue full, dropped item from %s", event.resource)

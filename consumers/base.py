from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from core.event_bus import EventBus
from models.event import ConsumedEvent

log = logging.getLogger(__name__)


class EventConsumer(ABC):
    """Drains one ``EventBus`` subscription in its own task.

    ``handled`` counts events taken off the queue, including those whose
    handler raised.
    """

    def __init__(self, bus: EventBus) -> None:
        self._queue = bus.subscribe()
        self.handled = 0

    @abstractmethod
    def handle(self, event: ConsumedEvent) -> None:
        """Act on one consumed item."""

    async def run(self) -> None:
        """Handle events until cancelled."""
        log.info("%s listening", type(self).__name__)
        while True:
            event = await self._queue.get()
            try:
                self.handle(event)
            except Exception:
                log.exception(
                    "%s could not handle %r from %s",
                    type(self).__name__,
                    event.item,
                    event.resource,
                )
            finally:
                self.handled += 1
                self._queue.task_done()

    async def drain(self) -> None:
        """Return once every event published so far has been handled."""
        await self._queue.join()

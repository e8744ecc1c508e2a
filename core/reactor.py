from __future__ import annotations

import asyncio
import logging

from core.demultiplexer import Demultiplexer
from core.registry import ResourceRegistry
from core.resource import EMPTY

log = logging.getLogger(__name__)


class Reactor:
    """Event loop that sleeps in the demultiplexer until a resource has data.

    Each cycle:
    1. wait on every registered resource
    2. read each ready resource once
    3. consume the item (its resource forwards it to the sink)
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        demultiplexer: Demultiplexer | None = None,
    ) -> None:
        self._registry = registry
        self._demultiplexer = demultiplexer or Demultiplexer()
        self.cycles = 0

    async def run(self, stop: asyncio.Event | None = None) -> None:
        """Run until ``stop`` is set.

        ``stop`` is only checked between cycles.  A cycle blocked in
        ``Demultiplexer.wait()`` finishes only when some resource gets data.
        """
        if not len(self._registry):
            log.warning("No resources registered")
            return

        log.info("Reactor started on %d resource(s)", len(self._registry))

        while stop is None or not stop.is_set():
            ready = await self._demultiplexer.wait(self._registry.resources)
            self.cycles += 1

            for resource in ready:
                log.info("Event detected from %s", resource.name)
                data = await resource.dequeue()
                if data is EMPTY:
                    continue
                log.info("Data received on %s", resource.name)
                resource.consume(data)

        log.info("Reactor stopped after %d cycle(s)", self.cycles)

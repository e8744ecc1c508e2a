from __future__ import annotations

import asyncio
import logging

from core.registry import ResourceRegistry
from core.resource import EMPTY, Resource

log = logging.getLogger(__name__)


class BusyWaitPoller:
    """Naive alternative to the reactor: polls every resource in a loop.

    Kept for comparison.  Each resource gets its own task that calls
    ``dequeue()`` over and over whether or not data is coming, so the
    number of reads grows with time rather than with traffic.  ``polls``
    counts reads per resource name.
    """

    def __init__(self, registry: ResourceRegistry) -> None:
        self._registry = registry
        self.polls: dict[str, int] = {}

    async def _watch(self, resource: Resource, stop: asyncio.Event | None) -> None:
        log.info("----- Start watching %s -----", resource.name)
        while stop is None or not stop.is_set():
            data = await resource.dequeue()
            self.polls[resource.name] = self.polls.get(resource.name, 0) + 1
            if data is EMPTY:
                log.debug("Waiting for data on %s...", resource.name)
                continue
            log.info("Data received on %s", resource.name)
            resource.consume(data)

    async def run(self, stop: asyncio.Event | None = None) -> None:
        resources = self._registry.resources
        if not resources:
            log.warning("No resources registered")
            return

        tasks = [
            asyncio.create_task(
                self._watch(r, stop),
                name=f"poll-{r.name}",
            )
            for r in resources
        ]

        await asyncio.gather(*tasks)

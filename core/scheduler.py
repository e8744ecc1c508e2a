from __future__ import annotations

import asyncio
import logging

from core.registry import ResourceRegistry
from providers.base import EventSource

log = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 20


class Scheduler:
    """Producer coordinator that spawns one worker task per event source.

    Each worker asks its source for the next ``(delay, item)``, sleeps, and
    then enqueues the item on the target resource.  A shared
    ``asyncio.Semaphore`` bounds how many simulated writes are in flight.

    The scheduler only produces.  It knows nothing about the reactor.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        sources: list[EventSource],
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
    ) -> None:
        self._registry = registry
        self._sources = list(sources)
        self._concurrency_limit = concurrency_limit
        self._semaphore = asyncio.Semaphore(concurrency_limit)

    async def _source_worker(self, source: EventSource) -> None:
        """Worker loop for a single source.

        Each cycle:
        1. ask the source for the next item
        2. sleep for the source's delay
        3. acquire semaphore and enqueue (bounds concurrent writes)

        Ends when the source is exhausted or fails.
        """
        if source.target not in self._registry:
            log.error("Source %s targets unknown resource %r", source.name, source.target)
            return
        resource = self._registry.get(source.target)
        log.info("Worker started for %s -> %s", source.name, resource.name)

        written = 0
        while True:
            try:
                step = await source.produce()
            except Exception:
                log.exception("Worker %s produce failed", source.name)
                break
            if step is None:
                break

            delay, item = step
            await asyncio.sleep(delay)
            async with self._semaphore:
                await resource.enqueue(item)
            written += 1

        log.info("Worker %s finished after %d item(s)", source.name, written)

    async def run(self) -> None:
        """Spawn one worker task per source and await them all.

        If no sources are configured the method returns immediately.
        """
        if not self._sources:
            log.warning("No event sources configured")
            return

        log.info(
            "Scheduler starting %d source worker(s), concurrency limit=%d",
            len(self._sources),
            self._concurrency_limit,
        )

        tasks = [
            asyncio.create_task(
                self._source_worker(s),
                name=f"worker-{s.name}",
            )
            for s in self._sources
        ]

        await asyncio.gather(*tasks)

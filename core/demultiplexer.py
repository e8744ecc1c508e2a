from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from core.resource import EMPTY, Resource

log = logging.getLogger(__name__)


class Demultiplexer:
    """Waits on several resources at once and reports which became ready.

    Each ``wait()`` call is independent.  The only state kept between calls
    is the set of probe tasks still in flight, held so they are not garbage
    collected before they finish.
    """

    def __init__(self) -> None:
        self._probes: set[asyncio.Task[None]] = set()

    async def wait(self, resources: Iterable[Resource]) -> list[Resource]:
        """Resolve with the resources that are ready.

        Every resource is probed with ``dequeue()``.  A probe that returns an
        item marks its resource ready; the item itself is dropped, so callers
        must ``dequeue()`` again to get data.  A probe that returns ``EMPTY``
        subscribes to the resource instead.

        If every probe returned data, the result is all of them, in the order
        the probes completed.  If any probe came back empty, the result is
        only the first subscribed resource to receive new data.  The other
        subscriptions are left behind and fire into nothing.

        There is no timeout and no cancellation: if nothing is ready and
        nothing is ever enqueued, this never returns.
        """
        resources = list(resources)
        if not resources:
            log.warning("wait() called with no resources")
            return []

        result: asyncio.Future[list[Resource]] = (
            asyncio.get_running_loop().create_future()
        )
        log.info("Waiting for events on %d resource(s)", len(resources))
        ready: list[Resource] = []
        waiting = len(resources)

        def resolve(value: list[Resource]) -> None:
            if not result.done():
                result.set_result(value)

        async def probe(resource: Resource) -> None:
            nonlocal waiting
            log.debug("Watching resource: %s", resource.name)
            data = await resource.dequeue()
            if data is EMPTY:
                log.debug("Set callback for resource: %s", resource.name)
                resource.subscribe_ready(lambda: resolve([resource]))
                return
            ready.append(resource)
            waiting -= 1
            if waiting == 0:
                log.debug("All resources had data: %s", [r.name for r in ready])
                resolve(list(ready))

        for resource in resources:
            task = asyncio.create_task(
                probe(resource),
                name=f"probe-{resource.name}",
            )
            self._probes.add(task)
            task.add_done_callback(self._probes.discard)

        events = await result
        log.debug(
            "wait() returned with %d event(s): %s",
            len(events),
            [r.name for r in events],
        )
        return events

from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from core.resource import Resource

READ_LATENCY = 0.01
WRITE_LATENCY = 0.03


@pytest.fixture
def make_resource() -> Callable[..., Resource]:
    def factory(name: str, *items, sink=None) -> Resource:
        resource = Resource(
            name,
            read_latency=READ_LATENCY,
            write_latency=WRITE_LATENCY,
            sink=sink,
        )
        # Pre-fill without paying the write latency.
        resource._queue.extend(items)
        return resource

    return factory


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(poll(), timeout)

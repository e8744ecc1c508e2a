"""Busy-wait poller tests."""

from __future__ import annotations

import asyncio

import pytest

from conftest import wait_until
from core.busy_wait import BusyWaitPoller
from core.event_bus import EventBus
from core.registry import ResourceRegistry


@pytest.mark.asyncio
async def test_poller_consumes_and_keeps_polling(make_resource) -> None:
    bus = EventBus()
    events = bus.subscribe()
    a = make_resource("A", sink=bus.publish)
    b = make_resource("B", sink=bus.publish)
    registry = ResourceRegistry()
    registry.register(a)
    registry.register(b)
    stop = asyncio.Event()
    poller = BusyWaitPoller(registry)

    task = asyncio.create_task(poller.run(stop))
    await a.enqueue("x")
    await wait_until(lambda: events.qsize() == 1)
    stop.set()
    await asyncio.wait_for(task, 1.0)

    # B never had data but was read over and over anyway.
    assert poller.polls["B"] > 1
    assert poller.polls["A"] > 1
    event = events.get_nowait()
    assert (event.resource, event.item) == ("A", "x")


@pytest.mark.asyncio
async def test_poller_without_resources_returns() -> None:
    poller = BusyWaitPoller(ResourceRegistry())
    await asyncio.wait_for(poller.run(), 1.0)
    assert poller.polls == {}

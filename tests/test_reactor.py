"""Reactor loop tests."""

from __future__ import annotations

import asyncio

import pytest

from conftest import READ_LATENCY, wait_until
from core.event_bus import EventBus
from core.reactor import Reactor
from core.registry import ResourceRegistry


def _registry(*resources) -> ResourceRegistry:
    registry = ResourceRegistry()
    for r in resources:
        registry.register(r)
    return registry


def _drain(queue: asyncio.Queue) -> list[tuple[str, object]]:
    events = [queue.get_nowait() for _ in range(queue.qsize())]
    return [(e.resource, e.item) for e in events]


@pytest.mark.asyncio
async def test_reactor_consumes_items_as_they_arrive(make_resource) -> None:
    bus = EventBus()
    events = bus.subscribe()
    a = make_resource("A", sink=bus.publish)
    b = make_resource("B", sink=bus.publish)
    stop = asyncio.Event()
    reactor = Reactor(_registry(a, b))

    task = asyncio.create_task(reactor.run(stop))
    await asyncio.sleep(READ_LATENCY * 5)

    await a.enqueue("from A")
    await wait_until(lambda: events.qsize() == 1)

    stop.set()
    await asyncio.sleep(READ_LATENCY * 5)
    # The reactor is parked in wait(); new data lets the cycle finish.
    await b.enqueue("from B")
    await asyncio.wait_for(task, 1.0)

    assert reactor.cycles == 2
    assert _drain(events) == [("A", "from A"), ("B", "from B")]


@pytest.mark.asyncio
async def test_data_present_at_wait_is_swallowed_by_probe(make_resource) -> None:
    bus = EventBus()
    events = bus.subscribe()
    a = make_resource("A", "a1", sink=bus.publish)
    b = make_resource("B", "b1", sink=bus.publish)
    stop = asyncio.Event()
    reactor = Reactor(_registry(a, b))

    task = asyncio.create_task(reactor.run(stop))
    await wait_until(lambda: reactor.cycles == 1)
    stop.set()
    await asyncio.wait_for(task, 1.0)

    # Both resources were reported ready, but the re-read found nothing.
    assert reactor.cycles == 1
    assert events.empty()
    assert len(a) == 0 and len(b) == 0


@pytest.mark.asyncio
async def test_reactor_handles_non_string_resource_names(make_resource) -> None:
    bus = EventBus()
    events = bus.subscribe()
    port_80, port_443 = make_resource(80, sink=bus.publish), make_resource(443)
    stop = asyncio.Event()
    reactor = Reactor(_registry(port_80, port_443))

    task = asyncio.create_task(reactor.run(stop))
    await asyncio.sleep(READ_LATENCY * 5)
    await port_80.enqueue("x")
    await wait_until(lambda: events.qsize() == 1)

    assert not task.done()
    stop.set()
    await port_443.enqueue("y")
    await asyncio.wait_for(task, 1.0)
    assert _drain(events) == [(80, "x")]


@pytest.mark.asyncio
async def test_reactor_without_resources_returns() -> None:
    reactor = Reactor(ResourceRegistry())
    await asyncio.wait_for(reactor.run(), 1.0)
    assert reactor.cycles == 0


@pytest.mark.asyncio
async def test_stop_set_before_start_skips_loop(make_resource) -> None:
    stop = asyncio.Event()
    stop.set()
    reactor = Reactor(_registry(make_resource("A")))

    await asyncio.wait_for(reactor.run(stop), 1.0)

    assert reactor.cycles == 0

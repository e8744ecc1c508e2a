"""Event demultiplexing demo -- entry point.

Assembles the pipeline:

    Scheduler (one asyncio task per event source)
        -> Resource.enqueue()
    Reactor (Demultiplexer.wait() -> dequeue)
        -> Resource.consume() -> EventBus (asyncio.Queue fan-out)
        -> Consumer tasks (react to queue.get())

With ``--mode busy-wait`` the reactor is replaced by a poller that reads
every resource in a loop, for comparison.

Runs until interrupted.  SIGINT/SIGTERM set a stop token; the reactor checks
it between cycles and the remaining tasks are cancelled.  A task that crashes
ends the run and its exception propagates.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from typing import Callable

from config import LOG_LEVELS, MODES, build_sources, load_config, setup_logging
from consumers.console import ConsoleConsumer
from core.busy_wait import BusyWaitPoller
from core.event_bus import EventBus
from core.reactor import Reactor
from core.registry import ResourceRegistry
from core.resource import Resource
from core.scheduler import Scheduler
from models.event import ConsumedEvent

log = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Event demultiplexing demo")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--mode", choices=MODES, help="reactor strategy")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level",
    )
    return parser.parse_args(argv)


def build_registry(
    config: dict,
    sink: Callable[[ConsumedEvent], None] | None = None,
) -> ResourceRegistry:
    registry = ResourceRegistry()
    for name in config["resources"]:
        registry.register(Resource(
            str(name),
            read_latency=float(config["latency"]["read"]),
            write_latency=float(config["latency"]["write"]),
            sink=sink,
        ))
    return registry


async def supervise(
    runner: asyncio.Task,
    others: list[asyncio.Task],
    stop: asyncio.Event,
) -> None:
    """Wait for ``stop``, the runner to return, or any task to fail.

    Then cancel what is left.  The first failure is logged and re-raised.
    Other tasks may finish normally (a scripted scheduler runs out of
    items) without ending the run.
    """
    stopper = asyncio.create_task(stop.wait(), name="stop")
    pending = {stopper, runner, *others}
    failed: asyncio.Task | None = None

    while failed is None and stopper in pending and runner in pending:
        done, pending = await asyncio.wait(
            pending,
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                failed = task
                break

    log.info("Shutting down, cancelling %d task(s)", len(pending))
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)

    if failed is not None:
        exc = failed.exception()
        log.error("Task %s failed", failed.get_name(), exc_info=exc)
        raise exc


async def run(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    if args.mode:
        config["mode"] = args.mode
    if args.log_level:
        config["log_level"] = args.log_level
    setup_logging(config["log_level"])

    bus = EventBus()
    registry = build_registry(config, sink=bus.publish)
    scheduler = Scheduler(
        registry=registry,
        sources=build_sources(config),
        concurrency_limit=int(config["concurrency_limit"]),
    )
    consumers = [
        ConsoleConsumer(bus),
    ]

    if config["mode"] == "busy-wait":
        runner = BusyWaitPoller(registry)
    else:
        runner = Reactor(registry)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows: fall back to KeyboardInterrupt in main()
            pass

    await supervise(
        asyncio.create_task(runner.run(stop), name=config["mode"]),
        [
            asyncio.create_task(scheduler.run(), name="scheduler"),
            *(
                asyncio.create_task(c.run(), name=type(c).__name__)
                for c in consumers
            ),
        ],
        stop,
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        pass
    print("\nShutting down.")


if __name__ == "__main__":
    main()

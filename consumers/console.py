from __future__ import annotations

from consumers.base import EventConsumer
from models.event import ConsumedEvent


class ConsoleConsumer(EventConsumer):
    """Prints each consumed item to stdout."""

    def handle(self, event: ConsumedEvent) -> None:
        ts = event.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        print(f"[{ts}] {event.resource}: {event.item}", flush=True)

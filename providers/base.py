from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

DEFAULT_DELAY = 5.0


class EventSource(ABC):
    """Abstract base for simulated external event producers.

    A source stands in for whatever would write to a real socket or pipe.
    The scheduler repeatedly asks it for the next item and enqueues that
    item on the resource named by ``target``.
    """

    def __init__(self, target: str) -> None:
        self.target = target

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source name, used for task names and logs."""

    @abstractmethod
    async def produce(self) -> tuple[float, Any] | None:
        """Return ``(delay, item)`` for the next write, or ``None`` when done.

        The scheduler sleeps ``delay`` seconds before enqueueing ``item``.
        """

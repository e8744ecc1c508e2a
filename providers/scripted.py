from __future__ import annotations

from typing import Any, Iterable

from providers.base import DEFAULT_DELAY, EventSource


class ScriptedSource(EventSource):
    """Writes a fixed list of items to one resource, then stops.

    The first item waits ``initial_delay``; each following item waits
    ``delay``.
    """

    def __init__(
        self,
        target: str,
        items: Iterable[Any],
        delay: float = 0.0,
        initial_delay: float = DEFAULT_DELAY,
    ) -> None:
        super().__init__(target)
        self._items = list(items)
        self._delay = delay
        self._initial_delay = initial_delay
        self._index = 0

    @property
    def name(self) -> str:
        return f"scripted-{self.target}"

    async def produce(self) -> tuple[float, Any] | None:
        if self._index >= len(self._items):
            return None
        delay = self._initial_delay if self._index == 0 else self._delay
        item = self._items[self._index]
        self._index += 1
        return delay, item

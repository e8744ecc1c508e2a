from __future__ import annotations

from providers.base import EventSource


class TickerSource(EventSource):
    """Writes ``"<prefix> <n>"`` every ``interval`` seconds.

    Runs forever unless ``limit`` is given.
    """

    def __init__(
        self,
        target: str,
        interval: float,
        prefix: str = "tick",
        limit: int | None = None,
    ) -> None:
        super().__init__(target)
        self._interval = interval
        self._prefix = prefix
        self._limit = limit
        self._count = 0

    @property
    def name(self) -> str:
        return f"ticker-{self.target}"

    async def produce(self) -> tuple[float, str] | None:
        if self._limit is not None and self._count >= self._limit:
            return None
        self._count += 1
        return self._interval, f"{self._prefix} {self._count}"

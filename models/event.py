from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class ConsumedEvent:
    """Record published on the event bus each time an item is consumed.

    Fields:
        resource:  Name of the resource the item was read from.
        item:      The consumed data item.
        timestamp: When the item was consumed (UTC).
    """

    resource: str
    item: Any
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

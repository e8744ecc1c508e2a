from core.busy_wait import BusyWaitPoller
from core.demultiplexer import Demultiplexer
from core.event_bus import EventBus
from core.reactor import Reactor
from core.registry import ResourceRegistry
from core.resource import EMPTY, Resource
from core.scheduler import Scheduler

__all__ = [
    "BusyWaitPoller",
    "Demultiplexer",
    "EMPTY",
    "EventBus",
    "Reactor",
    "Resource",
    "ResourceRegistry",
    "Scheduler",
]

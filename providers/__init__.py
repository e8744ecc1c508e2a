from providers.base import EventSource
from providers.scripted import ScriptedSource
from providers.ticker import TickerSource

__all__ = ["EventSource", "ScriptedSource", "TickerSource"]

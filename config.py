"""Configuration loading.

Precedence, lowest first: ``DEFAULT_CONFIG`` -> YAML file -> command line.
"""
from __future__ import annotations

import copy
import logging
import os
from typing import Any

import yaml

from core.resource import DEFAULT_READ_LATENCY, DEFAULT_WRITE_LATENCY
from providers.base import DEFAULT_DELAY, EventSource
from providers.scripted import ScriptedSource
from providers.ticker import TickerSource

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

MODES = ("demux", "busy-wait")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "INFO",
    "mode": "demux",
    "concurrency_limit": 20,
    "latency": {
        "read": DEFAULT_READ_LATENCY,
        "write": DEFAULT_WRITE_LATENCY,
    },
    "resources": ["socketA", "socketB", "socketC"],
    "sources": [
        {"kind": "scripted", "target": "socketA", "items": ["sample data A"], "initial_delay": 5.0},
        {"kind": "scripted", "target": "socketB", "items": ["sample data B"], "initial_delay": 8.0},
    ],
}


def deep_merge(source: dict, destination: dict) -> dict:
    """Merge ``source`` into ``destination`` recursively; ``source`` wins."""
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(destination.get(key), dict):
            destination[key] = deep_merge(value, destination[key])
        else:
            destination[key] = value
    return destination


def load_config(path: str | None = None) -> dict[str, Any]:
    """Return the defaults merged with the YAML file at ``path``.

    A missing file is logged and skipped.  Malformed YAML raises
    ``yaml.YAMLError``.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config
    if not os.path.isfile(path):
        log.warning("Config file %s not found, using defaults", path)
        return config

    with open(path, "r", encoding="utf-8") as f:
        file_config = yaml.safe_load(f) or {}
    if not isinstance(file_config, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    log.info("Loaded config from %s", path)
    return deep_merge(file_config, config)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger.  ``level`` must be one of ``LOG_LEVELS``."""
    level = str(level).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {LOG_LEVELS}")
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def build_sources(config: dict[str, Any]) -> list[EventSource]:
    """Turn the ``sources`` mappings of ``config`` into event sources."""
    sources: list[EventSource] = []
    for entry in config.get("sources") or []:
        kind = entry.get("kind")
        if kind == "scripted":
            sources.append(ScriptedSource(
                target=str(entry["target"]),
                items=entry.get("items", []),
                delay=float(entry.get("delay", 0.0)),
                initial_delay=float(entry.get("initial_delay", DEFAULT_DELAY)),
            ))
        elif kind == "ticker":
            sources.append(TickerSource(
                target=str(entry["target"]),
                interval=float(entry["interval"]),
                prefix=entry.get("prefix", "tick"),
                limit=entry.get("limit"),
            ))
        else:
            raise ValueError(f"Unknown source kind {kind!r}")
    return sources

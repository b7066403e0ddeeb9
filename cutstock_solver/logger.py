# cutstock_solver/logger.py
# Lightweight logging utilities for the solvers.
# Engines never print: they emit SolveEvent records into an optional sink.
# logger_sink() renders those events through the prefix Logger when wanted.

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class Logger:
    enabled: bool = True
    prefix: str = "[CUT]"

    def info(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def warn(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} WARNING: {msg}", file=sys.stderr)

    def error(self, msg: str) -> None:
        print(f"{self.prefix} ERROR: {msg}", file=sys.stderr)


# Global default logger
LOGGER = Logger(enabled=True)


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def get_logger() -> Logger:
    return LOGGER


# ----------------------------
# Structured events
# ----------------------------

@dataclass(frozen=True)
class SolveEvent:
    kind: str                 # "seed", "improved", "terminated", "strategy", ...
    engine: str               # "dfs", "heuristic", "cpsat", "run"
    data: Dict[str, Any] = field(default_factory=dict)


EventSink = Callable[[SolveEvent], None]


def emit(sink: Optional[EventSink], kind: str, engine: str, **data: Any) -> None:
    if sink is not None:
        sink(SolveEvent(kind=kind, engine=engine, data=data))


class EventRecorder:
    """Sink that keeps every event in memory."""

    def __init__(self) -> None:
        self.events: List[SolveEvent] = []

    def __call__(self, event: SolveEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> List[SolveEvent]:
        return [e for e in self.events if e.kind == kind]

    def last(self, kind: str) -> Optional[SolveEvent]:
        found = self.of_kind(kind)
        return found[-1] if found else None


_WARN_KINDS = ("supply_insufficient", "invariant_violation")


def format_event(event: SolveEvent) -> str:
    bits = " ".join(f"{k}={v}" for k, v in event.data.items())
    return f"{event.engine}: {event.kind} {bits}".rstrip()


def logger_sink(logger: Optional[Logger] = None) -> EventSink:
    """Build a sink that prints events through a Logger."""
    log = logger or get_logger()

    def _sink(event: SolveEvent) -> None:
        if event.kind in _WARN_KINDS:
            log.warn(format_event(event))
        else:
            log.info(format_event(event))

    return _sink


def tee(*sinks: Optional[EventSink]) -> EventSink:
    """Fan one event stream out to several sinks."""
    live = [s for s in sinks if s is not None]

    def _sink(event: SolveEvent) -> None:
        for s in live:
            s(event)

    return _sink

"""Aggregator: turns accepted raw events into entries and records them."""

import threading
from datetime import datetime
from typing import Callable

from logspace.filter import EventFilter
from logspace.models import LogEntry, RawEvent
from logspace.severity import Severity, severity_for_kind
from logspace.store import RetentionStore


class Aggregator:
    def __init__(self, event_filter: EventFilter, store: RetentionStore,
                 clock: Callable[[], datetime] | None = None):
        self._filter = event_filter
        self._store = store
        self._clock = clock or datetime.now
        self._accepted = 0
        self._rejected = 0
        self._counter_lock = threading.Lock()

    @property
    def accepted(self) -> int:
        return self._accepted

    @property
    def rejected(self) -> int:
        return self._rejected

    def handle(self, event: RawEvent) -> LogEntry | None:
        """Filter, build and record one event. Rejected events are dropped silently."""
        parsed = self._filter.accept(event)
        if parsed is None:
            with self._counter_lock:
                self._rejected += 1
            return None

        category, message = parsed
        severity = severity_for_kind(event.kind)
        entry = LogEntry(
            timestamp=self._clock(),
            severity=severity,
            category=category,
            message=message,
            stack_trace=event.stack_trace if severity == Severity.ERROR else None,
        )
        self._store.record(entry)
        with self._counter_lock:
            self._accepted += 1
        return entry

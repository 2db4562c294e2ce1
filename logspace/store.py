"""Retention store: forced error partition plus a bounded FIFO for everything else."""

import collections
import threading

from logspace.models import LogEntry
from logspace.severity import Severity


def _check_capacity(general_capacity):
    if isinstance(general_capacity, bool) or not isinstance(general_capacity, int) or general_capacity <= 0:
        raise ValueError(f"general_capacity must be a positive integer, got {general_capacity!r}")


class RetentionStore:
    """Thread-safe two-partition buffer guarded by a single lock.

    Error entries are never evicted. Info and Warning entries live in a
    deque bounded by ``general_capacity``; appending past the bound drops
    the oldest entry.
    """

    def __init__(self, general_capacity: int = 100):
        _check_capacity(general_capacity)
        self._errors: list[LogEntry] = []
        self._general: collections.deque[LogEntry] = collections.deque(maxlen=general_capacity)
        self._lock = threading.Lock()

    def record(self, entry: LogEntry):
        """Route an entry into its partition."""
        with self._lock:
            if entry.severity == Severity.ERROR:
                self._errors.append(entry)
            else:
                self._general.append(entry)

    def snapshot(self) -> tuple[list[LogEntry], list[LogEntry]]:
        """Return point-in-time copies of (errors, general)."""
        with self._lock:
            return list(self._errors), list(self._general)

    def counts(self) -> tuple[int, int]:
        with self._lock:
            return len(self._errors), len(self._general)

    def recent_errors(self, n: int = 10) -> list[LogEntry]:
        """Return the N most recent error entries, oldest first."""
        if n <= 0:
            return []
        with self._lock:
            return self._errors[-n:]

    def resize(self, general_capacity: int):
        """Change the general bound, keeping the newest entries."""
        _check_capacity(general_capacity)
        with self._lock:
            self._general = collections.deque(self._general, maxlen=general_capacity)

    @property
    def general_capacity(self) -> int:
        return self._general.maxlen

"""Raw source events and the immutable entries retained from them."""

from dataclasses import dataclass
from datetime import datetime

from logspace.severity import EventKind, Severity


@dataclass(frozen=True)
class RawEvent:
    kind: EventKind
    text: str                       # expected form: "[category] message"
    stack_trace: str | None = None


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    severity: Severity
    category: str
    message: str
    stack_trace: str | None = None


def format_entry(entry: LogEntry) -> str:
    """Render one entry as ``[HH:MM:SS][Severity][category] message``, plus its stack trace."""
    line = f"[{entry.timestamp:%H:%M:%S}][{entry.severity.label}][{entry.category}] {entry.message}"
    if entry.stack_trace:
        line += f"\nStack Trace:\n{entry.stack_trace.rstrip()}"
    return line

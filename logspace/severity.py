"""Severity scale and the collapse of event-source kinds into it."""

import logging
from enum import Enum, IntEnum


class Severity(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2

    @property
    def label(self) -> str:
        """Display name used in reports, e.g. ``Warning``."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label


class EventKind(str, Enum):
    """Kinds an event source can raise. Richer than Severity on purpose."""

    LOG = "log"
    WARNING = "warning"
    ASSERT = "assert"
    ERROR = "error"
    EXCEPTION = "exception"


_KIND_TO_SEVERITY = {
    EventKind.LOG: Severity.INFO,
    EventKind.WARNING: Severity.WARNING,
    EventKind.ASSERT: Severity.ERROR,
    EventKind.ERROR: Severity.ERROR,
    EventKind.EXCEPTION: Severity.ERROR,
}

_SEVERITY_TO_KIND = {
    Severity.INFO: EventKind.LOG,
    Severity.WARNING: EventKind.WARNING,
    Severity.ERROR: EventKind.ERROR,
}

_KIND_TO_LEVELNO = {
    EventKind.LOG: logging.INFO,
    EventKind.WARNING: logging.WARNING,
    EventKind.ASSERT: logging.ERROR,
    EventKind.ERROR: logging.ERROR,
    EventKind.EXCEPTION: logging.ERROR,
}


def severity_for_kind(kind) -> Severity:
    """Collapse an event kind into one of the three severities. Unknown kinds are Info."""
    return _KIND_TO_SEVERITY.get(kind, Severity.INFO)


def kind_for_severity(severity: Severity) -> EventKind:
    return _SEVERITY_TO_KIND[Severity(severity)]


def kind_for_levelno(levelno: int, has_exc_info: bool = False) -> EventKind:
    """Map a stdlib logging level (and exception presence) to an event kind."""
    if has_exc_info:
        return EventKind.EXCEPTION
    if levelno < logging.WARNING:
        return EventKind.LOG
    if levelno < logging.ERROR:
        return EventKind.WARNING
    return EventKind.ERROR


def levelno_for_kind(kind: EventKind) -> int:
    return _KIND_TO_LEVELNO.get(kind, logging.INFO)


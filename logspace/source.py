"""Event sources the manager subscribes to.

A source delivers ``RawEvent`` objects to its listeners. Two are provided:

* ``LocalEventSource``: a plain in-process listener list.
* ``LoggingEventSource``: bridges a stdlib ``logging.Logger`` by attaching
  a handler for as long as a listener is subscribed.
"""

import logging
import threading
import traceback
from typing import Callable

from logspace.models import RawEvent
from logspace.severity import EventKind, kind_for_levelno, levelno_for_kind

logger = logging.getLogger(__name__)

Listener = Callable[[RawEvent], None]

# LogRecord attribute carrying a caller-supplied stack trace through logging
STACK_TRACE_ATTR = "logspace_stack_trace"


class EventSource:
    """Subscribe/unsubscribe/emit contract shared by all sources."""

    def subscribe(self, listener: Listener):
        raise NotImplementedError

    def unsubscribe(self, listener: Listener):
        raise NotImplementedError

    def emit(self, kind: EventKind, text: str, stack_trace: str | None = None):
        raise NotImplementedError


class LocalEventSource(EventSource):
    def __init__(self):
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener):
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def emit(self, kind: EventKind, text: str, stack_trace: str | None = None):
        """Deliver one event to every listener. Listeners run outside the lock."""
        with self._lock:
            listeners = self._listeners[:]

        event = RawEvent(kind=kind, text=text, stack_trace=stack_trace)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed for %s event", listener, kind.value)


class _ForwardingHandler(logging.Handler):
    """Converts LogRecords into RawEvents for a single listener."""

    def __init__(self, listener: Listener, level: int = logging.NOTSET):
        super().__init__(level)
        self.listener = listener

    def emit(self, record: logging.LogRecord) -> None:
        try:
            has_exc = bool(record.exc_info and record.exc_info[0] is not None)
            if has_exc:
                stack = "".join(traceback.format_exception(*record.exc_info))
            else:
                stack = getattr(record, STACK_TRACE_ATTR, None) or record.stack_info
            event = RawEvent(
                kind=kind_for_levelno(record.levelno, has_exc),
                text=record.getMessage(),
                stack_trace=stack,
            )
            self.listener(event)
        except Exception:
            self.handleError(record)


class LoggingEventSource(EventSource):
    """Event source backed by a stdlib logger (the root logger by default)."""

    def __init__(self, target: logging.Logger | None = None):
        self._logger = target or logging.getLogger()
        self._handlers: dict[Listener, _ForwardingHandler] = {}
        self._saved_level: int | None = None
        self._lock = threading.Lock()

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def subscribe(self, listener: Listener):
        """Attach a forwarding handler.

        While anything is subscribed the wrapped logger lets Info records
        through, so severity filtering is left to the subscriber. The
        original level comes back on the last unsubscribe.
        """
        with self._lock:
            if listener in self._handlers:
                return
            if not self._handlers:
                self._saved_level = self._logger.level
                if self._logger.getEffectiveLevel() > logging.INFO:
                    self._logger.setLevel(logging.INFO)
            handler = _ForwardingHandler(listener)
            self._handlers[listener] = handler
            self._logger.addHandler(handler)

    def unsubscribe(self, listener: Listener):
        with self._lock:
            handler = self._handlers.pop(listener, None)
            if handler is None:
                return
            self._logger.removeHandler(handler)
            if not self._handlers and self._saved_level is not None:
                self._logger.setLevel(self._saved_level)
                self._saved_level = None

    def emit(self, kind: EventKind, text: str, stack_trace: str | None = None):
        """Log the text on the wrapped logger at the level matching ``kind``."""
        self._logger.log(levelno_for_kind(kind), text, extra={STACK_TRACE_ATTR: stack_trace})

"""LogManager: owns the subscription, the active config and the retention store."""

import logging
import os
import threading
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Callable

from logspace.aggregator import Aggregator
from logspace.capture import platform_subfolder, screenshot_filename
from logspace.config import Config, ConfigError, validate_config
from logspace.exporter import FileArtifactWriter, WriteResult, render_report, report_filename
from logspace.filter import EventFilter
from logspace.flusher import AutoFlusher
from logspace.models import RawEvent
from logspace.severity import Severity, kind_for_severity
from logspace.source import EventSource
from logspace.store import RetentionStore

logger = logging.getLogger(__name__)

SYSTEM_CATEGORY = "System"


class LifecycleState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    SHUTDOWN = "shutdown"


class LogManager:
    """Collects categorised log events from one event source.

    Construct one per process (or per test) and pass it around; there is
    no global instance. The store stays readable and exportable in every
    lifecycle state.
    """

    def __init__(self, writer=None, clock: Callable[[], datetime] | None = None):
        self._writer = writer or FileArtifactWriter()
        self._clock = clock or datetime.now
        self._config = Config()
        self._store = RetentionStore(self._config.general_capacity)
        self._aggregator: Aggregator | None = None
        self._source: EventSource | None = None
        self._flusher: AutoFlusher | None = None
        self._state = LifecycleState.UNINITIALIZED
        self._lifecycle_lock = threading.RLock()

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def config(self) -> Config:
        return self._config

    @property
    def store(self) -> RetentionStore:
        return self._store

    @property
    def aggregator(self) -> Aggregator | None:
        return self._aggregator

    # Lifecycle

    def initialize(self, source: EventSource, config: Config | None = None, **overrides) -> Config:
        """Validate the config, then (re)attach to ``source``.

        Keyword overrides are applied on top of ``config`` (or the defaults),
        e.g. ``initialize(src, categories={"Gameplay"}, general_capacity=50)``.
        Raises ConfigError before touching any state if validation fails.
        Re-initialising detaches the previous subscription first. If
        ``source.subscribe`` raises, the previous subscription is restored
        and the manager keeps its old config and state.
        """
        try:
            candidate = replace(config or Config(), **overrides)
        except TypeError as e:
            raise ConfigError(str(e)) from e
        candidate = validate_config(candidate)

        with self._lifecycle_lock:
            previous = self._source
            if previous is not None:
                previous.unsubscribe(self._on_event)
            try:
                source.subscribe(self._on_event)
            except Exception:
                logger.error("Subscribing to %r failed, keeping the previous subscription", source)
                if previous is not None:
                    previous.subscribe(self._on_event)
                raise

            self._stop_flusher()
            self._config = candidate
            self._store.resize(candidate.general_capacity)
            self._aggregator = Aggregator(EventFilter(candidate), self._store, self._clock)
            self._source = source
            self._state = LifecycleState.ACTIVE

            if candidate.flush_interval_sec > 0:
                self._flusher = AutoFlusher(candidate.flush_interval_sec, self.save_report)
                self._flusher.start()

        logger.info("Initialized: categories=[%s], minimum level=%s, capacity=%d",
                    candidate.describe_categories(), candidate.minimum_severity.label,
                    candidate.general_capacity)
        self.write(Severity.INFO, "LogManager",
                   f"Initialized. Listening to categories [{candidate.describe_categories()}] "
                   f"with minimum level: {candidate.minimum_severity.label}.")
        return candidate

    def shutdown(self):
        """Stop listening. Retained entries stay exportable."""
        with self._lifecycle_lock:
            if self._state is not LifecycleState.ACTIVE:
                logger.warning("Shutdown requested while %s, ignoring", self._state.value)
                return
            self.write(Severity.INFO, "LogManager", "Shutdown and stopped listening.")
            self._detach()
            self._state = LifecycleState.SHUTDOWN
        logger.info("Shutdown complete")

    def _stop_flusher(self):
        if self._flusher is not None:
            self._flusher.stop()
            self._flusher = None

    def _detach(self):
        self._stop_flusher()
        if self._source is not None:
            self._source.unsubscribe(self._on_event)
            self._source = None

    def _on_event(self, event: RawEvent):
        aggregator = self._aggregator
        if aggregator is not None:
            aggregator.handle(event)

    # Public logging entry point

    def write(self, severity: Severity, category: str, message: str,
              stack_trace: str | None = None):
        """Emit ``"[category] message"`` through the attached source."""
        source = self._source
        if source is None:
            logger.debug("Dropping [%s] %s: not initialized", category, message)
            return
        source.emit(kind_for_severity(severity), f"[{category}] {message}", stack_trace)

    # Export

    def snapshot_counts(self) -> tuple[int, int]:
        """Return (error_count, general_count)."""
        return self._store.counts()

    def export_report(self) -> str:
        errors, general = self._store.snapshot()
        return render_report(errors, general, self._config, self._clock())

    def save_report(self) -> WriteResult:
        """Render the report and hand it to the artifact writer."""
        config = self._config
        now = self._clock()
        errors, general = self._store.snapshot()
        text = render_report(errors, general, config, now)
        result = self._safe_write(report_filename(config.file_prefix, now), text, config.log_dir)

        if result.ok:
            logger.info("Saved report (%d errors, %d general) to %s",
                        len(errors), len(general), result.path)
            self.write(Severity.INFO, SYSTEM_CATEGORY, f"Log file saved to: {result.path}")
        else:
            logger.error("Saving report to %s failed: %s", result.path, result.reason)
            self.write(Severity.ERROR, SYSTEM_CATEGORY, f"Log file save failed: {result.reason}")
        return result

    def capture_screenshot(self, capture: Callable[[], bytes]) -> WriteResult:
        """Grab an image via ``capture`` and store it next to the reports."""
        config = self._config
        now = self._clock()
        name = screenshot_filename(now)
        destination = os.path.join(config.log_dir, platform_subfolder())

        try:
            image = capture()
        except Exception as e:
            logger.exception("Screenshot capture failed")
            result = WriteResult(ok=False, path=name, reason=str(e))
        else:
            result = self._safe_write(name, image, destination)

        if result.ok:
            self.write(Severity.INFO, SYSTEM_CATEGORY, f"Screenshot saved to: {result.path}")
        else:
            self.write(Severity.ERROR, SYSTEM_CATEGORY, f"Screenshot capture failed: {result.reason}")
        return result

    def _safe_write(self, name: str, content, destination: str) -> WriteResult:
        try:
            return self._writer.write(name, content, destination)
        except Exception as e:
            logger.exception("Artifact writer failed for %s", name)
            return WriteResult(ok=False, path=name, reason=str(e))

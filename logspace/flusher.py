"""Background thread that saves a report every N seconds."""

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class AutoFlusher:
    def __init__(self, interval_sec: float, flush: Callable[[], object]):
        self._interval = interval_sec
        self._flush = flush
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name="logspace-flusher", daemon=True)

    def start(self):
        self._thread.start()
        logger.info("Periodic flush every %.1fs", self._interval)

    def stop(self):
        """Signal the thread to exit and wait for it."""
        self._stop_event.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=5)

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop_event.is_set()

    def _run(self):
        while not self._stop_event.wait(timeout=self._interval):
            try:
                self._flush()
            except Exception:
                logger.exception("Periodic flush failed")

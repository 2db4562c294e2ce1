"""In-process log capture with category filtering and bounded retention."""

from logspace.config import Config, ConfigError
from logspace.manager import LogManager
from logspace.severity import EventKind, Severity

__all__ = ["Config", "ConfigError", "EventKind", "LogManager", "Severity"]

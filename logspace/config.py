"""Configuration: frozen dataclass built from defaults, an optional YAML file and env vars."""

import os
import logging
from dataclasses import dataclass, replace

import yaml

from logspace.severity import Severity

logger = logging.getLogger(__name__)

_SEVERITY_ALIASES = {"WARN": Severity.WARNING}


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


@dataclass(frozen=True)
class Config:
    categories: frozenset[str] | None = None  # None listens to every category
    minimum_severity: Severity = Severity.INFO
    general_capacity: int = 100
    file_prefix: str = "LogSpace"
    log_dir: str = "GameLogs"
    flush_interval_sec: float = 0.0  # 0 disables periodic flushing

    def describe_categories(self) -> str:
        if self.categories is None:
            return "All"
        return ", ".join(sorted(self.categories))


def parse_severity(value) -> Severity:
    """Accept a Severity, a case-insensitive name or an int."""
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        normalized = value.strip().upper()
        if normalized in Severity.__members__:
            return Severity[normalized]
        if normalized in _SEVERITY_ALIASES:
            return _SEVERITY_ALIASES[normalized]
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return Severity(value)
        except ValueError:
            pass
    raise ConfigError(f"Unknown severity: {value!r}")


def _parse_categories(value) -> frozenset[str] | None:
    """Comma-separated string or iterable of names. Empty, ``*`` or None means all."""
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        if stripped in ("", "*"):
            return None
        return frozenset(part.strip() for part in stripped.split(","))
    try:
        return frozenset(value)
    except TypeError as e:
        raise ConfigError(f"categories must be a list of names, got {value!r}") from e


def validate_config(config: Config) -> Config:
    """Check every field and return a normalised copy. Raises ConfigError."""
    capacity = config.general_capacity
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ConfigError(f"general_capacity must be a positive integer, got {capacity!r}")

    if not isinstance(config.minimum_severity, Severity):
        raise ConfigError(f"minimum_severity must be a Severity, got {config.minimum_severity!r}")

    categories = config.categories
    if categories is not None:
        if isinstance(categories, str):
            raise ConfigError("categories must be a collection of names, not a single string")
        categories = frozenset(categories)
        for name in categories:
            if not isinstance(name, str) or not name:
                raise ConfigError(f"category names must be non-empty strings, got {name!r}")

    if not isinstance(config.file_prefix, str) or not config.file_prefix:
        raise ConfigError(f"file_prefix must be a non-empty string, got {config.file_prefix!r}")

    if not isinstance(config.log_dir, str) or not config.log_dir:
        raise ConfigError(f"log_dir must be a non-empty string, got {config.log_dir!r}")

    interval = config.flush_interval_sec
    if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval < 0:
        raise ConfigError(f"flush_interval_sec must be >= 0, got {interval!r}")

    return replace(config, categories=categories)


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or file missing."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from defaults, then YAML keys, then environment variables."""
    yaml_data = yaml_data or {}

    categories = _parse_categories(yaml_data.get("categories"))
    minimum = yaml_data.get("minimum_level", Config.minimum_severity)
    capacity = yaml_data.get("max_general_logs", Config.general_capacity)
    prefix = yaml_data.get("file_prefix", Config.file_prefix)
    log_dir = yaml_data.get("log_dir", Config.log_dir)
    interval = yaml_data.get("flush_interval_sec", Config.flush_interval_sec)

    if "LOG_CATEGORIES" in os.environ:
        categories = _parse_categories(os.environ["LOG_CATEGORIES"])

    # Only env strings are coerced; YAML values go to validate_config as-is
    try:
        if "MAX_GENERAL_LOGS" in os.environ:
            capacity = int(os.environ["MAX_GENERAL_LOGS"])
        if "FLUSH_INTERVAL_SEC" in os.environ:
            interval = float(os.environ["FLUSH_INTERVAL_SEC"])
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e)) from e

    config = Config(
        categories=categories,
        minimum_severity=parse_severity(os.environ.get("MIN_LOG_LEVEL", minimum)),
        general_capacity=capacity,
        file_prefix=os.environ.get("LOG_FILE_PREFIX", prefix),
        log_dir=os.environ.get("LOG_DIR", log_dir),
        flush_interval_sec=interval,
    )
    return validate_config(config)

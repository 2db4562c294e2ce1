"""Naming helpers for auxiliary capture artifacts (screenshots)."""

import sys
from datetime import datetime

from logspace.exporter import FILE_TIMESTAMP_FORMAT

_MOBILE_PLATFORMS = ("android", "ios")


def platform_subfolder(platform: str | None = None) -> str:
    """``Mobile`` on Android/iOS, ``PC`` everywhere else."""
    platform = (platform or sys.platform).lower()
    if platform.startswith(_MOBILE_PLATFORMS):
        return "Mobile"
    return "PC"


def screenshot_filename(now: datetime) -> str:
    return f"Screenshot_{now.strftime(FILE_TIMESTAMP_FORMAT)}.png"

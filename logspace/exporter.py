"""Report rendering and the file-system artifact writer."""

import os
import logging
from dataclasses import dataclass
from datetime import datetime

from logspace.config import Config
from logspace.models import LogEntry, format_entry

logger = logging.getLogger(__name__)

FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


@dataclass(frozen=True)
class WriteResult:
    ok: bool
    path: str
    reason: str = ""


def report_filename(prefix: str, now: datetime) -> str:
    return f"{prefix}_{now.strftime(FILE_TIMESTAMP_FORMAT)}.txt"


def render_report(errors: list[LogEntry], general: list[LogEntry], config: Config,
                  generated_at: datetime) -> str:
    """Build the plain-text dump: header, error section, general section."""
    lines = [
        f"Log generated on {generated_at:%Y-%m-%d %H:%M:%S}",
        f"Listening to categories: [{config.describe_categories()}] "
        f"with minimum level: {config.minimum_severity.label}",
        "",
        "========== ERROR LOGS (forced retention) ==========",
    ]
    lines.extend(format_entry(entry) for entry in errors)
    lines.append("")
    lines.append(f"========== GENERAL LOGS (max {config.general_capacity}) ==========")
    lines.extend(format_entry(entry) for entry in general[-config.general_capacity:])
    return "\n".join(lines) + "\n"


class FileArtifactWriter:
    """Writes named blobs into a directory, creating it on demand."""

    def __init__(self, base_dir: str = "."):
        self._base_dir = base_dir

    def write(self, name: str, content: str | bytes, destination: str) -> WriteResult:
        """Persist ``content`` as ``destination/name``. Never raises on I/O errors."""
        directory = os.path.join(self._base_dir, destination)
        path = os.path.join(directory, name)
        try:
            os.makedirs(directory, exist_ok=True)
            if isinstance(content, bytes):
                with open(path, "wb") as f:
                    f.write(content)
            else:
                with open(path, "w", encoding="utf-8") as f:
                    f.write(content)
        except OSError as e:
            logger.warning("Failed to write %s: %s", path, e)
            return WriteResult(ok=False, path=path, reason=str(e))

        logger.debug("Wrote %d bytes to %s", len(content), path)
        return WriteResult(ok=True, path=path)

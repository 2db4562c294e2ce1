"""Event filtering: severity threshold first, then the category tag and allow-list."""

from logspace.config import Config
from logspace.models import RawEvent
from logspace.severity import severity_for_kind


def parse_category(text: str) -> tuple[str, str] | None:
    """Split ``"[category] message"`` into (category, message).

    Returns None when the text does not start with ``[``, has no closing ``]``,
    or the tag is empty.
    """
    if not text.startswith("["):
        return None
    closing = text.find("]")
    if closing <= 1:
        return None
    return text[1:closing], text[closing + 1:].lstrip()


class EventFilter:
    def __init__(self, config: Config):
        self._minimum = config.minimum_severity
        self._categories = config.categories

    def accept(self, event: RawEvent) -> tuple[str, str] | None:
        """Return (category, message) for events that pass, None for rejected ones."""
        if severity_for_kind(event.kind) < self._minimum:
            return None

        parsed = parse_category(event.text)
        if parsed is None:
            return None

        category, _ = parsed
        if self._categories is not None and category not in self._categories:
            return None
        return parsed

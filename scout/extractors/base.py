"""Base classes for format extractors."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import ExtractedContent


class ExtractionError(RuntimeError):
    """Raised when a file cannot be read by its format extractor."""


class Extractor(ABC):
    """Contract for readers that turn a file into a bounded preview."""

    category: str = "unknown"

    @abstractmethod
    def extract(self, path: Path) -> ExtractedContent:
        """Return the preview and details for ``path`` or raise ExtractionError."""


def read_text(path: Path) -> str:
    """Read a file as UTF-8, replacing undecodable bytes."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExtractionError(f"Unable to read {path.name}: {exc}") from exc


def truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text

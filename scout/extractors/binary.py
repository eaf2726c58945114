"""Metadata-only extractor for binary and media files."""

from __future__ import annotations

from pathlib import Path

from ..models import BinaryDetails, ExtractedContent
from .base import ExtractionError, Extractor


class BinaryExtractor(Extractor):
    """Records the byte size of files without a readable preview."""

    category = "binary"

    def extract(self, path: Path) -> ExtractedContent:
        try:
            size = path.stat().st_size
        except OSError as exc:
            raise ExtractionError(f"Unable to stat {path.name}: {exc}") from exc
        return ExtractedContent(
            category=self.category,
            preview="",
            lines=0,
            details=BinaryDetails(size_bytes=size),
        )


__all__ = ["BinaryExtractor"]

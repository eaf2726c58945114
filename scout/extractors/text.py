"""Extractors for prose and structured plain-text files."""

from __future__ import annotations

from pathlib import Path

from ..models import ExtractedContent, MarkdownDetails, TextDetails
from .base import ExtractionError, Extractor, read_text

PREVIEW_LINES = 20
PREVIEW_BYTES = 1000


class MarkdownExtractor(Extractor):
    """Previews Markdown and text documents and captures the first heading."""

    category = "markdown"

    def extract(self, path: Path) -> ExtractedContent:
        lines = read_text(path).split("\n")
        title = ""
        for line in lines:
            if line.startswith("# "):
                title = line[2:].strip()
                break
        return ExtractedContent(
            category=self.category,
            preview="\n".join(lines[:PREVIEW_LINES]),
            lines=len(lines),
            details=MarkdownDetails(title=title),
        )


class GenericTextExtractor(Extractor):
    """Reads a bounded head of any text-like file."""

    category = "text"

    def extract(self, path: Path) -> ExtractedContent:
        try:
            with path.open("rb") as handle:
                head = handle.read(PREVIEW_BYTES)
        except OSError as exc:
            raise ExtractionError(f"Unable to read {path.name}: {exc}") from exc

        text = head.decode("utf-8", errors="replace")
        preview = "\n".join(text.split("\n")[:PREVIEW_LINES])
        return ExtractedContent(
            category=self.category,
            preview=preview,
            lines=text.count("\n"),
            details=TextDetails(format=path.suffix.lower().lstrip(".") or "text"),
        )


__all__ = ["GenericTextExtractor", "MarkdownExtractor"]

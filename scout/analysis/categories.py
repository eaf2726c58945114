"""Buckets file summaries into semantic categories."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable

from ..filetypes import (
    ARCHIVE_EXTENSIONS,
    AUDIO_EXTENSIONS,
    CODE_EXTENSIONS,
    CONFIG_EXTENSIONS,
    CONFIG_FILENAMES,
    IMAGE_EXTENSIONS,
    PDF_EXTENSIONS,
    PLAIN_TEXT_EXTENSIONS,
    PRESENTATION_EXTENSIONS,
    SPREADSHEET_EXTENSIONS,
    VIDEO_EXTENSIONS,
    WORD_EXTENSIONS,
)
from ..models import FileSummary

# Evaluated in order; the first matching rule wins.
_EXTENSION_RULES: tuple[tuple[str, frozenset[str]], ...] = (
    ("pdf", PDF_EXTENSIONS),
    ("word", WORD_EXTENSIONS),
    ("spreadsheet", SPREADSHEET_EXTENSIONS),
    ("presentation", PRESENTATION_EXTENSIONS),
    ("text", PLAIN_TEXT_EXTENSIONS),
    ("image", IMAGE_EXTENSIONS),
    ("video", VIDEO_EXTENSIONS),
    ("audio", AUDIO_EXTENSIONS),
    ("archive", ARCHIVE_EXTENSIONS),
)


def categorize(extension: str, name: str) -> str:
    """Return the single category a file belongs to."""
    ext = extension.lower()
    lowered = name.lower()
    if ext in CODE_EXTENSIONS:
        return "code"
    if ext in CONFIG_EXTENSIONS or lowered in CONFIG_FILENAMES:
        return "config"
    for category, extensions in _EXTENSION_RULES:
        if ext in extensions:
            return category
    return "other"


def categorize_files(files: Iterable[FileSummary]) -> Dict[str, int]:
    """Return a category -> count histogram for the given summaries."""
    counts: Counter[str] = Counter()
    for file in files:
        counts[categorize(file.extension, file.name)] += 1
    return dict(counts)


__all__ = ["categorize", "categorize_files"]

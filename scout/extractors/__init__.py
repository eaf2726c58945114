"""Format extractors and the extension dispatch table."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Mapping

from ..filetypes import (
    BINARY_EXTENSIONS,
    CODE_EXTENSIONS,
    STRUCTURED_TEXT_EXTENSIONS,
    is_probably_text,
)
from ..models import ExtractedContent
from .base import ExtractionError, Extractor
from .binary import BinaryExtractor
from .code import CodeExtractor
from .document import DocxExtractor, PdfExtractor
from .spreadsheet import SpreadsheetExtractor
from .text import GenericTextExtractor, MarkdownExtractor

_CODE = CodeExtractor()
_PDF = PdfExtractor()
_DOCX = DocxExtractor()
_SPREADSHEET = SpreadsheetExtractor()
_MARKDOWN = MarkdownExtractor()
_GENERIC_TEXT = GenericTextExtractor()
_BINARY = BinaryExtractor()


def _build_dispatch_table() -> Dict[str, Extractor]:
    table: Dict[str, Extractor] = {}
    for ext in CODE_EXTENSIONS:
        table[ext] = _CODE
    table[".pdf"] = _PDF
    table[".docx"] = _DOCX
    table[".doc"] = _DOCX
    table[".xlsx"] = _SPREADSHEET
    table[".xls"] = _SPREADSHEET
    table[".md"] = _MARKDOWN
    table[".txt"] = _MARKDOWN
    for ext in STRUCTURED_TEXT_EXTENSIONS:
        table[ext] = _GENERIC_TEXT
    for ext in BINARY_EXTENSIONS:
        table[ext] = _BINARY
    return table


DISPATCH_TABLE: Mapping[str, Extractor] = _build_dispatch_table()


def detect_extractor(extension: str) -> Extractor:
    """Return the extractor responsible for files with ``extension``."""
    ext = extension.lower()
    extractor = DISPATCH_TABLE.get(ext)
    if extractor is not None:
        return extractor
    if is_probably_text(ext):
        return _GENERIC_TEXT
    return _BINARY


def extract_file(
    path: str | Path,
    *,
    resolver: Callable[[str], Extractor] = detect_extractor,
) -> ExtractedContent:
    """Run the extractor matching the file's extension."""
    file_path = Path(path)
    return resolver(file_path.suffix).extract(file_path)


__all__ = [
    "BinaryExtractor",
    "CodeExtractor",
    "DISPATCH_TABLE",
    "DocxExtractor",
    "ExtractionError",
    "Extractor",
    "GenericTextExtractor",
    "MarkdownExtractor",
    "PdfExtractor",
    "SpreadsheetExtractor",
    "detect_extractor",
    "extract_file",
]

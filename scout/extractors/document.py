"""Extractors for PDF and Word documents."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import List

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import DependencyError, PyPdfError

from ..logging import get_logger
from ..models import DocxDetails, ExtractedContent, PdfDetails
from .base import ExtractionError, Extractor, truncate

logger = get_logger("extractors.document")

PREVIEW_CHARS = 1000
PDF_MAX_PAGES = 3

UNREADABLE_PDF_PREVIEW = "[PDF content could not be extracted - likely encrypted or unsupported format]"
IMAGE_ONLY_PDF_PREVIEW = "[Scanned PDF or Image-based - No text extracted]"


class PdfExtractor(Extractor):
    """Reads plain text from the first pages of a PDF."""

    category = "document"

    def extract(self, path: Path) -> ExtractedContent:
        try:
            reader = PdfReader(str(path), strict=False)
            if reader.is_encrypted and not reader.decrypt(""):
                return self._unreadable(path, "encrypted")
            page_count = len(reader.pages)
        except OSError as exc:
            raise ExtractionError(f"Unable to read {path.name}: {exc}") from exc
        except (PyPdfError, DependencyError, ValueError, KeyError) as exc:
            return self._unreadable(path, str(exc))

        chunks: List[str] = []
        for index in range(min(page_count, PDF_MAX_PAGES)):
            try:
                text = reader.pages[index].extract_text() or ""
            except (PyPdfError, DependencyError, ValueError, KeyError) as exc:
                logger.debug("Skipping page %d of %s: %s", index + 1, path.name, exc)
                continue
            chunks.append(text)
            chunks.append("\n")

        preview = truncate("".join(chunks), PREVIEW_CHARS)
        if not preview.strip():
            preview = IMAGE_ONLY_PDF_PREVIEW

        return ExtractedContent(
            category=self.category,
            preview=preview,
            details=PdfDetails(pages=page_count),
        )

    def _unreadable(self, path: Path, reason: str) -> ExtractedContent:
        logger.debug("PDF %s could not be read: %s", path.name, reason)
        return ExtractedContent(
            category=self.category,
            preview=UNREADABLE_PDF_PREVIEW,
            details=PdfDetails(error="read_failed"),
        )


class DocxExtractor(Extractor):
    """Joins the non-empty paragraphs of a Word document."""

    category = "document"

    def extract(self, path: Path) -> ExtractedContent:
        try:
            document = Document(str(path))
        except PackageNotFoundError as exc:
            raise ExtractionError(f"Unable to open {path.name} as a Word package: {exc}") from exc
        except (OSError, zipfile.BadZipFile, SyntaxError, KeyError, ValueError) as exc:
            raise ExtractionError(f"Malformed Word document {path.name}: {exc}") from exc

        paragraphs = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]
        return ExtractedContent(
            category=self.category,
            preview=truncate("\n".join(paragraphs), PREVIEW_CHARS),
            details=DocxDetails(paragraphs=len(paragraphs)),
        )


__all__ = ["DocxExtractor", "PdfExtractor"]

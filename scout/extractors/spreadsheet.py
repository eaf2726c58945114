"""Extractor for Excel workbooks."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

import openpyxl
import xlrd
from openpyxl.utils.exceptions import InvalidFileException

from ..models import ExtractedContent, SpreadsheetDetails
from .base import ExtractionError, Extractor

PREVIEW_ROWS = 6

# Malformed workbook XML surfaces as SyntaxError from either xml.etree or lxml.
_XLSX_ERRORS = (
    OSError,
    InvalidFileException,
    zipfile.BadZipFile,
    SyntaxError,
    KeyError,
    ValueError,
)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_row(values: Sequence[Any]) -> str:
    cells = [_cell_text(value) for value in values]
    while cells and not cells[-1]:
        cells.pop()
    return " | ".join(cells)


def _summarise_rows(rows: Iterable[Sequence[Any]]) -> Tuple[List[str], int]:
    preview: List[str] = []
    total = 0
    for row in rows:
        total += 1
        if len(preview) < PREVIEW_ROWS:
            preview.append(_format_row(row))
    return preview, total


class SpreadsheetExtractor(Extractor):
    """Renders the top rows of the first worksheet as pipe-joined text."""

    category = "spreadsheet"

    def extract(self, path: Path) -> ExtractedContent:
        if path.suffix.lower() == ".xls":
            sheet_name, preview, total = self._read_xls(path)
        else:
            sheet_name, preview, total = self._read_xlsx(path)

        return ExtractedContent(
            category=self.category,
            preview="".join(f"{line}\n" for line in preview),
            details=SpreadsheetDetails(sheet_name=sheet_name, total_rows=total),
        )

    @staticmethod
    def _read_xlsx(path: Path) -> Tuple[str, List[str], int]:
        try:
            workbook = openpyxl.load_workbook(str(path), read_only=True, data_only=True)
        except _XLSX_ERRORS as exc:
            raise ExtractionError(f"Unable to open workbook {path.name}: {exc}") from exc
        try:
            if not workbook.sheetnames:
                return "", [], 0
            sheet = workbook[workbook.sheetnames[0]]
            preview, total = _summarise_rows(sheet.iter_rows(values_only=True))
            return sheet.title, preview, total
        except _XLSX_ERRORS as exc:
            raise ExtractionError(f"Unable to read worksheet in {path.name}: {exc}") from exc
        finally:
            workbook.close()

    @staticmethod
    def _read_xls(path: Path) -> Tuple[str, List[str], int]:
        try:
            workbook = xlrd.open_workbook(str(path), on_demand=True)
        except (OSError, xlrd.XLRDError) as exc:
            raise ExtractionError(f"Unable to open workbook {path.name}: {exc}") from exc
        try:
            if workbook.nsheets == 0:
                return "", [], 0
            sheet = workbook.sheet_by_index(0)
            rows = (sheet.row_values(index) for index in range(sheet.nrows))
            preview, total = _summarise_rows(rows)
            return sheet.name, preview, total
        finally:
            workbook.release_resources()


__all__ = ["SpreadsheetExtractor"]

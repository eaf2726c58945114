"""Extractor for source code files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..models import CodeDetails, ExtractedContent
from .base import Extractor, read_text

PREVIEW_LINES = 30

IMPORT_PREFIXES: tuple[str, ...] = (
    "import ",
    "from ",
    "#include",
    "use ",
    "using ",
    "require ",
    "package ",
    "extern crate ",
)


def extract_imports(lines: Iterable[str]) -> List[str]:
    """Return lines that look like import or include statements."""
    imports: List[str] = []
    for line in lines:
        stripped = line.strip()
        if stripped.startswith(IMPORT_PREFIXES):
            imports.append(stripped)
    return imports


class CodeExtractor(Extractor):
    """Previews the head of a source file and its import statements."""

    category = "code"

    def extract(self, path: Path) -> ExtractedContent:
        lines = read_text(path).split("\n")
        return ExtractedContent(
            category=self.category,
            preview="\n".join(lines[:PREVIEW_LINES]),
            lines=len(lines),
            details=CodeDetails(imports=extract_imports(lines)),
        )

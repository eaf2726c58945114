"""Core data models shared across scout components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class FileKind(str, Enum):
    """Type of filesystem entry produced by the scanner."""

    FILE = "file"
    DIRECTORY = "directory"


class Domain(str, Enum):
    """Inferred purpose of a scanned directory."""

    SOFTWARE = "software"
    DOCUMENTS = "documents"
    MEDIA = "media"
    STUDY = "study"
    FINANCIAL = "financial"
    CREATIVE = "creative"
    MIXED = "mixed"
    EMPTY = "empty"


@dataclass(frozen=True)
class FileDescriptor:
    """Metadata for a single entry discovered during the walk."""

    name: str
    path: str
    kind: FileKind
    extension: str
    size: int


@dataclass
class DirectoryScanResult:
    """Flat view of a directory tree produced by the scanner."""

    root: str
    files: List[FileDescriptor] = field(default_factory=list)
    subdirectories: List[str] = field(default_factory=list)

    def pretty(self) -> str:
        """Return a human-readable listing of files and subdirectories."""
        lines = [f"Directory: {self.root}", "", "Files:"]
        for entry in self.files:
            if entry.kind is FileKind.DIRECTORY:
                lines.append(f"  - {entry.name} (dir)")
                continue
            lines.append(f"  - {entry.name} ({entry.extension}, {entry.size} bytes)")
        lines.append("")
        lines.append("Subdirectories:")
        root = Path(self.root)
        for sub in self.subdirectories:
            try:
                rel = Path(sub).relative_to(root).as_posix()
            except ValueError:
                rel = sub
            lines.append(f"  - {rel}")
        return "\n".join(lines) + "\n"


# Extraction details, one structure per extractor family.


@dataclass(frozen=True)
class CodeDetails:
    imports: List[str] = field(default_factory=list)
    kind: str = field(default="code", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PdfDetails:
    pages: int = 0
    error: Optional[str] = None
    kind: str = field(default="pdf", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DocxDetails:
    paragraphs: int = 0
    kind: str = field(default="docx", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SpreadsheetDetails:
    sheet_name: str = ""
    total_rows: int = 0
    kind: str = field(default="spreadsheet", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MarkdownDetails:
    title: str = ""
    kind: str = field(default="markdown", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TextDetails:
    format: str = "text"
    kind: str = field(default="text", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BinaryDetails:
    size_bytes: int = 0
    kind: str = field(default="binary", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


ExtractionDetails = Union[
    CodeDetails,
    PdfDetails,
    DocxDetails,
    SpreadsheetDetails,
    MarkdownDetails,
    TextDetails,
    BinaryDetails,
]


@dataclass(frozen=True)
class ExtractedContent:
    """Bounded peek into a file produced by exactly one extractor."""

    category: str
    preview: str
    details: ExtractionDetails
    lines: Optional[int] = None


@dataclass
class FileSummary:
    """Per-file result of the extraction phase."""

    name: str
    extension: str
    size: int
    category: str = "unknown"
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def from_content(cls, descriptor: FileDescriptor, content: ExtractedContent) -> "FileSummary":
        return cls(
            name=descriptor.name,
            extension=descriptor.extension,
            size=descriptor.size,
            category=content.category,
            metadata={
                "preview": content.preview,
                "lines": content.lines,
                "details": content.details.to_dict(),
            },
        )

    @classmethod
    def unknown(cls, descriptor: FileDescriptor) -> "FileSummary":
        return cls(name=descriptor.name, extension=descriptor.extension, size=descriptor.size)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "extension": self.extension,
            "type": self.category,
            "size_bytes": self.size,
        }
        if self.metadata is not None:
            payload["metadata"] = self.metadata
        return payload


@dataclass
class DirectorySummary:
    """Extraction-phase artifact handed to classification."""

    directory: str
    file_count: int
    subdirectories: List[str] = field(default_factory=list)
    files: List[FileSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directory": self.directory,
            "file_count": self.file_count,
            "subdirectories": list(self.subdirectories),
            "files": [item.to_dict() for item in self.files],
        }


@dataclass
class ContentInsight:
    """Classification and synthesis result for one scan."""

    domain: Domain
    confidence: float
    files_by_category: Dict[str, int] = field(default_factory=dict)
    topics: List[str] = field(default_factory=list)
    date_range: Optional[str] = None
    key_files: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain.value,
            "confidence": self.confidence,
            "files_by_category": dict(self.files_by_category),
            "topics": list(self.topics),
            "date_range": self.date_range,
            "key_files": list(self.key_files),
            "recommendations": list(self.recommendations),
        }


__all__ = [
    "BinaryDetails",
    "CodeDetails",
    "ContentInsight",
    "DirectoryScanResult",
    "DirectorySummary",
    "DocxDetails",
    "Domain",
    "ExtractedContent",
    "ExtractionDetails",
    "FileDescriptor",
    "FileKind",
    "FileSummary",
    "MarkdownDetails",
    "PdfDetails",
    "SpreadsheetDetails",
    "TextDetails",
]

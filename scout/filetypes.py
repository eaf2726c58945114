"""Extension and filename tables shared by extraction and categorization."""

from __future__ import annotations

CODE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".go",
        ".dart",
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".py",
        ".java",
        ".kt",
        ".rb",
        ".rs",
        ".c",
        ".cc",
        ".cpp",
        ".h",
        ".hpp",
        ".cu",
        ".cuh",
        ".cs",
        ".php",
        ".swift",
        ".scala",
    }
)

C_FAMILY_EXTENSIONS: frozenset[str] = frozenset({".c", ".cc", ".cpp", ".h", ".hpp"})
CUDA_EXTENSIONS: frozenset[str] = frozenset({".cu", ".cuh"})

CONFIG_EXTENSIONS: frozenset[str] = frozenset(
    {".json", ".yaml", ".yml", ".toml", ".xml", ".ini", ".cfg", ".conf"}
)
CONFIG_FILENAMES: frozenset[str] = frozenset({".env", ".gitignore", ".editorconfig", ".dockerignore"})

PDF_EXTENSIONS: frozenset[str] = frozenset({".pdf"})
WORD_EXTENSIONS: frozenset[str] = frozenset({".docx", ".doc"})
SPREADSHEET_EXTENSIONS: frozenset[str] = frozenset({".xlsx", ".xls", ".csv"})
PRESENTATION_EXTENSIONS: frozenset[str] = frozenset({".pptx", ".ppt"})
PLAIN_TEXT_EXTENSIONS: frozenset[str] = frozenset({".txt", ".md"})

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".svg", ".webp", ".heic"}
)
VIDEO_EXTENSIONS: frozenset[str] = frozenset(
    {".mp4", ".avi", ".mov", ".mkv", ".webm", ".flv", ".wmv"}
)
AUDIO_EXTENSIONS: frozenset[str] = frozenset(
    {".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma"}
)
ARCHIVE_EXTENSIONS: frozenset[str] = frozenset({".zip", ".rar", ".7z", ".tar", ".gz"})

# Structured formats routed to the generic text extractor.
STRUCTURED_TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {".json", ".yaml", ".yml", ".toml", ".env", ".xml", ".csv", ".cmake"}
)

# Formats that never yield a useful text preview.
BINARY_EXTENSIONS: frozenset[str] = (
    (IMAGE_EXTENSIONS - {".svg"})
    | VIDEO_EXTENSIONS
    | AUDIO_EXTENSIONS
    | ARCHIVE_EXTENSIONS
    | frozenset({".exe", ".dll", ".so", ".dylib", ".bin", ".dat", ".iso", ".dmg"})
)

# Extensions not otherwise dispatched that are still worth reading as text.
PROBABLY_TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".ini",
        ".cfg",
        ".conf",
        ".css",
        ".scss",
        ".html",
        ".htm",
        ".svg",
        ".sh",
        ".bash",
        ".zsh",
        ".ps1",
        ".bat",
        ".sql",
        ".rst",
        ".tex",
        ".log",
        ".properties",
        ".gradle",
        ".mod",
        ".sum",
        ".lock",
        ".tsv",
    }
)


def is_probably_text(extension: str) -> bool:
    """Return True when an otherwise unknown extension is likely plain text."""
    return extension.lower() in PROBABLY_TEXT_EXTENSIONS


__all__ = [
    "ARCHIVE_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "BINARY_EXTENSIONS",
    "CODE_EXTENSIONS",
    "CONFIG_EXTENSIONS",
    "CONFIG_FILENAMES",
    "CUDA_EXTENSIONS",
    "C_FAMILY_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "PDF_EXTENSIONS",
    "PLAIN_TEXT_EXTENSIONS",
    "PRESENTATION_EXTENSIONS",
    "PROBABLY_TEXT_EXTENSIONS",
    "SPREADSHEET_EXTENSIONS",
    "STRUCTURED_TEXT_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "WORD_EXTENSIONS",
    "is_probably_text",
]

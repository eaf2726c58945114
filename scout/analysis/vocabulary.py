"""Keyword and marker tables that drive classification and synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Sequence, Tuple

STUDY_KEYWORDS: Tuple[str, ...] = (
    "exam",
    "test",
    "quiz",
    "study",
    "lecture",
    "notes",
    "chapter",
    "assignment",
    "homework",
    "course",
    "syllabus",
    "practice",
    "review",
)

FINANCIAL_KEYWORDS: Tuple[str, ...] = (
    "tax",
    "invoice",
    "receipt",
    "statement",
    "bank",
    "payroll",
    "expense",
    "budget",
    "financial",
    "accounting",
)

CREATIVE_KEYWORDS: Tuple[str, ...] = (
    "design",
    "mockup",
    "draft",
    "sketch",
    "artwork",
    "render",
    "illustration",
    "logo",
    "banner",
    "poster",
)

PRIORITY_KEYWORDS: Tuple[str, ...] = (
    "summary",
    "overview",
    "final",
    "important",
    "guide",
    "index",
    "table",
    "contents",
    "readme",
    "start",
    "intro",
    "introduction",
)

PROJECT_MARKERS: Tuple[str, ...] = (
    "package.json",
    "pubspec.yaml",
    "go.mod",
    "Cargo.toml",
    "requirements.txt",
    "pom.xml",
    "build.gradle",
    "Gemfile",
    "composer.json",
)

ENTRY_POINTS: Tuple[str, ...] = (
    "main.dart",
    "main.go",
    "index.js",
    "index.html",
    "app.py",
    "main.py",
)

STOP_WORDS: frozenset[str] = frozenset(
    {"the", "and", "or", "of", "a", "an", "in", "on", "at", "to", "for", "with"}
)

# Marker filename (lowercase) -> tech stack label.
TECH_STACK_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("pubspec.yaml", "Flutter"),
    ("package.json", "Node.js/JavaScript"),
    ("go.mod", "Go"),
    ("requirements.txt", "Python"),
    ("pipfile", "Python"),
    ("cargo.toml", "Rust"),
    ("pom.xml", "Java"),
    ("build.gradle", "Java"),
    ("cmakelists.txt", "C/C++"),
    ("makefile", "C/C++"),
)

# Topic label -> filename substrings that imply it.
FINANCIAL_FAMILIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("taxes", ("tax", "assessment")),
    ("invoices/receipts", ("invoice", "receipt")),
    ("bank statements", ("statement", "bank")),
    ("payroll", ("payroll", "salary")),
)


@dataclass(frozen=True)
class Vocabulary:
    """Bundle of keyword tables consulted by the classifier and synthesizers."""

    study: Tuple[str, ...] = STUDY_KEYWORDS
    financial: Tuple[str, ...] = FINANCIAL_KEYWORDS
    creative: Tuple[str, ...] = CREATIVE_KEYWORDS
    priority: Tuple[str, ...] = PRIORITY_KEYWORDS
    project_markers: Tuple[str, ...] = PROJECT_MARKERS
    entry_points: Tuple[str, ...] = ENTRY_POINTS
    stop_words: frozenset[str] = field(default=STOP_WORDS)

    def with_overrides(self, overrides: Mapping[str, Sequence[str]]) -> "Vocabulary":
        """Return a copy with the named keyword tables replaced."""
        changes: Dict[str, object] = {}
        for name, words in overrides.items():
            if name not in _OVERRIDABLE:
                raise ValueError(f"Unknown keyword table: {name}")
            cleaned = tuple(str(word).lower() for word in words if str(word).strip())
            if name == "stop_words":
                changes[name] = frozenset(cleaned)
            else:
                changes[name] = cleaned
        return replace(self, **changes)


_OVERRIDABLE = frozenset(
    {"study", "financial", "creative", "priority", "project_markers", "entry_points", "stop_words"}
)

DEFAULT_VOCABULARY = Vocabulary()


__all__ = [
    "CREATIVE_KEYWORDS",
    "DEFAULT_VOCABULARY",
    "ENTRY_POINTS",
    "FINANCIAL_FAMILIES",
    "FINANCIAL_KEYWORDS",
    "PRIORITY_KEYWORDS",
    "PROJECT_MARKERS",
    "STOP_WORDS",
    "STUDY_KEYWORDS",
    "TECH_STACK_MARKERS",
    "Vocabulary",
]

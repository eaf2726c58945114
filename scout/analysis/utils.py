"""Filename helpers shared by the insight synthesizers."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import FileSummary
from .vocabulary import PRIORITY_KEYWORDS, STOP_WORDS

_YEAR_PATTERN = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")
_SEPARATOR_PATTERN = re.compile(r"[_\-.]")
_NUMBER_PATTERN = re.compile(r"\b\d+\b")

RANKED_EXTENSIONS: frozenset[str] = frozenset({".pdf", ".docx", ".doc"})
LARGE_DOCUMENT_BYTES = 1_000_000
SAFETY_NET_BYTES = 500_000


def recent_years(current_year: Optional[int] = None) -> Tuple[str, str, str]:
    """Return (current, previous, two-years-prior) as strings."""
    year = current_year if current_year is not None else date.today().year
    return str(year), str(year - 1), str(year - 2)


def extract_year(filename: str) -> Optional[str]:
    """Return the first 19xx/20xx year embedded in a filename."""
    match = _YEAR_PATTERN.search(filename)
    return match.group(0) if match else None


def extract_topics(filename: str, stop_words: Iterable[str] = STOP_WORDS) -> List[str]:
    """Split a filename into meaningful lowercase words.

    ``final_exam_2024_chapter-5.pdf`` becomes ``["final", "exam", "chapter"]``.
    """
    stem = os.path.splitext(filename)[0].lower()
    stem = _SEPARATOR_PATTERN.sub(" ", stem)
    stem = _NUMBER_PATTERN.sub("", stem)
    excluded = set(stop_words)
    return [word for word in stem.split() if len(word) > 3 and word not in excluded]


def should_prioritize(
    filename: str,
    keywords: Sequence[str] = PRIORITY_KEYWORDS,
    *,
    current_year: Optional[int] = None,
) -> bool:
    """Return True when a name suggests importance or recency."""
    lowered = filename.lower()
    candidates = list(keywords) + list(recent_years(current_year))
    return any(candidate in lowered for candidate in candidates)


@dataclass
class ScoredFile:
    name: str
    score: int


def score_document(file: FileSummary, *, current_year: Optional[int] = None) -> int:
    """Heuristic importance score for a document candidate."""
    name = file.name.lower()
    this_year, last_year, two_years_ago = recent_years(current_year)
    score = 0
    if "summary" in name or "overview" in name:
        score += 50
    if "final" in name or "important" in name:
        score += 40
    if "guide" in name or "handbook" in name:
        score += 30
    if this_year in name:
        score += 30
    elif last_year in name:
        score += 20
    elif two_years_ago in name:
        score += 10
    if file.size > LARGE_DOCUMENT_BYTES:
        score += 10
    return score


def rank_important_docs(
    files: Sequence[FileSummary],
    limit: int,
    *,
    current_year: Optional[int] = None,
) -> List[str]:
    """Return up to ``limit`` document names ordered by descending score."""
    scored = [
        ScoredFile(name=file.name, score=score_document(file, current_year=current_year))
        for file in files
        if file.extension.lower() in RANKED_EXTENSIONS
    ]
    if not scored:
        scored = [ScoredFile(name=file.name, score=0) for file in files if file.size > SAFETY_NET_BYTES]

    # sorted() is stable, so equal scores keep their scan order.
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    return [item.name for item in ranked[: max(limit, 0)]]


__all__ = [
    "extract_topics",
    "extract_year",
    "rank_important_docs",
    "recent_years",
    "score_document",
    "should_prioritize",
]

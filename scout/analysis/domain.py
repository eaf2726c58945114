"""Heuristic domain classification over category histograms."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence, Tuple

from ..models import Domain
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

SOFTWARE_THRESHOLD = 0.3
DOCUMENT_THRESHOLD = 0.5
MEDIA_THRESHOLD = 0.7
SPREADSHEET_THRESHOLD = 0.4

STUDY_MIN_MATCHES = 3
FINANCIAL_MIN_MATCHES = 2
CREATIVE_MIN_MATCHES = 2


def count_keyword_matches(names: Iterable[str], keywords: Sequence[str]) -> int:
    """Count files whose name contains at least one keyword."""
    lowered_keywords = [keyword.lower() for keyword in keywords]
    matches = 0
    for name in names:
        lowered = name.lower()
        if any(keyword in lowered for keyword in lowered_keywords):
            matches += 1
    return matches


def has_project_marker(names: Iterable[str], markers: Sequence[str]) -> bool:
    lowered_markers = {marker.lower() for marker in markers}
    return any(name.lower() in lowered_markers for name in names)


def calculate_confidence(categories: Mapping[str, int]) -> float:
    """Share of the dominant category among all categorized files."""
    total = sum(categories.values())
    if total == 0:
        return 0.0
    return max(categories.values()) / total


def detect_domain(
    categories: Mapping[str, int],
    names: Sequence[str],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> Domain:
    """Return the first domain whose rule is satisfied, in priority order."""
    total = sum(categories.values())
    if total == 0:
        return Domain.EMPTY

    def share(*keys: str) -> float:
        return sum(categories.get(key, 0) for key in keys) / total

    if has_project_marker(names, vocabulary.project_markers) or share("code", "config") > SOFTWARE_THRESHOLD:
        return Domain.SOFTWARE

    if share("pdf", "word", "text") > DOCUMENT_THRESHOLD:
        if count_keyword_matches(names, vocabulary.study) >= STUDY_MIN_MATCHES:
            return Domain.STUDY
        if count_keyword_matches(names, vocabulary.financial) >= FINANCIAL_MIN_MATCHES:
            return Domain.FINANCIAL
        return Domain.DOCUMENTS

    if share("image", "video", "audio") > MEDIA_THRESHOLD:
        images = categories.get("image", 0)
        others = categories.get("video", 0) + categories.get("audio", 0)
        if images > others and count_keyword_matches(names, vocabulary.creative) >= CREATIVE_MIN_MATCHES:
            return Domain.CREATIVE
        return Domain.MEDIA

    if share("spreadsheet") > SPREADSHEET_THRESHOLD:
        return Domain.FINANCIAL

    return Domain.MIXED


def classify(
    categories: Mapping[str, int],
    names: Sequence[str],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> Tuple[Domain, float]:
    """Return the domain label and category concentration for a directory."""
    return detect_domain(categories, names, vocabulary), calculate_confidence(categories)


__all__ = [
    "calculate_confidence",
    "classify",
    "count_keyword_matches",
    "detect_domain",
    "has_project_marker",
]

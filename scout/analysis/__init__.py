"""Categorization, domain classification and insight synthesis."""

from __future__ import annotations

from typing import Optional

from ..models import ContentInsight, DirectorySummary
from .categories import categorize, categorize_files
from .domain import calculate_confidence, classify, detect_domain
from .insights import synthesize
from .utils import rank_important_docs
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary


def analyze_directory(
    summary: DirectorySummary,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    *,
    current_year: Optional[int] = None,
) -> ContentInsight:
    """Classify a directory summary and synthesize its insight record."""
    categories = categorize_files(summary.files)
    names = [file.name for file in summary.files]
    domain, confidence = classify(categories, names, vocabulary)
    insight = ContentInsight(domain=domain, confidence=confidence, files_by_category=categories)
    return synthesize(insight, summary.files, vocabulary, current_year=current_year)


__all__ = [
    "DEFAULT_VOCABULARY",
    "Vocabulary",
    "analyze_directory",
    "calculate_confidence",
    "categorize",
    "categorize_files",
    "classify",
    "detect_domain",
    "rank_important_docs",
    "synthesize",
]

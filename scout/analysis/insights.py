"""Domain-specific insight synthesis."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..filetypes import (
    AUDIO_EXTENSIONS,
    CUDA_EXTENSIONS,
    C_FAMILY_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from ..models import ContentInsight, Domain, FileSummary
from .utils import (
    extract_topics,
    extract_year,
    rank_important_docs,
    should_prioritize,
)
from .vocabulary import (
    DEFAULT_VOCABULARY,
    FINANCIAL_FAMILIES,
    TECH_STACK_MARKERS,
    Vocabulary,
)

SOFTWARE_PLACEHOLDER = "Look in the src/ or lib/ directory"
MIN_PRIORITY_KEY_FILES = 3
MAX_DOCUMENT_KEY_FILES = 5
MIXED_KEY_FILES = 3

DOCUMENT_EXTENSIONS = frozenset({".pdf", ".docx"})

SOFTWARE_RECOMMENDATIONS = [
    "Read README.md first if available",
    "Check the main entry point to understand flow",
    "Review package/dependency files for tech stack",
]
DOCUMENT_RECOMMENDATIONS = [
    "Start with the most recent documents",
    "Look for summary or overview files first",
    "Organize by topic or date if needed",
]
STUDY_RECOMMENDATIONS = [
    "Start with the syllabus or overview material",
    "Work through lecture notes and chapters in order",
    "Finish with practice questions and past exams",
]
FINANCIAL_RECOMMENDATIONS = [
    "Organize by year and category",
    "Keep tax documents separate and secure",
    "Back up important financial records",
]
CREATIVE_TOPICS = ["creative work", "design assets"]
CREATIVE_RECOMMENDATIONS = [
    "Browse through for inspiration",
    "Consider organizing by project or date",
    "Keep high-res originals backed up",
]
MIXED_TOPICS = ["various files"]
MIXED_RECOMMENDATIONS = [
    "This looks like a mixed collection",
    "Consider organizing by file type or purpose",
    "Check the largest files first",
]
EMPTY_RECOMMENDATIONS = ["Nothing to scout here yet, add some files and try again"]


def _append_unique(target: List[str], value: str) -> None:
    if value not in target:
        target.append(value)


def detect_tech_stack(files: Sequence[FileSummary]) -> List[str]:
    """Return tech stack labels implied by marker files and source extensions."""
    markers = dict(TECH_STACK_MARKERS)
    stacks: List[str] = []
    for file in files:
        label = markers.get(file.name.lower())
        if label:
            _append_unique(stacks, label)
        ext = file.extension.lower()
        if ext in C_FAMILY_EXTENSIONS:
            _append_unique(stacks, "C/C++")
        elif ext in CUDA_EXTENSIONS:
            _append_unique(stacks, "CUDA")
    return stacks


def synthesize_software(
    insight: ContentInsight,
    files: Sequence[FileSummary],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> None:
    insight.topics = detect_tech_stack(files)

    entry_points = {name.lower() for name in vocabulary.entry_points}
    key_files = [file.name for file in files if file.name.lower() in entry_points]

    readme = next((file.name for file in files if file.name.lower() == "readme.md"), None)
    if readme is not None:
        key_files.insert(0, readme)

    insight.key_files = key_files or [SOFTWARE_PLACEHOLDER]
    insight.recommendations = list(SOFTWARE_RECOMMENDATIONS)


def synthesize_documents(
    insight: ContentInsight,
    files: Sequence[FileSummary],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    *,
    current_year: Optional[int] = None,
) -> None:
    topics: List[str] = []
    years: List[str] = []
    key_files: List[str] = []

    for file in files:
        if file.extension.lower() not in DOCUMENT_EXTENSIONS:
            continue
        year = extract_year(file.name)
        if year is not None:
            years.append(year)
        for topic in extract_topics(file.name, vocabulary.stop_words):
            _append_unique(topics, topic)
        if should_prioritize(file.name, vocabulary.priority, current_year=current_year):
            key_files.append(file.name)

    if len(key_files) < MIN_PRIORITY_KEY_FILES:
        for name in rank_important_docs(files, MAX_DOCUMENT_KEY_FILES, current_year=current_year):
            _append_unique(key_files, name)

    insight.topics = topics
    insight.key_files = key_files[:MAX_DOCUMENT_KEY_FILES]
    if years:
        earliest, latest = min(years), max(years)
        insight.date_range = earliest if earliest == latest else f"{earliest}-{latest}"

    if insight.domain is Domain.STUDY:
        insight.recommendations = list(STUDY_RECOMMENDATIONS)
    else:
        insight.recommendations = list(DOCUMENT_RECOMMENDATIONS)


def synthesize_media(insight: ContentInsight, files: Sequence[FileSummary]) -> None:
    images = videos = audio = 0
    for file in files:
        ext = file.extension.lower()
        if ext in IMAGE_EXTENSIONS:
            images += 1
        elif ext in VIDEO_EXTENSIONS:
            videos += 1
        elif ext in AUDIO_EXTENSIONS:
            audio += 1

    if images >= videos + audio:
        insight.topics = ["photos", "images"]
        insight.recommendations = ["Browse through and enjoy the memories"]
    elif videos >= audio:
        insight.topics = ["videos"]
        insight.recommendations = ["Grab some popcorn and enjoy"]
    else:
        insight.topics = ["music", "audio"]
        insight.recommendations = ["Put on your headphones and enjoy"]


def synthesize_financial(insight: ContentInsight, files: Sequence[FileSummary]) -> None:
    topics: List[str] = []
    for file in files:
        name = file.name.lower()
        for label, fragments in FINANCIAL_FAMILIES:
            if any(fragment in name for fragment in fragments):
                _append_unique(topics, label)
    insight.topics = topics
    insight.recommendations = list(FINANCIAL_RECOMMENDATIONS)


def synthesize_creative(insight: ContentInsight) -> None:
    insight.topics = list(CREATIVE_TOPICS)
    insight.recommendations = list(CREATIVE_RECOMMENDATIONS)


def largest_files(files: Sequence[FileSummary], limit: int) -> List[str]:
    """Return the ``limit`` largest names; equal sizes keep scan order."""
    ordered = sorted(files, key=lambda file: file.size, reverse=True)
    return [file.name for file in ordered[:limit]]


def synthesize_mixed(insight: ContentInsight, files: Sequence[FileSummary]) -> None:
    insight.topics = list(MIXED_TOPICS)
    insight.key_files = largest_files(files, MIXED_KEY_FILES)
    insight.recommendations = list(MIXED_RECOMMENDATIONS)


def synthesize_empty(insight: ContentInsight) -> None:
    insight.recommendations = list(EMPTY_RECOMMENDATIONS)


def synthesize(
    insight: ContentInsight,
    files: Sequence[FileSummary],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    *,
    current_year: Optional[int] = None,
) -> ContentInsight:
    """Populate topics, key files and recommendations for ``insight.domain``."""
    domain = insight.domain
    if domain is Domain.SOFTWARE:
        synthesize_software(insight, files, vocabulary)
    elif domain in (Domain.DOCUMENTS, Domain.STUDY):
        synthesize_documents(insight, files, vocabulary, current_year=current_year)
    elif domain is Domain.MEDIA:
        synthesize_media(insight, files)
    elif domain is Domain.FINANCIAL:
        synthesize_financial(insight, files)
    elif domain is Domain.CREATIVE:
        synthesize_creative(insight)
    elif domain is Domain.EMPTY:
        synthesize_empty(insight)
    else:
        synthesize_mixed(insight, files)
    return insight


__all__ = [
    "SOFTWARE_PLACEHOLDER",
    "detect_tech_stack",
    "largest_files",
    "synthesize",
    "synthesize_creative",
    "synthesize_documents",
    "synthesize_empty",
    "synthesize_financial",
    "synthesize_media",
    "synthesize_mixed",
    "synthesize_software",
]

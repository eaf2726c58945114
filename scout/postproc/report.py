"""Plain-text rendering of insights for the CLI."""

from __future__ import annotations

from typing import List

from ..models import ContentInsight, DirectorySummary
from .terminal import format_for_terminal

RULE = "=" * 80


def headline(summary: DirectorySummary, insight: ContentInsight) -> str:
    return (
        f"Found {summary.file_count} files "
        f"({insight.confidence * 100:.0f}% confidence: {insight.domain.value} domain)"
    )


def render_report(summary: DirectorySummary, insight: ContentInsight) -> str:
    """Describe an insight without involving the generator."""
    lines: List[str] = [headline(summary, insight)]
    if insight.files_by_category:
        lines.append("")
        lines.append("Categories:")
        ordered = sorted(insight.files_by_category.items(), key=lambda item: (-item[1], item[0]))
        for category, count in ordered:
            lines.append(f"  {category}: {count}")
    if insight.topics:
        lines.append("")
        lines.append(f"Topics: {', '.join(insight.topics)}")
    if insight.date_range:
        lines.append(f"Date range: {insight.date_range}")
    if insight.key_files:
        lines.append("")
        lines.append("Key files:")
        lines.extend(f"  - {name}" for name in insight.key_files)
    if insight.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        lines.extend(f"  - {item}" for item in insight.recommendations)
    return "\n".join(lines) + "\n"


def render_generated(
    summary: DirectorySummary,
    insight: ContentInsight,
    text: str,
    *,
    color: bool = True,
) -> str:
    """Frame a generated summary below the headline."""
    body = format_for_terminal(text.strip(), color=color)
    return f"{headline(summary, insight)}\n\n{RULE}\n{body}\n{RULE}\n"


__all__ = ["RULE", "headline", "render_generated", "render_report"]

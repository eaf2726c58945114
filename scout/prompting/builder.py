"""Builds the generation context and prompt for the local LLM."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from ..llm.llamacpp import format_llama3_chat
from ..models import ContentInsight, DirectorySummary, FileSummary

TRUNCATION_MARKER = "\n...[truncated due to size]..."
DEFAULT_MAX_KEY_FILES = 5
DEFAULT_MAX_PROMPT_CHARS = 12000

_SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB")


def human_size(size: int) -> str:
    """Render a byte count with binary (1024) scaling and one decimal place."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS:
        value /= 1024
        if round(value, 1) < 1024:
            break
    return f"{value:.1f} {unit}"


def _key_file_entry(name: str, files_by_name: Dict[str, FileSummary]) -> Dict[str, Any]:
    summary = files_by_name.get(name)
    if summary is None:
        return {"name": name}
    entry: Dict[str, Any] = {
        "name": summary.name,
        "extension": summary.extension,
        "size": human_size(summary.size),
    }
    if summary.metadata is not None:
        entry["metadata"] = summary.metadata
    return entry


def build_context(
    insight: ContentInsight,
    summary: DirectorySummary,
    max_key_files: int = DEFAULT_MAX_KEY_FILES,
) -> Dict[str, Any]:
    """Merge an insight and its directory summary into one serialisable payload."""
    files_by_name: Dict[str, FileSummary] = {}
    for file in summary.files:
        # First occurrence wins when nested directories repeat a name.
        files_by_name.setdefault(file.name, file)

    key_files = [
        _key_file_entry(name, files_by_name)
        for name in insight.key_files[: max(max_key_files, 0)]
    ]
    return {
        "domain": insight.domain.value,
        "confidence": f"{insight.confidence * 100:.0f}%",
        "file_count": summary.file_count,
        "categories": dict(insight.files_by_category),
        "topics": list(insight.topics),
        "date_range": insight.date_range,
        "key_files": key_files,
    }


@dataclass(frozen=True)
class PromptArtifact:
    """System and user messages handed to the generation backend."""

    system: str
    user: str
    context: Dict[str, Any]
    truncated: bool = False

    @property
    def text(self) -> str:
        """Single Llama 3 chat block for runtimes that take raw prompts."""
        return format_llama3_chat(self.system, self.user)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system": self.system,
            "user": self.user,
            "context": self.context,
            "truncated": self.truncated,
        }


class PromptBuilder:
    """Renders domain-aware prompts from Jinja2 templates."""

    DEFAULT_TEMPLATE = "system/default.j2"

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        max_key_files: int = DEFAULT_MAX_KEY_FILES,
        max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS,
    ) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.max_key_files = max_key_files
        self.max_prompt_chars = max_prompt_chars
        self._env = self._create_env(self.templates_dir)

    def build(self, insight: ContentInsight, summary: DirectorySummary) -> PromptArtifact:
        context = build_context(insight, summary, self.max_key_files)
        system = self.render_system(insight.domain.value)
        user = self._env.get_template("user.j2").render(
            context_json=json.dumps(context, indent=2, ensure_ascii=False),
            domain=insight.domain.value,
        ).strip()
        user, truncated = self._truncate(user)
        return PromptArtifact(system=system, user=user, context=context, truncated=truncated)

    def render_system(self, domain: str) -> str:
        try:
            template = self._env.get_template(f"system/{domain}.j2")
        except TemplateNotFound:
            template = self._env.get_template(self.DEFAULT_TEMPLATE)
        return template.render(domain=domain).strip()

    def _truncate(self, text: str) -> tuple[str, bool]:
        limit = self.max_prompt_chars
        if limit <= 0 or len(text) <= limit:
            return text, False
        return text[:limit] + TRUNCATION_MARKER, True

    @staticmethod
    def _create_env(templates_dir: Path) -> Environment:
        search_path: List[str] = [str(templates_dir)]
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in search_path:
            search_path.append(default_dir)
        return Environment(
            loader=FileSystemLoader(search_path),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )


__all__ = [
    "PromptArtifact",
    "PromptBuilder",
    "TRUNCATION_MARKER",
    "build_context",
    "human_size",
]

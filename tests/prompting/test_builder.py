"""Prompt builder and context assembly tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scout.analysis.insights import SOFTWARE_PLACEHOLDER
from scout.models import ContentInsight, DirectorySummary, Domain, FileSummary
from scout.prompting import TRUNCATION_MARKER, PromptBuilder, build_context, human_size


def _summary() -> DirectorySummary:
    files = [
        FileSummary(
            name="README.md",
            extension=".md",
            size=2048,
            category="markdown",
            metadata={"preview": "# Demo", "lines": 1, "details": {"title": "Demo", "kind": "markdown"}},
        ),
        FileSummary(name="main.go", extension=".go", size=300, category="code", metadata=None),
        FileSummary(name="logo.png", extension=".png", size=5_000_000, category="binary"),
    ]
    return DirectorySummary(directory="/tmp/demo", file_count=len(files), files=files)


def _insight(domain: Domain = Domain.SOFTWARE, key_files=None) -> ContentInsight:
    return ContentInsight(
        domain=domain,
        confidence=0.666,
        files_by_category={"text": 1, "code": 1, "image": 1},
        topics=["Go"],
        key_files=list(key_files if key_files is not None else ["README.md", "main.go"]),
        recommendations=["Read README.md first if available"],
    )


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024 - 1, "1.0 MB"),
        (1024 * 1024, "1.0 MB"),
        (1024**3 - 1, "1.0 GB"),
        (5 * 1024**3 + 1024**3 // 2, "5.5 GB"),
    ],
)
def test_human_size(size: int, expected: str) -> None:
    assert human_size(size) == expected


def test_build_context_includes_key_file_previews() -> None:
    context = build_context(_insight(), _summary())

    assert context["domain"] == "software"
    assert context["confidence"] == "67%"
    assert context["file_count"] == 3
    assert context["categories"] == {"text": 1, "code": 1, "image": 1}
    assert context["topics"] == ["Go"]
    assert context["date_range"] is None
    readme, main = context["key_files"]
    assert readme == {
        "name": "README.md",
        "extension": ".md",
        "size": "2.0 KB",
        "metadata": {"preview": "# Demo", "lines": 1, "details": {"title": "Demo", "kind": "markdown"}},
    }
    assert main == {"name": "main.go", "extension": ".go", "size": "300 B"}


def test_build_context_caps_key_files_and_keeps_placeholders() -> None:
    insight = _insight(key_files=[SOFTWARE_PLACEHOLDER, "README.md", "main.go", "logo.png"])

    context = build_context(insight, _summary(), max_key_files=2)

    assert context["key_files"] == [
        {"name": SOFTWARE_PLACEHOLDER},
        {
            "name": "README.md",
            "extension": ".md",
            "size": "2.0 KB",
            "metadata": _summary().files[0].metadata,
        },
    ]


def test_prompt_embeds_json_context_and_domain_system_message() -> None:
    artifact = PromptBuilder().build(_insight(), _summary())

    assert "senior engineer" in artifact.system
    assert artifact.user.startswith("Directory data:")
    json_block = artifact.user.split("Directory data:\n", 1)[1].split("\n\nInstructions:", 1)[0]
    assert json.loads(json_block) == artifact.context
    assert "entry points" in artifact.user
    assert artifact.truncated is False


def test_prompt_text_uses_llama3_chat_format() -> None:
    artifact = PromptBuilder().build(_insight(), _summary())

    assert artifact.text.startswith("<|begin_of_text|><|start_header_id|>system<|end_header_id|>")
    assert artifact.text.endswith("<|start_header_id|>assistant<|end_header_id|>\n\n")
    assert artifact.user in artifact.text


@pytest.mark.parametrize("domain", [Domain.MIXED, Domain.EMPTY])
def test_domains_without_template_use_default(domain: Domain) -> None:
    builder = PromptBuilder()

    assert builder.render_system(domain.value) == builder.render_system("default")


@pytest.mark.parametrize(
    ("domain", "phrase"),
    [
        (Domain.STUDY, "study partner"),
        (Domain.DOCUMENTS, "executive assistant"),
        (Domain.FINANCIAL, "financial organiser"),
        (Domain.MEDIA, "media buddy"),
        (Domain.CREATIVE, "creative work"),
    ],
)
def test_domain_templates(domain: Domain, phrase: str) -> None:
    assert phrase in PromptBuilder().render_system(domain.value)


def test_long_prompts_are_truncated() -> None:
    artifact = PromptBuilder(max_prompt_chars=200).build(_insight(), _summary())

    assert artifact.truncated is True
    assert artifact.user.endswith(TRUNCATION_MARKER)
    assert len(artifact.user) == 200 + len(TRUNCATION_MARKER)


def test_custom_templates_override_defaults(tmp_path: Path) -> None:
    (tmp_path / "system").mkdir()
    (tmp_path / "system" / "software.j2").write_text("Custom {{ domain }} prompt", encoding="utf-8")

    builder = PromptBuilder(templates_dir=tmp_path)

    assert builder.render_system("software") == "Custom software prompt"
    assert "study partner" in builder.render_system("study")

"""Tests for scout.orchestrator."""

from __future__ import annotations

import time
import zipfile
from pathlib import Path

import pytest

from scout.config import ConfigError, LLMConfig, ScoutConfig
from scout.extractors import ExtractionError, extract_file
from scout.llm.llamacpp import LlamaCppRunner
from scout.llm.runner import GenerationError, LLMRunner
from scout.models import Domain
from scout.orchestrator import Orchestrator
from scout.scanner import ScanError
from tests._fixtures.directory_builder import DirectoryBuilder

YEAR = 2024


class RecordingLLMRunner:
    """Simple runner that captures prompts for assertions."""

    def __init__(self, response: str = "### Summary\nAll good.") -> None:
        self.response = response
        self.calls: list[tuple[str, str | None]] = []

    def run(self, prompt: str, *, system: str | None = None) -> str:
        self.calls.append((prompt, system))
        return self.response


class FailingLLMRunner:
    def __init__(self) -> None:
        self.calls = 0

    def run(self, prompt: str, *, system: str | None = None) -> str:
        self.calls += 1
        raise GenerationError("backend unavailable")


def _orchestrator(**kwargs) -> Orchestrator:
    kwargs.setdefault("current_year", YEAR)
    return Orchestrator(**kwargs)


def test_go_project_scenario(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write(
        {
            "main.go": "package main\n\nimport \"fmt\"\n",
            "server.go": "package main\n",
            "handler.go": "package main\n",
            "util.go": "package main\n",
            "go.mod": "module example.com/demo\n",
            "README.md": "# Demo\n",
            "CONTRIBUTING.md": "# Contributing\n",
            "docs.md": "notes\n",
            "logo.png": b"\x89PNG\x00",
            "icon.png": b"\x89PNG\x00",
        }
    )

    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.SOFTWARE
    assert outcome.insight.key_files == ["README.md", "main.go"]
    assert "Go" in outcome.insight.topics
    assert sum(outcome.insight.files_by_category.values()) == outcome.summary.file_count == 10


def test_financial_pdf_scenario(directory_builder: DirectoryBuilder) -> None:
    names = ["tax_2023.pdf", "property_tax.pdf", "holiday.pdf", "manual.pdf", "letter.pdf", "brochure.pdf"]
    directory_builder.write({name: b"not really a pdf" for name in names})

    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.FINANCIAL
    assert outcome.insight.topics == ["taxes"]
    assert all(file.category == "document" for file in outcome.summary.files)


def test_empty_directory_scenario(directory_builder: DirectoryBuilder) -> None:
    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.EMPTY
    assert outcome.insight.confidence == 0.0
    assert outcome.insight.files_by_category == {}
    assert outcome.summary.file_count == 0


def test_creative_media_scenario(directory_builder: DirectoryBuilder) -> None:
    files = {f"shot_{index}.jpg": b"\xff\xd8" for index in range(6)}
    files.update({"app_mockup.png": b"\x89PNG", "team_logo.png": b"\x89PNG", "trailer.mp4": b"\x00"})
    directory_builder.write(files)

    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.CREATIVE
    assert outcome.insight.files_by_category == {"image": 8, "video": 1}


def test_mixed_scenario_uses_three_largest_files(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write(
        {"bundle.zip": 400, "setup.exe": 3000, "server.log": "log line\n", "old.bak": 1200, "blob.dat": 2000}
    )

    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.MIXED
    assert outcome.insight.key_files == ["setup.exe", "blob.dat", "old.bak"]


def test_failed_extraction_keeps_file_as_unknown(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({"good.py": "import os\n", "bad.docx": b"not a zip", "also_good.md": "# Hi\n"})

    summary = _orchestrator().inspect(directory_builder.path()).summary

    by_name = {file.name: file for file in summary.files}
    assert summary.file_count == 3
    assert by_name["bad.docx"].category == "unknown"
    assert by_name["bad.docx"].metadata is None
    assert by_name["good.py"].category == "code"
    assert by_name["good.py"].metadata["details"]["imports"] == ["import os"]


@pytest.mark.parametrize("workers", [1, 4])
def test_unexpected_extractor_errors_do_not_abort_the_scan(
    directory_builder: DirectoryBuilder, workers: int
) -> None:
    directory_builder.write({"a_notes.txt": "first\n", "c_crash.txt": "boom\n", "d_notes.txt": "last\n"})
    with zipfile.ZipFile(directory_builder.path("b_mangled.xlsx"), "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types><broken")

    def crashing_extract(path: str):
        if path.endswith("c_crash.txt"):
            raise RuntimeError("parser bug")
        return extract_file(path)

    orchestrator = _orchestrator(extractor=crashing_extract)
    summary = orchestrator.summarize_directory(directory_builder.scan(), max_workers=workers)

    assert [file.name for file in summary.files] == [
        "a_notes.txt",
        "b_mangled.xlsx",
        "c_crash.txt",
        "d_notes.txt",
    ]
    assert [file.category for file in summary.files] == ["markdown", "unknown", "unknown", "markdown"]


def test_worker_pool_preserves_traversal_order(directory_builder: DirectoryBuilder) -> None:
    names = [f"file_{index:02d}.txt" for index in range(12)]
    directory_builder.write({name: name for name in names})

    def slow_extract(path: str):
        if path.endswith("file_00.txt"):
            time.sleep(0.05)
        if path.endswith("file_05.txt"):
            raise ExtractionError("boom")
        return extract_file(path)

    config = ScoutConfig(root=directory_builder.path())
    config.scan.max_workers = 4
    orchestrator = _orchestrator(config=config, extractor=slow_extract)

    summary = orchestrator.inspect(directory_builder.path()).summary

    assert [file.name for file in summary.files] == names
    assert summary.files[5].category == "unknown"
    assert all(file.category == "markdown" for index, file in enumerate(summary.files) if index != 5)


def test_run_sends_prompt_once(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({"main.py": "print('hi')\n", "requirements.txt": "pyyaml\n"})
    runner = RecordingLLMRunner()

    outcome = _orchestrator(llm_runner=runner).run(directory_builder.path())

    assert outcome.text == "### Summary\nAll good."
    assert len(runner.calls) == 1
    prompt, system = runner.calls[0]
    assert prompt == outcome.prompt.user
    assert system == outcome.prompt.system


def test_generation_errors_propagate_without_retry(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({"main.py": "print('hi')\n"})
    runner = FailingLLMRunner()

    with pytest.raises(GenerationError):
        _orchestrator(llm_runner=runner).run(directory_builder.path())
    assert runner.calls == 1


def test_missing_directory_raises_scan_error(tmp_path: Path) -> None:
    with pytest.raises(ScanError):
        _orchestrator().inspect(tmp_path / "nope")


def test_config_keywords_in_target_are_applied(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write(
        {
            ".scout.yml": "keywords:\n  financial: [brief]\n",
            "alpha_brief.pdf": b"x",
            "beta_brief.pdf": b"x",
            "gamma.pdf": b"x",
        }
    )

    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.FINANCIAL
    assert ".scout.yml" not in [file.name for file in outcome.summary.files]


def test_config_limits_key_files_in_prompt(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write(
        {
            ".scout.yml": "prompt:\n  max_key_files: 1\n",
            "summary.pdf": b"x",
            "overview.pdf": b"x",
            "final.pdf": b"x",
        }
    )

    outcome = _orchestrator().inspect(directory_builder.path())

    assert outcome.insight.domain is Domain.DOCUMENTS
    assert len(outcome.insight.key_files) == 3
    assert [entry["name"] for entry in outcome.prompt.context["key_files"]] == ["final.pdf"]



def test_unknown_keyword_table_is_a_config_error(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({".scout.yml": "keywords:\n  colours: [red]\n", "a.txt": "a"})

    with pytest.raises(ConfigError):
        _orchestrator().inspect(directory_builder.path())


def test_resolves_http_runner_from_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("SCOUT_LLM_BASE_URL", raising=False)
    config = ScoutConfig(
        root=tmp_path,
        llm=LLMConfig(runner="http", model="tiny", base_url="http://localhost:9999/v1", max_tokens=64),
    )

    runner = _orchestrator(config=config)._resolve_llm_runner(config)

    assert isinstance(runner, LLMRunner)
    assert runner.model == "tiny"
    assert runner.base_url == "http://localhost:9999/v1"
    assert runner.max_tokens == 64


def test_ollama_runner_uses_cli(tmp_path: Path) -> None:
    config = ScoutConfig(root=tmp_path, llm=LLMConfig(runner="ollama", model="tiny"))

    runner = _orchestrator(config=config)._resolve_llm_runner(config)

    assert isinstance(runner, LLMRunner)
    assert runner.base_url is None


def test_llamacpp_runner_resolves_relative_model(tmp_path: Path) -> None:
    (tmp_path / "models").mkdir()
    (tmp_path / "models" / "tiny.gguf").write_bytes(b"gguf")
    config = ScoutConfig(root=tmp_path, llm=LLMConfig(runner="llamacpp", model="models/tiny.gguf"))

    runner = _orchestrator(config=config)._resolve_llm_runner(config)

    assert isinstance(runner, LlamaCppRunner)
    assert runner.model_path == (tmp_path / "models" / "tiny.gguf").resolve()


@pytest.mark.parametrize(
    "llm",
    [
        LLMConfig(runner="llamacpp"),
        LLMConfig(runner="gpt-cloud"),
        LLMConfig(base_url="https://api.example.com/v1"),
    ],
)
def test_invalid_llm_config_is_rejected(tmp_path: Path, llm: LLMConfig) -> None:
    config = ScoutConfig(root=tmp_path, llm=llm)

    with pytest.raises(ConfigError):
        _orchestrator(config=config)._resolve_llm_runner(config)

"""Pipeline orchestration: scan, extract, classify, prompt and generate."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from .analysis import analyze_directory
from .analysis.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from .config import ConfigError, LLMConfig, ScoutConfig, load_config
from .extractors import ExtractionError, extract_file
from .llm.llamacpp import LlamaCppRunner
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import (
    ContentInsight,
    DirectoryScanResult,
    DirectorySummary,
    ExtractedContent,
    FileDescriptor,
    FileSummary,
)
from .prompting.builder import PromptArtifact, PromptBuilder
from .scanner import DirectoryScanner


class TextGenerator(Protocol):
    def run(self, prompt: str, *, system: str | None = None) -> str:
        ...


@dataclass
class ScoutOutcome:
    """Everything produced by one scout invocation."""

    scan: DirectoryScanResult
    summary: DirectorySummary
    insight: ContentInsight
    prompt: PromptArtifact
    text: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "directory": self.summary.directory,
            "file_count": self.summary.file_count,
            "subdirectory_count": len(self.summary.subdirectories),
            "insight": self.insight.to_dict(),
        }
        if self.text is not None:
            payload["summary"] = self.text
        return payload


class Orchestrator:
    """Coordinates the scout pipeline for a single directory."""

    def __init__(
        self,
        scanner: DirectoryScanner | None = None,
        llm_runner: TextGenerator | None = None,
        prompt_builder: PromptBuilder | None = None,
        config: ScoutConfig | None = None,
        *,
        extractor: Callable[[str], ExtractedContent] = extract_file,
        current_year: Optional[int] = None,
    ) -> None:
        self.scanner = scanner or DirectoryScanner()
        self.logger = get_logger("orchestrator")
        self._llm_runner = llm_runner
        self._prompt_builder = prompt_builder
        self._config = config
        self._extractor = extractor
        self._current_year = current_year

    def scan(self, path: str | Path) -> DirectoryScanResult:
        root = Path(path).expanduser()
        self.logger.info("Scanning %s", root)
        result = self.scanner.scan(root)
        self.logger.debug(
            "Scanner discovered %d files in %d subdirectories",
            len(result.files),
            len(result.subdirectories),
        )
        return result

    def summarize_directory(
        self,
        scan_result: DirectoryScanResult,
        *,
        max_workers: Optional[int] = None,
    ) -> DirectorySummary:
        """Extract every scanned file, preserving traversal order."""
        workers = max_workers or self._config_for(scan_result.root).scan.max_workers
        files = scan_result.files
        if workers <= 1 or len(files) <= 1:
            summaries = [self._summarize_file(descriptor) for descriptor in files]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                summaries = list(executor.map(self._summarize_file, files))
        return DirectorySummary(
            directory=scan_result.root,
            file_count=len(summaries),
            subdirectories=list(scan_result.subdirectories),
            files=summaries,
        )

    def analyze(self, summary: DirectorySummary) -> ContentInsight:
        vocabulary = self._vocabulary_for(self._config_for(summary.directory))
        insight = analyze_directory(summary, vocabulary, current_year=self._current_year)
        self.logger.info(
            "Detected %s content (%.0f%% confidence)",
            insight.domain.value,
            insight.confidence * 100,
        )
        return insight

    def build_prompt(self, insight: ContentInsight, summary: DirectorySummary) -> PromptArtifact:
        builder = self._resolve_prompt_builder(self._config_for(summary.directory))
        artifact = builder.build(insight, summary)
        if artifact.truncated:
            self.logger.debug("Prompt exceeded %d characters and was truncated", builder.max_prompt_chars)
        return artifact

    def inspect(self, path: str | Path) -> ScoutOutcome:
        """Run the pipeline up to prompt assembly without calling the generator."""
        scan_result = self.scan(path)
        summary = self.summarize_directory(scan_result)
        insight = self.analyze(summary)
        prompt = self.build_prompt(insight, summary)
        return ScoutOutcome(scan=scan_result, summary=summary, insight=insight, prompt=prompt)

    def run(self, path: str | Path) -> ScoutOutcome:
        """Run the full pipeline and generate a natural-language summary.

        :class:`~scout.llm.runner.GenerationError` propagates to the caller
        untouched; generation is attempted exactly once.
        """
        outcome = self.inspect(path)
        runner = self._resolve_llm_runner(self._config_for(outcome.summary.directory))
        self.logger.debug("Sending %d prompt characters to the generator", len(outcome.prompt.user))
        outcome.text = runner.run(outcome.prompt.user, system=outcome.prompt.system)
        return outcome

    def _summarize_file(self, descriptor: FileDescriptor) -> FileSummary:
        try:
            content = self._extractor(descriptor.path)
        except (ExtractionError, OSError, ValueError) as exc:
            self.logger.warning("Could not extract %s: %s", descriptor.name, exc)
            return FileSummary.unknown(descriptor)
        except Exception as exc:
            self.logger.warning(
                "Extractor crashed on %s (%s): %s",
                descriptor.name,
                type(exc).__name__,
                exc,
            )
            return FileSummary.unknown(descriptor)
        return FileSummary.from_content(descriptor, content)

    def _config_for(self, root: str | Path) -> ScoutConfig:
        if self._config is None:
            self._config = load_config(Path(root))
        return self._config

    @staticmethod
    def _vocabulary_for(config: ScoutConfig) -> Vocabulary:
        if not config.keywords:
            return DEFAULT_VOCABULARY
        try:
            return DEFAULT_VOCABULARY.with_overrides(config.keywords)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    def _resolve_prompt_builder(self, config: ScoutConfig) -> PromptBuilder:
        if self._prompt_builder is None:
            self._prompt_builder = PromptBuilder(
                max_key_files=config.prompt.max_key_files,
                max_prompt_chars=config.prompt.max_prompt_chars,
            )
        return self._prompt_builder

    def _resolve_llm_runner(self, config: ScoutConfig) -> TextGenerator:
        if self._llm_runner is not None:
            return self._llm_runner
        llm_cfg = config.llm or LLMConfig()
        runner_name = (llm_cfg.runner or "http").lower()

        if runner_name in {"llamacpp", "llama.cpp"}:
            if not llm_cfg.model:
                raise ConfigError("The llama.cpp runner requires llm.model to point at a .gguf file")
            model_path = Path(llm_cfg.model).expanduser()
            if not model_path.is_absolute():
                model_path = (config.root / model_path).resolve()
            self._llm_runner = LlamaCppRunner(
                model_path=str(model_path),
                executable=llm_cfg.executable,
                temperature=llm_cfg.temperature,
                max_tokens=llm_cfg.max_tokens,
            )
            return self._llm_runner

        if runner_name not in {"http", "ollama"}:
            raise ConfigError(f"Unknown llm.runner '{llm_cfg.runner}'")

        kwargs: Dict[str, object] = {}
        if llm_cfg.model:
            kwargs["model"] = llm_cfg.model
        if llm_cfg.executable:
            kwargs["executable"] = llm_cfg.executable
        if llm_cfg.temperature is not None:
            kwargs["temperature"] = llm_cfg.temperature
        if llm_cfg.max_tokens is not None:
            kwargs["max_tokens"] = llm_cfg.max_tokens
        if llm_cfg.api_key is not None:
            kwargs["api_key"] = llm_cfg.api_key
        if llm_cfg.request_timeout is not None:
            kwargs["request_timeout"] = llm_cfg.request_timeout
        if runner_name == "ollama":
            kwargs["base_url"] = None
        elif llm_cfg.base_url is not None:
            kwargs["base_url"] = llm_cfg.base_url

        try:
            self._llm_runner = LLMRunner(**kwargs)  # type: ignore[arg-type]
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        return self._llm_runner


__all__: List[str] = ["Orchestrator", "ScoutOutcome", "TextGenerator"]

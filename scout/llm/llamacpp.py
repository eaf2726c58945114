"""Adapter for llama.cpp local execution."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from .runner import GenerationError

DEFAULT_EXECUTABLE = "llama-cli"
DEFAULT_MAX_TOKENS = 1024


def format_llama3_chat(system: str | None, prompt: str) -> str:
    """Wrap a system and user message in the Llama 3 instruct chat template."""
    parts = ["<|begin_of_text|>"]
    if system:
        parts.append(f"<|start_header_id|>system<|end_header_id|>\n\n{system.strip()}<|eot_id|>")
    parts.append(f"<|start_header_id|>user<|end_header_id|>\n\n{prompt}<|eot_id|>")
    parts.append("<|start_header_id|>assistant<|end_header_id|>\n\n")
    return "".join(parts)


class LlamaCppRunner:
    """Executes prompts using the llama.cpp CLI binary and a local GGUF model."""

    def __init__(
        self,
        *,
        model_path: str,
        executable: str | None = None,
        temperature: Optional[float] = 0.2,
        max_tokens: Optional[int] = DEFAULT_MAX_TOKENS,
    ) -> None:
        self.model_path = self._validate_model_path(model_path)
        self.executable = executable or DEFAULT_EXECUTABLE
        self.temperature = temperature
        self.max_tokens = max_tokens

    def run(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        full_prompt = format_llama3_chat(system, prompt)
        effective_tokens = max_tokens if max_tokens is not None else self.max_tokens

        args = [
            self.executable,
            "-m",
            str(self.model_path),
            "-p",
            full_prompt,
            "--no-display-prompt",
        ]
        if self.temperature is not None:
            args.extend(["--temp", str(self.temperature)])
        if effective_tokens is not None:
            args.extend(["-n", str(effective_tokens)])

        try:
            completed = subprocess.run(
                args,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:  # pragma: no cover - environment dependent
            raise GenerationError(
                f"Unable to locate llama.cpp executable '{self.executable}'."
            ) from exc
        except subprocess.CalledProcessError as exc:
            message = exc.stderr.strip() or exc.stdout.strip() or str(exc.returncode)
            raise GenerationError(f"llama.cpp execution failed: {message}") from exc

        output = completed.stdout.strip()
        if not output:
            raise GenerationError("llama.cpp returned no output")
        return output

    @staticmethod
    def _validate_model_path(model_path: str) -> Path:
        path = Path(model_path).expanduser().resolve()
        if not path.exists():
            raise GenerationError(f"llama.cpp model not found at {path}")
        if not path.is_file():
            raise GenerationError(f"llama.cpp model must be a file: {path}")
        return path


__all__ = ["LlamaCppRunner", "format_llama3_chat"]

"""Tests for the llama.cpp runner adapter."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from scout.llm import GenerationError, format_llama3_chat
from scout.llm.llamacpp import LlamaCppRunner


def test_llama3_chat_template() -> None:
    text = format_llama3_chat("Be brief.", "Describe this folder.")

    assert text == (
        "<|begin_of_text|>"
        "<|start_header_id|>system<|end_header_id|>\n\nBe brief.<|eot_id|>"
        "<|start_header_id|>user<|end_header_id|>\n\nDescribe this folder.<|eot_id|>"
        "<|start_header_id|>assistant<|end_header_id|>\n\n"
    )


def test_llama3_chat_template_without_system() -> None:
    text = format_llama3_chat(None, "hi")

    assert "system" not in text
    assert text.endswith("<|start_header_id|>assistant<|end_header_id|>\n\n")


def test_llamacpp_runner_invokes_subprocess(monkeypatch, tmp_path: Path) -> None:
    model = tmp_path / "model.gguf"
    model.write_text("dummy", encoding="utf-8")
    recorded_args: list[list[str]] = []

    def fake_run(args, check, capture_output, text):  # type: ignore[no-untyped-def]
        recorded_args.append(list(args))
        return subprocess.CompletedProcess(args, 0, stdout="response\n", stderr="")

    monkeypatch.setattr("scout.llm.llamacpp.subprocess.run", fake_run)

    runner = LlamaCppRunner(
        model_path=str(model),
        executable="llama-binary",
        max_tokens=128,
        temperature=0.5,
    )
    response = runner.run("Hello", system="Be helpful", max_tokens=64)

    assert response == "response"
    args = recorded_args[0]
    assert args[0] == "llama-binary"
    assert args[args.index("-m") + 1] == str(model.resolve())
    assert args[args.index("-p") + 1] == format_llama3_chat("Be helpful", "Hello")
    assert args[args.index("-n") + 1] == "64"
    assert args[args.index("--temp") + 1] == "0.5"


def test_llamacpp_runner_surfaces_process_failure(monkeypatch, tmp_path: Path) -> None:
    model = tmp_path / "model.gguf"
    model.write_text("dummy", encoding="utf-8")

    def fake_run(args, check, capture_output, text):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(2, args, output="", stderr="out of memory")

    monkeypatch.setattr("scout.llm.llamacpp.subprocess.run", fake_run)

    with pytest.raises(GenerationError, match="out of memory"):
        LlamaCppRunner(model_path=str(model)).run("Hello")


def test_llamacpp_runner_validates_model_path(tmp_path: Path) -> None:
    with pytest.raises(GenerationError):
        LlamaCppRunner(model_path=str(tmp_path / "missing.gguf"))

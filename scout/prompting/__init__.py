"""Prompt assembly for the generation backend."""

from .builder import (
    PromptArtifact,
    PromptBuilder,
    TRUNCATION_MARKER,
    build_context,
    human_size,
)

__all__ = [
    "PromptArtifact",
    "PromptBuilder",
    "TRUNCATION_MARKER",
    "build_context",
    "human_size",
]

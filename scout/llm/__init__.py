"""Generation backend adapters."""

from .llamacpp import LlamaCppRunner, format_llama3_chat
from .runner import GenerationError, LLMRequest, LLMRunner

__all__ = ["GenerationError", "LLMRequest", "LLMRunner", "LlamaCppRunner", "format_llama3_chat"]

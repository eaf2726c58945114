"""Adapters around local model runtimes (OpenAI-compatible servers / Ollama)."""

from __future__ import annotations

import ipaddress
import json
import os
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

_AUTO_BASE_URL = object()
_AUTO_API_KEY = object()

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1", "host.docker.internal"})


class GenerationError(RuntimeError):
    """Raised when the generation backend fails to produce text."""


@dataclass
class LLMRequest:
    """Represents a single generation request for the local backend."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    executable: Optional[str]
    base_url: Optional[str]
    api_key: Optional[str]
    request_timeout: Optional[float]


class LLMRunner:
    """Sends the assembled prompt to a local model and returns its reply.

    With a ``base_url`` the runner speaks the OpenAI-compatible
    ``/chat/completions`` protocol (Ollama, llama.cpp server, LM Studio).
    Passing ``base_url=None`` falls back to piping the prompt into
    ``ollama run``. Failures are raised as :class:`GenerationError` and
    never retried.
    """

    DEFAULT_MODEL = "llama3.2:3b"
    DEFAULT_BASE_URL = "http://localhost:11434/v1"
    ENV_MODEL_KEYS = ("SCOUT_LLM_MODEL", "OLLAMA_MODEL")
    ENV_BASE_URL_KEYS = ("SCOUT_LLM_BASE_URL",)
    ENV_API_KEY_KEYS = ("SCOUT_LLM_API_KEY",)

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: str | None | object = _AUTO_BASE_URL,
        executable: str = "ollama",
        temperature: Optional[float] = 0.2,
        max_tokens: Optional[int] = 1024,
        api_key: str | None | object = _AUTO_API_KEY,
        request_timeout: Optional[float] = 120.0,
        runner: Callable[[LLMRequest], str] | None = None,
    ) -> None:
        self.model = self._resolve_model(model)
        self.base_url = self._resolve_base_url(base_url)
        self.executable = executable
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.api_key = self._resolve_api_key(api_key)
        self.request_timeout = request_timeout
        if runner is not None:
            self._runner = runner
        else:
            self._runner = self._http_runner if self.base_url else self._cli_runner

    def run(self, prompt: str, *, system: str | None = None) -> str:
        """Generate a reply for ``prompt`` using the configured backend."""
        request = LLMRequest(
            prompt=prompt,
            system=system,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            executable=self.executable,
            base_url=self.base_url,
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        return self._runner(request)

    @staticmethod
    def _cli_runner(request: LLMRequest) -> str:
        executable = request.executable or "ollama"
        stdin = request.prompt
        if request.system:
            stdin = f"{request.system.strip()}\n\n{request.prompt}"
        try:
            completed = subprocess.run(
                [executable, "run", request.model],
                input=stdin,
                check=True,
                capture_output=True,
                text=True,
                timeout=request.request_timeout,
            )
        except FileNotFoundError as exc:  # pragma: no cover - depends on environment
            raise GenerationError(
                f"Unable to locate '{executable}'. Install Ollama or configure llm.base_url."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GenerationError(
                f"'{executable} run' timed out after {request.request_timeout} seconds"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or str(exc.returncode)
            raise GenerationError(f"'{executable} run' failed: {detail}") from exc

        output = completed.stdout.strip()
        if not output:
            raise GenerationError(f"'{executable} run' returned no output")
        return output

    @staticmethod
    def _http_runner(request: LLMRequest) -> str:
        if not request.base_url:
            raise GenerationError("HTTP runner requires a base_url to be configured.")
        endpoint = f"{request.base_url}/chat/completions"
        payload: dict[str, object] = {
            "model": request.model,
            "messages": LLMRunner._build_messages(request.system, request.prompt),
            "stream": False,
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens

        headers = {"Content-Type": "application/json"}
        if request.api_key:
            headers["Authorization"] = f"Bearer {request.api_key}"
        http_request = Request(
            endpoint,
            data=json.dumps(payload).encode("utf-8"),
            headers=headers,
            method="POST",
        )

        try:
            with urlopen(http_request, timeout=request.request_timeout or 120.0) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise GenerationError(f"Generation request failed with status {exc.code}: {message}") from exc
        except URLError as exc:
            raise GenerationError(f"Generation backend unavailable at {endpoint}: {exc.reason}") from exc
        except TimeoutError as exc:
            raise GenerationError(f"Generation request to {endpoint} timed out") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GenerationError("Generation backend returned invalid JSON") from exc

        content = LLMRunner._extract_content(response_payload)
        if not content.strip():
            raise GenerationError("Generation backend returned an empty response")
        return content.strip()

    @staticmethod
    def _build_messages(system: str | None, prompt: str) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_content(payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        first = choices[0]
        message = first.get("message")
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"]
        text = first.get("text")
        return text if isinstance(text, str) else ""

    def _resolve_model(self, model: str | None) -> str:
        return model or self._first_env_value(self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL

    def _resolve_base_url(self, base_url: str | None | object) -> str | None:
        if base_url is None:
            return None
        if base_url is _AUTO_BASE_URL:
            base_url = self._first_env_value(self.ENV_BASE_URL_KEYS) or self.DEFAULT_BASE_URL
        return self._ensure_local_url(str(base_url))

    def _resolve_api_key(self, api_key: str | None | object) -> str | None:
        if api_key is _AUTO_API_KEY:
            return self._first_env_value(self.ENV_API_KEY_KEYS)
        return api_key  # type: ignore[return-value]

    @staticmethod
    def _first_env_value(keys: Sequence[str]) -> str | None:
        for key in keys:
            value = os.getenv(key)
            if value:
                return value
        return None

    @classmethod
    def _ensure_local_url(cls, url: str) -> str:
        normalized = url.rstrip("/")
        host = urlparse(normalized).hostname
        if host is None or cls._is_local_host(host):
            return normalized
        raise ValueError(f"Remote base_url '{url}' is not permitted. Configure a local model server.")

    @staticmethod
    def _is_local_host(host: str) -> bool:
        lowered = host.lower()
        if lowered in _LOCAL_HOSTS:
            return True
        if lowered.endswith((".local", ".localdomain")):
            return True
        try:
            return ipaddress.ip_address(lowered).is_loopback
        except ValueError:
            return False


__all__ = ["GenerationError", "LLMRequest", "LLMRunner"]

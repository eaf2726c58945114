"""Configuration loading for scout (.scout.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".scout.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Generation backend settings from .scout.yml."""

    runner: Optional[str] = None
    model: Optional[str] = None
    executable: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class ScanConfig:
    """Traversal and extraction settings."""

    max_workers: int = 4


@dataclass
class PromptConfig:
    """Context assembly limits."""

    max_key_files: int = 5
    max_prompt_chars: int = 12000


@dataclass
class ScoutConfig:
    """Represents the high-level settings defined in .scout.yml."""

    root: Path
    llm: Optional[LLMConfig] = None
    scan: ScanConfig = field(default_factory=ScanConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    keywords: Dict[str, List[str]] = field(default_factory=dict)


def load_config(config_path: Path) -> ScoutConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ScoutConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = None
    if llm_data:
        llm = LLMConfig(
            runner=_as_str(llm_data.get("runner")),
            model=_as_str(llm_data.get("model")),
            executable=_as_str(llm_data.get("executable")),
            temperature=_as_float(llm_data.get("temperature")),
            max_tokens=_as_int(llm_data.get("max_tokens")),
            base_url=_as_str(llm_data.get("base_url")),
            api_key=_as_str(llm_data.get("api_key")),
            request_timeout=_as_float(llm_data.get("request_timeout")),
        )
        if not any(
            (
                llm.runner,
                llm.model,
                llm.executable,
                llm.temperature,
                llm.max_tokens,
                llm.base_url,
                llm.api_key,
                llm.request_timeout,
            )
        ):
            llm = None

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    max_workers = _as_int(scan_data.get("max_workers"))
    if max_workers is not None:
        if max_workers < 1:
            raise ConfigError("scan.max_workers must be at least 1")
        scan.max_workers = max_workers

    prompt = PromptConfig()
    prompt_data = _as_dict(data.get("prompt"))
    max_key_files = _as_int(prompt_data.get("max_key_files"))
    if max_key_files is not None:
        prompt.max_key_files = max(max_key_files, 0)
    max_prompt_chars = _as_int(prompt_data.get("max_prompt_chars"))
    if max_prompt_chars is not None:
        prompt.max_prompt_chars = max(max_prompt_chars, 0)

    keywords: Dict[str, List[str]] = {}
    for name, words in _as_dict(data.get("keywords")).items():
        keywords[str(name)] = _as_str_list(words)

    return ScoutConfig(
        root=root,
        llm=llm,
        scan=scan,
        prompt=prompt,
        keywords=keywords,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []

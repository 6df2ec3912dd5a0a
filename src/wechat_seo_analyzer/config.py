from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class AISettings:
    """Configuration block for the optional AI enhancement collaborator."""

    enabled: bool = False
    model: str = "Qwen/Qwen2.5-72B-Instruct"
    api_key: str | None = None
    api_key_env: str = "SILICONFLOW_API_KEY"
    base_url: str | None = "https://api.siliconflow.cn/v1"
    organization: str | None = None
    temperature: float = 0.7
    max_output_tokens: int = 4000
    request_timeout: float = 60.0
    parallel_requests: int = 1
    trends_enabled: bool = False


@dataclass(slots=True)
class SeoAnalyzerConfig:
    """Configuration options for keyword extraction and SEO scoring."""

    keyword_method: str = "combined"
    keyword_top_k: int = 15
    textrank_window_size: int = 5
    textrank_damping: float = 0.85
    textrank_iterations: int = 50
    tfidf_length_boost: float = 1.2
    tfidf_frequency_penalty: float = 0.7
    tfidf_frequency_ratio: float = 0.1
    tfidf_weight: float = 0.6
    textrank_weight: float = 0.4
    title_min_length: int = 15
    title_max_length: int = 25
    content_min_length: int = 300
    content_long_length: int = 2000
    content_structure_length: int = 500
    keyword_density_min: float = 1.0
    keyword_density_max: float = 5.0
    readability_threshold: float = 60.0
    ai: AISettings = field(default_factory=AISettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(SeoAnalyzerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "ai" in data:
        ai_value = data["ai"]
        if isinstance(ai_value, AISettings):
            kwargs["ai"] = ai_value
        elif isinstance(ai_value, Mapping):
            kwargs["ai"] = _build_ai_settings(ai_value)
        else:
            kwargs.pop("ai")
    return kwargs


def _build_ai_settings(data: Mapping[str, Any]) -> AISettings:
    ai_allowed = {field.name for field in fields(AISettings)}
    filtered = {key: data[key] for key in data if key in ai_allowed}
    return AISettings(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> SeoAnalyzerConfig:
    """Build a SeoAnalyzerConfig from a dictionary-like input."""
    if data is None:
        return SeoAnalyzerConfig()
    return SeoAnalyzerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> SeoAnalyzerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> SeoAnalyzerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return SeoAnalyzerConfig()
    return config_from_yaml(path)

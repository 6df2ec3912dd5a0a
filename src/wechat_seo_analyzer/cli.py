from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, List

import typer
import yaml

from .config import AISettings, SeoAnalyzerConfig, load_config
from .content import analyze_content
from .enhancement import AIEnhancer, Enhancer, NoOpEnhancer, enhance_content, enhance_title
from .extractors import METHODS, build_analyzer_from_config
from .llm import OpenAIChatClient
from .pipeline import analyze_article
from .title import analyze_title

app = typer.Typer(help="WeChat article SEO analyzer CLI.", no_args_is_help=True)

logger = logging.getLogger(__name__)


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Analyze titles and article bodies for WeChat search."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def keywords(
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    text: str | None = typer.Option(None, "--text", "-t", help="Inline text to analyze."),
    method: str = typer.Option(
        "combined", "--method", "-m", help="One of: tfidf, textrank, combined."
    ),
    top_k: int | None = typer.Option(None, "--top-k", "-k", help="Keywords to return."),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Extract ranked keywords and emit them as JSON."""
    cfg = load_config(config)
    if method not in METHODS:
        raise typer.BadParameter(
            f"Unknown method '{method}'. Choose from {', '.join(METHODS)}."
        )
    source = _read_text(input_path, text)
    analyzer = build_analyzer_from_config(cfg)
    results = analyzer.analyze(
        source, method, top_k if top_k is not None else cfg.keyword_top_k
    )
    _echo_json({"method": method, "keywords": [asdict(item) for item in results]})


@app.command()
def title(
    title_text: str = typer.Argument(..., help="Title to score."),
    keyword: List[str] = typer.Option(
        [], "--keyword", "-k", help="Target keyword (repeatable)."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    ai_enabled: bool | None = typer.Option(
        None, "--ai-enabled/--ai-disabled", help="Toggle AI-backed annotations."
    ),
    ai_model: str | None = typer.Option(None, "--ai-model", help="Chat model identifier."),
    ai_api_key: str | None = typer.Option(
        None, "--ai-api-key", help="Explicit API key (prefer env vars)."
    ),
    ai_api_key_env: str | None = typer.Option(
        None, "--ai-api-key-env", help="Environment variable holding the API key."
    ),
    ai_base_url: str | None = typer.Option(
        None, "--ai-base-url", help="OpenAI-compatible base URL."
    ),
) -> None:
    """Score a title and list suggested variants."""
    cfg = load_config(config)
    _apply_ai_overrides(
        cfg.ai, ai_enabled, ai_model, ai_api_key, ai_api_key_env, ai_base_url, None
    )
    analysis = analyze_title(title_text, keyword, config=cfg)
    analysis = enhance_title(analysis, _build_enhancer(cfg), keyword)
    _echo_json(asdict(analysis))


@app.command()
def content(
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    text: str | None = typer.Option(None, "--text", "-t", help="Inline text to analyze."),
    keyword: List[str] = typer.Option(
        [], "--keyword", "-k", help="Target keyword (repeatable)."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    ai_enabled: bool | None = typer.Option(
        None, "--ai-enabled/--ai-disabled", help="Toggle AI-backed annotations."
    ),
    ai_model: str | None = typer.Option(None, "--ai-model", help="Chat model identifier."),
    ai_api_key: str | None = typer.Option(
        None, "--ai-api-key", help="Explicit API key (prefer env vars)."
    ),
    ai_api_key_env: str | None = typer.Option(
        None, "--ai-api-key-env", help="Environment variable holding the API key."
    ),
    ai_base_url: str | None = typer.Option(
        None, "--ai-base-url", help="OpenAI-compatible base URL."
    ),
    ai_trends: bool | None = typer.Option(
        None, "--ai-trends/--no-ai-trends", help="Also ask for trending topics."
    ),
) -> None:
    """Score an article body and emit the analysis as JSON."""
    cfg = load_config(config)
    _apply_ai_overrides(
        cfg.ai, ai_enabled, ai_model, ai_api_key, ai_api_key_env, ai_base_url, ai_trends
    )
    body = _read_text(input_path, text)
    analysis = analyze_content(body, keyword, config=cfg)
    analysis = enhance_content(analysis, _build_enhancer(cfg), body)
    _echo_json(asdict(analysis))


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    title_text: str = typer.Option(..., "--title", help="Article title."),
    keyword: List[str] = typer.Option(
        [], "--keyword", "-k", help="Target keyword (repeatable)."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    ai_enabled: bool | None = typer.Option(
        None, "--ai-enabled/--ai-disabled", help="Toggle AI-backed annotations."
    ),
    ai_model: str | None = typer.Option(None, "--ai-model", help="Chat model identifier."),
    ai_api_key: str | None = typer.Option(
        None, "--ai-api-key", help="Explicit API key (prefer env vars)."
    ),
    ai_api_key_env: str | None = typer.Option(
        None, "--ai-api-key-env", help="Environment variable holding the API key."
    ),
    ai_base_url: str | None = typer.Option(
        None, "--ai-base-url", help="OpenAI-compatible base URL."
    ),
    ai_trends: bool | None = typer.Option(
        None, "--ai-trends/--no-ai-trends", help="Also ask for trending topics."
    ),
) -> None:
    """Analyze a full article (title + body) and emit the report as JSON."""
    cfg = load_config(config)
    _apply_ai_overrides(
        cfg.ai, ai_enabled, ai_model, ai_api_key, ai_api_key_env, ai_base_url, ai_trends
    )
    body = _read_text(input_path, None)
    report = analyze_article(
        title_text, body, keyword, config=cfg, enhancer=_build_enhancer(cfg)
    )
    _echo_json(asdict(report))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = SeoAnalyzerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False, allow_unicode=True))


def main() -> None:
    app()


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _read_text(input_path: Path | None, text: str | None) -> str:
    """Return inline text or the contents of input_path."""
    if text is not None:
        return text
    if input_path is None:
        raise typer.BadParameter("Provide either --input-path or --text.")
    try:
        return input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read {input_path}: {exc}") from exc


def _apply_ai_overrides(
    settings: AISettings,
    ai_enabled: bool | None,
    ai_model: str | None,
    ai_api_key: str | None,
    ai_api_key_env: str | None,
    ai_base_url: str | None,
    ai_trends: bool | None,
) -> None:
    """Override AI enhancement settings from CLI flags."""
    if ai_enabled is not None:
        settings.enabled = ai_enabled
    if ai_model:
        settings.model = ai_model
    if ai_api_key:
        settings.api_key = ai_api_key
    if ai_api_key_env:
        settings.api_key_env = ai_api_key_env
    if ai_base_url:
        settings.base_url = ai_base_url
    if ai_trends is not None:
        settings.trends_enabled = ai_trends


def _build_enhancer(config: SeoAnalyzerConfig) -> Enhancer:
    """Instantiate the configured enhancer; fall back to rules only when unavailable."""
    if not config.ai.enabled:
        return NoOpEnhancer()
    api_key = _resolve_api_key(config.ai)
    if not api_key:
        typer.echo(
            "AI enhancement enabled but no API key configured; using rule-based results.",
            err=True,
        )
        return NoOpEnhancer()
    try:
        client = OpenAIChatClient(config.ai, api_key=api_key)
    except RuntimeError as exc:
        logger.warning("AI enhancement unavailable: %s", exc)
        return NoOpEnhancer()
    return AIEnhancer(client, trends_enabled=config.ai.trends_enabled)


def _resolve_api_key(settings: AISettings) -> str | None:
    """Resolve the API key from explicit config or the configured environment variable."""
    if settings.api_key:
        return settings.api_key
    env_name = settings.api_key_env or "SILICONFLOW_API_KEY"
    return os.environ.get(env_name) or None


if __name__ == "__main__":
    main()

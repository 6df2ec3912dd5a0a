from pathlib import Path

import pytest

from wechat_seo_analyzer.config import (
    AISettings,
    SeoAnalyzerConfig,
    config_from_dict,
    config_from_yaml,
    load_config,
)


def test_defaults_match_algorithm_parameters():
    config = load_config()

    assert config.textrank_window_size == 5
    assert config.textrank_damping == 0.85
    assert config.textrank_iterations == 50
    assert config.keyword_method == "combined"
    assert config.ai.enabled is False


def test_config_from_dict_ignores_unknown_keys_and_builds_ai_block():
    config = config_from_dict(
        {"keyword_top_k": 8, "unknown": 1, "ai": {"enabled": True, "model": "m", "x": 2}}
    )

    assert config.keyword_top_k == 8
    assert config.ai == AISettings(enabled=True, model="m")
    assert config_from_dict(None) == SeoAnalyzerConfig()


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "keyword_method: tfidf\ntitle_max_length: 30\nai:\n  trends_enabled: true\n",
        encoding="utf-8",
    )
    config = config_from_yaml(path)

    assert config.keyword_method == "tfidf"
    assert config.title_max_length == 30
    assert config.ai.trends_enabled is True


def test_config_from_yaml_rejects_non_mapping(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_to_dict_round_trips_through_config_from_dict():
    config = SeoAnalyzerConfig(keyword_top_k=20)

    assert config_from_dict(config.to_dict()) == config

"""
wechat_seo_analyzer package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import AISettings, SeoAnalyzerConfig, config_from_dict, config_from_yaml, load_config
from .content import analyze_content, calculate_readability, calculate_seo_score
from .extractors import (
    CombinedKeywordAnalyzer,
    TextRankExtractor,
    TFIDFExtractor,
    build_extractor_from_config,
    extract_keywords,
)
from .pipeline import analyze_article
from .title import analyze_title
from .tokenization import tokenize

__all__ = [
    "AISettings",
    "SeoAnalyzerConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "tokenize",
    "extract_keywords",
    "build_extractor_from_config",
    "TFIDFExtractor",
    "TextRankExtractor",
    "CombinedKeywordAnalyzer",
    "analyze_title",
    "analyze_content",
    "calculate_readability",
    "calculate_seo_score",
    "analyze_article",
]

__version__ = "0.1.0"

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from ..models import KeywordResult
from .base import KeywordExtractor
from .combined import METHODS, CombinedKeywordAnalyzer
from .frequency import FrequencyKeywordExtractor
from .textrank import TextRankExtractor
from .tfidf import TFIDFExtractor, calculate_idf, calculate_tf

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import SeoAnalyzerConfig

__all__ = [
    "KeywordExtractor",
    "TFIDFExtractor",
    "TextRankExtractor",
    "CombinedKeywordAnalyzer",
    "FrequencyKeywordExtractor",
    "calculate_idf",
    "calculate_tf",
    "create_extractor",
    "build_analyzer_from_config",
    "build_extractor_from_config",
    "extract_keywords",
    "extract_title_keywords",
]


def create_extractor(name: str, **kwargs: Any) -> KeywordExtractor:
    """Factory for building extractors by name."""
    normalized = name.lower().strip()
    if normalized == "tfidf":
        return TFIDFExtractor(**kwargs)
    if normalized == "textrank":
        return TextRankExtractor(**kwargs)
    if normalized == "combined":
        return CombinedKeywordAnalyzer(**kwargs)
    if normalized == "frequency":
        return FrequencyKeywordExtractor(**kwargs)
    raise ValueError(f"Unknown keyword extractor '{name}'.")


def build_analyzer_from_config(config: "SeoAnalyzerConfig") -> CombinedKeywordAnalyzer:
    """Build the TF-IDF + TextRank analyzer with the configured parameters."""
    return CombinedKeywordAnalyzer(
        tfidf=TFIDFExtractor(
            length_boost=config.tfidf_length_boost,
            frequency_penalty=config.tfidf_frequency_penalty,
            frequency_ratio=config.tfidf_frequency_ratio,
        ),
        textrank=TextRankExtractor(
            window_size=config.textrank_window_size,
            damping=config.textrank_damping,
            iterations=config.textrank_iterations,
        ),
        tfidf_weight=config.tfidf_weight,
        textrank_weight=config.textrank_weight,
    )


def build_extractor_from_config(config: "SeoAnalyzerConfig") -> KeywordExtractor:
    """Select the keyword strategy named by config.keyword_method."""
    normalized = config.keyword_method.lower().strip()
    if normalized == "frequency":
        return FrequencyKeywordExtractor()
    analyzer = build_analyzer_from_config(config)
    if normalized == "tfidf":
        return analyzer.tfidf
    if normalized == "textrank":
        return analyzer.textrank
    if normalized == "combined":
        return analyzer
    raise ValueError(f"Unknown keyword extractor '{config.keyword_method}'.")


def extract_keywords(
    text: str, top_k: int = 15, method: str = "combined"
) -> List[KeywordResult]:
    """Extract keywords from text with default algorithm parameters."""
    if method not in METHODS:
        raise ValueError(f"Unknown keyword method '{method}'.")
    return CombinedKeywordAnalyzer().analyze(text, method, top_k)


def extract_title_keywords(text: str) -> List[KeywordResult]:
    """Top ten combined keywords, as shown alongside a title analysis."""
    return extract_keywords(text, top_k=10)

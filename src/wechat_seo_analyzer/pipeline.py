from __future__ import annotations

from typing import Sequence

from .config import SeoAnalyzerConfig
from .content import analyze_content, calculate_seo_score
from .enhancement import Enhancer, NoOpEnhancer, enhance_content, enhance_title
from .extractors import build_extractor_from_config
from .models import ArticleReport, KeywordResult
from .title import analyze_title


def keyword_score(
    content: str,
    keywords: Sequence[KeywordResult],
    target_keywords: Sequence[str],
    top_k: int,
) -> int:
    """
    0-100 keyword score for the overall blend.

    With target keywords it is the share of them that occur in the body;
    otherwise it reflects how many distinct keywords could be extracted.
    """
    targets = [keyword for keyword in target_keywords if keyword]
    if targets:
        lowered = content.lower()
        found = sum(1 for keyword in targets if keyword.lower() in lowered)
        return round(found / len(targets) * 100)
    if top_k <= 0:
        return 0
    return min(100, round(len(keywords) / top_k * 100))


def analyze_article(
    title: str,
    content: str,
    target_keywords: Sequence[str] = (),
    config: SeoAnalyzerConfig | None = None,
    enhancer: Enhancer | None = None,
) -> ArticleReport:
    """Run title and content analysis and blend them into an overall SEO score."""
    cfg = config or SeoAnalyzerConfig()
    active_enhancer = enhancer or NoOpEnhancer()
    extractor = build_extractor_from_config(cfg)

    title_analysis = analyze_title(title, target_keywords, config=cfg)
    content_analysis = analyze_content(
        content, target_keywords, config=cfg, extractor=extractor
    )
    title_analysis = enhance_title(title_analysis, active_enhancer, target_keywords)
    content_analysis = enhance_content(content_analysis, active_enhancer, content, title)

    kw_score = keyword_score(
        content, content_analysis.keywords, target_keywords, cfg.keyword_top_k
    )
    seo_score = calculate_seo_score(
        title_analysis.score,
        content_analysis.score,
        kw_score,
        content_analysis.readability_score,
    )
    return ArticleReport(
        title=title_analysis,
        content=content_analysis,
        keyword_score=kw_score,
        seo_score=seo_score,
    )

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Sequence

from .config import SeoAnalyzerConfig
from .extractors import KeywordExtractor, build_extractor_from_config
from .models import ContentAnalysis, SEOScore

SENTENCE_SPLIT_RE = re.compile(r"[。！？]")
CJK_CHAR_RE = re.compile(r"[\u4e00-\u9fa5]")
HEADING_RE = re.compile(r"#{1,6}\s")
LIST_MARKER_RE = re.compile(r"[0-9]+[、.]\s")


@dataclass(frozen=True, slots=True)
class KeywordUsage:
    count: int
    density: float


def analyze_keyword_usage(content: str, keywords: Sequence[str]) -> KeywordUsage:
    """
    Count case-insensitive occurrences of the target keywords.

    density = count * len(all keywords joined) / len(content) * 100. This is
    not a plain character share; thresholds in analyze_content are tuned to it.
    """
    count = 0
    for keyword in keywords:
        if not keyword:
            continue
        pattern = re.compile(re.escape(keyword), re.IGNORECASE)
        count += len(pattern.findall(content))
    if not content:
        return KeywordUsage(count=count, density=0.0)
    joined_length = len("".join(keywords))
    return KeywordUsage(count=count, density=count * joined_length / len(content) * 100)


def calculate_readability(content: str) -> int:
    """Score 0-100 that drops as sentences get longer."""
    sentences = [s for s in SENTENCE_SPLIT_RE.split(content) if s.strip()]
    if not sentences:
        return 0

    cjk_chars = len(CJK_CHAR_RE.findall(content))
    avg_chars_per_sentence = cjk_chars / len(sentences)
    avg_sentence_length = len(content) / len(sentences)

    score = 100
    if avg_chars_per_sentence > 20:
        score -= 20
    if avg_chars_per_sentence > 30:
        score -= 20
    if avg_sentence_length > 50:
        score -= 10
    return max(0, score)


def has_structure(content: str) -> bool:
    """True when the body contains markdown headings or numbered list items."""
    return bool(HEADING_RE.search(content) or LIST_MARKER_RE.search(content))


def analyze_content(
    content: str,
    target_keywords: Sequence[str] = (),
    *,
    config: SeoAnalyzerConfig | None = None,
    extractor: KeywordExtractor | None = None,
) -> ContentAnalysis:
    """Score an article body on length, keyword density, readability and structure."""
    cfg = config or SeoAnalyzerConfig()
    word_count = len(content)
    issues: List[str] = []
    suggestions: List[str] = []
    score = 100

    if word_count < cfg.content_min_length:
        issues.append("内容过短，搜索引擎可能认为内容价值不高")
        suggestions.append(
            f"建议内容至少{cfg.content_min_length}字以上，提供更丰富的信息"
        )
        score -= 20
    elif word_count > cfg.content_long_length:
        suggestions.append("内容较长，建议添加小标题和段落分隔，提升可读性")

    keyword_extractor = extractor or build_extractor_from_config(cfg)
    keywords = keyword_extractor.extract_keywords(content, cfg.keyword_top_k)

    if target_keywords:
        usage = analyze_keyword_usage(content, target_keywords)
        if usage.density < cfg.keyword_density_min:
            issues.append("目标关键词密度过低")
            suggestions.append("适当增加目标关键词的使用频率，建议密度在1-3%之间")
            score -= 15
        elif usage.density > cfg.keyword_density_max:
            issues.append("关键词密度过高，可能被认为是关键词堆砌")
            suggestions.append("减少关键词使用频率，保持自然的表达方式")
            score -= 10

    readability = calculate_readability(content)
    if readability < cfg.readability_threshold:
        issues.append("内容可读性较低")
        suggestions.append("使用更短的句子，添加标点符号，使用简单词汇")
        score -= 10

    if not has_structure(content) and word_count > cfg.content_structure_length:
        suggestions.append("添加小标题或列表结构，提升内容组织性")
        score -= 5

    return ContentAnalysis(
        score=max(0, min(100, score)),
        word_count=word_count,
        keywords=tuple(keywords),
        readability_score=readability,
        issues=tuple(issues),
        suggestions=tuple(dict.fromkeys(suggestions)),
    )


def calculate_seo_score(
    title_score: int,
    content_score: int,
    keyword_score: int,
    readability_score: int = 85,
) -> SEOScore:
    """Blend the individual scores 30/40/20/10 into an overall score."""
    blended = (
        title_score * 0.3
        + content_score * 0.4
        + keyword_score * 0.2
        + readability_score * 0.1
    )
    # Half-up rounding; round() would send 82.5 to 82.
    overall = math.floor(blended + 0.5)
    return SEOScore(
        overall=overall,
        title=title_score,
        keywords=keyword_score,
        content=content_score,
        readability=readability_score,
    )

from __future__ import annotations

import re
from typing import List, Sequence

from .config import SeoAnalyzerConfig
from .models import OptimizedTitle, TitleAnalysis

HIGH_VALUE_WORDS = ("如何", "方法", "技巧", "秘诀", "攻略", "教程", "指南", "揭秘", "解析")
QUESTION_WORDS = ("什么", "怎么", "为什么", "如何", "哪些", "怎样")
EMOTIONAL_WORDS = ("惊人", "震撼", "神奇", "完美", "实用", "高效", "简单", "必备", "重要")

DIGIT_RE = re.compile(r"[0-9]+")


def _contains_any(title: str, words: Sequence[str]) -> bool:
    return any(word in title for word in words)


def keyword_coverage(title: str, target_keywords: Sequence[str]) -> float:
    """Percentage of target keywords found in the title, case-insensitively."""
    if not target_keywords:
        return 0.0
    lowered = title.lower()
    found = sum(1 for keyword in target_keywords if keyword.lower() in lowered)
    return found / len(target_keywords) * 100


def analyze_title(
    title: str,
    target_keywords: Sequence[str] = (),
    *,
    config: SeoAnalyzerConfig | None = None,
    with_variants: bool = True,
) -> TitleAnalysis:
    """Score a title against length, keyword and wording rules."""
    cfg = config or SeoAnalyzerConfig()
    issues: List[str] = []
    suggestions: List[str] = []
    score = 100

    length = len(title)
    if length < cfg.title_min_length:
        issues.append("标题过短，可能影响信息传达")
        suggestions.append(
            f"建议增加描述性词汇，长度控制在{cfg.title_min_length}-{cfg.title_max_length}字"
        )
        score -= 15
    elif length > cfg.title_max_length:
        issues.append("标题过长，可能在搜索结果中被截断")
        suggestions.append("建议精简表达，突出核心关键词")
        score -= 10

    coverage = keyword_coverage(title, target_keywords)
    if target_keywords:
        if coverage == 0:
            issues.append("标题中未包含目标关键词")
            suggestions.append("建议在标题中自然融入主要关键词")
            score -= 20
        elif coverage < 50:
            suggestions.append("可以增加更多相关关键词")
            score -= 5

    if not _contains_any(title, HIGH_VALUE_WORDS):
        suggestions.append('添加"如何"、"方法"、"技巧"等高价值词汇可提升点击率')
        score -= 5

    if _contains_any(title, QUESTION_WORDS):
        score += 5

    if _contains_any(title, EMOTIONAL_WORDS):
        score += 3
    else:
        suggestions.append('适当添加情感词汇如"实用"、"高效"可增加吸引力')

    if DIGIT_RE.search(title):
        score += 5
    else:
        suggestions.append('添加具体数字可以提升吸引力，如"5个方法"、"10个技巧"')

    variants: tuple[OptimizedTitle, ...] = ()
    if with_variants:
        variants = tuple(generate_optimized_titles(title, target_keywords, config=cfg))

    return TitleAnalysis(
        title=title,
        score=max(0, min(100, score)),
        issues=tuple(issues),
        suggestions=tuple(dict.fromkeys(suggestions)),
        keyword_density=coverage,
        length=length,
        optimized_versions=variants,
    )


def generate_optimized_titles(
    title: str,
    target_keywords: Sequence[str] = (),
    *,
    config: SeoAnalyzerConfig | None = None,
) -> List[OptimizedTitle]:
    """Build up to three variants, each adding a marker the title lacks."""
    candidates: List[tuple[str, str]] = []
    if not _contains_any(title, QUESTION_WORDS):
        candidates.append((f"如何{title}", '添加疑问词"如何"提升搜索匹配度'))
    if not DIGIT_RE.search(title):
        candidates.append((f"5个{title}的方法", "添加具体数字增加吸引力"))
    if not _contains_any(title, EMOTIONAL_WORDS):
        candidates.append((f"实用的{title}技巧", '添加情感词"实用"增强吸引力'))

    variants = [
        OptimizedTitle(
            title=candidate,
            score=analyze_title(
                candidate, target_keywords, config=config, with_variants=False
            ).score,
            changes=(change,),
        )
        for candidate, change in candidates
    ]
    return sorted(variants, key=lambda item: item.score, reverse=True)

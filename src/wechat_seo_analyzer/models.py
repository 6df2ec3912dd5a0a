from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class TermStats:
    """Occurrence count and token-stream positions of a single term."""

    count: int = 0
    positions: list[int] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class KeywordResult:
    """A ranked keyword with its share of the token stream."""

    keyword: str
    density: float
    count: int
    positions: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class AIAnnotations:
    """Optional annotations attached by an AI enhancer; never part of the score."""

    insights: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    score: float | None = None
    trending_topics: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OptimizedTitle:
    """A mechanically generated title variant and its rule-based score."""

    title: str
    score: int
    changes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TitleAnalysis:
    """Rule-based scoring of a single article title."""

    title: str
    score: int
    issues: tuple[str, ...]
    suggestions: tuple[str, ...]
    keyword_density: float
    length: int
    optimized_versions: tuple[OptimizedTitle, ...] = ()
    annotations: AIAnnotations | None = None


@dataclass(frozen=True, slots=True)
class ContentAnalysis:
    """Rule-based scoring of an article body."""

    score: int
    word_count: int
    keywords: tuple[KeywordResult, ...]
    readability_score: int
    issues: tuple[str, ...]
    suggestions: tuple[str, ...]
    annotations: AIAnnotations | None = None


@dataclass(frozen=True, slots=True)
class SEOScore:
    """Weighted blend of the individual scores."""

    overall: int
    title: int
    keywords: int
    content: int
    readability: int


@dataclass(frozen=True, slots=True)
class ArticleReport:
    """Title, content and overall scores for one article."""

    title: TitleAnalysis
    content: ContentAnalysis
    keyword_score: int
    seo_score: SEOScore

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Sequence

from .llm.openai_client import ChatMetadata, OpenAIChatClient
from .models import AIAnnotations, ContentAnalysis, TitleAnalysis

logger = logging.getLogger(__name__)

SEO_SYSTEM_PROMPT = (
    "你是一位专业的微信公众号SEO优化专家。请分析用户提供的内容，从以下角度给出专业建议：\n"
    "1. 微信搜一搜优化建议\n"
    "2. 关键词布局优化\n"
    "3. 标题吸引力提升\n"
    "4. 内容结构改进\n"
    "5. 热门话题契合度\n"
    "\n"
    "请用简洁专业的中文回复，每个建议控制在50字以内。"
)

SEO_USER_PROMPT_TEMPLATE = (
    "请分析以下内容的SEO表现：\n"
    "\n"
    "标题：{title}\n"
    "目标关键词：{keywords}\n"
    "内容：{content}\n"
    "\n"
    "请提供具体的优化建议和评分。"
)

TRENDS_SYSTEM_PROMPT = (
    "你是一位敏锐的内容趋势分析师。请分析内容中的热点话题，识别当前流行趋势，并提供话题优化建议。\n"
    "每个热门话题单独一行，以“话题：”开头。"
)

TRENDS_USER_PROMPT_TEMPLATE = (
    "请分析以下内容的热点话题匹配度和优化机会：\n"
    "\n"
    "内容：{content}\n"
    "\n"
    "请识别相关的热门话题，评估传播潜力，并给出优化建议。"
)

SEO_CONTENT_LIMIT = 2000
TRENDS_CONTENT_LIMIT = 1500
DEFAULT_AI_SCORE = 75.0

SUGGESTION_MARKERS = ("建议", "优化", "改进")
INSIGHT_MARKERS = ("分析", "评估", "发现")
SCORE_RE = re.compile(r"(?:评分|得分|分数)[:：]?\s*(\d{1,3})|(\d{1,3})\s*分(?![钟析类数])")
TOPIC_RE = re.compile(r"^\s*(?:[-*]\s*)?话题[:：]\s*(.+)$")


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def extract_score(response: str) -> float | None:
    """Return the first 0-100 score mentioned in a response, if any."""
    for match in SCORE_RE.finditer(response):
        value = int(match.group(1) or match.group(2))
        if 0 <= value <= 100:
            return float(value)
    return None


def parse_ai_response(response: str) -> AIAnnotations:
    """Sort response lines into insights and suggestions by their wording."""
    insights: list[str] = []
    suggestions: list[str] = []
    for line in response.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if any(marker in stripped for marker in SUGGESTION_MARKERS):
            suggestions.append(stripped)
        elif any(marker in stripped for marker in INSIGHT_MARKERS):
            insights.append(stripped)
    if not insights and response.strip():
        insights.append(response.strip()[:200])
    score = extract_score(response)
    return AIAnnotations(
        insights=tuple(insights),
        suggestions=tuple(suggestions),
        score=score if score is not None else DEFAULT_AI_SCORE,
    )


def parse_trending_topics(response: str) -> tuple[str, ...]:
    topics = []
    for line in response.splitlines():
        match = TOPIC_RE.match(line)
        if match:
            topics.append(match.group(1).strip())
    return tuple(topics)


class Enhancer(ABC):
    """Attaches optional annotations to rule-based analysis results."""

    @abstractmethod
    def annotate_title(
        self, analysis: TitleAnalysis, target_keywords: Sequence[str]
    ) -> AIAnnotations | None:
        raise NotImplementedError

    @abstractmethod
    def annotate_content(
        self, analysis: ContentAnalysis, content: str, title: str
    ) -> AIAnnotations | None:
        raise NotImplementedError


class NoOpEnhancer(Enhancer):
    """Adds nothing; results stay purely rule-based."""

    def annotate_title(
        self, analysis: TitleAnalysis, target_keywords: Sequence[str]
    ) -> AIAnnotations | None:
        return None

    def annotate_content(
        self, analysis: ContentAnalysis, content: str, title: str
    ) -> AIAnnotations | None:
        return None


class AIEnhancer(Enhancer):
    """Enhancer backed by an OpenAI-compatible chat model."""

    def __init__(self, client: OpenAIChatClient, *, trends_enabled: bool = False) -> None:
        self._client = client
        self._trends_enabled = trends_enabled

    def annotate_title(
        self, analysis: TitleAnalysis, target_keywords: Sequence[str]
    ) -> AIAnnotations | None:
        logger.info("Requesting AI insights for title (%d chars)", analysis.length)
        response = self._client.complete(
            system_prompt=SEO_SYSTEM_PROMPT,
            user_prompt=SEO_USER_PROMPT_TEMPLATE.format(
                title=analysis.title or "未提供",
                keywords=", ".join(target_keywords) or "未提供",
                content="未提供",
            ),
            metadata=ChatMetadata(analysis_type="title", text_length=analysis.length),
        )
        return parse_ai_response(response)

    def annotate_content(
        self, analysis: ContentAnalysis, content: str, title: str
    ) -> AIAnnotations | None:
        logger.info("Requesting AI insights for content (%d chars)", len(content))
        keywords = ", ".join(item.keyword for item in analysis.keywords[:5])
        response = self._client.complete(
            system_prompt=SEO_SYSTEM_PROMPT,
            user_prompt=SEO_USER_PROMPT_TEMPLATE.format(
                title=title or "未提供",
                keywords=keywords or "未提供",
                content=_truncate(content, SEO_CONTENT_LIMIT),
            ),
            metadata=ChatMetadata(analysis_type="content", text_length=len(content)),
        )
        annotations = parse_ai_response(response)
        if not self._trends_enabled:
            return annotations
        trends = self._client.complete(
            system_prompt=TRENDS_SYSTEM_PROMPT,
            user_prompt=TRENDS_USER_PROMPT_TEMPLATE.format(
                content=_truncate(content, TRENDS_CONTENT_LIMIT)
            ),
            metadata=ChatMetadata(analysis_type="trends", text_length=len(content)),
        )
        return replace(annotations, trending_topics=parse_trending_topics(trends))


def enhance_title(
    analysis: TitleAnalysis,
    enhancer: Enhancer,
    target_keywords: Sequence[str] = (),
) -> TitleAnalysis:
    """Attach enhancer annotations; any enhancer failure leaves the result as is."""
    try:
        annotations = enhancer.annotate_title(analysis, target_keywords)
    except Exception as exc:
        logger.warning("Title enhancement failed, keeping rule-based result: %s", exc)
        return analysis
    if annotations is None:
        return analysis
    return replace(analysis, annotations=annotations)


def enhance_content(
    analysis: ContentAnalysis,
    enhancer: Enhancer,
    content: str,
    title: str = "",
) -> ContentAnalysis:
    """Attach enhancer annotations; any enhancer failure leaves the result as is."""
    try:
        annotations = enhancer.annotate_content(analysis, content, title)
    except Exception as exc:
        logger.warning("Content enhancement failed, keeping rule-based result: %s", exc)
        return analysis
    if annotations is None:
        return analysis
    return replace(analysis, annotations=annotations)

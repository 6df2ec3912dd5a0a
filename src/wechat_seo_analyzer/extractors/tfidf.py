from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence

from ..models import KeywordResult, TermStats
from ..tokenization import build_term_stats, tokenize
from .base import KeywordExtractor, build_results

logger = logging.getLogger(__name__)


def calculate_tf(tokens: Sequence[str]) -> Dict[str, float]:
    """Return count / total for each token; empty input yields an empty map."""
    total = len(tokens)
    if total == 0:
        return {}
    counts: Dict[str, int] = {}
    for token in tokens:
        counts[token] = counts.get(token, 0) + 1
    return {token: count / total for token, count in counts.items()}


def calculate_idf(documents: Sequence[Sequence[str]]) -> Dict[str, float]:
    """
    Compute cross-document inverse document frequency, log(N / (df + 1)).

    Not used by TFIDFExtractor.extract_keywords, which ranks one document at a
    time with a length and over-frequency proxy instead.
    """
    total_docs = len(documents)
    doc_sets = [set(doc) for doc in documents]
    vocabulary: Dict[str, None] = {}
    for doc in documents:
        for token in doc:
            vocabulary.setdefault(token, None)

    idf: Dict[str, float] = {}
    for token in vocabulary:
        docs_with_token = sum(1 for doc in doc_sets if token in doc)
        idf[token] = math.log(total_docs / (docs_with_token + 1))
    return idf


class TFIDFExtractor(KeywordExtractor):
    """Rank terms by normalized frequency, boosted for 2-3 character words."""

    def __init__(
        self,
        length_boost: float = 1.2,
        frequency_penalty: float = 0.7,
        frequency_ratio: float = 0.1,
    ) -> None:
        self.length_boost = length_boost
        self.frequency_penalty = frequency_penalty
        self.frequency_ratio = frequency_ratio

    def score_terms(
        self, tokens: Sequence[str], stats: Dict[str, TermStats]
    ) -> Dict[str, float]:
        """Return the adjusted score for every distinct token."""
        total = len(tokens)
        scores: Dict[str, float] = {}
        for token, tf in calculate_tf(tokens).items():
            score = tf
            if len(token) in (2, 3):
                score *= self.length_boost
            if stats[token].count > total * self.frequency_ratio:
                score *= self.frequency_penalty
            scores[token] = score
        return scores

    def extract_keywords(self, text: str, top_k: int = 10) -> List[KeywordResult]:
        tokens = tokenize(text)
        if not tokens:
            return []
        stats = build_term_stats(tokens)
        scores = self.score_terms(tokens, stats)
        # sorted() is stable, so equal scores keep first-encounter order.
        ranked = sorted(scores, key=lambda token: scores[token], reverse=True)
        logger.debug(
            "TF-IDF ranked %d distinct terms from %d tokens", len(ranked), len(tokens)
        )
        return build_results(ranked, stats, len(tokens), top_k)

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List

from ..models import KeywordResult
from .base import KeywordExtractor
from .textrank import TextRankExtractor
from .tfidf import TFIDFExtractor

logger = logging.getLogger(__name__)

METHODS = ("tfidf", "textrank", "combined")


class CombinedKeywordAnalyzer(KeywordExtractor):
    """Blend TF-IDF and TextRank rankings by weighting their densities."""

    def __init__(
        self,
        tfidf: TFIDFExtractor | None = None,
        textrank: TextRankExtractor | None = None,
        tfidf_weight: float = 0.6,
        textrank_weight: float = 0.4,
        method: str = "combined",
    ) -> None:
        if method not in METHODS:
            raise ValueError(f"Unknown keyword method '{method}'.")
        self.tfidf = tfidf or TFIDFExtractor()
        self.textrank = textrank or TextRankExtractor()
        self.tfidf_weight = tfidf_weight
        self.textrank_weight = textrank_weight
        self.method = method

    def analyze(
        self, text: str, method: str = "combined", top_k: int = 15
    ) -> List[KeywordResult]:
        """Extract keywords with the named method."""
        if method == "tfidf":
            return self.tfidf.extract_keywords(text, top_k)
        if method == "textrank":
            return self.textrank.extract_keywords(text, top_k)
        if method == "combined":
            return self.combine_results(text, top_k)
        raise ValueError(f"Unknown keyword method '{method}'.")

    def extract_keywords(self, text: str, top_k: int = 15) -> List[KeywordResult]:
        return self.analyze(text, self.method, top_k)

    def combine_results(self, text: str, top_k: int) -> List[KeywordResult]:
        """
        Merge both rankings by keyword.

        Each entry keeps the count and positions of whichever extractor
        reported it first; only the density is blended.
        """
        if top_k <= 0:
            return []
        tfidf_results = self.tfidf.extract_keywords(text, top_k * 2)
        textrank_results = self.textrank.extract_keywords(text, top_k * 2)

        merged: Dict[str, KeywordResult] = {}
        for item in tfidf_results:
            merged[item.keyword] = replace(
                item, density=item.density * self.tfidf_weight
            )
        for item in textrank_results:
            existing = merged.get(item.keyword)
            weighted = item.density * self.textrank_weight
            if existing is None:
                merged[item.keyword] = replace(item, density=weighted)
            else:
                merged[item.keyword] = replace(
                    existing, density=existing.density + weighted
                )

        ranked = sorted(merged.values(), key=lambda item: item.density, reverse=True)
        logger.debug(
            "Combined %d TF-IDF and %d TextRank keywords into %d",
            len(tfidf_results),
            len(textrank_results),
            len(ranked),
        )
        return ranked[:top_k]

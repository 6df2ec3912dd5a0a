from __future__ import annotations

import re
from typing import Dict, List

from ..models import KeywordResult
from ..tokenization import build_term_stats, cjk_ngrams
from .base import KeywordExtractor, build_results

CJK_RUN_RE = re.compile(r"[\u4e00-\u9fa5]{2,}")


class FrequencyKeywordExtractor(KeywordExtractor):
    """
    Plain n-gram counter over raw CJK runs.

    Needs neither the stop-word filter nor graph ranking and therefore works
    on any input; terms seen fewer than ``min_count`` times are dropped.
    """

    def __init__(self, min_count: int = 2) -> None:
        self.min_count = min_count

    def extract_keywords(self, text: str, top_k: int = 15) -> List[KeywordResult]:
        grams: List[str] = []
        for match in CJK_RUN_RE.finditer(text):
            grams.extend(cjk_ngrams(match.group(0)))
        if not grams:
            return []
        stats = build_term_stats(grams)
        frequent: Dict[str, int] = {
            term: entry.count
            for term, entry in stats.items()
            if entry.count >= self.min_count
        }
        ranked = sorted(frequent, key=lambda term: frequent[term], reverse=True)
        return build_results(ranked, stats, len(grams), top_k)

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from ..models import KeywordResult, TermStats


class KeywordExtractor(ABC):
    """Abstract extractor that ranks the salient terms of a single document."""

    @abstractmethod
    def extract_keywords(self, text: str, top_k: int = 10) -> List[KeywordResult]:
        """Return at most top_k keywords ordered by descending importance."""
        raise NotImplementedError


def build_results(
    ranked_terms: Iterable[str],
    stats: Dict[str, TermStats],
    total_tokens: int,
    top_k: int,
) -> List[KeywordResult]:
    """Convert ranked terms into KeywordResult records with density and positions."""
    if total_tokens <= 0 or top_k <= 0:
        return []
    results: List[KeywordResult] = []
    for term in ranked_terms:
        if len(results) >= top_k:
            break
        entry = stats[term]
        results.append(
            KeywordResult(
                keyword=term,
                density=entry.count / total_tokens * 100,
                count=entry.count,
                positions=tuple(entry.positions),
            )
        )
    return results

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import numpy as np

from ..models import KeywordResult
from ..tokenization import build_term_stats, tokenize
from .base import KeywordExtractor, build_results

logger = logging.getLogger(__name__)

CoOccurrenceGraph = Dict[str, Dict[str, int]]


class TextRankExtractor(KeywordExtractor):
    """
    Graph-based keyword ranking over a token co-occurrence graph.

    Every token is a node; tokens within ``window_size`` positions of each
    other are linked, and the edge weight counts how often that happened in
    the document. Scores are propagated for a fixed number of rounds rather
    than until convergence, so cost is bounded for any input.
    """

    def __init__(
        self, window_size: int = 5, damping: float = 0.85, iterations: int = 50
    ) -> None:
        self.window_size = window_size
        self.damping = damping
        self.iterations = iterations

    def build_graph(self, tokens: Sequence[str]) -> CoOccurrenceGraph:
        """Link each token to every other position within the window."""
        graph: CoOccurrenceGraph = {token: {} for token in tokens}
        length = len(tokens)
        for idx, token in enumerate(tokens):
            start = max(0, idx - self.window_size)
            end = min(length, idx + self.window_size + 1)
            edges = graph[token]
            for other in range(start, end):
                if other == idx:
                    continue
                neighbor = tokens[other]
                edges[neighbor] = edges.get(neighbor, 0) + 1
        return graph

    def calculate_textrank(self, graph: CoOccurrenceGraph) -> Dict[str, float]:
        """Run the damped rank propagation and return the final score per node."""
        nodes = list(graph)
        if not nodes:
            return {}
        index = {node: idx for idx, node in enumerate(nodes)}
        outbound = np.array(
            [sum(graph[node].values()) for node in nodes], dtype=float
        )

        # Outbound totals include self-loops, but a node never feeds itself.
        sources: List[int] = []
        targets: List[int] = []
        weights: List[float] = []
        for node, edges in graph.items():
            row = index[node]
            for neighbor, weight in edges.items():
                if neighbor == node:
                    continue
                sources.append(row)
                targets.append(index[neighbor])
                weights.append(weight / outbound[row])
        source_idx = np.array(sources, dtype=np.intp)
        target_idx = np.array(targets, dtype=np.intp)
        shares = np.array(weights, dtype=float)

        scores = np.ones(len(nodes), dtype=float)
        for _ in range(self.iterations):
            inbound = np.bincount(
                target_idx, weights=shares * scores[source_idx], minlength=len(nodes)
            )
            scores = (1 - self.damping) + self.damping * inbound

        return {node: float(scores[index[node]]) for node in nodes}

    def extract_keywords(self, text: str, top_k: int = 10) -> List[KeywordResult]:
        tokens = tokenize(text)
        if not tokens:
            return []
        graph = self.build_graph(tokens)
        scores = self.calculate_textrank(graph)
        ranked = sorted(scores, key=lambda token: scores[token], reverse=True)
        logger.debug(
            "TextRank ran %d rounds over %d nodes", self.iterations, len(ranked)
        )
        return build_results(ranked, build_term_stats(tokens), len(tokens), top_k)

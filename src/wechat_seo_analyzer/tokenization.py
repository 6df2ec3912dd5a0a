from __future__ import annotations

import re
from typing import Dict, Iterable, List

from .models import TermStats

# Common Chinese function words excluded from keyword candidacy.
STOPWORDS = frozenset(
    [
        "的", "了", "在", "是", "我", "有", "和", "就", "不", "人",
        "都", "一", "一个", "上", "也", "很", "到", "说", "要", "去",
        "你", "会", "着", "没有", "看", "好", "自己", "这",
    ]
)

PUNCTUATION_RE = re.compile(r"[，。！？；：\"'“”‘’（）【】《》、]")
RUN_RE = re.compile(r"[\u4e00-\u9fa5]+|[a-zA-Z]+")
CJK_RE = re.compile(r"[\u4e00-\u9fa5]")

MIN_TOKEN_LENGTH = 2
MAX_TOKEN_LENGTH = 6


def iter_runs(text: str) -> Iterable[str]:
    """Yield maximal CJK or ASCII-letter runs after stripping punctuation."""
    cleaned = PUNCTUATION_RE.sub(" ", text)
    for match in RUN_RE.finditer(cleaned):
        yield match.group(0)


def cjk_ngrams(run: str) -> List[str]:
    """Return the bigrams and trigrams of a CJK run in stream order."""
    grams: List[str] = []
    for idx in range(len(run) - 1):
        grams.append(run[idx : idx + 2])
        if idx < len(run) - 2:
            grams.append(run[idx : idx + 3])
    return grams


def tokenize(text: str) -> List[str]:
    """
    Split text into candidate keyword tokens.

    CJK runs are approximated as overlapping bigrams and trigrams since no
    segmentation dictionary is used; Latin runs become one lowercased token.
    """
    tokens: List[str] = []
    for run in iter_runs(text):
        if CJK_RE.match(run):
            tokens.extend(cjk_ngrams(run))
        else:
            tokens.append(run.lower())
    return [
        token
        for token in tokens
        if MIN_TOKEN_LENGTH <= len(token) <= MAX_TOKEN_LENGTH
        and token not in STOPWORDS
    ]


def build_term_stats(tokens: List[str]) -> Dict[str, TermStats]:
    """Count occurrences and record positions; keys keep first-seen order."""
    stats: Dict[str, TermStats] = {}
    for idx, token in enumerate(tokens):
        entry = stats.get(token)
        if entry is None:
            entry = stats[token] = TermStats()
        entry.count += 1
        entry.positions.append(idx)
    return stats

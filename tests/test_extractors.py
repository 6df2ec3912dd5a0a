import math

import pytest

from wechat_seo_analyzer.config import SeoAnalyzerConfig
from wechat_seo_analyzer.extractors import (
    CombinedKeywordAnalyzer,
    FrequencyKeywordExtractor,
    TextRankExtractor,
    TFIDFExtractor,
    build_extractor_from_config,
    calculate_idf,
    calculate_tf,
    create_extractor,
    extract_keywords,
    extract_title_keywords,
)

ARTICLE = (
    "微信公众号运营需要持续输出优质内容。公众号文章的标题决定了打开率，"
    "公众号文章的内容决定了转发率。做好公众号SEO，可以让文章在微信搜一搜中获得更多曝光。"
)


def test_tfidf_returns_empty_list_for_empty_text():
    assert TFIDFExtractor().extract_keywords("", 10) == []
    assert TextRankExtractor().extract_keywords("，。", 10) == []


def test_tfidf_ranks_by_adjusted_frequency():
    results = TFIDFExtractor().extract_keywords("seo seo seo wechat", 10)

    assert [item.keyword for item in results] == ["seo", "wechat"]
    assert results[0].count == 3
    assert results[0].density == pytest.approx(75.0)
    assert results[0].positions == (0, 1, 2)


def test_tfidf_boosts_short_terms():
    results = TFIDFExtractor().extract_keywords("python go", 10)

    assert [item.keyword for item in results] == ["go", "python"]


def test_tfidf_ties_keep_first_encounter_order():
    results = TFIDFExtractor().extract_keywords("alpha beta gamma", 10)

    assert [item.keyword for item in results] == ["alpha", "beta", "gamma"]


def test_tfidf_densities_never_exceed_full_stream():
    results = TFIDFExtractor().extract_keywords(ARTICLE, 1000)

    assert sum(item.density for item in results) <= 100 + 1e-9


def test_calculate_tf_and_idf():
    assert calculate_tf([]) == {}
    assert calculate_tf(["a", "b", "a", "a"]) == {"a": 0.75, "b": 0.25}

    idf = calculate_idf([["a", "b"], ["a"]])
    assert idf["a"] == pytest.approx(math.log(2 / 3))
    assert idf["b"] == pytest.approx(0.0)


def test_textrank_graph_accumulates_window_cooccurrences():
    graph = TextRankExtractor().build_graph(["aa", "bb", "aa"])

    assert graph == {"aa": {"bb": 2, "aa": 2}, "bb": {"aa": 2}}


def test_textrank_graph_has_node_per_token():
    extractor = TextRankExtractor()
    tokens = ["hub", "aa", "hub", "bb"]
    graph = extractor.build_graph(tokens)

    assert set(graph) == set(tokens)
    assert all(weight > 0 for edges in graph.values() for weight in edges.values())


def test_textrank_single_token_scores_teleport_mass():
    extractor = TextRankExtractor()
    scores = extractor.calculate_textrank(extractor.build_graph(["seo"]))

    assert scores == {"seo": pytest.approx(1 - 0.85)}
    results = extractor.extract_keywords("seo", 5)
    assert len(results) == 1
    assert results[0].keyword == "seo"
    assert results[0].density == pytest.approx(100.0)


def test_textrank_prefers_central_terms():
    extractor = TextRankExtractor(window_size=1)
    results = extractor.extract_keywords("hub aa hub bb hub cc", 4)

    assert results[0].keyword == "hub"
    assert results[0].count == 3
    assert results[0].positions == (0, 2, 4)


def test_textrank_is_deterministic():
    extractor = TextRankExtractor()

    assert extractor.extract_keywords(ARTICLE, 10) == extractor.extract_keywords(
        ARTICLE, 10
    )


def test_textrank_handles_long_articles():
    # Mostly distinct characters, so nearly every n-gram is its own node.
    chars = [chr(0x4E00 + (idx * 7919) % 20000) for idx in range(10_000)]
    article = "。".join(
        "".join(chars[start : start + 20]) for start in range(0, len(chars), 20)
    )

    results = TextRankExtractor().extract_keywords(article, 10)

    assert len(results) == 10
    assert all(item.count > 0 for item in results)
    assert len({item.keyword for item in results}) == 10


def test_textrank_self_loops_only_dilute_outbound_weight():
    extractor = TextRankExtractor(iterations=1)
    graph = {"aa": {"aa": 1, "bb": 1}, "bb": {"aa": 1}}
    scores = extractor.calculate_textrank(graph)

    assert scores["aa"] == pytest.approx(0.15 + 0.85 * 1.0)
    assert scores["bb"] == pytest.approx(0.15 + 0.85 * 0.5)


def test_combined_blends_densities_without_duplicates():
    analyzer = CombinedKeywordAnalyzer()
    results = analyzer.analyze("seo seo seo wechat", "combined", 2)

    assert [item.keyword for item in results] == ["seo", "wechat"]
    # Present in both rankings: 0.6 * 75 + 0.4 * 75.
    assert results[0].density == pytest.approx(75.0)


def test_combined_returns_unique_keywords_within_top_k():
    results = extract_keywords(ARTICLE, top_k=8, method="combined")
    keywords = [item.keyword for item in results]

    assert 0 < len(keywords) <= 8
    assert len(keywords) == len(set(keywords))
    densities = [item.density for item in results]
    assert densities == sorted(densities, reverse=True)


def test_analyze_delegates_by_method():
    analyzer = CombinedKeywordAnalyzer()

    assert analyzer.analyze(ARTICLE, "tfidf", 5) == TFIDFExtractor().extract_keywords(
        ARTICLE, 5
    )
    assert analyzer.analyze(
        ARTICLE, "textrank", 5
    ) == TextRankExtractor().extract_keywords(ARTICLE, 5)
    with pytest.raises(ValueError):
        analyzer.analyze(ARTICLE, "bm25", 5)


def test_non_positive_top_k_returns_nothing():
    for method in ("tfidf", "textrank", "combined"):
        assert extract_keywords(ARTICLE, top_k=0, method=method) == []


def test_frequency_extractor_counts_raw_ngrams():
    results = FrequencyKeywordExtractor().extract_keywords("公众号运营，公众号运营", 15)

    assert [item.keyword for item in results] == [
        "公众",
        "公众号",
        "众号",
        "众号运",
        "号运",
        "号运营",
        "运营",
    ]
    assert results[0].count == 2
    assert results[0].positions == (0, 7)
    assert results[0].density == pytest.approx(2 / 14 * 100)


def test_frequency_extractor_drops_single_occurrences():
    assert FrequencyKeywordExtractor().extract_keywords("公众号运营", 15) == []


def test_build_extractor_from_config_selects_strategy():
    assert isinstance(
        build_extractor_from_config(SeoAnalyzerConfig(keyword_method="frequency")),
        FrequencyKeywordExtractor,
    )
    textrank = build_extractor_from_config(
        SeoAnalyzerConfig(keyword_method="textrank", textrank_window_size=3)
    )
    assert isinstance(textrank, TextRankExtractor)
    assert textrank.window_size == 3
    assert isinstance(
        build_extractor_from_config(SeoAnalyzerConfig()), CombinedKeywordAnalyzer
    )
    with pytest.raises(ValueError):
        build_extractor_from_config(SeoAnalyzerConfig(keyword_method="lda"))


def test_create_extractor_rejects_unknown_names():
    assert isinstance(create_extractor("TFIDF"), TFIDFExtractor)
    with pytest.raises(ValueError):
        create_extractor("word2vec")


def test_extract_title_keywords_returns_top_ten_combined():
    assert extract_title_keywords(ARTICLE) == extract_keywords(ARTICLE, top_k=10)

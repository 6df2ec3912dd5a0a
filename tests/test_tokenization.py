from wechat_seo_analyzer.tokenization import STOPWORDS, build_term_stats, tokenize


def test_tokenize_emits_overlapping_bigrams_and_trigrams():
    tokens = tokenize("微信公众号")

    assert tokens == ["微信", "微信公", "信公", "信公众", "公众", "公众号", "众号"]


def test_tokenize_lowercases_latin_words_and_drops_short_ones():
    tokens = tokenize("Hello, SEO World！a extraordinary")

    assert tokens == ["hello", "seo", "world"]


def test_tokenize_filters_stopwords():
    assert tokenize("自己") == []
    assert tokenize("没有自己") == ["没有自", "有自", "有自己"]


def test_tokenize_handles_empty_and_punctuation_only_input():
    assert tokenize("") == []
    assert tokenize("，。！？《》【】") == []


def test_tokens_respect_length_bounds_and_stopwords():
    text = "如何写出一篇好的公众号文章？我有5个实用技巧，分享给你。SEO is really important！"
    tokens = tokenize(text)

    assert tokens
    assert all(2 <= len(token) <= 6 for token in tokens)
    assert not any(token in STOPWORDS for token in tokens)


def test_build_term_stats_records_counts_and_positions():
    stats = build_term_stats(["seo", "wechat", "seo"])

    assert list(stats) == ["seo", "wechat"]
    assert stats["seo"].count == 2
    assert stats["seo"].positions == [0, 2]
    assert stats["wechat"].positions == [1]

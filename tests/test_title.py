from wechat_seo_analyzer.config import SeoAnalyzerConfig
from wechat_seo_analyzer.title import analyze_title, generate_optimized_titles, keyword_coverage

BALANCED_TITLE = "微信公众号SEO优化技巧分享指南"


def test_empty_title_only_loses_length_and_high_value_points():
    analysis = analyze_title("")

    assert analysis.score == 80
    assert analysis.length == 0
    assert analysis.keyword_density == 0
    assert any("过短" in issue for issue in analysis.issues)
    assert any("高价值" in suggestion for suggestion in analysis.suggestions)
    assert any("情感" in suggestion for suggestion in analysis.suggestions)
    assert any("数字" in suggestion for suggestion in analysis.suggestions)


def test_empty_title_variants_are_scored_and_sorted():
    variants = analyze_title("").optimized_versions

    assert [(v.title, v.score) for v in variants] == [
        ("如何", 90),
        ("5个的方法", 90),
        ("实用的技巧", 88),
    ]


def test_title_with_all_markers_is_clamped_to_100():
    analysis = analyze_title("如何在5分钟内提升实用写作技巧", [])

    assert analysis.length == 15
    assert analysis.score == 100
    assert analysis.issues == ()
    assert analysis.suggestions == ()
    assert analysis.optimized_versions == ()


def test_long_title_is_penalized():
    analysis = analyze_title("测" * 30)

    assert analysis.score == 85
    assert any("过长" in issue for issue in analysis.issues)


def test_keyword_coverage_rules():
    assert analyze_title(BALANCED_TITLE).score == 100
    assert analyze_title(BALANCED_TITLE, ["seo", "增长"]).score == 100

    partial = analyze_title(BALANCED_TITLE, ["seo", "增长", "流量"])
    assert partial.score == 95
    assert partial.issues == ()
    assert "可以增加更多相关关键词" in partial.suggestions

    missing = analyze_title(BALANCED_TITLE, ["抖音"])
    assert missing.score == 80
    assert "标题中未包含目标关键词" in missing.issues


def test_keyword_coverage_counts_each_keyword_once():
    assert keyword_coverage("SEO seo SEO", ["seo", "流量"]) == 50
    assert keyword_coverage("C++入门教程", ["c++"]) == 100
    assert keyword_coverage("anything", []) == 0


def test_suggestions_are_unique():
    analysis = analyze_title("短标题", ["抖音"])

    assert len(analysis.suggestions) == len(set(analysis.suggestions))


def test_variants_only_add_missing_markers():
    variants = generate_optimized_titles("3个实用的写作方法")

    assert [v.title for v in variants] == ["如何3个实用的写作方法"]
    assert variants[0].changes == ('添加疑问词"如何"提升搜索匹配度',)
    assert variants[0].score == analyze_title("如何3个实用的写作方法").score


def test_length_thresholds_follow_config():
    config = SeoAnalyzerConfig(title_min_length=2, title_max_length=4)

    assert analyze_title("如何", config=config).issues == ()
    assert analyze_title("如何写好标题", config=config).issues == (
        "标题过长，可能在搜索结果中被截断",
    )


def test_analyze_title_is_repeatable():
    assert analyze_title(BALANCED_TITLE, ["seo"]) == analyze_title(
        BALANCED_TITLE, ["seo"]
    )

"""Minimal example showing how to score an article directly from Python."""

from __future__ import annotations

from pathlib import Path

from wechat_seo_analyzer.config import load_config
from wechat_seo_analyzer.pipeline import analyze_article


def main() -> None:
    config = load_config(Path(__file__).with_name("example_config.yaml"))
    title = "如何在5分钟内写出实用的公众号标题"
    content = (
        "# 标题的重要性\n"
        "公众号文章的标题决定了打开率。好的标题需要包含关键词，也要让读者产生兴趣。\n"
        "1. 使用数字\n"
        "数字能让标题更具体。\n"
        "2. 提出问题\n"
        "疑问句能激发读者的好奇心。"
    )
    report = analyze_article(title, content, ["公众号", "标题"], config=config)

    print(f"Overall SEO score: {report.seo_score.overall}")
    print(f"Title score: {report.title.score}  Content score: {report.content.score}")
    for item in report.content.keywords:
        print(f"  {item.keyword:<8} density={item.density:.2f}% count={item.count}")
    for suggestion in report.title.suggestions + report.content.suggestions:
        print(f"- {suggestion}")


if __name__ == "__main__":
    main()

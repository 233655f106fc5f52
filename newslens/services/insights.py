"""
Aggregate insight reports over recently collected articles.
"""
from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from textwrap import shorten
from typing import Iterable, List, Optional, Tuple

from openai import AsyncOpenAI

from newslens.core.lexicons import INSIGHT_NEGATIVE, INSIGHT_POSITIVE, INSIGHT_THEMES, INSIGHT_TOPICS
from newslens.errors import NotFoundError
from newslens.models import Article
from newslens.services.summaries import get_openai_client
from newslens.settings import Settings
from newslens.storage.base import Repository
from newslens.utils import now_utc

logger = logging.getLogger(__name__)

DEFAULT_INSIGHT_LIMIT = 50
MAX_BULLET_POINTS = 5
RECENT_WINDOW = timedelta(hours=24)

SYSTEM_PROMPT = (
    "You are a media analyst briefing Indian government communication officers. "
    "Given recent regional news headlines and coverage statistics, reply with JSON "
    'of the form {"headline": str, "bullet_points": [str, ...]} holding one headline '
    "and three to five factual bullet points. Do not invent facts."
)


@dataclass
class InsightReport:
    headline: str
    bullet_points: List[str] = field(default_factory=list)
    top_topics: List[str] = field(default_factory=list)
    sentiment: str = "neutral"
    articles_analyzed: int = 0


def _article_text(article: Article) -> str:
    return f"{article.title} {article.summary or article.content}"


def rank_topics(articles: Iterable[Article]) -> List[str]:
    """Insight topics ordered by how many articles mention them."""
    counts: Counter = Counter()
    for article in articles:
        text = f"{article.title} {article.content} {article.summary or ''}".lower()
        for topic, keywords in INSIGHT_TOPICS.items():
            if any(keyword in text for keyword in keywords):
                counts[topic] += 1
    return [topic for topic, _ in counts.most_common()]


def distribution(values: Iterable[Optional[str]], missing: str) -> List[Tuple[str, int]]:
    """(value, count) pairs, most common first; empty values count as `missing`."""
    return Counter(value or missing for value in values).most_common()


def common_themes(articles: Iterable[Article]) -> List[str]:
    counts: Counter = Counter()
    for article in articles:
        text = (article.summary or article.content).lower()
        counts.update(theme for theme in INSIGHT_THEMES if theme in text)
    return [theme for theme, _ in counts.most_common(5)]


def overall_sentiment(text: str) -> str:
    """
    Coarse tone of a body of coverage.

    Positive or negative only when one side outnumbers the other by more
    than half again; otherwise neutral.
    """
    lowered = text.lower()
    positive = sum(lowered.count(word) for word in INSIGHT_POSITIVE)
    negative = sum(lowered.count(word) for word in INSIGHT_NEGATIVE)
    if positive > negative * 1.5:
        return "positive"
    if negative > positive * 1.5:
        return "negative"
    return "neutral"


def _with_counts(pairs: Iterable[Tuple[str, int]]) -> str:
    return ", ".join(f"{name} ({count})" for name, count in pairs)


def build_insights(articles: List[Article], now: Optional[datetime] = None) -> InsightReport:
    """
    Rule-based insight report.

    Args:
        articles: Articles to summarize (at least one)
        now: Reference time for the last-24-hours count

    Returns:
        InsightReport with headline, up to five bullet points, top five
        topics and the overall sentiment
    """
    now = now or now_utc()
    topics = rank_topics(articles)
    regions = distribution((a.region for a in articles), "Unknown")
    languages = distribution((a.original_language for a in articles), "Unknown")
    total = len(articles)

    top_topic = topics[0] if topics else "Regional Developments"
    headline = (
        f"{top_topic} Dominates News Across "
        f"{' and '.join(name for name, _ in regions[:2])} With {total} Reports"
    )

    bullets = [
        f"Analyzed {total} articles covering {len(regions)} regions, "
        f"with highest coverage in {_with_counts(regions[:3])}"
    ]
    if topics:
        bullets.append(
            f"Primary focus areas: {', '.join(topics[:3])}, reflecting major policy initiatives and public interest"
        )
    bullets.append(
        f"Multi-lingual coverage across {len(languages)} languages: "
        f"{_with_counts(languages[:3])}, ensuring diverse regional representation"
    )
    themes = common_themes(articles)
    if themes:
        bullets.append(
            f"Recurring themes include: {', '.join(themes[:3])}, indicating coordinated policy initiatives"
        )

    recent = sum(1 for a in articles if a.collected_at >= now - RECENT_WINDOW)
    if recent:
        bullets.append(
            f"{recent} articles published in the last 24 hours, "
            "showing active media engagement and real-time coverage"
        )
    else:
        categories = [pair for pair in distribution((a.category for a in articles), "Uncategorized")
                      if pair[0] != "Uncategorized"]
        if categories:
            bullets.append(
                f"Category breakdown: {_with_counts(categories[:3])}, "
                "highlighting priority sectors for government communication"
            )

    return InsightReport(
        headline=headline,
        bullet_points=bullets[:MAX_BULLET_POINTS],
        top_topics=topics[:5],
        sentiment=overall_sentiment(" ".join(_article_text(a) for a in articles)),
        articles_analyzed=total,
    )


async def _rewrite_with_llm(
    client: AsyncOpenAI,
    settings: Settings,
    articles: List[Article],
    report: InsightReport,
) -> InsightReport:
    headlines = "\n".join(f"- {shorten(a.title, width=160, placeholder='...')}" for a in articles[:20])
    user_prompt = (
        f"Articles analysed: {report.articles_analyzed}\n"
        f"Top topics: {', '.join(report.top_topics) or 'none'}\n"
        f"Overall tone: {report.sentiment}\n"
        f"Coverage statistics:\n" + "\n".join(f"- {b}" for b in report.bullet_points) +
        f"\n\nRecent headlines:\n{headlines}"
    )
    response = await client.chat.completions.create(
        model=settings.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ],
        response_format={"type": "json_object"},
        temperature=0.3,
        max_tokens=400,
    )
    data = json.loads(response.choices[0].message.content or "{}")
    headline = str(data.get("headline") or "").strip()
    bullets = [str(b).strip() for b in data.get("bullet_points") or [] if str(b).strip()]
    if not headline or not bullets:
        raise ValueError("Incomplete insight response")

    return replace(report, headline=headline, bullet_points=bullets[:MAX_BULLET_POINTS])


async def generate_insights(
    repository: Repository,
    settings: Settings,
    limit: int = DEFAULT_INSIGHT_LIMIT,
    region: Optional[str] = None,
    language: Optional[str] = None,
    category: Optional[str] = None,
    client: Optional[AsyncOpenAI] = None,
) -> InsightReport:
    """
    Insight report over the newest articles matching the filters.

    The headline and bullet points come from the OpenAI chat API when a key
    is configured (or a client is passed), otherwise and on any API failure
    from the rule-based report. Topics, sentiment and count are always
    rule-based.

    Raises:
        NotFoundError: If no article matches the filters
    """
    articles = repository.list_recent_articles(limit, region=region, language=language, category=category)
    if not articles:
        raise NotFoundError("No articles found with the specified filters")

    logger.info("Generating insights over %d articles", len(articles))
    report = build_insights(articles)

    client = client or get_openai_client(settings)
    if not client:
        return report

    try:
        return await _rewrite_with_llm(client, settings, articles, report)
    except Exception as e:
        logger.warning("Error generating AI insights: %s", e)
        return report

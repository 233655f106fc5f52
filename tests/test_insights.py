"""
Tests for aggregate insight reports.
"""

import asyncio
import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from newslens.errors import NotFoundError
from newslens.models import Article
from newslens.services.insights import build_insights, generate_insights, overall_sentiment


BASE_TIME = datetime(2024, 5, 6, 10, 0, tzinfo=timezone.utc)


def make_articles():
    return [
        Article(
            title="Metro expansion approved",
            content="The metro project expansion will improve commuting and bring growth.",
            url="https://news.example.org/metro",
            region="Karnataka",
            original_language="Kannada",
            category="Transport",
            collected_at=BASE_TIME,
        ),
        Article(
            title="Farmers face crop loss",
            content="A shortage of water and a delay in relief is a concern for farmers.",
            url="https://news.example.org/farmers",
            region="Karnataka",
            original_language="English",
            category="Agriculture",
            collected_at=BASE_TIME + timedelta(minutes=1),
        ),
        Article(
            title="New hospital wing",
            content="The hospital development project will benefit patients.",
            url="https://news.example.org/hospital",
            region="Kerala",
            original_language="Malayalam",
            collected_at=BASE_TIME + timedelta(minutes=2),
        ),
    ]


def llm_client(content):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    ))
    return client


class TestBuildInsights:
    def test_headline_topics_and_bullets(self):
        report = build_insights(make_articles(), now=BASE_TIME + timedelta(hours=1))

        assert report.articles_analyzed == 3
        assert report.top_topics == ["Infrastructure", "Metro & Transport", "Agriculture", "Healthcare"]
        assert report.headline == "Infrastructure Dominates News Across Karnataka and Kerala With 3 Reports"
        assert report.bullet_points[0] == (
            "Analyzed 3 articles covering 2 regions, with highest coverage in Karnataka (2), Kerala (1)"
        )
        assert report.bullet_points[2].startswith(
            "Multi-lingual coverage across 3 languages: Kannada (1), English (1), Malayalam (1)"
        )
        assert report.bullet_points[3].startswith("Recurring themes include: project, expansion, development")
        assert report.bullet_points[4].startswith("3 articles published in the last 24 hours")
        assert report.sentiment == "neutral"

    def test_older_coverage_reports_categories(self):
        report = build_insights(make_articles(), now=BASE_TIME + timedelta(days=3))

        assert report.bullet_points[-1].startswith("Category breakdown: Transport (1), Agriculture (1)")

    def test_missing_region_is_unknown(self):
        article = Article(title="Weather", content="Light rain expected.", collected_at=BASE_TIME)

        report = build_insights([article], now=BASE_TIME)

        assert report.headline == "Regional Developments Dominates News Across Unknown With 1 Reports"
        assert len(report.bullet_points) <= 5


@pytest.mark.parametrize("text, expected", [
    ("Growth and progress bring benefit to all.", "positive"),
    ("Crisis deepens as shortage and delay continue.", "negative"),
    ("Growth stalls amid a crisis.", "neutral"),
    ("", "neutral"),
])
def test_overall_sentiment(text, expected):
    assert overall_sentiment(text) == expected


class TestGenerateInsights:
    def test_filters_and_limit(self, memory_repo, test_settings):
        for article in make_articles():
            memory_repo.insert_article(article)

        kerala = asyncio.run(generate_insights(memory_repo, test_settings, region="Kerala"))
        newest = asyncio.run(generate_insights(memory_repo, test_settings, limit=1))

        assert kerala.articles_analyzed == 1
        assert kerala.top_topics == ["Healthcare", "Infrastructure"]
        assert newest.articles_analyzed == 1
        assert "Kerala (1)" in newest.bullet_points[0]

    def test_no_matching_articles(self, memory_repo, test_settings):
        with pytest.raises(NotFoundError):
            asyncio.run(generate_insights(memory_repo, test_settings, language="Tamil"))

    def test_llm_rewrites_headline_and_bullets(self, memory_repo, test_settings):
        for article in make_articles():
            memory_repo.insert_article(article)
        client = llm_client(json.dumps({
            "headline": "Infrastructure leads regional coverage",
            "bullet_points": ["Metro work expands", "Farm relief delayed", "Hospital wing opens"],
        }))

        report = asyncio.run(generate_insights(memory_repo, test_settings, client=client))

        assert report.headline == "Infrastructure leads regional coverage"
        assert report.bullet_points == ["Metro work expands", "Farm relief delayed", "Hospital wing opens"]
        assert report.top_topics[0] == "Infrastructure"
        assert report.articles_analyzed == 3

    def test_malformed_llm_reply_falls_back(self, memory_repo, test_settings):
        for article in make_articles():
            memory_repo.insert_article(article)

        report = asyncio.run(generate_insights(memory_repo, test_settings, client=llm_client("not json")))

        assert report.headline == "Infrastructure Dominates News Across Karnataka and Kerala With 3 Reports"


def test_insights_endpoint(client, memory_repo):
    for article in make_articles():
        memory_repo.insert_article(article)

    response = client.post("/generate-insights", json={"region": "Karnataka"})

    body = response.json()
    assert response.status_code == 200
    assert body["articles_analyzed"] == 2
    assert body["sentiment"] in ("positive", "negative", "neutral")
    assert body["headline"].endswith("With 2 Reports")


def test_insights_endpoint_without_articles(client):
    assert client.post("/generate-insights", json={}).status_code == 404

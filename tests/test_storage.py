"""
Tests for both repository backends and backend selection.
"""

from datetime import timedelta
from unittest.mock import patch

from newslens.core.bias import RefinedBiasScorer
from newslens.errors import StorageUnavailableError
from newslens.models import (
    AnalysisRecord,
    Article,
    Entity,
    MediaSource,
    ScrapingJob,
    YouTubeVideo,
)
from newslens.settings import Settings
from newslens.storage.base import ChangeEvent
from newslens.storage.factory import create_repository
from newslens.storage.memory import MemoryRepository
from newslens.storage.sql import SqlRepository
from newslens.utils import now_utc


def make_record(article_id, sentiment=0.1):
    return AnalysisRecord(
        article_id=article_id,
        sentiment_score=sentiment,
        sentiment_label="neutral",
        confidence_score=0.6,
        topics=["Politics"],
        keywords=["assembly"],
        entities=[Entity("Karnataka", "LOCATION")],
        bias=RefinedBiasScorer().score("Shocking bombshell!!", "Sources said the minister allegedly lied."),
    )


class TestArticles:
    def test_second_insert_with_same_url_is_a_no_op(self, repo):
        first = repo.insert_article(Article(title="A", content="a", url="https://x.org/1"))
        second = repo.insert_article(Article(title="B", content="b", url="https://x.org/1"))

        assert first is not None
        assert second is None
        assert repo.count_articles() == 1
        assert repo.get_article_by_url("https://x.org/1").title == "A"

    def test_articles_without_url_do_not_conflict(self, repo):
        repo.insert_article(Article(title="A", content="a"))
        repo.insert_article(Article(title="B", content="b"))

        assert repo.count_articles() == 2

    def test_round_trip_and_update(self, repo):
        article = Article(title="A", content="a", url="https://x.org/2", related_departments=["d1"])
        repo.insert_article(article)

        article.status = "analyzed"
        article.translated_content = "translated"
        repo.update_article(article)
        stored = repo.get_article(article.id)

        assert stored.status == "analyzed"
        assert stored.translated_content == "translated"
        assert stored.related_departments == ["d1"]
        assert stored.collected_at.tzinfo is not None

    def test_list_by_status_is_oldest_first_and_limited(self, repo):
        base = now_utc()
        for offset, status in [(2, "pending"), (0, "processing"), (1, "analyzed"), (3, "pending")]:
            repo.insert_article(Article(
                title=f"t{offset}",
                content="c",
                url=f"https://x.org/s{offset}",
                status=status,
                collected_at=base + timedelta(minutes=offset),
            ))

        articles = repo.list_articles_by_status(["pending", "processing"], limit=2)

        assert [a.title for a in articles] == ["t0", "t2"]

    def test_recent_articles_are_newest_first_and_filtered(self, repo):
        base = now_utc()
        for offset, region, category in [(0, "Kerala", "Health"), (1, "Goa", None), (2, "Kerala", None)]:
            repo.insert_article(Article(
                title=f"t{offset}",
                content="c",
                url=f"https://x.org/r{offset}",
                region=region,
                category=category,
                collected_at=base + timedelta(minutes=offset),
            ))

        assert [a.title for a in repo.list_recent_articles(2)] == ["t2", "t1"]
        assert [a.title for a in repo.list_recent_articles(10, region="Kerala")] == ["t2", "t0"]
        assert [a.title for a in repo.list_recent_articles(10, region="Kerala", category="Health")] == ["t0"]
        assert repo.list_recent_articles(10, language="Tamil") == []

    def test_missing_article(self, repo):
        assert repo.get_article("nope") is None
        assert repo.get_article_by_url("https://nope") is None


class TestAnalysis:
    def test_upsert_replaces_instead_of_duplicating(self, repo):
        article = repo.insert_article(Article(title="A", content="a", url="https://x.org/3"))
        repo.upsert_analysis(make_record(article.id, sentiment=0.1))
        repo.upsert_analysis(make_record(article.id, sentiment=-0.4))

        assert repo.count_analyses() == 1
        assert repo.get_analysis(article.id).sentiment_score == -0.4

    def test_bias_structure_round_trips(self, repo):
        article = repo.insert_article(Article(title="A", content="a", url="https://x.org/4"))
        record = make_record(article.id)
        repo.upsert_analysis(record)

        stored = repo.get_analysis(article.id)

        assert stored.bias == record.bias
        assert stored.entities == [Entity("Karnataka", "LOCATION")]
        assert stored.overall_bias_score == record.overall_bias_score


class TestChangeEvents:
    def test_article_and_analysis_writes_are_published(self, repo):
        events = []
        unsubscribe = repo.subscribe(events.append)

        article = repo.insert_article(Article(title="A", content="a", url="https://x.org/5"))
        repo.insert_article(Article(title="dup", content="a", url="https://x.org/5"))
        repo.upsert_analysis(make_record(article.id))
        repo.update_article(article)
        unsubscribe()
        repo.update_article(article)

        assert events == [
            ChangeEvent("articles", "insert", article.id),
            ChangeEvent("analysis", "upsert", article.id),
            ChangeEvent("articles", "update", article.id),
        ]

    def test_failing_subscriber_does_not_break_writes(self, repo):
        def broken(event):
            raise RuntimeError("boom")

        repo.subscribe(broken)

        assert repo.insert_article(Article(title="A", content="a", url="https://x.org/6")) is not None


class TestSourcesJobsVideos:
    def test_feed_sources_are_active_with_feed_ordered_by_language(self, repo):
        repo.add_source(MediaSource(name="Tamil daily", language="Tamil", rss_feed="https://t/rss"))
        repo.add_source(MediaSource(name="Hindi daily", language="Hindi", rss_feed="https://h/rss"))
        repo.add_source(MediaSource(name="Inactive", language="English", rss_feed="https://i/rss", active=False))
        repo.add_source(MediaSource(name="No feed", language="English"))

        assert [s.name for s in repo.list_feed_sources()] == ["Hindi daily", "Tamil daily"]

    def test_job_lifecycle(self, repo):
        job = repo.add_job(ScrapingJob(source_id="s1"))
        job.status = "completed"
        job.articles_found = 3
        job.articles_saved = 2
        job.completed_at = now_utc()
        repo.update_job(job)

        [stored] = repo.list_jobs("s1")
        assert stored.status == "completed"
        assert (stored.articles_found, stored.articles_saved) == (3, 2)

    def test_video_upsert_by_video_id(self, repo):
        repo.upsert_video(YouTubeVideo(video_id="v1", channel_id="c1", title="First", view_count=1))
        repo.upsert_video(YouTubeVideo(video_id="v1", channel_id="c1", title="First", view_count=50))

        [video] = repo.list_videos("c1")
        assert video.view_count == 50


class TestFactory:
    def test_memory_backend(self):
        settings = Settings(STORAGE_BACKEND="memory")

        assert isinstance(create_repository(settings), MemoryRepository)

    def test_sql_backend(self):
        settings = Settings(STORAGE_BACKEND="sql", DATABASE_URL="sqlite://")

        assert isinstance(create_repository(settings), SqlRepository)

    def test_falls_back_to_memory_when_store_is_unavailable(self):
        settings = Settings(STORAGE_BACKEND="sql", DATABASE_URL="sqlite://")

        with patch(
            "newslens.storage.factory.SqlRepository",
            side_effect=StorageUnavailableError("down"),
        ):
            repository = create_repository(settings)

        assert isinstance(repository, MemoryRepository)

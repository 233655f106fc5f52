"""
Ephemeral in-process store with the same shape as the SQL backend.
"""
from __future__ import annotations

import copy
import threading
from typing import Dict, List, Optional, Sequence

from newslens.models import (
    AnalysisRecord,
    Article,
    Department,
    MediaSource,
    NotificationLog,
    NotificationPreference,
    Officer,
    ScrapingJob,
    YouTubeVideo,
)
from newslens.storage.base import Repository


class MemoryRepository(Repository):
    """Dict-backed repository. Records are copied in and out."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()
        self._sources: Dict[str, MediaSource] = {}
        self._articles: Dict[str, Article] = {}
        self._urls: Dict[str, str] = {}
        self._analyses: Dict[str, AnalysisRecord] = {}
        self._departments: Dict[str, Department] = {}
        self._officers: Dict[str, Officer] = {}
        self._preferences: Dict[str, NotificationPreference] = {}
        self._jobs: Dict[str, ScrapingJob] = {}
        self._logs: List[NotificationLog] = []
        self._videos: Dict[str, YouTubeVideo] = {}

    # Media sources

    def add_source(self, source: MediaSource) -> MediaSource:
        self._sources[source.id] = copy.deepcopy(source)
        return source

    def get_source(self, source_id: str) -> Optional[MediaSource]:
        source = self._sources.get(source_id)
        return copy.deepcopy(source) if source else None

    def get_source_by_channel(self, channel_id: str) -> Optional[MediaSource]:
        for source in self._sources.values():
            if source.youtube_channel_id == channel_id:
                return copy.deepcopy(source)
        return None

    def list_feed_sources(self) -> List[MediaSource]:
        sources = [s for s in self._sources.values() if s.active and s.rss_feed]
        sources.sort(key=lambda s: s.language)
        return copy.deepcopy(sources)

    def update_source(self, source: MediaSource) -> MediaSource:
        self._sources[source.id] = copy.deepcopy(source)
        return source

    # Articles

    def insert_article(self, article: Article) -> Optional[Article]:
        with self._lock:
            if article.url and article.url in self._urls:
                return None
            self._articles[article.id] = copy.deepcopy(article)
            if article.url:
                self._urls[article.url] = article.id
        self._publish("articles", "insert", article.id)
        return article

    def get_article(self, article_id: str) -> Optional[Article]:
        article = self._articles.get(article_id)
        return copy.deepcopy(article) if article else None

    def get_article_by_url(self, url: str) -> Optional[Article]:
        article_id = self._urls.get(url)
        return self.get_article(article_id) if article_id else None

    def update_article(self, article: Article) -> Article:
        self._articles[article.id] = copy.deepcopy(article)
        self._publish("articles", "update", article.id)
        return article

    def list_articles_by_status(self, statuses: Sequence[str], limit: Optional[int] = None) -> List[Article]:
        articles = [a for a in self._articles.values() if a.status in statuses]
        articles.sort(key=lambda a: a.collected_at)
        if limit is not None:
            articles = articles[:limit]
        return copy.deepcopy(articles)

    def list_recent_articles(
        self,
        limit: int,
        region: Optional[str] = None,
        language: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Article]:
        articles = [
            a for a in self._articles.values()
            if (not region or a.region == region)
            and (not language or a.original_language == language)
            and (not category or a.category == category)
        ]
        articles.sort(key=lambda a: a.collected_at, reverse=True)
        return copy.deepcopy(articles[:limit])

    def count_articles(self) -> int:
        return len(self._articles)

    # Analysis

    def upsert_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        self._analyses[record.article_id] = copy.deepcopy(record)
        self._publish("analysis", "upsert", record.article_id)
        return record

    def get_analysis(self, article_id: str) -> Optional[AnalysisRecord]:
        record = self._analyses.get(article_id)
        return copy.deepcopy(record) if record else None

    def count_analyses(self) -> int:
        return len(self._analyses)

    # Departments, officers, preferences

    def add_department(self, department: Department) -> Department:
        self._departments[department.id] = copy.deepcopy(department)
        return department

    def get_department(self, department_id: str) -> Optional[Department]:
        department = self._departments.get(department_id)
        return copy.deepcopy(department) if department else None

    def list_departments(self) -> List[Department]:
        return copy.deepcopy(list(self._departments.values()))

    def add_officer(self, officer: Officer) -> Officer:
        self._officers[officer.id] = copy.deepcopy(officer)
        return officer

    def list_officers(self, department_id: str, active_only: bool = True) -> List[Officer]:
        officers = [
            o for o in self._officers.values()
            if o.department_id == department_id and (o.is_active or not active_only)
        ]
        return copy.deepcopy(officers)

    def set_preference(self, preference: NotificationPreference) -> NotificationPreference:
        self._preferences[preference.officer_id] = copy.deepcopy(preference)
        return preference

    def get_preference(self, officer_id: str) -> Optional[NotificationPreference]:
        preference = self._preferences.get(officer_id)
        return copy.deepcopy(preference) if preference else None

    # Jobs and logs

    def add_job(self, job: ScrapingJob) -> ScrapingJob:
        self._jobs[job.id] = copy.deepcopy(job)
        return job

    def update_job(self, job: ScrapingJob) -> ScrapingJob:
        self._jobs[job.id] = copy.deepcopy(job)
        return job

    def list_jobs(self, source_id: Optional[str] = None) -> List[ScrapingJob]:
        jobs = [j for j in self._jobs.values() if source_id is None or j.source_id == source_id]
        jobs.sort(key=lambda j: j.started_at)
        return copy.deepcopy(jobs)

    def add_notification_log(self, entry: NotificationLog) -> NotificationLog:
        self._logs.append(copy.deepcopy(entry))
        return entry

    def list_notification_logs(self, article_id: Optional[str] = None) -> List[NotificationLog]:
        return copy.deepcopy([e for e in self._logs if article_id is None or e.article_id == article_id])

    # YouTube

    def upsert_video(self, video: YouTubeVideo) -> YouTubeVideo:
        self._videos[video.video_id] = copy.deepcopy(video)
        return video

    def list_videos(self, channel_id: Optional[str] = None) -> List[YouTubeVideo]:
        return copy.deepcopy([
            v for v in self._videos.values() if channel_id is None or v.channel_id == channel_id
        ])

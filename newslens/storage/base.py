"""
Persistence contract shared by the SQL and in-memory backends.

Writes that touch articles or analysis records publish a `ChangeEvent` to
every subscriber once the write has been committed.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

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

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str  # "articles" | "analysis"
    operation: str  # "insert" | "update" | "upsert"
    key: str


Subscriber = Callable[[ChangeEvent], None]


class Repository(ABC):
    """Narrow select/insert/update/upsert contract used by the pipeline."""

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    # Change events -------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, table: str, operation: str, key: str) -> None:
        event = ChangeEvent(table=table, operation=operation, key=key)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Change subscriber failed for %s", event)

    # Media sources -------------------------------------------------------

    @abstractmethod
    def add_source(self, source: MediaSource) -> MediaSource: ...

    @abstractmethod
    def get_source(self, source_id: str) -> Optional[MediaSource]: ...

    @abstractmethod
    def get_source_by_channel(self, channel_id: str) -> Optional[MediaSource]: ...

    @abstractmethod
    def list_feed_sources(self) -> List[MediaSource]:
        """Active sources with an RSS feed, ordered by language."""

    @abstractmethod
    def update_source(self, source: MediaSource) -> MediaSource: ...

    # Articles ------------------------------------------------------------

    @abstractmethod
    def insert_article(self, article: Article) -> Optional[Article]:
        """Insert a new article; returns None if its URL is already stored."""

    @abstractmethod
    def get_article(self, article_id: str) -> Optional[Article]: ...

    @abstractmethod
    def get_article_by_url(self, url: str) -> Optional[Article]: ...

    @abstractmethod
    def update_article(self, article: Article) -> Article: ...

    @abstractmethod
    def list_articles_by_status(self, statuses: Sequence[str], limit: Optional[int] = None) -> List[Article]:
        """Articles in any of `statuses`, oldest collected first."""

    @abstractmethod
    def list_recent_articles(
        self,
        limit: int,
        region: Optional[str] = None,
        language: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Article]:
        """Newest collected articles, optionally filtered by region, original language and category."""

    @abstractmethod
    def count_articles(self) -> int: ...

    # Analysis ------------------------------------------------------------

    @abstractmethod
    def upsert_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        """Insert or replace the analysis for `record.article_id`."""

    @abstractmethod
    def get_analysis(self, article_id: str) -> Optional[AnalysisRecord]: ...

    @abstractmethod
    def count_analyses(self) -> int: ...

    # Departments, officers, preferences ----------------------------------

    @abstractmethod
    def add_department(self, department: Department) -> Department: ...

    @abstractmethod
    def get_department(self, department_id: str) -> Optional[Department]: ...

    @abstractmethod
    def list_departments(self) -> List[Department]: ...

    @abstractmethod
    def add_officer(self, officer: Officer) -> Officer: ...

    @abstractmethod
    def list_officers(self, department_id: str, active_only: bool = True) -> List[Officer]: ...

    @abstractmethod
    def set_preference(self, preference: NotificationPreference) -> NotificationPreference: ...

    @abstractmethod
    def get_preference(self, officer_id: str) -> Optional[NotificationPreference]: ...

    # Jobs and logs -------------------------------------------------------

    @abstractmethod
    def add_job(self, job: ScrapingJob) -> ScrapingJob: ...

    @abstractmethod
    def update_job(self, job: ScrapingJob) -> ScrapingJob: ...

    @abstractmethod
    def list_jobs(self, source_id: Optional[str] = None) -> List[ScrapingJob]: ...

    @abstractmethod
    def add_notification_log(self, entry: NotificationLog) -> NotificationLog: ...

    @abstractmethod
    def list_notification_logs(self, article_id: Optional[str] = None) -> List[NotificationLog]: ...

    # YouTube -------------------------------------------------------------

    @abstractmethod
    def upsert_video(self, video: YouTubeVideo) -> YouTubeVideo:
        """Insert or replace a video keyed by `video_id`."""

    @abstractmethod
    def list_videos(self, channel_id: Optional[str] = None) -> List[YouTubeVideo]: ...

"""
SQLAlchemy-backed primary store.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, create_engine, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from newslens.errors import StorageUnavailableError
from newslens.models import (
    AnalysisRecord,
    Article,
    BiasIndicators,
    Department,
    Entity,
    MediaSource,
    NotificationLog,
    NotificationPreference,
    Officer,
    ScrapingJob,
    YouTubeVideo,
)
from newslens.storage.base import Repository

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class MediaSourceRow(Base):
    __tablename__ = "media_sources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    type: Mapped[str] = mapped_column(String(16))  # newspaper|tv|radio|social|online|magazine|youtube
    language: Mapped[str] = mapped_column(String(32), index=True)
    region: Mapped[str] = mapped_column(String(128), default="")
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rss_feed: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    youtube_channel_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    credibility_score: Mapped[float] = mapped_column(Float, default=0.75)
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    video_count: Mapped[int] = mapped_column(Integer, default=0)


class ArticleRow(Base):
    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    source_id: Mapped[Optional[str]] = mapped_column(ForeignKey("media_sources.id"), nullable=True)
    title: Mapped[str] = mapped_column(Text)
    content: Mapped[str] = mapped_column(Text)
    translated_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    original_language: Mapped[str] = mapped_column(String(32), default="English")
    category: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    primary_department_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    related_departments: Mapped[list] = mapped_column(JSON, default=list)
    # dedup key
    url: Mapped[Optional[str]] = mapped_column(Text, unique=True, nullable=True)
    collected_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    region: Mapped[str] = mapped_column(String(128), default="")
    status: Mapped[str] = mapped_column(String(16), index=True)  # pending|processing|analyzed|validated|archived


class AnalysisRow(Base):
    __tablename__ = "analysis"

    article_id: Mapped[str] = mapped_column(ForeignKey("articles.id"), primary_key=True)
    sentiment_score: Mapped[float] = mapped_column(Float)
    sentiment_label: Mapped[str] = mapped_column(String(16), index=True)
    confidence_score: Mapped[float] = mapped_column(Float)
    topics: Mapped[list] = mapped_column(JSON, default=list)
    keywords: Mapped[list] = mapped_column(JSON, default=list)
    entities: Mapped[list] = mapped_column(JSON, default=list)
    language_detected: Mapped[str] = mapped_column(String(32))
    overall_bias_score: Mapped[float] = mapped_column(Float, default=0.0, index=True)
    bias_classification: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    bias_indicators: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    processed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class DepartmentRow(Base):
    __tablename__ = "departments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    short_name: Mapped[str] = mapped_column(String(32))
    keywords: Mapped[list] = mapped_column(JSON, default=list)
    contact_email: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    notifications_enabled: Mapped[bool] = mapped_column(Boolean, default=True)


class OfficerRow(Base):
    __tablename__ = "officers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(256))
    department_id: Mapped[str] = mapped_column(ForeignKey("departments.id"), index=True)
    email: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class PreferenceRow(Base):
    __tablename__ = "notification_preferences"

    officer_id: Mapped[str] = mapped_column(ForeignKey("officers.id"), primary_key=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    channels: Mapped[list] = mapped_column(JSON, default=list)
    sentiment_threshold: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bias_threshold: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class ScrapingJobRow(Base):
    __tablename__ = "scraping_jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    source_id: Mapped[str] = mapped_column(String(36), index=True)
    job_type: Mapped[str] = mapped_column(String(16))
    status: Mapped[str] = mapped_column(String(16))  # running|completed|failed
    articles_found: Mapped[int] = mapped_column(Integer, default=0)
    articles_saved: Mapped[int] = mapped_column(Integer, default=0)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class NotificationLogRow(Base):
    __tablename__ = "notification_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    officer_id: Mapped[str] = mapped_column(String(36), index=True)
    article_id: Mapped[str] = mapped_column(String(36), index=True)
    channel: Mapped[str] = mapped_column(String(16))
    status: Mapped[str] = mapped_column(String(16))  # sent|pending|failed
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class YouTubeVideoRow(Base):
    __tablename__ = "youtube_videos"

    video_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    channel_id: Mapped[str] = mapped_column(String(64), index=True)
    title: Mapped[str] = mapped_column(Text)
    channel_name: Mapped[str] = mapped_column(String(256), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    thumbnail_url: Mapped[str] = mapped_column(Text, default="")
    view_count: Mapped[int] = mapped_column(Integer, default=0)
    like_count: Mapped[int] = mapped_column(Integer, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, default=0)
    duration: Mapped[str] = mapped_column(String(32), default="")
    status: Mapped[str] = mapped_column(String(16), default="pending")


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _columns(row: Base) -> dict:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


def _source_from_row(row: MediaSourceRow) -> MediaSource:
    return MediaSource(**_columns(row))


def _article_from_row(row: ArticleRow) -> Article:
    data = _columns(row)
    data["collected_at"] = _aware(data["collected_at"])
    data["published_at"] = _aware(data["published_at"])
    data["related_departments"] = list(data["related_departments"] or [])
    return Article(**data)


def _analysis_to_row(record: AnalysisRecord) -> AnalysisRow:
    return AnalysisRow(
        article_id=record.article_id,
        sentiment_score=record.sentiment_score,
        sentiment_label=record.sentiment_label,
        confidence_score=record.confidence_score,
        topics=list(record.topics),
        keywords=list(record.keywords),
        entities=[{"text": e.text, "type": e.type} for e in record.entities],
        language_detected=record.language_detected,
        overall_bias_score=record.overall_bias_score,
        bias_classification=record.bias.classification if record.bias else None,
        bias_indicators=record.bias.to_dict() if record.bias else None,
        processed_at=record.processed_at,
    )


def _analysis_from_row(row: AnalysisRow) -> AnalysisRecord:
    return AnalysisRecord(
        article_id=row.article_id,
        sentiment_score=row.sentiment_score,
        sentiment_label=row.sentiment_label,
        confidence_score=row.confidence_score,
        topics=list(row.topics or []),
        keywords=list(row.keywords or []),
        entities=[Entity(**e) for e in (row.entities or [])],
        language_detected=row.language_detected,
        bias=BiasIndicators.from_dict(row.bias_indicators) if row.bias_indicators else None,
        processed_at=_aware(row.processed_at),
    )


def _job_from_row(row: ScrapingJobRow) -> ScrapingJob:
    data = _columns(row)
    data["started_at"] = _aware(data["started_at"])
    data["completed_at"] = _aware(data["completed_at"])
    return ScrapingJob(**data)


def _log_from_row(row: NotificationLogRow) -> NotificationLog:
    data = _columns(row)
    data["sent_at"] = _aware(data["sent_at"])
    return NotificationLog(**data)


def _video_from_row(row: YouTubeVideoRow) -> YouTubeVideo:
    data = _columns(row)
    data["published_at"] = _aware(data["published_at"])
    return YouTubeVideo(**data)


def build_engine(database_url: str):
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


class SqlRepository(Repository):
    """Relational store. Tables are created on construction."""

    def __init__(self, database_url: str):
        super().__init__()
        try:
            self.engine = build_engine(database_url)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Cannot open {database_url}: {e}") from e
        self._sessions = sessionmaker(self.engine, expire_on_commit=False)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._sessions() as session:
            with session.begin():
                yield session

    # Media sources

    def add_source(self, source: MediaSource) -> MediaSource:
        with self._session() as session:
            session.add(MediaSourceRow(**vars(source)))
        return source

    def get_source(self, source_id: str) -> Optional[MediaSource]:
        with self._session() as session:
            row = session.get(MediaSourceRow, source_id)
            return _source_from_row(row) if row else None

    def get_source_by_channel(self, channel_id: str) -> Optional[MediaSource]:
        with self._session() as session:
            row = session.scalars(
                select(MediaSourceRow).where(MediaSourceRow.youtube_channel_id == channel_id)
            ).first()
            return _source_from_row(row) if row else None

    def list_feed_sources(self) -> List[MediaSource]:
        stmt = (
            select(MediaSourceRow)
            .where(MediaSourceRow.active.is_(True), MediaSourceRow.rss_feed.is_not(None))
            .order_by(MediaSourceRow.language)
        )
        with self._session() as session:
            return [_source_from_row(row) for row in session.scalars(stmt)]

    def update_source(self, source: MediaSource) -> MediaSource:
        with self._session() as session:
            session.merge(MediaSourceRow(**vars(source)))
        return source

    # Articles

    def insert_article(self, article: Article) -> Optional[Article]:
        try:
            with self._session() as session:
                session.add(ArticleRow(**vars(article)))
        except IntegrityError as e:
            logger.debug("Article already stored for URL %s: %s", article.url, e.orig)
            return None
        self._publish("articles", "insert", article.id)
        return article

    def get_article(self, article_id: str) -> Optional[Article]:
        with self._session() as session:
            row = session.get(ArticleRow, article_id)
            return _article_from_row(row) if row else None

    def get_article_by_url(self, url: str) -> Optional[Article]:
        with self._session() as session:
            row = session.scalars(select(ArticleRow).where(ArticleRow.url == url)).first()
            return _article_from_row(row) if row else None

    def update_article(self, article: Article) -> Article:
        with self._session() as session:
            session.merge(ArticleRow(**vars(article)))
        self._publish("articles", "update", article.id)
        return article

    def list_articles_by_status(self, statuses: Sequence[str], limit: Optional[int] = None) -> List[Article]:
        stmt = (
            select(ArticleRow)
            .where(ArticleRow.status.in_(list(statuses)))
            .order_by(ArticleRow.collected_at)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._session() as session:
            return [_article_from_row(row) for row in session.scalars(stmt)]

    def list_recent_articles(
        self,
        limit: int,
        region: Optional[str] = None,
        language: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Article]:
        stmt = select(ArticleRow)
        if region:
            stmt = stmt.where(ArticleRow.region == region)
        if language:
            stmt = stmt.where(ArticleRow.original_language == language)
        if category:
            stmt = stmt.where(ArticleRow.category == category)
        stmt = stmt.order_by(ArticleRow.collected_at.desc()).limit(limit)
        with self._session() as session:
            return [_article_from_row(row) for row in session.scalars(stmt)]

    def count_articles(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(ArticleRow))

    # Analysis

    def upsert_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        with self._session() as session:
            session.merge(_analysis_to_row(record))
        self._publish("analysis", "upsert", record.article_id)
        return record

    def get_analysis(self, article_id: str) -> Optional[AnalysisRecord]:
        with self._session() as session:
            row = session.get(AnalysisRow, article_id)
            return _analysis_from_row(row) if row else None

    def count_analyses(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(AnalysisRow))

    # Departments, officers, preferences

    def add_department(self, department: Department) -> Department:
        with self._session() as session:
            session.add(DepartmentRow(**vars(department)))
        return department

    def get_department(self, department_id: str) -> Optional[Department]:
        with self._session() as session:
            row = session.get(DepartmentRow, department_id)
            return Department(**_columns(row)) if row else None

    def list_departments(self) -> List[Department]:
        with self._session() as session:
            rows = session.scalars(select(DepartmentRow).order_by(DepartmentRow.name))
            return [Department(**_columns(row)) for row in rows]

    def add_officer(self, officer: Officer) -> Officer:
        with self._session() as session:
            session.add(OfficerRow(**vars(officer)))
        return officer

    def list_officers(self, department_id: str, active_only: bool = True) -> List[Officer]:
        stmt = select(OfficerRow).where(OfficerRow.department_id == department_id)
        if active_only:
            stmt = stmt.where(OfficerRow.is_active.is_(True))
        with self._session() as session:
            return [Officer(**_columns(row)) for row in session.scalars(stmt)]

    def set_preference(self, preference: NotificationPreference) -> NotificationPreference:
        with self._session() as session:
            session.merge(PreferenceRow(**vars(preference)))
        return preference

    def get_preference(self, officer_id: str) -> Optional[NotificationPreference]:
        with self._session() as session:
            row = session.get(PreferenceRow, officer_id)
            return NotificationPreference(**_columns(row)) if row else None

    # Jobs and logs

    def add_job(self, job: ScrapingJob) -> ScrapingJob:
        with self._session() as session:
            session.add(ScrapingJobRow(**vars(job)))
        return job

    def update_job(self, job: ScrapingJob) -> ScrapingJob:
        with self._session() as session:
            session.merge(ScrapingJobRow(**vars(job)))
        return job

    def list_jobs(self, source_id: Optional[str] = None) -> List[ScrapingJob]:
        stmt = select(ScrapingJobRow).order_by(ScrapingJobRow.started_at)
        if source_id is not None:
            stmt = stmt.where(ScrapingJobRow.source_id == source_id)
        with self._session() as session:
            return [_job_from_row(row) for row in session.scalars(stmt)]

    def add_notification_log(self, entry: NotificationLog) -> NotificationLog:
        with self._session() as session:
            session.add(NotificationLogRow(**vars(entry)))
        return entry

    def list_notification_logs(self, article_id: Optional[str] = None) -> List[NotificationLog]:
        stmt = select(NotificationLogRow)
        if article_id is not None:
            stmt = stmt.where(NotificationLogRow.article_id == article_id)
        with self._session() as session:
            return [_log_from_row(row) for row in session.scalars(stmt)]

    # YouTube

    def upsert_video(self, video: YouTubeVideo) -> YouTubeVideo:
        with self._session() as session:
            session.merge(YouTubeVideoRow(**vars(video)))
        return video

    def list_videos(self, channel_id: Optional[str] = None) -> List[YouTubeVideo]:
        stmt = select(YouTubeVideoRow)
        if channel_id is not None:
            stmt = stmt.where(YouTubeVideoRow.channel_id == channel_id)
        with self._session() as session:
            return [_video_from_row(row) for row in session.scalars(stmt)]

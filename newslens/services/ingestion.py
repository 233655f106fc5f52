"""
Feed ingestion: fetch sources concurrently, store new articles and analyze
them on the way in with the baseline bias strategy.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from newslens.config import (
    FETCH_TIMEOUT_SECONDS,
    MAX_CONCURRENT_FETCHES,
    MEDIUM_BIAS_FLOOR,
    SCHEDULED_SWEEP_BATCH,
    TRANSLATION_FALLBACK_PREFIX,
)
from newslens.core.bias import BaselineBiasScorer
from newslens.errors import FeedError, NotFoundError
from newslens.models import Article, MediaSource, ScrapingJob, YouTubeVideo
from newslens.services.analysis import build_analysis
from newslens.services.translation import needs_translation, translate
from newslens.sources.rss import FeedItem, RssFetcher
from newslens.sources.youtube import YouTubeFetcher
from newslens.storage.base import Repository
from newslens.utils import now_utc

logger = logging.getLogger(__name__)


@dataclass
class SourceResult:
    source_id: str
    source_name: str
    status: str  # completed | failed
    articles_found: int = 0
    articles_saved: int = 0
    error: Optional[str] = None


@dataclass
class SweepResult:
    processed: int = 0
    translated: int = 0
    failed: int = 0


@dataclass
class ScheduledResult:
    sources: List[SourceResult] = field(default_factory=list)
    sweep: SweepResult = field(default_factory=SweepResult)


class IngestionPipeline:
    """Scrapes configured RSS sources into the repository."""

    def __init__(
        self,
        repository: Repository,
        fetcher: Optional[RssFetcher] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        max_concurrency: int = MAX_CONCURRENT_FETCHES,
    ):
        self.repository = repository
        self.http_client = http_client
        self.fetcher = fetcher or RssFetcher(client=http_client, timeout=timeout)
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self.scorer = BaselineBiasScorer(MEDIUM_BIAS_FLOOR)

    def _select_sources(self, source_id: Optional[str]) -> List[MediaSource]:
        if source_id:
            source = self.repository.get_source(source_id)
            if source is None:
                raise NotFoundError(f"Source {source_id} not found")
            return [source]
        return self.repository.list_feed_sources()

    async def scrape(self, source_id: Optional[str] = None, job_type: str = "manual") -> List[SourceResult]:
        """
        Scrape one source, or every active source with a feed.

        Sources are fetched concurrently (bounded) with a per-source timeout.
        A failing source is recorded as a failed job and does not affect the
        others.

        Raises:
            NotFoundError: If `source_id` is given but does not exist
        """
        sources = self._select_sources(source_id)
        if not sources:
            logger.info("No active feed sources to scrape")
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *(self._scrape_source(source, job_type, semaphore) for source in sources)
        )
        logger.info(
            "Scrape finished: %d sources, %d new articles",
            len(results), sum(result.articles_saved for result in results),
        )
        return list(results)

    async def _scrape_source(self, source: MediaSource, job_type: str, semaphore: asyncio.Semaphore) -> SourceResult:
        try:
            return await self._run_source(source, job_type, semaphore)
        except Exception as e:
            # Job bookkeeping failed; the source counts as failed, the batch goes on
            logger.error("Error recording scrape of %s: %s", source.name, e)
            return SourceResult(source.id, source.name, "failed", error=f"Job record failed: {e}")

    async def _run_source(self, source: MediaSource, job_type: str, semaphore: asyncio.Semaphore) -> SourceResult:
        job = self.repository.add_job(ScrapingJob(source_id=source.id, job_type=job_type))

        try:
            async with semaphore:
                items = await asyncio.wait_for(self.fetcher.fetch(source), timeout=self.timeout)
        except asyncio.TimeoutError:
            return self._fail(job, source, f"Timed out after {self.timeout:g}s")
        except FeedError as e:
            return self._fail(job, source, str(e))
        except Exception as e:
            return self._fail(job, source, f"Unexpected error: {e}")

        saved = sum(1 for item in items if self.ingest_item(source, item))

        job.status = "completed"
        job.articles_found = len(items)
        job.articles_saved = saved
        job.completed_at = now_utc()
        self.repository.update_job(job)
        logger.info("Source %s: %d found, %d saved", source.name, len(items), saved)
        return SourceResult(source.id, source.name, "completed", len(items), saved)

    def _fail(self, job: ScrapingJob, source: MediaSource, message: str) -> SourceResult:
        logger.error("Error scraping %s: %s", source.name, message)
        job.status = "failed"
        job.error_message = message
        job.completed_at = now_utc()
        self.repository.update_job(job)
        return SourceResult(source.id, source.name, "failed", error=message)

    def ingest_item(self, source: MediaSource, item: FeedItem) -> bool:
        """
        Store one feed item and analyze it.

        Returns:
            True if a new article was stored, False for duplicates and failures
        """
        try:
            if self.repository.get_article_by_url(item.url) is not None:
                return False

            article = Article(
                title=item.title,
                content=item.content,
                url=item.url,
                source_id=source.id,
                original_language=source.language,
                region=source.region,
                published_at=item.published_at,
                status="processing",
            )
            # Concurrent writer may have stored the same URL since the check
            if self.repository.insert_article(article) is None:
                return False

            record = build_analysis(article.id, article.title, article.content, self.scorer)
            self.repository.upsert_analysis(record)
            article.status = "analyzed"
            self.repository.update_article(article)
            return True
        except Exception as e:
            logger.error("Error ingesting %s from %s: %s", item.url, source.name, e)
            return False

    async def sweep_processing(self, batch_size: int = SCHEDULED_SWEEP_BATCH) -> SweepResult:
        """
        Translate and analyze articles left in `processing`.

        Non-English articles get `translated_content` first. Analysis runs on
        the original content with the baseline strategy.
        """
        result = SweepResult()
        for article in self.repository.list_articles_by_status(["processing"], limit=batch_size):
            try:
                if needs_translation(article.original_language):
                    translated = await translate(
                        article.content, article.original_language, client=self.http_client
                    )
                    article.translated_content = translated
                    if not translated.startswith(TRANSLATION_FALLBACK_PREFIX):
                        result.translated += 1
                record = build_analysis(article.id, article.title, article.content, self.scorer)
                self.repository.upsert_analysis(record)
                article.status = "analyzed"
                self.repository.update_article(article)
                result.processed += 1
            except Exception as e:
                logger.error("Error processing article %s: %s", article.id, e)
                result.failed += 1
        logger.info("Sweep: %d processed, %d translated, %d failed", result.processed, result.translated, result.failed)
        return result

    async def run_scheduled(self, batch_size: int = SCHEDULED_SWEEP_BATCH) -> ScheduledResult:
        """Scheduled scrape of all sources followed by the processing sweep."""
        logger.info("Starting scheduled scraping job")
        sources = await self.scrape(job_type="scheduled")
        sweep = await self.sweep_processing(batch_size)
        return ScheduledResult(sources=sources, sweep=sweep)


async def scrape_youtube(repository: Repository, fetcher: YouTubeFetcher, channel_id: str) -> List[YouTubeVideo]:
    """
    Store the latest videos of a channel and update its source's video count.

    Raises:
        FeedError: If the YouTube API fails
    """
    videos = await fetcher.fetch(channel_id)
    for video in videos:
        try:
            repository.upsert_video(video)
        except Exception as e:
            logger.error("Error storing video %s: %s", video.video_id, e)

    source = repository.get_source_by_channel(channel_id)
    if source is not None:
        source.video_count = len(videos)
        repository.update_source(source)
    logger.info("Scraped %d videos for channel %s", len(videos), channel_id)
    return videos

"""
Analysis entry points: manual entry, analyze-pending, detect-bias and the
bias reanalysis backfill.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from newslens.config import (
    ANALYZE_PENDING_DEFAULT_BATCH,
    ANALYZE_PENDING_MAX_BATCH,
    MEDIUM_BIAS_FLOOR,
    REANALYSIS_MEDIUM_BIAS_FLOOR,
)
from newslens.core.bias import BiasScorer, RefinedBiasScorer
from newslens.core.sentiment import LEXICON_POLICY, REQUEST_POLICY, SentimentPolicy, analyze
from newslens.errors import NotFoundError
from newslens.models import AnalysisRecord, Article, BiasIndicators
from newslens.storage.base import Repository

logger = logging.getLogger(__name__)


def build_analysis(
    article_id: str,
    title,
    content,
    scorer: BiasScorer,
    policy: SentimentPolicy = LEXICON_POLICY,
) -> AnalysisRecord:
    """Run the extractor and a bias strategy over one article."""
    extraction = analyze(content, title, policy)
    return AnalysisRecord(
        article_id=article_id,
        sentiment_score=extraction.score,
        sentiment_label=extraction.label,
        confidence_score=extraction.confidence,
        topics=extraction.topics,
        keywords=extraction.keywords,
        entities=extraction.entities,
        language_detected=extraction.language,
        bias=scorer.score(title, content),
    )


@dataclass
class BatchResult:
    processed: int = 0
    failed: int = 0
    article_ids: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class ReanalysisResult:
    total: int = 0
    processed: int = 0
    failed: int = 0
    low: int = 0
    medium: int = 0
    high: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class DetectBiasResult:
    bias: BiasIndicators
    sentiment_score: float
    sentiment_label: str
    article_id: Optional[str] = None


class AnalysisService:
    """Interactive and batch analysis over stored articles."""

    def __init__(self, repository: Repository):
        self.repository = repository
        self.refined = RefinedBiasScorer(MEDIUM_BIAS_FLOOR)
        self.reanalysis = RefinedBiasScorer(REANALYSIS_MEDIUM_BIAS_FLOOR)

    def create_manual_article(
        self,
        title: str,
        content: str,
        url: Optional[str] = None,
        source_id: Optional[str] = None,
        original_language: str = "English",
        region: str = "",
    ) -> Article:
        """
        Store a manually entered article as `pending`, without analysis.

        Raises:
            ValueError: If an article with the same URL already exists
        """
        article = Article(
            title=title,
            content=content,
            url=url or None,
            source_id=source_id,
            original_language=original_language,
            region=region,
            status="pending",
        )
        if self.repository.insert_article(article) is None:
            raise ValueError(f"Article already exists for URL {url}")
        logger.info("Manual article %s stored as pending", article.id)
        return article

    def _get_article(self, article_id: str) -> Article:
        article = self.repository.get_article(article_id)
        if article is None:
            raise NotFoundError(f"Article {article_id} not found")
        return article

    def _store(self, article: Article, record: AnalysisRecord) -> None:
        self.repository.upsert_analysis(record)
        article.status = "analyzed"
        self.repository.update_article(article)

    def analyze_pending(self, batch_size: Optional[int] = None) -> BatchResult:
        """
        Analyze up to `batch_size` pending/processing articles (max 20).

        Each article gets the extractor plus the refined bias strategy. One
        article's failure does not stop the batch.
        """
        size = ANALYZE_PENDING_DEFAULT_BATCH if batch_size is None else batch_size
        size = max(1, min(size, ANALYZE_PENDING_MAX_BATCH))

        result = BatchResult()
        for article in self.repository.list_articles_by_status(["pending", "processing"], limit=size):
            try:
                record = build_analysis(article.id, article.title, article.content, self.refined)
                self._store(article, record)
                result.processed += 1
                result.article_ids.append(article.id)
            except Exception as e:
                logger.error("Failed to analyze article %s: %s", article.id, e)
                result.failed += 1
                result.errors.append(f"{article.id}: {e}")

        logger.info("Analyze-pending: %d processed, %d failed", result.processed, result.failed)
        return result

    def detect_bias(self, title, content, article_id: Optional[str] = None) -> DetectBiasResult:
        """
        Score one text with the refined strategy.

        When `article_id` is given, the analysis is upserted for that article
        and the article is marked `analyzed`.

        Raises:
            NotFoundError: If `article_id` does not exist
        """
        article = self._get_article(article_id) if article_id else None
        record = build_analysis(article_id or "", title, content, self.refined, REQUEST_POLICY)

        if article is not None:
            self._store(article, record)
            logger.info(
                "Bias for article %s: %.2f (%s)",
                article.id, record.overall_bias_score, record.bias.classification,
            )

        return DetectBiasResult(
            bias=record.bias,
            sentiment_score=record.sentiment_score,
            sentiment_label=record.sentiment_label,
            article_id=article_id,
        )

    def reanalyze_all_bias(self) -> ReanalysisResult:
        """
        Re-score every analyzed article with the refined strategy.

        Uses the reanalysis medium floor (45). Sentiment fields of existing
        analyses are kept; only the bias structure is replaced.
        """
        articles = self.repository.list_articles_by_status(["analyzed"])
        result = ReanalysisResult(total=len(articles))

        for article in articles:
            try:
                record = self.repository.get_analysis(article.id)
                if record is None:
                    record = build_analysis(article.id, article.title, article.content, self.reanalysis)
                else:
                    record.bias = self.reanalysis.score(article.title, article.content)
                self.repository.upsert_analysis(record)
            except Exception as e:
                logger.error("Failed to reanalyze article %s: %s", article.id, e)
                result.failed += 1
                result.errors.append(f"{article.id}: {e}")
                continue

            result.processed += 1
            classification = record.bias.classification
            if classification == "High Bias":
                result.high += 1
            elif classification == "Medium Bias":
                result.medium += 1
            else:
                result.low += 1

        logger.info(
            "Reanalysis done: %d/%d processed (low=%d, medium=%d, high=%d, failed=%d)",
            result.processed, result.total, result.low, result.medium, result.high, result.failed,
        )
        return result

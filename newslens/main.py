"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from newslens.config import CORS_ALLOW_ORIGINS, LOG_FORMAT, LOG_LEVEL
from newslens.core.categorizer import DepartmentMatch
from newslens.errors import NotFoundError
from newslens.schemas import (
    AnalyzePendingRequest,
    AnalyzePendingResponse,
    ArticleCreate,
    ArticleOut,
    CategorizeRequest,
    CategorizeResponse,
    DepartmentMatchOut,
    DetectBiasRequest,
    DetectBiasResponse,
    InsightsRequest,
    InsightsResponse,
    NotificationRequest,
    NotificationResponse,
    ReanalyzeResponse,
    ScheduledScrapeRequest,
    ScheduledScrapeResponse,
    ScrapeRequest,
    ScrapeResponse,
    SummaryRequest,
    SummaryResponse,
    TranslateRequest,
    TranslateResponse,
    YouTubeScrapeRequest,
    YouTubeScrapeResponse,
)
from newslens.services.analysis import AnalysisService
from newslens.services.categorization import categorize_article
from newslens.services.ingestion import IngestionPipeline, scrape_youtube
from newslens.services.insights import generate_insights
from newslens.services.notifications import send_notification
from newslens.services.summaries import generate_summary
from newslens.services.translation import translate
from newslens.settings import Settings, settings as default_settings
from newslens.sources.youtube import YouTubeFetcher
from newslens.storage.base import Repository
from newslens.storage.factory import create_repository
from newslens.utils import now_utc

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger("uvicorn")


def get_settings() -> Settings:
    return default_settings


def get_repository(request: Request) -> Repository:
    """Repository attached to the app, created on first use."""
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        repository = create_repository(get_settings())
        request.app.state.repository = repository
    return repository


def get_pipeline(repository: Repository = Depends(get_repository)) -> IngestionPipeline:
    return IngestionPipeline(repository)


def _match_out(match: DepartmentMatch) -> DepartmentMatchOut:
    return DepartmentMatchOut(
        department_id=match.department.id,
        name=match.department.name,
        short_name=match.department.short_name,
        score=match.score,
        matched_keywords=match.matched_keywords,
    )


def _require_article(repository: Repository, article_id: str):
    article = repository.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
    return article


# Initialize FastAPI app
app = FastAPI(
    title="NewsLens Media Analysis API",
    version="0.1.0",
    description="Multilingual news ingestion, sentiment and bias analysis for government media monitoring"
)


@app.on_event("startup")
async def open_repository():
    """Open the configured store before serving requests."""
    if getattr(app.state, "repository", None) is None:
        app.state.repository = create_repository(get_settings())
        logger.info("Storage backend: %s", type(app.state.repository).__name__)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "newslens-api"
    }


@app.post("/scrape", response_model=ScrapeResponse)
async def trigger_scrape(body: ScrapeRequest, pipeline: IngestionPipeline = Depends(get_pipeline)):
    """Scrape one source or every active feed source."""
    try:
        results = await pipeline.scrape(body.source_id, job_type=body.job_type)
        return ScrapeResponse(
            total_sources=len(results),
            total_saved=sum(result.articles_saved for result in results),
            results=[asdict(result) for result in results],
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error in scrape: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/scheduled-scrape", response_model=ScheduledScrapeResponse)
async def scheduled_scrape(body: ScheduledScrapeRequest, pipeline: IngestionPipeline = Depends(get_pipeline)):
    """Scheduled scrape followed by the processing sweep."""
    try:
        result = await pipeline.run_scheduled(body.batch_size)
        return ScheduledScrapeResponse(
            results=[asdict(source) for source in result.sources],
            processed_items=result.sweep.processed,
            translated_items=result.sweep.translated,
            failed_items=result.sweep.failed,
        )
    except Exception as e:
        logger.error(f"Error in scheduled scrape: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/analyze-pending", response_model=AnalyzePendingResponse)
async def analyze_pending(body: AnalyzePendingRequest, repository: Repository = Depends(get_repository)):
    """Analyze a batch of pending/processing articles."""
    try:
        result = AnalysisService(repository).analyze_pending(body.batch_size)
        return AnalyzePendingResponse(
            processed=result.processed, failed=result.failed, article_ids=result.article_ids
        )
    except Exception as e:
        logger.error(f"Error in analyze-pending: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/detect-bias", response_model=DetectBiasResponse)
async def detect_bias(body: DetectBiasRequest, repository: Repository = Depends(get_repository)):
    """Refined six-axis bias scoring for one text."""
    if not body.title.strip() and not body.content.strip():
        raise HTTPException(status_code=400, detail="Title or content is required")
    try:
        result = AnalysisService(repository).detect_bias(body.title, body.content, body.article_id)
        return DetectBiasResponse(
            article_id=result.article_id,
            bias_indicators=result.bias.to_dict(),
            sentiment_score=result.sentiment_score,
            sentiment_label=result.sentiment_label,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error in detect-bias: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/categorize-department", response_model=CategorizeResponse)
async def categorize_department(body: CategorizeRequest, repository: Repository = Depends(get_repository)):
    """Assign primary and related departments."""
    try:
        result = categorize_article(repository, body.title, body.content, body.article_id)
        return CategorizeResponse(
            primary_department=_match_out(result.matches[0]) if result.matches else None,
            related_departments=[_match_out(match) for match in result.matches[1:3]],
            all_matches=[_match_out(match) for match in result.matches],
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error in categorize-department: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/reanalyze-bias", response_model=ReanalyzeResponse)
async def reanalyze_bias(repository: Repository = Depends(get_repository)):
    """Re-score bias for every analyzed article."""
    try:
        result = AnalysisService(repository).reanalyze_all_bias()
        return ReanalyzeResponse(**asdict(result))
    except Exception as e:
        logger.error(f"Error in reanalyze-bias: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/send-notification", response_model=NotificationResponse)
async def notify(
    body: NotificationRequest,
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Evaluate officer thresholds and log notifications."""
    try:
        outcome = send_notification(repository, body.article_id, body.type, app_url=settings.APP_URL)
        return NotificationResponse(
            success=outcome.success,
            message=outcome.message,
            notifications_sent=outcome.notifications_sent,
            results=[asdict(result) for result in outcome.results],
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error in send-notification: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/translate", response_model=TranslateResponse)
async def translate_content(body: TranslateRequest, repository: Repository = Depends(get_repository)):
    """Translate content, saving it on the article when an id is given."""
    try:
        article = _require_article(repository, body.article_id) if body.article_id else None
        translated = await translate(body.content, body.source_language, body.target_language)
        if article is not None:
            article.translated_content = translated
            repository.update_article(article)
        return TranslateResponse(
            translated_content=translated,
            source_language=body.source_language,
            target_language=body.target_language,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in translate: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/generate-summary", response_model=SummaryResponse)
async def summarize(
    body: SummaryRequest,
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Generate a one-line summary, saving it on the article when an id is given."""
    try:
        article = _require_article(repository, body.article_id) if body.article_id else None
        summary = await generate_summary(body.title, body.content, settings, language=body.language)
        if article is not None:
            article.summary = summary
            repository.update_article(article)
        return SummaryResponse(summary=summary)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in generate-summary: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/generate-insights", response_model=InsightsResponse)
async def insights(
    body: InsightsRequest,
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Aggregate insight report over the newest matching articles."""
    try:
        report = await generate_insights(
            repository,
            settings,
            limit=body.limit,
            region=body.region,
            language=body.language,
            category=body.category,
        )
        return InsightsResponse(**asdict(report))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error in generate-insights: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/scrape-youtube", response_model=YouTubeScrapeResponse)
async def scrape_youtube_channel(
    body: YouTubeScrapeRequest,
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Store the latest videos of a YouTube channel."""
    if not settings.YOUTUBE_API_KEY:
        raise HTTPException(status_code=500, detail="YouTube API key not configured")
    try:
        videos = await scrape_youtube(repository, YouTubeFetcher(settings.YOUTUBE_API_KEY), body.channel_id)
        message = f"Scraped {len(videos)} videos" if videos else "No videos found"
        return YouTubeScrapeResponse(message=message, videos=[asdict(video) for video in videos])
    except Exception as e:
        logger.error(f"Error in scrape-youtube: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/articles", response_model=ArticleOut, status_code=201)
async def create_article(body: ArticleCreate, repository: Repository = Depends(get_repository)):
    """Manual entry; stored as pending until analyzed."""
    try:
        article = AnalysisService(repository).create_manual_article(**body.model_dump())
        return ArticleOut(**asdict(article))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating article: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("newslens.main:app", host="0.0.0.0", port=default_settings.PORT, reload=True)

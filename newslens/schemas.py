# newslens/schemas.py
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Literal, Optional, Dict


class ScrapeRequest(BaseModel):
    source_id: Optional[str] = None
    job_type: str = "manual"


class SourceResultOut(BaseModel):
    source_id: str
    source_name: str
    status: Literal["completed", "failed"]
    articles_found: int = 0
    articles_saved: int = 0
    error: Optional[str] = None


class ScrapeResponse(BaseModel):
    success: bool = True
    total_sources: int
    total_saved: int
    results: list[SourceResultOut]


class ScheduledScrapeRequest(BaseModel):
    batch_size: int = Field(default=10, ge=1, le=50)


class ScheduledScrapeResponse(BaseModel):
    success: bool = True
    results: list[SourceResultOut]
    processed_items: int
    translated_items: int
    failed_items: int


class AnalyzePendingRequest(BaseModel):
    batch_size: int = Field(default=20, ge=1, le=20)


class AnalyzePendingResponse(BaseModel):
    success: bool = True
    processed: int
    failed: int
    article_ids: list[str] = []


class DetectBiasRequest(BaseModel):
    title: str = ""
    content: str = ""
    article_id: Optional[str] = None


class AxisDetailOut(BaseModel):
    score: float
    explanation: str
    evidence: list[str] = []
    indicators: Dict[str, float] = {}


class BiasIndicatorsOut(BaseModel):
    political: float
    regional: float
    sentiment: float
    source_reliability: float
    representation: float
    language: float
    overall_score: float
    classification: Literal["Low Bias", "Medium Bias", "High Bias"]
    strategy: str
    details: Dict[str, AxisDetailOut] = {}


class DetectBiasResponse(BaseModel):
    success: bool = True
    article_id: Optional[str] = None
    bias_indicators: BiasIndicatorsOut
    sentiment_score: float
    sentiment_label: Literal["positive", "negative", "neutral", "mixed"]


class CategorizeRequest(BaseModel):
    article_id: Optional[str] = None
    title: str = ""
    content: str = ""


class DepartmentMatchOut(BaseModel):
    department_id: str
    name: str
    short_name: str
    score: int
    matched_keywords: list[str]


class CategorizeResponse(BaseModel):
    success: bool = True
    primary_department: Optional[DepartmentMatchOut] = None
    related_departments: list[DepartmentMatchOut] = []
    all_matches: list[DepartmentMatchOut] = []


class ReanalyzeResponse(BaseModel):
    success: bool = True
    total: int
    processed: int
    failed: int
    low: int
    medium: int
    high: int
    errors: list[str] = []


class NotificationRequest(BaseModel):
    article_id: str
    type: Literal["negative_story", "high_bias", "manual"] = "manual"


class ChannelResultOut(BaseModel):
    officer: str
    channel: str
    status: str
    error: Optional[str] = None


class NotificationResponse(BaseModel):
    success: bool
    message: str = ""
    notifications_sent: int = 0
    results: list[ChannelResultOut] = []


class TranslateRequest(BaseModel):
    article_id: Optional[str] = None
    content: str = Field(..., min_length=1)
    source_language: str = Field(..., min_length=1)
    target_language: str = "English"


class TranslateResponse(BaseModel):
    success: bool = True
    translated_content: str
    source_language: str
    target_language: str


class SummaryRequest(BaseModel):
    article_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    content: str = ""
    language: str = "English"


class SummaryResponse(BaseModel):
    success: bool = True
    summary: str


class InsightsRequest(BaseModel):
    limit: int = Field(default=50, ge=1, le=200)
    region: Optional[str] = None
    language: Optional[str] = None
    category: Optional[str] = None


class InsightsResponse(BaseModel):
    success: bool = True
    headline: str
    bullet_points: list[str]
    top_topics: list[str] = []
    sentiment: Literal["positive", "negative", "neutral"]
    articles_analyzed: int


class YouTubeScrapeRequest(BaseModel):
    channel_id: str = Field(..., min_length=1)


class YouTubeVideoOut(BaseModel):
    video_id: str
    channel_id: str
    channel_name: str = ""
    title: str
    description: str = ""
    published_at: Optional[datetime] = None
    thumbnail_url: str = ""
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: str = ""
    status: str = "pending"


class YouTubeScrapeResponse(BaseModel):
    success: bool = True
    message: str
    videos: list[YouTubeVideoOut] = []


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = ""
    url: Optional[str] = None
    source_id: Optional[str] = None
    original_language: str = "English"
    region: str = ""


class ArticleOut(BaseModel):
    id: str
    title: str
    content: str
    url: Optional[str] = None
    source_id: Optional[str] = None
    original_language: str
    region: str = ""
    status: str
    collected_at: datetime

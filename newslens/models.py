"""
File: newslens/models.py
Internal records shared by the pipeline, the scorers and the storage backends.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from newslens.utils import new_id, now_utc


JsonDict = Dict[str, Any]

ArticleStatus = Literal["pending", "processing", "analyzed", "validated", "archived"]
SentimentLabel = Literal["positive", "negative", "neutral", "mixed"]
BiasClassification = Literal["Low Bias", "Medium Bias", "High Bias"]
MediaType = Literal["newspaper", "tv", "radio", "social", "online", "magazine", "youtube"]
JobStatus = Literal["running", "completed", "failed"]

AXIS_NAMES = (
    "political",
    "regional",
    "sentiment",
    "source_reliability",
    "representation",
    "language",
)


@dataclass
class Article:
    """A collected news item (feed entry or manual entry).

    `url` is the dedup key: at most one article per URL is ever stored.
    """

    title: str
    content: str
    url: Optional[str] = None
    id: str = field(default_factory=new_id)
    source_id: Optional[str] = None
    translated_content: Optional[str] = None
    summary: Optional[str] = None
    original_language: str = "English"
    category: Optional[str] = None
    primary_department_id: Optional[str] = None
    related_departments: List[str] = field(default_factory=list)
    collected_at: datetime = field(default_factory=now_utc)
    published_at: Optional[datetime] = None
    region: str = ""
    status: ArticleStatus = "pending"


@dataclass
class Entity:
    text: str
    type: str  # LOCATION | ORGANIZATION | PERSON


@dataclass
class AxisDetail:
    """Per-axis breakdown: raw 0-100 score plus the evidence behind it."""

    score: float
    explanation: str
    evidence: List[str] = field(default_factory=list)
    indicators: Dict[str, float] = field(default_factory=dict)


@dataclass
class BiasIndicators:
    """Six-axis bias result.

    Axis fields hold normalized scores (0..1); `overall_score` is the mean of
    the six raw 0-100 axis scores.
    """

    political: float
    regional: float
    sentiment: float
    source_reliability: float
    representation: float
    language: float
    overall_score: float
    classification: BiasClassification
    strategy: str
    details: Dict[str, AxisDetail] = field(default_factory=dict)

    def axis_scores(self) -> Dict[str, float]:
        """Raw 0-100 axis scores keyed by axis name."""
        return {name: round(getattr(self, name) * 100, 2) for name in AXIS_NAMES}

    def to_dict(self) -> JsonDict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: JsonDict) -> "BiasIndicators":
        details = {
            name: AxisDetail(**detail) for name, detail in (data.get("details") or {}).items()
        }
        return cls(**{**data, "details": details})


@dataclass
class AnalysisRecord:
    """One analysis per article, replaced on re-analysis."""

    article_id: str
    sentiment_score: float
    sentiment_label: SentimentLabel
    confidence_score: float
    topics: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    language_detected: str = "English"
    bias: Optional[BiasIndicators] = None
    processed_at: datetime = field(default_factory=now_utc)

    @property
    def overall_bias_score(self) -> float:
        return self.bias.overall_score if self.bias else 0.0


@dataclass
class MediaSource:
    name: str
    type: MediaType = "online"
    language: str = "English"
    region: str = ""
    id: str = field(default_factory=new_id)
    url: Optional[str] = None
    rss_feed: Optional[str] = None
    youtube_channel_id: Optional[str] = None
    credibility_score: float = 0.75
    active: bool = True
    video_count: int = 0


@dataclass
class Department:
    name: str
    short_name: str
    keywords: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    notifications_enabled: bool = True


@dataclass
class Officer:
    full_name: str
    department_id: str
    id: str = field(default_factory=new_id)
    email: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool = True


@dataclass
class NotificationPreference:
    officer_id: str
    enabled: bool = True
    channels: List[str] = field(default_factory=lambda: ["email"])
    sentiment_threshold: Optional[float] = None
    bias_threshold: Optional[float] = None


@dataclass
class ScrapingJob:
    """Run record for one per-source scrape; observability only."""

    source_id: str
    job_type: str = "manual"
    status: JobStatus = "running"
    id: str = field(default_factory=new_id)
    articles_found: int = 0
    articles_saved: int = 0
    started_at: datetime = field(default_factory=now_utc)
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None


@dataclass
class NotificationLog:
    officer_id: str
    article_id: str
    channel: str
    status: str  # sent | pending | failed
    id: str = field(default_factory=new_id)
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None


@dataclass
class YouTubeVideo:
    video_id: str
    channel_id: str
    title: str
    channel_name: str = ""
    description: str = ""
    published_at: Optional[datetime] = None
    thumbnail_url: str = ""
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: str = ""
    status: ArticleStatus = "pending"


__all__ = [
    "AXIS_NAMES",
    "AnalysisRecord",
    "Article",
    "AxisDetail",
    "BiasIndicators",
    "Department",
    "Entity",
    "JsonDict",
    "MediaSource",
    "NotificationLog",
    "NotificationPreference",
    "Officer",
    "ScrapingJob",
    "YouTubeVideo",
]

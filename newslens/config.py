"""
Application configuration with environment variable support.
"""
from __future__ import annotations

import os
from typing import Dict


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable with fallback."""
    try:
        return float(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: list[str], separator: str = ",") -> list[str]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]


# Feed Ingestion Settings
MAX_FEED_ITEMS: int = _get_env_int("MAX_FEED_ITEMS", 10)
MAX_CONTENT_CHARS: int = _get_env_int("MAX_CONTENT_CHARS", 1500)
FETCH_TIMEOUT_SECONDS: float = _get_env_float("FETCH_TIMEOUT_SECONDS", 15.0)
MAX_CONCURRENT_FETCHES: int = _get_env_int("MAX_CONCURRENT_FETCHES", 5)
# Feed bodies shorter than this are filled from the article page
SHORT_CONTENT_CHARS: int = _get_env_int("SHORT_CONTENT_CHARS", 100)
PAGE_TIMEOUT_SECONDS: float = _get_env_float("PAGE_TIMEOUT_SECONDS", 10.0)

# Batch Settings
ANALYZE_PENDING_MAX_BATCH: int = 20
ANALYZE_PENDING_DEFAULT_BATCH: int = _get_env_int("ANALYZE_PENDING_BATCH", 20)
SCHEDULED_SWEEP_BATCH: int = _get_env_int("SCHEDULED_SWEEP_BATCH", 10)

# Bias Classification Boundaries (0-100 overall score)
# Two medium floors are in use: the interactive/ingestion paths start Medium
# at 35, the reanalyze-all path at 45. Pending a product decision.
HIGH_BIAS_FLOOR: float = 65.0
MEDIUM_BIAS_FLOOR: float = 35.0
REANALYSIS_MEDIUM_BIAS_FLOOR: float = 45.0

# Notification Defaults
DEFAULT_SENTIMENT_THRESHOLD: float = _get_env_float("DEFAULT_SENTIMENT_THRESHOLD", -0.3)
DEFAULT_BIAS_THRESHOLD: float = _get_env_float("DEFAULT_BIAS_THRESHOLD", 60.0)

# Translation
TRANSLATE_URL = "https://translate.googleapis.com/translate_a/single"
TRANSLATION_FALLBACK_PREFIX = "[Translation unavailable]"
LANGUAGE_CODES: Dict[str, str] = {
    "Hindi": "hi",
    "Tamil": "ta",
    "Telugu": "te",
    "Bengali": "bn",
    "Marathi": "mr",
    "Gujarati": "gu",
    "Kannada": "kn",
    "Malayalam": "ml",
    "Punjabi": "pa",
    "Odia": "or",
    "English": "en",
}

# YouTube Data API
YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3"
YOUTUBE_MAX_RESULTS: int = _get_env_int("YOUTUBE_MAX_RESULTS", 10)

# HTTP Client Configuration
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FEED_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/rss+xml, application/xml, text/xml, */*",
    "Accept-Charset": "UTF-8",
    "Accept-Language": "en,hi,kn,ta,te,ml,mr,bn,gu,pa,or,as",
}
PAGE_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en,hi,kn,ta,te,ml,mr,bn,gu,pa,or,as",
}

# CORS Configuration
CORS_ALLOW_ORIGINS: list[str] = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# Logging Configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

"""
Shared utility functions for the news analysis pipeline.
"""
from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

import tldextract


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Random identifier for newly created records."""
    return str(uuid.uuid4())


def normalize_text(text: str | None) -> str:
    """
    Normalize whitespace in text content.

    Args:
        text: Input text string (can be None)

    Returns:
        Normalized text with single spaces and trimmed edges
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def strip_html(text: str | None) -> str:
    """
    Remove markup tags and entities from feed content.

    Args:
        text: Raw HTML fragment (can be None)

    Returns:
        Plain text with entities replaced by spaces
    """
    if not text:
        return ""
    text = re.sub(r"<script[^>]*>[\s\S]*?</script>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<style[^>]*>[\s\S]*?</style>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]*>", " ", text)
    text = re.sub(r"&[^;\s]+;", " ", text)
    return normalize_text(text)


def extract_domain_from_url(url: str | None) -> str:
    """
    Extract the registered domain from a URL.

    Args:
        url: Full URL string

    Returns:
        Normalized domain name in lowercase, empty string if none
    """
    if not url:
        return ""
    extracted = tldextract.extract(url)
    domain = f"{extracted.domain}.{extracted.suffix}" if extracted.suffix else extracted.domain
    return (domain or "").lower()


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value to [low, high]."""
    return max(low, min(high, value))


def truncate(text: str, limit: int, suffix: str = "") -> str:
    """Cut text to at most `limit` characters, appending `suffix` when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + suffix

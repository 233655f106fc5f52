"""
Common utilities for feed and channel fetchers.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dateparser

from newslens.utils import normalize_text


def parse_utc_datetime(date_string: Optional[str]) -> datetime:
    """
    Parse a date string and convert to UTC datetime.

    Args:
        date_string: Date string in various formats, or None

    Returns:
        UTC datetime object, or current UTC time if input is None/empty/unparseable
    """
    if not date_string:
        return datetime.now(timezone.utc)

    try:
        parsed_date = dateparser.parse(date_string)
    except (ValueError, OverflowError):
        return datetime.now(timezone.utc)

    if parsed_date.tzinfo:
        return parsed_date.astimezone(timezone.utc)
    return parsed_date.replace(tzinfo=timezone.utc)


def clean_text(text: Optional[str]) -> str:
    """
    Clean and normalize text content.

    Args:
        text: Raw text string or None

    Returns:
        Cleaned text string, empty string if input is None
    """
    return normalize_text(text)

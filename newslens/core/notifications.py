"""
Alert decision and message formatting.
"""
from __future__ import annotations

from typing import Optional

from newslens.config import DEFAULT_BIAS_THRESHOLD, DEFAULT_SENTIMENT_THRESHOLD
from newslens.models import AnalysisRecord, Article, Department, NotificationPreference


def should_notify(analysis: Optional[AnalysisRecord], preference: Optional[NotificationPreference]) -> bool:
    """
    Decide whether an officer should be alerted about an analyzed article.

    Fires when sentiment is strictly below the officer's sentiment threshold
    or overall bias is strictly above the bias threshold. Missing analysis,
    missing preference and disabled preference never fire.
    """
    if analysis is None or preference is None or not preference.enabled:
        return False

    sentiment_threshold = (
        DEFAULT_SENTIMENT_THRESHOLD
        if preference.sentiment_threshold is None
        else preference.sentiment_threshold
    )
    bias_threshold = (
        DEFAULT_BIAS_THRESHOLD if preference.bias_threshold is None else preference.bias_threshold
    )

    return (
        analysis.sentiment_score < sentiment_threshold
        or analysis.overall_bias_score > bias_threshold
    )


def build_alert_message(
    article: Article,
    analysis: Optional[AnalysisRecord],
    notification_type: str = "manual",
    department: Optional[Department] = None,
    source_name: Optional[str] = None,
    app_url: str = "",
) -> str:
    """Plain-text alert body sent on every channel."""
    sentiment = analysis.sentiment_score if analysis else 0.0
    bias = analysis.overall_bias_score if analysis else 0.0
    language = analysis.language_detected if analysis else article.original_language
    lines = [
        f"ALERT: {notification_type.upper()}",
        "",
        f"Dept: {department.short_name if department else 'Unknown'}",
        f"Source: {source_name or 'Unknown'}",
        f"Language: {language}",
        "",
        f"Headline: {article.title}",
        "",
        f"Sentiment: {sentiment * 100:.0f}%",
        f"Bias: {bias:.0f}/100",
    ]
    if app_url:
        lines += ["", f"View: {app_url.rstrip('/')}/articles/{article.id}"]
    return "\n".join(lines)

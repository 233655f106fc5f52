"""
Officer alerting: decides who to notify and records one log entry per channel.

Delivery itself is external; email is logged as `sent`, SMS and push as
`pending` until those integrations exist.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from newslens.core.notifications import build_alert_message, should_notify
from newslens.errors import NotFoundError
from newslens.models import NotificationLog, Officer
from newslens.storage.base import Repository
from newslens.utils import extract_domain_from_url, now_utc

logger = logging.getLogger(__name__)

SMS_PENDING = "SMS integration pending - requires Twilio setup"
PUSH_PENDING = "Push notification integration pending - requires Firebase setup"


@dataclass
class ChannelResult:
    officer: str
    channel: str
    status: str
    error: Optional[str] = None


@dataclass
class NotificationOutcome:
    success: bool
    message: str = ""
    results: List[ChannelResult] = field(default_factory=list)
    alert_text: str = ""

    @property
    def notifications_sent(self) -> int:
        return len(self.results)


def _log_entry(officer: Officer, article_id: str, channel: str) -> Optional[NotificationLog]:
    """Delivery-log entry for one channel, or None if the officer cannot receive it."""
    if channel == "email" and officer.email:
        return NotificationLog(officer.id, article_id, "email", "sent", sent_at=now_utc())
    if channel == "sms" and officer.phone_number:
        return NotificationLog(officer.id, article_id, "sms", "pending", error_message=SMS_PENDING)
    if channel == "push":
        return NotificationLog(officer.id, article_id, "push", "pending", error_message=PUSH_PENDING)
    return None


def send_notification(
    repository: Repository,
    article_id: str,
    notification_type: str = "manual",
    app_url: str = "",
) -> NotificationOutcome:
    """
    Evaluate every active officer of the article's primary department.

    Raises:
        NotFoundError: If the article does not exist
    """
    article = repository.get_article(article_id)
    if article is None:
        raise NotFoundError(f"Article {article_id} not found")
    if not article.primary_department_id:
        return NotificationOutcome(success=False, message="No department assigned to this article")

    department = repository.get_department(article.primary_department_id)
    if department is not None and not department.notifications_enabled:
        return NotificationOutcome(success=True, message="Notifications disabled for this department")

    officers = repository.list_officers(article.primary_department_id)
    if not officers:
        return NotificationOutcome(success=True, message="No officers found for this department")

    analysis = repository.get_analysis(article_id)
    source = repository.get_source(article.source_id) if article.source_id else None
    alert = build_alert_message(
        article,
        analysis,
        notification_type=notification_type,
        department=department,
        source_name=source.name if source else extract_domain_from_url(article.url) or None,
        app_url=app_url,
    )

    outcome = NotificationOutcome(success=True, alert_text=alert)
    for officer in officers:
        preference = repository.get_preference(officer.id)
        if not should_notify(analysis, preference):
            continue

        for channel in preference.channels or ["email"]:
            try:
                entry = _log_entry(officer, article_id, channel)
                if entry is None:
                    continue
                repository.add_notification_log(entry)
                outcome.results.append(ChannelResult(officer.full_name, channel, "logged"))
            except Exception as e:
                logger.error("Notification to %s via %s failed: %s", officer.full_name, channel, e)
                repository.add_notification_log(
                    NotificationLog(officer.id, article_id, channel, "failed", error_message=str(e))
                )
                outcome.results.append(ChannelResult(officer.full_name, channel, "failed", str(e)))

    outcome.message = f"{outcome.notifications_sent} notifications logged"
    logger.info("Article %s: %s", article_id, outcome.message)
    return outcome

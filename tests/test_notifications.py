"""
Tests for the alert decision and notification logging.
"""

import pytest

from newslens.core.bias import BaselineBiasScorer
from newslens.core.notifications import build_alert_message, should_notify
from newslens.errors import NotFoundError
from newslens.models import (
    AnalysisRecord,
    Article,
    Department,
    MediaSource,
    NotificationPreference,
    Officer,
)
from newslens.services.notifications import PUSH_PENDING, SMS_PENDING, send_notification


def make_analysis(sentiment, bias_score=None):
    bias = None
    if bias_score is not None:
        bias = BaselineBiasScorer().score("", "")
        bias.overall_score = bias_score
    return AnalysisRecord(
        article_id="article-1",
        sentiment_score=sentiment,
        sentiment_label="negative" if sentiment < 0 else "neutral",
        confidence_score=0.7,
        bias=bias,
    )


class TestShouldNotify:
    def test_negative_sentiment_below_threshold_fires(self):
        preference = NotificationPreference(officer_id="o1", sentiment_threshold=-0.3)

        assert should_notify(make_analysis(-0.5), preference) is True

    def test_mild_sentiment_does_not_fire(self):
        preference = NotificationPreference(officer_id="o1", sentiment_threshold=-0.3)

        assert should_notify(make_analysis(-0.1), preference) is False

    def test_defaults_apply_when_thresholds_unset(self):
        preference = NotificationPreference(officer_id="o1")

        assert should_notify(make_analysis(-0.31), preference) is True
        assert should_notify(make_analysis(-0.3), preference) is False
        assert should_notify(make_analysis(0.0, bias_score=60.0), preference) is False
        assert should_notify(make_analysis(0.0, bias_score=60.5), preference) is True

    def test_high_bias_fires_on_its_own(self):
        preference = NotificationPreference(officer_id="o1", bias_threshold=50)

        assert should_notify(make_analysis(0.4, bias_score=55.0), preference) is True

    def test_disabled_or_missing_preference_never_fires(self):
        disabled = NotificationPreference(officer_id="o1", enabled=False)

        assert should_notify(make_analysis(-0.9), disabled) is False
        assert should_notify(make_analysis(-0.9), None) is False

    def test_missing_analysis_never_fires(self):
        assert should_notify(None, NotificationPreference(officer_id="o1")) is False


def test_alert_message_contents():
    article = Article(title="Bridge collapse", content="...", url="https://x.org/b")
    department = Department(name="Public Works", short_name="PWD")
    message = build_alert_message(
        article,
        make_analysis(-0.5, bias_score=70.0),
        notification_type="negative_story",
        department=department,
        source_name="Example Times",
        app_url="http://localhost:5173/",
    )

    assert message.startswith("ALERT: NEGATIVE_STORY")
    assert "Dept: PWD" in message
    assert "Source: Example Times" in message
    assert "Headline: Bridge collapse" in message
    assert "Sentiment: -50%" in message
    assert "Bias: 70/100" in message
    assert f"http://localhost:5173/articles/{article.id}" in message


@pytest.fixture
def alert_setup(memory_repo):
    source = memory_repo.add_source(MediaSource(name="Example Times"))
    department = memory_repo.add_department(Department(name="Public Works", short_name="PWD"))
    article = Article(
        title="Bridge collapse",
        content="...",
        url="https://x.org/bridge",
        source_id=source.id,
        primary_department_id=department.id,
        status="analyzed",
    )
    memory_repo.insert_article(article)
    analysis = make_analysis(-0.5)
    analysis.article_id = article.id
    memory_repo.upsert_analysis(analysis)
    return memory_repo, department, article


def test_logs_one_entry_per_channel(alert_setup):
    repo, department, article = alert_setup
    officer = repo.add_officer(Officer(
        full_name="A. Rao", department_id=department.id, email="rao@example.gov", phone_number="+91100"
    ))
    repo.set_preference(NotificationPreference(officer_id=officer.id, channels=["email", "sms", "push"]))

    outcome = send_notification(repo, article.id, "negative_story")
    logs = {entry.channel: entry for entry in repo.list_notification_logs(article.id)}

    assert outcome.notifications_sent == 3
    assert logs["email"].status == "sent"
    assert logs["email"].sent_at is not None
    assert logs["sms"].status == "pending"
    assert logs["sms"].error_message == SMS_PENDING
    assert logs["push"].status == "pending"
    assert logs["push"].error_message == PUSH_PENDING


def test_channels_the_officer_cannot_receive_are_skipped(alert_setup):
    repo, department, article = alert_setup
    officer = repo.add_officer(Officer(full_name="B. Iyer", department_id=department.id))
    repo.set_preference(NotificationPreference(officer_id=officer.id, channels=["email", "sms"]))

    outcome = send_notification(repo, article.id)

    assert outcome.notifications_sent == 0
    assert repo.list_notification_logs(article.id) == []


def test_officers_below_threshold_or_inactive_are_skipped(alert_setup):
    repo, department, article = alert_setup
    calm = repo.add_officer(Officer(full_name="Calm", department_id=department.id, email="c@example.gov"))
    repo.set_preference(NotificationPreference(officer_id=calm.id, sentiment_threshold=-0.8))
    inactive = repo.add_officer(Officer(
        full_name="Away", department_id=department.id, email="a@example.gov", is_active=False
    ))
    repo.set_preference(NotificationPreference(officer_id=inactive.id))
    no_pref = repo.add_officer(Officer(full_name="New", department_id=department.id, email="n@example.gov"))

    outcome = send_notification(repo, article.id)

    assert outcome.success is True
    assert outcome.notifications_sent == 0
    assert no_pref.id not in [entry.officer_id for entry in repo.list_notification_logs()]


def test_article_without_department(memory_repo):
    article = memory_repo.insert_article(Article(title="t", content="c", url="https://x.org/nd"))

    outcome = send_notification(memory_repo, article.id)

    assert outcome.success is False
    assert outcome.message == "No department assigned to this article"


def test_unknown_article(memory_repo):
    with pytest.raises(NotFoundError):
        send_notification(memory_repo, "missing")

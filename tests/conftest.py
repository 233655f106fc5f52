"""
Pytest configuration and shared fixtures.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from newslens.main import app, get_repository, get_settings
from newslens.models import Department, MediaSource
from newslens.settings import Settings
from newslens.storage.memory import MemoryRepository
from newslens.storage.sql import SqlRepository


RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>{name}</title>
    <link>https://example.org</link>
    <description>Test feed</description>
    {items}
  </channel>
</rss>
"""

ITEM_TEMPLATE = """
    <item>
      <title>{title}</title>
      <link>{link}</link>
      <pubDate>Mon, 06 May 2024 10:00:00 +0530</pubDate>
      <description><![CDATA[<p>{description}</p>]]></description>
      {encoded}
    </item>
"""


def build_rss(items, name="Test Feed"):
    """
    Build an RSS document.

    `items` is a list of (title, link, description, encoded) tuples; encoded
    may be None to leave out content:encoded.
    """
    rendered = []
    for title, link, description, encoded in items:
        encoded_xml = f"<content:encoded><![CDATA[{encoded}]]></content:encoded>" if encoded else ""
        rendered.append(
            ITEM_TEMPLATE.format(title=title, link=link, description=description, encoded=encoded_xml)
        )
    return RSS_TEMPLATE.format(name=name, items="".join(rendered)).encode("utf-8")


THREE_ITEMS = [
    (
        "Metro line extended to airport",
        "https://news.example.org/metro-airport",
        "The city metro corporation opened the new airport line on Monday.",
        "<p>The <b>metro</b> corporation opened the airport line &amp; commuters welcomed it.</p>",
    ),
    (
        "Farmers protest delay in crop insurance payouts",
        "https://news.example.org/crop-insurance",
        "Farmers in several villages said payouts were delayed for months.",
        None,
    ),
    (
        "New school buildings inaugurated",
        "https://news.example.org/schools",
        "The education department inaugurated twelve school buildings.",
        None,
    ),
]


@pytest.fixture
def memory_repo():
    return MemoryRepository()


@pytest.fixture
def sql_repo():
    """SQL repository on a private in-memory SQLite database."""
    repository = SqlRepository("sqlite://")
    yield repository
    repository.engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    """Runs a test against both storage backends."""
    if request.param == "memory":
        return MemoryRepository()
    return SqlRepository("sqlite://")


@pytest.fixture
def departments():
    return [
        Department(name="Transport Department", short_name="TRN", keywords=["metro", "railway", "bus"]),
        Department(name="Health Department", short_name="HLT", keywords=["hospital", "doctor", "health"]),
        Department(name="Education Department", short_name="EDU", keywords=["school", "university"]),
        Department(name="Urban Development", short_name="URB", keywords=["metro", "city"]),
    ]


@pytest.fixture
def feed_source():
    return MediaSource(
        name="Example Times",
        type="newspaper",
        language="English",
        region="Karnataka",
        rss_feed="https://feeds.example.org/rss",
    )


@pytest.fixture
def rss_client():
    """Build an httpx.AsyncClient whose responses come from a handler."""
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        STORAGE_BACKEND="memory",
        OPENAI_API_KEY="",
        YOUTUBE_API_KEY="",
        APP_URL="http://localhost:5173",
    )


@pytest.fixture
def client(memory_repo, test_settings):
    """FastAPI test client backed by an in-memory repository."""
    app.dependency_overrides[get_repository] = lambda: memory_repo
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()

"""
RSS/Atom feed fetcher for configured media sources.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import feedparser
import httpx
from bs4 import BeautifulSoup

from newslens.config import (
    FEED_HEADERS,
    FETCH_TIMEOUT_SECONDS,
    MAX_CONTENT_CHARS,
    MAX_FEED_ITEMS,
    PAGE_HEADERS,
    PAGE_TIMEOUT_SECONDS,
    SHORT_CONTENT_CHARS,
)
from newslens.errors import FeedError
from newslens.models import MediaSource
from newslens.sources.common import clean_text, parse_utc_datetime
from newslens.utils import normalize_text, strip_html, truncate

logger = logging.getLogger(__name__)


@dataclass
class FeedItem:
    title: str
    url: str
    content: str
    published_at: datetime


def extract_entry_content(entry) -> str:
    """
    Plain-text body for a feed entry.

    Prefers `content:encoded`, then `description`; markup is stripped, the
    result cut to MAX_CONTENT_CHARS and the title used when nothing is left.
    """
    raw = ""
    encoded = entry.get("content") or []
    if encoded:
        raw = encoded[0].get("value", "") or ""
    if not raw:
        raw = entry.get("summary") or entry.get("description") or ""

    text = truncate(strip_html(raw), MAX_CONTENT_CHARS)
    return text or clean_text(entry.get("title"))


def parse_feed_items(payload: bytes, source_name: str, limit: int = MAX_FEED_ITEMS) -> List[FeedItem]:
    """
    Parse a feed document into at most `limit` items.

    Raises:
        FeedError: If the document is not a feed at all
    """
    feed = feedparser.parse(payload)
    if feed.bozo and not feed.entries:
        raise FeedError(source_name, f"Malformed feed: {feed.get('bozo_exception')}")

    items: List[FeedItem] = []
    for entry in feed.entries[:limit]:
        title = clean_text(entry.get("title"))
        link = clean_text(entry.get("link"))
        if not title or not link:
            continue
        items.append(
            FeedItem(
                title=title,
                url=link,
                content=extract_entry_content(entry),
                published_at=parse_utc_datetime(entry.get("published") or entry.get("updated")),
            )
        )
    return items


ARTICLE_BODY_SELECTORS = (
    "article",
    '[itemprop="articleBody"]',
    ".article-content",
    ".article-body",
    ".post-content",
    ".entry-content",
    ".content-body",
    ".story-content",
    ".article__body",
    "main article",
    ".main-content article",
    "#article-body",
    ".news-content",
    ".detail-content",
    'div[class*="article"]',
    'div[class*="story"]',
    'div[class*="content"]',
)


def extract_article_text(html: str) -> str:
    """
    Pull the readable body out of an article page.

    The first body container with more than two paragraphs wins if its
    paragraphs over 30 characters add up to more than 200 characters.
    Otherwise the first ten paragraphs over 50 characters on the page are used.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()

    for selector in ARTICLE_BODY_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        paragraphs = element.find_all("p")
        if len(paragraphs) <= 2:
            continue
        texts = [normalize_text(p.get_text(" ")) for p in paragraphs]
        text = " ".join(t for t in texts if len(t) > 30)
        if len(text) > 200:
            return text

    texts = [normalize_text(p.get_text(" ")) for p in soup.find_all("p")]
    return " ".join([t for t in texts if len(t) > 50][:10])


async def fetch_article_text(client: httpx.AsyncClient, url: str, timeout: float = PAGE_TIMEOUT_SECONDS) -> str:
    """
    Best-effort download of an article page's body text.

    Returns:
        Extracted text, or an empty string on any failure
    """
    try:
        response = await client.get(url, headers=PAGE_HEADERS, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        return extract_article_text(response.text)
    except Exception as e:
        logger.debug("Could not fetch article page %s: %s", url, e)
        return ""


class RssFetcher:
    """Fetches a source's RSS feed over HTTP."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        fetch_pages: bool = True,
    ):
        self._client = client
        self.timeout = timeout
        self.fetch_pages = fetch_pages

    async def fetch(self, source: MediaSource) -> List[FeedItem]:
        """
        Fetch and parse the feed of one source.

        Items whose feed body is shorter than SHORT_CONTENT_CHARS are filled
        from their article page when that yields more text.

        Args:
            source: Media source with an `rss_feed` URL

        Returns:
            List of FeedItem objects (first MAX_FEED_ITEMS entries)

        Raises:
            FeedError: On network failure, non-2xx status or malformed XML
        """
        if not source.rss_feed:
            raise FeedError(source.name, "No RSS feed configured")

        if self._client is not None:
            return await self._fetch(self._client, source)
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await self._fetch(client, source)

    async def _fetch(self, client: httpx.AsyncClient, source: MediaSource) -> List[FeedItem]:
        try:
            response = await client.get(source.rss_feed, headers=FEED_HEADERS, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FeedError(source.name, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FeedError(source.name, f"Fetch failed: {e!r}") from e

        items = parse_feed_items(response.content, source.name)
        if self.fetch_pages:
            short = [item for item in items if len(item.content) < SHORT_CONTENT_CHARS]
            await asyncio.gather(*(self._fill_from_page(client, item) for item in short))
        logger.info("Fetched %d items from %s", len(items), source.name)
        return items

    async def _fill_from_page(self, client: httpx.AsyncClient, item: FeedItem) -> None:
        page_text = await fetch_article_text(client, item.url, min(self.timeout, PAGE_TIMEOUT_SECONDS))
        if len(page_text) > len(item.content):
            item.content = truncate(page_text, MAX_CONTENT_CHARS)

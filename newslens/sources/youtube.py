"""
YouTube Data API v3 fetcher for channel uploads.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from newslens.config import FETCH_TIMEOUT_SECONDS, YOUTUBE_API_URL, YOUTUBE_MAX_RESULTS
from newslens.errors import FeedError
from newslens.models import YouTubeVideo
from newslens.sources.common import parse_utc_datetime

logger = logging.getLogger(__name__)


def _to_int(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def parse_video(item: dict) -> YouTubeVideo:
    """Map one `videos` API resource to a YouTubeVideo."""
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    thumbnails = snippet.get("thumbnails") or {}
    thumbnail = (thumbnails.get("high") or thumbnails.get("medium") or {}).get("url", "")

    return YouTubeVideo(
        video_id=item["id"],
        channel_id=snippet.get("channelId", ""),
        channel_name=snippet.get("channelTitle", ""),
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        published_at=parse_utc_datetime(snippet.get("publishedAt")),
        thumbnail_url=thumbnail,
        view_count=_to_int(statistics.get("viewCount")),
        like_count=_to_int(statistics.get("likeCount")),
        comment_count=_to_int(statistics.get("commentCount")),
        duration=(item.get("contentDetails") or {}).get("duration", ""),
        status="pending",
    )


class YouTubeFetcher:
    """Lists the latest uploads of a channel."""

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self._client = client

    async def _get(self, client: httpx.AsyncClient, endpoint: str, params: dict) -> dict:
        response = await client.get(
            f"{YOUTUBE_API_URL}/{endpoint}",
            params={**params, "key": self.api_key},
            timeout=FETCH_TIMEOUT_SECONDS,
        )
        data = response.json()
        if response.status_code >= 400:
            message = (data.get("error") or {}).get("message") or f"HTTP {response.status_code}"
            raise FeedError("youtube", message)
        return data

    async def fetch(self, channel_id: str, limit: int = YOUTUBE_MAX_RESULTS) -> List[YouTubeVideo]:
        """
        Fetch the newest videos of a channel with statistics.

        Args:
            channel_id: YouTube channel id
            limit: Maximum number of videos

        Returns:
            List of YouTubeVideo objects, empty if the channel has none

        Raises:
            FeedError: If the API rejects a request or cannot be reached
        """
        if self._client is not None:
            return await self._fetch(self._client, channel_id, limit)
        async with httpx.AsyncClient() as client:
            return await self._fetch(client, channel_id, limit)

    async def _fetch(self, client: httpx.AsyncClient, channel_id: str, limit: int) -> List[YouTubeVideo]:
        try:
            search = await self._get(client, "search", {
                "channelId": channel_id,
                "part": "snippet",
                "order": "date",
                "maxResults": limit,
                "type": "video",
            })
            video_ids = [
                item["id"]["videoId"]
                for item in search.get("items", [])
                if (item.get("id") or {}).get("videoId")
            ]
            if not video_ids:
                return []

            details = await self._get(client, "videos", {
                "id": ",".join(video_ids),
                "part": "snippet,statistics,contentDetails",
            })
        except httpx.HTTPError as e:
            raise FeedError("youtube", f"Request failed: {e!r}") from e

        videos = [parse_video(item) for item in details.get("items", [])]
        logger.info("Fetched %d videos for channel %s", len(videos), channel_id)
        return videos

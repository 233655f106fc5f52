"""
Tests for translation, summaries and the YouTube scraper.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from newslens.config import TRANSLATION_FALLBACK_PREFIX
from newslens.errors import FeedError
from newslens.models import MediaSource
from newslens.services.ingestion import scrape_youtube
from newslens.services.summaries import generate_fallback_summary, generate_summary, summarize_title
from newslens.services.translation import needs_translation, translate
from newslens.sources.youtube import YouTubeFetcher, parse_video


def run_with_client(handler, coro_factory):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await coro_factory(client)
    return asyncio.run(run())


class TestTranslation:
    def test_translates_with_language_codes(self):
        seen = []

        def handler(request):
            seen.append(request.url.params)
            return httpx.Response(200, json=[[["Hello world", "नमस्ते दुनिया", None, None]], None, "hi"])

        result = run_with_client(handler, lambda client: translate("नमस्ते दुनिया", "Hindi", client=client))

        assert result == "Hello world"
        assert seen[0]["sl"] == "hi"
        assert seen[0]["tl"] == "en"
        assert seen[0]["client"] == "gtx"

    def test_joins_multiple_segments(self):
        payload = [[["First sentence. ", "a", None, None], ["Second.", "b", None, None]], None, "ta"]

        result = run_with_client(
            lambda request: httpx.Response(200, json=payload),
            lambda client: translate("முதல். இரண்டு.", "Tamil", client=client),
        )

        assert result == "First sentence. Second."

    def test_service_failure_returns_marked_original(self):
        result = run_with_client(
            lambda request: httpx.Response(500),
            lambda client: translate("ಸುದ್ದಿ", "Kannada", client=client),
        )

        assert result == f"{TRANSLATION_FALLBACK_PREFIX} ಸುದ್ದಿ"

    def test_english_is_not_sent(self):
        def handler(request):
            raise AssertionError("no request expected")

        result = run_with_client(handler, lambda client: translate("Already English", "English", client=client))

        assert result == "Already English"

    def test_needs_translation(self):
        assert needs_translation("Hindi") is True
        assert needs_translation("English") is False
        assert needs_translation(None) is False


class TestSummaries:
    def test_action_and_location(self):
        summary = generate_fallback_summary(
            "Metro phase three",
            "The Karnataka government will announce the new metro corridor next week.",
        )

        assert summary == "Karnataka Government announces related to metro and urban transport."

    def test_action_without_location(self):
        summary = generate_fallback_summary(
            "New hospital wing",
            "Officials plan to inaugurate the hospital wing after the monsoon.",
        )

        assert summary == "New initiative launched concerning healthcare initiatives in the region."

    def test_topic_only(self):
        summary = generate_fallback_summary("Budget debate", "Legislators discussed the state budget for hours.")

        assert summary == "News coverage on economic policy and its impact on local communities."

    def test_first_sentence_when_nothing_matches(self):
        summary = generate_fallback_summary("Weather", "Light rain is expected tonight. More tomorrow.")

        assert summary == "Light rain is expected tonight."

    def test_short_content_uses_title(self):
        assert generate_fallback_summary("Metro fares revised", "Short.") == (
            "Report on metro and urban transport: Metro fares revised"
        )
        assert summarize_title("") == "No content available for summary."

    def test_no_key_uses_heuristic(self, test_settings):
        content = "The Karnataka government will announce the new metro corridor next week."

        summary = asyncio.run(generate_summary("Metro", content, test_settings))

        assert summary == generate_fallback_summary("Metro", content)

    def test_llm_summary_when_client_available(self, test_settings):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="  Metro corridor announced.  "))]
        ))

        summary = asyncio.run(generate_summary(
            "Metro", "The Karnataka government will announce the new metro corridor.", test_settings, client=client
        ))

        assert summary == "Metro corridor announced."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == test_settings.OPENAI_MODEL
        assert kwargs["messages"][0]["role"] == "system"

    def test_llm_failure_falls_back(self, test_settings):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("rate limited"))
        content = "The Karnataka government will announce the new metro corridor."

        summary = asyncio.run(generate_summary("Metro", content, test_settings, client=client))

        assert summary == "Karnataka Government announces related to metro and urban transport."


SEARCH_PAYLOAD = {"items": [{"id": {"videoId": "v1"}}, {"id": {"videoId": "v2"}}, {"id": {"kind": "playlist"}}]}
VIDEOS_PAYLOAD = {
    "items": [
        {
            "id": "v1",
            "snippet": {
                "channelId": "UC123",
                "channelTitle": "News Channel",
                "title": "Evening bulletin",
                "description": "Top stories",
                "publishedAt": "2024-05-06T10:00:00Z",
                "thumbnails": {"high": {"url": "https://img.example.org/v1.jpg"}},
            },
            "statistics": {"viewCount": "1200", "likeCount": "30"},
            "contentDetails": {"duration": "PT12M"},
        },
        {
            "id": "v2",
            "snippet": {"channelId": "UC123", "title": "Morning bulletin"},
            "statistics": {},
        },
    ]
}


def youtube_handler(request):
    if request.url.path.endswith("/search"):
        assert request.url.params["channelId"] == "UC123"
        assert request.url.params["key"] == "secret"
        return httpx.Response(200, json=SEARCH_PAYLOAD)
    assert request.url.params["id"] == "v1,v2"
    return httpx.Response(200, json=VIDEOS_PAYLOAD)


class TestYouTube:
    def test_parse_video(self):
        video = parse_video(VIDEOS_PAYLOAD["items"][0])

        assert video.video_id == "v1"
        assert video.view_count == 1200
        assert video.comment_count == 0
        assert video.thumbnail_url == "https://img.example.org/v1.jpg"
        assert video.published_at.year == 2024

    def test_fetch_lists_videos(self):
        videos = run_with_client(
            youtube_handler, lambda client: YouTubeFetcher("secret", client=client).fetch("UC123")
        )

        assert [video.video_id for video in videos] == ["v1", "v2"]
        assert videos[1].view_count == 0

    def test_empty_channel(self):
        videos = run_with_client(
            lambda request: httpx.Response(200, json={"items": []}),
            lambda client: YouTubeFetcher("secret", client=client).fetch("UC123"),
        )

        assert videos == []

    def test_api_error(self):
        def handler(request):
            return httpx.Response(403, json={"error": {"message": "quotaExceeded"}})

        with pytest.raises(FeedError, match="quotaExceeded"):
            run_with_client(handler, lambda client: YouTubeFetcher("secret", client=client).fetch("UC123"))

    def test_scrape_updates_video_count(self, memory_repo):
        source = memory_repo.add_source(MediaSource(name="News Channel", type="youtube", youtube_channel_id="UC123"))

        videos = run_with_client(
            youtube_handler,
            lambda client: scrape_youtube(memory_repo, YouTubeFetcher("secret", client=client), "UC123"),
        )

        assert len(videos) == 2
        assert len(memory_repo.list_videos("UC123")) == 2
        assert memory_repo.get_source(source.id).video_count == 2

"""
One-line article summaries: heuristic templates with optional LLM rewrite.
"""
from __future__ import annotations

import logging
import re
from textwrap import shorten
from typing import Optional

from openai import AsyncOpenAI

from newslens.core.lexicons import SUMMARY_ACTIONS, SUMMARY_LOCATIONS, SUMMARY_TOPICS
from newslens.settings import Settings
from newslens.utils import normalize_text

logger = logging.getLogger(__name__)

MIN_CONTENT_CHARS = 20

SYSTEM_PROMPT = (
    "You are a news desk editor for an Indian government media-monitoring team. "
    "Summarize the article in one plain English sentence of at most 30 words. "
    "Do not add opinions or information that is not in the article."
)

_SENTENCE = re.compile(r"[^.!?।]+[.!?।]+")


def identify_main_topic(title: str, content: str) -> str:
    combined = f"{title} {content}".lower()
    for topic, indicators in SUMMARY_TOPICS.items():
        if any(indicator.lower() in combined for indicator in indicators):
            return topic
    return "regional developments"


def identify_action(content: str) -> str:
    lowered = content.lower()
    for action, indicators in SUMMARY_ACTIONS.items():
        if any(indicator.lower() in lowered for indicator in indicators):
            return action
    return ""


def extract_location(content: str) -> str:
    for location in SUMMARY_LOCATIONS:
        if location in content:
            return location
    return ""


def summarize_title(title: str) -> str:
    """Templated summary when the body is too short to work with."""
    title = normalize_text(title)
    if not title:
        return "No content available for summary."
    topic = identify_main_topic(title, "")
    return f"Report on {topic}: {shorten(title, width=140, placeholder='...')}"


def generate_fallback_summary(title: str, content: str) -> str:
    """
    Rule-based summary from action, location and topic cues.

    Args:
        title: Article headline
        content: Article body

    Returns:
        One-sentence summary string
    """
    title = normalize_text(title)
    content = normalize_text(content)
    if len(content) < MIN_CONTENT_CHARS:
        return summarize_title(title)

    topic = identify_main_topic(title, content)
    action = identify_action(content)
    location = extract_location(content)

    if action and location:
        return f"{location} {action} related to {topic}."
    if action:
        return f"{action} concerning {topic} in the region."
    if topic != "regional developments":
        return f"News coverage on {topic} and its impact on local communities."

    sentences = _SENTENCE.findall(content)
    first = (sentences[0] if sentences else content).strip()
    return first[:120] + ("..." if len(first) > 120 else "")


def get_openai_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """Get OpenAI client only when an API key is configured."""
    if not settings.OPENAI_API_KEY:
        return None
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


async def generate_summary(
    title: str,
    content: str,
    settings: Settings,
    language: str = "English",
    client: Optional[AsyncOpenAI] = None,
) -> str:
    """
    Summarize an article.

    Uses the OpenAI chat API when a key is configured (or a client is passed),
    otherwise and on any API failure the heuristic summary.
    """
    fallback = generate_fallback_summary(title, content)
    if len(normalize_text(content)) < MIN_CONTENT_CHARS:
        return fallback

    client = client or get_openai_client(settings)
    if not client:
        return fallback

    user_prompt = (
        f"Language of the article: {language}\n"
        f"Title: {normalize_text(title)}\n\n"
        f"Article:\n{shorten(normalize_text(content), width=3000, placeholder='...')}"
    )

    try:
        response = await client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.2,
            max_tokens=120,
        )
        summary = (response.choices[0].message.content or "").strip()
        return summary or fallback
    except Exception as e:
        logger.warning("Error generating AI summary: %s", e)
        return fallback

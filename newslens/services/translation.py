"""
Machine translation through the public Google Translate endpoint.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from newslens.config import FETCH_TIMEOUT_SECONDS, LANGUAGE_CODES, TRANSLATE_URL, TRANSLATION_FALLBACK_PREFIX

logger = logging.getLogger(__name__)


def needs_translation(source_language: Optional[str], target_language: str = "English") -> bool:
    return bool(source_language) and source_language not in (target_language, "English")


async def translate(
    text: str,
    source_language: str,
    target_language: str = "English",
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Translate text between two supported languages.

    Args:
        text: Text to translate
        source_language: Language name, e.g. "Hindi"
        target_language: Language name, defaults to English
        client: Optional shared HTTP client

    Returns:
        Translated text; the input unchanged when no translation is needed;
        "[Translation unavailable] <text>" when the service fails
    """
    if not text or not needs_translation(source_language, target_language):
        return text

    params = {
        "client": "gtx",
        "sl": LANGUAGE_CODES.get(source_language, "auto"),
        "tl": LANGUAGE_CODES.get(target_language, "en"),
        "dt": "t",
        "q": text,
    }

    try:
        if client is not None:
            response = await client.get(TRANSLATE_URL, params=params, timeout=FETCH_TIMEOUT_SECONDS)
        else:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(TRANSLATE_URL, params=params, timeout=FETCH_TIMEOUT_SECONDS)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Translation from %s failed: %s", source_language, e)
        return f"{TRANSLATION_FALLBACK_PREFIX} {text}"

    # [[["translated", "original", ...], ...], ...]
    if isinstance(data, list) and data and isinstance(data[0], list):
        return "".join(segment[0] for segment in data[0] if segment and segment[0])
    return text

"""
Lexicon-based sentiment, topic, keyword and entity extraction.

This module scores multilingual news text with fixed keyword tables. It is
deterministic: the same (text, title) pair always produces the same result.
"""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from newslens.core.lexicons import (
    LOCATION_GAZETTEER,
    LOCATION_MARKERS,
    ORGANIZATION_MARKERS,
    SENTIMENT_LEXICON,
    STOPWORDS,
    TOPIC_KEYWORDS,
)
from newslens.core.text import TextView
from newslens.models import Entity
from newslens.utils import clamp

MAX_TOPICS = 8
MAX_KEYWORDS = 8
MAX_ENTITIES = 10

_CAPITALIZED_SPAN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")
_ORGANIZATION_SPAN = re.compile(
    r"\b(?:Ministry|Department|Commission|Board|Authority) of(?:\s+(?:and\s+)?[A-Z][a-z]+)+"
)

# (first code point, last code point, language)
_SCRIPT_RANGES: Tuple[Tuple[int, int, str], ...] = (
    (0x0900, 0x097F, "Hindi"),
    (0x0980, 0x09FF, "Bengali"),
    (0x0A80, 0x0AFF, "Gujarati"),
    (0x0B80, 0x0BFF, "Tamil"),
    (0x0C00, 0x0C7F, "Telugu"),
    (0x0C80, 0x0CFF, "Kannada"),
    (0x0D00, 0x0D7F, "Malayalam"),
)


@dataclass(frozen=True)
class SentimentPolicy:
    """Scoring constants for one sentiment call site.

    smoothing is added to the denominator of (pos - neg) / (pos + neg) to damp
    low-signal texts and avoid division by zero.
    """

    name: str
    smoothing: float
    positive_threshold: float
    negative_threshold: float
    mixed_min_count: int = 2
    mixed_max_gap: int = 1


# Extractor default: ingestion, scheduled sweep, analyze-pending.
LEXICON_POLICY = SentimentPolicy("lexicon", smoothing=3.0, positive_threshold=0.2, negative_threshold=-0.2)
# Interactive detect-bias response.
REQUEST_POLICY = SentimentPolicy("request", smoothing=1.0, positive_threshold=0.3, negative_threshold=-0.3)


@dataclass
class ExtractionResult:
    score: float
    label: str
    confidence: float
    language: str
    topics: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    positive_count: int = 0
    negative_count: int = 0


def _split_lexicon(polarity: str) -> Tuple[frozenset, frozenset]:
    latin, indic = set(), set()
    for entries in SENTIMENT_LEXICON.values():
        for word in entries[polarity]:
            (latin if word.isascii() else indic).add(word)
    return frozenset(latin), frozenset(indic)


_POSITIVE_LATIN, _POSITIVE_INDIC = _split_lexicon("positive")
_NEGATIVE_LATIN, _NEGATIVE_INDIC = _split_lexicon("negative")


def count_sentiment_words(view: TextView) -> Tuple[int, int]:
    """
    Count positive and negative lexicon hits.

    Latin-script words are matched against whitespace tokens; Indic-script
    words are counted as substrings of the lowercased text.

    Returns:
        Tuple of (positive_count, negative_count)
    """
    positive = sum(1 for token in view.tokens if token in _POSITIVE_LATIN)
    negative = sum(1 for token in view.tokens if token in _NEGATIVE_LATIN)
    positive += sum(view.lower_text.count(word) for word in _POSITIVE_INDIC)
    negative += sum(view.lower_text.count(word) for word in _NEGATIVE_INDIC)
    return positive, negative


def score_sentiment(positive: int, negative: int, policy: SentimentPolicy = LEXICON_POLICY) -> float:
    """Smoothed polarity in [-1, 1]."""
    raw = (positive - negative) / (positive + negative + policy.smoothing)
    return round(clamp(raw, -1.0, 1.0), 4)


def label_sentiment(
    score: float,
    positive: int,
    negative: int,
    policy: SentimentPolicy = LEXICON_POLICY,
) -> str:
    """
    Map a score to positive/negative/neutral/mixed.

    `mixed` replaces `neutral` only when both polarities have real support and
    are nearly balanced.
    """
    if score > policy.positive_threshold:
        return "positive"
    if score < policy.negative_threshold:
        return "negative"
    if (
        positive >= policy.mixed_min_count
        and negative >= policy.mixed_min_count
        and abs(positive - negative) <= policy.mixed_max_gap
    ):
        return "mixed"
    return "neutral"


def compute_confidence(sentiment_words: int, word_count: int) -> float:
    """Grows with sentiment-word density, capped at 0.95."""
    if word_count <= 0:
        return 0.6
    return round(min(0.95, 0.6 + (sentiment_words / word_count) * 2), 4)


def detect_language(text: str) -> str:
    """
    Guess the language from the dominant Indic script, defaulting to English.

    Devanagari is reported as Hindi (Marathi shares the script).
    """
    counts: Dict[str, int] = {}
    for char in text:
        code = ord(char)
        if code < 0x0900:
            continue
        for start, end, language in _SCRIPT_RANGES:
            if start <= code <= end:
                counts[language] = counts.get(language, 0) + 1
                break
    if not counts:
        return "English"
    return max(counts.items(), key=lambda item: item[1])[0]


def extract_topics(view: TextView) -> List[str]:
    """Topics whose keywords appear anywhere in title + content."""
    topics = [
        topic
        for topic, keywords in TOPIC_KEYWORDS.items()
        if any(keyword in view.lower_text for keyword in keywords)
    ]
    return topics[:MAX_TOPICS] if topics else ["General"]


def extract_keywords(view: TextView) -> List[str]:
    """Most frequent non-stopword tokens longer than 3 characters."""
    counts = Counter(
        token for token in view.tokens if len(token) > 3 and token not in STOPWORDS
    )
    # Counter keeps first-seen order for equal counts
    return [word for word, _ in counts.most_common(MAX_KEYWORDS)]


def _entity_type(span: str) -> str:
    if any(place in span for place in LOCATION_GAZETTEER):
        return "LOCATION"
    if any(marker in span for marker in LOCATION_MARKERS):
        return "LOCATION"
    if any(marker in span for marker in ORGANIZATION_MARKERS):
        return "ORGANIZATION"
    return "PERSON"


def extract_entities(text: str) -> List[Entity]:
    """
    Cheap pattern-based entity tagging.

    Ministry-style phrases become ORGANIZATION, capitalized spans are tagged
    LOCATION/ORGANIZATION by gazetteer and marker words, the rest PERSON.
    """
    entities: List[Entity] = []
    seen: set[str] = set()

    for match in _ORGANIZATION_SPAN.finditer(text):
        span = match.group(0)
        if span not in seen:
            seen.add(span)
            entities.append(Entity(text=span, type="ORGANIZATION"))

    for match in _CAPITALIZED_SPAN.finditer(text):
        words = match.group(0).split()
        while words and words[0].lower() in STOPWORDS:
            words.pop(0)
        span = " ".join(words)
        if not span or span in seen or len(span) <= 2:
            continue
        if any(span in found for found in seen):
            continue
        seen.add(span)
        entities.append(Entity(text=span, type=_entity_type(span)))

    return entities[:MAX_ENTITIES]


def analyze(text, title="", policy: SentimentPolicy = LEXICON_POLICY) -> ExtractionResult:
    """
    Run the full extraction over one article.

    Args:
        text: Article body (any value; None and bytes are tolerated)
        title: Article headline
        policy: Sentiment thresholds to apply

    Returns:
        ExtractionResult with sentiment, topics, keywords and entities
    """
    view = TextView.build(title, text)
    positive, negative = count_sentiment_words(view)
    score = score_sentiment(positive, negative, policy)

    return ExtractionResult(
        score=score,
        label=label_sentiment(score, positive, negative, policy),
        confidence=compute_confidence(positive + negative, view.word_count),
        language=detect_language(view.lower_text),
        topics=extract_topics(view),
        keywords=extract_keywords(view),
        entities=extract_entities(f"{view.title}. {view.content}" if view.title else view.content),
        positive_count=positive,
        negative_count=negative,
    )


"""
Text preparation shared by the extractor and the bias strategies.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Tuple

_PUNCTUATION = string.punctuation + "“”‘’«»…।"
_SENTENCE_SPLIT = re.compile(r"[.!?।]+")


def coerce_text(value) -> str:
    """Turn any input (None, bytes, numbers) into a str without raising."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value if isinstance(value, str) else str(value)


@lru_cache(maxsize=2048)
def _phrase_pattern(phrase: str) -> re.Pattern:
    return re.compile(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)")


def count_phrase(text: str, phrase: str) -> int:
    """
    Count occurrences of a lexicon entry in already-lowercased text.

    Latin-script entries match on word boundaries; Indic-script entries match
    as substrings since whitespace tokenization is unreliable for them.
    """
    if not text or not phrase:
        return 0
    if phrase.isascii():
        return len(_phrase_pattern(phrase).findall(text))
    return text.count(phrase)


def count_phrases(text: str, phrases: Iterable[str]) -> int:
    return sum(count_phrase(text, phrase) for phrase in phrases)


def matched_phrases(text: str, phrases: Iterable[str]) -> List[str]:
    """Lexicon entries present at least once, in lexicon order."""
    return [phrase for phrase in phrases if count_phrase(text, phrase)]


def tokenize(text: str) -> List[str]:
    """Whitespace tokens, case-folded, with surrounding punctuation stripped."""
    tokens = (token.strip(_PUNCTUATION) for token in text.lower().split())
    return [token for token in tokens if token]


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def extract_evidence(sentences: Iterable[str], phrases: Iterable[str], limit: int = 3) -> List[str]:
    """
    Pick up to `limit` sentences that contain any of the phrases.

    Sentences shorter than 20 characters are ignored; long ones are cut to
    120 characters.
    """
    phrases = list(phrases)
    evidence: List[str] = []
    for sentence in sentences:
        if len(sentence) < 20:
            continue
        lowered = sentence.lower()
        if any(count_phrase(lowered, phrase) for phrase in phrases):
            evidence.append(sentence[:120] + ("..." if len(sentence) > 120 else ""))
        if len(evidence) >= limit:
            break
    return evidence


@dataclass(frozen=True)
class TextView:
    """Pre-computed views of one (title, content) pair."""

    title: str
    content: str
    lower_title: str
    lower_body: str
    lower_text: str
    tokens: Tuple[str, ...]
    sentences: Tuple[str, ...]

    @property
    def word_count(self) -> int:
        return len(self.tokens)

    @classmethod
    def build(cls, title, content) -> "TextView":
        title = coerce_text(title).strip()
        content = coerce_text(content).strip()
        text = f"{title} {content}".strip()
        return cls(
            title=title,
            content=content,
            lower_title=title.lower(),
            lower_body=content.lower(),
            lower_text=text.lower(),
            tokens=tuple(tokenize(text)),
            sentences=tuple(split_sentences(text)),
        )

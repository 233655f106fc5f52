"""
Six-axis bias scoring.

Two strategies share the `BiasScorer` interface:

* `RefinedBiasScorer` runs one pure analyzer per axis (political, regional,
  sentiment intensity, source reliability, representation, language) and is
  used for interactive detect-bias requests and the reanalyze-all batch.
* `BaselineBiasScorer` starts every axis at a fixed baseline, adds small
  increments when generic keyword categories are present and scales by text
  length. It is used on the ingestion hot path only.

Both return a `BiasIndicators` record whose overall score is the mean of the
six raw 0-100 axis scores.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from newslens.config import HIGH_BIAS_FLOOR, MEDIUM_BIAS_FLOOR
from newslens.core.lexicons import (
    ANONYMOUS_SOURCING,
    ANTI_GOVERNMENT,
    BASELINE_CATEGORIES,
    CHARGED_WORDS,
    CLICKBAIT_PATTERNS,
    COUNTERARGUMENT_CONNECTIVES,
    EMOTIONAL_WORDS,
    INDIAN_STATES,
    PARTISAN_ENTITIES,
    PRESCRIPTIVE_PHRASES,
    PRO_GOVERNMENT,
    RURAL_TERMS,
    SENSATIONAL_HEADLINE_WORDS,
    STAKEHOLDER_GROUPS,
    UNVERIFIED_ATTRIBUTION,
    URBAN_TERMS,
    WEAK_SOURCES,
)
from newslens.core.text import TextView, count_phrases, extract_evidence, matched_phrases
from newslens.models import AXIS_NAMES, AxisDetail, BiasIndicators
from newslens.utils import clamp

TITLE_WEIGHT = 2.5
LONG_ARTICLE_WORDS = 150

_CLICKBAIT = [re.compile(pattern) for pattern in CLICKBAIT_PATTERNS]
_EXCESSIVE_PUNCTUATION = re.compile(r"[!?]{2,}|!.*!")


def classify(score: float, medium_floor: float = MEDIUM_BIAS_FLOOR, high_floor: float = HIGH_BIAS_FLOOR) -> str:
    """
    Three-tier label for an overall 0-100 score.

    Args:
        score: Overall bias score
        medium_floor: Lowest score labelled Medium (35 or 45 depending on path)
        high_floor: Lowest score labelled High

    Returns:
        "Low Bias", "Medium Bias" or "High Bias"
    """
    if score >= high_floor:
        return "High Bias"
    if score >= medium_floor:
        return "Medium Bias"
    return "Low Bias"


@dataclass
class AxisResult:
    """Raw output of one axis analyzer."""

    score: float
    indicators: Dict[str, float] = field(default_factory=dict)
    evidence: List[str] = field(default_factory=list)


_EXPLANATIONS: Dict[str, Tuple[str, str, str]] = {
    "political": (
        "Minimal political bias. Content appears balanced across political spectrum.",
        "Moderate political lean detected. Some partisan language or selective emphasis present.",
        "Strong political bias. Content shows clear partisan alignment or political agenda.",
    ),
    "regional": (
        "Low regional bias. Content fairly represents different regions without stereotyping.",
        "Moderate regional bias. Coverage concentrates on particular areas or settings.",
        "High regional bias. Coverage is heavily skewed toward particular regions or settings.",
    ),
    "sentiment": (
        "Balanced sentiment. Mix of positive and negative language with neutral tone.",
        "Noticeable sentiment bias. Content leans positive or negative with emotional language.",
        "Extreme sentiment bias. Highly emotional, one-sided language with strong opinions.",
    ),
    "source_reliability": (
        "Strong attribution. Content properly cites credible, verifiable sources.",
        "Moderate source issues. Some reliance on weak sources or vague attribution.",
        "Weak sourcing. Heavy reliance on anonymous sources, rumors, or unverified claims.",
    ),
    "representation": (
        "Fair representation. Multiple stakeholders and perspectives are included.",
        "Some representation issues. Few perspectives or little counter-argument.",
        "Significant representation bias. Single perspective without counter-arguments.",
    ),
    "language": (
        "Neutral language. Factual, objective tone without loaded terminology.",
        "Somewhat loaded language. Some sensational or persuasive terms used.",
        "Highly loaded language. Sensational headline, clickbait or manipulative terms.",
    ),
}


def explain(axis: str, score: float) -> str:
    low, medium, high = _EXPLANATIONS[axis]
    if score < MEDIUM_BIAS_FLOOR:
        return low
    if score < HIGH_BIAS_FLOOR:
        return medium
    return high


def _title_weighted(view: TextView, phrases) -> float:
    """Lexicon hits with headline hits counted TITLE_WEIGHT times."""
    in_title = count_phrases(view.lower_title, phrases)
    in_body = count_phrases(view.lower_body, phrases)
    return in_title * TITLE_WEIGHT + in_body


# ---------------------------------------------------------------------------
# Refined axis analyzers
# ---------------------------------------------------------------------------

def analyze_political(view: TextView) -> AxisResult:
    pro = _title_weighted(view, PRO_GOVERNMENT)
    anti = _title_weighted(view, ANTI_GOVERNMENT)
    total = pro + anti
    imbalance = abs(pro - anti) / total if total else 0.0
    partisan = count_phrases(view.lower_text, PARTISAN_ENTITIES)
    prescriptive = count_phrases(view.lower_text, PRESCRIPTIVE_PHRASES)

    indicators: Dict[str, float] = {}
    if total > 5:
        indicators["lexicon_volume"] = min(35.0, total * 3)
    if imbalance > 0.6:
        indicators["one_sided"] = min(25.0, round(imbalance * 25, 2))
    if partisan > 3:
        indicators["partisan_mentions"] = min(20.0, partisan * 4.0)
    if prescriptive > 2:
        indicators["prescriptive_language"] = min(15.0, prescriptive * 4.0)

    return AxisResult(
        score=sum(indicators.values()),
        indicators=indicators,
        evidence=extract_evidence(view.sentences, PRO_GOVERNMENT + ANTI_GOVERNMENT + PARTISAN_ENTITIES),
    )


def analyze_regional(view: TextView) -> AxisResult:
    states = matched_phrases(view.lower_text, INDIAN_STATES)
    urban = count_phrases(view.lower_text, URBAN_TERMS)
    rural = count_phrases(view.lower_text, RURAL_TERMS)
    setting_total = urban + rural

    indicators: Dict[str, float] = {}
    if len(states) > 4:
        indicators["state_concentration"] = min(25.0, len(states) * 5.0)
    if setting_total >= 3:
        imbalance = abs(urban - rural) / setting_total
        if imbalance >= 0.6:
            indicators["urban_rural_imbalance"] = min(30.0, round(imbalance * 30, 2))

    return AxisResult(
        score=sum(indicators.values()),
        indicators=indicators,
        evidence=extract_evidence(view.sentences, INDIAN_STATES + URBAN_TERMS + RURAL_TERMS),
    )


def analyze_sentiment_intensity(view: TextView) -> AxisResult:
    charged = count_phrases(view.lower_text, CHARGED_WORDS)
    emotional = count_phrases(view.lower_text, EMOTIONAL_WORDS)
    charged_title = count_phrases(view.lower_title, CHARGED_WORDS + EMOTIONAL_WORDS)

    indicators: Dict[str, float] = {}
    if charged > 2:
        indicators["charged_words"] = min(35.0, charged * 5.0)
    if emotional > 1:
        indicators["emotional_register"] = min(25.0, emotional * 5.0)
    if charged_title:
        indicators["charged_headline"] = 15.0

    return AxisResult(
        score=sum(indicators.values()),
        indicators=indicators,
        evidence=extract_evidence(view.sentences, CHARGED_WORDS + EMOTIONAL_WORDS),
    )


def analyze_source_reliability(view: TextView) -> AxisResult:
    unverified = count_phrases(view.lower_text, UNVERIFIED_ATTRIBUTION)
    weak = count_phrases(view.lower_text, WEAK_SOURCES)
    anonymous = count_phrases(view.lower_text, ANONYMOUS_SOURCING)

    indicators: Dict[str, float] = {}
    if unverified > 3:
        indicators["unverified_attribution"] = min(30.0, unverified * 6.0)
    if weak > 2:
        indicators["weak_sources"] = min(25.0, weak * 6.0)
    if anonymous:
        indicators["anonymous_sourcing"] = 25.0

    return AxisResult(
        score=sum(indicators.values()),
        indicators=indicators,
        evidence=extract_evidence(view.sentences, UNVERIFIED_ATTRIBUTION + WEAK_SOURCES + ANONYMOUS_SOURCING),
    )


def analyze_representation(view: TextView) -> AxisResult:
    groups = [
        group for group, words in STAKEHOLDER_GROUPS.items()
        if count_phrases(view.lower_text, words)
    ]
    connectives = count_phrases(view.lower_text, COUNTERARGUMENT_CONNECTIVES)
    is_long = view.word_count >= LONG_ARTICLE_WORDS

    indicators: Dict[str, float] = {}
    if is_long and len(groups) < 2:
        indicators["single_perspective"] = 35.0
    if is_long and connectives == 0:
        indicators["no_counterargument"] = 25.0

    stakeholder_words = [word for words in STAKEHOLDER_GROUPS.values() for word in words]
    return AxisResult(
        score=sum(indicators.values()),
        indicators=indicators,
        evidence=extract_evidence(view.sentences, stakeholder_words),
    )


def analyze_language(view: TextView) -> AxisResult:
    sensational = count_phrases(view.lower_title, SENSATIONAL_HEADLINE_WORDS)
    clickbait = any(pattern.search(view.lower_text) for pattern in _CLICKBAIT)

    indicators: Dict[str, float] = {}
    if sensational:
        indicators["sensational_headline"] = min(35.0, sensational * 18.0)
    if clickbait:
        indicators["clickbait_phrasing"] = 40.0
    if _EXCESSIVE_PUNCTUATION.search(view.title):
        indicators["excessive_punctuation"] = 15.0

    evidence = [view.title[:100]] if indicators and view.title else []
    evidence += extract_evidence(view.sentences, SENSATIONAL_HEADLINE_WORDS, limit=2)
    return AxisResult(score=sum(indicators.values()), indicators=indicators, evidence=evidence)


AXIS_ANALYZERS: Dict[str, Callable[[TextView], AxisResult]] = {
    "political": analyze_political,
    "regional": analyze_regional,
    "sentiment": analyze_sentiment_intensity,
    "source_reliability": analyze_source_reliability,
    "representation": analyze_representation,
    "language": analyze_language,
}


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class BiasScorer(Protocol):
    name: str

    def score(self, title: object, content: object) -> BiasIndicators:
        ...


def _assemble(axes: Dict[str, AxisResult], strategy: str, medium_floor: float) -> BiasIndicators:
    raw = {name: round(clamp(axes[name].score, 0.0, 100.0), 2) for name in AXIS_NAMES}
    overall = round(sum(raw.values()) / len(raw), 2)
    details = {
        name: AxisDetail(
            score=raw[name],
            explanation=explain(name, raw[name]),
            evidence=axes[name].evidence,
            indicators=axes[name].indicators,
        )
        for name in AXIS_NAMES
    }
    return BiasIndicators(
        **{name: round(raw[name] / 100, 4) for name in AXIS_NAMES},
        overall_score=overall,
        classification=classify(overall, medium_floor),
        strategy=strategy,
        details=details,
    )


class RefinedBiasScorer:
    """Per-axis analyzers with evidence; request-time and reanalysis paths."""

    name = "refined"

    def __init__(self, medium_floor: float = MEDIUM_BIAS_FLOOR):
        self.medium_floor = medium_floor

    def score(self, title: object, content: object) -> BiasIndicators:
        view = TextView.build(title, content)
        axes = {name: analyzer(view) for name, analyzer in AXIS_ANALYZERS.items()}
        return _assemble(axes, self.name, self.medium_floor)


BASELINE_START: Dict[str, float] = {
    "political": 50.0,
    "regional": 45.0,
    "sentiment": 50.0,
    "source_reliability": 55.0,
    "representation": 45.0,
    "language": 60.0,
}

BASELINE_INCREMENT: Dict[str, float] = {
    "political": 10.0,
    "regional": 8.0,
    "sentiment": 10.0,
    "source_reliability": 10.0,
    "representation": 8.0,
    "language": 12.0,
}


def length_multiplier(word_count: int) -> float:
    if word_count < 100:
        return 1.0
    if word_count < 300:
        return 1.1
    return 1.2


class BaselineBiasScorer:
    """Fixed-start scoring used while ingesting feeds."""

    name = "baseline"

    def __init__(self, medium_floor: float = MEDIUM_BIAS_FLOOR, apply_length_multiplier: bool = True):
        self.medium_floor = medium_floor
        self.apply_length_multiplier = apply_length_multiplier

    def score(self, title: object, content: object) -> BiasIndicators:
        view = TextView.build(title, content)
        multiplier = length_multiplier(view.word_count) if self.apply_length_multiplier else 1.0

        axes: Dict[str, AxisResult] = {}
        for name in AXIS_NAMES:
            matched = matched_phrases(view.lower_text, BASELINE_CATEGORIES[name])
            indicators = {"baseline": BASELINE_START[name]}
            if matched:
                indicators["category_present"] = BASELINE_INCREMENT[name]
            if multiplier != 1.0:
                indicators["length_multiplier"] = multiplier
            score = (BASELINE_START[name] + indicators.get("category_present", 0.0)) * multiplier
            axes[name] = AxisResult(
                score=min(100.0, score),
                indicators=indicators,
                evidence=extract_evidence(view.sentences, matched) if matched else [],
            )
        return _assemble(axes, self.name, self.medium_floor)


def get_scorer(strategy: str, medium_floor: Optional[float] = None) -> BiasScorer:
    """Look up a strategy by name ("refined" or "baseline")."""
    floor = MEDIUM_BIAS_FLOOR if medium_floor is None else medium_floor
    if strategy == RefinedBiasScorer.name:
        return RefinedBiasScorer(floor)
    if strategy == BaselineBiasScorer.name:
        return BaselineBiasScorer(floor)
    raise ValueError(f"Unknown bias strategy: {strategy}")

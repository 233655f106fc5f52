"""
Tests for the lexicon extractor.
"""

import pytest

from newslens.core.sentiment import (
    LEXICON_POLICY,
    REQUEST_POLICY,
    analyze,
    compute_confidence,
    detect_language,
    label_sentiment,
    score_sentiment,
)
from newslens.models import Entity


class TestSentimentScoring:
    def test_headline_without_sentiment_words_is_neutral(self):
        result = analyze(
            "The state government has announced a new infrastructure plan for roads and bridges.",
            "Government Announces New Infrastructure Plan",
        )

        assert result.label == "neutral"
        assert result.score == pytest.approx(0.0)
        assert result.positive_count == 0
        assert result.negative_count == 0

    def test_positive_text(self):
        result = analyze("The project was a great success and residents welcomed the excellent progress.")

        assert result.positive_count == 5
        assert result.score == pytest.approx(5 / 8, abs=1e-4)
        assert result.label == "positive"

    def test_negative_text(self):
        result = analyze("Corruption scam deepens crisis after project failure")

        assert result.negative_count == 4
        assert result.score == pytest.approx(-4 / 7, abs=1e-4)
        assert result.label == "negative"

    def test_balanced_counts_are_mixed(self):
        result = analyze("Good progress on roads but the water problem remains a concern")

        assert result.positive_count == 2
        assert result.negative_count == 2
        assert result.label == "mixed"

    def test_single_hits_stay_neutral_not_mixed(self):
        result = analyze("A good start with one problem")

        assert result.label == "neutral"

    def test_policies_keep_distinct_thresholds(self):
        assert label_sentiment(0.25, 1, 0, LEXICON_POLICY) == "positive"
        assert label_sentiment(0.25, 1, 0, REQUEST_POLICY) == "neutral"
        assert label_sentiment(-0.25, 0, 1, LEXICON_POLICY) == "negative"
        assert label_sentiment(-0.25, 0, 1, REQUEST_POLICY) == "neutral"

    def test_policies_keep_distinct_smoothing(self):
        assert score_sentiment(1, 0, LEXICON_POLICY) == pytest.approx(0.25)
        assert score_sentiment(1, 0, REQUEST_POLICY) == pytest.approx(0.5)
        assert score_sentiment(0, 0, LEXICON_POLICY) == 0.0
        assert score_sentiment(0, 0, REQUEST_POLICY) == 0.0

    def test_indic_words_match_as_substrings(self):
        result = analyze("राज्य में विकास और प्रगति हुई")

        assert result.positive_count == 2
        assert result.label == "positive"


class TestBoundsAndMalformedInput:
    @pytest.mark.parametrize("text", [None, "", "   ", b"\xff\xfe\xfd", 12345, "!!!???"])
    def test_never_raises_and_defaults_to_neutral(self, text):
        result = analyze(text, title=None)

        assert result.score == 0.0
        assert result.label == "neutral"
        assert 0.0 <= result.confidence <= 0.95

    def test_empty_text_confidence(self):
        assert compute_confidence(0, 0) == 0.6

    def test_confidence_is_capped(self):
        assert compute_confidence(10, 10) == 0.95
        assert compute_confidence(1, 100) == pytest.approx(0.62)

    def test_score_is_clamped(self):
        text = " ".join(["excellent"] * 500)
        result = analyze(text)

        assert -1.0 <= result.score <= 1.0
        assert result.confidence <= 0.95


class TestLanguageDetection:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("सरकार ने नई योजना की घोषणा की", "Hindi"),
            ("சென்னையில் புதிய மெட்ரோ பாதை", "Tamil"),
            ("హైదరాబాద్ మెట్రో విస్తరణ", "Telugu"),
            ("কলকাতায় নতুন সেতু", "Bengali"),
            ("ಬೆಂಗಳೂರು ಮೆಟ್ರೋ", "Kannada"),
            ("Metro expansion in Chennai", "English"),
            ("", "English"),
        ],
    )
    def test_script_ranges(self, text, expected):
        assert detect_language(text) == expected

    def test_majority_script_wins(self):
        assert detect_language("Metro मेट्रो விரிவாக்கம் பணிகள் தொடக்கம்") == "Tamil"


class TestTopicsKeywordsEntities:
    def test_topics_are_matched_anywhere(self):
        result = analyze(
            "Hospital staff and farmers joined the rally.",
            "Metro fares cut",
        )

        assert "Health" in result.topics
        assert "Agriculture" in result.topics
        assert "Metro/Transport" in result.topics

    def test_general_topic_when_nothing_matches(self):
        assert analyze("Nothing of note here", "Quiet day").topics == ["General"]

    def test_keywords_are_frequency_ranked_and_deterministic(self):
        text = "water supply water tanks water board supply lines"
        first = analyze(text)
        second = analyze(text)

        assert first.keywords == second.keywords
        assert first.keywords[0] == "water"
        assert first.keywords[1] == "supply"
        assert len(first.keywords) <= 8

    def test_keywords_skip_stopwords_and_short_tokens(self):
        result = analyze("the and for with those into road")

        assert result.keywords == ["road"]

    def test_entities(self):
        result = analyze(
            "The Chief Minister visited Bengaluru and the Ministry of Health announced new funds."
        )

        assert Entity("Ministry of Health", "ORGANIZATION") in result.entities
        assert Entity("Bengaluru", "LOCATION") in result.entities
        assert Entity("Chief Minister", "PERSON") in result.entities
        assert all(entity.text != "Ministry" for entity in result.entities)

    def test_entities_are_capped(self):
        names = ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf",
                 "Hotel", "Juliet", "Kilo", "Lima", "Mike", "Oscar", "Papa"]
        text = " and ".join(f"{name} spoke" for name in names)

        assert len(analyze(text).entities) == 10

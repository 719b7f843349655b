"""Tests for mood detection."""

import json
from unittest.mock import Mock

from tunetalk.domain.ai.client import AIError
from tunetalk.domain.mood.detector import (
    NEUTRAL_ANALYSIS,
    MoodDetector,
    build_mood_prompt,
    fallback_mood_detection,
    keyword_scores,
)
from tunetalk.domain.mood.keywords import MOOD_EMOTION_TAGS
from tunetalk.domain.mood.models import MOOD_ORDER, Mood


class TestFallbackMoodDetection:
    """Tests for keyword-based fallback detection."""

    def test_detects_dominant_mood(self) -> None:
        analysis = fallback_mood_detection("I cry, the tears fall, I'm broken and hurt")

        assert analysis.primary_mood is Mood.SAD
        assert analysis.mood_score == 0.4
        assert analysis.emotion_tags == MOOD_EMOTION_TAGS[Mood.SAD]

    def test_is_deterministic(self) -> None:
        """Same text always yields the same analysis."""
        text = "I remember the old days and my childhood memories"

        results = {fallback_mood_detection(text) for _ in range(20)}

        assert len(results) == 1
        assert results.pop().primary_mood is Mood.NOSTALGIC

    def test_ties_go_to_first_mood_in_order(self) -> None:
        """sad and happy both score 0.3; sad is declared first."""
        analysis = fallback_mood_detection("cry tears broken joy smile laugh")

        assert analysis.primary_mood is Mood.SAD
        assert analysis.mood_score == 0.3

    def test_weak_signal_is_neutral(self) -> None:
        """A score at or below 0.2 is not trusted."""
        assert fallback_mood_detection("I cry and feel broken") == NEUTRAL_ANALYSIS

    def test_no_keywords_is_neutral(self) -> None:
        analysis = fallback_mood_detection("hello there")

        assert analysis.primary_mood is Mood.CALM
        assert analysis.mood_score == 0.3
        assert analysis.emotion_tags == ("neutral", "uncertain")

    def test_keyword_scores_follow_mood_order(self) -> None:
        assert list(keyword_scores("anything")) == list(MOOD_ORDER)


class TestMoodDetector:
    """Tests for MoodDetector with and without an AI collaborator."""

    def test_without_ai_uses_fallback(self) -> None:
        detector = MoodDetector(ai=None)

        assert detector.detect("hello there") == NEUTRAL_ANALYSIS

    def test_uses_ai_json(self) -> None:
        ai = Mock()
        ai.generate_response.return_value = json.dumps(
            {"primary_mood": "anxious", "mood_score": 0.85, "emotion_tags": ["worried"]}
        )
        detector = MoodDetector(ai=ai)

        analysis = detector.detect("Exams tomorrow and I can't stop worrying")

        assert analysis.primary_mood is Mood.ANXIOUS
        assert analysis.mood_score == 0.85
        assert analysis.emotion_tags == ("worried",)
        prompt = ai.generate_response.call_args.args[0]
        assert "Exams tomorrow" in prompt
        assert "Respond ONLY with valid JSON" in prompt

    def test_ai_error_falls_back(self) -> None:
        ai = Mock()
        ai.generate_response.side_effect = AIError("offline")
        detector = MoodDetector(ai=ai)

        analysis = detector.detect("I cry, the tears fall, I'm broken and hurt")

        assert analysis.primary_mood is Mood.SAD

    def test_unparsable_output_falls_back(self) -> None:
        ai = Mock()
        ai.generate_response.return_value = "You seem a bit down today."
        detector = MoodDetector(ai=ai)

        assert detector.detect("hello there") == NEUTRAL_ANALYSIS

    def test_mood_outside_enum_falls_back(self) -> None:
        ai = Mock()
        ai.generate_response.return_value = '{"primary_mood": "melancholy", "mood_score": 0.9}'
        detector = MoodDetector(ai=ai)

        assert detector.detect("hello there") == NEUTRAL_ANALYSIS

    def test_prompt_lists_all_moods(self) -> None:
        prompt = build_mood_prompt("hi")

        for mood in MOOD_ORDER:
            assert mood.value in prompt

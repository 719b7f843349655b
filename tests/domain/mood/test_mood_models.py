"""Tests for mood models, keyword tables and suggestions."""

import pytest

from tunetalk.domain.library.models import from_spotify_track
from tunetalk.domain.mood import (
    MOOD_ORDER,
    Mood,
    MoodAnalysis,
    MoodBasedRecommendation,
    empathetic_response,
    general_mood_suggestions,
    match_reason,
    parse_mood_payload,
)


class TestMoodAnalysis:
    def test_score_outside_unit_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            MoodAnalysis(primary_mood=Mood.SAD, mood_score=1.5)

    def test_to_dict_uses_mood_name(self) -> None:
        analysis = MoodAnalysis(primary_mood=Mood.LONELY, mood_score=0.8, emotion_tags=("isolated",))

        assert analysis.to_dict() == {
            "primary_mood": "lonely",
            "mood_score": 0.8,
            "emotion_tags": ["isolated"],
        }

    def test_mood_order_is_fixed(self) -> None:
        assert [m.value for m in MOOD_ORDER] == [
            "sad", "happy", "angry", "lonely", "anxious", "nostalgic", "energetic", "calm",
        ]


class TestParseMoodPayload:
    """Tests for parse_mood_payload."""

    def test_valid_payload(self) -> None:
        analysis, themes = parse_mood_payload(
            {
                "primary_mood": "Happy",
                "mood_score": 0.9,
                "emotion_tags": ["Joyful", " excited "],
                "themes": ["Summer"],
            }
        )

        assert analysis.primary_mood is Mood.HAPPY
        assert analysis.mood_score == 0.9
        assert analysis.emotion_tags == ("joyful", "excited")
        assert themes == ["summer"]

    def test_score_is_clamped(self) -> None:
        analysis, _ = parse_mood_payload({"primary_mood": "sad", "mood_score": 7})

        assert analysis.mood_score == 1.0

    def test_unknown_mood_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown primary_mood"):
            parse_mood_payload({"primary_mood": "ecstatic", "mood_score": 0.5})

    def test_missing_mood_rejected(self) -> None:
        with pytest.raises(ValueError):
            parse_mood_payload({"mood_score": 0.5})

    @pytest.mark.parametrize("score", [None, "high", True])
    def test_non_numeric_score_rejected(self, score) -> None:
        with pytest.raises(ValueError):
            parse_mood_payload({"primary_mood": "sad", "mood_score": score})

    def test_tags_must_be_strings(self) -> None:
        with pytest.raises(ValueError):
            parse_mood_payload({"primary_mood": "sad", "mood_score": 0.5, "emotion_tags": "sad"})


class TestTemplates:
    """Tests for empathetic responses and match reasons."""

    def test_empathetic_response_per_mood(self) -> None:
        assert empathetic_response(Mood.HAPPY).startswith("It's wonderful that you're feeling so positive!")

    def test_empathetic_response_default_template(self) -> None:
        """Moods missing from the table get the generic template."""
        assert empathetic_response(Mood.CALM, responses={}).startswith("I can sense you're feeling calm.")

    def test_match_reason_without_themes(self) -> None:
        assert match_reason(Mood.SAD, ()) == "This song captures feelings of sadness and melancholy"

    def test_match_reason_mentions_two_themes(self) -> None:
        reason = match_reason(Mood.LONELY, ("distance", "night", "rain"))

        assert reason.endswith(" through themes of distance and night")

    def test_match_reason_single_theme(self) -> None:
        assert match_reason(Mood.CALM, ("ocean",)).endswith(" through themes of ocean")


class TestGeneralMoodSuggestions:
    """Tests for the fixed suggestion table."""

    def test_happy_has_ten_suggestions(self) -> None:
        suggestions = general_mood_suggestions(Mood.HAPPY, 10)

        assert len(suggestions) == 10
        assert all(isinstance(s, MoodBasedRecommendation) for s in suggestions)
        assert all(s.track.source == "spotify" for s in suggestions)

    def test_limit_truncates(self) -> None:
        assert len(general_mood_suggestions(Mood.HAPPY, 3)) == 3

    def test_lonely_table_order(self) -> None:
        names = [s.track.name for s in general_mood_suggestions(Mood.LONELY)]

        assert names == ["Somewhere I Belong", "Mad World", "The Sound of Silence"]

    def test_missing_mood_falls_back_to_sad(self) -> None:
        assert general_mood_suggestions(Mood.CALM) == general_mood_suggestions(Mood.SAD)

    def test_recommendation_to_dict(self) -> None:
        rec = MoodBasedRecommendation(
            track=from_spotify_track(id="1", name="Hurt", artist="Johnny Cash"),
            mood_score=0.95,
        )

        assert rec.to_dict() == {
            "track": {"id": "1", "name": "Hurt", "artist": "Johnny Cash", "source": "spotify"},
            "mood_score": 0.95,
        }

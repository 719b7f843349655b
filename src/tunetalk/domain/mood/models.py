"""
Mood domain models.

Contains data structures for detected moods, per-song lyric analyses,
recommendations and the persisted mood history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from tunetalk.domain.library.models import UnifiedTrack


class Mood(str, Enum):
    """The fixed set of moods a query or song can be assigned.

    Declaration order is the tie-break order used by keyword scoring.
    """

    SAD = "sad"
    HAPPY = "happy"
    ANGRY = "angry"
    LONELY = "lonely"
    ANXIOUS = "anxious"
    NOSTALGIC = "nostalgic"
    ENERGETIC = "energetic"
    CALM = "calm"


MOOD_ORDER: Tuple[Mood, ...] = tuple(Mood)


@dataclass(frozen=True)
class MoodAnalysis:
    """Detected mood with confidence and free-form emotion tags."""

    primary_mood: Mood
    mood_score: float  # Confidence 0-1
    emotion_tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 0.0 <= self.mood_score <= 1.0:
            raise ValueError(f"mood_score must be within [0, 1], got {self.mood_score}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary_mood": self.primary_mood.value,
            "mood_score": self.mood_score,
            "emotion_tags": list(self.emotion_tags),
        }


@dataclass(frozen=True)
class LyricsMoodRecord:
    """Cached lyrics of one song with their mood analysis and themes."""

    lyrics: str
    mood: MoodAnalysis
    themes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MoodBasedRecommendation:
    """A single mood-matched song recommendation."""

    track: UnifiedTrack
    mood_score: float  # How well it matches (0-1)
    match_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"track": self.track.to_dict(), "mood_score": self.mood_score}
        if self.match_reason:
            data["match_reason"] = self.match_reason
        return data


@dataclass(frozen=True)
class MoodHistoryEntry:
    """One line of a user's mood history log."""

    timestamp: datetime
    mood: str
    song_ids: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "detected_mood": self.mood,
            "played_songs": list(self.song_ids),
        }


def _clamp_score(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"mood_score must be a number, got {value!r}")
    return min(1.0, max(0.0, float(value)))


def _string_list(value: Any, name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{name} must be a list of strings, got {value!r}")
    return tuple(v.strip().lower() for v in value if v.strip())


def parse_mood_payload(data: Dict[str, Any]) -> Tuple[MoodAnalysis, List[str]]:
    """Validate a structured mood answer from the AI collaborator.

    Expected keys: ``primary_mood`` (one of Mood), ``mood_score`` (number,
    clamped to [0, 1]), ``emotion_tags`` (list of strings) and, for song
    analyses, ``themes`` (list of strings).

    Returns:
        Tuple of (analysis, themes)

    Raises:
        ValueError: If the payload does not have the expected shape
    """
    raw_mood = data.get("primary_mood")
    if not isinstance(raw_mood, str):
        raise ValueError(f"primary_mood missing or not a string: {raw_mood!r}")
    try:
        mood = Mood(raw_mood.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown primary_mood: {raw_mood!r}")

    analysis = MoodAnalysis(
        primary_mood=mood,
        mood_score=_clamp_score(data.get("mood_score")),
        emotion_tags=_string_list(data.get("emotion_tags"), "emotion_tags"),
    )
    return analysis, list(_string_list(data.get("themes"), "themes"))

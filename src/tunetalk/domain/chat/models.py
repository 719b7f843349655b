"""
Chat domain models.

ChatResponse is the discriminated result of every chat query: ``type`` tells
the client which optional payload (song query, mood analysis,
recommendations) to expect.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from tunetalk.domain.mood.models import MoodAnalysis, MoodBasedRecommendation

RESPONSE_TEXT = "text"
RESPONSE_SONG_REQUEST = "song_request"
RESPONSE_MOOD_RECOMMENDATION = "mood_recommendation"


class Intent(str, Enum):
    """Classified purpose of a chat query."""

    SONG_REQUEST = "song_request"
    MOOD_QUERY = "mood_query"
    LYRICS_QUERY = "lyrics_query"
    GENERAL_QUERY = "general_query"


@dataclass(frozen=True)
class SongQuery:
    """A parsed 'play X by Y' request."""

    query: str
    artist: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {"query": self.query}
        if self.artist:
            data["artist"] = self.artist
        return data


@dataclass(frozen=True)
class MoodRecommendations:
    """Library matches plus general per-mood suggestions."""

    from_library: List[MoodBasedRecommendation] = field(default_factory=list)
    suggested: List[MoodBasedRecommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_library": [r.to_dict() for r in self.from_library],
            "suggested": [r.to_dict() for r in self.suggested],
        }


@dataclass(frozen=True)
class ChatResponse:
    """Answer to one chat query.

    Attributes:
        type: 'text', 'song_request' or 'mood_recommendation'
        answer: Natural-language answer (may be empty when error is set)
        error: Error message for failed collaborator calls
        song_query: Present for 'song_request'
        mood_analysis: Present whenever a mood was detected
        recommendations: Present for 'mood_recommendation'
    """

    type: str = RESPONSE_TEXT
    answer: str = ""
    error: str = ""
    song_query: Optional[SongQuery] = None
    mood_analysis: Optional[MoodAnalysis] = None
    recommendations: Optional[MoodRecommendations] = None

    @classmethod
    def text(cls, answer: str, mood_analysis: Optional[MoodAnalysis] = None) -> "ChatResponse":
        return cls(type=RESPONSE_TEXT, answer=answer, mood_analysis=mood_analysis)

    @classmethod
    def failure(cls, error: str) -> "ChatResponse":
        return cls(type=RESPONSE_TEXT, error=error)

    @classmethod
    def song_request(cls, answer: str, song_query: SongQuery) -> "ChatResponse":
        return cls(type=RESPONSE_SONG_REQUEST, answer=answer, song_query=song_query)

    @classmethod
    def mood_recommendation(
        cls,
        answer: str,
        mood_analysis: MoodAnalysis,
        recommendations: MoodRecommendations,
    ) -> "ChatResponse":
        return cls(
            type=RESPONSE_MOOD_RECOMMENDATION,
            answer=answer,
            mood_analysis=mood_analysis,
            recommendations=recommendations,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; ``answer`` is always present, other payloads only when set."""
        data: Dict[str, Any] = {"type": self.type, "answer": self.answer}
        if self.error:
            data["error"] = self.error
        if self.song_query is not None:
            data["song_query"] = self.song_query.to_dict()
        if self.mood_analysis is not None:
            data["mood_analysis"] = self.mood_analysis.to_dict()
        if self.recommendations is not None:
            data["recommendations"] = self.recommendations.to_dict()
        return data

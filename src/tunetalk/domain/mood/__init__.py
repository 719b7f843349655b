"""Mood domain - detection, lyric mood cache, matching and history.

This domain handles:
- Mood detection from chat messages (AI first, keyword fallback)
- Read-through caching of per-song lyric mood analyses
- Concurrent matching of library tracks against a detected mood
- Fixed per-mood suggestions
- The per-user mood history log
"""

from .cache import LyricsMoodCache, cache_key
from .detector import MoodDetector, fallback_mood_detection
from .history import MoodHistoryError, MoodHistoryStore
from .keywords import empathetic_response, match_reason
from .matcher import SongMatcher, calculate_mood_match, rank_recommendations
from .models import (
    MOOD_ORDER,
    LyricsMoodRecord,
    Mood,
    MoodAnalysis,
    MoodBasedRecommendation,
    MoodHistoryEntry,
    parse_mood_payload,
)
from .suggestions import general_mood_suggestions

__all__ = [
    "LyricsMoodCache",
    "cache_key",
    "MoodDetector",
    "fallback_mood_detection",
    "MoodHistoryError",
    "MoodHistoryStore",
    "empathetic_response",
    "match_reason",
    "SongMatcher",
    "calculate_mood_match",
    "rank_recommendations",
    "MOOD_ORDER",
    "LyricsMoodRecord",
    "Mood",
    "MoodAnalysis",
    "MoodBasedRecommendation",
    "MoodHistoryEntry",
    "parse_mood_payload",
    "general_mood_suggestions",
]

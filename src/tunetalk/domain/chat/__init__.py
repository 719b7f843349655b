"""Chat domain - query classification and response orchestration.

This domain handles:
- Intent classification (song request, mood, lyrics, general)
- Song/artist extraction from song requests
- Dispatching each intent to its handler and assembling ChatResponse
"""

from .classifier import QueryClassifier, extract_song_request
from .models import ChatResponse, Intent, MoodRecommendations, SongQuery
from .orchestrator import ChatOrchestrator

__all__ = [
    "QueryClassifier",
    "extract_song_request",
    "ChatResponse",
    "Intent",
    "MoodRecommendations",
    "SongQuery",
    "ChatOrchestrator",
]

"""Application service container for explicit dependency passing.

This module provides the AppServices dataclass that owns every long-lived
collaborator of the process (state store, caches, AI client, ...). It is
built once at startup and handed to whatever needs it, instead of modules
reaching for global state.
"""

from dataclasses import dataclass
from typing import Optional

from tunetalk.core.config import Config, get_mood_history_dir
from tunetalk.domain.ai.client import AIResponder, build_ai_responder
from tunetalk.domain.chat.classifier import QueryClassifier
from tunetalk.domain.chat.orchestrator import ChatOrchestrator, LibrarySource
from tunetalk.domain.lyrics.provider import LrclibLyricsProvider, LyricsProvider
from tunetalk.domain.mood.cache import LyricsMoodCache
from tunetalk.domain.mood.detector import MoodDetector
from tunetalk.domain.mood.history import MoodHistoryStore
from tunetalk.domain.mood.matcher import SongMatcher
from tunetalk.domain.playback.state import MusicStateStore


@dataclass
class AppServices:
    """Process-wide collaborators, wired together once.

    Attributes:
        config: Application configuration
        state: Now-playing and play-history store
        ai: Text-generation collaborator
        lyrics_provider: Lyrics source
        lyrics_cache: Lyrics/mood read-through cache
        mood_history: Per-user mood log
        orchestrator: Chat entry point
    """

    config: Config
    state: MusicStateStore
    ai: AIResponder
    lyrics_provider: LyricsProvider
    lyrics_cache: LyricsMoodCache
    mood_history: MoodHistoryStore
    orchestrator: ChatOrchestrator

    @classmethod
    def create(
        cls,
        config: Config,
        ai: Optional[AIResponder] = None,
        lyrics_provider: Optional[LyricsProvider] = None,
        library_source: Optional[LibrarySource] = None,
    ) -> "AppServices":
        """Build all services from configuration.

        Args:
            config: Application configuration
            ai: Override the configured AI responder
            lyrics_provider: Override the LRCLIB provider
            library_source: Candidate tracks for mood matching
                (default: recent play history)

        Returns:
            Fully wired AppServices
        """
        state = MusicStateStore(history_size=config.state.history_size)
        ai = ai or build_ai_responder(config.ai)
        lyrics_provider = lyrics_provider or LrclibLyricsProvider(config.lyrics)
        lyrics_cache = LyricsMoodCache(lyrics_provider, ai, max_entries=config.cache.max_entries)
        mood_history = MoodHistoryStore(
            get_mood_history_dir(config),
            retention_days=config.mood_history.retention_days,
        )

        orchestrator = ChatOrchestrator(
            state=state,
            classifier=QueryClassifier(config.classifier.personal_indicators),
            detector=MoodDetector(ai),
            matcher=SongMatcher(
                lyrics_cache,
                max_workers=config.matcher.max_workers,
                threshold=config.matcher.match_threshold,
                timeout=config.matcher.timeout_seconds,
            ),
            ai=ai,
            lyrics_provider=lyrics_provider,
            lyrics_cache=lyrics_cache,
            mood_history=mood_history,
            library_source=library_source,
            library_limit=config.matcher.library_limit,
            suggestion_limit=config.matcher.suggestion_limit,
            default_user_id=config.mood_history.default_user_id,
        )

        return cls(
            config=config,
            state=state,
            ai=ai,
            lyrics_provider=lyrics_provider,
            lyrics_cache=lyrics_cache,
            mood_history=mood_history,
            orchestrator=orchestrator,
        )

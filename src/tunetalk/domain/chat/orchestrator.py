"""
Chat orchestration: classify a query and dispatch it to its handler.

Every path returns a ChatResponse. Collaborator failures become a degraded
answer or the response's ``error`` field, never an exception to the caller.
"""

from typing import Callable, List, Optional, Sequence

from loguru import logger

from tunetalk.domain.ai.client import AIError, AIResponder
from tunetalk.domain.library.models import UnifiedTrack
from tunetalk.domain.lyrics.exceptions import LyricsError
from tunetalk.domain.lyrics.provider import LyricsProvider
from tunetalk.domain.mood.cache import LyricsMoodCache
from tunetalk.domain.mood.detector import MoodDetector
from tunetalk.domain.mood.history import MoodHistoryError, MoodHistoryStore
from tunetalk.domain.mood.keywords import empathetic_response
from tunetalk.domain.mood.matcher import SongMatcher
from tunetalk.domain.mood.suggestions import general_mood_suggestions
from tunetalk.domain.playback.state import MusicStateStore, NowPlayingState

from .classifier import QueryClassifier, extract_song_request
from .models import ChatResponse, Intent, MoodRecommendations, SongQuery

LibrarySource = Callable[[], Sequence[UnifiedTrack]]

EMPTY_QUERY_ERROR = "Query cannot be empty"

NO_SONG_PLAYING = (
    "No song is currently playing. Please play a song first, and I'll be able "
    "to help you understand its lyrics and meaning."
)

NOT_MUSIC_RELATED = (
    "I can only help with questions about music, songs, lyrics, and artists. "
    "Please ask me something related to music!"
)

GENERAL_PROMPT = (
    "Answer this music question in EXACTLY 2 short paragraphs. "
    "Keep it brief - maximum 4-5 sentences per paragraph: {query}"
)


def song_request_answer(song_query: SongQuery) -> str:
    if song_query.artist:
        return (
            f'I\'m searching for "{song_query.query}" by {song_query.artist} '
            "in your playlists. Let me show you what I found!"
        )
    return f'I\'m searching for "{song_query.query}" in your playlists. Let me show you what I found!'


class ChatOrchestrator:
    """Top-level coordinator for chat queries.

    All collaborators are injected; the orchestrator holds no state of its own.

    Args:
        state: Shared now-playing / history store
        classifier: Intent classifier
        detector: Mood detector for mood queries
        matcher: Library matcher for mood queries
        ai: Text-generation collaborator
        lyrics_provider: Lyrics source for the current song
        lyrics_cache: Lyrics/mood cache, consulted before the provider
        mood_history: Per-user mood log
        library_source: Callable returning candidate tracks for mood matching
            (defaults to the distinct tracks of the play history)
        library_limit: Maximum library recommendations
        suggestion_limit: Maximum general suggestions
        default_user_id: User recorded in mood history when none is given
    """

    def __init__(
        self,
        state: MusicStateStore,
        classifier: QueryClassifier,
        detector: MoodDetector,
        matcher: SongMatcher,
        ai: AIResponder,
        lyrics_provider: LyricsProvider,
        lyrics_cache: LyricsMoodCache,
        mood_history: MoodHistoryStore,
        library_source: Optional[LibrarySource] = None,
        library_limit: int = 5,
        suggestion_limit: int = 10,
        default_user_id: str = "default_user",
    ):
        self.state = state
        self.classifier = classifier
        self.detector = detector
        self.matcher = matcher
        self.ai = ai
        self.lyrics_provider = lyrics_provider
        self.lyrics_cache = lyrics_cache
        self.mood_history = mood_history
        self.library_source = library_source or state.recent_tracks
        self.library_limit = library_limit
        self.suggestion_limit = suggestion_limit
        self.default_user_id = default_user_id

    def respond(self, query: str, user_id: Optional[str] = None) -> ChatResponse:
        """Answer one chat query."""
        if not query or not query.strip():
            return ChatResponse.failure(EMPTY_QUERY_ERROR)

        intent = self.classifier.classify(query)
        if intent is Intent.SONG_REQUEST:
            return self.handle_song_request(query)
        if intent is Intent.MOOD_QUERY:
            return self.handle_mood_query(query, user_id or self.default_user_id)
        if intent is Intent.LYRICS_QUERY:
            return self.handle_lyrics_query(query)
        return self.handle_general_query(query)

    def handle_song_request(self, query: str) -> ChatResponse:
        song_query = extract_song_request(query)
        logger.info(f"Song request: {song_query.query!r} artist={song_query.artist!r}")
        return ChatResponse.song_request(song_request_answer(song_query), song_query)

    def handle_mood_query(self, query: str, user_id: str) -> ChatResponse:
        try:
            mood = self.detector.detect(query)
        except Exception:
            logger.exception("Mood detection failed, answering as a general query")
            return self.handle_general_query(query)

        try:
            candidates = list(self.library_source())
        except Exception:
            logger.exception("Failed to load library tracks")
            return ChatResponse.text(
                f"I understand you're feeling {mood.primary_mood.value}, but I'm having "
                "trouble accessing your music library right now. Please try again later.",
                mood_analysis=mood,
            )

        from_library = self.matcher.match(mood, candidates, self.library_limit)
        suggested = general_mood_suggestions(mood.primary_mood, self.suggestion_limit)

        self._record_mood(user_id, mood.primary_mood.value, [r.track.id for r in from_library])

        logger.info(
            f"Mood detected: {mood.primary_mood.value}, library matches: {len(from_library)}, "
            f"general suggestions: {len(suggested)}"
        )
        return ChatResponse.mood_recommendation(
            empathetic_response(mood.primary_mood),
            mood,
            MoodRecommendations(from_library=from_library, suggested=suggested),
        )

    def handle_lyrics_query(self, query: str) -> ChatResponse:
        snapshot = self.state.get()
        if snapshot.is_empty:
            return ChatResponse.text(NO_SONG_PLAYING)

        song_info = snapshot.info
        try:
            lyrics = self._current_lyrics(snapshot)
        except LyricsError as e:
            logger.warning(f"Could not fetch lyrics for {song_info}: {e}")
            return ChatResponse.text(
                f'I can see that you\'re currently playing "{song_info}", but I couldn\'t '
                f"fetch the lyrics: {e}\n\nYou can still ask me general questions about "
                "this song or artist!"
            )

        try:
            answer = self.ai.analyze_lyrics(query, lyrics, song_info)
        except AIError as e:
            logger.error(f"Lyrics analysis failed: {e}")
            return ChatResponse.failure(f"Error analyzing lyrics: {e}")
        return ChatResponse.text(answer)

    def handle_general_query(self, query: str) -> ChatResponse:
        if not self.classifier.is_music_related(query):
            return ChatResponse.text(NOT_MUSIC_RELATED)

        try:
            answer = self.ai.generate_response(GENERAL_PROMPT.format(query=query))
        except AIError as e:
            logger.error(f"General query failed: {e}")
            return ChatResponse.failure(f"Error generating response: {e}")
        return ChatResponse.text(answer)

    def _current_lyrics(self, snapshot: NowPlayingState) -> str:
        """Lyrics of the snapshot's track: stored, cached, or freshly fetched.

        Everything is read from the one snapshot so a concurrent track change
        cannot pair one song's identity with another song's lyrics.

        Raises:
            LyricsError: If the provider cannot supply them
        """
        if snapshot.lyrics:
            return snapshot.lyrics

        track = snapshot.track
        record = self.lyrics_cache.get(track.name, track.artist)
        lyrics = record.lyrics if record is not None else self.lyrics_provider.get_lyrics(track.name, track.artist)

        self.state.now_playing.update_lyrics(lyrics, track_id=track.id)
        return lyrics

    def _record_mood(self, user_id: str, mood: str, song_ids: List[str]) -> None:
        try:
            self.mood_history.append(user_id, mood, song_ids)
        except (MoodHistoryError, ValueError):
            logger.exception(f"Failed to save mood history for {user_id}")

"""
Read-through cache of song lyrics and their mood analysis.

Lookups that miss fetch lyrics from the LyricsProvider, ask the AI
collaborator for a structured mood analysis and store the result. Provider
and AI calls run outside the lock so distinct keys are fetched in parallel;
if two threads race on the same key the first stored record wins.
"""

import threading
from collections import OrderedDict
from typing import Optional

from loguru import logger

from tunetalk.domain.ai.client import AIResponder, parse_json_object
from tunetalk.domain.lyrics.provider import LyricsProvider

from .models import MOOD_ORDER, LyricsMoodRecord, Mood, MoodAnalysis, parse_mood_payload

NEUTRAL_SONG_MOOD = MoodAnalysis(primary_mood=Mood.CALM, mood_score=0.5, emotion_tags=("uncertain",))
NEUTRAL_THEMES = ("general",)


def cache_key(track_name: str, artist: str) -> str:
    """Case-folded '<name>-<artist>' key.

    Hyphens are not escaped, so ("a-b", "c") and ("a", "b-c") share a key
    and therefore one cached record.
    """
    return f"{track_name.lower()}-{artist.lower()}"


def build_lyrics_mood_prompt(lyrics: str) -> str:
    """Prompt asking for a strict-JSON mood and theme analysis of lyrics."""
    moods = ", ".join(mood.value for mood in MOOD_ORDER)
    return f"""Analyze the mood and themes of these song lyrics. Return a JSON response with:
- primary_mood: The main emotion (must be one of: {moods})
- mood_score: Confidence score between 0 and 1
- emotion_tags: Array of related emotions
- themes: Array of main themes in the song

Important: Respond ONLY with valid JSON.

Lyrics:
{lyrics}"""


class LyricsMoodCache:
    """LRU-bounded read-through cache of LyricsMoodRecord by (track, artist)."""

    def __init__(
        self,
        provider: LyricsProvider,
        ai: AIResponder,
        max_entries: Optional[int] = 512,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1 (or None for unbounded)")
        self.provider = provider
        self.ai = ai
        self.max_entries = max_entries
        self._lock = threading.Lock()
        self._records: "OrderedDict[str, LyricsMoodRecord]" = OrderedDict()

    def get(self, track_name: str, artist: str) -> Optional[LyricsMoodRecord]:
        """Return the cached record without fetching, or None."""
        key = cache_key(track_name, artist)
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                self._records.move_to_end(key)
            return record

    def get_or_fetch(self, track_name: str, artist: str) -> LyricsMoodRecord:
        """Return the cached record, fetching and analyzing it on a miss.

        Raises:
            LyricsError: If the provider cannot supply lyrics (propagated as-is)
            AIError: If the AI collaborator call itself fails
        """
        record = self.get(track_name, artist)
        if record is not None:
            logger.debug(f"Lyrics cache hit: {track_name} by {artist}")
            return record

        logger.debug(f"Lyrics cache miss: {track_name} by {artist}")
        lyrics = self.provider.get_lyrics(track_name, artist)
        record = self._analyze(lyrics)
        return self._store(cache_key(track_name, artist), record)

    def invalidate(self, track_name: str, artist: str) -> bool:
        """Drop one entry; returns True if it was cached."""
        with self._lock:
            return self._records.pop(cache_key(track_name, artist), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _analyze(self, lyrics: str) -> LyricsMoodRecord:
        response = self.ai.generate_response(build_lyrics_mood_prompt(lyrics))
        try:
            analysis, themes = parse_mood_payload(parse_json_object(response))
        except ValueError as e:
            logger.warning(f"Unparsable lyrics mood analysis, storing neutral record: {e}")
            return LyricsMoodRecord(lyrics=lyrics, mood=NEUTRAL_SONG_MOOD, themes=NEUTRAL_THEMES)
        return LyricsMoodRecord(lyrics=lyrics, mood=analysis, themes=tuple(themes))

    def _store(self, key: str, record: LyricsMoodRecord) -> LyricsMoodRecord:
        with self._lock:
            existing = self._records.get(key)
            if existing is not None:
                self._records.move_to_end(key)
                return existing
            self._records[key] = record
            if self.max_entries is not None:
                while len(self._records) > self.max_entries:
                    evicted, _ = self._records.popitem(last=False)
                    logger.debug(f"Lyrics cache evicted {evicted}")
            return record

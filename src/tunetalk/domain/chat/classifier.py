"""
Query classification for the chat endpoint.

Intent is decided by a fixed cascade, first match wins:

1. Song request   - an imperative/request phrase ("play ", "find ", ...)
2. Lyrics         - the query mentions "lyric"
3. Mood           - an emotional keyword plus a personal indicator ("i ", "my ", ...)
4. Lyrics         - a current-song reference ("this song", "what does", ...)
5. General        - everything else

An explicit "lyric" mention outranks mood cues, so "I feel like this song's
lyrics are sad" is a lyrics question rather than a request for recommendations.
"""

import re
from typing import Iterable, Optional, Sequence, Tuple

from loguru import logger

from .models import Intent, SongQuery

SONG_REQUEST_PATTERNS: Tuple[str, ...] = (
    "play ", "can you play", "find ", "search for",
    "put on ", "i want to hear", "i want to listen to",
    "show me ", "look for ", "get me ",
)

# Prefixes stripped from the song part of "<prefix><song> by <artist>"
ARTIST_REQUEST_PREFIXES: Tuple[str, ...] = (
    "play ", "find ", "search for ", "put on ", "show me ", "look for ", "get me ",
)

SONG_ONLY_PREFIXES: Tuple[str, ...] = ARTIST_REQUEST_PREFIXES + (
    "can you play ", "i want to hear ", "i want to listen to ",
)

SONG_ONLY_SUFFIXES: Tuple[str, ...] = (" please", " song")

EMOTIONAL_KEYWORDS: Tuple[str, ...] = (
    "feel", "feeling", "mood", "emotion", "sad", "happy", "angry", "upset",
    "depressed", "anxious", "lonely", "alone", "stressed", "overwhelmed",
    "excited", "joy", "love", "hate", "frustrated", "confused", "lost",
    "hurt", "broken", "empty", "hopeless", "worried", "scared", "afraid",
    "nervous", "calm", "peaceful", "nostalgic", "miss", "remember",
    "belong", "disconnected", "isolated", "abandoned", "rejected",
    "won", "victory", "celebrate", "celebration", "achievement", "accomplished",
    "tournament", "competition", "winning", "winner",
)

DEFAULT_PERSONAL_INDICATORS: Tuple[str, ...] = (
    "i ", "i'm", "i am", "me ", "my ", "feel", "feeling",
)

LYRICS_MARKER = "lyric"

CURRENT_SONG_PATTERNS: Tuple[str, ...] = (
    "current song", "current track", "now playing", "playing now",
    "this song", "this track", "about the song", "about the track",
    "song mean", "track mean", "lyrics mean", "song about",
    "tell me about", "what does", "explain the", "meaning of",
)

MUSIC_KEYWORDS: Tuple[str, ...] = (
    "music", "song", "artist", "band", "album", "track",
    "genre", "musician", "singer", "composer", "producer",
    "concert", "performance", "instrument", "guitar", "piano",
    "drums", "vocal", "melody", "harmony", "rhythm",
    "beat", "tempo", "chord", "scale", "key",
    "recording", "studio", "label", "release", "single",
    "ep", "mixtape", "soundtrack", "cover", "remix",
    "acoustic", "electric", "classical", "jazz", "rock",
    "pop", "hip hop", "rap", "country", "folk",
    "blues", "metal", "punk", "indie", "electronic",
)

# Keywords must start a word: "ep" matches "an EP" but not "sleep"
_MUSIC_KEYWORD_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in MUSIC_KEYWORDS) + r")"
)

_QUOTES = "\"'"

_BY_SEPARATOR_RE = re.compile(r" by ", re.IGNORECASE)


def _contains_any(text: str, patterns: Iterable[str]) -> Optional[str]:
    """First pattern found in text, or None."""
    for pattern in patterns:
        if pattern in text:
            return pattern
    return None


def _strip_prefix(text: str, prefixes: Sequence[str]) -> Tuple[str, bool]:
    lowered = text.lower()
    for prefix in prefixes:
        if lowered.startswith(prefix):
            return text[len(prefix):].strip(), True
    return text, False


def extract_song_request(query: str) -> SongQuery:
    """Split a song request into song title and optional artist.

    Matching is case-insensitive; the returned values keep the caller's
    casing. A single ``" by "`` separates song from artist. Without an
    artist, request prefixes, quotes and a trailing "please"/"song" are
    stripped. If nothing applies the whole query is the song.
    """
    text = query.strip()

    parts = _BY_SEPARATOR_RE.split(text)
    if len(parts) == 2:
        song_part, artist_part = (part.strip() for part in parts)

        song_part, _ = _strip_prefix(song_part, ARTIST_REQUEST_PREFIXES)
        song_part = song_part.strip(_QUOTES)
        artist_part = artist_part.strip(_QUOTES)

        if song_part and artist_part:
            return SongQuery(query=song_part, artist=artist_part)

    song, matched = _strip_prefix(text, SONG_ONLY_PREFIXES)
    if matched:
        song = song.strip(_QUOTES)
        for suffix in SONG_ONLY_SUFFIXES:
            if song.lower().endswith(suffix):
                song = song[: -len(suffix)]
        if song:
            return SongQuery(query=song)

    return SongQuery(query=text)


class QueryClassifier:
    """Assigns each chat query to exactly one Intent."""

    def __init__(self, personal_indicators: Optional[Sequence[str]] = None):
        indicators = (
            DEFAULT_PERSONAL_INDICATORS if personal_indicators is None else personal_indicators
        )
        self.personal_indicators = tuple(i.lower() for i in indicators)

    def classify(self, query: str) -> Intent:
        if self.is_song_request(query):
            intent = Intent.SONG_REQUEST
        elif LYRICS_MARKER in query.lower():
            intent = Intent.LYRICS_QUERY
        elif self.contains_emotional_content(query):
            intent = Intent.MOOD_QUERY
        elif self.is_lyrics_query(query):
            intent = Intent.LYRICS_QUERY
        else:
            intent = Intent.GENERAL_QUERY

        logger.debug(f"Classified {query!r} as {intent.value}")
        return intent

    def is_song_request(self, query: str) -> bool:
        return _contains_any(query.lower(), SONG_REQUEST_PATTERNS) is not None

    def contains_emotional_content(self, query: str) -> bool:
        """Emotional keyword and personal indicator both present."""
        lowered = query.lower()
        keyword = _contains_any(lowered, EMOTIONAL_KEYWORDS)
        if keyword is None:
            return False
        indicator = _contains_any(lowered, self.personal_indicators)
        if indicator is None:
            return False
        logger.debug(f"Emotional content in {query!r} (keyword: {keyword}, indicator: {indicator})")
        return True

    def is_lyrics_query(self, query: str) -> bool:
        lowered = query.lower()
        return LYRICS_MARKER in lowered or _contains_any(lowered, CURRENT_SONG_PATTERNS) is not None

    def is_music_related(self, query: str) -> bool:
        return _MUSIC_KEYWORD_RE.search(query.lower()) is not None

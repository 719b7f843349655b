"""
Playback state management for TuneTalk

Holds "what is playing now" and "what played recently". Both stores are shared
by every request thread; each guards its own data with a lock and publishes
immutable snapshots, so a reader never sees a half-applied update.
"""

import threading
from collections import deque
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from tunetalk.domain.library.models import UnifiedTrack

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class NowPlayingState:
    """Snapshot of the currently playing track.

    Lyrics belong to the track they were fetched for and are reset whenever
    the track changes.
    """

    track: Optional[UnifiedTrack] = None
    lyrics: str = ""
    updated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.track is None or not self.track.id or not self.track.name

    @property
    def info(self) -> str:
        """'<name> by <artist>', or empty string if name or artist is unset."""
        if self.track is None or not self.track.name or not self.track.artist:
            return ""
        return f"{self.track.name} by {self.track.artist}"

    def to_dict(self) -> Dict[str, Any]:
        track = self.track
        data: Dict[str, Any] = {
            "track_id": track.id if track else "",
            "track_name": track.name if track else "",
            "artist": track.artist if track else "",
            "album": (track.album or "") if track else "",
            "source": track.source if track else "",
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if self.lyrics:
            data["lyrics"] = self.lyrics
        return data


@dataclass(frozen=True)
class PlayHistoryEntry:
    """A single song in play history."""

    track: UnifiedTrack
    played_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "track_id": self.track.id,
            "track_name": self.track.name,
            "artist": self.track.artist,
            "album": self.track.album or "",
            "source": self.track.source,
            "played_at": self.played_at.isoformat(),
        }


class NowPlaying:
    """Thread-safe holder of the single currently playing track."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._lock = threading.Lock()
        self._state = NowPlayingState()

    def update(self, track: UnifiedTrack) -> None:
        """Replace the current track, clearing lyrics and stamping the time."""
        new_state = NowPlayingState(track=track, lyrics="", updated_at=self._clock())
        with self._lock:
            self._state = new_state

    def update_lyrics(self, lyrics: str, track_id: Optional[str] = None) -> bool:
        """Attach lyrics to the current track without touching its identity.

        Args:
            lyrics: Lyrics text
            track_id: If given, only apply when this track is still current
                (a slow lyrics fetch must not land on the next song)

        Returns:
            True if the lyrics were stored
        """
        with self._lock:
            current = self._state
            if track_id is not None and (current.track is None or current.track.id != track_id):
                logger.debug(f"Dropping lyrics for {track_id}: track changed")
                return False
            self._state = replace(current, lyrics=lyrics)
            return True

    def get(self) -> NowPlayingState:
        """Return the current snapshot.

        Snapshots are frozen and replaced wholesale on every update, so the
        returned object never changes under the caller.
        """
        with self._lock:
            return self._state

    def is_empty(self) -> bool:
        return self.get().is_empty

    def get_info(self) -> str:
        return self.get().info


class PlayHistory:
    """Thread-safe, bounded, most-recent-first play history."""

    def __init__(self, max_items: int = 10, clock: Clock = utc_now):
        if max_items < 0:
            raise ValueError("max_items must not be negative")
        self._clock = clock
        self._lock = threading.Lock()
        self._items: deque[PlayHistoryEntry] = deque(maxlen=max_items)

    @property
    def max_items(self) -> int:
        return self._items.maxlen

    def add(self, track: UnifiedTrack) -> PlayHistoryEntry:
        """Prepend a new entry; the oldest entry falls off once full."""
        entry = PlayHistoryEntry(track=track, played_at=self._clock())
        with self._lock:
            self._items.appendleft(entry)
        return entry

    def get_items(self) -> List[PlayHistoryEntry]:
        """Return a copy of all history items, most recent first."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class MusicStateStore:
    """Now-playing and play-history stores behind one facade.

    Constructed once per process and handed to every consumer.
    """

    def __init__(self, history_size: int = 10, clock: Clock = utc_now):
        self.now_playing = NowPlaying(clock=clock)
        self.play_history = PlayHistory(max_items=history_size, clock=clock)

    def update(self, track: UnifiedTrack) -> None:
        """Record a play-update event: new current track plus a history entry."""
        self.now_playing.update(track)
        self.play_history.add(track)
        logger.info(f"Now playing updated ({track.source}): {track.name} by {track.artist}")

    def get(self) -> NowPlayingState:
        return self.now_playing.get()

    def is_playing(self) -> bool:
        return not self.now_playing.is_empty()

    def history(self) -> List[PlayHistoryEntry]:
        return self.play_history.get_items()

    def current_song_info(self) -> str:
        return self.now_playing.get_info()

    def recent_tracks(self) -> List[UnifiedTrack]:
        """Distinct tracks from history, most recent first."""
        seen = set()
        tracks = []
        for entry in self.history():
            if entry.track.id in seen:
                continue
            seen.add(entry.track.id)
            tracks.append(entry.track)
        return tracks

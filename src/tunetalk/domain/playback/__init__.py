"""Playback domain - now-playing and recent history state."""

from .state import (
    MusicStateStore,
    NowPlaying,
    NowPlayingState,
    PlayHistory,
    PlayHistoryEntry,
    utc_now,
)

__all__ = [
    "MusicStateStore",
    "NowPlaying",
    "NowPlayingState",
    "PlayHistory",
    "PlayHistoryEntry",
    "utc_now",
]

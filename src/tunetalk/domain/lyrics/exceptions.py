"""Lyrics-specific exceptions for error handling."""


class LyricsError(Exception):
    """Base exception for lyrics lookups."""

    pass


class LyricsNotFoundError(LyricsError):
    """Raised when no lyrics exist for the requested track."""

    def __init__(self, track: str, artist: str, message: str = None):
        self.track = track
        self.artist = artist
        super().__init__(message or f"No lyrics found for {track} by {artist}")


class LyricsNetworkError(LyricsError):
    """Raised when the lyrics service cannot be reached or answers badly."""

    pass

"""Lyrics domain - provider contract, LRCLIB client and errors."""

from .exceptions import LyricsError, LyricsNetworkError, LyricsNotFoundError
from .provider import LrclibLyricsProvider, LyricsProvider

__all__ = [
    "LyricsError",
    "LyricsNetworkError",
    "LyricsNotFoundError",
    "LrclibLyricsProvider",
    "LyricsProvider",
]

"""
Lyrics provider contract and an LRCLIB-backed implementation.
"""

from typing import Optional, Protocol

import requests
from loguru import logger

from tunetalk.core.config import LyricsConfig

from .exceptions import LyricsNetworkError, LyricsNotFoundError

INSTRUMENTAL_MARKER = "[au: instrumental]"


class LyricsProvider(Protocol):
    """Fetches plain lyrics for a track.

    Failures propagate as LyricsError subclasses.
    """

    def get_lyrics(self, track: str, artist: str) -> str:
        ...


class LrclibLyricsProvider:
    """LyricsProvider backed by the public LRCLIB API."""

    def __init__(self, config: Optional[LyricsConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or LyricsConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

    def get_lyrics(self, track: str, artist: str) -> str:
        """Fetch plain lyrics, trying an exact match before a search.

        Raises:
            LyricsNotFoundError: If nothing (or only an instrumental) is found
            LyricsNetworkError: On transport or HTTP errors
        """
        # 1) Try /api/get (best match by metadata)
        data = self._get_json("/api/get", {"track_name": track, "artist_name": artist})
        lyrics = self._plain_lyrics(data) if isinstance(data, dict) else None
        if lyrics:
            return lyrics

        # 2) Fallback to /api/search (query = "artist title")
        items = self._get_json(
            "/api/search",
            {"query": f"{artist} {track}", "artist_name": artist, "limit": 10},
        )
        if isinstance(items, list):
            for item in items:
                lyrics = self._plain_lyrics(item)
                if lyrics:
                    logger.debug(f"LRCLIB search hit for {track} by {artist}")
                    return lyrics

        raise LyricsNotFoundError(track, artist)

    def _get_json(self, path: str, params: dict):
        try:
            r = self.session.get(
                f"{self.base_url}{path}", params=params, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            raise LyricsNetworkError(f"Lyrics request failed: {e}") from e

        if r.status_code == 404:
            return None
        if r.status_code != 200:
            raise LyricsNetworkError(f"LRCLIB failed with status {r.status_code}: {r.text[:200]}")

        try:
            return r.json()
        except ValueError as e:
            raise LyricsNetworkError(f"Invalid JSON from LRCLIB: {e}") from e

    @staticmethod
    def _plain_lyrics(data: dict) -> Optional[str]:
        if data.get("instrumental"):
            return None
        synced = (data.get("syncedLyrics") or "").strip()
        if synced == INSTRUMENTAL_MARKER:
            return None
        return (data.get("plainLyrics") or "").strip() or None

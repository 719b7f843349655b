"""
Music library domain models.

Contains the source-agnostic track shape every provider is normalized into.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

SOURCE_SPOTIFY = "spotify"
SOURCE_YOUTUBE = "youtube"

YOUTUBE_MUSIC_URL = "https://music.youtube.com/watch?v="


@dataclass(frozen=True)
class UnifiedTrack:
    """Represents a track from any supported music service.

    Immutable once constructed: state stores and the matcher share instances
    across threads without copying.
    """

    id: str
    name: str
    artist: str
    source: str  # 'spotify' | 'youtube' | ...
    album: Optional[str] = None
    preview_url: Optional[str] = None
    external_url: Optional[str] = None
    duration: Optional[int] = None  # in seconds
    image_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        """'<name> by <artist>', or just the name when artist is unknown."""
        if self.artist:
            return f"{self.name} by {self.artist}"
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict, omitting unset optional fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}


def from_spotify_track(
    id: str,
    name: str,
    artist: str,
    album: Optional[str] = None,
    preview_url: Optional[str] = None,
    external_url: Optional[str] = None,
    duration: Optional[int] = None,
    image_url: Optional[str] = None,
) -> UnifiedTrack:
    """Create a UnifiedTrack from Spotify track data."""
    return UnifiedTrack(
        id=id,
        name=name,
        artist=artist,
        album=album,
        source=SOURCE_SPOTIFY,
        preview_url=preview_url,
        external_url=external_url,
        duration=duration,
        image_url=image_url,
    )


def from_youtube_track(
    id: str,
    name: str,
    artist: str,
    album: Optional[str] = None,
    image_url: Optional[str] = None,
    duration: Optional[int] = None,
) -> UnifiedTrack:
    """Create a UnifiedTrack from YouTube track data.

    The external URL always points at YouTube Music for the video id.
    """
    return UnifiedTrack(
        id=id,
        name=name,
        artist=artist,
        album=album,
        source=SOURCE_YOUTUBE,
        duration=duration,
        image_url=image_url,
        external_url=YOUTUBE_MUSIC_URL + id,
    )

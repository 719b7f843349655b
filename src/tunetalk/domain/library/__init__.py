"""Library domain - normalized track model and lookup contract."""

from .models import (
    SOURCE_SPOTIFY,
    SOURCE_YOUTUBE,
    UnifiedTrack,
    from_spotify_track,
    from_youtube_track,
)
from .provider import TrackLookup, TrackLookupError

__all__ = [
    "SOURCE_SPOTIFY",
    "SOURCE_YOUTUBE",
    "UnifiedTrack",
    "from_spotify_track",
    "from_youtube_track",
    "TrackLookup",
    "TrackLookupError",
]

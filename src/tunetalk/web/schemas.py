from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, RootModel

from tunetalk.domain.library.models import (
    UnifiedTrack,
    from_spotify_track,
    from_youtube_track,
)


class SpotifyTrackPayload(BaseModel):
    source: Literal["spotify"]
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    artist: str = ""
    album: Optional[str] = None
    preview_url: Optional[str] = None
    external_url: Optional[str] = None
    duration: Optional[int] = None  # seconds
    image_url: Optional[str] = None

    def to_track(self) -> UnifiedTrack:
        return from_spotify_track(
            id=self.id,
            name=self.name,
            artist=self.artist,
            album=self.album,
            preview_url=self.preview_url,
            external_url=self.external_url,
            duration=self.duration,
            image_url=self.image_url,
        )


class YouTubeTrackPayload(BaseModel):
    source: Literal["youtube"]
    id: str = Field(min_length=1)  # Video id
    name: str = Field(min_length=1)
    artist: str = ""
    album: Optional[str] = None
    image_url: Optional[str] = None
    duration: Optional[int] = None  # seconds

    def to_track(self) -> UnifiedTrack:
        return from_youtube_track(
            id=self.id,
            name=self.name,
            artist=self.artist,
            album=self.album,
            image_url=self.image_url,
            duration=self.duration,
        )


# Payloads without a known `source` are rejected
NowPlayingPayload = Annotated[
    Union[SpotifyTrackPayload, YouTubeTrackPayload],
    Field(discriminator="source"),
]


class NowPlayingRequest(RootModel[NowPlayingPayload]):
    """Body of POST /now-playing, tagged by `source`."""

    def to_track(self) -> UnifiedTrack:
        return self.root.to_track()


class NowPlayingResponse(BaseModel):
    track_id: str
    track_name: str
    artist: str
    album: str = ""
    source: str
    updated_at: Optional[str] = None
    lyrics: Optional[str] = None


class HistoryEntryResponse(BaseModel):
    track_id: str
    track_name: str
    artist: str
    album: str = ""
    source: str
    played_at: str


class ChatRequest(BaseModel):
    query: str
    user_id: Optional[str] = None


class MoodHistoryEntryResponse(BaseModel):
    timestamp: str
    detected_mood: str
    played_songs: list[str]

"""Now-playing and play-history endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from tunetalk.context import AppServices

from ..deps import get_services
from ..schemas import HistoryEntryResponse, NowPlayingRequest, NowPlayingResponse

router = APIRouter()


@router.post("/now-playing", response_model=NowPlayingResponse)
def update_now_playing(
    payload: NowPlayingRequest,
    services: AppServices = Depends(get_services),
) -> dict:
    """Record a play-update event from a Spotify or YouTube client."""
    track = payload.to_track()
    services.state.update(track)
    logger.debug(f"POST /now-playing accepted {track.source}:{track.id}")
    return services.state.get().to_dict()


@router.get("/now-playing", response_model=NowPlayingResponse)
def get_now_playing(services: AppServices = Depends(get_services)) -> dict:
    snapshot = services.state.get()
    if snapshot.is_empty:
        raise HTTPException(status_code=404, detail="No song is currently playing")
    return snapshot.to_dict()


@router.get("/history", response_model=list[HistoryEntryResponse])
def get_history(services: AppServices = Depends(get_services)) -> list[dict]:
    """Play history, most recent first."""
    return [entry.to_dict() for entry in services.state.history()]

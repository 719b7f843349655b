"""Chat and mood-history endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from tunetalk.context import AppServices
from tunetalk.domain.mood.history import MoodHistoryError

from ..deps import get_services
from ..schemas import ChatRequest, MoodHistoryEntryResponse

router = APIRouter()


@router.post("/chat")
def chat(request: ChatRequest, services: AppServices = Depends(get_services)) -> dict:
    """Answer a chat query.

    The body is always a ChatResponse; collaborator failures are reported in
    its ``error`` field, not as HTTP errors.
    """
    if not request.query.strip():
        raise HTTPException(status_code=400, detail="Query cannot be empty")

    response = services.orchestrator.respond(request.query, user_id=request.user_id)
    return response.to_dict()


@router.get("/mood-history/{user_id}", response_model=list[MoodHistoryEntryResponse])
def get_mood_history(user_id: str, services: AppServices = Depends(get_services)) -> list[dict]:
    try:
        entries = services.mood_history.read(user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid user id")
    except MoodHistoryError as e:
        logger.error(f"Failed to read mood history for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to read mood history")
    return [entry.to_dict() for entry in entries]

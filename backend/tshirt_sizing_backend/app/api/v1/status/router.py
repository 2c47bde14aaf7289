"""Service status endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tshirt_sizing_backend.app.services.boards import BoardsRepository, get_boards_repository
from tshirt_sizing_backend.app.services.realtime import RealtimeHub
from tshirt_sizing_backend.app.services.realtime.socketio import get_realtime_hub

router = APIRouter(tags=["status"])


class StatusResponse(BaseModel):
    status: str = "ok"
    boards: int
    connections: int


def get_repo() -> BoardsRepository:
    """Get repository dependency."""
    return get_boards_repository()


def get_hub() -> RealtimeHub:
    """Get realtime hub dependency."""
    return get_realtime_hub()


@router.get("/status", response_model=StatusResponse)
def get_status(
    repo: BoardsRepository = Depends(get_repo),
    hub: RealtimeHub = Depends(get_hub),
) -> StatusResponse:
    """Live board count and room memberships."""
    repo.purge_expired()
    return StatusResponse(boards=repo.count(), connections=hub.connection_count())

"""Boards API router."""

from __future__ import annotations

from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from tshirt_sizing_backend.app.core.config import get_settings
from tshirt_sizing_backend.app.services.boards import (
    BoardCapacityError,
    BoardSnapshot,
    BoardsError,
    BoardsService,
    CreatedBoard,
    InitiativeSnapshot,
    InvalidInputError,
    NotFoundError,
    VotingClosedError,
    get_boards_service,
)
from tshirt_sizing_backend.app.services.boards.schemas import CamelModel

router = APIRouter(prefix="/boards", tags=["boards"])


# ========== Request/Response Models ==========

class CreateBoardRequest(CamelModel):
    """Request to create a board."""
    title: Optional[str] = None
    creator_name: Optional[str] = None


class JoinBoardRequest(CamelModel):
    """Request to join a board."""
    participant_name: Optional[str] = None


class JoinBoardResponse(CamelModel):
    participant_id: str


class CreateInitiativeRequest(BaseModel):
    """Request to add an initiative."""
    title: Optional[str] = None
    description: Optional[str] = None
    creator: Optional[str] = None


class InitiativeResponse(BaseModel):
    initiative: InitiativeSnapshot


class VoteRequest(CamelModel):
    """Request to cast a vote."""
    participant_id: Optional[str] = None
    size: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


# ========== Helper Functions ==========

def get_service() -> BoardsService:
    """Get service dependency."""
    return get_boards_service()


def _raise_http(exc: BoardsError) -> NoReturn:
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, InvalidInputError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, VotingClosedError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if isinstance(exc, BoardCapacityError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    raise exc


def _base_url(request: Request) -> str:
    configured = get_settings().server.public_base_url
    return configured or str(request.base_url)


# ========== Board Endpoints ==========

@router.post("", response_model=CreatedBoard)
async def create_board(
    request: Request,
    payload: Optional[CreateBoardRequest] = None,
    service: BoardsService = Depends(get_service),
) -> CreatedBoard:
    """Create a board; the caller becomes its creator participant."""
    payload = payload or CreateBoardRequest()
    try:
        return await service.create_board(payload.title, payload.creator_name, _base_url(request))
    except BoardsError as exc:
        _raise_http(exc)


@router.get("/{board_id}", response_model=BoardSnapshot)
def get_board(
    board_id: str,
    service: BoardsService = Depends(get_service),
) -> BoardSnapshot:
    """Get the full board snapshot."""
    try:
        return service.get_board_snapshot(board_id)
    except BoardsError as exc:
        _raise_http(exc)


@router.post("/{board_id}/join", response_model=JoinBoardResponse)
async def join_board(
    board_id: str,
    payload: Optional[JoinBoardRequest] = None,
    service: BoardsService = Depends(get_service),
) -> JoinBoardResponse:
    """Join a board as a new participant."""
    payload = payload or JoinBoardRequest()
    try:
        participant = await service.join_board(board_id, payload.participant_name)
    except BoardsError as exc:
        _raise_http(exc)
    return JoinBoardResponse(participant_id=participant.id)


# ========== Initiative Endpoints ==========

@router.post("/{board_id}/initiatives", response_model=InitiativeResponse)
async def add_initiative(
    board_id: str,
    payload: Optional[CreateInitiativeRequest] = None,
    service: BoardsService = Depends(get_service),
) -> InitiativeResponse:
    """Append an initiative to the board."""
    payload = payload or CreateInitiativeRequest()
    try:
        initiative = await service.add_initiative(
            board_id,
            title=payload.title,
            description=payload.description,
            creator=payload.creator,
        )
    except BoardsError as exc:
        _raise_http(exc)
    return InitiativeResponse(initiative=initiative)


@router.post("/{board_id}/initiatives/{initiative_id}/vote", response_model=SuccessResponse)
async def cast_vote(
    board_id: str,
    initiative_id: str,
    payload: Optional[VoteRequest] = None,
    service: BoardsService = Depends(get_service),
) -> SuccessResponse:
    """Cast or replace the participant's vote on an initiative."""
    payload = payload or VoteRequest()
    try:
        await service.cast_vote(board_id, initiative_id, payload.participant_id, payload.size)
    except BoardsError as exc:
        _raise_http(exc)
    return SuccessResponse()


# ========== Voting Round Endpoints ==========

@router.post("/{board_id}/reveal", response_model=SuccessResponse)
async def reveal_votes(
    board_id: str,
    service: BoardsService = Depends(get_service),
) -> SuccessResponse:
    """Reveal all current votes."""
    try:
        await service.reveal_votes(board_id)
    except BoardsError as exc:
        _raise_http(exc)
    return SuccessResponse()


@router.post("/{board_id}/start-vote", response_model=SuccessResponse)
async def start_new_vote(
    board_id: str,
    service: BoardsService = Depends(get_service),
) -> SuccessResponse:
    """Clear all votes and start a new round."""
    try:
        await service.start_new_vote(board_id)
    except BoardsError as exc:
        _raise_http(exc)
    return SuccessResponse()


@router.post("/{board_id}/reset", response_model=SuccessResponse)
async def reset_votes(
    board_id: str,
    service: BoardsService = Depends(get_service),
) -> SuccessResponse:
    """Legacy alias of start-vote."""
    try:
        await service.reset_votes(board_id)
    except BoardsError as exc:
        _raise_http(exc)
    return SuccessResponse()

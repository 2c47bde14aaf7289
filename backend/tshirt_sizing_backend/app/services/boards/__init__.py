"""Boards service module: in-memory store, lifecycle operations, snapshots."""

from .errors import (
    BoardCapacityError,
    BoardNotFoundError,
    BoardsError,
    InitiativeNotFoundError,
    InvalidInputError,
    NotFoundError,
    ParticipantNotFoundError,
    VotingClosedError,
)
from .repository import (
    Board,
    BoardsRepository,
    Initiative,
    Participant,
    Vote,
    VoteSize,
    get_boards_repository,
)
from .schemas import BoardSnapshot, CreatedBoard, InitiativeSnapshot, ParticipantSnapshot
from .service import BoardsService, get_boards_service

__all__ = [
    "Board",
    "Initiative",
    "Participant",
    "Vote",
    "VoteSize",
    "BoardsRepository",
    "BoardsService",
    "get_boards_repository",
    "get_boards_service",
    # Snapshots
    "BoardSnapshot",
    "CreatedBoard",
    "InitiativeSnapshot",
    "ParticipantSnapshot",
    # Errors
    "BoardsError",
    "NotFoundError",
    "BoardNotFoundError",
    "InitiativeNotFoundError",
    "ParticipantNotFoundError",
    "InvalidInputError",
    "VotingClosedError",
    "BoardCapacityError",
]

"""Boards lifecycle service: create, join, add initiatives, vote, reveal, reset."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional
from uuid import uuid4

from tshirt_sizing_backend.app.core.config import BoardSettings, get_settings
from tshirt_sizing_backend.app.services.boards.errors import (
    InitiativeNotFoundError,
    InvalidInputError,
    ParticipantNotFoundError,
    VotingClosedError,
)
from tshirt_sizing_backend.app.services.boards.events import (
    BoardEvent,
    InitiativeAdded,
    NewVoteStarted,
    ParticipantJoined,
    VotesRevealed,
    VoteSubmitted,
)
from tshirt_sizing_backend.app.services.boards.repository import (
    Board,
    BoardsRepository,
    Initiative,
    Participant,
    Vote,
    VoteSize,
)
from tshirt_sizing_backend.app.services.boards.schemas import (
    BoardSnapshot,
    CreatedBoard,
    InitiativeSnapshot,
    ParticipantSnapshot,
)
from tshirt_sizing_backend.app.services.realtime import RealtimeHub

logger = logging.getLogger(__name__)

DEFAULT_BOARD_TITLE = "T-shirt Sizing Session"
DEFAULT_PARTICIPANT_NAME = "Anonymous"
DEFAULT_INITIATIVE_TITLE = "Untitled Initiative"
DEFAULT_INITIATIVE_DESCRIPTION = "T-shirt size estimation for this initiative"


def _new_id() -> str:
    return str(uuid4())


class BoardsService:
    """Applies board mutations and fans the resulting event out to the board's room.

    Every mutation runs to completion under the board's lock and captures the
    event payload there; the broadcast happens after the lock is released.
    """

    def __init__(
        self,
        repository: BoardsRepository,
        hub: RealtimeHub,
        settings: Optional[BoardSettings] = None,
    ) -> None:
        self.repo = repository
        self.hub = hub
        self.settings = settings or BoardSettings()

    def _snapshot(self, board: Board) -> BoardSnapshot:
        snapshot = BoardSnapshot.from_board(board)
        if self.settings.redact_votes_before_reveal and not board.votes_revealed:
            return snapshot.redacted()
        return snapshot

    async def _publish(self, board_id: str, event: BoardEvent) -> None:
        await self.hub.broadcast(board_id, event)

    async def create_board(
        self,
        title: Optional[str],
        creator_name: Optional[str],
        base_url: str,
    ) -> CreatedBoard:
        """Create a board with its creator as first participant and one default initiative."""
        title = title or DEFAULT_BOARD_TITLE
        creator_name = creator_name or DEFAULT_PARTICIPANT_NAME
        creator_id = _new_id()

        def populate(board: Board) -> None:
            board.participants[creator_id] = Participant(
                id=creator_id,
                name=creator_name,
                joined_at=board.created_at,
                is_creator=True,
            )
            board.initiatives.append(
                Initiative(
                    id=_new_id(),
                    title=board.title,
                    description=DEFAULT_INITIATIVE_DESCRIPTION,
                    creator=board.creator_name,
                    created_at=board.created_at,
                )
            )

        board = self.repo.create_board(
            title=title,
            creator_name=creator_name,
            creator_participant_id=creator_id,
            populate=populate,
        )

        logger.info("board_created board_id=%s creator_participant_id=%s", board.id, creator_id)
        return CreatedBoard(
            board_id=board.id,
            creator_participant_id=creator_id,
            shareable_link=f"{base_url.rstrip('/')}/board/{board.id}",
        )

    def get_board_snapshot(self, board_id: str) -> BoardSnapshot:
        """Return the full board as a JSON-ready snapshot.

        Raises:
            BoardNotFoundError: If the board is unknown
        """
        with self.repo.locked_board(board_id) as board:
            return self._snapshot(board)

    async def join_board(self, board_id: str, participant_name: Optional[str]) -> ParticipantSnapshot:
        """Add a non-creator participant and announce it to the room."""
        with self.repo.locked_board(board_id) as board:
            participant = Participant(
                id=_new_id(),
                name=participant_name or DEFAULT_PARTICIPANT_NAME,
                joined_at=self.repo.now(),
            )
            board.participants[participant.id] = participant
            snapshot = ParticipantSnapshot.from_participant(participant)

        logger.info("participant_joined board_id=%s participant_id=%s", board_id, snapshot.id)
        await self._publish(board_id, ParticipantJoined(participant=snapshot))
        return snapshot

    async def add_initiative(
        self,
        board_id: str,
        title: Optional[str],
        description: Optional[str],
        creator: Optional[str],
    ) -> InitiativeSnapshot:
        """Append an initiative with no votes and announce it to the room."""
        with self.repo.locked_board(board_id) as board:
            initiative = Initiative(
                id=_new_id(),
                title=title or DEFAULT_INITIATIVE_TITLE,
                description=description or "",
                creator=creator or "",
                created_at=self.repo.now(),
            )
            board.initiatives.append(initiative)
            snapshot = InitiativeSnapshot.from_initiative(initiative)

        logger.info("initiative_added board_id=%s initiative_id=%s", board_id, snapshot.id)
        await self._publish(board_id, InitiativeAdded(initiative=snapshot))
        return snapshot

    async def cast_vote(
        self,
        board_id: str,
        initiative_id: str,
        participant_id: Optional[str],
        size: object,
    ) -> Vote:
        """Record (or replace) a participant's vote on an initiative.

        Raises:
            BoardNotFoundError, InitiativeNotFoundError, ParticipantNotFoundError:
                If any referenced entity is unknown
            InvalidInputError: If size is not one of S, M, L, XL
            VotingClosedError: If votes are revealed and reveal locking is on
        """
        with self.repo.locked_board(board_id) as board:
            initiative = board.find_initiative(initiative_id)
            if initiative is None:
                raise InitiativeNotFoundError(initiative_id)

            participant = board.participants.get(participant_id) if participant_id else None
            if participant is None:
                raise ParticipantNotFoundError(participant_id or "")

            try:
                vote_size = VoteSize(size)
            except ValueError:
                raise InvalidInputError("Invalid size. Must be S, M, L, or XL") from None

            if self.settings.lock_votes_after_reveal and board.votes_revealed:
                raise VotingClosedError("Votes have already been revealed")

            vote = Vote(
                participant_id=participant.id,
                participant_name=participant.name,
                size=vote_size,
                voted_at=self.repo.now(),
            )
            initiative.votes[participant.id] = vote
            event = VoteSubmitted(
                initiative_id=initiative.id,
                participant_id=participant.id,
                participant_name=participant.name,
                votes_revealed=board.votes_revealed,
                board=self._snapshot(board),
            )

        logger.info(
            "vote_cast board_id=%s initiative_id=%s participant_id=%s",
            board_id,
            initiative_id,
            participant.id,
        )
        await self._publish(board_id, event)
        return vote

    async def reveal_votes(self, board_id: str) -> BoardSnapshot:
        """Mark votes revealed (idempotent) and push the full board to the room."""
        with self.repo.locked_board(board_id) as board:
            board.votes_revealed = True
            snapshot = self._snapshot(board)

        logger.info("votes_revealed board_id=%s", board_id)
        await self._publish(board_id, VotesRevealed(board=snapshot))
        return snapshot

    async def start_new_vote(self, board_id: str) -> BoardSnapshot:
        """Clear every initiative's votes, hide results, and open a new round."""
        with self.repo.locked_board(board_id) as board:
            board.votes_revealed = False
            board.voting_active = True
            for initiative in board.initiatives:
                initiative.votes.clear()
            snapshot = self._snapshot(board)

        logger.info("new_vote_started board_id=%s", board_id)
        await self._publish(board_id, NewVoteStarted(board=snapshot))
        return snapshot

    # Legacy /reset route; same semantics and event as start_new_vote.
    reset_votes = start_new_vote


@lru_cache(maxsize=1)
def get_boards_service() -> BoardsService:
    """Get boards service singleton."""
    from tshirt_sizing_backend.app.services.boards import get_boards_repository
    from tshirt_sizing_backend.app.services.realtime.socketio import get_realtime_hub

    return BoardsService(
        get_boards_repository(),
        get_realtime_hub(),
        settings=get_settings().boards,
    )

"""Board events pushed to every connection in a board's room.

Each lifecycle mutation produces exactly one of these; the event's ``name`` is
the wire event name and ``payload()`` the JSON body.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from tshirt_sizing_backend.app.services.boards.schemas import (
    BoardSnapshot,
    CamelModel,
    InitiativeSnapshot,
    ParticipantSnapshot,
)


class BoardEventName(str, Enum):
    PARTICIPANT_JOINED = "participantJoined"
    INITIATIVE_ADDED = "initiativeAdded"
    VOTE_SUBMITTED = "voteSubmitted"
    VOTES_REVEALED = "votesRevealed"
    NEW_VOTE_STARTED = "newVoteStarted"
    # Clients subscribe to this, but no operation emits it; /reset sends newVoteStarted.
    VOTES_RESET = "votesReset"


class BoardEvent(CamelModel):
    name: ClassVar[BoardEventName]

    def payload(self) -> dict:
        return self.to_wire()


class ParticipantJoined(BoardEvent):
    name: ClassVar[BoardEventName] = BoardEventName.PARTICIPANT_JOINED

    participant: ParticipantSnapshot


class InitiativeAdded(BoardEvent):
    name: ClassVar[BoardEventName] = BoardEventName.INITIATIVE_ADDED

    initiative: InitiativeSnapshot


class VoteSubmitted(BoardEvent):
    name: ClassVar[BoardEventName] = BoardEventName.VOTE_SUBMITTED

    initiative_id: str
    participant_id: str
    participant_name: str
    has_voted: bool = True
    votes_revealed: bool
    board: BoardSnapshot


class VotesRevealed(BoardEvent):
    name: ClassVar[BoardEventName] = BoardEventName.VOTES_REVEALED

    board: BoardSnapshot


class NewVoteStarted(BoardEvent):
    name: ClassVar[BoardEventName] = BoardEventName.NEW_VOTE_STARTED

    board: BoardSnapshot

"""Pydantic snapshot schemas for boards.

Snapshots are the JSON-serializable view of a board: participant and vote
mappings are materialized as keyed objects and field names are camelCase on
the wire, matching what the browser client reads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from tshirt_sizing_backend.app.services.boards.repository import (
    Board,
    Initiative,
    Participant,
    Vote,
    VoteSize,
)


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class VoteSnapshot(CamelModel):
    participant_id: str
    participant_name: str
    size: Optional[VoteSize]
    voted_at: datetime

    @classmethod
    def from_vote(cls, vote: Vote) -> VoteSnapshot:
        return cls(
            participant_id=vote.participant_id,
            participant_name=vote.participant_name,
            size=vote.size,
            voted_at=vote.voted_at,
        )


class ParticipantSnapshot(CamelModel):
    id: str
    name: str
    joined_at: datetime
    is_creator: bool

    @classmethod
    def from_participant(cls, participant: Participant) -> ParticipantSnapshot:
        return cls(
            id=participant.id,
            name=participant.name,
            joined_at=participant.joined_at,
            is_creator=participant.is_creator,
        )


class InitiativeSnapshot(CamelModel):
    id: str
    title: str
    description: str
    creator: str
    votes: Dict[str, VoteSnapshot]
    created_at: datetime

    @classmethod
    def from_initiative(cls, initiative: Initiative) -> InitiativeSnapshot:
        return cls(
            id=initiative.id,
            title=initiative.title,
            description=initiative.description,
            creator=initiative.creator,
            votes={pid: VoteSnapshot.from_vote(vote) for pid, vote in initiative.votes.items()},
            created_at=initiative.created_at,
        )


class BoardSnapshot(CamelModel):
    id: str
    title: str
    creator_name: str
    creator_participant_id: str
    created_at: datetime
    initiatives: List[InitiativeSnapshot]
    participants: Dict[str, ParticipantSnapshot]
    votes_revealed: bool
    voting_active: bool

    @classmethod
    def from_board(cls, board: Board) -> BoardSnapshot:
        return cls(
            id=board.id,
            title=board.title,
            creator_name=board.creator_name,
            creator_participant_id=board.creator_participant_id,
            created_at=board.created_at,
            initiatives=[InitiativeSnapshot.from_initiative(i) for i in board.initiatives],
            participants={
                pid: ParticipantSnapshot.from_participant(p) for pid, p in board.participants.items()
            },
            votes_revealed=board.votes_revealed,
            voting_active=board.voting_active,
        )

    def redacted(self) -> BoardSnapshot:
        """Copy with every vote size hidden; who has voted stays visible."""
        initiatives = [
            initiative.model_copy(
                update={
                    "votes": {
                        pid: vote.model_copy(update={"size": None})
                        for pid, vote in initiative.votes.items()
                    }
                }
            )
            for initiative in self.initiatives
        ]
        return self.model_copy(update={"initiatives": initiatives})


class CreatedBoard(CamelModel):
    """Result of creating a board."""

    board_id: str
    creator_participant_id: str
    shareable_link: str

"""Exceptions raised by the boards store and lifecycle service."""

from __future__ import annotations


class BoardsError(Exception):
    """Base class for board operation failures."""


class NotFoundError(BoardsError):
    """A referenced board, initiative, or participant does not exist."""


class BoardNotFoundError(NotFoundError):
    def __init__(self, board_id: str) -> None:
        super().__init__("Board not found")
        self.board_id = board_id


class InitiativeNotFoundError(NotFoundError):
    def __init__(self, initiative_id: str) -> None:
        super().__init__("Initiative not found")
        self.initiative_id = initiative_id


class ParticipantNotFoundError(NotFoundError):
    def __init__(self, participant_id: str) -> None:
        super().__init__("Participant not found")
        self.participant_id = participant_id


class InvalidInputError(BoardsError):
    """Request data failed validation (e.g. an unknown vote size)."""


class VotingClosedError(BoardsError):
    """A vote was cast after reveal while reveal locking is enabled."""


class BoardCapacityError(BoardsError):
    """No unused board identifier could be generated."""

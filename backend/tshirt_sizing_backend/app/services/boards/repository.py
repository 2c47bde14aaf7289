"""In-memory board store.

Boards live only in this process. The store hands out board objects that the
lifecycle service mutates in place while holding the board's lock.
"""

from __future__ import annotations

import logging
import random
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache
from typing import Callable, Dict, Iterator, List, Optional

from tshirt_sizing_backend.app.core.config import get_settings
from tshirt_sizing_backend.app.services.boards.errors import (
    BoardCapacityError,
    BoardNotFoundError,
)

logger = logging.getLogger(__name__)

BOARD_ID_MIN = 100000
BOARD_ID_MAX = 999999


class VoteSize(str, Enum):
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Participant:
    """Participant entity. Never removed from its board."""

    id: str
    name: str
    joined_at: datetime
    is_creator: bool = False


@dataclass
class Vote:
    """One participant's size estimate for one initiative."""

    participant_id: str
    participant_name: str
    size: VoteSize
    voted_at: datetime


@dataclass
class Initiative:
    """Initiative entity (one item under estimation)."""

    id: str
    title: str
    description: str
    creator: str
    created_at: datetime
    votes: Dict[str, Vote] = field(default_factory=dict)


@dataclass
class Board:
    """Board aggregate."""

    id: str
    title: str
    creator_name: str
    creator_participant_id: str
    created_at: datetime
    initiatives: List[Initiative] = field(default_factory=list)
    participants: Dict[str, Participant] = field(default_factory=dict)
    votes_revealed: bool = False
    voting_active: bool = False
    last_activity_at: Optional[datetime] = None

    def find_initiative(self, initiative_id: str) -> Optional[Initiative]:
        for initiative in self.initiatives:
            if initiative.id == initiative_id:
                return initiative
        return None


class BoardsRepository:
    """Registry of live boards keyed by their 6-digit identifier."""

    def __init__(
        self,
        *,
        id_max_attempts: int = 100,
        idle_ttl_seconds: int = 0,
        clock: Callable[[], datetime] = _utcnow,
        id_generator: Optional[Callable[[], str]] = None,
    ) -> None:
        self._boards: Dict[str, Board] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.RLock()
        self._id_max_attempts = id_max_attempts
        self._idle_ttl = timedelta(seconds=idle_ttl_seconds) if idle_ttl_seconds else None
        self._clock = clock
        self._id_generator = id_generator or self._generate_board_id

    def now(self) -> datetime:
        return self._clock()

    @staticmethod
    def _generate_board_id() -> str:
        return str(random.randint(BOARD_ID_MIN, BOARD_ID_MAX))

    def _is_expired(self, board: Board, now: datetime) -> bool:
        if self._idle_ttl is None:
            return False
        last_seen = board.last_activity_at or board.created_at
        return now - last_seen > self._idle_ttl

    def _evict(self, board_id: str) -> None:
        self._boards.pop(board_id, None)
        self._locks.pop(board_id, None)
        logger.info("board_evicted board_id=%s", board_id)

    # ========== Board registry ==========

    def create_board(
        self,
        *,
        title: str,
        creator_name: str,
        creator_participant_id: str,
        populate: Optional[Callable[[Board], None]] = None,
    ) -> Board:
        """Register a board under a freshly generated, unused identifier.

        ``populate`` fills in the new board before it becomes visible to lookups.
        """
        with self._registry_lock:
            self.purge_expired()
            for _ in range(self._id_max_attempts):
                board_id = self._id_generator()
                if board_id not in self._boards:
                    break
                logger.debug("board_id_collision board_id=%s", board_id)
            else:
                raise BoardCapacityError(
                    f"Could not allocate a board id after {self._id_max_attempts} attempts"
                )

            now = self.now()
            board = Board(
                id=board_id,
                title=title,
                creator_name=creator_name,
                creator_participant_id=creator_participant_id,
                created_at=now,
                last_activity_at=now,
            )
            if populate is not None:
                populate(board)
            self._boards[board_id] = board
            self._locks[board_id] = threading.RLock()
            return board

    def get_board(self, board_id: str) -> Optional[Board]:
        """Get a live board by ID, dropping it if its idle TTL has passed."""
        with self._registry_lock:
            board = self._boards.get(board_id)
            if board is None:
                return None
            if self._is_expired(board, self.now()):
                self._evict(board_id)
                return None
            return board

    @contextmanager
    def locked_board(self, board_id: str) -> Iterator[Board]:
        """Hold the board's lock for a read-modify-write and mark it active.

        Raises:
            BoardNotFoundError: If the board is unknown or has expired
        """
        with self._registry_lock:
            board = self.get_board(board_id)
            lock = self._locks.get(board_id)
        if board is None or lock is None:
            raise BoardNotFoundError(board_id)
        with lock:
            board.last_activity_at = self.now()
            yield board

    def purge_expired(self) -> List[str]:
        """Remove every board whose idle TTL has passed."""
        if self._idle_ttl is None:
            return []
        with self._registry_lock:
            now = self.now()
            expired = [board_id for board_id, board in self._boards.items() if self._is_expired(board, now)]
            for board_id in expired:
                self._evict(board_id)
            return expired

    def count(self) -> int:
        with self._registry_lock:
            return len(self._boards)

    def clear(self) -> None:
        with self._registry_lock:
            self._boards.clear()
            self._locks.clear()


@lru_cache(maxsize=1)
def get_boards_repository() -> BoardsRepository:
    """Get boards repository singleton."""
    settings = get_settings()
    return BoardsRepository(
        id_max_attempts=settings.boards.id_max_attempts,
        idle_ttl_seconds=settings.boards.idle_ttl_seconds,
    )

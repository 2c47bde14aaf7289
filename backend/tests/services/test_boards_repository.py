"""Tests for the in-memory boards repository."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from typing import List, Optional

import pytest

from tshirt_sizing_backend.app.services.boards import (
    Board,
    BoardCapacityError,
    BoardNotFoundError,
    BoardsRepository,
    Participant,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


def _create(repo: BoardsRepository, title: str = "Sprint 12"):
    return repo.create_board(title=title, creator_name="Alice", creator_participant_id="p-alice")


class TestCreateBoard:
    """Test board registration and id allocation."""

    def test_generates_six_digit_ids(self, repository: BoardsRepository):
        """Every generated id is exactly six ASCII digits."""
        for _ in range(50):
            board = _create(repository)
            assert re.fullmatch(r"[0-9]{6}", board.id)

    def test_ids_unique_among_live_boards(self, repository: BoardsRepository):
        ids = {_create(repository).id for _ in range(200)}
        assert len(ids) == 200
        assert repository.count() == 200

    def test_retries_on_collision(self):
        """A colliding id is skipped in favour of the next candidate."""
        candidates: List[str] = ["111111", "111111", "222222"]
        repo = BoardsRepository(id_generator=lambda: candidates.pop(0))

        first = _create(repo)
        second = _create(repo)

        assert first.id == "111111"
        assert second.id == "222222"

    def test_gives_up_after_max_attempts(self):
        repo = BoardsRepository(id_max_attempts=3, id_generator=lambda: "123456")
        _create(repo)

        with pytest.raises(BoardCapacityError):
            _create(repo)

    def test_new_board_starts_closed_and_hidden(self, repository: BoardsRepository):
        board = _create(repository)

        assert board.votes_revealed is False
        assert board.voting_active is False
        assert board.initiatives == []
        assert board.participants == {}

    def test_populate_runs_before_board_is_visible(self, repository: BoardsRepository):
        seen: List[Optional[Board]] = []

        def populate(board: Board) -> None:
            seen.append(repository.get_board(board.id))
            board.participants["p-alice"] = Participant(
                id="p-alice", name="Alice", joined_at=board.created_at, is_creator=True
            )

        board = repository.create_board(
            title="Sprint 12",
            creator_name="Alice",
            creator_participant_id="p-alice",
            populate=populate,
        )

        assert seen == [None]
        assert list(repository.get_board(board.id).participants) == ["p-alice"]


class TestLookup:
    """Test board lookup and locking."""

    def test_get_unknown_board_returns_none(self, repository: BoardsRepository):
        assert repository.get_board("000000") is None

    def test_locked_board_yields_same_object(self, repository: BoardsRepository):
        board = _create(repository)

        with repository.locked_board(board.id) as locked:
            locked.votes_revealed = True

        assert repository.get_board(board.id) is board
        assert board.votes_revealed is True

    def test_locked_board_unknown_raises(self, repository: BoardsRepository):
        with pytest.raises(BoardNotFoundError):
            with repository.locked_board("999999"):
                pass


class TestIdleEviction:
    """Test lazy eviction of idle boards."""

    def test_expired_board_is_gone(self):
        clock = FakeClock()
        repo = BoardsRepository(idle_ttl_seconds=60, clock=clock)
        board = _create(repo)

        clock.advance(61)

        assert repo.get_board(board.id) is None
        assert repo.count() == 0

    def test_activity_extends_lifetime(self):
        clock = FakeClock()
        repo = BoardsRepository(idle_ttl_seconds=60, clock=clock)
        board = _create(repo)

        clock.advance(45)
        with repo.locked_board(board.id):
            pass
        clock.advance(45)

        assert repo.get_board(board.id) is board

    def test_create_purges_expired_boards(self):
        clock = FakeClock()
        repo = BoardsRepository(idle_ttl_seconds=60, clock=clock)
        stale = _create(repo, "stale")

        clock.advance(120)
        fresh = _create(repo, "fresh")

        assert repo.count() == 1
        assert repo.get_board(fresh.id) is fresh
        assert repo.get_board(stale.id) is None

    def test_zero_ttl_keeps_boards_forever(self):
        clock = FakeClock()
        repo = BoardsRepository(idle_ttl_seconds=0, clock=clock)
        board = _create(repo)

        clock.advance(10 * 365 * 24 * 3600)

        assert repo.get_board(board.id) is board
        assert repo.purge_expired() == []

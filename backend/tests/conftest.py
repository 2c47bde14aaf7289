"""Shared fixtures: a fresh board store, hub, and service per test."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from tshirt_sizing_backend.app.core.config import BoardSettings
from tshirt_sizing_backend.app.services.boards import BoardsRepository, BoardsService
from tshirt_sizing_backend.app.services.realtime import RealtimeHub


class RecordingEmitter:
    """Stands in for the Socket.IO server and records every emit."""

    def __init__(self) -> None:
        self.emitted: List[Tuple[str, Any, Optional[str]]] = []

    async def emit(self, event: str, data: Any = None, *, room: Optional[str] = None) -> None:
        self.emitted.append((event, data, room))

    def events(self, room: Optional[str] = None) -> List[str]:
        return [name for name, _, r in self.emitted if room is None or r == room]

    def last(self) -> Tuple[str, Any, Optional[str]]:
        return self.emitted[-1]


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def hub(emitter: RecordingEmitter) -> RealtimeHub:
    return RealtimeHub(emitter=emitter)


@pytest.fixture
def repository() -> BoardsRepository:
    return BoardsRepository(idle_ttl_seconds=0)


@pytest.fixture
def board_settings() -> BoardSettings:
    return BoardSettings()


@pytest.fixture
def service(repository: BoardsRepository, hub: RealtimeHub, board_settings: BoardSettings) -> BoardsService:
    return BoardsService(repository, hub, settings=board_settings)

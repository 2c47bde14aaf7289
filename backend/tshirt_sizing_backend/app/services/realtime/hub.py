"""Room membership and best-effort broadcast to board rooms."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Protocol, Set


logger = logging.getLogger(__name__)


class Emitter(Protocol):
    """Anything that can push an event to a room (e.g. ``socketio.AsyncServer``)."""

    async def emit(self, event: str, data: Any = None, *, room: Optional[str] = None) -> None: ...


class Event(Protocol):
    @property
    def name(self) -> str: ...

    def payload(self) -> dict: ...


class RealtimeHub:
    """Tracks which connections sit in which board room and fans events out to them.

    Delivery is fire-and-forget: nothing is queued for late joiners, who are
    expected to fetch a fresh snapshot instead.
    """

    def __init__(self, emitter: Optional[Emitter] = None) -> None:
        self._emitter = emitter
        self._rooms: Dict[str, Set[str]] = {}
        self._memberships: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def join_room(self, board_id: str, connection_id: str) -> None:
        """Associate a connection with a board room (idempotent)."""
        with self._lock:
            self._rooms.setdefault(board_id, set()).add(connection_id)
            self._memberships.setdefault(connection_id, set()).add(board_id)

    def leave_all(self, connection_id: str) -> List[str]:
        """Drop a connection from every room; returns the rooms it left."""
        with self._lock:
            board_ids = self._memberships.pop(connection_id, set())
            for board_id in board_ids:
                members = self._rooms.get(board_id)
                if members is None:
                    continue
                members.discard(connection_id)
                if not members:
                    del self._rooms[board_id]
            return sorted(board_ids)

    def room_members(self, board_id: str) -> Set[str]:
        with self._lock:
            return set(self._rooms.get(board_id, ()))

    def connection_count(self) -> int:
        """Total room memberships across all boards."""
        with self._lock:
            return sum(len(members) for members in self._rooms.values())

    async def broadcast(self, board_id: str, event: Event) -> None:
        """Deliver an event to every connection in the board's room.

        Failures are logged and never propagated to the caller.
        """
        event_name = str(getattr(event.name, "value", event.name))
        if self._emitter is None:
            logger.debug("broadcast_skipped reason=no_emitter board_id=%s event=%s", board_id, event_name)
            return
        if not self.room_members(board_id):
            logger.debug("broadcast_skipped reason=empty_room board_id=%s event=%s", board_id, event_name)
            return

        try:
            await self._emitter.emit(event_name, event.payload(), room=board_id)
        except Exception:
            logger.exception("broadcast_failed board_id=%s event=%s", board_id, event_name)
            return
        logger.info("broadcast board_id=%s event=%s", board_id, event_name)

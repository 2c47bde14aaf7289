"""Socket.IO server for board rooms.

The browser client connects with the stock ``io()`` call and then emits
``joinBoard {boardId, participantId}``; from then on it receives every event
broadcast to that board. Rooms are keyed by the 6-digit board id.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import socketio

from tshirt_sizing_backend.app.core.config import get_settings
from tshirt_sizing_backend.app.services.realtime.hub import RealtimeHub

logger = logging.getLogger(__name__)


def _cors_allowed_origins(value: str) -> str | list[str]:
    if value.strip() == "*":
        return "*"
    return [origin.strip() for origin in value.split(",") if origin.strip()]


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=_cors_allowed_origins(get_settings().realtime.cors_allowed_origins),
    logger=False,
    engineio_logger=False,
)


@lru_cache(maxsize=1)
def get_realtime_hub() -> RealtimeHub:
    """Get the hub bound to the process-wide Socket.IO server."""
    return RealtimeHub(emitter=sio)


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    logger.info("socket_connected sid=%s", sid)


@sio.event
async def disconnect(sid: str, reason: Any = None):
    # Only room membership goes away; the participant stays on the board.
    left = get_realtime_hub().leave_all(sid)
    logger.info("socket_disconnected sid=%s rooms=%s", sid, ",".join(left) or "-")


@sio.on("joinBoard")
async def join_board(sid: str, data: Any):
    if not isinstance(data, dict) or not data.get("boardId"):
        logger.warning("join_board_ignored sid=%s payload=%r", sid, data)
        return

    board_id = str(data["boardId"])
    participant_id = data.get("participantId")

    await sio.enter_room(sid, board_id)
    get_realtime_hub().join_room(board_id, sid)
    await sio.save_session(sid, {"board_id": board_id, "participant_id": participant_id})

    logger.info("socket_joined_board sid=%s board_id=%s participant_id=%s", sid, board_id, participant_id)

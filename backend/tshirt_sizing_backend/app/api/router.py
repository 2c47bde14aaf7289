"""Top-level API router mounted under ``/api``."""

from __future__ import annotations

from fastapi import APIRouter

from tshirt_sizing_backend.app.api.v1 import boards, status

api_router = APIRouter(prefix="/api")
api_router.include_router(boards.router)
api_router.include_router(status.router)

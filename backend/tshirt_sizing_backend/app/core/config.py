"""Application settings resolved from environment variables and `.env`.

Every knob lives under the ``TSHIRT_`` prefix; nested groups use ``__`` as the
delimiter, e.g. ``TSHIRT_SERVER__PORT=8080`` or
``TSHIRT_BOARDS__IDLE_TTL_SECONDS=0``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    """HTTP listener and public URL settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    public_base_url: Optional[str] = Field(
        default=None,
        description="Base URL used in shareable links; defaults to the request's host",
    )
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class BoardSettings(BaseModel):
    """Board store and voting policy settings."""

    id_max_attempts: int = Field(default=100, ge=1)
    idle_ttl_seconds: int = Field(default=86400, ge=0, description="0 keeps boards forever")
    redact_votes_before_reveal: bool = False
    lock_votes_after_reveal: bool = False


class RealtimeSettings(BaseModel):
    """Socket.IO mount settings."""

    socketio_path: str = "socket.io"
    cors_allowed_origins: str = Field(default="*", description="\"*\" or a comma-separated origin list")


class SizingSettings(BaseSettings):
    """Top-level settings for the sizing backend."""

    model_config = SettingsConfigDict(
        env_prefix="TSHIRT_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    server: ServerSettings = Field(default_factory=ServerSettings)
    boards: BoardSettings = Field(default_factory=BoardSettings)
    realtime: RealtimeSettings = Field(default_factory=RealtimeSettings)


@lru_cache(maxsize=1)
def get_settings() -> SizingSettings:
    """Return the process-wide settings instance."""
    return SizingSettings()

"""Tests for environment-driven settings."""

from __future__ import annotations

from tshirt_sizing_backend.app.core.config import SizingSettings


def test_defaults():
    settings = SizingSettings(_env_file=None)

    assert settings.server.port == 3000
    assert settings.server.public_base_url is None
    assert settings.boards.idle_ttl_seconds == 86400
    assert settings.boards.redact_votes_before_reveal is False
    assert settings.realtime.socketio_path == "socket.io"


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("TSHIRT_SERVER__PORT", "8080")
    monkeypatch.setenv("TSHIRT_BOARDS__IDLE_TTL_SECONDS", "0")
    monkeypatch.setenv("TSHIRT_BOARDS__LOCK_VOTES_AFTER_REVEAL", "true")
    monkeypatch.setenv("TSHIRT_LOG_LEVEL", "DEBUG")

    settings = SizingSettings(_env_file=None)

    assert settings.server.port == 8080
    assert settings.boards.idle_ttl_seconds == 0
    assert settings.boards.lock_votes_after_reveal is True
    assert settings.log_level == "DEBUG"

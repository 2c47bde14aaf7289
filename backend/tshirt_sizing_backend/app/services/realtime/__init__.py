"""Realtime fan-out (Socket.IO rooms keyed by board id).

This package knows nothing about boards beyond their identifiers; callers hand
it events exposing ``name`` and ``payload()``.
"""

from .hub import Emitter, RealtimeHub

__all__ = ["Emitter", "RealtimeHub"]

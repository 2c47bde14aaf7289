"""API v1 package."""

from . import boards, status

__all__ = ["boards", "status"]

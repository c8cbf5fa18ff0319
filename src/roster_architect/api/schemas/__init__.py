"""Pydantic models for API I/O."""

from .player import ImportResponse, PercentileBadge, PlayerPageResponse, PlayerResponse
from .roster import RosterAnalyticsResponse, RosterResponse
from .sharing import ShareResponse, SnapshotResponse

__all__ = [
    "ImportResponse",
    "PercentileBadge",
    "PlayerPageResponse",
    "PlayerResponse",
    "RosterAnalyticsResponse",
    "RosterResponse",
    "ShareResponse",
    "SnapshotResponse",
]

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel

from .player import PlayerResponse


class ShareResponse(BaseModel):
    snapshot_id: str
    share_url: str


class SnapshotResponse(BaseModel):
    snapshot_id: str
    created_at: datetime
    created_by: str
    total_salary: float
    lineup: List[PlayerResponse]

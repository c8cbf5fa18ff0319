"""Canonical athlete model produced by ingestion and consumed everywhere else."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Player(BaseModel):
    """Normalized catalog entry.

    Percentile fields are fractions in ``[0, 1]`` supplied by the dataset; a
    missing salary stays ``None`` so it can be shown as unknown rather than zero.
    """

    athlete_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    team: Optional[str] = None
    position: Optional[str] = None
    contract_type: Optional[str] = None
    salary: Optional[float] = Field(default=None, ge=0)
    ts_percentile: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    usage_percentile: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    def_percentile: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    ast_percentile: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

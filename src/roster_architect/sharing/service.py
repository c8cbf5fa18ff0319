"""Publish roster snapshots to a document store and resolve them by id."""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from roster_architect.analytics import total_salary
from roster_architect.errors import RosterArchitectError
from roster_architect.models import Player
from roster_architect.persistence import DocumentStore


logger = logging.getLogger(__name__)

SHARE_QUERY_PARAM = "roster"


class SharingError(RosterArchitectError):
    """Base class for publish/resolve failures."""


class PreconditionFailedError(SharingError):
    """Publishing needs an identity and a non-empty roster."""


class PublishInProgressError(PreconditionFailedError):
    """A publish for this session has not returned yet."""


class StorageError(SharingError):
    """The document store rejected or failed a read/write."""


class Snapshot(BaseModel):
    """Immutable published roster."""

    id: str
    lineup: List[Player]
    created_at: datetime = Field(alias="createdAt")
    created_by: str = Field(alias="createdBy")
    total_salary: float = Field(alias="totalSalary")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})

    @classmethod
    def from_document(cls, snapshot_id: str, document: dict) -> "Snapshot":
        return cls.model_validate({**document, "id": snapshot_id})


@dataclass(frozen=True)
class ShareResult:
    snapshot_id: str
    share_url: str


def snapshot_namespace(app_id: str) -> str:
    return f"artifacts/{app_id}/public/data/rosters"


def build_share_url(origin: str, path: str, snapshot_id: str) -> str:
    query = urllib.parse.urlencode({SHARE_QUERY_PARAM: snapshot_id})
    return f"{origin.rstrip('/')}{path or '/'}?{query}"


def parse_deep_link(value: Optional[str]) -> Optional[str]:
    """Extract the ``roster`` id from a URL or bare query string."""

    if not value:
        return None
    query = urllib.parse.urlsplit(value).query or value
    ids = urllib.parse.parse_qs(query).get(SHARE_QUERY_PARAM)
    if not ids or not ids[0].strip():
        return None
    return ids[0].strip()


class SharingService:
    """Serialize rosters into snapshots and read them back."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        namespace: str,
        origin: str,
        share_path: str = "/",
    ):
        self.store = store
        self.namespace = namespace
        self.origin = origin
        self.share_path = share_path

    async def publish(self, roster: Sequence[Player], identity: Optional[str]) -> ShareResult:
        if identity is None:
            raise PreconditionFailedError("Sign-in is required to publish a roster")
        if not roster:
            raise PreconditionFailedError("Cannot publish an empty roster")

        snapshot = Snapshot(
            id=str(uuid4()),
            lineup=list(roster),
            created_at=datetime.now(timezone.utc),
            created_by=identity,
            total_salary=total_salary(roster),
        )
        try:
            await self.store.put(self.namespace, snapshot.id, snapshot.to_document())
        except Exception as exc:
            logger.warning("Snapshot %s could not be saved: %s", snapshot.id, exc)
            raise StorageError(f"Unable to save roster: {exc}") from exc

        logger.info("Published snapshot %s with %s players", snapshot.id, len(snapshot.lineup))
        return ShareResult(
            snapshot_id=snapshot.id,
            share_url=build_share_url(self.origin, self.share_path, snapshot.id),
        )

    async def fetch(self, snapshot_id: str) -> Optional[Snapshot]:
        try:
            document = await self.store.get(self.namespace, snapshot_id)
        except Exception as exc:
            logger.warning("Snapshot %s could not be read: %s", snapshot_id, exc)
            raise StorageError(f"Unable to load roster: {exc}") from exc
        if document is None:
            return None
        try:
            return Snapshot.from_document(snapshot_id, document)
        except ValidationError as exc:
            raise StorageError(f"Stored roster {snapshot_id} is invalid: {exc}") from exc

    async def resolve(self, snapshot_id: str) -> Optional[List[Player]]:
        """Return the stored lineup, or ``None`` when no snapshot has that id."""

        snapshot = await self.fetch(snapshot_id)
        if snapshot is None:
            logger.info("Snapshot %s not found", snapshot_id)
            return None
        return list(snapshot.lineup)

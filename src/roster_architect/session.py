"""Single owned session context tying catalog, roster, analytics and sharing together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from roster_architect.analytics import RosterAggregates, compute_aggregates
from roster_architect.config import ALL_FILTER, RosterRules, get_rules
from roster_architect.identity import IdentityProvider, acquire_identity
from roster_architect.ingest import IngestError, ingest_csv_text
from roster_architect.models import Player
from roster_architect.pool import CatalogPage, FilterCriteria, PlayerCatalog, clamp_page
from roster_architect.roster import RosterBuilder
from roster_architect.sharing import (
    PreconditionFailedError,
    PublishInProgressError,
    ShareResult,
    SharingError,
    SharingService,
    StorageError,
    parse_deep_link,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportReport:
    success: bool
    players_loaded: int
    dropped_rows: int = 0
    error: Optional[str] = None


class RosterSession:
    """Owns every piece of mutable state for one user.

    Synchronous methods cover browsing and roster edits. ``bootstrap``,
    ``publish`` and ``load_shared`` await the identity provider or the
    document store; results arriving after the roster was cleared, re-seeded
    or the session detached are dropped.
    """

    def __init__(self, sharing: Optional[SharingService] = None, *, rules: Optional[RosterRules] = None):
        self.rules = rules or get_rules()
        self.sharing = sharing
        self.catalog = PlayerCatalog(page_size=self.rules.page_size)
        self.roster = RosterBuilder(self.rules.roster_size)
        self.criteria = FilterCriteria()
        self.page = 1
        self.identity: Optional[str] = None
        self.share_url: Optional[str] = None
        self.is_publishing = False
        self._epoch = 0
        self._aggregates: Optional[RosterAggregates] = None

    def import_csv(self, text: str) -> ImportReport:
        """Replace the catalog from pasted text; failures keep the old catalog."""

        try:
            players, report = ingest_csv_text(text)
        except IngestError as exc:
            logger.warning("Import rejected: %s", exc)
            return ImportReport(success=False, players_loaded=0, error=str(exc))

        self.catalog.replace(players)
        self.criteria = FilterCriteria()
        self.page = 1
        logger.info("Catalog replaced with %s players", len(players))
        return ImportReport(
            success=True,
            players_loaded=report.imported_players,
            dropped_rows=report.dropped_rows,
        )

    def teams(self) -> list[str]:
        return self.catalog.list_teams()

    def set_search(self, search_term: str) -> None:
        self.criteria = self.criteria.with_search(search_term)
        self.page = 1

    def set_position_filter(self, position: str = ALL_FILTER) -> None:
        self.criteria = self.criteria.with_position(position)
        self.page = 1

    def set_team_filter(self, team: str = ALL_FILTER) -> None:
        self.criteria = self.criteria.with_team(team)
        self.page = 1

    def filtered_players(self) -> list[Player]:
        return self.catalog.filter(self.criteria, self.roster.member_ids)

    def go_to_page(self, page: int) -> int:
        self.page = clamp_page(page, len(self.filtered_players()), self.catalog.page_size)
        return self.page

    def current_page(self) -> CatalogPage:
        view = self.catalog.view(self.criteria, self.page, self.roster.member_ids)
        self.page = view.page
        return view

    @property
    def aggregates(self) -> Optional[RosterAggregates]:
        return self._aggregates

    def _roster_changed(self) -> None:
        self._aggregates = compute_aggregates(self.roster.members)

    def add_player(self, player: Player) -> bool:
        added = self.roster.add(player)
        if added:
            self._roster_changed()
        return added

    def add_by_id(self, athlete_id: str) -> Optional[bool]:
        """Add a catalog player by id; ``None`` when the catalog has no such id."""

        player = self.catalog.get(athlete_id)
        if player is None:
            return None
        return self.add_player(player)

    def remove_player(self, athlete_id: Optional[str]) -> bool:
        removed = self.roster.remove(athlete_id)
        if removed:
            self._roster_changed()
        return removed

    def clear_roster(self) -> None:
        self.roster.clear()
        self._epoch += 1
        self._roster_changed()

    def detach(self) -> None:
        """Mark in-flight async work as irrelevant (the user navigated away)."""

        self._epoch += 1

    def _require_sharing(self) -> SharingService:
        if self.sharing is None:
            raise PreconditionFailedError("Sharing is not configured for this session")
        return self.sharing

    async def bootstrap(self, provider: IdentityProvider, deep_link: Optional[str] = None) -> None:
        """Acquire the identity, then seed the roster from a ``roster=<id>`` link."""

        self.identity = await acquire_identity(provider)
        snapshot_id = parse_deep_link(deep_link)
        if snapshot_id is None or self.identity is None or self.sharing is None:
            return
        try:
            await self.load_shared(snapshot_id)
        except StorageError as exc:
            logger.warning("Shared roster %s could not be loaded: %s", snapshot_id, exc)

    async def load_shared(self, snapshot_id: str) -> bool:
        sharing = self._require_sharing()
        token = self._epoch
        lineup = await sharing.resolve(snapshot_id)
        if token != self._epoch:
            logger.debug("Ignoring late snapshot %s", snapshot_id)
            return False
        if lineup is None:
            return False
        self.roster.replace(lineup)
        self._epoch += 1
        self._roster_changed()
        logger.info("Loaded shared roster %s (%s players)", snapshot_id, len(self.roster))
        return True

    async def publish(self) -> Optional[ShareResult]:
        """Publish the roster; ``None`` means the result arrived too late to matter."""

        sharing = self._require_sharing()
        if self.is_publishing:
            raise PublishInProgressError("A publish is already in progress")

        token = self._epoch
        self.is_publishing = True
        try:
            result = await sharing.publish(self.roster.members, self.identity)
        except SharingError:
            if token != self._epoch:
                logger.debug("Ignoring late publish failure")
                return None
            raise
        finally:
            self.is_publishing = False

        if token != self._epoch:
            logger.debug("Ignoring late publish result %s", result.snapshot_id)
            return None
        self.share_url = result.share_url
        return result

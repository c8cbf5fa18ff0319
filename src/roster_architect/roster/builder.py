"""Capacity- and uniqueness-bounded roster under construction."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from roster_architect.config import get_rules
from roster_architect.models import Player


logger = logging.getLogger(__name__)


class RosterBuilder:
    """Ordered selection of players.

    ``add`` and ``remove`` never raise: a full roster, a duplicate id or a
    missing id simply leave the roster unchanged.
    """

    def __init__(self, capacity: int | None = None):
        self.capacity = capacity if capacity is not None else get_rules().roster_size
        self._members: list[Player] = []

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._members)

    def __contains__(self, athlete_id: object) -> bool:
        return any(member.athlete_id == athlete_id for member in self._members)

    @property
    def members(self) -> tuple[Player, ...]:
        return tuple(self._members)

    @property
    def member_ids(self) -> frozenset[Optional[str]]:
        return frozenset(member.athlete_id for member in self._members)

    @property
    def is_full(self) -> bool:
        return len(self._members) >= self.capacity

    @property
    def remaining_slots(self) -> int:
        return max(self.capacity - len(self._members), 0)

    def add(self, player: Player) -> bool:
        if self.is_full:
            logger.debug("Roster full; ignoring %s", player.name)
            return False
        if player.athlete_id in self:
            logger.debug("Athlete %s already rostered", player.athlete_id)
            return False
        self._members.append(player)
        return True

    def remove(self, athlete_id: Optional[str]) -> bool:
        kept = [member for member in self._members if member.athlete_id != athlete_id]
        removed = len(kept) != len(self._members)
        self._members = kept
        return removed

    def clear(self) -> None:
        self._members = []

    def replace(self, players: Iterable[Player]) -> int:
        """Reset to ``players`` through ``add`` so stored lineups obey the rules too."""

        self.clear()
        return sum(1 for player in players if self.add(player))

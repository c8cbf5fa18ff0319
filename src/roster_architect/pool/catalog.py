"""The imported player pool and its filtered, paginated view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from roster_architect.models import Player

from .filtering import DEFAULT_PAGE_SIZE, FilterCriteria, clamp_page, filter_players, page_count, paginate


@dataclass(frozen=True)
class CatalogPage:
    """One page of the filtered catalog."""

    players: list[Player]
    page: int
    total_pages: int
    total_players: int


class PlayerCatalog:
    """Immutable-by-replacement pool of players available for selection."""

    def __init__(self, players: Iterable[Player] = (), *, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size
        self._players: tuple[Player, ...] = ()
        self._by_id: dict[str, Player] = {}
        self.replace(players)

    def __len__(self) -> int:
        return len(self._players)

    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    def replace(self, players: Iterable[Player]) -> None:
        """Swap in a freshly imported pool; nothing is merged."""

        self._players = tuple(players)
        # Later rows win when ids repeat.
        self._by_id = {
            player.athlete_id: player for player in self._players if player.athlete_id is not None
        }

    def get(self, athlete_id: str) -> Optional[Player]:
        return self._by_id.get(athlete_id)

    def list_teams(self) -> list[str]:
        return sorted({player.team for player in self._players if player.team})

    def filter(
        self,
        criteria: FilterCriteria,
        exclude_ids: Iterable[Optional[str]] = (),
    ) -> list[Player]:
        return filter_players(self._players, criteria, exclude_ids)

    def paginate(self, filtered: Sequence[Player], page: int) -> list[Player]:
        return paginate(filtered, page, self.page_size)

    def view(
        self,
        criteria: FilterCriteria,
        page: int,
        exclude_ids: Iterable[Optional[str]] = (),
    ) -> CatalogPage:
        filtered = self.filter(criteria, exclude_ids)
        current = clamp_page(page, len(filtered), self.page_size)
        return CatalogPage(
            players=self.paginate(filtered, current),
            page=current,
            total_pages=page_count(len(filtered), self.page_size),
            total_players=len(filtered),
        )

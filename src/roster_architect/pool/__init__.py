"""Player pool utilities (catalog, filtering, pagination)."""

from .catalog import CatalogPage, PlayerCatalog
from .filtering import (
    DEFAULT_PAGE_SIZE,
    FilterCriteria,
    clamp_page,
    filter_players,
    page_count,
    paginate,
)

__all__ = [
    "CatalogPage",
    "DEFAULT_PAGE_SIZE",
    "FilterCriteria",
    "PlayerCatalog",
    "clamp_page",
    "filter_players",
    "page_count",
    "paginate",
]

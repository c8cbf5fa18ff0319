"""Parse pasted comma-separated athlete exports into canonical players."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from roster_architect.errors import RosterArchitectError
from roster_architect.models import Player


logger = logging.getLogger(__name__)

Cell = Union[float, str]
RawRow = Dict[str, Cell]

NAME_KEY = "player"

HEADER_ALIASES: Mapping[str, str] = {
    "athlete name": NAME_KEY,
}

# Canonical field -> accepted (normalized) header keys, first match wins.
FIELD_COLUMNS: Mapping[str, Tuple[str, ...]] = {
    "athlete_id": ("athlete_id", "athlete id"),
    "team": ("team",),
    "position": ("position",),
    "contract_type": ("contract_type", "contract type"),
    "salary": ("salary_2025_num", "salary"),
    "ts_percentile": ("ts_pctile_pos",),
    "usage_percentile": ("usage_pctile_pos",),
    "def_percentile": ("def_efg_pctile_pos",),
    "ast_percentile": ("ast_pctile_pos",),
}

_PERCENTILE_FIELDS = ("ts_percentile", "usage_percentile", "def_percentile", "ast_percentile")
_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


class IngestError(RosterArchitectError):
    """Raised when pasted text cannot be turned into a catalog."""


class EmptyInputError(IngestError):
    """Input has no header or no data rows."""


class MalformedInputError(IngestError):
    """Input broke the parser; the previous catalog must be kept."""


@dataclass(frozen=True)
class IngestReport:
    total_rows: int
    imported_players: int
    dropped_rows: int
    columns: Tuple[str, ...]


def _clean(value: str) -> str:
    return value.strip().replace('"', "")


def normalize_header(value: str) -> str:
    key = _clean(value).lower()
    return HEADER_ALIASES.get(key, key)


def coerce_cell(value: str) -> Cell:
    """Return a float when ``value`` is a finite decimal number, else the text."""

    if not value or not _NUMBER_PATTERN.match(value):
        return value
    number = float(value)
    if not math.isfinite(number):
        return value
    return number


def split_rows(text: str) -> Tuple[List[str], List[RawRow]]:
    """Split raw text into normalized headers and typed rows.

    Quoted fields are not honoured: a comma inside quotes shifts the columns.
    """

    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        raise EmptyInputError("CSV needs a header row and at least one data row")

    headers = [normalize_header(token) for token in lines[0].split(",")]
    rows: List[RawRow] = []
    for line in lines[1:]:
        values = [_clean(token) for token in line.split(",")]
        row: RawRow = {}
        for index, header in enumerate(headers):
            if index < len(values):
                row[header] = coerce_cell(values[index])
            else:
                row.pop(header, None)
        rows.append(row)
    return headers, rows


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _as_text(value: Optional[Cell]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float):
        return _format_number(value)
    return value or None


def _as_salary(value: Optional[Cell]) -> Optional[float]:
    if not isinstance(value, float) or value < 0:
        return None
    return value


def _as_percentile(value: Optional[Cell]) -> Optional[float]:
    if not isinstance(value, float) or not 0.0 <= value <= 1.0:
        return None
    return value


def _lookup(row: RawRow, field: str) -> Tuple[Optional[str], Optional[Cell]]:
    for column in FIELD_COLUMNS[field]:
        if column in row:
            return column, row[column]
    return None, None


def row_to_player(row: RawRow) -> Optional[Player]:
    """Resolve one typed row to the schema, or ``None`` when it has no name."""

    raw_name = row.get(NAME_KEY)
    if raw_name in (None, "", 0.0):
        return None

    consumed = {NAME_KEY}
    values: Dict[str, object] = {"name": _as_text(raw_name)}
    for field in FIELD_COLUMNS:
        column, raw = _lookup(row, field)
        if column is not None:
            consumed.add(column)
        if field == "salary":
            values[field] = _as_salary(raw)
        elif field in _PERCENTILE_FIELDS:
            values[field] = _as_percentile(raw)
        else:
            values[field] = _as_text(raw)

    values["metadata"] = {key: value for key, value in row.items() if key not in consumed}
    return Player(**values)


def rows_to_players(rows: Sequence[RawRow]) -> List[Player]:
    players: List[Player] = []
    for index, row in enumerate(rows, start=2):
        player = row_to_player(row)
        if player is None:
            logger.debug("Dropping line %s without an athlete name", index)
            continue
        players.append(player)
    return players


def ingest_csv_text(text: str) -> Tuple[List[Player], IngestReport]:
    """Parse ``text`` into players.

    Raises ``EmptyInputError`` for missing rows and ``MalformedInputError``
    for anything that breaks parsing or validation.
    """

    try:
        headers, rows = split_rows(text)
        players = rows_to_players(rows)
    except IngestError:
        raise
    except (AttributeError, TypeError, ValueError, ValidationError) as exc:
        raise MalformedInputError(f"Unable to parse CSV: {exc}") from exc

    report = IngestReport(
        total_rows=len(rows),
        imported_players=len(players),
        dropped_rows=len(rows) - len(players),
        columns=tuple(headers),
    )
    logger.info(
        "Parsed %s players from %s rows (%s dropped)",
        report.imported_players,
        report.total_rows,
        report.dropped_rows,
    )
    return players, report

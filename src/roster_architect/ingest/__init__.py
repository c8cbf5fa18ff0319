"""Input adapters that normalize pasted athlete exports."""

from .csv_text import (
    EmptyInputError,
    IngestError,
    IngestReport,
    MalformedInputError,
    coerce_cell,
    ingest_csv_text,
    row_to_player,
    rows_to_players,
    split_rows,
)

__all__ = [
    "EmptyInputError",
    "IngestError",
    "IngestReport",
    "MalformedInputError",
    "coerce_cell",
    "ingest_csv_text",
    "row_to_player",
    "rows_to_players",
    "split_rows",
]

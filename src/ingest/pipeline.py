"""Occurrence loading orchestration.

This module coordinates column reading, the column-to-row transpose,
and invalid-row removal for one GBIF export file.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import REQUIRED_COORDINATE_COLUMNS
from core.errors import GlobeIngestError
from core.logging_config import get_logger
from core.types import ColumnReadOptions, OccurrenceBatch
from ingest.column_reader import read_columns
from transforms.invalid_row_filter import retain_valid_rows, unique_invalid_rows
from transforms.row_materializer import transpose_columns

_LOGGER = get_logger(__name__)


def load_occurrences(
    source_path: str | Path,
    options: ColumnReadOptions | None = None,
) -> OccurrenceBatch:
    """Read one occurrence file and keep rows with usable coordinates.

    Args:
        source_path: Delimited GBIF export with a header row.
        options: Parsing options for the file.

    Returns:
        Surviving occurrences in original row order with drop statistics.

    Raises:
        GlobeIngestError: If the file cannot be parsed or lacks a
            coordinate column.
    """
    path = Path(source_path).expanduser()
    view = read_columns(path, options)
    missing_columns = [name for name in REQUIRED_COORDINATE_COLUMNS if name not in view]
    if missing_columns:
        raise GlobeIngestError(
            f"Occurrence file {path} is missing required columns {missing_columns}. "
            "Export the file with decimalLatitude and decimalLongitude."
        )
    materialized = transpose_columns(view, view.row_count)
    dropped_rows = unique_invalid_rows(materialized.invalid_row_indices, view.row_count)
    occurrences = retain_valid_rows(materialized.occurrences, dropped_rows)
    batch = OccurrenceBatch(
        source_path=path,
        row_count=view.row_count,
        occurrences=occurrences,
        dropped_rows=dropped_rows,
        column_types=view.schema,
    )
    _LOGGER.info(
        "occurrences_loaded",
        source=str(path),
        rows=batch.row_count,
        kept=len(batch.occurrences),
        dropped=len(batch.dropped_rows),
        undated=batch.undated_count,
    )
    return batch

"""Column-to-row transpose for occurrence records.

Given parallel columns of equal length, this module produces one
``Occurrence`` per row. Coordinates are load-bearing: a null latitude or
longitude flags the row as invalid. Date parts are not: a null year,
month, or day takes its default and the row survives.
"""

from __future__ import annotations

import math
from typing import Callable, Mapping, Sequence

from core.constants import (
    DAY_COLUMN,
    DEFAULT_DAY,
    DEFAULT_MONTH,
    DEFAULT_YEAR,
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN,
    MONTH_COLUMN,
    REQUIRED_COORDINATE_COLUMNS,
    YEAR_COLUMN,
)
from core.errors import GlobeTransformError
from core.types import MaterializedRows, Occurrence
from transforms.epoch_time import epoch_time


def transpose_columns(
    columns: Mapping[str, Sequence[object]],
    row_count: int,
) -> MaterializedRows:
    """Build one occurrence per row from named columns.

    Columns are walked one at a time in mapping order. Names other than
    the five recognized fields are skipped without fetching their
    values, so lazy column mappings only materialize what is used.
    Epoch time is computed for every row, including rows later dropped.

    Args:
        columns: Column name to row-ordered values, ``None`` for nulls.
        row_count: Number of rows every column must have.

    Returns:
        Occurrences for all rows plus the flagged invalid row indices.

    Raises:
        GlobeTransformError: If a coordinate column is missing or a
            column length differs from ``row_count``.
    """
    missing_columns = [name for name in REQUIRED_COORDINATE_COLUMNS if name not in columns]
    if missing_columns:
        raise GlobeTransformError(
            f"Cannot materialize occurrences: missing coordinate columns {missing_columns}."
        )
    latitudes = [0.0] * row_count
    longitudes = [0.0] * row_count
    years = [DEFAULT_YEAR] * row_count
    months = [DEFAULT_MONTH] * row_count
    days = [DEFAULT_DAY] * row_count
    invalid_rows: list[int] = []
    fillers: dict[str, Callable[[Sequence[object]], None]] = {
        LATITUDE_COLUMN: lambda values: _fill_coordinates(values, latitudes, invalid_rows),
        LONGITUDE_COLUMN: lambda values: _fill_coordinates(values, longitudes, invalid_rows),
        YEAR_COLUMN: lambda values: _fill_date_parts(values, years, DEFAULT_YEAR),
        MONTH_COLUMN: lambda values: _fill_date_parts(values, months, DEFAULT_MONTH),
        DAY_COLUMN: lambda values: _fill_date_parts(values, days, DEFAULT_DAY),
    }
    for name in columns:
        filler = fillers.get(name)
        if filler is None:
            continue
        values = columns[name]
        if len(values) != row_count:
            raise GlobeTransformError(
                f"Column '{name}' has {len(values)} values, expected {row_count}. "
                "All columns must have one value per row."
            )
        filler(values)
    occurrences = tuple(
        Occurrence(
            latitude=latitude,
            longitude=longitude,
            year=year,
            month=month,
            day=day,
            epoch_time=epoch_time(year, month, day),
        )
        for latitude, longitude, year, month, day in zip(
            latitudes, longitudes, years, months, days
        )
    )
    return MaterializedRows(occurrences=occurrences, invalid_row_indices=tuple(invalid_rows))


def _fill_coordinates(
    values: Sequence[object],
    target: list[float],
    invalid_rows: list[int],
) -> None:
    for index, value in enumerate(values):
        coordinate = _as_coordinate(value)
        if coordinate is None:
            invalid_rows.append(index)
        else:
            target[index] = coordinate


def _fill_date_parts(values: Sequence[object], target: list[int], default_value: int) -> None:
    for index, value in enumerate(values):
        part = _as_date_part(value)
        target[index] = default_value if part is None else part


def _as_coordinate(value: object) -> float | None:
    """Return a finite float, or ``None`` for nulls and non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    coordinate = float(value)
    return coordinate if math.isfinite(coordinate) else None


def _as_date_part(value: object) -> int | None:
    """Return an integral date part, or ``None`` when unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None

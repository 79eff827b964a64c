"""Shared typed models.

This module defines the immutable data models passed between the
ingest, transform, and visualization layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping

from core.constants import (
    DEFAULT_DELIMITER,
    DEFAULT_INFER_SCHEMA_ROWS,
    DEFAULT_POINT_COLOR,
    DEFAULT_POINT_RADIUS,
    DEFAULT_QUOTE_CHAR,
    INVALID_EPOCH_TIME,
    REQUIRED_COORDINATE_COLUMNS,
)

EmitFailurePolicy = Literal["abort", "skip"]
UndatedPolicy = Literal["keep", "skip"]
Position3D = tuple[float, float, float]


@dataclass(frozen=True)
class Occurrence:
    """One georeferenced occurrence record.

    Attributes:
        latitude: Decimal degrees, not range checked.
        longitude: Decimal degrees, not range checked.
        year: Calendar year, 1970 when the source field was empty.
        month: Calendar month, 1 when the source field was empty.
        day: Day of month, 1 when the source field was empty.
        epoch_time: Seconds since the Unix epoch at UTC midnight, or -1
            when the date parts do not form a calendar date.
    """

    latitude: float
    longitude: float
    year: int
    month: int
    day: int
    epoch_time: int

    @property
    def has_valid_date(self) -> bool:
        """Return whether the date parts resolved to a real timestamp."""
        return self.epoch_time != INVALID_EPOCH_TIME


@dataclass(frozen=True)
class MaterializedRows:
    """Per-row occurrences before invalid rows are removed.

    Attributes:
        occurrences: One occurrence per input row, in row order.
        invalid_row_indices: Row positions flagged for a missing coordinate.
            A row appears once per missing coordinate column.
    """

    occurrences: tuple[Occurrence, ...]
    invalid_row_indices: tuple[int, ...]


@dataclass(frozen=True)
class ColumnReadOptions:
    """Options controlling delimited occurrence file parsing.

    Attributes:
        delimiter: Single-character field separator.
        quote_char: Quote character, or None to disable quoting.
        infer_schema_rows: Rows sampled when inferring column types.
        float_columns: Columns always read as floats, whatever the sample holds.
    """

    delimiter: str = DEFAULT_DELIMITER
    quote_char: str | None = DEFAULT_QUOTE_CHAR
    infer_schema_rows: int = DEFAULT_INFER_SCHEMA_ROWS
    float_columns: tuple[str, ...] = REQUIRED_COORDINATE_COLUMNS


@dataclass(frozen=True)
class OccurrenceBatch:
    """Occurrences loaded from one source file.

    Attributes:
        source_path: File the batch was read from.
        row_count: Number of data rows in the file.
        occurrences: Surviving occurrences in original row order.
        dropped_rows: Sorted unique row positions excluded for missing coordinates.
        column_types: Inferred type name per source column, in file order.
    """

    source_path: Path
    row_count: int
    occurrences: tuple[Occurrence, ...]
    dropped_rows: tuple[int, ...] = ()
    column_types: Mapping[str, str] = field(default_factory=dict)

    @property
    def undated_count(self) -> int:
        """Return how many surviving occurrences carry the invalid-date sentinel."""
        return sum(1 for occurrence in self.occurrences if not occurrence.has_valid_date)


@dataclass(frozen=True)
class DatasetStyle:
    """Visual style applied to every point of one dataset.

    Attributes:
        name: Dataset name, used as the entity path prefix.
        color: Packed ``0xRRGGBBAA`` color.
        point_radius: Point radius in scene units.
    """

    name: str
    color: int = DEFAULT_POINT_COLOR
    point_radius: float = DEFAULT_POINT_RADIUS


@dataclass(frozen=True)
class DatasetSpec:
    """One occurrence file and how to draw it."""

    style: DatasetStyle
    path: Path
    read_options: ColumnReadOptions = field(default_factory=ColumnReadOptions)


@dataclass(frozen=True)
class ShapeLayerSpec:
    """One background shapefile layer."""

    name: str
    path: Path
    color: int


@dataclass(frozen=True)
class EmissionReport:
    """Outcome of emitting one dataset to the visualization sink."""

    dataset_name: str
    emitted: int
    skipped_undated: int
    failed: int

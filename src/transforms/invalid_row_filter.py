"""Removal of occurrences flagged with unusable coordinates."""

from __future__ import annotations

from typing import Iterable, Sequence

from core.errors import GlobeTransformError
from core.types import Occurrence


def unique_invalid_rows(invalid_row_indices: Iterable[int], row_count: int) -> tuple[int, ...]:
    """Deduplicate and sort flagged row indices.

    Args:
        invalid_row_indices: Row positions, possibly repeated once per column.
        row_count: Number of rows the indices refer to.

    Returns:
        Ascending unique row positions.

    Raises:
        GlobeTransformError: If an index falls outside ``[0, row_count)``.
    """
    unique_rows = sorted(set(invalid_row_indices))
    if unique_rows and (unique_rows[0] < 0 or unique_rows[-1] >= row_count):
        raise GlobeTransformError(
            f"Invalid row index outside 0..{row_count - 1}: {unique_rows[0]}..{unique_rows[-1]}."
        )
    return tuple(unique_rows)


def retain_valid_rows(
    occurrences: Sequence[Occurrence],
    invalid_row_indices: Iterable[int],
) -> tuple[Occurrence, ...]:
    """Return occurrences whose rows were not flagged, in original order."""
    dropped_rows = set(unique_invalid_rows(invalid_row_indices, len(occurrences)))
    return tuple(
        occurrence for index, occurrence in enumerate(occurrences) if index not in dropped_rows
    )

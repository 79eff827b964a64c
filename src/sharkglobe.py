"""Public SDK surface for Sharkglobe.

This module provides a stable import path for library users.
It re-exports the loading, projection, and rendering entry points.
"""

from __future__ import annotations

from core.config import GlobeConfig
from core.globe_spec import GlobeSpec, load_globe_spec
from core.types import (
    ColumnReadOptions,
    DatasetStyle,
    EmissionReport,
    Occurrence,
    OccurrenceBatch,
)
from ingest.column_reader import ColumnView, read_columns
from ingest.pipeline import load_occurrences
from transforms.epoch_time import epoch_time
from transforms.geodesic_projection import project, project_many
from viz.globe_session import render_globe

__all__ = [
    "ColumnReadOptions",
    "ColumnView",
    "DatasetStyle",
    "EmissionReport",
    "GlobeConfig",
    "GlobeSpec",
    "Occurrence",
    "OccurrenceBatch",
    "epoch_time",
    "load_globe_spec",
    "load_occurrences",
    "project",
    "project_many",
    "read_columns",
    "render_globe",
]

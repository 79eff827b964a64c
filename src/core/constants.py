"""Core constants used across Sharkglobe modules.

This module centralizes column names, geometry defaults, and policies.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

LATITUDE_COLUMN = "decimalLatitude"
LONGITUDE_COLUMN = "decimalLongitude"
YEAR_COLUMN = "year"
MONTH_COLUMN = "month"
DAY_COLUMN = "day"
REQUIRED_COORDINATE_COLUMNS = (LATITUDE_COLUMN, LONGITUDE_COLUMN)

DEFAULT_YEAR = 1970
DEFAULT_MONTH = 1
DEFAULT_DAY = 1
INVALID_EPOCH_TIME = -1
MIN_CALENDAR_YEAR = -262_143
MAX_CALENDAR_YEAR = 262_142

DEFAULT_DELIMITER = "\t"
DEFAULT_QUOTE_CHAR = '"'
DEFAULT_INFER_SCHEMA_ROWS = 100_000

EARTH_RADIUS_METERS = 6_371_000.0
DEFAULT_POINT_ALTITUDE_FACTOR = 1.02
DEFAULT_POINT_RADIUS = 100_000.0
DEFAULT_POINT_COLOR = 0xFF0000FF
DEFAULT_LAYER_COLOR = 0x00FF00FF
DEFAULT_MAX_SUBDIVISION_LENGTH = 100_000.0
DEFAULT_SUBDIVISION_DEPTH = 2

DEFAULT_VIEWER_URL = "rerun+http://127.0.0.1:9876/proxy"
DEFAULT_APPLICATION_ID = "shark_globe"
DEFAULT_TIMELINE_NAME = "Shark Sightings"

DEFAULT_EMIT_FAILURE_POLICY = "abort"
SUPPORTED_EMIT_FAILURE_POLICIES = ("abort", "skip")
DEFAULT_UNDATED_POLICY = "keep"
SUPPORTED_UNDATED_POLICIES = ("keep", "skip")

GLOBE_SPEC_VERSION = 1

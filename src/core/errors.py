"""Sharkglobe exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class GlobeError(Exception):
    """Base exception for all Sharkglobe failures."""


class GlobeConfigError(GlobeError):
    """Raised for invalid runtime configuration."""


class GlobeSpecError(GlobeError):
    """Raised for invalid or unsupported globe-spec files."""


class GlobeIngestError(GlobeError):
    """Raised when an occurrence file cannot be opened or parsed."""


class GlobeTransformError(GlobeError):
    """Raised for row materialization and filtering failures."""


class GlobeSinkError(GlobeError):
    """Raised when the visualization sink cannot connect or log."""


class GlobeLayerError(GlobeError):
    """Raised when a background shape layer cannot be read."""


class GlobeDependencyError(GlobeError):
    """Raised when an optional runtime dependency is missing."""

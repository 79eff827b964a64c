"""Visualization sink adapters.

This module defines the small sink protocol used by the emitter and
layer plotting, and a rerun-backed implementation. Every sink failure
is raised as ``GlobeSinkError`` so callers choose the recovery policy.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

import numpy as np

from core.errors import GlobeDependencyError, GlobeSinkError
from core.types import Position3D


class PointSink(Protocol):
    """Destination for timestamped geometric primitives."""

    def set_time(self, timeline: str, seconds: int) -> None:
        """Move the named temporal timeline to a Unix timestamp."""

    def log_points(
        self,
        entity_path: str,
        positions: Sequence[Position3D],
        radii: Sequence[float],
        colors: Sequence[int],
    ) -> None:
        """Log a point cloud under a hierarchical path."""

    def log_line_strips(self, entity_path: str, strips: Sequence[np.ndarray], color: int) -> None:
        """Log static line strips under a hierarchical path."""

    def flush(self) -> None:
        """Block until buffered data has been sent."""


class RerunSink:
    """PointSink backed by one rerun recording stream."""

    def __init__(self, stream: Any, rerun_module: Any) -> None:
        self._stream = stream
        self._rr = rerun_module

    @classmethod
    def connect(cls, application_id: str, viewer_url: str) -> "RerunSink":
        """Open a recording and connect it to a running viewer.

        Args:
            application_id: Recording name shown in the viewer.
            viewer_url: gRPC endpoint of the viewer.

        Returns:
            Connected sink.

        Raises:
            GlobeDependencyError: If rerun-sdk is missing.
            GlobeSinkError: If the connection cannot be established.
        """
        rr = _import_rerun()
        try:
            stream = rr.RecordingStream(application_id)
            stream.connect_grpc(viewer_url)
        except Exception as error:
            raise GlobeSinkError(
                f"Failed to connect to viewer at {viewer_url}: {error}. "
                "Start the viewer or set SHARKGLOBE_VIEWER_URL."
            ) from error
        return cls(stream, rr)

    def set_time(self, timeline: str, seconds: int) -> None:
        try:
            self._stream.set_time(timeline, timestamp=seconds)
        except Exception as error:
            raise GlobeSinkError(
                f"Failed to set timeline '{timeline}' to {seconds}: {error}."
            ) from error

    def log_points(
        self,
        entity_path: str,
        positions: Sequence[Position3D],
        radii: Sequence[float],
        colors: Sequence[int],
    ) -> None:
        points = self._rr.Points3D(positions, radii=radii, colors=colors)
        self._log(entity_path, points, static=False)

    def log_line_strips(self, entity_path: str, strips: Sequence[np.ndarray], color: int) -> None:
        line_strips = self._rr.LineStrips3D(strips, colors=[color])
        self._log(entity_path, line_strips, static=True)

    def flush(self) -> None:
        try:
            self._stream.flush()
        except Exception as error:
            raise GlobeSinkError(f"Failed to flush recording stream: {error}.") from error

    def _log(self, entity_path: str, archetype: Any, static: bool) -> None:
        try:
            self._stream.log(entity_path, archetype, static=static)
        except Exception as error:
            raise GlobeSinkError(f"Failed to log '{entity_path}': {error}.") from error


def _import_rerun() -> Any:
    try:
        import rerun as rr
    except ImportError as error:
        raise GlobeDependencyError(
            "Viewer output requires rerun-sdk, but it is not installed. "
            "Install rerun-sdk to render occurrences."
        ) from error
    return rr

"""Pytest configuration and shared fixtures for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


class FakeSink:
    """In-memory PointSink that records calls and can fail on chosen paths."""

    def __init__(self) -> None:
        self.times: list[tuple[str, int]] = []
        self.points: list[dict[str, object]] = []
        self.line_strips: list[dict[str, object]] = []
        self.failing_paths: set[str] = set()
        self.flushed = False

    def set_time(self, timeline: str, seconds: int) -> None:
        self.times.append((timeline, seconds))

    def log_points(self, entity_path, positions, radii, colors) -> None:
        from core.errors import GlobeSinkError

        if entity_path in self.failing_paths:
            raise GlobeSinkError(f"refused {entity_path}")
        self.points.append(
            {
                "entity_path": entity_path,
                "positions": list(positions),
                "radii": list(radii),
                "colors": list(colors),
                "time": self.times[-1][1] if self.times else None,
            }
        )

    def log_line_strips(self, entity_path, strips, color) -> None:
        self.line_strips.append({"entity_path": entity_path, "strips": list(strips), "color": color})

    def flush(self) -> None:
        self.flushed = True


@pytest.fixture
def fake_sink() -> FakeSink:
    """Return a fresh recording fake sink."""
    return FakeSink()

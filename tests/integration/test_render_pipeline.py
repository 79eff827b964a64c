"""Integration tests for loading and rendering occurrence files."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import GlobeConfig
from core.globe_spec import GlobeSpec, parse_globe_spec
from tests.fixture_paths import occurrence_fixture
from transforms.geodesic_projection import project
from viz.globe_session import render_globe


def _spec(tmp_path: Path) -> GlobeSpec:
    payload = {
        "version": 1,
        "datasets": [{"name": "tigershark", "path": str(occurrence_fixture("five_rows.tsv"))}],
    }
    return parse_globe_spec(payload, tmp_path)


def test_five_row_file_emits_surviving_rows_in_order(tmp_path: Path, fake_sink) -> None:
    """Rows 0, 1, 3, 4 survive and keep their relative order."""
    config = GlobeConfig()

    render_globe(_spec(tmp_path), config, sink_factory=lambda _: fake_sink)

    radius = config.point_sphere_radius
    expected = [
        project(-33.5, 151.25, radius),
        project(21.3, -157.8, radius),
        project(-8.75, 115.2, radius),
        project(0.0, 0.0, radius),
    ]
    assert [point["entity_path"] for point in fake_sink.points] == [
        "tigershark/0",
        "tigershark/1",
        "tigershark/2",
        "tigershark/3",
    ]
    for point, position in zip(fake_sink.points, expected):
        assert point["positions"][0] == pytest.approx(position)
    assert [point["time"] for point in fake_sink.points] == [1560470400, 1582934400, 5097600, -1]


def test_render_is_repeatable(tmp_path: Path, fake_sink) -> None:
    """Two runs over the same file log identical points."""
    second_sink = type(fake_sink)()

    render_globe(_spec(tmp_path), GlobeConfig(), sink_factory=lambda _: fake_sink)
    render_globe(_spec(tmp_path), GlobeConfig(), sink_factory=lambda _: second_sink)

    assert len(fake_sink.points) == 4
    assert fake_sink.points == second_sink.points

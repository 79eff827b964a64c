"""Unit tests for occurrence emission."""

from __future__ import annotations

import math

import pytest

from core.errors import GlobeSinkError
from core.types import DatasetStyle, Occurrence
from viz.occurrence_emitter import emit_occurrences

RADIUS = 6_371_000.0 * 1.02
STYLE = DatasetStyle(name="tigershark", color=0xFF0000FF, point_radius=100_000.0)


def _occurrence(latitude: float, epoch_time: int) -> Occurrence:
    return Occurrence(
        latitude=latitude,
        longitude=10.0,
        year=2020,
        month=1,
        day=1,
        epoch_time=epoch_time,
    )


def test_emit_occurrences_logs_points_in_order(fake_sink) -> None:
    """Each occurrence should be logged under dataset/index at its epoch time."""
    occurrences = [_occurrence(1.0, 100), _occurrence(2.0, 50)]

    report = emit_occurrences(fake_sink, STYLE, occurrences, "Sightings", RADIUS)

    assert report.emitted == 2
    assert [point["entity_path"] for point in fake_sink.points] == [
        "tigershark/0",
        "tigershark/1",
    ]
    assert fake_sink.times == [("Sightings", 100), ("Sightings", 50)]
    assert fake_sink.points[0]["colors"] == [0xFF0000FF]
    assert fake_sink.points[0]["radii"] == [100_000.0]


def test_emit_occurrences_lifts_points_above_globe(fake_sink) -> None:
    """Points are projected at the lifted radius."""
    emit_occurrences(fake_sink, STYLE, [_occurrence(45.0, 0)], "Sightings", RADIUS)

    x, y, z = fake_sink.points[0]["positions"][0]
    assert math.sqrt(x * x + y * y + z * z) == pytest.approx(RADIUS)


def test_emit_occurrences_keeps_undated_records_by_default(fake_sink) -> None:
    """Sentinel-timed records are emitted at time -1 unless skipped."""
    report = emit_occurrences(fake_sink, STYLE, [_occurrence(1.0, -1)], "Sightings", RADIUS)

    assert report.emitted == 1
    assert fake_sink.points[0]["time"] == -1


def test_emit_occurrences_skip_undated_keeps_path_indices(fake_sink) -> None:
    """Skipping undated records should not renumber later paths."""
    occurrences = [_occurrence(1.0, -1), _occurrence(2.0, 10)]

    report = emit_occurrences(
        fake_sink, STYLE, occurrences, "Sightings", RADIUS, undated_policy="skip"
    )

    assert (report.emitted, report.skipped_undated) == (1, 1)
    assert [point["entity_path"] for point in fake_sink.points] == ["tigershark/1"]


def test_emit_occurrences_aborts_on_sink_failure(fake_sink) -> None:
    """The default policy re-raises sink errors."""
    fake_sink.failing_paths.add("tigershark/0")

    with pytest.raises(GlobeSinkError):
        emit_occurrences(fake_sink, STYLE, [_occurrence(1.0, 0)], "Sightings", RADIUS)

    assert fake_sink.points == []


def test_emit_occurrences_skip_policy_continues_after_failure(fake_sink) -> None:
    """The skip policy counts failures and keeps emitting."""
    fake_sink.failing_paths.add("tigershark/0")
    occurrences = [_occurrence(1.0, 0), _occurrence(2.0, 0)]

    report = emit_occurrences(
        fake_sink, STYLE, occurrences, "Sightings", RADIUS, failure_policy="skip"
    )

    assert (report.emitted, report.failed) == (1, 1)
    assert [point["entity_path"] for point in fake_sink.points] == ["tigershark/1"]

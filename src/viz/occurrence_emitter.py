"""Occurrence emission onto a shared temporal timeline.

Each surviving occurrence becomes one point entity at
``"{dataset}/{index}"``, where ``index`` is its position among the
surviving rows. The timeline is moved to the occurrence's epoch time
before each point is logged.
"""

from __future__ import annotations

from typing import Sequence

from core.errors import GlobeSinkError
from core.logging_config import get_logger
from core.types import (
    DatasetStyle,
    EmissionReport,
    EmitFailurePolicy,
    Occurrence,
    UndatedPolicy,
)
from transforms.geodesic_projection import project_many
from viz.recording_sink import PointSink

_LOGGER = get_logger(__name__)


def emit_occurrences(
    sink: PointSink,
    style: DatasetStyle,
    occurrences: Sequence[Occurrence],
    timeline: str,
    point_sphere_radius: float,
    failure_policy: EmitFailurePolicy = "abort",
    undated_policy: UndatedPolicy = "keep",
) -> EmissionReport:
    """Log every occurrence of one dataset as a styled 3D point.

    Args:
        sink: Connected visualization sink.
        style: Dataset name, color, and point radius.
        occurrences: Surviving occurrences in original row order.
        timeline: Timeline name shared by all datasets.
        point_sphere_radius: Projection radius, already lifted above the globe.
        failure_policy: ``abort`` re-raises sink errors, ``skip`` counts them.
        undated_policy: ``keep`` emits invalid-date records at time -1,
            ``skip`` leaves them out.

    Returns:
        Counts of emitted, skipped, and failed occurrences.

    Raises:
        GlobeSinkError: If a sink call fails under the ``abort`` policy.
    """
    positions = project_many(
        [occurrence.latitude for occurrence in occurrences],
        [occurrence.longitude for occurrence in occurrences],
        point_sphere_radius,
    )
    emitted = skipped_undated = failed = 0
    for index, (occurrence, position) in enumerate(zip(occurrences, positions)):
        if undated_policy == "skip" and not occurrence.has_valid_date:
            skipped_undated += 1
            continue
        entity_path = f"{style.name}/{index}"
        try:
            sink.set_time(timeline, occurrence.epoch_time)
            sink.log_points(
                entity_path,
                [(float(position[0]), float(position[1]), float(position[2]))],
                [style.point_radius],
                [style.color],
            )
        except GlobeSinkError as error:
            if failure_policy == "abort":
                raise
            failed += 1
            _LOGGER.warning("occurrence_emit_failed", entity_path=entity_path, error=str(error))
            continue
        emitted += 1
    report = EmissionReport(
        dataset_name=style.name,
        emitted=emitted,
        skipped_undated=skipped_undated,
        failed=failed,
    )
    _LOGGER.info(
        "occurrences_emitted",
        dataset=style.name,
        emitted=emitted,
        skipped_undated=skipped_undated,
        failed=failed,
    )
    return report

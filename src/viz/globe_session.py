"""End-to-end globe rendering driver.

Every dataset is loaded before the viewer connection is opened, so an
unreadable file aborts the run before anything is drawn. One sink is
used for the whole run and all datasets share one timeline.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from core.config import GlobeConfig
from core.globe_spec import GlobeSpec
from core.logging_config import get_logger
from core.types import EmissionReport, OccurrenceBatch
from ingest.pipeline import load_occurrences
from viz.occurrence_emitter import emit_occurrences
from viz.recording_sink import PointSink, RerunSink
from viz.shape_layers import plot_shape_layer

_LOGGER = get_logger(__name__)

SinkFactory = Callable[[GlobeConfig], PointSink]


def connect_rerun_sink(config: GlobeConfig) -> PointSink:
    """Connect the default rerun sink from runtime configuration."""
    return RerunSink.connect(config.application_id, config.viewer_url)


def render_globe(
    spec: GlobeSpec,
    config: GlobeConfig,
    sink_factory: SinkFactory = connect_rerun_sink,
) -> list[EmissionReport]:
    """Load all datasets, draw background layers, and emit occurrences.

    Args:
        spec: Datasets and layers to render.
        config: Runtime geometry, viewer, and policy settings.
        sink_factory: Builds the connected sink; replaced in tests.

    Returns:
        One emission report per dataset, in spec order.

    Raises:
        GlobeIngestError: If any dataset cannot be read.
        GlobeLayerError: If a background layer cannot be read.
        GlobeSinkError: If the sink fails under the ``abort`` policy.
    """
    batches: list[OccurrenceBatch] = []
    for dataset in spec.datasets:
        read_options = replace(dataset.read_options, infer_schema_rows=config.infer_schema_rows)
        batches.append(load_occurrences(dataset.path, read_options))
    sink = sink_factory(config)
    for layer in spec.layers:
        plot_shape_layer(
            sink,
            layer,
            config.sphere_radius,
            config.max_subdivision_length,
            config.subdivision_depth,
        )
    reports = []
    for dataset, batch in zip(spec.datasets, batches):
        reports.append(
            emit_occurrences(
                sink,
                dataset.style,
                batch.occurrences,
                timeline=spec.defaults.timeline,
                point_sphere_radius=config.point_sphere_radius,
                failure_policy=config.emit_failure_policy,
                undated_policy=config.undated_policy,
            )
        )
    sink.flush()
    _LOGGER.info("globe_rendered", datasets=len(reports), layers=len(spec.layers))
    return reports

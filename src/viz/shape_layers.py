"""Background land and ocean layers from polygon shapefiles.

Polygon rings are read with pyshp, densified so long edges follow the
sphere, projected onto the unlifted globe radius, and logged once as
static line strips.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import shapefile

from core.errors import GlobeLayerError
from core.logging_config import get_logger
from core.types import ShapeLayerSpec
from transforms.geodesic_projection import great_circle_distance, project_many
from viz.recording_sink import PointSink

_LOGGER = get_logger(__name__)

_POLYGON_SHAPE_TYPES = (shapefile.POLYGON, shapefile.POLYGONZ, shapefile.POLYGONM)

LatLon = tuple[float, float]


def read_polygon_rings(path: Path) -> list[list[LatLon]]:
    """Read every polygon ring as ``(lat, lon)`` degree pairs.

    Raises:
        GlobeLayerError: If the shapefile cannot be opened or parsed.
    """
    rings: list[list[LatLon]] = []
    try:
        with shapefile.Reader(str(path)) as reader:
            for shape in reader.iterShapes():
                if shape.shapeType not in _POLYGON_SHAPE_TYPES:
                    continue
                bounds = list(shape.parts) + [len(shape.points)]
                for start, end in zip(bounds, bounds[1:]):
                    ring = [(float(lat), float(lon)) for lon, lat, *_ in shape.points[start:end]]
                    if len(ring) >= 2:
                        rings.append(ring)
    except (shapefile.ShapefileException, OSError) as error:
        raise GlobeLayerError(
            f"Failed to read shape layer at {path}: {error}. Provide a polygon shapefile."
        ) from error
    return rings


def subdivide_ring(
    ring: Sequence[LatLon],
    max_segment_length: float,
    max_depth: int,
    radius: float,
) -> list[LatLon]:
    """Insert midpoints into edges longer than ``max_segment_length``.

    Each edge is halved at most ``max_depth`` times. Rings are assumed
    not to cross the antimeridian.
    """
    if not ring:
        return []
    dense = [ring[0]]
    for start, end in zip(ring, ring[1:]):
        dense.extend(_subdivide_edge(start, end, max_segment_length, max_depth, radius)[1:])
    return dense


def _subdivide_edge(
    start: LatLon,
    end: LatLon,
    max_segment_length: float,
    depth: int,
    radius: float,
) -> list[LatLon]:
    if depth <= 0 or great_circle_distance(start, end, radius) <= max_segment_length:
        return [start, end]
    middle = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
    head = _subdivide_edge(start, middle, max_segment_length, depth - 1, radius)
    tail = _subdivide_edge(middle, end, max_segment_length, depth - 1, radius)
    return head + tail[1:]


def plot_shape_layer(
    sink: PointSink,
    layer: ShapeLayerSpec,
    sphere_radius: float,
    max_segment_length: float,
    max_depth: int,
) -> int:
    """Project one shapefile onto the globe and log it.

    Returns:
        Number of line strips logged.
    """
    strips: list[np.ndarray] = []
    for ring in read_polygon_rings(layer.path):
        dense = subdivide_ring(ring, max_segment_length, max_depth, sphere_radius)
        latitudes = [lat for lat, _ in dense]
        longitudes = [lon for _, lon in dense]
        strips.append(project_many(latitudes, longitudes, sphere_radius))
    sink.log_line_strips(layer.name, strips, layer.color)
    _LOGGER.info("shape_layer_plotted", layer=layer.name, source=str(layer.path), strips=len(strips))
    return len(strips)

"""Latitude/longitude projection onto a sphere.

Frame convention: right-handed, sphere centered at the origin, ``+x``
through (0N, 0E), ``+y`` through (0N, 90E), ``+z`` through the north pole.
Out-of-range degrees are not rejected; they wrap through the
trigonometric functions and still yield finite coordinates.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from core.types import Position3D


def project(
    latitude: float,
    longitude: float,
    radius: float,
    altitude: float = 0.0,
) -> Position3D:
    """Project one point given in decimal degrees to Cartesian coordinates.

    Args:
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        radius: Sphere radius.
        altitude: Extra distance above the sphere surface.

    Returns:
        ``(x, y, z)`` at distance ``radius + altitude`` from the origin.
    """
    lat_rad = math.radians(latitude)
    lon_rad = math.radians(longitude)
    distance = radius + altitude
    cos_lat = math.cos(lat_rad)
    return (
        distance * cos_lat * math.cos(lon_rad),
        distance * cos_lat * math.sin(lon_rad),
        distance * math.sin(lat_rad),
    )


def project_many(
    latitudes: Sequence[float] | np.ndarray,
    longitudes: Sequence[float] | np.ndarray,
    radius: float,
) -> np.ndarray:
    """Vectorized ``project`` returning an ``(N, 3)`` float64 array."""
    lat_rad = np.deg2rad(np.asarray(latitudes, dtype=np.float64))
    lon_rad = np.deg2rad(np.asarray(longitudes, dtype=np.float64))
    cos_lat = np.cos(lat_rad)
    return np.column_stack(
        (
            radius * cos_lat * np.cos(lon_rad),
            radius * cos_lat * np.sin(lon_rad),
            radius * np.sin(lat_rad),
        )
    )


def great_circle_distance(
    start: tuple[float, float],
    end: tuple[float, float],
    radius: float,
) -> float:
    """Haversine distance between two ``(lat, lon)`` degree pairs."""
    lat1, lon1 = (math.radians(value) for value in start)
    lat2, lon2 = (math.radians(value) for value in end)
    half_chord = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * radius * math.asin(min(1.0, math.sqrt(half_chord)))

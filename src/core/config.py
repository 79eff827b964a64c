"""Runtime configuration model for Sharkglobe.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import cast

from core.constants import (
    DEFAULT_APPLICATION_ID,
    DEFAULT_EMIT_FAILURE_POLICY,
    DEFAULT_INFER_SCHEMA_ROWS,
    DEFAULT_MAX_SUBDIVISION_LENGTH,
    DEFAULT_POINT_ALTITUDE_FACTOR,
    DEFAULT_SUBDIVISION_DEPTH,
    DEFAULT_UNDATED_POLICY,
    DEFAULT_VIEWER_URL,
    EARTH_RADIUS_METERS,
    SUPPORTED_EMIT_FAILURE_POLICIES,
    SUPPORTED_UNDATED_POLICIES,
)
from core.errors import GlobeConfigError
from core.types import EmitFailurePolicy, UndatedPolicy


@dataclass(frozen=True)
class GlobeConfig:
    """Validated runtime configuration.

    Attributes:
        sphere_radius: Base globe radius in meters.
        point_altitude_factor: Multiplier lifting points above the surface.
        infer_schema_rows: Number of values sampled for column type inference.
        viewer_url: Endpoint of the running visualization viewer.
        application_id: Recording name shown in the viewer.
        emit_failure_policy: ``abort`` or ``skip`` on sink logging failures.
        undated_policy: ``keep`` or ``skip`` records with the invalid-date sentinel.
        max_subdivision_length: Longest background-layer edge before splitting.
        subdivision_depth: Maximum number of edge halvings per layer edge.
    """

    sphere_radius: float = EARTH_RADIUS_METERS
    point_altitude_factor: float = DEFAULT_POINT_ALTITUDE_FACTOR
    infer_schema_rows: int = DEFAULT_INFER_SCHEMA_ROWS
    viewer_url: str = DEFAULT_VIEWER_URL
    application_id: str = DEFAULT_APPLICATION_ID
    emit_failure_policy: EmitFailurePolicy = cast(EmitFailurePolicy, DEFAULT_EMIT_FAILURE_POLICY)
    undated_policy: UndatedPolicy = cast(UndatedPolicy, DEFAULT_UNDATED_POLICY)
    max_subdivision_length: float = DEFAULT_MAX_SUBDIVISION_LENGTH
    subdivision_depth: int = DEFAULT_SUBDIVISION_DEPTH

    @property
    def point_sphere_radius(self) -> float:
        """Radius used for occurrence points, slightly above the globe."""
        return self.sphere_radius * self.point_altitude_factor

    @classmethod
    def from_env(cls) -> "GlobeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            GlobeConfigError: If environment values are invalid.
        """
        sphere_radius = _parse_float("SHARKGLOBE_SPHERE_RADIUS", EARTH_RADIUS_METERS)
        if sphere_radius <= 0:
            raise GlobeConfigError(
                f"Invalid SHARKGLOBE_SPHERE_RADIUS value {sphere_radius}: must be positive."
            )
        altitude_factor = _parse_float(
            "SHARKGLOBE_POINT_ALTITUDE_FACTOR", DEFAULT_POINT_ALTITUDE_FACTOR
        )
        if altitude_factor < 1.0:
            raise GlobeConfigError(
                f"Invalid SHARKGLOBE_POINT_ALTITUDE_FACTOR value {altitude_factor}: "
                "use 1.0 or more so points are not drawn inside the globe."
            )
        infer_schema_rows = _parse_int("SHARKGLOBE_INFER_SCHEMA_ROWS", DEFAULT_INFER_SCHEMA_ROWS)
        if infer_schema_rows <= 0:
            raise GlobeConfigError(
                f"Invalid SHARKGLOBE_INFER_SCHEMA_ROWS value {infer_schema_rows}: "
                "must be a positive row count."
            )
        max_subdivision_length = _parse_float(
            "SHARKGLOBE_MAX_SUBDIVISION_LENGTH", DEFAULT_MAX_SUBDIVISION_LENGTH
        )
        if max_subdivision_length <= 0:
            raise GlobeConfigError(
                "Invalid SHARKGLOBE_MAX_SUBDIVISION_LENGTH value "
                f"{max_subdivision_length}: must be positive."
            )
        subdivision_depth = _parse_int("SHARKGLOBE_SUBDIVISION_DEPTH", DEFAULT_SUBDIVISION_DEPTH)
        if subdivision_depth < 0:
            raise GlobeConfigError(
                f"Invalid SHARKGLOBE_SUBDIVISION_DEPTH value {subdivision_depth}: "
                "must be zero or more."
            )
        return cls(
            sphere_radius=sphere_radius,
            point_altitude_factor=altitude_factor,
            infer_schema_rows=infer_schema_rows,
            viewer_url=os.getenv("SHARKGLOBE_VIEWER_URL", DEFAULT_VIEWER_URL),
            application_id=os.getenv("SHARKGLOBE_APPLICATION_ID", DEFAULT_APPLICATION_ID),
            emit_failure_policy=cast(
                EmitFailurePolicy,
                _parse_choice(
                    "SHARKGLOBE_EMIT_FAILURE_POLICY",
                    DEFAULT_EMIT_FAILURE_POLICY,
                    SUPPORTED_EMIT_FAILURE_POLICIES,
                ),
            ),
            undated_policy=cast(
                UndatedPolicy,
                _parse_choice(
                    "SHARKGLOBE_UNDATED_POLICY",
                    DEFAULT_UNDATED_POLICY,
                    SUPPORTED_UNDATED_POLICIES,
                ),
            ),
            max_subdivision_length=max_subdivision_length,
            subdivision_depth=subdivision_depth,
        )


def _parse_float(variable: str, default_value: float) -> float:
    """Parse a numeric environment value.

    Args:
        variable: Environment variable name.
        default_value: Value used when the variable is unset.

    Returns:
        Parsed float.

    Raises:
        GlobeConfigError: If value cannot be parsed into float.
    """
    raw_value = os.getenv(variable)
    if raw_value is None:
        return default_value
    try:
        return float(raw_value)
    except ValueError as error:
        raise GlobeConfigError(
            f"Invalid {variable} value: expected a number, got '{raw_value}'. "
            f"Set {variable} to a numeric value."
        ) from error


def _parse_int(variable: str, default_value: int) -> int:
    """Parse an integer environment value.

    Args:
        variable: Environment variable name.
        default_value: Value used when the variable is unset.

    Returns:
        Parsed integer.

    Raises:
        GlobeConfigError: If value cannot be parsed into int.
    """
    raw_value = os.getenv(variable)
    if raw_value is None:
        return default_value
    try:
        return int(raw_value)
    except ValueError as error:
        raise GlobeConfigError(
            f"Invalid {variable} value: expected integer, got '{raw_value}'. "
            f"Set {variable} to a whole number."
        ) from error


def _parse_choice(variable: str, default_value: str, choices: tuple[str, ...]) -> str:
    raw_value = os.getenv(variable, default_value).strip().lower()
    if raw_value in choices:
        return raw_value
    raise GlobeConfigError(
        f"Invalid {variable} value '{raw_value}'. Use one of: {', '.join(choices)}."
    )

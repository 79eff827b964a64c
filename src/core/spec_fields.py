"""Type-safe field parsing helpers for globe-spec files.

This module centralizes primitive parsing so spec loading stays
concise and produces consistent validation errors.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import GlobeSpecError

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a spec entry."""
    value = optional_string(args, field_name)
    if value is None:
        raise GlobeSpecError(f"Globe-spec entry is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a spec entry."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise GlobeSpecError(f"Globe-spec field '{field_name}' must be a string when provided.")


def optional_float(args: Mapping[str, object], field_name: str) -> float | None:
    """Read an optional numeric field from a spec entry."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, bool):
        raise GlobeSpecError(f"Globe-spec field '{field_name}' must be numeric.")
    if isinstance(value, (int, float)):
        return float(value)
    raise GlobeSpecError(f"Globe-spec field '{field_name}' must be numeric.")


def float_with_default(args: Mapping[str, object], field_name: str, default_value: float) -> float:
    """Read a positive numeric field, falling back to a default."""
    value = optional_float(args, field_name)
    if value is None:
        return default_value
    if value <= 0:
        raise GlobeSpecError(f"Globe-spec field '{field_name}' must be positive, got {value}.")
    return value


def parse_color(args: Mapping[str, object], field_name: str, default_value: int) -> int:
    """Read a packed ``0xRRGGBBAA`` color.

    Accepts an integer or a ``#RRGGBB`` / ``#RRGGBBAA`` hex string.
    Six-digit strings are treated as fully opaque.
    """
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        raise GlobeSpecError(f"Globe-spec field '{field_name}' must be a color.")
    if isinstance(value, int):
        if 0 <= value <= 0xFFFFFFFF:
            return value
        raise GlobeSpecError(
            f"Globe-spec field '{field_name}' must fit in 0xRRGGBBAA, got {value}."
        )
    if isinstance(value, str):
        return _parse_hex_color(value.strip(), field_name)
    raise GlobeSpecError(f"Globe-spec field '{field_name}' must be a color.")


def _parse_hex_color(raw_value: str, field_name: str) -> int:
    digits = raw_value[1:] if raw_value.startswith("#") else raw_value
    if digits.lower().startswith("0x"):
        digits = digits[2:]
    if len(digits) not in (6, 8) or not set(digits) <= _HEX_DIGITS:
        raise GlobeSpecError(
            f"Invalid color '{raw_value}' for field '{field_name}'. Use #RRGGBB or #RRGGBBAA."
        )
    if len(digits) == 6:
        digits += "FF"
    return int(digits, 16)

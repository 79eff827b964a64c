"""Sharkglobe CLI entry points.

This module exposes commands to summarize occurrence files, project
coordinates, and render a globe spec. It maps argparse commands onto
SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Any, Sequence

from core.config import GlobeConfig
from core.constants import DEFAULT_DELIMITER
from core.errors import GlobeError
from core.globe_spec import load_globe_spec
from core.types import ColumnReadOptions
from ingest.pipeline import load_occurrences
from transforms.geodesic_projection import project
from viz.globe_session import render_globe


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="sharkglobe",
        description="Plot GBIF shark occurrences on a 3D globe",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_summarize_command(subparsers)
    _add_render_command(subparsers)
    _add_project_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Sharkglobe CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = GlobeConfig.from_env()
        if args.command == "summarize":
            return _run_summarize_command(config, args)
        if args.command == "render":
            return _run_render_command(config, args)
        if args.command == "project":
            return _run_project_command(config, args)
    except GlobeError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_summarize_command(config: GlobeConfig, args: argparse.Namespace) -> int:
    """Handle summarize command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = ColumnReadOptions(
        delimiter=args.delimiter,
        infer_schema_rows=config.infer_schema_rows,
    )
    batch = load_occurrences(args.file, options)
    print(f"rows\t{batch.row_count}")
    print(f"kept\t{len(batch.occurrences)}")
    print(f"dropped\t{len(batch.dropped_rows)}")
    print(f"undated\t{batch.undated_count}")
    if args.schema:
        for name, type_name in batch.column_types.items():
            print(f"column\t{name}\t{type_name}")
    return 0


def _run_render_command(config: GlobeConfig, args: argparse.Namespace) -> int:
    """Handle render command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    if args.viewer_url:
        config = replace(config, viewer_url=args.viewer_url)
    spec = load_globe_spec(args.spec_file)
    for report in render_globe(spec, config):
        print(
            f"{report.dataset_name}\t"
            f"{report.emitted}\t"
            f"{report.skipped_undated}\t"
            f"{report.failed}"
        )
    return 0


def _run_project_command(config: GlobeConfig, args: argparse.Namespace) -> int:
    """Handle project command."""
    radius = args.radius if args.radius is not None else config.point_sphere_radius
    x, y, z = project(args.latitude, args.longitude, radius, altitude=args.altitude)
    print(f"{x:.6f}\t{y:.6f}\t{z:.6f}")
    return 0


def _add_summarize_command(subparsers: Any) -> None:
    """Register summarize subcommand."""
    parser = subparsers.add_parser("summarize", help="Load one occurrence file and print counts")
    parser.add_argument("file", help="GBIF occurrence export")
    parser.add_argument("--delimiter", default=DEFAULT_DELIMITER, help="Field delimiter")
    parser.add_argument("--schema", action="store_true", help="Also print inferred column types")


def _add_render_command(subparsers: Any) -> None:
    """Register render subcommand."""
    parser = subparsers.add_parser("render", help="Render a YAML globe spec to the viewer")
    parser.add_argument("spec_file", help="Path to YAML globe spec")
    parser.add_argument("--viewer-url", help="Override SHARKGLOBE_VIEWER_URL for this command")


def _add_project_command(subparsers: Any) -> None:
    """Register project subcommand."""
    parser = subparsers.add_parser("project", help="Project one coordinate onto the globe")
    parser.add_argument("latitude", type=float, help="Latitude in decimal degrees")
    parser.add_argument("longitude", type=float, help="Longitude in decimal degrees")
    parser.add_argument("--radius", type=float, help="Sphere radius, default lifted globe radius")
    parser.add_argument(
        "--altitude",
        type=float,
        default=0.0,
        help="Extra distance above the sphere surface",
    )

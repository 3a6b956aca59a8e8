#!/usr/bin/env python3
"""
beadify.py
Turn an image into a bead grid and report the bead colours it needs.

Usage:
  python beadify.py INPUT --cols N --rows M [--palette mapping.json --system NAME]
                    [--mode dominant|average] [--dither none|floyd-steinberg|bayer]
                    [--strength S] [--max-colours K [--preview-merges]] [--debug]

Modes:
  dominant : each cell takes the most common opaque colour in its area.
  average  : each cell takes the mean opaque colour in its area.

Dithering:
  floyd-steinberg : error diffusion on the image resized to the grid.
  bayer           : 4x4 ordered pattern on the image resized to the grid.

Palette:
  A JSON mapping {"#RRGGBB": {"SYSTEM": "KEY"}}. Without --palette the
  built-in BASIC palette is used.

Output:
  Colour usage per bead colour, most used first. Rendering and export live
  elsewhere.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from PIL import UnidentifiedImageError

from bead_map.colour_merge import (
    apply_colour_merge,
    calculate_merge_plan,
    collect_colour_usage,
    merge_preview,
)
from bead_map.constants import DEFAULT_COLS, DEFAULT_DITHER_STRENGTH, DEFAULT_ROWS
from bead_map.core_types import GridDimensions
from bead_map.dither import DITHER_ALGORITHMS
from bead_map.image_io import RESAMPLE_FILTERS, load_image_rgba
from bead_map.nearest import ColourLookupTable
from bead_map.palette_data import (
    BUILTIN_MAPPING,
    BUILTIN_SYSTEM,
    build_palette,
    colour_systems,
    load_colour_mapping,
)
from bead_map.pipeline import generate_grid
from bead_map.pixelate import PIXELATION_MODES
from bead_map.utils import (
    debug_log,
    error,
    format_duration,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    print_merge_steps,
    print_usage_report,
    warn,
)


def parse_cli_args(argv=None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: image path
        cols, rows: grid size
        palette: optional Path to a colour-system mapping
        system: colour system name
        mode: "dominant" | "average"
        dither: "none" | "floyd-steinberg" | "bayer"
        strength: dither strength 0..1
        resample: resize filter for dithering
        max_colours: optional colour cap applied after generation
        preview_merges: list merge steps instead of applying them
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="beadify",
        description="Convert an image into a bead grid and list the bead colours used.",
    )
    parser.add_argument("src", type=Path, help="Input image")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Grid columns")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Grid rows")
    parser.add_argument(
        "--palette",
        type=Path,
        default=None,
        help="Colour-system mapping JSON (default: built-in BASIC palette)",
    )
    parser.add_argument(
        "--system", default=None, help="Colour system in the mapping (default: first)"
    )
    parser.add_argument(
        "--mode", choices=list(PIXELATION_MODES), default="dominant", help="Cell sampling"
    )
    parser.add_argument(
        "--dither", choices=list(DITHER_ALGORITHMS), default="none", help="Dithering"
    )
    parser.add_argument(
        "--strength",
        type=float,
        default=DEFAULT_DITHER_STRENGTH,
        help="Dither strength in [0, 1]",
    )
    parser.add_argument(
        "--resample",
        choices=list(RESAMPLE_FILTERS),
        default="bilinear",
        help="Resize filter used before dithering",
    )
    parser.add_argument(
        "--max-colours",
        dest="max_colours",
        type=int,
        default=None,
        help="Merge similar colours until at most K remain",
    )
    parser.add_argument(
        "--preview-merges",
        dest="preview_merges",
        action="store_true",
        help="With --max-colours, list the merges without applying them",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def _load_palette(args: argparse.Namespace):
    """Resolve (palette, system) from the CLI arguments."""
    if args.palette is None:
        mapping = BUILTIN_MAPPING
    else:
        mapping = load_colour_mapping(args.palette)
    systems = colour_systems(mapping)
    system = args.system or (systems[0] if systems else BUILTIN_SYSTEM)
    if system not in systems:
        warn(f"colour system {system!r} not in mapping (have: {', '.join(systems)})")
    return build_palette(mapping, system), system


def main(argv=None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = parse_cli_args(argv)
    t_start = time.perf_counter()

    src: Path = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if args.cols <= 0 or args.rows <= 0:
        error("--cols and --rows must be positive")
        return 2

    try:
        palette, system = _load_palette(args)
    except (OSError, ValueError) as e:
        error(f"cannot read palette: {e}")
        return 1
    if not palette:
        warn("palette is empty; every bead will map to ERR")

    print_banner(src.name)
    print_config_line(
        "grid",
        [
            ("Cols", args.cols),
            ("Rows", args.rows),
            ("Mode", args.mode),
            ("Dither", args.dither),
            ("Strength", float(args.strength)),
            ("System", system),
            ("Palette", len(palette)),
        ],
        debug=False,
    )

    try:
        rgba = load_image_rgba(src)
    except (UnidentifiedImageError, OSError) as e:
        error(f"cannot open image: {e}")
        return 1
    if args.debug:
        debug_log(key_value_pairs_to_string([("Loaded", f"{rgba.shape[1]}x{rgba.shape[0]}")]))

    dims = GridDimensions(cols=args.cols, rows=args.rows)
    table = ColourLookupTable()
    grid = generate_grid(
        rgba,
        dims,
        palette,
        mode=args.mode,
        dither=args.dither,
        strength=args.strength,
        table=table,
        resample=args.resample,
        debug=args.debug,
    )

    if args.max_colours is not None:
        usage = collect_colour_usage(grid)
        if args.preview_merges:
            print_merge_steps(merge_preview(usage, args.max_colours), args.max_colours)
        else:
            plan = calculate_merge_plan(usage, args.max_colours)
            grid = apply_colour_merge(grid, plan)
            log(
                f"Colours: {plan.colours_before} -> {plan.colours_after}"
                f" ({plan.merged_count} merged)"
            )

    print_usage_report(grid)
    log(f"Total time {format_duration(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

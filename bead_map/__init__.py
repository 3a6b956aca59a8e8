# bead_map/__init__.py
"""
bead_map package.

Purpose:
  Turn a raster image into a grid of bead colours from a fixed palette and
  edit that grid cell by cell. See beadify.py for the CLI.

Public API:
  generate_grid        : RGBA buffer -> bead grid (pixelate or dither).
  calculate_pixel_grid : dominant/average cell sampler.
  floyd_steinberg_dither, bayer_dither : dithering onto the palette.
  find_closest, ColourLookupTable     : exact and table-backed nearest colour.
  optimise_colours, calculate_merge_plan, merge_preview, apply_colour_merge
                       : greedy palette reduction.
  edit                 : fills, painting, shapes, colour statistics.
  palette_data         : colour-system mappings and palette builders.
  core_types           : Cell, PaletteEntry, GridDimensions, Grid aliases.

Quick start:
  from bead_map import generate_grid, GridDimensions, build_palette, BUILTIN_MAPPING
  palette = build_palette(BUILTIN_MAPPING, "BASIC")
  grid = generate_grid(rgba, GridDimensions(52, 52), palette)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_metric
from . import core_types
from . import palette_data
from . import edit
from . import dither
from . import utils

from .core_types import (  # noqa: E402,F401
    ERROR_ENTRY,
    TRANSPARENT_CELL,
    Cell,
    Grid,
    GridDimensions,
    PaletteEntry,
    make_entry,
)
from .nearest import ColourLookupTable, find_closest, find_closest_fast  # noqa: E402,F401
from .pixelate import calculate_pixel_grid  # noqa: E402,F401
from .dither import bayer_dither, floyd_steinberg_dither  # noqa: E402,F401
from .colour_merge import (  # noqa: E402,F401
    apply_colour_merge,
    calculate_merge_plan,
    collect_colour_usage,
    merge_preview,
    optimise_colours,
)
from .palette_data import BUILTIN_MAPPING, BUILTIN_SYSTEM, build_palette  # noqa: E402,F401
from .pipeline import generate_grid  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_metric",
    "core_types",
    "palette_data",
    "edit",
    "dither",
    "utils",
    "ERROR_ENTRY",
    "TRANSPARENT_CELL",
    "Cell",
    "Grid",
    "GridDimensions",
    "PaletteEntry",
    "make_entry",
    "ColourLookupTable",
    "find_closest",
    "find_closest_fast",
    "calculate_pixel_grid",
    "bayer_dither",
    "floyd_steinberg_dither",
    "apply_colour_merge",
    "calculate_merge_plan",
    "collect_colour_usage",
    "merge_preview",
    "optimise_colours",
    "BUILTIN_MAPPING",
    "BUILTIN_SYSTEM",
    "build_palette",
    "generate_grid",
]

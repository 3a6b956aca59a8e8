# bead_map/edit/__init__.py
"""
Pixel-grid editing API.

Every operation is a pure function from (grid, parameters) to a grid. Rows
that an edit does not touch are the same objects in the result, so keeping
old grids around for undo costs only the changed rows.

Provides:
  fills  : flood_fill, flood_fill_erase, connected_region, region_centre
  paint  : paint_pixel (None = no change), paint_cells, paint_brush,
           replace_colour, pick_colour
  shapes : line_cells, rect_cells, circle_cells, brush_cells, mirror_cells
  stats  : colour_stats, ColourStatsCache
  grid   : create_empty_grid, check_grid, clamp_grid, cell_at
"""

from .fill import connected_region, flood_fill, flood_fill_erase, region_centre
from .grid import cell_at, check_grid, clamp_grid, create_empty_grid, write_cells
from .paint import paint_brush, paint_cells, paint_pixel, pick_colour, replace_colour
from .shapes import (
    SYMMETRY_MODES,
    Symmetry,
    brush_cells,
    circle_cells,
    line_cells,
    mirror_cells,
    rect_cells,
)
from .stats import ColourStat, ColourStats, ColourStatsCache, colour_stats

__all__ = [
    "flood_fill",
    "flood_fill_erase",
    "connected_region",
    "region_centre",
    "create_empty_grid",
    "check_grid",
    "clamp_grid",
    "cell_at",
    "write_cells",
    "paint_pixel",
    "paint_cells",
    "paint_brush",
    "replace_colour",
    "pick_colour",
    "Symmetry",
    "SYMMETRY_MODES",
    "line_cells",
    "rect_cells",
    "circle_cells",
    "brush_cells",
    "mirror_cells",
    "ColourStat",
    "ColourStats",
    "ColourStatsCache",
    "colour_stats",
]

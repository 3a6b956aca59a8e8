# bead_map/edit/paint.py
from __future__ import annotations

"""
Direct cell painting.

Exports:
  paint_pixel(grid, row, col, value) -> Grid | None
  paint_cells(grid, dims, cells, value) -> Grid
  paint_brush(grid, dims, col, row, value, size=1, symmetry="none") -> Grid
  replace_colour(grid, dims, source_hex, target) -> (Grid, int)
  pick_colour(grid, palette, row, col) -> PaletteEntry | None

paint_pixel returns None for "no change" so callers can skip recording an
undo step. Everything else returns the input grid object when nothing changed.
"""

from typing import Iterable, Optional, Sequence, Tuple

from ..core_types import Cell, CellCoord, Grid, GridDimensions, PaletteEntry
from .grid import cell_at, check_grid, in_bounds, write_cells
from .shapes import Symmetry, brush_cells, mirror_cells


def paint_pixel(grid: Grid, row: int, col: int, value: Cell) -> Optional[Grid]:
    """New grid with one cell changed, or None if out of bounds or already equal."""
    cell = cell_at(grid, row, col)
    if cell is None or cell == value:
        return None
    return write_cells(grid, ((row, col, value),))


def paint_cells(
    grid: Grid, dims: GridDimensions, cells: Iterable[CellCoord], value: Cell
) -> Grid:
    """
    Paint (col, row) cells, skipping those off-grid or already equal to value.

    Each touched row is copied once however many of its cells are painted.
    """
    check_grid(grid, dims)
    writes = (
        (row, col, value)
        for col, row in cells
        if in_bounds(dims, row, col) and grid[row][col] != value
    )
    return write_cells(grid, writes)


def paint_brush(
    grid: Grid,
    dims: GridDimensions,
    col: int,
    row: int,
    value: Cell,
    size: int = 1,
    symmetry: Symmetry = "none",
) -> Grid:
    """Pencil/eraser stroke: square brush at (col, row) with optional mirroring."""
    cells = mirror_cells(brush_cells(col, row, size), dims, symmetry)
    return paint_cells(grid, dims, cells, value)


def replace_colour(
    grid: Grid, dims: GridDimensions, source_hex: str, target: Cell
) -> Tuple[Grid, int]:
    """Swap every bead of source_hex (case-insensitive) for target. Returns (grid, count)."""
    check_grid(grid, dims)
    src = source_hex.upper()
    painted = Cell(target.key, target.color, False)
    writes = [
        (j, i, painted)
        for j, row in enumerate(grid)
        for i, cell in enumerate(row)
        if not cell.is_external and cell.color.upper() == src
    ]
    return write_cells(grid, writes), len(writes)


def pick_colour(
    grid: Grid, palette: Sequence[PaletteEntry], row: int, col: int
) -> Optional[PaletteEntry]:
    """Palette entry matching the bead at (row, col), if any."""
    cell = cell_at(grid, row, col)
    if cell is None or cell.is_external:
        return None
    hx = cell.color.upper()
    for entry in palette:
        if entry.hex.upper() == hx:
            return entry
    return None


__all__ = [
    "paint_pixel",
    "paint_cells",
    "paint_brush",
    "replace_colour",
    "pick_colour",
]

# bead_map/edit/fill.py
from __future__ import annotations

"""
4-connected region fills.

Exports:
  flood_fill(grid, dims, row, col, fill) -> Grid
  flood_fill_erase(grid, dims, row, col, target_key) -> Grid
  connected_region(grid, row, col, target_color) -> list[(row, col)]
  region_centre(region) -> (row, col)

Traversal uses an explicit stack and a visited map sized to the grid, so deep
regions never hit the recursion limit.
"""

from typing import Callable, List, Tuple

from ..core_types import TRANSPARENT_CELL, Cell, Grid, GridDimensions
from .grid import cell_at, check_grid, write_cells


def _region(
    grid: Grid,
    dims: GridDimensions,
    start_row: int,
    start_col: int,
    matches: Callable[[Cell], bool],
) -> List[Tuple[int, int]]:
    rows, cols = dims.rows, dims.cols
    visited = bytearray(rows * cols)
    region: List[Tuple[int, int]] = []
    stack = [(start_row, start_col)]
    while stack:
        row, col = stack.pop()
        if row < 0 or row >= rows or col < 0 or col >= cols:
            continue
        k = row * cols + col
        if visited[k]:
            continue
        visited[k] = 1
        if not matches(grid[row][col]):
            continue
        region.append((row, col))
        stack.append((row - 1, col))
        stack.append((row + 1, col))
        stack.append((row, col - 1))
        stack.append((row, col + 1))
    return region


def flood_fill(
    grid: Grid, dims: GridDimensions, row: int, col: int, fill: Cell
) -> Grid:
    """
    Paint the region sharing the start cell's colour and external flag.

    Returns the input grid unchanged when the start is outside the grid or the
    fill already matches the start cell's colour and flag.
    """
    check_grid(grid, dims)
    start = cell_at(grid, row, col)
    if start is None:
        return grid
    target_color = start.color
    target_external = start.is_external
    if fill.color == target_color and fill.is_external == target_external:
        return grid

    region = _region(
        grid,
        dims,
        row,
        col,
        lambda c: c.color == target_color and c.is_external == target_external,
    )
    return write_cells(grid, ((r, c, fill) for r, c in region))


def flood_fill_erase(
    grid: Grid, dims: GridDimensions, row: int, col: int, target_key: str
) -> Grid:
    """Erase the region of non-erased cells keyed target_key that contains (row, col)."""
    check_grid(grid, dims)
    if cell_at(grid, row, col) is None:
        return grid
    region = _region(
        grid,
        dims,
        row,
        col,
        lambda c: not c.is_external and c.key == target_key,
    )
    return write_cells(grid, ((r, c, TRANSPARENT_CELL) for r, c in region))


def connected_region(
    grid: Grid, row: int, col: int, target_color: str
) -> List[Tuple[int, int]]:
    """(row, col) cells 4-connected to the start that are beads of target_color."""
    if cell_at(grid, row, col) is None:
        return []
    dims = GridDimensions(cols=len(grid[0]), rows=len(grid))
    return _region(
        grid,
        dims,
        row,
        col,
        lambda c: not c.is_external and c.color == target_color,
    )


def region_centre(region: List[Tuple[int, int]]) -> Tuple[int, int]:
    """Floored mean (row, col) of a region; (0, 0) when empty."""
    if not region:
        return (0, 0)
    total_row = sum(r for r, _c in region)
    total_col = sum(c for _r, c in region)
    return (total_row // len(region), total_col // len(region))


__all__ = ["flood_fill", "flood_fill_erase", "connected_region", "region_centre"]

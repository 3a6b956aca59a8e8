# bead_map/edit/grid.py
from __future__ import annotations

"""
Grid construction, shape checks and the shared copy-on-write writer.

Grids are tuples of row tuples. An edit never touches an input row; it copies
each changed row once and reuses every other row object as-is.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from ..core_types import TRANSPARENT_CELL, Cell, Grid, GridDimensions


def create_empty_grid(dims: GridDimensions) -> Grid:
    """dims.rows x dims.cols grid of transparent cells."""
    row = tuple(TRANSPARENT_CELL for _ in range(dims.cols))
    # rows are immutable, one shared row object is enough
    return tuple(row for _ in range(dims.rows))


def check_grid(grid: Grid, dims: GridDimensions) -> Grid:
    """Assert the grid has dims.rows rows of dims.cols cells."""
    assert len(grid) == dims.rows, f"grid has {len(grid)} rows, expected {dims.rows}"
    for j, row in enumerate(grid):
        assert len(row) == dims.cols, (
            f"row {j} has {len(row)} cells, expected {dims.cols}"
        )
    return grid


def clamp_grid(grid: Grid, dims: GridDimensions) -> Grid:
    """
    Force the grid to dims, padding with transparent cells or truncating.

    Rows that already have the right length are reused.
    """
    out: List[Tuple[Cell, ...]] = []
    for j in range(dims.rows):
        row = grid[j] if j < len(grid) else ()
        if len(row) == dims.cols:
            out.append(row)
        elif len(row) > dims.cols:
            out.append(tuple(row[: dims.cols]))
        else:
            out.append(tuple(row) + (TRANSPARENT_CELL,) * (dims.cols - len(row)))
    return tuple(out)


def in_bounds(dims: GridDimensions, row: int, col: int) -> bool:
    return 0 <= row < dims.rows and 0 <= col < dims.cols


def cell_at(grid: Grid, row: int, col: int) -> Optional[Cell]:
    """Cell at (row, col), or None outside the grid. Negative indices do not wrap."""
    if row < 0 or col < 0 or row >= len(grid):
        return None
    cells = grid[row]
    if col >= len(cells):
        return None
    return cells[col]


def write_cells(grid: Grid, writes: Iterable[Tuple[int, int, Cell]]) -> Grid:
    """
    Apply (row, col, cell) writes, copying each touched row on its first write.

    Returns the input grid object itself when there are no writes.
    """
    copied: Dict[int, List[Cell]] = {}
    for row, col, cell in writes:
        new_row = copied.get(row)
        if new_row is None:
            new_row = list(grid[row])
            copied[row] = new_row
        new_row[col] = cell
    if not copied:
        return grid
    return tuple(
        tuple(copied[j]) if j in copied else grid[j] for j in range(len(grid))
    )


__all__ = [
    "create_empty_grid",
    "check_grid",
    "clamp_grid",
    "in_bounds",
    "cell_at",
    "write_cells",
]

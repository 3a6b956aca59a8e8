# bead_map/edit/shapes.py
from __future__ import annotations

"""
Shape rasterisation. Pure geometry: every function returns (col, row) cells
and knows nothing about grid contents or bounds.

Also holds the pencil helpers: square brush stamps and mirror symmetry.
"""

from typing import Dict, Iterable, List, Literal, Set, Tuple

from ..core_types import CellCoord, GridDimensions

Symmetry = Literal["none", "horizontal", "vertical", "both"]
SYMMETRY_MODES: Tuple[str, ...] = ("none", "horizontal", "vertical", "both")


def line_cells(c0: int, r0: int, c1: int, r1: int) -> List[CellCoord]:
    """Bresenham line from (c0, r0) to (c1, r1), both endpoints included once."""
    cells: List[CellCoord] = []
    x, y = c0, r0
    dx = abs(c1 - c0)
    dy = abs(r1 - r0)
    sx = 1 if c0 < c1 else -1
    sy = 1 if r0 < r1 else -1
    err = dx - dy
    while True:
        cells.append((x, y))
        if x == c1 and y == r1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return cells


def rect_cells(c0: int, r0: int, c1: int, r1: int, filled: bool) -> List[CellCoord]:
    """Box from two opposite corners in any order; border only unless filled."""
    min_c, max_c = min(c0, c1), max(c0, c1)
    min_r, max_r = min(r0, r1), max(r0, r1)
    cells: List[CellCoord] = []
    for r in range(min_r, max_r + 1):
        for c in range(min_c, max_c + 1):
            if filled or r in (min_r, max_r) or c in (min_c, max_c):
                cells.append((c, r))
    return cells


def circle_cells(cx: int, cy: int, radius: int, filled: bool) -> List[CellCoord]:
    """
    Circle around (cx, cy).

    Filled keeps every cell with dx^2 + dy^2 <= r^2. Outline uses the midpoint
    algorithm; its octant images overlap, so points are deduplicated in
    emission order. Radius <= 0 gives just the centre.
    """
    seen: Set[CellCoord] = set()
    cells: List[CellCoord] = []

    def add(col: int, row: int) -> None:
        if (col, row) not in seen:
            seen.add((col, row))
            cells.append((col, row))

    if radius <= 0:
        add(cx, cy)
        return cells

    if filled:
        r2 = radius * radius
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx * dx + dy * dy <= r2:
                    add(cx + dx, cy + dy)
        return cells

    def plot_octants(px: int, py: int) -> None:
        add(cx + px, cy + py)
        add(cx - px, cy + py)
        add(cx + px, cy - py)
        add(cx - px, cy - py)
        add(cx + py, cy + px)
        add(cx - py, cy + px)
        add(cx + py, cy - px)
        add(cx - py, cy - px)

    x, y = radius, 0
    d = 1 - radius
    plot_octants(x, y)
    while x > y:
        y += 1
        if d <= 0:
            d += 2 * y + 1
        else:
            x -= 1
            d += 2 * (y - x) + 1
        plot_octants(x, y)
    return cells


def brush_cells(col: int, row: int, size: int) -> List[CellCoord]:
    """Square stamp centred on (col, row) reaching size // 2 cells each way."""
    half = max(0, int(size)) // 2
    return [
        (col + dx, row + dy)
        for dy in range(-half, half + 1)
        for dx in range(-half, half + 1)
    ]


def mirror_cells(
    cells: Iterable[CellCoord], dims: GridDimensions, symmetry: Symmetry
) -> List[CellCoord]:
    """
    Cells plus their mirror images, deduplicated in emission order.

    horizontal mirrors across the vertical centre line, vertical across the
    horizontal one. both adds each of those images but not the diagonal one.
    """
    if symmetry not in SYMMETRY_MODES:
        raise ValueError(f"unknown symmetry {symmetry!r}")
    base = list(cells)
    out: Dict[CellCoord, None] = dict.fromkeys(base)
    if symmetry in ("horizontal", "both"):
        for c, r in base:
            out.setdefault((dims.cols - 1 - c, r))
    if symmetry in ("vertical", "both"):
        for c, r in base:
            out.setdefault((c, dims.rows - 1 - r))
    return list(out)


__all__ = [
    "Symmetry",
    "SYMMETRY_MODES",
    "line_cells",
    "rect_cells",
    "circle_cells",
    "brush_cells",
    "mirror_cells",
]

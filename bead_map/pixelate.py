# bead_map/pixelate.py
from __future__ import annotations

"""
Pixelation sampler.

Downsamples an RGBA buffer into an N x M grid. Each cell takes one
representative colour from its source rectangle (dominant or average of the
opaque pixels) and maps it to the palette through the lookup table.

Source rectangles use floor for the start and ceil for the end of each span,
so neighbouring cells can share one source pixel at the seam but no source
pixel is ever skipped.
"""

import math
from typing import List, Literal, Optional, Sequence, Tuple

import numpy as np

from .constants import ALPHA_THRESHOLD
from .core_types import (
    TRANSPARENT_CELL,
    Cell,
    Grid,
    GridDimensions,
    PaletteEntry,
    RGBTuple,
    assert_u8_rgba,
    entry_cell,
    round_half_up,
)
from .edit.grid import create_empty_grid
from .nearest import ColourLookupTable

PixelationMode = Literal["dominant", "average"]
PIXELATION_MODES: Tuple[str, ...] = ("dominant", "average")


def cell_spans(source_len: int, cells: int) -> List[Tuple[int, int]]:
    """[start, stop) source span for each of `cells` cells along one axis."""
    if cells < 1:
        return []
    size = source_len / cells
    spans: List[Tuple[int, int]] = []
    for i in range(cells):
        start = math.floor(i * size)
        stop = min(source_len, math.ceil((i + 1) * size))
        spans.append((start, start + max(1, stop - start)))
    return spans


def cell_representative_colour(
    block: np.ndarray, mode: PixelationMode
) -> Optional[RGBTuple]:
    """
    Representative RGB of one source rectangle.

    Args:
      block: uint8 [h,w,4]
      mode : "average" (rounded mean) or "dominant" (most frequent exact RGB,
             ties go to the colour that reached the top count first in
             row-major order)
    Returns:
      RGB tuple, or None if every pixel is below the alpha threshold
    """
    opaque = block[..., 3] >= ALPHA_THRESHOLD
    pixels = block[..., :3][opaque]
    count = int(pixels.shape[0])
    if count == 0:
        return None

    if mode == "average":
        sums = pixels.sum(axis=0, dtype=np.int64)
        return (
            round_half_up(int(sums[0]) / count),
            round_half_up(int(sums[1]) / count),
            round_half_up(int(sums[2]) / count),
        )

    px = pixels.astype(np.int64, copy=False)
    packed = (px[:, 0] << 16) | (px[:, 1] << 8) | px[:, 2]
    uniq, counts = np.unique(packed, return_counts=True)
    top = int(counts.max())
    tied = uniq[counts == top]
    if tied.shape[0] == 1:
        winner = int(tied[0])
    else:
        # the tied colour whose top-th occurrence comes first reached the max first
        reached_at = [int(np.flatnonzero(packed == c)[top - 1]) for c in tied]
        winner = int(tied[int(np.argmin(reached_at))])
    return ((winner >> 16) & 0xFF, (winner >> 8) & 0xFF, winner & 0xFF)


def calculate_pixel_grid(
    rgba: np.ndarray,
    dims: GridDimensions,
    palette: Sequence[PaletteEntry],
    mode: PixelationMode,
    fallback: PaletteEntry,
    table: Optional[ColourLookupTable] = None,
) -> Grid:
    """
    Sample an RGBA buffer into a fully populated dims.rows x dims.cols grid.

    Cells with no opaque pixel become the transparent cell. A zero-sized
    source gives a grid filled with `fallback`. A grid with no columns or no
    rows is returned empty.
    """
    if mode not in PIXELATION_MODES:
        raise ValueError(f"unknown pixelation mode {mode!r}")
    assert_u8_rgba(rgba)
    n, m = int(dims.cols), int(dims.rows)
    if n < 1 or m < 1:
        return create_empty_grid(GridDimensions(cols=max(0, n), rows=max(0, m)))
    height, width = int(rgba.shape[0]), int(rgba.shape[1])

    fallback_cell = entry_cell(fallback)
    if height == 0 or width == 0:
        return tuple(tuple(fallback_cell for _ in range(n)) for _ in range(m))

    if table is None:
        table = ColourLookupTable()
    table.ensure_built(palette)

    x_spans = cell_spans(width, n)
    y_spans = cell_spans(height, m)

    rows: List[Tuple[Cell, ...]] = []
    for y0, y1 in y_spans:
        band = rgba[y0:y1]
        row: List[Cell] = []
        for x0, x1 in x_spans:
            rgb = cell_representative_colour(band[:, x0:x1], mode)
            if rgb is None:
                row.append(TRANSPARENT_CELL)
            else:
                row.append(entry_cell(table.lookup(rgb, palette)))
        rows.append(tuple(row))
    return tuple(rows)


__all__ = [
    "PixelationMode",
    "PIXELATION_MODES",
    "cell_spans",
    "cell_representative_colour",
    "calculate_pixel_grid",
]

# bead_map/pipeline.py
from __future__ import annotations

"""
Grid generation: source buffer -> bead grid.

Exports:
  entries_to_grid(entries) -> Grid
  generate_grid(rgba, dims, palette, *, mode, dither, strength, table, resample, debug) -> Grid

With dither "none" the pixelation sampler works on the full-size buffer.
Otherwise the buffer is first resized to exactly cols x rows and handed to the
chosen dither, whose palette entries are then turned into cells.
"""

import time
from typing import Optional, Sequence

import numpy as np

from .constants import DEFAULT_DITHER_STRENGTH
from .core_types import (
    TRANSPARENT_CELL,
    EntryGrid,
    Grid,
    GridDimensions,
    PaletteEntry,
    assert_u8_rgba,
    entry_cell,
    make_entry,
)
from .dither import DITHER_ALGORITHMS, DitherAlgorithm, bayer_dither, floyd_steinberg_dither
from .edit.grid import create_empty_grid
from .image_io import pillow_resample_from_name, resize_rgba
from .nearest import ColourLookupTable
from .pixelate import PixelationMode, calculate_pixel_grid
from .utils import debug_log, format_duration, key_value_pairs_to_string

# Used when the palette is empty so the sampler still has a fallback.
DEFAULT_FALLBACK = make_entry("?", "#FFFFFF")


def entries_to_grid(entries: EntryGrid) -> Grid:
    """Palette entries to cells; None (transparent pixel) becomes the transparent cell."""
    return tuple(
        tuple(TRANSPARENT_CELL if e is None else entry_cell(e) for e in row)
        for row in entries
    )


def generate_grid(
    rgba: Optional[np.ndarray],
    dims: GridDimensions,
    palette: Sequence[PaletteEntry],
    *,
    mode: PixelationMode = "dominant",
    dither: DitherAlgorithm = "none",
    strength: float = DEFAULT_DITHER_STRENGTH,
    table: Optional[ColourLookupTable] = None,
    resample: str = "bilinear",
    debug: bool = False,
) -> Grid:
    """
    Build a dims.rows x dims.cols grid from an RGBA buffer.

    No buffer gives an empty (all transparent) grid. A size with no columns
    or no rows gives a grid with no cells.
    """
    if dither not in DITHER_ALGORITHMS:
        raise ValueError(f"unknown dither algorithm {dither!r}")
    if dims.cols < 1 or dims.rows < 1:
        return create_empty_grid(
            GridDimensions(cols=max(0, dims.cols), rows=max(0, dims.rows))
        )
    if rgba is None:
        return create_empty_grid(dims)
    assert_u8_rgba(rgba)
    if table is None:
        table = ColourLookupTable()

    t0 = time.perf_counter()
    if dither == "none" or rgba.shape[0] == 0 or rgba.shape[1] == 0:
        fallback = palette[0] if palette else DEFAULT_FALLBACK
        grid = calculate_pixel_grid(rgba, dims, palette, mode, fallback, table)
    else:
        small = resize_rgba(
            rgba, dims.cols, dims.rows, pillow_resample_from_name(resample)
        )
        dither_fn = floyd_steinberg_dither if dither == "floyd-steinberg" else bayer_dither
        grid = entries_to_grid(dither_fn(small, palette, strength, table))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Source", f"{rgba.shape[1]}x{rgba.shape[0]}"),
                    ("Grid", f"{dims.cols}x{dims.rows}"),
                    ("Palette", len(palette)),
                    ("Mode", mode if dither == "none" else dither),
                    ("Table builds", table.builds),
                    ("Time", format_duration(time.perf_counter() - t0)),
                ]
            )
        )
    return grid


__all__ = ["DEFAULT_FALLBACK", "entries_to_grid", "generate_grid"]

# bead_map/dither/ordered.py
from __future__ import annotations

"""
Ordered (Bayer 4x4) dithering onto a bead palette.

Each opaque pixel gets a fixed offset from the tiled threshold matrix before
quantisation. No state crosses pixels, so the whole pass is vectorised.
"""

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from ..constants import ALPHA_THRESHOLD, BAYER_4X4, BAYER_AMPLITUDE
from ..core_types import (
    ERROR_ENTRY,
    EntryGrid,
    PaletteEntry,
    assert_u8_rgba,
    clamp_value,
)
from ..nearest import ColourLookupTable


def bayer_offsets(strength: float) -> NDArray[np.float64]:
    """4x4 channel offsets in [-0.5, 0.5) * strength * BAYER_AMPLITUDE."""
    matrix = np.asarray(BAYER_4X4, dtype=np.float64)
    return (matrix / 16.0 - 0.5) * float(strength) * BAYER_AMPLITUDE


def bayer_dither(
    rgba: np.ndarray,
    palette: Sequence[PaletteEntry],
    strength: float = 1.0,
    table: Optional[ColourLookupTable] = None,
) -> EntryGrid:
    """
    Ordered dither of a buffer already sized to the target grid.

    Args:
      rgba    : uint8 [H,W,4]
      palette : palette entries
      strength: 0..1 scale on the threshold pattern
      table   : lookup table to reuse; a private one is built if omitted
    Returns:
      H rows of W entries; None where the pixel is transparent
    """
    assert_u8_rgba(rgba)
    height, width = int(rgba.shape[0]), int(rgba.shape[1])
    strength = clamp_value(float(strength), 0.0, 1.0)

    if table is None:
        table = ColourLookupTable()
    table.ensure_built(palette)

    offsets = bayer_offsets(strength)
    tiled = np.tile(offsets, ((height + 3) // 4, (width + 3) // 4))[:height, :width]
    perturbed = rgba[..., :3].astype(np.float64) + tiled[..., None]
    # floor(v + 0.5) rounds half up
    quantised = np.floor(np.clip(perturbed, 0.0, 255.0) + 0.5).astype(np.int64)

    indices = table.lookup_indices(quantised, palette)
    opaque = rgba[..., 3] >= ALPHA_THRESHOLD

    if not palette:
        return [
            [ERROR_ENTRY if opaque[y, x] else None for x in range(width)]
            for y in range(height)
        ]

    result: EntryGrid = []
    for y in range(height):
        idx_row = indices[y].tolist()
        mask_row = opaque[y].tolist()
        result.append(
            [palette[i] if keep else None for i, keep in zip(idx_row, mask_row)]
        )
    return result


__all__ = ["bayer_offsets", "bayer_dither"]

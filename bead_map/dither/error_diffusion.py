# bead_map/dither/error_diffusion.py
from __future__ import annotations

"""
Floyd-Steinberg error diffusion onto a bead palette.

- Row-major scan, no serpentine.
- Error carried in two (W,3) row buffers that swap at the end of each row.
- Transparent pixels are skipped: they neither use nor pass on error.
"""

from typing import Optional, Sequence

import numpy as np

from ..constants import ALPHA_THRESHOLD, FS_KERNEL
from ..core_types import (
    EntryGrid,
    PaletteEntry,
    assert_u8_rgba,
    clamp_value,
    round_half_up,
)
from ..nearest import ColourLookupTable


def floyd_steinberg_dither(
    rgba: np.ndarray,
    palette: Sequence[PaletteEntry],
    strength: float = 1.0,
    table: Optional[ColourLookupTable] = None,
) -> EntryGrid:
    """
    Error-diffusion dither of a buffer already sized to the target grid.

    Args:
      rgba    : uint8 [H,W,4]
      palette : palette entries
      strength: 0..1 scale on the diffused error (0 = plain nearest mapping)
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

    src = rgba.astype(np.float64)
    opaque = rgba[..., 3] >= ALPHA_THRESHOLD
    curr_err = np.zeros((width, 3), dtype=np.float64)
    next_err = np.zeros((width, 3), dtype=np.float64)

    result: EntryGrid = [[None] * width for _ in range(height)]

    for y in range(height):
        next_err.fill(0.0)
        has_next = y + 1 < height
        for x in range(width):
            if not opaque[y, x]:
                continue
            old = src[y, x, :3] + curr_err[x]
            probe = (
                int(clamp_value(round_half_up(old[0]), 0, 255)),
                int(clamp_value(round_half_up(old[1]), 0, 255)),
                int(clamp_value(round_half_up(old[2]), 0, 255)),
            )
            chosen = table.lookup(probe, palette)
            result[y][x] = chosen

            err = (old - np.asarray(chosen.rgb, dtype=np.float64)) * strength
            for dx, dy, weight in FS_KERNEL:
                nx = x + dx
                if nx < 0 or nx >= width:
                    continue
                if dy == 0:
                    curr_err[nx] += err * weight
                elif has_next:
                    next_err[nx] += err * weight

        curr_err, next_err = next_err, curr_err

    return result


__all__ = ["floyd_steinberg_dither"]

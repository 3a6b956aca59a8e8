# bead_map/dither/__init__.py
"""
Dithering API.

Provides:
  floyd_steinberg_dither(rgba, palette, strength=1.0, table=None) -> EntryGrid
  bayer_dither(rgba, palette, strength=1.0, table=None) -> EntryGrid

    Args:
      rgba    : uint8 [H,W,4], already resized to the target grid
      palette : sequence of PaletteEntry
      strength: float in [0,1]
      table   : optional ColourLookupTable to reuse across calls

    Returns:
      H rows of W palette entries, None for transparent pixels (alpha < 128).

    Notes:
      - Error diffusion is strictly sequential along rows.
      - Bayer has no cross-pixel state and runs vectorised.
      - Both are deterministic for identical inputs.
"""

from typing import Literal, Tuple

from .error_diffusion import floyd_steinberg_dither
from .ordered import bayer_dither, bayer_offsets

DitherAlgorithm = Literal["none", "floyd-steinberg", "bayer"]
DITHER_ALGORITHMS: Tuple[str, ...] = ("none", "floyd-steinberg", "bayer")

__all__ = [
    "DitherAlgorithm",
    "DITHER_ALGORITHMS",
    "floyd_steinberg_dither",
    "bayer_dither",
    "bayer_offsets",
]

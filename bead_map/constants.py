# bead_map/constants.py
"""
Tunables shared across the project.

- Transparent sentinel (TRANSPARENT_KEY, TRANSPARENT_HEX)
- Sampling (ALPHA_THRESHOLD)
- Lookup table quantisation (LUT_BITS and derived sizes)
- Dithering kernels and defaults (FS_KERNEL, BAYER_4X4, BAYER_AMPLITUDE)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Transparent cell sentinel
# =========================
TRANSPARENT_KEY = "ERASE"
TRANSPARENT_HEX = "#FFFFFF"

# =========================
# Sampling
# =========================

# Pixels with alpha below this are treated as transparent.
ALPHA_THRESHOLD = 128

# =========================
# Nearest-colour lookup table
# =========================

# Bits kept per channel. 5 bits -> 32 levels -> 32**3 buckets.
LUT_BITS = 5
LUT_LEVELS = 1 << LUT_BITS
LUT_SHIFT = 8 - LUT_BITS
LUT_SIZE = LUT_LEVELS**3

# Midpoint offset inside a bucket (bucket width is 1 << LUT_SHIFT).
LUT_MIDPOINT = (1 << LUT_SHIFT) >> 1

# Probe rows per chunk when building the table. Bounds the (chunk, P) distance matrix.
LUT_BUILD_CHUNK = 4096

# =========================
# Dithering
# =========================

# Floyd-Steinberg kernel as (dx, dy, weight). Weights sum to 1.
FS_KERNEL: Tuple[Tuple[int, int, float], ...] = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)

# 4x4 ordered-dither threshold matrix (values 0..15).
BAYER_4X4: Tuple[Tuple[int, ...], ...] = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)

# Peak-to-peak channel offset of the Bayer pattern at strength 1.0.
BAYER_AMPLITUDE = 64.0

DEFAULT_DITHER_STRENGTH = 0.5

# =========================
# Grid defaults
# =========================
DEFAULT_COLS = 52
DEFAULT_ROWS = 52

__all__ = [
    "TRANSPARENT_KEY",
    "TRANSPARENT_HEX",
    "ALPHA_THRESHOLD",
    "LUT_BITS",
    "LUT_LEVELS",
    "LUT_SHIFT",
    "LUT_SIZE",
    "LUT_MIDPOINT",
    "LUT_BUILD_CHUNK",
    "FS_KERNEL",
    "BAYER_4X4",
    "BAYER_AMPLITUDE",
    "DEFAULT_DITHER_STRENGTH",
    "DEFAULT_COLS",
    "DEFAULT_ROWS",
]

# bead_map/colour_metric.py
from __future__ import annotations

"""
Colour distance metrics.

Exports:
  perceptual_distance(a, b)          redmean weighted distance
  perceptual_distance_sq_vec(src, pal) squared redmean, (S,3) x (P,3) -> (S,P)
  euclidean_distance(a, b)           plain RGB distance

The redmean metric weights red and blue by the mean red level of the pair:

  rMean = (r1 + r2) / 2
  d^2   = (2 + rMean/256) dr^2 + 4 dg^2 + (2 + (255 - rMean)/256) db^2
"""

import math

import numpy as np
from numpy.typing import NDArray

from .core_types import RGBTuple


def perceptual_distance(a: RGBTuple, b: RGBTuple) -> float:
    """Redmean distance between two RGB triples. Symmetric, 0 iff equal."""
    r_mean = (a[0] + b[0]) / 2
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return math.sqrt(
        (2 + r_mean / 256) * dr * dr
        + 4 * dg * dg
        + (2 + (255 - r_mean) / 256) * db * db
    )


def perceptual_distance_sq_vec(
    src_rgb: np.ndarray, pal_rgb: np.ndarray
) -> NDArray[np.float64]:
    """
    Squared redmean distance for every (source, palette) pair.

    Args:
      src_rgb: [S,3] any numeric dtype
      pal_rgb: [P,3] any numeric dtype
    Returns:
      float64 [S,P]
    """
    src = np.asarray(src_rgb, dtype=np.float64).reshape(-1, 3)
    pal = np.asarray(pal_rgb, dtype=np.float64).reshape(-1, 3)
    r_mean = (src[:, None, 0] + pal[None, :, 0]) / 2.0
    dr = src[:, None, 0] - pal[None, :, 0]
    dg = src[:, None, 1] - pal[None, :, 1]
    db = src[:, None, 2] - pal[None, :, 2]
    return (
        (2.0 + r_mean / 256.0) * dr * dr
        + 4.0 * dg * dg
        + (2.0 + (255.0 - r_mean) / 256.0) * db * db
    )


def euclidean_distance(a: RGBTuple, b: RGBTuple) -> float:
    """Euclidean distance in RGB space."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


__all__ = [
    "perceptual_distance",
    "perceptual_distance_sq_vec",
    "euclidean_distance",
]

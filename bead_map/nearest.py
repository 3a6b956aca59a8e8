# bead_map/nearest.py
from __future__ import annotations

"""
Nearest palette colour under the redmean metric.

Exports:
  find_closest(target, palette) -> PaletteEntry
    Exact linear scan. Empty palette returns ERROR_ENTRY.
  ColourLookupTable
    O(1) approximate lookup through a 32x32x32 bucket table, rebuilt lazily
    whenever it is asked about a different palette object.
  find_closest_fast(target, palette, table=None) -> PaletteEntry
"""

import threading
from typing import Dict, NamedTuple, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .colour_metric import perceptual_distance, perceptual_distance_sq_vec
from .constants import LUT_BITS, LUT_BUILD_CHUNK, LUT_LEVELS, LUT_MIDPOINT, LUT_SHIFT
from .core_types import ERROR_ENTRY, PaletteEntry, RGBTuple


def find_closest(target: RGBTuple, palette: Sequence[PaletteEntry]) -> PaletteEntry:
    """
    Palette entry with the smallest perceptual distance to target.

    The first entry wins on equal distance. Stops at the first exact match.
    """
    if not palette:
        return ERROR_ENTRY
    best = palette[0]
    best_dist = float("inf")
    for entry in palette:
        d = perceptual_distance(target, entry.rgb)
        if d < best_dist:
            best_dist = d
            best = entry
            if d == 0:
                break
    return best


def _pack_rgb(r: int, g: int, b: int) -> int:
    return (r << 16) | (g << 8) | b


def _bucket_of(r: int, g: int, b: int) -> int:
    return (
        ((r >> LUT_SHIFT) << (2 * LUT_BITS))
        | ((g >> LUT_SHIFT) << LUT_BITS)
        | (b >> LUT_SHIFT)
    )


def _bucket_probes() -> NDArray[np.int32]:
    """Midpoint RGB of every bucket, ordered by bucket index. Shape [LUT_SIZE,3]."""
    centres = (np.arange(LUT_LEVELS, dtype=np.int32) << LUT_SHIFT) + LUT_MIDPOINT
    r, g, b = np.meshgrid(centres, centres, centres, indexing="ij")
    return np.stack([r.ravel(), g.ravel(), b.ravel()], axis=1)


class _Snapshot(NamedTuple):
    """One fully built table. Never mutated after construction."""

    palette: Sequence[PaletteEntry]
    bucket_index: NDArray[np.int32]  # [LUT_SIZE] palette index per bucket
    exact_of: Dict[int, int]  # packed RGB -> first palette index with that colour
    exact_keys: NDArray[np.int64]  # sorted packed RGB of palette colours
    exact_index: NDArray[np.int32]  # palette index for each exact_keys row


def _build_snapshot(palette: Sequence[PaletteEntry]) -> _Snapshot:
    if not palette:
        return _Snapshot(
            palette,
            np.zeros((0,), dtype=np.int32),
            {},
            np.zeros((0,), dtype=np.int64),
            np.zeros((0,), dtype=np.int32),
        )

    pal_rgb = np.array([e.rgb for e in palette], dtype=np.int32)
    probes = _bucket_probes()
    bucket_index = np.empty((probes.shape[0],), dtype=np.int32)
    for start in range(0, probes.shape[0], LUT_BUILD_CHUNK):
        stop = start + LUT_BUILD_CHUNK
        d2 = perceptual_distance_sq_vec(probes[start:stop], pal_rgb)
        # argmin keeps the first minimum, same as the exact scan
        bucket_index[start:stop] = np.argmin(d2, axis=1)

    exact_of: Dict[int, int] = {}
    for i, e in enumerate(palette):
        exact_of.setdefault(_pack_rgb(*e.rgb), i)
    keys_sorted = sorted(exact_of)
    exact_keys = np.array(keys_sorted, dtype=np.int64)
    exact_index = np.array([exact_of[k] for k in keys_sorted], dtype=np.int32)
    return _Snapshot(palette, bucket_index, exact_of, exact_keys, exact_index)


class ColourLookupTable:
    """
    Cached nearest-colour table for one palette at a time.

    Each channel is cut to 5 bits, giving 32**3 buckets. Every bucket stores the
    exact nearest entry for the bucket's midpoint colour, so a query is one
    array read after a one-off O(32**3 * P) build.

    This is an approximation: a colour near a bucket edge that also sits near
    the boundary between two palette entries can get a different answer than
    find_closest(). Colours equal to a palette entry are matched exactly before
    the bucket is consulted, so those always return that entry.

    The cache is keyed by palette identity (`is`), not equality. Two palette
    objects with the same colours each pay for a build. Rebuilds go into a
    fresh snapshot that replaces the cached one under a lock, so readers never
    see a half-built table.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: Optional[_Snapshot] = None
        self.builds = 0

    @property
    def palette(self) -> Optional[Sequence[PaletteEntry]]:
        """Palette the current table was built for, if any."""
        snap = self._snapshot
        return None if snap is None else snap.palette

    def ensure_built(self, palette: Sequence[PaletteEntry]) -> _Snapshot:
        """Return the table for palette, rebuilding only if palette is a new object."""
        snap = self._snapshot
        if snap is not None and snap.palette is palette:
            return snap
        with self._lock:
            snap = self._snapshot
            if snap is not None and snap.palette is palette:
                return snap
            snap = _build_snapshot(palette)
            self._snapshot = snap
            self.builds += 1
        return snap

    def lookup(self, rgb: RGBTuple, palette: Sequence[PaletteEntry]) -> PaletteEntry:
        """Approximate nearest entry for one 0..255 RGB triple."""
        snap = self.ensure_built(palette)
        if not snap.palette:
            return ERROR_ENTRY
        r, g, b = int(rgb[0]), int(rgb[1]), int(rgb[2])
        hit = snap.exact_of.get(_pack_rgb(r, g, b))
        if hit is not None:
            return snap.palette[hit]
        return snap.palette[int(snap.bucket_index[_bucket_of(r, g, b)])]

    def lookup_indices(
        self, rgb: np.ndarray, palette: Sequence[PaletteEntry]
    ) -> NDArray[np.int32]:
        """
        Vectorised lookup.

        Args:
          rgb: integer array [...,3] with values in 0..255
        Returns:
          int32 array [...] of palette indices, or -1 everywhere for an empty palette
        """
        snap = self.ensure_built(palette)
        arr = np.asarray(rgb, dtype=np.int64)
        shape = arr.shape[:-1]
        if not snap.palette:
            return np.full(shape, -1, dtype=np.int32)
        flat = arr.reshape(-1, 3)
        r, g, b = flat[:, 0], flat[:, 1], flat[:, 2]
        buckets = (
            ((r >> LUT_SHIFT) << (2 * LUT_BITS))
            | ((g >> LUT_SHIFT) << LUT_BITS)
            | (b >> LUT_SHIFT)
        )
        out = snap.bucket_index[buckets].astype(np.int32, copy=True)

        packed = (r << 16) | (g << 8) | b
        pos = np.searchsorted(snap.exact_keys, packed)
        pos = np.minimum(pos, snap.exact_keys.shape[0] - 1)
        hit = snap.exact_keys[pos] == packed
        out[hit] = snap.exact_index[pos[hit]]
        return out.reshape(shape)


def find_closest_fast(
    target: RGBTuple,
    palette: Sequence[PaletteEntry],
    table: Optional[ColourLookupTable] = None,
) -> PaletteEntry:
    """
    Table-backed nearest entry.

    Callers doing repeated lookups should pass a long-lived table. Without
    one this is find_closest().
    """
    if table is None:
        return find_closest(target, palette)
    return table.lookup(target, palette)


__all__ = ["find_closest", "ColourLookupTable", "find_closest_fast"]

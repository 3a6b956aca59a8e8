# bead_map/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import TRANSPARENT_HEX, TRANSPARENT_KEY

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8RGBA = NDArray[np.uint8]  # (H, W, 4)
CellCoord = Tuple[int, int]  # (col, row)

# Value objects


@dataclass(frozen=True)
class PaletteEntry:
    """Palette colour with its display key, upper-case '#RRGGBB' hex and parsed RGB."""

    key: str
    hex: HexStr
    rgb: RGBTuple


@dataclass(frozen=True)
class Cell:
    """One grid cell. is_external marks an erased cell with no bead."""

    key: str
    color: HexStr
    is_external: bool = False


@dataclass(frozen=True)
class GridDimensions:
    """Grid size: cols is N, rows is M."""

    cols: int
    rows: int


Palette = Tuple[PaletteEntry, ...]
Row = Tuple[Cell, ...]
Grid = Tuple[Row, ...]
EntryGrid = List[List[Optional[PaletteEntry]]]

TRANSPARENT_CELL = Cell(TRANSPARENT_KEY, TRANSPARENT_HEX, True)
ERROR_ENTRY = PaletteEntry("ERR", "#000000", (0, 0, 0))


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up."""
    return int(np.floor(value + 0.5))


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to upper-case hex string '#RRGGBB'."""
    r, g, b = (int(clamp_value(round_half_up(v), 0, 255)) for v in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rrggbb' or 'rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lstrip("#")
    if len(s) != 6:
        raise ValueError(f"hex must be '#rrggbb', got {hex_str!r}")
    try:
        return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
    except ValueError:
        raise ValueError(f"invalid hex colour {hex_str!r}") from None


def normalise_hex(hex_str: str) -> HexStr:
    """Canonical '#RRGGBB' form of a hex string."""
    return "#" + hex_str.strip().lstrip("#").upper()


def make_entry(key: str, hex_str: str) -> PaletteEntry:
    """Build a PaletteEntry whose hex and RGB agree."""
    rgb = hex_to_rgb(hex_str)
    return PaletteEntry(key=key, hex=rgb_to_hex(rgb), rgb=rgb)


def entry_cell(entry: PaletteEntry) -> Cell:
    """Cell painted with a palette entry."""
    return Cell(entry.key, entry.hex, False)


def is_bead(cell: Optional[Cell]) -> bool:
    """True for a real bead, False for erased or missing cells."""
    return cell is not None and not cell.is_external and cell.key != TRANSPARENT_KEY


def assert_u8_rgba(image: np.ndarray) -> U8RGBA:
    """Validate a uint8 (H,W,4) buffer and return it typed as U8RGBA."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError(f"expected uint8 (H,W,4) RGBA buffer, got {image.dtype} {image.shape}")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8RGBA",
    "CellCoord",
    "Palette",
    "Row",
    "Grid",
    "EntryGrid",
    # value objects
    "PaletteEntry",
    "Cell",
    "GridDimensions",
    "TRANSPARENT_CELL",
    "ERROR_ENTRY",
    # helpers
    "clamp_value",
    "round_half_up",
    "rgb_to_hex",
    "hex_to_rgb",
    "normalise_hex",
    "make_entry",
    "entry_cell",
    "is_bead",
    "assert_u8_rgba",
]

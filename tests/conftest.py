from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np
import pytest

from bead_map.core_types import Cell, Grid, GridDimensions, make_entry
from bead_map.palette_data import BUILTIN_MAPPING, BUILTIN_SYSTEM, build_palette


@pytest.fixture
def red_blue_palette():
    return (make_entry("A", "#FF0000"), make_entry("B", "#0000FF"))


@pytest.fixture
def basic_palette():
    return build_palette(BUILTIN_MAPPING, BUILTIN_SYSTEM)


@pytest.fixture
def small_palette():
    return (
        make_entry("K", "#000000"),
        make_entry("W", "#FFFFFF"),
        make_entry("R", "#FF0000"),
        make_entry("G", "#00FF00"),
        make_entry("U", "#0000FF"),
    )


def solid_rgba(height: int, width: int, rgb: Sequence[int], alpha: int = 255) -> np.ndarray:
    out = np.zeros((height, width, 4), dtype=np.uint8)
    out[..., 0] = rgb[0]
    out[..., 1] = rgb[1]
    out[..., 2] = rgb[2]
    out[..., 3] = alpha
    return out


def noise_rgba(height: int, width: int, seed: int = 7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    out = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    out[..., 3] = 255
    return out


def make_grid(rows: Iterable[Iterable[Tuple[str, str]]]) -> Grid:
    """Grid from rows of (key, hex) pairs."""
    return tuple(tuple(Cell(key, hx, False) for key, hx in row) for row in rows)


def dims_of(grid: Grid) -> GridDimensions:
    return GridDimensions(cols=len(grid[0]), rows=len(grid))

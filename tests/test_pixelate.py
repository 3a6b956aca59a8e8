import numpy as np
import pytest

from conftest import solid_rgba

from bead_map.core_types import TRANSPARENT_CELL, GridDimensions, entry_cell, make_entry
from bead_map.pixelate import calculate_pixel_grid, cell_representative_colour, cell_spans

FALLBACK = make_entry("?", "#FFFFFF")


def _block(pixels):
    """1-row RGBA block from a list of (r, g, b, a)."""
    return np.array([pixels], dtype=np.uint8)


def test_cell_spans_cover_source_without_gaps():
    assert cell_spans(5, 2) == [(0, 3), (2, 5)]
    spans = cell_spans(7, 3)
    assert spans[0][0] == 0
    assert spans[-1][1] == 7
    for (_a0, a1), (b0, _b1) in zip(spans, spans[1:]):
        assert b0 <= a1


def test_cell_spans_zero_cells():
    assert cell_spans(5, 0) == []


@pytest.mark.parametrize("dims", [GridDimensions(0, 3), GridDimensions(2, 0)])
def test_zero_sized_grid_is_empty(dims, red_blue_palette):
    grid = calculate_pixel_grid(
        solid_rgba(4, 4, (255, 0, 0)), dims, red_blue_palette, "dominant", FALLBACK
    )
    assert sum(len(row) for row in grid) == 0
    assert len(grid) == dims.rows


def test_cell_spans_never_empty_when_upsampling():
    spans = cell_spans(2, 4)
    assert spans == [(0, 1), (0, 1), (1, 2), (1, 2)]
    assert all(stop - start >= 1 for start, stop in spans)


def test_average_rounds_half_up():
    block = _block([(0, 0, 0, 255), (1, 3, 255, 255)])
    assert cell_representative_colour(block, "average") == (1, 2, 128)


def test_average_ignores_transparent_pixels():
    block = _block([(200, 0, 0, 255), (0, 0, 255, 0)])
    assert cell_representative_colour(block, "average") == (200, 0, 0)


def test_dominant_picks_most_frequent():
    block = _block([(1, 1, 1, 255), (9, 9, 9, 255), (9, 9, 9, 255)])
    assert cell_representative_colour(block, "dominant") == (9, 9, 9)


def test_dominant_tie_goes_to_first_to_reach_top_count():
    # blue reaches two occurrences before red does
    block = _block(
        [(200, 0, 0, 255), (0, 0, 200, 255), (0, 0, 200, 255), (200, 0, 0, 255)]
    )
    assert cell_representative_colour(block, "dominant") == (0, 0, 200)
    block = _block([(0, 0, 200, 255), (200, 0, 0, 255)])
    assert cell_representative_colour(block, "dominant") == (0, 0, 200)


def test_all_transparent_block_has_no_colour():
    block = _block([(10, 20, 30, 0), (10, 20, 30, 127)])
    assert cell_representative_colour(block, "dominant") is None
    assert cell_representative_colour(block, "average") is None


def test_grid_shape_and_mapping(red_blue_palette):
    rgba = solid_rgba(9, 7, (240, 20, 20))
    rgba[:, 4:] = (10, 10, 230, 255)
    grid = calculate_pixel_grid(rgba, GridDimensions(2, 3), red_blue_palette, "dominant", FALLBACK)
    assert len(grid) == 3
    assert all(len(row) == 2 for row in grid)
    assert [c.key for c in grid[0]] == ["A", "B"]
    assert not grid[0][0].is_external


def test_transparent_cells(red_blue_palette):
    rgba = solid_rgba(4, 4, (240, 20, 20))
    rgba[:2, :2, 3] = 0
    grid = calculate_pixel_grid(rgba, GridDimensions(2, 2), red_blue_palette, "average", FALLBACK)
    assert grid[0][0] == TRANSPARENT_CELL
    assert grid[1][1].key == "A"


def test_zero_size_source_gives_fallback(red_blue_palette):
    rgba = np.zeros((0, 0, 4), dtype=np.uint8)
    grid = calculate_pixel_grid(rgba, GridDimensions(3, 2), red_blue_palette, "dominant", FALLBACK)
    assert grid == ((entry_cell(FALLBACK),) * 3,) * 2


def test_grid_larger_than_source(red_blue_palette):
    rgba = solid_rgba(2, 2, (0, 0, 255))
    grid = calculate_pixel_grid(rgba, GridDimensions(5, 5), red_blue_palette, "average", FALLBACK)
    assert len(grid) == 5
    assert all(cell.key == "B" for row in grid for cell in row)


def test_unknown_mode_rejected(red_blue_palette):
    with pytest.raises(ValueError):
        calculate_pixel_grid(
            solid_rgba(2, 2, (0, 0, 0)), GridDimensions(1, 1), red_blue_palette, "median", FALLBACK
        )

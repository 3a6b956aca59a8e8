import pytest

from conftest import dims_of, make_grid

from bead_map.core_types import TRANSPARENT_CELL, Cell, GridDimensions, make_entry
from bead_map.edit import (
    check_grid,
    clamp_grid,
    create_empty_grid,
    paint_brush,
    paint_cells,
    paint_pixel,
    pick_colour,
    replace_colour,
)

A = ("A", "#FF0000")
B = ("B", "#0000FF")


def test_paint_pixel_changes_one_cell_and_shares_rows():
    grid = make_grid([[A, A], [A, A], [A, A]])
    out = paint_pixel(grid, 1, 0, Cell(*B))
    assert out is not None
    assert out[1] == (Cell(*B), Cell(*A))
    assert out[0] is grid[0]
    assert out[2] is grid[2]
    assert grid[1][0] == Cell(*A)


def test_paint_pixel_no_change_sentinel():
    grid = make_grid([[A]])
    assert paint_pixel(grid, 0, 0, Cell(*A)) is None
    assert paint_pixel(grid, 0, 5, Cell(*B)) is None
    assert paint_pixel(grid, -1, 0, Cell(*B)) is None


def test_paint_pixel_compares_external_flag():
    grid = make_grid([[A]])
    out = paint_pixel(grid, 0, 0, Cell("A", "#FF0000", True))
    assert out is not None and out[0][0].is_external


def test_paint_cells_skips_out_of_bounds_and_equal():
    grid = make_grid([[A, B], [A, A]])
    dims = dims_of(grid)
    out = paint_cells(grid, dims, [(1, 0), (5, 5), (-1, 0), (0, 1)], Cell(*B))
    assert out[0] is grid[0]
    assert out[1] == (Cell(*B), Cell(*A))
    assert paint_cells(grid, dims, [(1, 0), (9, 0)], Cell(*B)) is grid


def test_paint_cells_copies_row_once():
    grid = create_empty_grid(GridDimensions(4, 2))
    out = paint_cells(grid, dims_of(grid), [(0, 0), (1, 0), (2, 0), (3, 0)], Cell(*A))
    assert out[0] == (Cell(*A),) * 4
    assert out[1] is grid[1]


def test_paint_brush_with_symmetry():
    dims = GridDimensions(5, 5)
    grid = create_empty_grid(dims)
    out = paint_brush(grid, dims, 0, 0, Cell(*A), size=1, symmetry="horizontal")
    assert out[0][0] == Cell(*A)
    assert out[0][4] == Cell(*A)
    assert out[0][2] == TRANSPARENT_CELL
    assert out[4] is grid[4]


def test_replace_colour_counts_and_forces_bead():
    grid = make_grid([[A, B], [("a", "#ff0000"), B]])
    target = Cell("C", "#00FF00", True)
    out, count = replace_colour(grid, dims_of(grid), "#FF0000", target)
    assert count == 2
    assert out[0][0] == Cell("C", "#00FF00", False)
    assert out[1][0] == Cell("C", "#00FF00", False)
    assert out[0][1] == grid[0][1]


def test_replace_colour_skips_erased_cells():
    grid = ((TRANSPARENT_CELL, Cell(*A)),)
    out, count = replace_colour(grid, dims_of(grid), TRANSPARENT_CELL.color, Cell(*B))
    assert count == 0
    assert out is grid


def test_pick_colour():
    palette = (make_entry("A", "#FF0000"), make_entry("B", "#0000FF"))
    grid = ((Cell("A", "#ff0000"), TRANSPARENT_CELL),)
    assert pick_colour(grid, palette, 0, 0) is palette[0]
    assert pick_colour(grid, palette, 0, 1) is None
    assert pick_colour(grid, palette, 3, 3) is None


def test_check_and_clamp_grid():
    dims = GridDimensions(3, 2)
    ragged = make_grid([[A, A], [A, A, A, A]])
    with pytest.raises(AssertionError):
        check_grid(ragged, dims)
    fixed = clamp_grid(ragged, dims)
    assert check_grid(fixed, dims) is fixed
    assert fixed[0][2] == TRANSPARENT_CELL
    assert fixed[1] == (Cell(*A),) * 3
    padded = clamp_grid(ragged[:1], GridDimensions(2, 3))
    assert padded[0] is ragged[0]
    assert padded[2] == (TRANSPARENT_CELL,) * 2

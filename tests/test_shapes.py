import pytest

from bead_map.core_types import GridDimensions
from bead_map.edit import brush_cells, circle_cells, line_cells, mirror_cells, rect_cells


def _is_8_connected(cells):
    return all(
        max(abs(c1 - c0), abs(r1 - r0)) == 1
        for (c0, r0), (c1, r1) in zip(cells, cells[1:])
    )


def test_bresenham_short_line():
    cells = line_cells(0, 0, 3, 1)
    assert cells[0] == (0, 0)
    assert cells[-1] == (3, 1)
    assert len(cells) == 4
    assert _is_8_connected(cells)


@pytest.mark.parametrize(
    "end", [(5, 2), (2, 5), (-5, 2), (-2, 5), (-5, -2), (-2, -5), (5, -2), (2, -5)]
)
def test_bresenham_all_octants(end):
    cells = line_cells(0, 0, *end)
    assert cells[0] == (0, 0)
    assert cells[-1] == end
    assert len(cells) == len(set(cells))
    assert len(cells) == max(abs(end[0]), abs(end[1])) + 1
    assert _is_8_connected(cells)


def test_single_point_line():
    assert line_cells(4, 4, 4, 4) == [(4, 4)]


def test_rect_corners_in_any_order():
    assert sorted(rect_cells(3, 4, 1, 2, filled=True)) == sorted(rect_cells(1, 2, 3, 4, filled=True))
    assert len(rect_cells(0, 0, 2, 2, filled=True)) == 9
    outline = rect_cells(2, 2, 0, 0, filled=False)
    assert len(outline) == 8
    assert (1, 1) not in outline


def test_circle_radius_zero_is_centre():
    assert circle_cells(3, 4, 0, filled=False) == [(3, 4)]
    assert circle_cells(3, 4, -2, filled=True) == [(3, 4)]


def test_filled_circle():
    cells = circle_cells(0, 0, 1, filled=True)
    assert sorted(cells) == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]


@pytest.mark.parametrize("radius", [1, 2, 3, 7, 12])
def test_circle_outline_has_no_duplicates(radius):
    cells = circle_cells(10, 10, radius, filled=False)
    assert len(cells) == len(set(cells))
    for c, r in cells:
        d2 = (c - 10) ** 2 + (r - 10) ** 2
        assert (radius - 1) ** 2 <= d2 <= (radius + 1) ** 2
    assert (10 + radius, 10) in cells
    assert (10, 10 - radius) in cells


def test_brush_sizes():
    assert brush_cells(2, 2, 1) == [(2, 2)]
    assert len(brush_cells(2, 2, 3)) == 9
    assert len(brush_cells(2, 2, 5)) == 25
    assert brush_cells(2, 2, 0) == [(2, 2)]


def test_mirror_modes():
    dims = GridDimensions(5, 4)
    assert mirror_cells([(0, 0)], dims, "none") == [(0, 0)]
    assert mirror_cells([(0, 0)], dims, "horizontal") == [(0, 0), (4, 0)]
    assert mirror_cells([(0, 0)], dims, "vertical") == [(0, 0), (0, 3)]
    assert mirror_cells([(0, 0)], dims, "both") == [(0, 0), (4, 0), (0, 3)]


def test_mirror_on_axis_has_no_duplicates():
    dims = GridDimensions(5, 5)
    assert mirror_cells([(2, 1)], dims, "horizontal") == [(2, 1)]
    assert mirror_cells(brush_cells(2, 2, 3), dims, "both") == brush_cells(2, 2, 3)


def test_mirror_rejects_unknown_mode():
    with pytest.raises(ValueError):
        mirror_cells([(0, 0)], GridDimensions(2, 2), "diagonal")

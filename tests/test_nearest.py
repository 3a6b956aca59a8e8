import threading

import numpy as np

from bead_map.core_types import ERROR_ENTRY, make_entry
from bead_map.nearest import ColourLookupTable, find_closest, find_closest_fast


def test_exact_nearest_picks_red(red_blue_palette):
    assert find_closest((250, 10, 10), red_blue_palette).key == "A"


def test_exact_nearest_first_entry_wins_ties():
    palette = (make_entry("first", "#808080"), make_entry("second", "#808080"))
    assert find_closest((128, 128, 128), palette).key == "first"
    assert find_closest((0, 0, 0), palette).key == "first"


def test_empty_palette_returns_error_entry():
    assert find_closest((1, 2, 3), ()) is ERROR_ENTRY
    assert find_closest_fast((1, 2, 3), ()) is ERROR_ENTRY
    table = ColourLookupTable()
    idx = table.lookup_indices(np.zeros((2, 3, 3), dtype=np.int64), ())
    assert idx.shape == (2, 3)
    assert (idx == -1).all()


def test_fast_lookup_without_table_is_exact(basic_palette):
    for rgb in [(3, 200, 97), (131, 129, 126), (250, 5, 60), (17, 17, 240)]:
        assert find_closest_fast(rgb, basic_palette) is find_closest(rgb, basic_palette)


def test_fast_path_matches_exact_on_palette_colours(basic_palette):
    table = ColourLookupTable()
    for entry in basic_palette:
        assert table.lookup(entry.rgb, basic_palette) == find_closest(entry.rgb, basic_palette)
        assert table.lookup(entry.rgb, basic_palette) is entry


def test_fast_path_matches_exact_on_bucket_midpoints(basic_palette):
    table = ColourLookupTable()
    for v in range(4, 256, 40):
        # every channel sits on a bucket midpoint
        probe = (v, (v * 3) % 256 // 8 * 8 + 4, (255 - v) // 8 * 8 + 4)
        assert table.lookup(probe, basic_palette) == find_closest(probe, basic_palette)


def test_rebuilds_only_on_new_palette_object(red_blue_palette):
    table = ColourLookupTable()
    table.lookup((1, 2, 3), red_blue_palette)
    table.lookup((200, 2, 3), red_blue_palette)
    table.ensure_built(red_blue_palette)
    assert table.builds == 1
    assert table.palette is red_blue_palette

    copy = tuple(e for e in red_blue_palette)
    assert copy == red_blue_palette and copy is not red_blue_palette
    assert table.lookup((10, 10, 240), copy).key == "B"
    assert table.builds == 2


def test_lookup_indices_matches_lookup(small_palette):
    table = ColourLookupTable()
    rgb = np.array(
        [[[0, 0, 0], [255, 255, 255], [250, 5, 5]], [[3, 250, 3], [10, 10, 240], [128, 128, 128]]]
    )
    idx = table.lookup_indices(rgb, small_palette)
    assert idx.shape == (2, 3)
    for y in range(2):
        for x in range(3):
            expected = table.lookup(tuple(int(v) for v in rgb[y, x]), small_palette)
            assert small_palette[int(idx[y, x])] is expected


def test_concurrent_readers_share_one_build(small_palette):
    table = ColourLookupTable()
    results = []

    def worker():
        results.append(table.lookup((250, 0, 0), small_palette).key)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == ["R"] * 8
    assert table.builds == 1

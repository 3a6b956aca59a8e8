import json

import pytest

from bead_map.core_types import make_entry
from bead_map.palette_data import (
    BUILTIN_MAPPING,
    BUILTIN_SYSTEM,
    build_palette,
    colour_systems,
    display_key,
    key_to_hex,
    load_colour_mapping,
    sort_by_hue,
)

MAPPING = {
    "#FF0000": {"MARD": "A1", "COCO": "R01"},
    "#00FF00": {"MARD": "B2"},
    "#0000FF": {"COCO": "U03"},
}


def test_builtin_palette():
    palette = build_palette(BUILTIN_MAPPING, BUILTIN_SYSTEM)
    assert len(palette) == len(BUILTIN_MAPPING)
    assert palette[0].key == "B01"
    assert len({e.hex for e in palette}) == len(palette)


def test_build_palette_keeps_only_system_entries():
    palette = build_palette(MAPPING, "MARD")
    assert [(e.key, e.hex) for e in palette] == [("A1", "#FF0000"), ("B2", "#00FF00")]
    assert build_palette(MAPPING, "NONE") == ()


def test_colour_systems_in_first_seen_order():
    assert colour_systems(MAPPING) == ["MARD", "COCO"]


def test_display_key_and_reverse_lookup():
    assert display_key(MAPPING, "#ff0000", "COCO") == "R01"
    assert display_key(MAPPING, "#00FF00", "COCO") == "?"
    assert display_key(MAPPING, "#123456", "MARD") == "?"
    assert key_to_hex(MAPPING, "U03", "COCO") == "#0000FF"
    assert key_to_hex(MAPPING, "U03", "MARD") is None


def test_load_colour_mapping_normalises_hex(tmp_path):
    path = tmp_path / "colours.json"
    path.write_text(json.dumps({"ff8000": {"X": "O1"}}), encoding="utf-8")
    mapping = load_colour_mapping(path)
    assert mapping == {"#FF8000": {"X": "O1"}}


@pytest.mark.parametrize(
    "payload", [[1, 2, 3], {"#FF0000": "A1"}, {"#XYZXYZ": {"X": "A"}}]
)
def test_load_colour_mapping_rejects_malformed(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_colour_mapping(path)


def test_sort_by_hue():
    red = make_entry("r", "#FF0000")
    dark_red = make_entry("dr", "#800000")
    green = make_entry("g", "#00FF00")
    blue = make_entry("b", "#0000FF")
    ordered = sort_by_hue([blue, dark_red, green, red])
    assert [e.key for e in ordered] == ["r", "dr", "g", "b"]

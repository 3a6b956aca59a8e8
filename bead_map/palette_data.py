# bead_map/palette_data.py
from __future__ import annotations

"""
Bead palette definitions and builders.

A colour-system mapping ties each canonical hex to its display key in every
supported bead brand: {"#RRGGBB": {"SYSTEM": "KEY", ...}, ...}.

Exports:
  BUILTIN_SYSTEM, BUILTIN_MAPPING
  load_colour_mapping(path) -> ColourMapping
  build_palette(mapping, system) -> Palette
  colour_systems(mapping) -> list[str]
  display_key(mapping, hex, system) -> str
  key_to_hex(mapping, key, system) -> str | None
  sort_by_hue(entries) -> list
"""

import colorsys
import json
from functools import cmp_to_key
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .core_types import HexStr, Palette, PaletteEntry, hex_to_rgb, make_entry, normalise_hex

ColourMapping = Mapping[HexStr, Mapping[str, str]]

BUILTIN_SYSTEM = "BASIC"

_BUILTIN_COLOURS: List[HexStr] = [
    "#FFFFFF", "#F0F0F0", "#C8C8C8", "#969696", "#5A5A5A", "#2D2D2D", "#000000",
    "#FAF4C8", "#FFE86B", "#FFC81E", "#FF9B28", "#FF6E32", "#E63C2D", "#B4282D",
    "#FFB4C8", "#FF78A0", "#E6326E", "#A01E5A", "#D2A0E6", "#9664C8", "#5A3C96",
    "#AADCFF", "#64B4F0", "#2D78D2", "#1E469B", "#14285A", "#A0F0DC", "#3CC8B4",
    "#148C82", "#C8F08C", "#82D250", "#3CA03C", "#1E6432", "#F0D2AA", "#D2A078",
    "#A0704B", "#6E4628", "#46281E",
]

BUILTIN_MAPPING: Dict[HexStr, Dict[str, str]] = {
    hx: {BUILTIN_SYSTEM: f"B{i + 1:02d}"} for i, hx in enumerate(_BUILTIN_COLOURS)
}


def load_colour_mapping(path: Path) -> Dict[HexStr, Dict[str, str]]:
    """
    Read a JSON colour-system mapping.

    Hex keys are normalised to '#RRGGBB'. Raises ValueError on a malformed file.
    """
    with open(path, "r", encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected an object of hex -> {{system: key}}")
    out: Dict[HexStr, Dict[str, str]] = {}
    for hx, systems in raw.items():
        if not isinstance(systems, dict):
            raise ValueError(f"{path}: entry {hx!r} is not an object")
        hex_to_rgb(hx)
        out[normalise_hex(hx)] = {str(k): str(v) for k, v in systems.items()}
    return out


def build_palette(mapping: ColourMapping, system: str) -> Palette:
    """Entries for every colour with a key in `system`, in mapping order."""
    return tuple(
        make_entry(systems[system], hx)
        for hx, systems in mapping.items()
        if systems.get(system)
    )


def colour_systems(mapping: ColourMapping) -> List[str]:
    """Every system name used in the mapping, in first-seen order."""
    seen: Dict[str, None] = {}
    for systems in mapping.values():
        for name in systems:
            seen.setdefault(name)
    return list(seen)


def display_key(mapping: ColourMapping, hex_str: str, system: str) -> str:
    """Display key of a colour in a system, '?' if unmapped."""
    systems = mapping.get(normalise_hex(hex_str))
    if systems is None:
        # mapping may come straight from a file with lower-case keys
        for hx, candidate in mapping.items():
            if normalise_hex(hx) == normalise_hex(hex_str):
                systems = candidate
                break
    if not systems:
        return "?"
    return systems.get(system, "?")


def key_to_hex(mapping: ColourMapping, key: str, system: str) -> Optional[HexStr]:
    """Hex of the colour whose key in `system` is `key`, or None."""
    for hx, systems in mapping.items():
        if systems.get(system) == key:
            return normalise_hex(hx)
    return None


def _hsl(hex_str: str) -> Tuple[float, float, float]:
    r, g, b = hex_to_rgb(hex_str)
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (h * 360.0, s * 100.0, l * 100.0)


def _compare_hsl(a: Tuple[float, float, float], b: Tuple[float, float, float]) -> float:
    if abs(a[0] - b[0]) > 5:
        return a[0] - b[0]
    if abs(a[2] - b[2]) > 3:
        return b[2] - a[2]
    return b[1] - a[1]


def sort_by_hue(entries: Sequence[PaletteEntry]) -> List[PaletteEntry]:
    """
    Display order: hue bands (5 degrees), then lighter first (3% steps), then
    more saturated first.
    """
    decorated = [(_hsl(e.hex), e) for e in entries]
    decorated.sort(key=cmp_to_key(lambda x, y: _compare_hsl(x[0], y[0])))
    return [e for _hsl_val, e in decorated]


__all__ = [
    "ColourMapping",
    "BUILTIN_SYSTEM",
    "BUILTIN_MAPPING",
    "load_colour_mapping",
    "build_palette",
    "colour_systems",
    "display_key",
    "key_to_hex",
    "sort_by_hue",
]

# bead_map/colour_merge.py
from __future__ import annotations

"""
Greedy palette reduction for an already quantised grid.

Exports:
  collect_colour_usage(grid) -> list[ColourUsage]
  calculate_merge_plan(usage, target_count) -> MergePlan
  merge_preview(usage, target_count) -> list[MergeStep]
  apply_colour_merge(grid, plan) -> Grid
  optimise_colours(grid, target_count) -> (Grid, MergePlan)

Algorithm:
  Repeatedly take the pair of active colours with the smallest redmean
  distance (first pair found wins ties) and fold the one with fewer beads into
  the one with more. On equal counts the later colour in scan order is folded.
  Earlier merges that pointed at the folded colour are re-pointed at the
  survivor, so the plan always maps straight to final colours.
  O(k^2) per step, O(k^3) overall for k used colours.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .colour_metric import perceptual_distance
from .core_types import Cell, Grid, HexStr, RGBTuple, hex_to_rgb, is_bead


@dataclass
class ColourUsage:
    """How often one bead colour appears in a grid."""

    hex: HexStr
    key: str
    rgb: RGBTuple
    count: int


@dataclass(frozen=True)
class MergeStep:
    """One greedy merge: from_* is absorbed into to_*."""

    from_hex: HexStr
    from_key: str
    from_count: int
    to_hex: HexStr
    to_key: str
    distance: float


@dataclass
class MergePlan:
    """Losing hex -> surviving hex / key, plus colour totals."""

    merge_map: Dict[HexStr, HexStr] = field(default_factory=dict)
    merge_key_map: Dict[HexStr, str] = field(default_factory=dict)
    merged_count: int = 0
    colours_before: int = 0
    colours_after: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.merge_map


def collect_colour_usage(grid: Grid) -> List[ColourUsage]:
    """Usage per upper-case hex, in first-seen order. Erased cells are skipped."""
    usage: Dict[HexStr, ColourUsage] = {}
    for row in grid:
        for cell in row:
            if not is_bead(cell):
                continue
            hx = cell.color.upper()
            existing = usage.get(hx)
            if existing is not None:
                existing.count += 1
                continue
            try:
                rgb = hex_to_rgb(hx)
            except ValueError:
                continue
            usage[hx] = ColourUsage(hex=hx, key=cell.key, rgb=rgb, count=1)
    return list(usage.values())


def _closest_pair(active: List[ColourUsage]) -> Tuple[int, int, float]:
    best_dist = float("inf")
    best_a, best_b = 0, 1
    for i in range(len(active)):
        rgb_i = active[i].rgb
        for j in range(i + 1, len(active)):
            d = perceptual_distance(rgb_i, active[j].rgb)
            if d < best_dist:
                best_dist = d
                best_a, best_b = i, j
    return best_a, best_b, best_dist


def _greedy_merges(
    usage: List[ColourUsage], target_count: int
) -> Iterator[Tuple[ColourUsage, ColourUsage, int, float]]:
    """
    Yield (victim, survivor, victim_count_before, distance) per merge.

    Works on copies; the caller's records are left untouched.
    """
    active = [ColourUsage(u.hex, u.key, u.rgb, u.count) for u in usage]
    target = max(1, int(target_count))
    while len(active) > target:
        a, b, dist = _closest_pair(active)
        # tie on count keeps the earlier colour
        if active[a].count >= active[b].count:
            survivor, victim = a, b
        else:
            survivor, victim = b, a
        absorbed = active[victim]
        kept = active[survivor]
        victim_count = absorbed.count
        kept.count += absorbed.count
        del active[victim]
        yield absorbed, kept, victim_count, dist


def calculate_merge_plan(usage: List[ColourUsage], target_count: int) -> MergePlan:
    """
    Plan merges until at most target_count colours remain.

    Already at or under target: empty plan with before == after.
    """
    before = len(usage)
    if before <= target_count:
        return MergePlan(colours_before=before, colours_after=before)

    merge_map: Dict[HexStr, HexStr] = {}
    merge_key_map: Dict[HexStr, str] = {}
    remaining = before
    for victim, survivor, _count, _dist in _greedy_merges(usage, target_count):
        merge_map[victim.hex] = survivor.hex
        merge_key_map[victim.hex] = survivor.key
        # re-point anything that was folded into the victim earlier
        for old_hex, to_hex in list(merge_map.items()):
            if to_hex == victim.hex:
                merge_map[old_hex] = survivor.hex
                merge_key_map[old_hex] = survivor.key
        remaining -= 1

    return MergePlan(
        merge_map=merge_map,
        merge_key_map=merge_key_map,
        merged_count=len(merge_map),
        colours_before=before,
        colours_after=remaining,
    )


def merge_preview(usage: List[ColourUsage], target_count: int) -> List[MergeStep]:
    """Ordered merge steps the planner would take. Touches no grid."""
    if len(usage) <= target_count:
        return []
    return [
        MergeStep(
            from_hex=victim.hex,
            from_key=victim.key,
            from_count=count,
            to_hex=survivor.hex,
            to_key=survivor.key,
            distance=dist,
        )
        for victim, survivor, count, dist in _greedy_merges(usage, target_count)
    ]


def apply_colour_merge(grid: Grid, plan: MergePlan) -> Grid:
    """
    Rewrite merged colours. Rows with nothing to rewrite are shared as-is.

    Idempotent: after one pass no cell carries a losing hex any more.
    """
    if not plan.merge_map:
        return grid

    out = []
    for row in grid:
        new_row = None
        for i, cell in enumerate(row):
            if not is_bead(cell):
                continue
            hx = cell.color.upper()
            new_hex = plan.merge_map.get(hx)
            if new_hex is None:
                continue
            if new_row is None:
                new_row = list(row)
            new_row[i] = Cell(plan.merge_key_map.get(hx, cell.key), new_hex, False)
        out.append(row if new_row is None else tuple(new_row))
    return tuple(out)


def optimise_colours(grid: Grid, target_count: int) -> Tuple[Grid, MergePlan]:
    """Collect usage, plan and apply in one call."""
    plan = calculate_merge_plan(collect_colour_usage(grid), target_count)
    return apply_colour_merge(grid, plan), plan


__all__ = [
    "ColourUsage",
    "MergeStep",
    "MergePlan",
    "collect_colour_usage",
    "calculate_merge_plan",
    "merge_preview",
    "apply_colour_merge",
    "optimise_colours",
]

# bead_map/edit/stats.py
from __future__ import annotations

"""
Per-colour bead counts for a grid.

colour_stats() is a single pass, cheap enough to rerun after each edit.
ColourStatsCache keeps the last result and hands it back while the caller
still holds the same grid object.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core_types import Grid, HexStr, is_bead


@dataclass(frozen=True)
class ColourStat:
    hex: HexStr
    key: str
    count: int
    percentage: float


@dataclass(frozen=True)
class ColourStats:
    """Counts keyed by upper-case hex (first-seen order) and the bead total."""

    counts: Dict[HexStr, ColourStat] = field(default_factory=dict)
    total: int = 0

    def most_used(self) -> List[ColourStat]:
        return sorted(self.counts.values(), key=lambda s: -s.count)


def colour_stats(grid: Grid) -> ColourStats:
    """Count beads per colour, skipping erased cells."""
    raw: Dict[HexStr, List] = {}
    total = 0
    for row in grid:
        for cell in row:
            if not is_bead(cell):
                continue
            hx = cell.color.upper()
            slot = raw.get(hx)
            if slot is None:
                raw[hx] = [cell.key, 1]
            else:
                slot[1] += 1
            total += 1
    counts = {
        hx: ColourStat(
            hex=hx,
            key=key,
            count=n,
            percentage=(n / total) * 100.0 if total else 0.0,
        )
        for hx, (key, n) in raw.items()
    }
    return ColourStats(counts=counts, total=total)


class ColourStatsCache:
    """Memoises colour_stats() by grid identity."""

    def __init__(self) -> None:
        self._grid: Optional[Grid] = None
        self._stats: Optional[ColourStats] = None

    def get(self, grid: Grid) -> ColourStats:
        if self._stats is not None and self._grid is grid:
            return self._stats
        stats = colour_stats(grid)
        self._grid = grid
        self._stats = stats
        return stats


__all__ = ["ColourStat", "ColourStats", "colour_stats", "ColourStatsCache"]

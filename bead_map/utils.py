# bead_map/utils.py
from __future__ import annotations

"""
Console output for bead_map.

All output goes through print(): plain lines to stdout, '[debug]'/'[warn]'
prefixed lines to stdout and '[error]' lines to stderr. There is no logging
configuration; --debug on the CLI decides whether debug lines are emitted at
all.

Also holds the small formatters used to build those lines and the end-of-run
bead usage and merge reports.
"""

import sys
from typing import Any, Iterable, List, Optional, Sequence, TextIO, Tuple

from .core_types import Grid
from .edit.stats import colour_stats


def format_duration(seconds: float) -> str:
    """'12.3ms' under a second, '4.56s' under a minute, else '2m 5s'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.2f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(round(seconds - 60 * minutes))}s"


def format_value(value: Any) -> str:
    """on/off for bools, 1,234 for ints, trimmed 3dp for floats, str() otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def format_percentage(pct: float, decimals: int = 1) -> str:
    """Percentage already on a 0..100 scale."""
    return f"{pct:.{decimals}f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """'Name: value' blocks joined by sep."""
    return sep.join(f"{name}{eq}{format_value(value)}" for name, value in pairs)


def _emit(message: str, prefix: str = "", stream: Optional[TextIO] = None) -> None:
    print(f"{prefix}{message}", file=stream or sys.stdout, flush=True)


def log(message: str) -> None:
    _emit(message)


def debug_log(message: str) -> None:
    _emit(message, "[debug] ")


def warn(message: str) -> None:
    _emit(message, "[warn] ")


def error(message: str) -> None:
    _emit(message, "[error] ", sys.stderr)


def print_banner(title: str) -> None:
    _emit(f"\n=== {title} ===")


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool = False
) -> None:
    """
    One config line, e.g.
      [grid] Cols: 52  Rows: 52  Mode: dominant  Dither: none
    Sent through debug_log() when debug is set.
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


# Reports


def colour_usage_report(grid: Grid) -> List[Tuple[str, str, int]]:
    """(hex, key, count) for every bead colour in the grid, most used first."""
    return [(s.hex, s.key, s.count) for s in colour_stats(grid).most_used()]


def print_usage_report(grid: Grid) -> int:
    """Print one line per bead colour plus the total. Returns the bead total."""
    stats = colour_stats(grid)
    log(f"Beads used ({len(stats.counts)} colours):")
    for s in stats.most_used():
        log(f"  {s.hex}  {s.key:<6} {s.count:>7,}  {format_percentage(s.percentage)}")
    log(f"Total beads: {stats.total:,}")
    return stats.total


def print_merge_steps(steps: Sequence[Any], target_count: int) -> None:
    """Print MergeStep records in the order the planner would apply them."""
    log(f"Merges to reach {target_count} colours: {len(steps)}")
    for step in steps:
        log(
            f"  {step.from_hex} {step.from_key} x{step.from_count:,}"
            f" -> {step.to_hex} {step.to_key}  (d={step.distance:.1f})"
        )


__all__ = [
    "format_duration",
    "format_value",
    "format_percentage",
    "key_value_pairs_to_string",
    "log",
    "debug_log",
    "warn",
    "error",
    "print_banner",
    "print_config_line",
    "colour_usage_report",
    "print_usage_report",
    "print_merge_steps",
]

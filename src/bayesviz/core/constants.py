"""
Package-wide defaults for summaries and plot styling.

This module is zero-IO and uses only the Python standard library. Plot functions and
bayesviz.io.config.VizSettings read their defaults from here.

Notes:
    - Defaults mirror the conventional bar/rootogram styling (90% intervals, 0.9 bar width).
    - Threshold constants drive the rating columns of R-hat and n_eff tables.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_PROB",
    "DEFAULT_BAR_WIDTH",
    "DEFAULT_SIZE",
    "DEFAULT_FATTEN",
    "DEFAULT_LINEWIDTH",
    "DEFAULT_COLOR_SCHEME",
    "Y_LIMIT_EXPANSION",
    "RHAT_THRESHOLDS",
    "NEFF_RATIO_THRESHOLDS",
    "SUMMARY_COLUMNS",
    "ROOTOGRAM_COLUMNS",
    "DRAWS_COLUMNS",
]

# Central probability mass of yrep intervals.
DEFAULT_PROB: float = 0.9

DEFAULT_BAR_WIDTH: float = 0.9
DEFAULT_SIZE: float = 1.0
DEFAULT_FATTEN: float = 2.5
DEFAULT_LINEWIDTH: float = 1.0

DEFAULT_COLOR_SCHEME: str = "blue"

# Bar plots with a fixed y scale always show 5% headroom above the highest interval.
Y_LIMIT_EXPANSION: float = 1.05

# (low, ok) upper bounds; anything above the second bound is rated "high".
RHAT_THRESHOLDS: tuple[float, float] = (1.05, 1.1)
NEFF_RATIO_THRESHOLDS: tuple[float, float] = (0.1, 0.5)

# Canonical column orders.
SUMMARY_COLUMNS: tuple[str, ...] = ("x", "y_obs", "l", "m", "h")
ROOTOGRAM_COLUMNS: tuple[str, ...] = (
    "xpos",
    "ypos",
    "ty",
    "tyexp",
    "tylower",
    "tyupper",
    "ybottom",
    "ytop",
)
DRAWS_COLUMNS: tuple[str, ...] = ("chain", "iteration", "parameter", "value")

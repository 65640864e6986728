"""
Summaries of discrete outcomes for bar plots and rootograms.

Overview
- ppc_bars_data(): per (group, category) observed count/proportion plus lower/median/upper
  quantiles of the same statistic across yrep draws.
- ppc_rootogram_data(): per category sqrt-scale observed and expected counts with interval,
  positioned for the standing, hanging, or suspended style.
- summary_rows(): typed row view of a bars summary.

Pipeline (bars)
1. Quantile levels {a, 0.5, 1 - a} with a = (1 - prob) / 2.
2. Category domain: integers from min(0, min value) to the max over y and yrep; shared by
   every group.
3. Per draw and group: count per category, zero-filled over the domain; optionally divided by
   the number of observations in that (draw, group) partition.
4. Quantiles of the per-draw statistic for each (group, category).
5. The same tabulation for y.
6. Full join on (group, category); a side with no row stays null.
7. Sort by (x, group); columns [group?, x, y_obs, l, m, h].

Notes
- Pure functions: every call recomputes from its inputs.
- Quantiles use linear interpolation between order statistics.
"""

from __future__ import annotations

import logging

import numpy as np
import polars as pl

from bayesviz.core.constants import DEFAULT_PROB, ROOTOGRAM_COLUMNS, SUMMARY_COLUMNS
from bayesviz.core.grammar import RootogramStyle, Statistic, rootogram_style_from_value, statistic_for
from bayesviz.core.schema import BarsSummaryRow
from bayesviz.core.typing import ArrayLike, GroupLike
from bayesviz.io.validate import (
    ensure_counts,
    ensure_whole_numbers,
    validate_freq,
    validate_group,
    validate_predictions,
    validate_prob,
    validate_y,
)

logger = logging.getLogger(__name__)

__all__ = [
    "quantile_levels",
    "category_domain",
    "tabulate_draws",
    "ppc_bars_data",
    "ppc_rootogram_data",
    "summary_rows",
]

_GROUP = "group"
_UNGROUPED = "__all__"


def quantile_levels(prob: float) -> tuple[float, float, float]:
    """
    Sorted quantile levels for a central interval of mass ``prob``.

    Examples:
        >>> quantile_levels(0.9)
        (0.04999999999999999, 0.5, 0.95)
        >>> quantile_levels(0.0)
        (0.5, 0.5, 0.5)
    """
    alpha = (1.0 - prob) / 2.0
    lo, mid, hi = sorted((alpha, 0.5, 1.0 - alpha))
    return lo, mid, hi


def category_domain(*arrays: np.ndarray) -> np.ndarray:
    """Integer categories from min(0, smallest value) to the largest value over all arrays."""
    lo = min(0, min(int(a.min()) for a in arrays))
    hi = max(int(a.max()) for a in arrays)
    return np.arange(lo, hi + 1, dtype=np.int64)


def tabulate_draws(
    values: np.ndarray,
    groups: pl.Series,
    domain: np.ndarray,
    statistic: Statistic = Statistic.COUNT,
) -> pl.DataFrame:
    """
    Zero-filled per-draw tabulation of whole-number outcomes.

    Args:
        values: (S, N) int64 array, one row per draw.
        groups: Length-N Series named ``group``.
        domain: Categories to report (every category in ``values`` must be in it).
        statistic: Count, or proportion within each (draw, group).

    Returns:
        pl.DataFrame: Columns [draw, group, x, stat]; S x n_groups x len(domain) rows.
    """
    n_draws, n_obs = values.shape
    long = pl.DataFrame(
        {
            "draw": np.repeat(np.arange(n_draws, dtype=np.int64), n_obs),
            _GROUP: groups.gather(np.tile(np.arange(n_obs), n_draws)),
            "x": values.reshape(-1),
        }
    )
    counts = long.group_by(["draw", _GROUP, "x"]).agg(pl.len().alias("n"))

    grid = (
        pl.DataFrame({"draw": np.arange(n_draws, dtype=np.int64)})
        .join(groups.unique().to_frame(), how="cross")
        .join(pl.DataFrame({"x": domain}), how="cross")
    )
    full = grid.join(counts, on=["draw", _GROUP, "x"], how="left").with_columns(
        pl.col("n").fill_null(0).cast(pl.Float64)
    )
    if statistic is Statistic.PROPORTION:
        stat = pl.col("n") / pl.col("n").sum().over(["draw", _GROUP])
    else:
        stat = pl.col("n")
    return full.select("draw", _GROUP, "x", stat.alias("stat"))


def ppc_bars_data(
    y: ArrayLike,
    yrep: ArrayLike,
    group: GroupLike | None = None,
    prob: float = DEFAULT_PROB,
    freq: bool = True,
) -> pl.DataFrame:
    """
    Summarize observed and replicated discrete outcomes per category.

    Args:
        y: Observed outcomes, N whole numbers.
        yrep: S x N replicated outcomes, whole numbers.
        group: Optional labels (length N) to stratify by.
        prob: Central probability mass of the yrep interval, in [0, 1].
        freq: Counts when True, proportions within each (group, draw) when False.

    Returns:
        pl.DataFrame: Columns [group (only when grouped), x, y_obs, l, m, h], one row per
        (group, category) over the shared category domain, sorted by x then group.

    Raises:
        ValidationError: Out-of-range prob, non-bool freq, malformed or non-whole y/yrep,
            length mismatches, or bad group labels.

    Examples:
        >>> df = ppc_bars_data([1, 1, 2, 3], [[1, 2, 2, 3]] * 3)
        >>> df.columns
        ['x', 'y_obs', 'l', 'm', 'h']
        >>> df.get_column("y_obs").to_list()
        [0.0, 2.0, 1.0, 1.0]
    """
    prob = validate_prob(prob)
    freq = validate_freq(freq)
    y_arr = validate_y(y)
    yrep_arr = validate_predictions(yrep, y_arr.shape[0])
    y_int = ensure_whole_numbers(y_arr, "y", caller="ppc_bars")
    yrep_int = ensure_whole_numbers(yrep_arr, "yrep", caller="ppc_bars")

    grouped = group is not None
    if grouped:
        groups = validate_group(group, y_int.shape[0])
    else:
        groups = pl.Series(_GROUP, [_UNGROUPED] * y_int.shape[0])

    statistic = statistic_for(freq)
    lo, mid, hi = quantile_levels(prob)
    domain = category_domain(y_int, yrep_int)
    logger.debug(
        "ppc_bars_data: draws=%d obs=%d categories=%d groups=%d stat=%s",
        yrep_int.shape[0],
        y_int.shape[0],
        domain.size,
        groups.n_unique(),
        statistic.value,
    )

    yrep_summary = (
        tabulate_draws(yrep_int, groups, domain, statistic)
        .group_by([_GROUP, "x"])
        .agg(
            pl.col("stat").quantile(lo, interpolation="linear").alias("l"),
            pl.col("stat").quantile(mid, interpolation="linear").alias("m"),
            pl.col("stat").quantile(hi, interpolation="linear").alias("h"),
        )
    )
    y_summary = (
        tabulate_draws(y_int[np.newaxis, :], groups, domain, statistic)
        .drop("draw")
        .rename({"stat": "y_obs"})
    )

    cols = ([_GROUP] if grouped else []) + list(SUMMARY_COLUMNS)
    return (
        yrep_summary.join(y_summary, on=[_GROUP, "x"], how="full", coalesce=True)
        .sort(["x", _GROUP])
        .select(cols)
    )


def ppc_rootogram_data(
    y: ArrayLike,
    yrep: ArrayLike,
    style: str | RootogramStyle = RootogramStyle.STANDING,
    prob: float = DEFAULT_PROB,
) -> pl.DataFrame:
    """
    Build the rootogram table on the square-root count scale.

    Args:
        y: Observed counts (non-negative whole numbers).
        yrep: S x N replicated counts.
        style: standing, hanging, or suspended.
        prob: Central probability mass of the expected-count interval, in [0, 1].

    Returns:
        pl.DataFrame: Columns [xpos, ypos, ty, tyexp, tylower, tyupper, ybottom, ytop], one row
        per category 0..max(y, yrep). ``ty`` is the bar height (signed residual
        sqrt(expected) - sqrt(observed) for suspended), ``ypos`` the bar center, and
        ``ybottom``/``ytop`` the bar edges.

    Raises:
        ValidationError: Non-count inputs, bad shapes, unknown style, or out-of-range prob.
    """
    style = rootogram_style_from_value(style)
    prob = validate_prob(prob)
    y_arr = validate_y(y)
    yrep_arr = validate_predictions(yrep, y_arr.shape[0])
    y_int = ensure_counts(y_arr, "y", caller="ppc_rootogram")
    yrep_int = ensure_counts(yrep_arr, "yrep", caller="ppc_rootogram")

    alpha = (1.0 - prob) / 2.0
    domain = category_domain(y_int, yrep_int)
    groups = pl.Series(_GROUP, [_UNGROUPED] * y_int.shape[0])
    logger.debug("ppc_rootogram_data: style=%s categories=%d", style.value, domain.size)

    expected = (
        tabulate_draws(yrep_int, groups, domain)
        .group_by("x")
        .agg(
            pl.col("stat").mean().sqrt().alias("tyexp"),
            pl.col("stat").quantile(alpha, interpolation="linear").sqrt().alias("tylower"),
            pl.col("stat").quantile(1.0 - alpha, interpolation="linear").sqrt().alias("tyupper"),
        )
    )
    observed = (
        tabulate_draws(y_int[np.newaxis, :], groups, domain)
        .select(pl.col("x"), pl.col("stat").sqrt().alias("ty"))
    )
    data = expected.join(observed, on="x", how="left").sort("x")

    # An unobserved category has observed count 0 here, not missing, so its suspended
    # residual is sqrt(expected) rather than 0.
    if style is RootogramStyle.SUSPENDED:
        data = data.with_columns((pl.col("tyexp") - pl.col("ty")).alias("ty"))
    if style is RootogramStyle.HANGING:
        ypos = pl.col("tyexp") - pl.col("ty") / 2.0
    else:
        ypos = pl.col("ty") / 2.0

    return (
        data.rename({"x": "xpos"})
        .with_columns(ypos.alias("ypos"))
        .with_columns(
            (pl.col("ypos") - pl.col("ty") / 2.0).alias("ybottom"),
            (pl.col("ypos") + pl.col("ty") / 2.0).alias("ytop"),
        )
        .select(list(ROOTOGRAM_COLUMNS))
    )


def summary_rows(data: pl.DataFrame) -> list[BarsSummaryRow]:
    """Typed rows of a ppc_bars_data() table."""
    return [BarsSummaryRow(**row) for row in data.iter_rows(named=True)]

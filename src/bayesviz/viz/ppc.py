"""
Posterior predictive checks for discrete outcomes.

Plot descriptions
- ppc_bars(): bar plot of y with yrep medians and central intervals drawn on the bars.
- ppc_bars_grouped(): ppc_bars() with one facet per level of a grouping variable.
- ppc_rootogram(): observed counts against expected counts (mean over yrep) on the
  square-root scale, as standing, hanging, or suspended bars (Kleiber and Zeileis, 2016).

Inputs
- y and yrep must be whole numbers (the dtype need not be integer); rootograms also require
  non-negative counts.

Notes
- Every builder takes an explicit ``config`` (VizSettings); None loads env/TOML/defaults.
- Extra keyword arguments are accepted, ignored, and reported with ArgumentConflictWarning.
"""

from __future__ import annotations

import logging
from typing import Any

import altair as alt
import polars as pl
from pydantic import ValidationError as PydanticValidationError

from bayesviz.core.constants import (
    DEFAULT_BAR_WIDTH,
    DEFAULT_FATTEN,
    DEFAULT_LINEWIDTH,
    DEFAULT_SIZE,
    Y_LIMIT_EXPANSION,
)
from bayesviz.core.errors import ArgumentConflictError, ValidationError
from bayesviz.core.grammar import (
    FacetScale,
    RootogramStyle,
    rootogram_style_from_value,
    statistic_for,
)
from bayesviz.core.schema import BarsStyle, FacetArgs
from bayesviz.core.typing import ArrayLike, GroupLike
from bayesviz.io.config import VizSettings
from bayesviz.io.validate import check_ignored_arguments
from bayesviz.transforms.discrete import ppc_bars_data, ppc_rootogram_data

from . import layers
from .theme import apply_theme, resolve_config

logger = logging.getLogger(__name__)

__all__ = [
    "ppc_bars",
    "ppc_bars_grouped",
    "ppc_rootogram",
    "bars_facet_args",
]


def _bars_style(width: float, size: float, fatten: float, linewidth: float) -> BarsStyle:
    try:
        return BarsStyle(width=width, size=size, fatten=fatten, linewidth=linewidth)
    except PydanticValidationError as exc:
        raise ValidationError(f"invalid bar plot styling: {exc}") from exc


def bars_facet_args(facet_args: dict[str, Any] | None) -> FacetArgs:
    """
    Validate ``facet_args`` for grouped bar plots.

    Raises:
        ArgumentConflictError: If ``facets`` (always ``group``) or an unknown key is supplied.
        ValidationError: If ``scales`` or ``columns`` has an invalid value.
    """
    args = dict(facet_args or {})
    if "facets" in args:
        raise ArgumentConflictError(
            "'facet_args' cannot set 'facets'; grouped bar plots always facet by 'group'"
        )
    try:
        return FacetArgs(**args)
    except PydanticValidationError as exc:
        extra = [".".join(str(p) for p in e["loc"]) for e in exc.errors() if e["type"] == "extra_forbidden"]
        if extra:
            raise ArgumentConflictError(f"unsupported 'facet_args' keys: {extra}") from exc
        raise ValidationError(f"invalid 'facet_args': {exc}") from exc


def _bars_layers(
    data: pl.DataFrame,
    *,
    freq: bool,
    style: BarsStyle,
    config: VizSettings,
    y_max: float | None,
) -> alt.LayerChart:
    scheme = config.scheme()
    y_scale = alt.Scale(domainMin=0, domainMax=y_max, nice=False) if y_max else alt.Scale(domainMin=0)
    bars = layers.layer_bars(
        x="x",
        y="y_obs",
        width=style.width,
        fill=scheme.light,
        stroke=scheme.light_highlight,
        label="y",
        y_title=statistic_for(freq).axis_title,
        y_scale=y_scale,
    )
    interval = layers.layer_interval(
        x="x", y_low="l", y_high="h", color=scheme.dark, label="yrep", linewidth=style.linewidth
    )
    medians = layers.layer_points(
        x="x", y="m", color=scheme.dark, label="yrep", size=style.point_size
    )
    return alt.layer(bars, interval, medians, data=alt.Data(values=data.to_dicts()))


def _y_limit(data: pl.DataFrame) -> float | None:
    # Headroom above the highest interval; never below the tallest observed bar.
    h_max = data.get_column("h").max() or 0.0
    obs_max = data.get_column("y_obs").max() or 0.0
    upper = max(Y_LIMIT_EXPANSION * float(h_max), float(obs_max))
    return upper if upper > 0 else None


def ppc_bars(
    y: ArrayLike,
    yrep: ArrayLike,
    *,
    prob: float | None = None,
    width: float = DEFAULT_BAR_WIDTH,
    size: float = DEFAULT_SIZE,
    fatten: float = DEFAULT_FATTEN,
    linewidth: float = DEFAULT_LINEWIDTH,
    freq: bool = True,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.LayerChart:
    """
    Bar plot of y with yrep medians and central intervals.

    Args:
        y: Observed outcomes (whole numbers).
        yrep: S x N replicated outcomes (whole numbers).
        prob: Probability mass of the yrep intervals; None uses ``config.prob``.
            ``prob=0`` collapses the intervals onto the medians.
        width: Bar width in category units.
        size, fatten: Size of the yrep median points (size * fatten).
        linewidth: Width of the yrep interval rules.
        freq: Count (True) or proportion (False) on the y axis.
        config: Styling settings.
        **kwargs: Currently unused; reported with ArgumentConflictWarning.

    Returns:
        alt.LayerChart: Layers [bars of y, yrep intervals, yrep medians].

    Raises:
        ValidationError: For invalid data or styling values.
    """
    check_ignored_arguments("ppc_bars", kwargs)
    config = resolve_config(config)
    style = _bars_style(width, size, fatten, linewidth)
    data = ppc_bars_data(y, yrep, prob=config.prob if prob is None else prob, freq=freq)
    chart = _bars_layers(
        data, freq=freq, style=style, config=config, y_max=_y_limit(data)
    ).properties(width=config.width, height=config.height)
    return apply_theme(chart, config)


def ppc_bars_grouped(
    y: ArrayLike,
    yrep: ArrayLike,
    group: GroupLike,
    *,
    facet_args: dict[str, Any] | None = None,
    prob: float | None = None,
    width: float = DEFAULT_BAR_WIDTH,
    size: float = DEFAULT_SIZE,
    fatten: float = DEFAULT_FATTEN,
    linewidth: float = DEFAULT_LINEWIDTH,
    freq: bool = True,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.FacetChart:
    """
    ppc_bars() faceted by ``group``.

    Args:
        group: One label per observation.
        facet_args: Optional ``columns`` and ``scales`` (fixed, free, free_x, free_y).
            With a fixed y scale every facet shares the expanded y limit.
        (other arguments as in ppc_bars)

    Returns:
        alt.FacetChart: One panel per group level, all over the same category domain.

    Raises:
        ArgumentConflictError: If ``facet_args`` sets ``facets`` or unknown keys.
        ValidationError: For invalid data, styling, or facet values.
    """
    check_ignored_arguments("ppc_bars_grouped", kwargs)
    config = resolve_config(config)
    fargs = bars_facet_args(facet_args)
    style = _bars_style(width, size, fatten, linewidth)
    data = ppc_bars_data(y, yrep, group=group, prob=config.prob if prob is None else prob, freq=freq)

    scales = FacetScale(fargs.scales)
    y_max = _y_limit(data) if scales.fixed_y else None
    layered = _bars_layers(data, freq=freq, style=style, config=config, y_max=y_max).properties(
        width=config.width, height=config.height
    )
    chart = layered.facet(
        facet=alt.Facet("group:N", title=None),
        columns=fargs.columns or config.facet_columns,
    )
    if not scales.fixed_y:
        chart = chart.resolve_scale(y="independent")
    if not scales.fixed_x:
        chart = chart.resolve_scale(x="independent")
    return apply_theme(chart, config)


def ppc_rootogram(
    y: ArrayLike,
    yrep: ArrayLike,
    style: str | RootogramStyle = RootogramStyle.STANDING,
    *,
    prob: float | None = None,
    size: float = DEFAULT_SIZE,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.LayerChart:
    """
    Rootogram of observed vs expected counts on the square-root scale.

    Args:
        y: Observed counts.
        yrep: S x N replicated counts.
        style: "standing" (bars from zero), "hanging" (bars hang from the expected curve),
            or "suspended" (bars of sqrt(expected) - sqrt(observed)).
        prob: Probability mass of the interval around the expected counts (intervals of
            the square roots of the counts); ``prob=0`` removes the interval.
        size: Width of the expected-count line.
        config: Styling settings.
        **kwargs: Currently unused; reported with ArgumentConflictWarning.

    Returns:
        alt.LayerChart: Layers [observed tiles, (zero rule), expected band, expected line].
    """
    check_ignored_arguments("ppc_rootogram", kwargs)
    style = rootogram_style_from_value(style)
    config = resolve_config(config)
    if size <= 0:
        raise ValidationError(f"'size' must be positive (got {size!r})")
    data = ppc_rootogram_data(y, yrep, style=style, prob=config.prob if prob is None else prob)
    scheme = config.scheme()
    logger.debug("ppc_rootogram: style=%s rows=%d", style.value, data.height)

    tiles = layers.layer_tiles(
        x="xpos",
        y="ybottom",
        y2="ytop",
        fill=scheme.light,
        stroke=scheme.light_highlight,
        label="Observed",
        x_title="y",
        y_title="sqrt(Count)",
        y_scale=alt.Scale(domainMin=0) if style is RootogramStyle.STANDING else None,
    )
    parts: list[alt.Chart] = [tiles]
    if style is not RootogramStyle.STANDING:
        parts.append(layers.layer_rule_y(0.0, color=scheme.dark_highlight))
    parts.append(layers.layer_band(x="xpos", y_low="tylower", y_high="tyupper", color=scheme.dark))
    parts.append(
        layers.layer_line(x="xpos", y="tyexp", color=scheme.dark_highlight, label="Expected", size=size)
    )
    chart = alt.layer(*parts, data=alt.Data(values=data.to_dicts())).properties(
        width=config.width, height=config.height
    )
    return apply_theme(chart, config)

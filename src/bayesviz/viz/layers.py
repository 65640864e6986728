"""
Altair layer primitives shared by the PPC and MCMC plots.

Layers are built without data so they can be combined with ``alt.layer(..., data=...)`` and
faceted; the exceptions are the reference rules, which carry their own one-row data.

Legend entries for constant series ("y", "yrep", "Observed", "Expected") come from a
calculated ``series`` field mapped through a one-entry scale, so each layer contributes
exactly one labelled legend item.
"""

from __future__ import annotations

import json

import altair as alt

__all__ = [
    "series_encoding",
    "with_series",
    "layer_bars",
    "layer_tiles",
    "layer_interval",
    "layer_points",
    "layer_line",
    "layer_band",
    "layer_rule_y",
    "layer_rules_x",
]


def series_encoding(channel: str, label: str, color: str) -> alt.FieldChannelMixin:
    """Encode the calculated ``series`` field on ``channel`` ("fill" or "color")."""
    scale = alt.Scale(domain=[label], range=[color])
    legend = alt.Legend(title=None)
    if channel == "fill":
        return alt.Fill("series:N", scale=scale, legend=legend)
    return alt.Color("series:N", scale=scale, legend=legend)


def with_series(ch: alt.Chart, label: str) -> alt.Chart:
    """Add a constant ``series`` field holding ``label``."""
    return ch.transform_calculate(series=json.dumps(label))


def layer_bars(
    *,
    x: str,
    y: str,
    width: float,
    fill: str,
    stroke: str,
    label: str,
    y_title: str | None = None,
    y_scale: alt.Scale | None = None,
) -> alt.Chart:
    """Bars centered on quantitative ``x`` spanning ``width`` category units; rows with null ``y`` are skipped."""
    half = width / 2.0
    base = alt.Chart().transform_filter(f"datum.{y} != null")
    base = with_series(base, label).transform_calculate(
        x_lo=f"datum.{x} - {half}", x_hi=f"datum.{x} + {half}"
    )
    return base.mark_bar(stroke=stroke, strokeWidth=0.5).encode(
        x=alt.X("x_lo:Q", title=None, axis=alt.Axis(tickMinStep=1)),
        x2="x_hi:Q",
        y=alt.Y(f"{y}:Q", title=y_title, scale=y_scale if y_scale is not None else alt.Undefined),
        fill=series_encoding("fill", label, fill),
    )


def layer_tiles(
    *,
    x: str,
    y: str,
    y2: str,
    fill: str,
    stroke: str,
    label: str,
    x_title: str | None = None,
    y_title: str | None = None,
    y_scale: alt.Scale | None = None,
) -> alt.Chart:
    """Unit-width rectangles centered on ``x`` spanning ``y``..``y2``."""
    base = with_series(alt.Chart(), label).transform_calculate(
        x_lo=f"datum.{x} - 0.5", x_hi=f"datum.{x} + 0.5"
    )
    return base.mark_rect(stroke=stroke, strokeWidth=0.25).encode(
        x=alt.X("x_lo:Q", title=x_title),
        x2="x_hi:Q",
        y=alt.Y(f"{y}:Q", title=y_title, scale=y_scale if y_scale is not None else alt.Undefined),
        y2=f"{y2}:Q",
        fill=series_encoding("fill", label, fill),
    )


def layer_interval(
    *, x: str, y_low: str, y_high: str, color: str, label: str, linewidth: float = 1.0
) -> alt.Chart:
    """Vertical rules from ``y_low`` to ``y_high``; rows with null bounds are skipped."""
    base = with_series(alt.Chart().transform_filter(f"datum.{y_low} != null"), label)
    return base.mark_rule(strokeWidth=linewidth * 1.5).encode(
        x=f"{x}:Q",
        y=f"{y_low}:Q",
        y2=f"{y_high}:Q",
        color=series_encoding("color", label, color),
    )


def layer_points(
    *,
    x: str,
    y: str,
    color: str | None = None,
    label: str | None = None,
    size: float = 30.0,
    opacity: float = 1.0,
    filled: bool = True,
) -> alt.Chart:
    """Points; with ``label`` they join the legend as a constant series."""
    base = alt.Chart().transform_filter(f"datum.{y} != null")
    mark_kwargs: dict[str, object] = {"filled": filled, "size": size, "opacity": opacity}
    if label is None:
        if color is not None:
            mark_kwargs["color"] = color
        return base.mark_point(**mark_kwargs).encode(x=f"{x}:Q", y=f"{y}:Q")
    return with_series(base, label).mark_point(**mark_kwargs).encode(
        x=f"{x}:Q", y=f"{y}:Q", color=series_encoding("color", label, color or "black")
    )


def layer_line(
    *, x: str, y: str, color: str, label: str | None = None, size: float = 1.0
) -> alt.Chart:
    """Line through (x, y); with ``label`` it joins the legend as a constant series."""
    if label is None:
        return alt.Chart().mark_line(color=color, strokeWidth=size * 1.5).encode(
            x=f"{x}:Q", y=f"{y}:Q"
        )
    return with_series(alt.Chart(), label).mark_line(strokeWidth=size * 1.5).encode(
        x=f"{x}:Q", y=f"{y}:Q", color=series_encoding("color", label, color)
    )


def layer_band(*, x: str, y_low: str, y_high: str, color: str, opacity: float = 0.4) -> alt.Chart:
    """Filled band between ``y_low`` and ``y_high`` along ``x``."""
    return alt.Chart().mark_area(color=color, opacity=opacity).encode(
        x=f"{x}:Q", y=f"{y_low}:Q", y2=f"{y_high}:Q"
    )


def layer_rule_y(y: float, *, color: str = "#999", size: float = 0.4) -> alt.Chart:
    """Horizontal reference rule at ``y`` (own data)."""
    return (
        alt.Chart(alt.Data(values=[{"y": float(y)}]))
        .mark_rule(color=color, strokeWidth=size * 2)
        .encode(y="y:Q")
    )


def layer_rules_x(xs: list[float], *, color: str = "#999", dash: bool = True) -> alt.Chart:
    """Vertical reference rules at each of ``xs`` (own data)."""
    return (
        alt.Chart(alt.Data(values=[{"x": float(v)} for v in xs]))
        .mark_rule(color=color, strokeDash=[4, 4] if dash else alt.Undefined)
        .encode(x="x:Q")
    )

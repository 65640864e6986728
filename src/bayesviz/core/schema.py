"""
Pydantic v2 models for color schemes, plot styling arguments, and typed summary rows.

Responsibilities
- Define the canonical ColorScheme (six named colors) consumed by every plot builder.
- Validate user-facing styling arguments (bar width, point sizes, facet arguments).
- Describe summary-table rows so downstream code can work with typed records instead
  of positional columns.

Style
- Zero-IO (stdlib + pydantic only).
- Validators raise ValueError subclasses; pydantic surfaces them as
  ``pydantic.ValidationError``. Callers in bayesviz.viz translate those into
  bayesviz.core.errors types at the API boundary.

References
- grammar: bayesviz/core/grammar.py (ColorCode, FacetScale)
- errors: bayesviz/core/errors.py
- tests: tests/core/*
"""

from __future__ import annotations

import re
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .grammar import ColorCode, color_code_from_value, facet_scale_from_value

__all__ = [
    "ColorScheme",
    "BarsStyle",
    "FacetArgs",
    "BarsSummaryRow",
    "RootogramRow",
]

_HEX_RE: Final[re.Pattern[str]] = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


# ============================================================================
# Colors
# ============================================================================


class ColorScheme(BaseModel):
    """
    Six-color palette used by all plots.

    Attributes:
        name (str): Scheme name (e.g. "blue", "mix-blue-red", "custom").
        light (str): Fill for observed data (bars, tiles).
        light_highlight (str): Outline of observed bars/tiles.
        mid (str): Secondary fills (histograms, bands).
        mid_highlight (str): Secondary outlines.
        dark (str): yrep points, expected bands, chain lines.
        dark_highlight (str): Expected curves and emphasis lines.

    Raises:
        pydantic.ValidationError: If any color is not a hex string.

    Examples:
        >>> from bayesviz.core.schema import ColorScheme
        >>> s = ColorScheme(name="custom", light="#ddd", light_highlight="#bbb", mid="#999",
        ...                 mid_highlight="#777", dark="#555", dark_highlight="#333")
        >>> s.get("dh")
        '#333'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    light: str
    light_highlight: str
    mid: str
    mid_highlight: str
    dark: str
    dark_highlight: str

    @field_validator(
        "light", "light_highlight", "mid", "mid_highlight", "dark", "dark_highlight", mode="before"
    )
    @classmethod
    def _check_hex(cls, v: Any) -> str:
        s = str(v or "").strip()
        if not _HEX_RE.match(s):
            raise ValueError(f"color must be a hex string like '#1f77b4' (got {v!r})")
        return s

    def get(self, code: str | ColorCode) -> str:
        """Return the color addressed by a short code (l, lh, m, mh, d, dh)."""
        return getattr(self, color_code_from_value(code).field)

    def colors(self) -> list[str]:
        """All six colors, light to dark."""
        return [self.get(c) for c in ColorCode]


# ============================================================================
# Styling arguments
# ============================================================================


class BarsStyle(BaseModel):
    """
    Styling of bar plots.

    Attributes:
        width (float): Bar width in category units, in (0, 1].
        size (float): Point size multiplier for yrep medians.
        fatten (float): Extra multiplier applied to the median point.
        linewidth (float): Width of the yrep interval rule.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    width: float = Field(0.9, gt=0.0, le=1.0)
    size: float = Field(1.0, gt=0.0)
    fatten: float = Field(2.5, gt=0.0)
    linewidth: float = Field(1.0, gt=0.0)

    @property
    def point_size(self) -> float:
        # Vega-Lite sizes are areas in px^2.
        return float((self.size * self.fatten * 4.0) ** 2)


class FacetArgs(BaseModel):
    """
    Facet options for grouped plots.

    Attributes:
        columns (int | None): Number of facet columns (wrap); None uses the configured default.
        scales (str): One of fixed, free, free_x, free_y.

    Notes:
        The faceting field itself is always ``group`` and cannot be overridden.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    columns: int | None = Field(default=None, ge=1)
    scales: str = "fixed"

    @field_validator("scales", mode="before")
    @classmethod
    def _normalize_scales(cls, v: Any) -> str:
        return facet_scale_from_value(v).value


# ============================================================================
# Rows
# ============================================================================


class BarsSummaryRow(BaseModel):
    """
    One row of the discrete-outcome summary.

    Attributes:
        group (Any | None): Group label, None for ungrouped summaries.
        x (int): Category value.
        y_obs (float | None): Observed count/proportion; None when the observed side is absent.
        l (float | None): Lower quantile of the per-draw statistic.
        m (float | None): Median of the per-draw statistic.
        h (float | None): Upper quantile of the per-draw statistic.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    group: Any | None = None
    x: int
    y_obs: float | None = None
    l: float | None = None  # noqa: E741
    m: float | None = None
    h: float | None = None


class RootogramRow(BaseModel):
    """One category of a rootogram (all heights on the square-root scale)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    xpos: int = Field(..., ge=0)
    ypos: float
    ty: float
    tyexp: float = Field(..., ge=0.0)
    tylower: float = Field(..., ge=0.0)
    tyupper: float = Field(..., ge=0.0)
    ybottom: float
    ytop: float

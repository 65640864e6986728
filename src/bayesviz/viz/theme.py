"""
Color schemes and chart-level styling.

All styling is explicit: plot builders receive a VizSettings and resolve colors through
``resolve_config(config).scheme()``. Nothing here mutates module or process state.
"""

from __future__ import annotations

import altair as alt

from bayesviz.core.grammar import ColorCode
from bayesviz.core.palettes import color_scheme, scheme_names
from bayesviz.core.schema import ColorScheme
from bayesviz.io.config import VizSettings

__all__ = [
    "color_scheme",
    "scheme_names",
    "get_color",
    "resolve_config",
    "apply_theme",
]


def get_color(scheme: ColorScheme, code: str | ColorCode) -> str:
    """Color of ``scheme`` addressed by a short code (l, lh, m, mh, d, dh)."""
    return scheme.get(code)


def resolve_config(config: VizSettings | None) -> VizSettings:
    """The given settings, or environment/TOML/default settings when None."""
    return config if config is not None else VizSettings.load()


def apply_theme(ch: alt.TopLevelMixin, config: VizSettings) -> alt.TopLevelMixin:
    """Uniform axis, legend, and title styling for a top-level chart."""
    return (
        ch.configure_axis(
            labelFontSize=config.font_size, titleFontSize=config.font_size, grid=False
        )
        .configure_legend(labelFontSize=config.font_size, titleFontSize=config.font_size)
        .configure_title(fontSize=config.title_font_size)
        .configure_view(strokeOpacity=0)
    )

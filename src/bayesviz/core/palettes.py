"""
Built-in color schemes.

Each scheme is six hex colors ordered light, light_highlight, mid, mid_highlight, dark,
dark_highlight. Mixed schemes (``"mix-blue-red"``) alternate between two built-ins:
light/mid/dark from the first, the highlight colors from the second.

This module is zero-IO and depends only on bayesviz.core.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError
from .schema import ColorScheme

__all__ = [
    "BUILTIN_SCHEMES",
    "scheme_names",
    "color_scheme",
]

BUILTIN_SCHEMES: Final[dict[str, tuple[str, ...]]] = {
    "blue": ("#d1e1ec", "#b3cde0", "#6497b1", "#005b96", "#03396c", "#011f4b"),
    "brightblue": ("#cce5ff", "#99cbff", "#4ca5ff", "#198bff", "#0065cc", "#004c99"),
    "gray": ("#dfdfdf", "#bfbfbf", "#999999", "#737373", "#505050", "#383838"),
    "green": ("#d9f2e6", "#9fdfbf", "#66cc99", "#40bf80", "#2d8659", "#194d33"),
    "orange": ("#fecba2", "#feb174", "#fe9845", "#fe7e17", "#e16401", "#b35001"),
    "pink": ("#dcbccc", "#c799b0", "#b97c9b", "#a25079", "#8f275b", "#7c0043"),
    "purple": ("#e5cce5", "#bf7fbf", "#a64ca6", "#800080", "#660066", "#400040"),
    "red": ("#dcbcbc", "#c79999", "#b97c7c", "#a25050", "#8f2727", "#7c0000"),
    "teal": ("#bcdcdc", "#99c7c7", "#7cb9b9", "#50a2a2", "#278f8f", "#007c7c"),
    "yellow": ("#fbf3da", "#f8e8b5", "#f5dc90", "#f2d16b", "#efc546", "#ecba21"),
    "viridis": ("#fde725", "#7ad151", "#22a884", "#2a788e", "#414487", "#440154"),
}

_FIELDS: Final[tuple[str, ...]] = (
    "light",
    "light_highlight",
    "mid",
    "mid_highlight",
    "dark",
    "dark_highlight",
)


def scheme_names() -> list[str]:
    """Sorted names of the built-in schemes."""
    return sorted(BUILTIN_SCHEMES)


def _build(name: str, colors: Sequence[str]) -> ColorScheme:
    if len(colors) != len(_FIELDS):
        raise ConfigError(
            f"color scheme {name!r} needs exactly {len(_FIELDS)} colors (got {len(colors)})"
        )
    try:
        return ColorScheme(name=name, **dict(zip(_FIELDS, colors, strict=True)))
    except PydanticValidationError as exc:
        raise ConfigError(f"invalid colors for scheme {name!r}: {exc}") from exc


def _mix(name: str) -> ColorScheme:
    parts = name.split("-")
    if len(parts) != 3 or parts[1] not in BUILTIN_SCHEMES or parts[2] not in BUILTIN_SCHEMES:
        raise ConfigError(
            f"mixed scheme must be 'mix-<a>-<b>' with a, b in {scheme_names()} (got {name!r})"
        )
    a, b = BUILTIN_SCHEMES[parts[1]], BUILTIN_SCHEMES[parts[2]]
    return _build(name, [a[0], b[1], a[2], b[3], a[4], b[5]])


def color_scheme(scheme: str | Sequence[str] | ColorScheme) -> ColorScheme:
    """
    Resolve a color scheme by name, mix name, or explicit list of six colors.

    Args:
        scheme: A built-in name ("blue"), a mix ("mix-blue-red"), six hex colors, or an
            existing ColorScheme (returned unchanged).

    Returns:
        ColorScheme

    Raises:
        ConfigError: Unknown name, malformed mix, or wrong number/format of colors.

    Examples:
        >>> color_scheme("red").dark
        '#8f2727'
        >>> color_scheme("mix-blue-red").light_highlight
        '#c79999'
    """
    if isinstance(scheme, ColorScheme):
        return scheme
    if isinstance(scheme, str):
        key = scheme.strip().lower()
        if key.startswith("mix-"):
            return _mix(key)
        if key not in BUILTIN_SCHEMES:
            raise ConfigError(f"unknown color scheme {scheme!r}; choose one of {scheme_names()}")
        return _build(key, BUILTIN_SCHEMES[key])
    return _build("custom", [str(c) for c in scheme])

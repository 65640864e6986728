"""
Canonical bayesviz vocabulary and helpers.

Defines rootogram styles, summary statistics, facet scale modes, color codes, R-hat / n_eff
ratings, and canonical NUTS sampler parameter names. Includes zero-IO normalization helpers
used by validators and plot builders.

Responsibilities
- Define enums whose serialized values are used as column values and argument strings.
- Normalize free-form user strings (e.g. ``"Hanging"``) to canonical enum members.
- Keep the mapping between sampler-specific diagnostic names and canonical NUTS names.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values: lower_snake (NUTS parameter names keep the sampler's
     trailing double underscore, e.g. ``divergent__``)

2) Statistics are not computed here: this module only names them.

Downstream usage
----------------
- bayesviz.io.validate normalizes ``style`` and facet ``scales`` arguments.
- bayesviz.transforms label summary rows with ``Statistic`` values.
- bayesviz.diagnostics maps ArviZ ``sample_stats`` names onto ``NutsParameter``.

Examples
--------
>>> from bayesviz.core.grammar import rootogram_style_from_value, RootogramStyle
>>> rootogram_style_from_value("Hanging") == RootogramStyle.HANGING
True
>>> statistic_for(freq=False).value
'proportion'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Final

from .errors import ValidationError

__all__ = [
    "RootogramStyle",
    "Statistic",
    "FacetScale",
    "ColorCode",
    "Rating",
    "NutsParameter",
    "ARVIZ_SAMPLE_STATS",
    # helpers
    "is_lower_snake",
    "rootogram_style_from_value",
    "statistic_for",
    "facet_scale_from_value",
    "color_code_from_value",
    "ensure_all_enum_values_lower_snake",
]


class RootogramStyle(Enum):
    """
    Rootogram histogram placement.

    Notes:
      * standing  — bars of sqrt(observed count) on a zero baseline, expected curve on top.
      * hanging   — bars hang from the expected curve; gaps/overlaps at zero show misfit.
      * suspended — bars of the signed residual sqrt(expected) - sqrt(observed).
    """

    STANDING = "standing"
    HANGING = "hanging"
    SUSPENDED = "suspended"


class Statistic(Enum):
    """Per-category statistic used by discrete summaries (selected by ``freq``)."""

    COUNT = "count"
    PROPORTION = "proportion"

    @property
    def axis_title(self) -> str:
        return "Count" if self is Statistic.COUNT else "Proportion"


class FacetScale(Enum):
    """Scale sharing across facets (same vocabulary as ``facet_wrap``)."""

    FIXED = "fixed"
    FREE = "free"
    FREE_X = "free_x"
    FREE_Y = "free_y"

    @property
    def fixed_y(self) -> bool:
        return self not in (FacetScale.FREE, FacetScale.FREE_Y)

    @property
    def fixed_x(self) -> bool:
        return self not in (FacetScale.FREE, FacetScale.FREE_X)


class ColorCode(Enum):
    """Short codes addressing the six colors of a ColorScheme."""

    LIGHT = "l"
    LIGHT_HIGHLIGHT = "lh"
    MID = "m"
    MID_HIGHLIGHT = "mh"
    DARK = "d"
    DARK_HIGHLIGHT = "dh"

    @property
    def field(self) -> str:
        """Attribute name on bayesviz.core.schema.ColorScheme."""
        return self.name.lower()


class Rating(Enum):
    """Convergence rating bucket for R-hat and n_eff ratio tables."""

    LOW = "low"
    OK = "ok"
    HIGH = "high"


class NutsParameter(Enum):
    """
    Canonical NUTS sampler diagnostics (Stan naming).

    Values keep Stan's trailing ``__`` and are therefore excluded from lower_snake checks.
    """

    ACCEPT_STAT = "accept_stat__"
    STEPSIZE = "stepsize__"
    TREEDEPTH = "treedepth__"
    N_LEAPFROG = "n_leapfrog__"
    DIVERGENT = "divergent__"
    ENERGY = "energy__"


# ArviZ sample_stats variable -> canonical NUTS parameter.
ARVIZ_SAMPLE_STATS: Final[dict[str, NutsParameter]] = {
    "acceptance_rate": NutsParameter.ACCEPT_STAT,
    "step_size": NutsParameter.STEPSIZE,
    "tree_depth": NutsParameter.TREEDEPTH,
    "n_steps": NutsParameter.N_LEAPFROG,
    "diverging": NutsParameter.DIVERGENT,
    "energy": NutsParameter.ENERGY,
}


_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Examples:
      >>> is_lower_snake("free_y")
      True
      >>> is_lower_snake("FreeY")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def _enum_from_value(enum_cls: type[Enum], value: object, what: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    text = str(value or "").strip().lower()
    allowed = [m.value for m in enum_cls]
    if text not in allowed:
        raise ValidationError(f"{what!r} must be one of {allowed} (got {value!r})")
    return enum_cls(text)


def rootogram_style_from_value(style: str | RootogramStyle) -> RootogramStyle:
    """
    Parse a rootogram style, case-insensitively.

    Raises:
      ValidationError: If style is not one of standing, hanging, suspended.
    """
    return _enum_from_value(RootogramStyle, style, "style")  # type: ignore[return-value]


def statistic_for(freq: bool) -> Statistic:
    """Map the ``freq`` flag onto the summary statistic."""
    return Statistic.COUNT if freq else Statistic.PROPORTION


def facet_scale_from_value(scales: str | FacetScale | None) -> FacetScale:
    """
    Parse a facet ``scales`` argument; None means fixed.

    Raises:
      ValidationError: If scales is not a known mode.
    """
    if scales is None:
        return FacetScale.FIXED
    return _enum_from_value(FacetScale, scales, "scales")  # type: ignore[return-value]


def color_code_from_value(code: str | ColorCode) -> ColorCode:
    """
    Parse a color code such as ``"lh"`` or ``"dark"``.

    Both the short code and the long name (``dark_highlight``) are accepted.
    """
    if isinstance(code, ColorCode):
        return code
    text = str(code or "").strip().lower()
    for m in ColorCode:
        if text in (m.value, m.field):
            return m
    raise ValidationError(
        f"'color' code must be one of {[m.value for m in ColorCode]} (got {code!r})"
    )


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([RootogramStyle, Statistic, FacetScale])
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )

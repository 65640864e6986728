import pytest

from bayesviz.core.errors import ValidationError
from bayesviz.core.grammar import (
    ARVIZ_SAMPLE_STATS,
    ColorCode,
    FacetScale,
    NutsParameter,
    Rating,
    RootogramStyle,
    Statistic,
    color_code_from_value,
    ensure_all_enum_values_lower_snake,
    facet_scale_from_value,
    is_lower_snake,
    rootogram_style_from_value,
    statistic_for,
)


def test_all_enum_values_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake([RootogramStyle, Statistic, FacetScale, ColorCode, Rating])


def test_nuts_parameters_keep_stan_suffix() -> None:
    for p in NutsParameter:
        assert p.value.endswith("__")
        assert not is_lower_snake(p.value)
    assert set(ARVIZ_SAMPLE_STATS.values()) == set(NutsParameter)


def test_rootogram_style_parsing_is_case_insensitive() -> None:
    assert rootogram_style_from_value("Hanging") is RootogramStyle.HANGING
    assert rootogram_style_from_value(" SUSPENDED ") is RootogramStyle.SUSPENDED
    assert rootogram_style_from_value(RootogramStyle.STANDING) is RootogramStyle.STANDING
    with pytest.raises(ValidationError, match="'style'"):
        rootogram_style_from_value("dangling")


def test_statistic_for_freq_flag() -> None:
    assert statistic_for(True) is Statistic.COUNT
    assert statistic_for(False) is Statistic.PROPORTION
    assert Statistic.COUNT.axis_title == "Count"
    assert Statistic.PROPORTION.axis_title == "Proportion"


def test_facet_scales() -> None:
    assert facet_scale_from_value(None) is FacetScale.FIXED
    assert facet_scale_from_value("free_y") is FacetScale.FREE_Y
    assert FacetScale.FIXED.fixed_y and FacetScale.FIXED.fixed_x
    assert FacetScale.FREE_X.fixed_y and not FacetScale.FREE_X.fixed_x
    assert not FacetScale.FREE.fixed_y and not FacetScale.FREE.fixed_x
    with pytest.raises(ValidationError, match="'scales'"):
        facet_scale_from_value("loose")


def test_color_codes_accept_short_and_long_names() -> None:
    assert color_code_from_value("lh") is ColorCode.LIGHT_HIGHLIGHT
    assert color_code_from_value("dark_highlight") is ColorCode.DARK_HIGHLIGHT
    assert ColorCode.MID.field == "mid"
    with pytest.raises(ValidationError):
        color_code_from_value("x")

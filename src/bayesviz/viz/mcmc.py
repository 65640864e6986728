"""
MCMC diagnostic plots.

- mcmc_trace(): draws against iteration, one line per chain, one facet per parameter.
- mcmc_scatter(): joint draws of two parameters, optionally marking divergent transitions.
- mcmc_rhat() / mcmc_neff(): per-parameter R-hat and n_eff ratio with reference rules.
- mcmc_nuts_energy(): marginal energy vs energy transition histograms per chain.

Draws are accepted in any form bayesviz.transforms.mcmc.draws_to_frame() accepts. Sampler
diagnostics come from a DiagnosticsSource (or anything as_diagnostics_source() adapts).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import altair as alt
import polars as pl

from bayesviz.core.constants import NEFF_RATIO_THRESHOLDS, RHAT_THRESHOLDS
from bayesviz.core.errors import ValidationError
from bayesviz.core.grammar import NutsParameter, Rating
from bayesviz.core.typing import DrawsLike
from bayesviz.diagnostics.source import as_diagnostics_source, nuts_parameter
from bayesviz.io.config import VizSettings
from bayesviz.io.validate import check_ignored_arguments
from bayesviz.transforms.mcmc import as_draws_frame, parameter_names, rate, select_parameters

from . import layers
from .theme import apply_theme, resolve_config

logger = logging.getLogger(__name__)

__all__ = [
    "mcmc_trace",
    "mcmc_scatter",
    "mcmc_rhat",
    "mcmc_neff",
    "mcmc_nuts_energy",
    "energy_frame",
]

_DIVERGENCE_COLOR = "#e41a1c"


def mcmc_trace(
    draws: DrawsLike,
    pars: Sequence[str] | None = None,
    regex_pars: str | Sequence[str] | None = None,
    *,
    facet_columns: int | None = None,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.FacetChart:
    """
    Trace plot: one line per chain, one facet per parameter with its own y scale.

    Args:
        draws: Posterior draws (see draws_to_frame()).
        pars, regex_pars: Parameter selection (see select_parameters()).
        facet_columns: Number of facet columns; None uses ``config.facet_columns``.
        config: Styling settings.
    """
    check_ignored_arguments("mcmc_trace", kwargs)
    config = resolve_config(config)
    frame = select_parameters(as_draws_frame(draws), pars=pars, regex_pars=regex_pars)
    names = parameter_names(frame)
    scheme = config.scheme()
    chains = sorted(frame.get_column("chain").unique().to_list())
    palette = [scheme.dark, scheme.mid, scheme.dark_highlight, scheme.mid_highlight, scheme.light_highlight]

    chart = (
        alt.Chart(alt.Data(values=frame.to_dicts()))
        .mark_line(strokeWidth=0.75)
        .encode(
            x=alt.X("iteration:Q", title="Iteration"),
            y=alt.Y("value:Q", title=None, scale=alt.Scale(zero=False)),
            color=alt.Color(
                "chain:N",
                title="Chain",
                scale=alt.Scale(domain=chains, range=palette),
            ),
        )
        .properties(width=config.width, height=config.height // 2)
        .facet(
            facet=alt.Facet("parameter:N", title=None, sort=names),
            columns=facet_columns or config.facet_columns,
        )
        .resolve_scale(y="independent")
    )
    return apply_theme(chart, config)


def mcmc_scatter(
    draws: DrawsLike,
    pars: Sequence[str],
    *,
    diagnostics: object | None = None,
    size: float = 20.0,
    alpha: float = 0.8,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.LayerChart:
    """
    Scatter plot of two parameters' draws.

    Args:
        draws: Posterior draws (see draws_to_frame()).
        pars: Exactly two parameter names (x, y).
        diagnostics: Optional DiagnosticsSource (or InferenceData / Polars frame); divergent
            transitions are drawn on top in a highlight color.
        size, alpha: Point size and opacity.
        config: Styling settings.

    Raises:
        ValidationError: If ``pars`` does not name exactly two known parameters.
    """
    check_ignored_arguments("mcmc_scatter", kwargs)
    config = resolve_config(config)
    if isinstance(pars, str) or len(pars) != 2 or pars[0] == pars[1]:
        raise ValidationError(f"'pars' must name exactly two distinct parameters (got {pars!r})")
    x_name, y_name = pars
    frame = select_parameters(as_draws_frame(draws), pars=[x_name, y_name])
    # Field names like "theta[1]" are not valid Vega-Lite fields; plot through "x"/"y".
    wide = (
        frame.pivot(on="parameter", index=["chain", "iteration"], values="value")
        .rename({x_name: "x", y_name: "y"})
        .with_columns(pl.lit(False).alias("divergent"))
    )
    if diagnostics is not None:
        div = nuts_parameter(as_diagnostics_source(diagnostics), NutsParameter.DIVERGENT)
        wide = (
            wide.drop("divergent")
            .join(div, on=["chain", "iteration"], how="left")
            .with_columns((pl.col("value").fill_null(0.0) > 0).alias("divergent"))
            .drop("value")
        )
    logger.debug("mcmc_scatter: %d draws, %d divergent", wide.height, int(wide["divergent"].sum()))
    scheme = config.scheme()

    base = (
        alt.Chart()
        .mark_point(filled=True, size=size, opacity=alpha, color=scheme.dark)
        .encode(
            x=alt.X("x:Q", title=x_name, scale=alt.Scale(zero=False)),
            y=alt.Y("y:Q", title=y_name, scale=alt.Scale(zero=False)),
        )
        .transform_filter("!datum.divergent")
    )
    divergent = (
        alt.Chart()
        .mark_point(filled=True, size=size * 1.5, color=_DIVERGENCE_COLOR)
        .encode(x="x:Q", y="y:Q")
        .transform_filter("datum.divergent")
    )
    chart = alt.layer(base, divergent, data=alt.Data(values=wide.to_dicts())).properties(
        width=config.width, height=config.height
    )
    return apply_theme(chart, config)


def _stat_frame(
    values: pl.DataFrame | Mapping[str, float] | Sequence[float],
    column: str,
    thresholds: tuple[float, float],
) -> pl.DataFrame:
    if isinstance(values, pl.DataFrame):
        if not {"parameter", column}.issubset(values.columns):
            raise ValidationError(f"table must have 'parameter' and {column!r} columns")
        frame = values.select("parameter", column)
    elif isinstance(values, Mapping):
        frame = pl.DataFrame(
            {"parameter": [str(k) for k in values], column: [float(v) for v in values.values()]}
        )
    else:
        vals = [float(v) for v in values]
        frame = pl.DataFrame({"parameter": [f"V{i + 1}" for i in range(len(vals))], column: vals})
    if frame.height == 0:
        raise ValidationError(f"no {column} values to plot")
    if frame.get_column(column).is_nan().any() or frame.get_column(column).null_count():
        raise ValidationError(f"{column!r} values must not be missing")
    return frame.with_columns(rate(pl.col(column), thresholds).alias("rating"))


def _rating_chart(
    frame: pl.DataFrame,
    column: str,
    *,
    title: str,
    rules: list[float],
    config: VizSettings,
) -> alt.LayerChart:
    scheme = config.scheme()
    ratings = [r.value for r in Rating]
    points = (
        alt.Chart(alt.Data(values=frame.to_dicts()))
        .mark_point(filled=True, size=60)
        .encode(
            x=alt.X(f"{column}:Q", title=title, scale=alt.Scale(zero=False)),
            y=alt.Y("parameter:N", title=None, sort=frame.get_column("parameter").to_list()),
            color=alt.Color(
                "rating:N",
                title=None,
                scale=alt.Scale(domain=ratings, range=[scheme.light_highlight, scheme.mid, scheme.dark]),
            ),
        )
    )
    chart = alt.layer(layers.layer_rules_x(rules, color=scheme.mid_highlight), points).properties(
        width=config.width, height=max(config.height // 2, 15 * frame.height)
    )
    return apply_theme(chart, config)


def mcmc_rhat(
    rhat: pl.DataFrame | Mapping[str, float] | Sequence[float],
    *,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.LayerChart:
    """
    R-hat per parameter, colored low (<=1.05) / ok (<=1.1) / high, with rules at 1, 1.05, 1.1.

    Args:
        rhat: rhat_frame() output, a mapping of parameter to R-hat, or a sequence of values.
    """
    check_ignored_arguments("mcmc_rhat", kwargs)
    config = resolve_config(config)
    frame = _stat_frame(rhat, "rhat", RHAT_THRESHOLDS)
    return _rating_chart(frame, "rhat", title="R-hat", rules=[1.0, *RHAT_THRESHOLDS], config=config)


def mcmc_neff(
    ratio: pl.DataFrame | Mapping[str, float] | Sequence[float],
    *,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.LayerChart:
    """
    Effective sample size ratio per parameter with rules at 0.1, 0.5, and 1.

    Args:
        ratio: neff_frame() output, a mapping of parameter to ratio, or a sequence of ratios.
    """
    check_ignored_arguments("mcmc_neff", kwargs)
    config = resolve_config(config)
    frame = _stat_frame(ratio, "neff_ratio", NEFF_RATIO_THRESHOLDS)
    return _rating_chart(
        frame,
        "neff_ratio",
        title="N_eff / N",
        rules=[*NEFF_RATIO_THRESHOLDS, 1.0],
        config=config,
    )


def energy_frame(diagnostics: object) -> pl.DataFrame:
    """
    Centered marginal energy and energy transitions per chain.

    Returns:
        pl.DataFrame: Columns [chain, kind, value] with kind in
        {"E - mean(E)", "Delta E"}; the first draw of each chain has no transition.
    """
    energy = nuts_parameter(as_diagnostics_source(diagnostics), NutsParameter.ENERGY)
    centered = energy.select(
        "chain",
        pl.lit("E - mean(E)").alias("kind"),
        (pl.col("value") - pl.col("value").mean().over("chain")).alias("value"),
    )
    delta = (
        energy.select(
            "chain",
            pl.lit("Delta E").alias("kind"),
            pl.col("value").diff().over("chain").alias("value"),
        )
        .drop_nulls("value")
    )
    return pl.concat([centered, delta], how="vertical")


def mcmc_nuts_energy(
    diagnostics: object,
    *,
    merge_chains: bool = False,
    maxbins: int = 30,
    config: VizSettings | None = None,
    **kwargs: Any,
) -> alt.Chart | alt.FacetChart:
    """
    Overlaid histograms of centered marginal energy and energy transitions.

    A transition histogram much narrower than the marginal one indicates the sampler may
    not explore the tails of the posterior efficiently.

    Args:
        diagnostics: DiagnosticsSource (or InferenceData / Polars frame) with ``energy__``.
        merge_chains: One panel for all chains instead of a facet per chain.
        maxbins: Maximum number of histogram bins.
        config: Styling settings.
    """
    check_ignored_arguments("mcmc_nuts_energy", kwargs)
    config = resolve_config(config)
    data = energy_frame(diagnostics)
    scheme = config.scheme()
    chart = (
        alt.Chart(alt.Data(values=data.to_dicts()))
        .mark_bar(opacity=0.6)
        .encode(
            x=alt.X("value:Q", bin=alt.Bin(maxbins=maxbins), title=None),
            y=alt.Y("count()", stack=None, title=None),
            fill=alt.Fill(
                "kind:N",
                title=None,
                scale=alt.Scale(domain=["E - mean(E)", "Delta E"], range=[scheme.light, scheme.dark]),
            ),
        )
        .properties(width=config.width, height=config.height // 2)
    )
    if not merge_chains:
        chart = chart.facet(
            facet=alt.Facet("chain:N", title="Chain"), columns=config.facet_columns
        )
    return apply_theme(chart, config)

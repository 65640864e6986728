"""
Tidy reshaping of MCMC draws and per-parameter convergence tables.

Overview
- draws_to_frame(): (chain, draw, parameter) arrays, name -> (chain, draw) mappings, or wide
  Polars frames into the long frame [chain, iteration, parameter, value].
- select_parameters(): filter a long frame by exact names and/or regular expressions.
- chain_matrix(): one parameter back to a (chain, draw) numpy array.
- rhat_frame() / neff_frame(): R-hat and ESS / total-draws ratio per parameter with a
  low/ok/high rating. Both statistics are computed by ArviZ.

Notes
- Chains and iterations are 1-based in the long frame.
- Parameter order follows the input order everywhere.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

import arviz as az
import numpy as np
import polars as pl

from bayesviz.core.constants import DRAWS_COLUMNS, NEFF_RATIO_THRESHOLDS, RHAT_THRESHOLDS
from bayesviz.core.errors import ValidationError
from bayesviz.core.grammar import Rating
from bayesviz.core.typing import DrawsLike

logger = logging.getLogger(__name__)

__all__ = [
    "draws_to_frame",
    "as_draws_frame",
    "parameter_names",
    "select_parameters",
    "chain_matrix",
    "rhat_frame",
    "neff_frame",
    "rate",
]


def _as_chain_draw(values: object, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr[np.newaxis, :]
    if arr.ndim != 2:
        raise ValidationError(
            f"draws for {name!r} must be (chain, draw) or (draw,) shaped (got {arr.shape})"
        )
    return arr


def _mapping_from_frame(frame: pl.DataFrame) -> dict[str, np.ndarray]:
    params = [c for c in frame.columns if c not in ("chain", "iteration", "draw")]
    if "chain" not in frame.columns:
        return {p: frame.get_column(p).to_numpy()[np.newaxis, :] for p in params}
    order = [c for c in ("chain", "iteration", "draw") if c in frame.columns]
    frame = frame.sort(order)
    chains = frame.partition_by("chain", maintain_order=True)
    lengths = {c.height for c in chains}
    if len(lengths) != 1:
        raise ValidationError("all chains must have the same number of draws")
    return {p: np.vstack([c.get_column(p).to_numpy() for c in chains]) for p in params}


def draws_to_frame(draws: DrawsLike, parameters: Sequence[str] | None = None) -> pl.DataFrame:
    """
    Reshape posterior draws into a tidy long frame.

    Args:
        draws: One of
            - numpy-like array (chain, draw, parameter) or (draw, parameter) for one chain;
            - mapping of parameter name to (chain, draw) or (draw,) arrays;
            - wide Polars DataFrame with one column per parameter and an optional ``chain``
              column (plus optional ``iteration``/``draw`` ordering columns).
        parameters: Names for the parameter axis of an array input (default V1, V2, ...).

    Returns:
        pl.DataFrame: Columns [chain, iteration, parameter, value].

    Raises:
        ValidationError: On wrong dimensionality, mismatched shapes, or a parameter name list
            of the wrong length.
    """
    if isinstance(draws, pl.DataFrame):
        draws = _mapping_from_frame(draws)

    if isinstance(draws, Mapping):
        if parameters is not None:
            raise ValidationError("'parameters' is only used with array draws")
        names = [str(k) for k in draws]
        arrays = [_as_chain_draw(v, str(k)) for k, v in draws.items()]
        if not arrays:
            raise ValidationError("'draws' must contain at least one parameter")
        shapes = {a.shape for a in arrays}
        if len(shapes) != 1:
            raise ValidationError(f"all parameters must share one (chain, draw) shape (got {shapes})")
        cube = np.stack(arrays, axis=-1)
    else:
        cube = np.asarray(draws, dtype=np.float64)
        if cube.ndim == 2:
            cube = cube[np.newaxis, :, :]
        if cube.ndim != 3:
            raise ValidationError(
                f"'draws' must be a (chain, draw, parameter) array (got shape {cube.shape})"
            )
        if parameters is None:
            names = [f"V{i + 1}" for i in range(cube.shape[2])]
        else:
            names = [str(p) for p in parameters]
            if len(names) != cube.shape[2]:
                raise ValidationError(
                    f"'parameters' has {len(names)} names but draws have {cube.shape[2]} parameters"
                )
    if len(set(names)) != len(names):
        raise ValidationError("parameter names must be unique")

    n_chain, n_iter, n_par = cube.shape
    logger.debug("draws_to_frame: chains=%d iterations=%d parameters=%d", n_chain, n_iter, n_par)
    return pl.DataFrame(
        {
            "chain": np.repeat(np.arange(1, n_chain + 1), n_iter * n_par),
            "iteration": np.tile(np.repeat(np.arange(1, n_iter + 1), n_par), n_chain),
            "parameter": np.tile(np.asarray(names, dtype=object), n_chain * n_iter).tolist(),
            "value": cube.reshape(-1),
        },
        schema={"chain": pl.Int64, "iteration": pl.Int64, "parameter": pl.Utf8, "value": pl.Float64},
    ).select(list(DRAWS_COLUMNS))


def parameter_names(frame: pl.DataFrame) -> list[str]:
    """Parameter names of a long draws frame, in first-appearance order."""
    return frame.get_column("parameter").unique(maintain_order=True).to_list()


def select_parameters(
    frame: pl.DataFrame,
    pars: Sequence[str] | None = None,
    regex_pars: str | Sequence[str] | None = None,
) -> pl.DataFrame:
    """
    Keep parameters named in ``pars`` or matching any of ``regex_pars``.

    With neither given, the frame is returned unchanged.

    Raises:
        ValidationError: If a name in ``pars`` is unknown or a pattern matches nothing.
    """
    if pars is None and regex_pars is None:
        return frame
    available = parameter_names(frame)
    keep: list[str] = []
    for p in pars or ():
        if p not in available:
            raise ValidationError(f"parameter {p!r} not found; available: {available}")
        keep.append(p)
    patterns = [regex_pars] if isinstance(regex_pars, str) else list(regex_pars or ())
    for pattern in patterns:
        rx = re.compile(pattern)
        matched = [p for p in available if rx.search(p)]
        if not matched:
            raise ValidationError(f"'regex_pars' pattern {pattern!r} matched no parameters")
        keep.extend(matched)
    keep = list(dict.fromkeys(keep))
    return frame.filter(pl.col("parameter").is_in(keep))


def chain_matrix(frame: pl.DataFrame, parameter: str) -> np.ndarray:
    """One parameter's draws as a (chain, draw) array."""
    sub = frame.filter(pl.col("parameter") == parameter).sort(["chain", "iteration"])
    if sub.height == 0:
        raise ValidationError(f"parameter {parameter!r} not found")
    n_chain = sub.get_column("chain").n_unique()
    return sub.get_column("value").to_numpy().reshape(n_chain, -1)


def rate(values: pl.Expr, thresholds: tuple[float, float]) -> pl.Expr:
    """Bucket a statistic into low/ok/high by two upper bounds."""
    low, ok = thresholds
    return (
        pl.when(values <= low)
        .then(pl.lit(Rating.LOW.value))
        .when(values <= ok)
        .then(pl.lit(Rating.OK.value))
        .otherwise(pl.lit(Rating.HIGH.value))
    )


def rhat_frame(draws: DrawsLike | pl.DataFrame) -> pl.DataFrame:
    """
    Rank-normalized split R-hat per parameter.

    Args:
        draws: Long frame from draws_to_frame() or anything it accepts.

    Returns:
        pl.DataFrame: Columns [parameter, rhat, rating].
    """
    frame = as_draws_frame(draws)
    names = parameter_names(frame)
    values = [float(az.rhat(chain_matrix(frame, p))) for p in names]
    return pl.DataFrame({"parameter": names, "rhat": values}).with_columns(
        rate(pl.col("rhat"), RHAT_THRESHOLDS).alias("rating")
    )


def neff_frame(draws: DrawsLike | pl.DataFrame) -> pl.DataFrame:
    """
    Effective sample size ratio (bulk ESS / total draws) per parameter.

    Returns:
        pl.DataFrame: Columns [parameter, ess, neff_ratio, rating].
    """
    frame = as_draws_frame(draws)
    names = parameter_names(frame)
    ess: list[float] = []
    ratios: list[float] = []
    for p in names:
        mat = chain_matrix(frame, p)
        e = float(az.ess(mat))
        ess.append(e)
        ratios.append(e / mat.size)
    return pl.DataFrame({"parameter": names, "ess": ess, "neff_ratio": ratios}).with_columns(
        rate(pl.col("neff_ratio"), NEFF_RATIO_THRESHOLDS).alias("rating")
    )


def as_draws_frame(draws: DrawsLike | pl.DataFrame) -> pl.DataFrame:
    """A long draws frame as is; anything else through draws_to_frame()."""
    if isinstance(draws, pl.DataFrame) and set(DRAWS_COLUMNS).issubset(draws.columns):
        return draws
    return draws_to_frame(draws)

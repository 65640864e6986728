"""
Sampler diagnostics behind a capability interface.

Purpose
- Plots that need the log-posterior or NUTS diagnostics depend only on DiagnosticsSource,
  never on the concrete fitted-model type.
- One implementation per supported origin: ArviZ InferenceData and wide Polars tables
  (e.g. CmdStan CSV output read with Polars).

Contract
- log_posterior() -> 1-D float array of lp values in chain-major order.
- nuts_parameters() -> Polars frame [chain, iteration, parameter, value] with canonical
  NutsParameter names (``divergent__``, ``energy__``, ...).
- Missing fields raise ValidationError naming the field.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import arviz as az
import numpy as np
import polars as pl

from bayesviz.core.constants import DRAWS_COLUMNS
from bayesviz.core.errors import ValidationError
from bayesviz.core.grammar import ARVIZ_SAMPLE_STATS, NutsParameter

logger = logging.getLogger(__name__)

__all__ = [
    "DiagnosticsSource",
    "InferenceDataSource",
    "FrameDiagnosticsSource",
    "as_diagnostics_source",
    "nuts_parameter",
]

_NUTS_NAMES: frozenset[str] = frozenset(p.value for p in NutsParameter)


@runtime_checkable
class DiagnosticsSource(Protocol):
    """Anything that can report log-posterior values and NUTS diagnostics."""

    def log_posterior(self) -> np.ndarray: ...

    def nuts_parameters(self) -> pl.DataFrame: ...


def _long_from_matrix(name: str, mat: np.ndarray) -> pl.DataFrame:
    n_chain, n_iter = mat.shape
    return pl.DataFrame(
        {
            "chain": np.repeat(np.arange(1, n_chain + 1), n_iter),
            "iteration": np.tile(np.arange(1, n_iter + 1), n_chain),
            "parameter": [name] * (n_chain * n_iter),
            "value": mat.astype(np.float64).reshape(-1),
        },
        schema={"chain": pl.Int64, "iteration": pl.Int64, "parameter": pl.Utf8, "value": pl.Float64},
    )


class InferenceDataSource:
    """
    Diagnostics read from an ArviZ InferenceData ``sample_stats`` group.

    Args:
        idata: InferenceData produced by PyMC, CmdStanPy, NumPyro, etc.

    Notes:
        ``lp`` provides the log-posterior; ArviZ names (``diverging``, ``energy``,
        ``tree_depth``, ``step_size``, ``acceptance_rate``, ``n_steps``) are renamed to
        NutsParameter values.
    """

    def __init__(self, idata: az.InferenceData) -> None:
        if "sample_stats" not in idata.groups():
            raise ValidationError("InferenceData has no 'sample_stats' group")
        self._stats = idata.sample_stats

    def _matrix(self, var: str) -> np.ndarray:
        arr = np.asarray(self._stats[var].values)
        if arr.ndim != 2:
            raise ValidationError(f"sample_stats {var!r} must be (chain, draw) shaped (got {arr.shape})")
        return arr

    def log_posterior(self) -> np.ndarray:
        if "lp" not in self._stats:
            raise ValidationError("sample_stats has no 'lp' variable (log-posterior)")
        return self._matrix("lp").astype(np.float64).reshape(-1)

    def nuts_parameters(self) -> pl.DataFrame:
        parts = [
            _long_from_matrix(canonical.value, self._matrix(var))
            for var, canonical in ARVIZ_SAMPLE_STATS.items()
            if var in self._stats
        ]
        if not parts:
            raise ValidationError(
                f"sample_stats has none of the NUTS variables {sorted(ARVIZ_SAMPLE_STATS)}"
            )
        logger.debug("InferenceDataSource: %d NUTS parameters", len(parts))
        return pl.concat(parts, how="vertical")


class FrameDiagnosticsSource:
    """
    Diagnostics read from a wide table with ``lp__`` and Stan-style ``*__`` columns.

    Args:
        frame: Polars DataFrame. ``chain`` defaults to 1 when absent; ``iteration`` defaults
            to the 1-based row position within each chain.
    """

    def __init__(self, frame: pl.DataFrame) -> None:
        if "chain" not in frame.columns:
            frame = frame.with_columns(pl.lit(1, dtype=pl.Int64).alias("chain"))
        if "iteration" not in frame.columns:
            frame = frame.with_columns(
                pl.int_range(1, pl.len() + 1, dtype=pl.Int64).over("chain").alias("iteration")
            )
        self._frame = frame.with_columns(
            pl.col("chain").cast(pl.Int64), pl.col("iteration").cast(pl.Int64)
        ).sort(["chain", "iteration"])

    def log_posterior(self) -> np.ndarray:
        if "lp__" not in self._frame.columns:
            raise ValidationError("diagnostics table has no 'lp__' column (log-posterior)")
        return self._frame.get_column("lp__").cast(pl.Float64).to_numpy()

    def nuts_parameters(self) -> pl.DataFrame:
        present = [c for c in self._frame.columns if c in _NUTS_NAMES]
        if not present:
            raise ValidationError(
                f"diagnostics table has none of the NUTS columns {sorted(_NUTS_NAMES)}"
            )
        return (
            self._frame.select(["chain", "iteration", *present])
            .with_columns([pl.col(c).cast(pl.Float64) for c in present])
            .unpivot(
                index=["chain", "iteration"],
                on=present,
                variable_name="parameter",
                value_name="value",
            )
            .select(list(DRAWS_COLUMNS))
        )


def as_diagnostics_source(obj: object) -> DiagnosticsSource:
    """
    Adapt a fitted-model output to DiagnosticsSource.

    Returns ``obj`` itself when it already provides the interface; wraps ArviZ
    InferenceData and Polars DataFrames.

    Raises:
        ValidationError: For unsupported objects.
    """
    if isinstance(obj, az.InferenceData):
        return InferenceDataSource(obj)
    if isinstance(obj, pl.DataFrame):
        return FrameDiagnosticsSource(obj)
    if isinstance(obj, DiagnosticsSource):
        return obj
    raise ValidationError(
        f"cannot extract sampler diagnostics from {type(obj).__name__}; "
        "pass InferenceData, a polars DataFrame, or a DiagnosticsSource"
    )


def nuts_parameter(source: DiagnosticsSource, parameter: NutsParameter) -> pl.DataFrame:
    """
    One NUTS parameter as [chain, iteration, value].

    Raises:
        ValidationError: If the source does not report it.
    """
    frame = source.nuts_parameters().filter(pl.col("parameter") == parameter.value)
    if frame.height == 0:
        raise ValidationError(f"NUTS parameter {parameter.value!r} not available")
    return frame.select("chain", "iteration", "value").sort(["chain", "iteration"])

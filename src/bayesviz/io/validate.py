"""
Input validation for observed data, replicated data, group labels, and plot arguments.

Purpose
- Turn loosely typed user inputs (lists, numpy arrays, polars Series/DataFrames) into
  numpy arrays / polars Series with a known shape.
- Fail fast with bayesviz.core.errors.ValidationError naming the offending argument,
  before any computation happens.
- Surface ignored keyword arguments as ArgumentConflictWarning rather than dropping them.

Checks performed
- y: numeric, one-dimensional, non-empty, finite.
- yrep: numeric, two-dimensional (draws x observations), finite, ncol == len(y).
- group: one label per observation, no nulls.
- prob in [0, 1]; freq is a bool.
- Discreteness: every value a whole number (``2.0`` counts, ``2.5`` does not); counts
  additionally non-negative.

Notes
- Depends on numpy, polars, and bayesviz.core only.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import polars as pl

from bayesviz.core.errors import ArgumentConflictWarning, ValidationError
from bayesviz.core.typing import ArrayLike, GroupLike

logger = logging.getLogger(__name__)

__all__ = [
    "validate_y",
    "validate_predictions",
    "validate_group",
    "validate_prob",
    "validate_freq",
    "all_whole_number",
    "all_counts",
    "ensure_whole_numbers",
    "ensure_counts",
    "check_ignored_arguments",
]

# Absolute tolerance used when deciding whether a float is a whole number.
_WHOLE_TOL: float = math.sqrt(np.finfo(np.float64).eps)

# Largest magnitude at which float64 still represents every integer exactly.
_MAX_WHOLE: float = 2.0**53


def _to_numpy(x: Any, name: str) -> np.ndarray:
    if isinstance(x, (pl.Series, pl.DataFrame)):
        x = x.to_numpy()
    try:
        arr = np.asarray(x)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name!r} must be numeric: {exc}") from exc
    if arr.dtype.kind == "b" or arr.dtype.kind not in "iufO":
        raise ValidationError(f"{name!r} must be numeric (got dtype {arr.dtype})")
    try:
        arr = arr.astype(np.float64)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name!r} must be numeric: {exc}") from exc
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"NAs and infinite values not allowed in {name!r}")
    return arr


def validate_y(y: ArrayLike) -> np.ndarray:
    """
    Validate observed outcomes.

    Args:
        y: Sequence of N numeric values. A 2-D input with a single column is flattened.

    Returns:
        np.ndarray: 1-D float64 array of length N.

    Raises:
        ValidationError: If y is empty, not numeric, not one-dimensional, or not finite.
    """
    arr = _to_numpy(y, "y")
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise ValidationError(f"'y' must be a one-dimensional numeric vector (got shape {arr.shape})")
    if arr.size == 0:
        raise ValidationError("'y' must not be empty")
    return arr


def validate_predictions(yrep: ArrayLike, n_obs: int) -> np.ndarray:
    """
    Validate replicated outcomes against the number of observations.

    Args:
        yrep: Table of S draws by N observations (rows are draws).
        n_obs: Expected number of columns (``len(y)``).

    Returns:
        np.ndarray: 2-D float64 array of shape (S, N).

    Raises:
        ValidationError: If yrep is not a 2-D numeric table, is not finite, has no draws,
            or its column count differs from ``n_obs``.
    """
    arr = _to_numpy(yrep, "yrep")
    if arr.ndim != 2:
        raise ValidationError(f"'yrep' must be a matrix of draws x observations (got shape {arr.shape})")
    if arr.shape[0] == 0:
        raise ValidationError("'yrep' must contain at least one draw")
    if arr.shape[1] != n_obs:
        raise ValidationError(
            f"length mismatch: 'yrep' has {arr.shape[1]} columns but 'y' has length {n_obs}"
        )
    return arr


def validate_group(group: GroupLike, n_obs: int) -> pl.Series:
    """
    Validate group labels.

    Args:
        group: One label per observation (list, numpy array, polars Series).
        n_obs: Expected length (``len(y)``).

    Returns:
        pl.Series: Series named ``group`` preserving the labels' dtype; labels of mixed
        types become strings.

    Raises:
        ValidationError: If the length differs from ``n_obs`` or labels contain nulls.
    """
    if isinstance(group, pl.Series):
        s = group.alias("group")
    else:
        try:
            labels = list(np.asarray(group, dtype=object).reshape(-1))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"'group' could not be interpreted as labels: {exc}") from exc
        try:
            s = pl.Series("group", labels)
        except (TypeError, ValueError, pl.exceptions.PolarsError):
            # Mixed label types are compared as text.
            s = pl.Series("group", [None if v is None else str(v) for v in labels], dtype=pl.String)
    if s.len() != n_obs:
        raise ValidationError(f"length of 'group' ({s.len()}) must equal length of 'y' ({n_obs})")
    if s.null_count() > 0 or (s.dtype.is_float() and s.is_nan().any()):
        raise ValidationError("NAs not allowed in 'group'")
    return s


def validate_prob(prob: Any) -> float:
    """
    Validate the central interval mass.

    Raises:
        ValidationError: If prob is not a real number in [0, 1].
    """
    if isinstance(prob, bool) or not isinstance(prob, (int, float, np.integer, np.floating)):
        raise ValidationError(f"'prob' must be a number in [0, 1] (got {prob!r})")
    p = float(prob)
    if not (0.0 <= p <= 1.0):
        raise ValidationError(f"'prob' must be in [0, 1] (got {p!r})")
    return p


def validate_freq(freq: Any) -> bool:
    """Validate the count-vs-proportion flag."""
    if not isinstance(freq, (bool, np.bool_)):
        raise ValidationError(f"'freq' must be True or False (got {freq!r})")
    return bool(freq)


def all_whole_number(x: np.ndarray) -> bool:
    """True when every element is a whole number (type need not be integer)."""
    return bool(np.all(np.abs(x - np.round(x)) < _WHOLE_TOL))


def all_counts(x: np.ndarray) -> bool:
    """True when every element is a non-negative whole number."""
    return all_whole_number(x) and bool(np.all(x >= 0))


def _to_int64(x: np.ndarray, name: str) -> np.ndarray:
    if x.size and np.max(np.abs(x)) > _MAX_WHOLE:
        raise ValidationError(f"values in {name!r} must not exceed 2**53 in magnitude")
    return np.round(x).astype(np.int64)


def ensure_whole_numbers(x: np.ndarray, name: str, *, caller: str) -> np.ndarray:
    """
    Require whole numbers and return them as int64.

    Raises:
        ValidationError: ``"<caller> expects '<name>' to be discrete."``, or when a value is
            beyond 2**53 in magnitude and so not held exactly.
    """
    if not all_whole_number(x):
        raise ValidationError(f"{caller} expects {name!r} to be discrete.")
    return _to_int64(x, name)


def ensure_counts(x: np.ndarray, name: str, *, caller: str) -> np.ndarray:
    """
    Require non-negative whole numbers and return them as int64.

    Raises:
        ValidationError: ``"<caller> expects counts as inputs to '<name>'."``, or when a
            value is beyond 2**53.
    """
    if not all_counts(x):
        raise ValidationError(f"{caller} expects counts as inputs to {name!r}.")
    return _to_int64(x, name)


def check_ignored_arguments(
    caller: str,
    kwargs: Mapping[str, Any],
    *,
    ok_args: Iterable[str] = (),
) -> None:
    """
    Warn about keyword arguments the caller does not use.

    Args:
        caller: Name of the public function, used in the message.
        kwargs: The function's ``**kwargs``.
        ok_args: Names that are accepted silently.

    Warns:
        ArgumentConflictWarning: Naming every ignored argument.
    """
    allowed = set(ok_args)
    ignored = sorted(k for k in kwargs if k not in allowed)
    if ignored:
        logger.debug("%s ignoring arguments %s", caller, ignored)
        warnings.warn(
            f"{caller}: the following arguments were unrecognized and ignored: "
            + ", ".join(ignored),
            ArgumentConflictWarning,
            stacklevel=3,
        )

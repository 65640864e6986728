"""
Tabular input loading for observed/replicated data stored on disk.

Overview
- read_table(): Parquet, CSV, or Arrow IPC into a Polars DataFrame (format by suffix).
- read_vector(): one column (named or first) as a Polars Series, e.g. ``y`` or ``group``.
- read_matrix(): every column of a wide table as a (rows x columns) numpy array, e.g. ``yrep``
  stored one draw per row and one observation per column.

Notes
- Shape and value checks happen later in bayesviz.io.validate; this module only maps
  files to frames and raises ValidationError for missing files/columns.
"""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
import polars as pl

from bayesviz.core.errors import ValidationError

__all__ = ["read_table", "read_vector", "read_matrix"]

_READERS = {
    ".parquet": pl.read_parquet,
    ".pq": pl.read_parquet,
    ".csv": pl.read_csv,
    ".arrow": pl.read_ipc,
    ".ipc": pl.read_ipc,
    ".feather": pl.read_ipc,
}


def read_table(path: str | os.PathLike[str]) -> pl.DataFrame:
    """
    Read a table, choosing the reader by file suffix.

    Raises:
        ValidationError: If the file is missing or the suffix is unsupported.
    """
    p = Path(path)
    if not p.exists():
        raise ValidationError(f"file not found: {p}")
    reader = _READERS.get(p.suffix.lower())
    if reader is None:
        raise ValidationError(
            f"unsupported file type {p.suffix!r} for {p.name}; use one of {sorted(_READERS)}"
        )
    return reader(p)


def read_vector(path: str | os.PathLike[str], column: str | None = None) -> pl.Series:
    """Read a single column (``column`` or the first one) as a Series."""
    df = read_table(path)
    if df.width == 0:
        raise ValidationError(f"{Path(path).name} has no columns")
    if column is None:
        return df.to_series(0)
    if column not in df.columns:
        raise ValidationError(f"column {column!r} not found in {Path(path).name} (have {df.columns})")
    return df.get_column(column)


def read_matrix(path: str | os.PathLike[str]) -> np.ndarray:
    """Read a wide table as a 2-D numpy array (rows x columns)."""
    df = read_table(path)
    if df.width == 0:
        raise ValidationError(f"{Path(path).name} has no columns")
    return df.to_numpy()

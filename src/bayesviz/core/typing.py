"""
Lightweight typing aliases used across transforms and plots.

This module contains no runtime logic and is zero-IO.

Notes:
    - Inputs are accepted loosely (anything numpy can turn into an array) and validated
      by bayesviz.io.validate; these aliases only improve readability of signatures.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

__all__ = [
    "ArrayLike",
    "GroupLike",
    "DrawsLike",
    "FacetScales",
    "JsonDict",
]

# Observed or replicated outcomes: list, tuple, numpy array, polars Series.
ArrayLike = Any

# Group labels: any sequence of hashable labels of length N.
GroupLike = Sequence[Any] | Any

# MCMC draws: a (chain, draw, parameter) array or a mapping name -> (chain, draw) array.
DrawsLike = Mapping[str, Any] | Any

FacetScales = Literal["fixed", "free", "free_x", "free_y"]

JsonDict = dict[str, Any]

"""
bayesviz.transforms — Polars-first data builders behind every plot.

## Responsibilities
- discrete — discrete-outcome summaries (bar plots) and rootogram tables.
- mcmc — tidy long frames of posterior draws and R-hat / n_eff tables.

## Import DAG discipline
- Depends on: bayesviz.core, bayesviz.io (validation), numpy, polars, arviz.
- Never builds charts; bayesviz.viz consumes these frames.

## Examples
```python
from bayesviz.transforms import ppc_bars_data
ppc_bars_data([1, 1, 2, 3], [[1, 2, 2, 3]] * 3, prob=0.5, freq=False)
```
"""

from __future__ import annotations

from .discrete import ppc_bars_data, ppc_rootogram_data, summary_rows
from .mcmc import draws_to_frame, neff_frame, rhat_frame, select_parameters

__all__ = [
    "ppc_bars_data",
    "ppc_rootogram_data",
    "summary_rows",
    "draws_to_frame",
    "select_parameters",
    "rhat_frame",
    "neff_frame",
]

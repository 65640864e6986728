"""
bayesviz.viz — Declarative Altair charts for posterior predictive checks and MCMC output.

## Responsibilities
- Build Vega-Lite specs (Altair charts) from the frames produced by bayesviz.transforms.
- Keep styling explicit: every builder takes a VizSettings (or loads one when None).
- Never render; rendering is left to notebooks, browsers, or save().

## Public API
- ppc — ppc_bars, ppc_bars_grouped, ppc_rootogram.
- mcmc — mcmc_trace, mcmc_scatter, mcmc_rhat, mcmc_neff, mcmc_nuts_energy.
- layers — Altair layer primitives and legend encodings.
- theme — color schemes, get_color, apply_theme.
- save — HTML output plus PNG/SVG through the optional vl-convert-python converter.

## Import DAG discipline
- Depends on: bayesviz.core, bayesviz.io, bayesviz.transforms, bayesviz.diagnostics,
  polars, altair (and stdlib).
- Must not import bayesviz.cli.

## Examples
```python
from bayesviz.io import VizSettings
from bayesviz.viz import ppc_bars, save

ch = ppc_bars([1, 1, 2, 3], [[1, 2, 2, 3], [0, 2, 3, 3]], config=VizSettings(color_scheme="red"))
save(ch, out_html="bars.html")  # doctest: +SKIP
```
"""

from __future__ import annotations

from .mcmc import mcmc_neff, mcmc_nuts_energy, mcmc_rhat, mcmc_scatter, mcmc_trace
from .ppc import ppc_bars, ppc_bars_grouped, ppc_rootogram
from .save import save
from .theme import apply_theme, color_scheme, get_color, scheme_names

__all__ = [
    "ppc_bars",
    "ppc_bars_grouped",
    "ppc_rootogram",
    "mcmc_trace",
    "mcmc_scatter",
    "mcmc_rhat",
    "mcmc_neff",
    "mcmc_nuts_energy",
    "color_scheme",
    "scheme_names",
    "get_color",
    "apply_theme",
    "save",
]

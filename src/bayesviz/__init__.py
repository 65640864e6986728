"""
bayesviz — Plots for posterior predictive checks and MCMC diagnostics.

## Responsibilities
- core — errors, constants, enums, pydantic contracts, color schemes (no IO).
- io — VizSettings configuration, input validation, tabular file loading.
- transforms — Polars summaries behind each plot (ppc_bars_data, rootogram, draws frames).
- diagnostics — DiagnosticsSource interface for log-posterior and NUTS diagnostics.
- viz — Altair chart builders, theme, and save().
- cli — ``bayesviz bars|rootogram|summary`` entrypoint.

## Import DAG discipline
- core <- io <- transforms <- viz; diagnostics depends on core only; nothing imports cli.

## Logging
- Modules log through ``logging.getLogger(__name__)``; the package installs only a
  NullHandler. Applications (and ``bayesviz --verbose``) configure handlers.
"""

from __future__ import annotations

import logging

from bayesviz.core.errors import (
    ArgumentConflictError,
    ArgumentConflictWarning,
    BayesvizError,
    ConfigError,
    ValidationError,
)
from bayesviz.io.config import VizSettings
from bayesviz.transforms.discrete import ppc_bars_data, ppc_rootogram_data
from bayesviz.viz import (
    color_scheme,
    mcmc_neff,
    mcmc_nuts_energy,
    mcmc_rhat,
    mcmc_scatter,
    mcmc_trace,
    ppc_bars,
    ppc_bars_grouped,
    ppc_rootogram,
    save,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ppc_bars_data",
    "ppc_rootogram_data",
    "ppc_bars",
    "ppc_bars_grouped",
    "ppc_rootogram",
    "mcmc_trace",
    "mcmc_scatter",
    "mcmc_rhat",
    "mcmc_neff",
    "mcmc_nuts_energy",
    "color_scheme",
    "save",
    "VizSettings",
    "BayesvizError",
    "ValidationError",
    "ArgumentConflictError",
    "ArgumentConflictWarning",
    "ConfigError",
]

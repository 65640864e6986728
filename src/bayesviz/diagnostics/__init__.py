"""
bayesviz.diagnostics — Log-posterior and NUTS diagnostics from fitted models.

## Public API
- DiagnosticsSource — protocol with log_posterior() and nuts_parameters().
- InferenceDataSource — ArviZ InferenceData implementation.
- FrameDiagnosticsSource — wide Polars table implementation (lp__, divergent__, energy__, ...).
- as_diagnostics_source — adapt a supported object to the protocol.

## Import DAG discipline
- Depends on: bayesviz.core, numpy, polars, arviz.
"""

from __future__ import annotations

from .source import (
    DiagnosticsSource,
    FrameDiagnosticsSource,
    InferenceDataSource,
    as_diagnostics_source,
    nuts_parameter,
)

__all__ = [
    "DiagnosticsSource",
    "InferenceDataSource",
    "FrameDiagnosticsSource",
    "as_diagnostics_source",
    "nuts_parameter",
]

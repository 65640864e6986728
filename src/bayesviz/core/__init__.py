"""
Core package aggregator for bayesviz contracts (grammar, schemas, errors, constants).

## Contracts (single source of truth)
- Grammar — enums and normalization helpers (rootogram styles, statistics, facet scales,
  color codes, NUTS parameter names).
- Schemas — pydantic models for color schemes, styling arguments, and summary rows.
- Errors — ValidationError / ArgumentConflictError / ArgumentConflictWarning / ConfigError.
- Constants — statistical and styling defaults.

## Notes
- Zero‑IO policy: stdlib + pydantic only; no file/network IO, no numpy/polars.
- Naming policy: enum `.value` and column names are lower_snake.

## Downstream usage
- bayesviz.io — validates inputs and raises core errors; resolves config defaults from constants.
- bayesviz.transforms — label summaries with `Statistic`; emit columns in `SUMMARY_COLUMNS` order.
- bayesviz.diagnostics — maps sampler names onto `NutsParameter`.
- bayesviz.viz — consumes `ColorScheme`, `BarsStyle`, `FacetArgs`.

## Examples
```python
from bayesviz.core.grammar import RootogramStyle, rootogram_style_from_value
rootogram_style_from_value("SUSPENDED") is RootogramStyle.SUSPENDED  # True

from bayesviz.core.schema import FacetArgs
FacetArgs(scales="free_y").scales  # 'free_y'
```
"""

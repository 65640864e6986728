"""
bayesviz.io — Configuration, input validation, and tabular input loading.

## Responsibilities
- VizSettings: explicit styling/statistical defaults passed to plot builders
  (env > TOML > defaults).
- Validation of y / yrep / group / prob / freq with fail-fast ValidationError.
- Reading y / yrep / group from Parquet, CSV, or Arrow IPC files.

## Import DAG discipline
- Depends only on stdlib, numpy, polars, and bayesviz.core.*.
- MUST NOT import higher layers: transforms, diagnostics, viz, or cli.

## Examples
```python
from bayesviz.io import VizSettings
from bayesviz.io.validate import validate_y, validate_predictions

settings = VizSettings.load()
y = validate_y([1, 2, 2, 3])
yrep = validate_predictions([[1, 2, 3, 3], [2, 2, 2, 3]], len(y))
```
"""

from __future__ import annotations

from .config import VizSettings

__all__ = [
    "VizSettings",
]

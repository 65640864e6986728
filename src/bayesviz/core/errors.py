"""
Exception and warning types raised across bayesviz.

Provides typed exceptions for the failure classes of the package:
- ValidationError for malformed or out-of-domain inputs (non-whole numbers,
  out-of-range probabilities, wrong dimensionality or lengths).
- ArgumentConflictError for mutually exclusive or unsupported argument combinations.
- ArgumentConflictWarning for arguments that are accepted but ignored.
- ConfigError for invalid configuration values (env/TOML/explicit).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Every failure is terminal for the current call: no retries, no partial results.
    - Messages always name the offending argument (e.g. ``'yrep'``).

Examples:
    Catch a validation failure.

    >>> from bayesviz.core.errors import ValidationError
    >>> def check_prob(p: float) -> float:
    ...     if not 0 <= p <= 1:
    ...         raise ValidationError("'prob' must be in [0, 1]")
    ...     return p
    >>> try:
    ...     check_prob(1.5)
    ... except ValidationError as e:
    ...     msg = str(e)
    >>> "'prob'" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "BayesvizError",
    "ValidationError",
    "ArgumentConflictError",
    "ArgumentConflictWarning",
    "ConfigError",
]


class BayesvizError(Exception):
    """Base class for all bayesviz errors."""


class ValidationError(BayesvizError, ValueError):
    """Malformed or out-of-domain input; raised before any computation."""


class ArgumentConflictError(BayesvizError, TypeError):
    """Mutually exclusive or unsupported arguments supplied together."""


class ArgumentConflictWarning(UserWarning):
    """Arguments were supplied that the callee ignores."""


class ConfigError(BayesvizError):
    """
    Raised when configuration is invalid or unsupported.

    Examples:
        - Unknown color scheme name
        - Custom scheme with the wrong number of colors
    """

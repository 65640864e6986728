"""
Configuration for bayesviz plots.

Defines VizSettings, a frozen dataclass carrying the styling and statistical defaults that
every plot builder receives explicitly (there is no process-wide theme or color state).
Defaults are sourced from bayesviz.core.constants.

Precedence
- env (BAYESVIZ_*) > TOML (./bayesviz.toml [viz] or pyproject.toml [tool.bayesviz.viz]) > defaults.

Import DAG discipline
- Depends only on stdlib and bayesviz.core.
- Does not import higher layers (transforms, diagnostics, viz).
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from bayesviz.core.constants import DEFAULT_COLOR_SCHEME, DEFAULT_PROB
from bayesviz.core.errors import ConfigError
from bayesviz.core.palettes import color_scheme
from bayesviz.core.schema import ColorScheme


@dataclass(frozen=True)
class VizSettings:
    """
    Styling and statistical defaults threaded through plot construction.

    Attributes:
        color_scheme (str | tuple[str, ...]): Built-in name, "mix-<a>-<b>", or six hex colors.
        prob (float): Default central interval mass for yrep summaries.
        font_size (int): Axis and legend label font size.
        title_font_size (int): Title font size.
        width (int): Chart (or facet panel) width in px.
        height (int): Chart (or facet panel) height in px.
        facet_columns (int): Default number of facet columns for grouped/MCMC plots.

    Examples:
        >>> from bayesviz.io import VizSettings
        >>> VizSettings(color_scheme="red").scheme().dark
        '#8f2727'
    """

    color_scheme: str | tuple[str, ...] = DEFAULT_COLOR_SCHEME
    prob: float = DEFAULT_PROB
    font_size: int = 12
    title_font_size: int = 14
    width: int = 400
    height: int = 300
    facet_columns: int = 3

    def scheme(self) -> ColorScheme:
        """
        Resolve the configured color scheme.

        Raises:
            ConfigError: If the scheme name or colors are invalid.
        """
        return color_scheme(self.color_scheme)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: VizSettings, cfg: dict[str, Any] | None) -> VizSettings:
        """Apply a loose config mapping onto VizSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _coerce(key: str, conv: Callable[[Any], Any]) -> Any:
            try:
                return conv(cfg[key])
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"invalid value for {key!r}: {cfg[key]!r}") from exc

        if "color_scheme" in cfg:
            v = cfg["color_scheme"]
            if isinstance(v, str):
                # Comma-separated custom colors are accepted from env vars.
                parts = [p.strip() for p in v.split(",") if p.strip()]
                s = replace(s, color_scheme=tuple(parts) if len(parts) > 1 else v.strip())
            elif isinstance(v, (list, tuple)):
                s = replace(s, color_scheme=tuple(str(c) for c in v))
            else:
                raise ConfigError(f"invalid value for 'color_scheme': {v!r}")

        if "prob" in cfg:
            prob = _coerce("prob", float)
            if not 0.0 <= prob <= 1.0:
                raise ConfigError(f"'prob' must be in [0, 1] (got {prob!r})")
            s = replace(s, prob=prob)

        for key in ("font_size", "title_font_size", "width", "height", "facet_columns"):
            if key in cfg:
                val = _coerce(key, int)
                if val < 1:
                    raise ConfigError(f"{key!r} must be >= 1 (got {val!r})")
                s = replace(s, **{key: val})

        return s

    @classmethod
    def from_env(cls, base: VizSettings | None = None, prefix: str = "BAYESVIZ_") -> VizSettings:
        """
        Build VizSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - BAYESVIZ_COLOR_SCHEME (name, mix name, or six comma-separated hex colors)
            - BAYESVIZ_PROB
            - BAYESVIZ_FONT_SIZE
            - BAYESVIZ_TITLE_FONT_SIZE
            - BAYESVIZ_WIDTH
            - BAYESVIZ_HEIGHT
            - BAYESVIZ_FACET_COLUMNS
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in (
            "color_scheme",
            "prob",
            "font_size",
            "title_font_size",
            "width",
            "height",
            "facet_columns",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> VizSettings:
        """
        Build VizSettings from a TOML file.

        Search order when `path` is None:
            1) ./bayesviz.toml (with either top-level [viz] or direct keys)
            2) ./pyproject.toml under [tool.bayesviz.viz]

        Returns defaults if no file is present.

        Raises:
            ConfigError: If an explicit path does not exist or a file is not valid TOML.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise ConfigError(f"config file not found: {p}")
            cand.append(p)
        else:
            cand.append(Path.cwd() / "bayesviz.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"invalid TOML in {p}: {exc}") from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("bayesviz", {}).get("viz") if isinstance(tool, dict) else None
            elif isinstance(data.get("viz"), dict):
                cfg = data["viz"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> VizSettings:
        """
        Load VizSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (bayesviz.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s

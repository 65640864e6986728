"""
Write charts to HTML and static images.

- HTML is always written by Altair itself.
- PNG/SVG need the optional ``vl-convert-python`` converter (``pip install bayesviz[image]``);
  it is imported only when an image is requested.
"""

from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path

import altair as alt

from bayesviz.core.errors import ValidationError

logger = logging.getLogger(__name__)

__all__ = ["save", "output_kind"]

_KINDS = {".html": "html", ".htm": "html", ".png": "png", ".svg": "svg"}


def output_kind(path: str | os.PathLike[str]) -> str:
    """
    Output format implied by a file suffix.

    Raises:
        ValidationError: For suffixes other than .html, .htm, .png, .svg.
    """
    kind = _KINDS.get(Path(path).suffix.lower())
    if kind is None:
        raise ValidationError(f"unsupported output type {Path(path).suffix!r}; use .html, .png, or .svg")
    return kind


def _converter():
    try:
        return importlib.import_module("vl_convert")
    except ImportError as exc:
        raise RuntimeError(
            "PNG/SVG export requires the optional 'vl-convert-python' package "
            "(pip install 'bayesviz[image]')"
        ) from exc


def save(
    chart: alt.TopLevelMixin,
    out_html: str | os.PathLike[str] | None = None,
    out_png: str | os.PathLike[str] | None = None,
    out_svg: str | os.PathLike[str] | None = None,
    *,
    scale: float = 2.0,
) -> list[Path]:
    """
    Save a chart to any combination of HTML, PNG, and SVG.

    Args:
        chart: Any top-level Altair chart.
        out_html, out_png, out_svg: Destination paths; None skips that format.
        scale: PNG scale factor.

    Returns:
        list[Path]: Paths written, in html/png/svg order.

    Raises:
        RuntimeError: When an image is requested and vl-convert-python is not installed.
    """
    written: list[Path] = []
    if out_html is not None:
        p = Path(out_html)
        p.parent.mkdir(parents=True, exist_ok=True)
        chart.save(str(p))
        written.append(p)

    if out_png is None and out_svg is None:
        return written

    vlc = _converter()
    spec = chart.to_dict()
    if out_png is not None:
        p = Path(out_png)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(vlc.vegalite_to_png(spec, scale=scale))
        written.append(p)
    if out_svg is not None:
        p = Path(out_svg)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(vlc.vegalite_to_svg(spec), encoding="utf-8")
        written.append(p)
    logger.debug("saved chart to %s", [str(p) for p in written])
    return written

from __future__ import annotations

import importlib
import types
from pathlib import Path

import altair as alt
import pytest

from bayesviz.core.errors import ValidationError
from bayesviz.io.config import VizSettings
from bayesviz.viz import ppc_bars, save
from bayesviz.viz.save import output_kind


def test_save_html_without_converter_and_image_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ch = ppc_bars([1, 1, 2, 3], [[1, 2, 2, 3]] * 3, config=VizSettings())

    out_html = tmp_path / "nested" / "bars.html"
    assert save(ch, out_html=str(out_html)) == [out_html]
    assert out_html.exists() and out_html.stat().st_size > 0

    # Simulate converter missing by making importlib.import_module("vl_convert") raise ImportError
    real_import_module = importlib.import_module

    def fake_import_module(name: str, *args, **kwargs):
        if name == "vl_convert":
            raise ImportError("simulated missing converter")
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(importlib, "import_module", fake_import_module)
    with pytest.raises(RuntimeError) as ei:
        save(ch, out_png=str(tmp_path / "bars.png"))
    assert "vl-convert-python" in str(ei.value)


def test_save_images_through_converter(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    fake = types.SimpleNamespace(
        vegalite_to_png=lambda spec, scale=1.0: calls.append("png") or b"\x89PNG",
        vegalite_to_svg=lambda spec: calls.append("svg") or "<svg/>",
    )
    real_import_module = importlib.import_module
    monkeypatch.setattr(
        importlib,
        "import_module",
        lambda name, *a, **k: fake if name == "vl_convert" else real_import_module(name, *a, **k),
    )
    ch = alt.Chart(alt.Data(values=[{"x": 0, "y": 0}])).mark_point().encode(x="x:Q", y="y:Q")

    written = save(ch, out_png=tmp_path / "a.png", out_svg=tmp_path / "a.svg")

    assert calls == ["png", "svg"]
    assert [p.name for p in written] == ["a.png", "a.svg"]
    assert (tmp_path / "a.png").read_bytes() == b"\x89PNG"
    assert (tmp_path / "a.svg").read_text() == "<svg/>"


def test_output_kind() -> None:
    assert output_kind("plot.HTML") == "html"
    assert output_kind("plot.svg") == "svg"
    with pytest.raises(ValidationError, match="unsupported output type"):
        output_kind("plot.pdf")

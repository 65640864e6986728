from __future__ import annotations

from pathlib import Path

import pytest

from bayesviz.core.errors import ConfigError
from bayesviz.io.config import VizSettings

_ENV_KEYS = [
    "BAYESVIZ_COLOR_SCHEME",
    "BAYESVIZ_PROB",
    "BAYESVIZ_FONT_SIZE",
    "BAYESVIZ_TITLE_FONT_SIZE",
    "BAYESVIZ_WIDTH",
    "BAYESVIZ_HEIGHT",
    "BAYESVIZ_FACET_COLUMNS",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_bayesviz_toml(tmp: Path, content: str) -> Path:
    p = tmp / "bayesviz.toml"
    p.write_text(content)
    return p


def test_viz_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _clear_env(monkeypatch)
    # Arrange TOML
    _write_bayesviz_toml(
        tmp_path,
        """
        [viz]
        color_scheme = "red"
        prob = 0.5
        width = 250
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("BAYESVIZ_COLOR_SCHEME", "teal")
    monkeypatch.setenv("BAYESVIZ_PROB", "0.8")

    s = VizSettings.load()

    assert s.color_scheme == "teal"  # env override
    assert s.prob == pytest.approx(0.8)  # env override
    assert s.width == 250  # from TOML


def test_viz_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _clear_env(monkeypatch)
    (tmp_path / "pyproject.toml").write_text(
        """
        [project]
        name = "demo"

        [tool.bayesviz.viz]
        color_scheme = "mix-blue-red"
        facet_columns = 2
        """.strip()
    )
    monkeypatch.chdir(tmp_path)

    s = VizSettings.load()

    assert s.color_scheme == "mix-blue-red"
    assert s.facet_columns == 2
    assert s.scheme().name == "mix-blue-red"


def test_viz_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)

    s = VizSettings.load()

    assert s == VizSettings()
    assert s.color_scheme == "blue"
    assert s.prob == pytest.approx(0.9)


def test_env_accepts_comma_separated_custom_colors(tmp_path: Path, monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    colors = ["#111111", "#222222", "#333333", "#444444", "#555555", "#666666"]
    monkeypatch.setenv("BAYESVIZ_COLOR_SCHEME", ",".join(colors))

    s = VizSettings.load()

    assert s.color_scheme == tuple(colors)
    assert s.scheme().colors() == colors


def test_invalid_values_raise_config_error(tmp_path: Path, monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)

    monkeypatch.setenv("BAYESVIZ_PROB", "1.5")
    with pytest.raises(ConfigError, match="'prob'"):
        VizSettings.load()

    monkeypatch.setenv("BAYESVIZ_PROB", "0.5")
    monkeypatch.setenv("BAYESVIZ_WIDTH", "wide")
    with pytest.raises(ConfigError, match="'width'"):
        VizSettings.load()

    with pytest.raises(ConfigError):
        VizSettings(color_scheme="ultraviolet").scheme()


def test_explicit_missing_toml_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        VizSettings.from_toml(tmp_path / "nope.toml")

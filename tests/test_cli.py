from __future__ import annotations

from pathlib import Path

import polars as pl
import pytest

from bayesviz import cli


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    for key in ("BAYESVIZ_COLOR_SCHEME", "BAYESVIZ_PROB"):
        monkeypatch.delenv(key, raising=False)
    pl.DataFrame({"y": [1, 1, 2, 3]}).write_parquet(tmp_path / "y.parquet")
    pl.DataFrame(
        {"o1": [1, 1, 0], "o2": [2, 2, 1], "o3": [2, 2, 2], "o4": [3, 3, 3]}
    ).write_csv(tmp_path / "yrep.csv")
    pl.DataFrame({"g": ["a", "a", "b", "b"]}).write_csv(tmp_path / "group.csv")
    return tmp_path


def run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as ei:
        cli.main(argv)
    return ei.value.code


def test_bars_writes_html(data_dir: Path, capsys) -> None:
    code = run(["bars", "--y", "y.parquet", "--yrep", "yrep.csv", "--out", "bars.html"])
    assert code == 0
    assert (data_dir / "bars.html").stat().st_size > 0
    assert "Wrote html" in capsys.readouterr().out


def test_grouped_bars_and_rootogram(data_dir: Path) -> None:
    code = run(
        [
            "bars",
            "--y",
            "y.parquet",
            "--yrep",
            "yrep.csv",
            "--group",
            "group.csv",
            "--proportion",
            "--out",
            "grouped.html",
        ]
    )
    assert code == 0
    assert "group" in (data_dir / "grouped.html").read_text()

    code = run(
        ["rootogram", "--y", "y.parquet", "--yrep", "yrep.csv", "--style", "hanging", "--out", "r.html"]
    )
    assert code == 0
    assert (data_dir / "r.html").exists()


def test_summary_prints_and_writes_table(data_dir: Path, capsys) -> None:
    code = run(["summary", "--y", "y.parquet", "--yrep", "yrep.csv", "--prob", "0.5", "--out", "s.csv"])
    assert code == 0
    table = pl.read_csv(data_dir / "s.csv")
    assert table.columns == ["x", "y_obs", "l", "m", "h"]
    assert table.get_column("y_obs").to_list() == [0.0, 2.0, 1.0, 1.0]
    assert "y_obs" in capsys.readouterr().out


def test_errors_exit_with_code_two(data_dir: Path, capsys) -> None:
    pl.DataFrame({"o1": [1], "o2": [2]}).write_csv(data_dir / "short.csv")
    code = run(["bars", "--y", "y.parquet", "--yrep", "short.csv", "--out", "x.html"])
    assert code == 2
    assert "length mismatch" in capsys.readouterr().err

    assert run(["bars", "--y", "y.parquet", "--yrep", "yrep.csv", "--out", "x.pdf"]) == 2
    assert run(["nope"]) == 2


def test_no_arguments_prints_help(capsys) -> None:
    cli.main([])
    assert "bayesviz" in capsys.readouterr().out

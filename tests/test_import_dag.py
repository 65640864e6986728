from pathlib import Path

PKG = Path(__file__).resolve().parents[1] / "src" / "bayesviz"


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def walk_files(root: Path) -> list[Path]:
    return [p for p in root.rglob("*.py") if p.is_file()]


def _assert_no_imports(layer: str, forbidden: list[str]) -> None:
    root = PKG / layer
    assert root.exists(), f"{root} must exist"
    for py in walk_files(root):
        text = read_text(py)
        for mod in forbidden:
            for stmt in (f"import {mod}", f"from {mod}"):
                assert stmt not in text, f"Forbidden import '{stmt}' found in {py}"


def test_core_is_zero_io() -> None:
    _assert_no_imports(
        "core",
        ["numpy", "polars", "altair", "arviz", "bayesviz.io", "bayesviz.transforms", "bayesviz.viz"],
    )


def test_io_does_not_import_higher_layers() -> None:
    _assert_no_imports(
        "io", ["altair", "arviz", "bayesviz.transforms", "bayesviz.diagnostics", "bayesviz.viz"]
    )


def test_transforms_and_diagnostics_never_build_charts() -> None:
    for layer in ("transforms", "diagnostics"):
        _assert_no_imports(layer, ["altair", "bayesviz.viz", "bayesviz.cli"])


def test_no_pandas_anywhere() -> None:
    _assert_no_imports(".", ["pandas"])

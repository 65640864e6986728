import math

import polars as pl
import pytest

from bayesviz.core.constants import ROOTOGRAM_COLUMNS
from bayesviz.core.errors import ValidationError
from bayesviz.core.schema import RootogramRow
from bayesviz.transforms.discrete import ppc_rootogram_data

Y = [0, 1, 1, 2]
YREP = [[0, 1, 1, 2], [0, 1, 1, 2]]


def test_standing_bars_start_at_zero() -> None:
    df = ppc_rootogram_data(Y, YREP, style="standing")
    assert df.columns == list(ROOTOGRAM_COLUMNS)
    assert df.get_column("xpos").to_list() == [0, 1, 2]
    assert df.get_column("tyexp").to_list() == pytest.approx([1.0, math.sqrt(2), 1.0])
    assert df.get_column("ty").to_list() == pytest.approx([1.0, math.sqrt(2), 1.0])
    assert df.get_column("ybottom").to_list() == pytest.approx([0.0, 0.0, 0.0])
    assert df.get_column("ytop").to_list() == pytest.approx(df.get_column("ty").to_list())
    for row in df.iter_rows(named=True):
        RootogramRow(**row)


def test_hanging_bars_hang_from_expected_curve() -> None:
    df = ppc_rootogram_data(Y, YREP, style="hanging")
    assert df.get_column("ytop").to_list() == pytest.approx(df.get_column("tyexp").to_list())
    assert df.get_column("ybottom").to_list() == pytest.approx([0.0, 0.0, 0.0])


def test_suspended_bars_are_residuals() -> None:
    df = ppc_rootogram_data([0, 0], [[0, 2]], style="suspended")
    # Observed: two zeros. Expected: one 0, one 2.
    assert df.get_column("xpos").to_list() == [0, 1, 2]
    ty = df.get_column("ty").to_list()
    assert ty == pytest.approx([1.0 - math.sqrt(2), 0.0, 1.0])
    assert df.get_column("ypos").to_list() == pytest.approx([t / 2 for t in ty])


def test_interval_bounds_are_square_roots_of_quantiles() -> None:
    yrep = [[0, 0, 0], [1, 1, 1], [2, 2, 2]]
    df = ppc_rootogram_data([0, 1, 2], yrep, prob=1.0)
    row = df.filter(pl.col("xpos") == 0)
    assert row.get_column("tylower").item() == pytest.approx(0.0)
    assert row.get_column("tyupper").item() == pytest.approx(math.sqrt(3))
    assert row.get_column("tyexp").item() == pytest.approx(1.0)


def test_rootogram_requires_counts_and_known_style() -> None:
    with pytest.raises(ValidationError, match="expects counts as inputs to 'y'"):
        ppc_rootogram_data([-1, 2], [[1, 2]])
    with pytest.raises(ValidationError, match="expects counts as inputs to 'yrep'"):
        ppc_rootogram_data([1, 2], [[1, 2.5]])
    with pytest.raises(ValidationError, match="'style'"):
        ppc_rootogram_data([1, 2], [[1, 2]], style="floating")

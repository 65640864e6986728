import numpy as np
import polars as pl
import pytest

from bayesviz.core.errors import ValidationError
from bayesviz.transforms.mcmc import (
    as_draws_frame,
    chain_matrix,
    draws_to_frame,
    neff_frame,
    parameter_names,
    rhat_frame,
    select_parameters,
)


def _cube(seed: int = 0, chains: int = 4, draws: int = 300, pars: int = 3) -> np.ndarray:
    return np.random.default_rng(seed).normal(size=(chains, draws, pars))


def test_draws_to_frame_from_array() -> None:
    cube = np.arange(2 * 3 * 2, dtype=float).reshape(2, 3, 2)
    df = draws_to_frame(cube, parameters=["alpha", "beta"])

    assert df.columns == ["chain", "iteration", "parameter", "value"]
    assert df.height == 12
    assert df.get_column("chain").unique().sort().to_list() == [1, 2]
    assert df.get_column("iteration").unique().sort().to_list() == [1, 2, 3]
    assert parameter_names(df) == ["alpha", "beta"]
    np.testing.assert_array_equal(chain_matrix(df, "beta"), cube[:, :, 1])


def test_draws_to_frame_defaults_and_single_chain() -> None:
    df = draws_to_frame(np.zeros((5, 3)))
    assert parameter_names(df) == ["V1", "V2", "V3"]
    assert df.get_column("chain").unique().to_list() == [1]


def test_draws_to_frame_from_mapping_and_wide_frame() -> None:
    mapping = {"mu": [[0.0, 1.0], [2.0, 3.0]], "tau": [[1.0, 1.0], [1.0, 1.0]]}
    df = draws_to_frame(mapping)
    np.testing.assert_array_equal(chain_matrix(df, "mu"), [[0.0, 1.0], [2.0, 3.0]])

    wide = pl.DataFrame({"chain": [1, 1, 2, 2], "mu": [0.0, 1.0, 2.0, 3.0]})
    np.testing.assert_array_equal(chain_matrix(draws_to_frame(wide), "mu"), [[0.0, 1.0], [2.0, 3.0]])
    assert as_draws_frame(df) is df


def test_draws_to_frame_errors() -> None:
    with pytest.raises(ValidationError, match="'parameters' has 1 names"):
        draws_to_frame(np.zeros((1, 2, 2)), parameters=["a"])
    with pytest.raises(ValidationError, match="shape"):
        draws_to_frame({"a": np.zeros((2, 3)), "b": np.zeros((2, 4))})
    with pytest.raises(ValidationError):
        draws_to_frame(np.zeros(4))
    with pytest.raises(ValidationError, match="same number of draws"):
        draws_to_frame(pl.DataFrame({"chain": [1, 1, 2], "mu": [0.0, 1.0, 2.0]}))


def test_select_parameters_by_name_and_regex() -> None:
    df = draws_to_frame(np.zeros((1, 2, 4)), parameters=["alpha", "beta[1]", "beta[2]", "sigma"])
    assert parameter_names(select_parameters(df)) == ["alpha", "beta[1]", "beta[2]", "sigma"]
    sub = select_parameters(df, pars=["sigma"], regex_pars=r"^beta\[")
    assert parameter_names(sub) == ["beta[1]", "beta[2]", "sigma"]
    with pytest.raises(ValidationError, match="'gamma' not found"):
        select_parameters(df, pars=["gamma"])
    with pytest.raises(ValidationError, match="matched no parameters"):
        select_parameters(df, regex_pars="^z")


def test_rhat_frame_rates_converged_and_stuck_chains() -> None:
    cube = _cube(seed=11)
    cube[:, :, 2] += np.arange(4)[:, None] * 5.0  # chains disagree on the last parameter
    df = rhat_frame(draws_to_frame(cube, parameters=["a", "b", "c"]))

    assert df.columns == ["parameter", "rhat", "rating"]
    ratings = dict(zip(df.get_column("parameter"), df.get_column("rating")))
    assert ratings["a"] == "low"
    assert ratings["b"] == "low"
    assert ratings["c"] == "high"


def test_neff_frame_ratio_is_ess_over_total_draws() -> None:
    cube = _cube(seed=5)
    cube[:, :, 1] = np.cumsum(cube[:, :, 1], axis=1)  # random walk: strongly autocorrelated
    df = neff_frame(cube)

    assert df.columns == ["parameter", "ess", "neff_ratio", "rating"]
    ratio = df.get_column("neff_ratio").to_list()
    ess = df.get_column("ess").to_list()
    assert ratio == pytest.approx([e / (4 * 300) for e in ess])
    assert ratio[0] > 0.5 and df.get_column("rating")[0] == "high"
    assert ratio[1] <= 0.1 and df.get_column("rating")[1] == "low"

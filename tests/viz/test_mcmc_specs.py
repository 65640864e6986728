from __future__ import annotations

from typing import Any

import numpy as np
import polars as pl
import pytest

from bayesviz.core.errors import ValidationError
from bayesviz.io.config import VizSettings
from bayesviz.transforms.mcmc import draws_to_frame, neff_frame, rhat_frame
from bayesviz.viz.mcmc import (
    energy_frame,
    mcmc_neff,
    mcmc_nuts_energy,
    mcmc_rhat,
    mcmc_scatter,
    mcmc_trace,
)

CONFIG = VizSettings()


def find_in_spec(obj: Any, predicate) -> bool:
    """Recursively scan a chart spec dict for a predicate match."""
    if isinstance(obj, dict):
        if predicate(obj):
            return True
        return any(find_in_spec(v, predicate) for v in obj.values())
    if isinstance(obj, list):
        return any(find_in_spec(v, predicate) for v in obj)
    return False


def mark_is(kind: str):
    def check(d: dict) -> bool:
        mark = d.get("mark")
        return (mark.get("type") if isinstance(mark, dict) else mark) == kind

    return check


def dataset_rows(spec: dict) -> list[dict]:
    rows: list[dict] = []
    for values in spec.get("datasets", {}).values():
        rows.extend(values)

    def walk(obj: Any) -> None:
        if isinstance(obj, dict):
            if isinstance(obj.get("values"), list):
                rows.extend(obj["values"])
            for v in obj.values():
                walk(v)
        elif isinstance(obj, list):
            for v in obj:
                walk(v)

    walk({k: v for k, v in spec.items() if k != "datasets"})
    return rows


def _draws(seed: int = 0) -> np.ndarray:
    return np.random.default_rng(seed).normal(size=(2, 50, 3))


def _diagnostics() -> pl.DataFrame:
    n = 50
    return pl.DataFrame(
        {
            "chain": [1] * n + [2] * n,
            "iteration": list(range(1, n + 1)) * 2,
            "lp__": np.linspace(-10, -5, 2 * n),
            "divergent__": [1 if i in (3, 77) else 0 for i in range(2 * n)],
            "energy__": np.random.default_rng(9).normal(20, 2, 2 * n),
        }
    )


def test_mcmc_trace_lines_per_chain_faceted_by_parameter() -> None:
    spec = mcmc_trace(_draws(), config=CONFIG).to_dict()

    assert spec["facet"]["field"] == "parameter"
    assert spec["resolve"]["scale"]["y"] == "independent"
    assert find_in_spec(
        spec,
        lambda d: mark_is("line")(d) and d.get("encoding", {}).get("color", {}).get("field") == "chain",
    )
    params = {r["parameter"] for r in dataset_rows(spec)}
    assert params == {"V1", "V2", "V3"}


def test_mcmc_trace_selects_parameters() -> None:
    draws = draws_to_frame(_draws(), parameters=["alpha", "beta[1]", "beta[2]"])
    spec = mcmc_trace(draws, regex_pars=r"^beta", facet_columns=1, config=CONFIG).to_dict()
    assert spec["columns"] == 1
    assert {r["parameter"] for r in dataset_rows(spec)} == {"beta[1]", "beta[2]"}


def test_mcmc_scatter_marks_divergences() -> None:
    draws = draws_to_frame(_draws(), parameters=["mu", "tau", "sigma"])
    spec = mcmc_scatter(draws, ["mu", "tau"], diagnostics=_diagnostics(), config=CONFIG).to_dict()

    rows = [r for r in dataset_rows(spec) if "divergent" in r]
    assert len(rows) == 100
    flagged = sorted((r["chain"], r["iteration"]) for r in rows if r["divergent"])
    assert flagged == [(1, 4), (2, 28)]
    assert find_in_spec(spec, lambda d: d.get("filter") == "datum.divergent")
    assert find_in_spec(spec, lambda d: d.get("title") == "mu")


def test_mcmc_scatter_without_diagnostics_and_bad_pars() -> None:
    spec = mcmc_scatter(_draws(), ["V1", "V2"], config=CONFIG).to_dict()
    assert not any(r.get("divergent") for r in dataset_rows(spec))
    with pytest.raises(ValidationError, match="exactly two"):
        mcmc_scatter(_draws(), ["V1"], config=CONFIG)
    with pytest.raises(ValidationError, match="exactly two"):
        mcmc_scatter(_draws(), ["V1", "V1"], config=CONFIG)


def test_mcmc_rhat_ratings_and_reference_rules() -> None:
    spec = mcmc_rhat({"a": 1.0, "b": 1.07, "c": 1.2}, config=CONFIG).to_dict()
    rows = dataset_rows(spec)
    ratings = {r["parameter"]: r["rating"] for r in rows if "rating" in r}
    assert ratings == {"a": "low", "b": "ok", "c": "high"}
    rules = sorted(r["x"] for r in rows if set(r) == {"x"})
    assert rules == pytest.approx([1.0, 1.05, 1.1])
    assert find_in_spec(spec, lambda d: d.get("title") == "R-hat")


def test_mcmc_rhat_and_neff_accept_tables() -> None:
    frame = draws_to_frame(_draws(1))
    rhat_spec = mcmc_rhat(rhat_frame(frame), config=CONFIG).to_dict()
    assert {r["parameter"] for r in dataset_rows(rhat_spec) if "rating" in r} == {"V1", "V2", "V3"}

    neff_spec = mcmc_neff(neff_frame(frame), config=CONFIG).to_dict()
    rules = sorted(r["x"] for r in dataset_rows(neff_spec) if set(r) == {"x"})
    assert rules == pytest.approx([0.1, 0.5, 1.0])

    seq_spec = mcmc_neff([0.05, 0.3, 0.9], config=CONFIG).to_dict()
    ratings = [r["rating"] for r in dataset_rows(seq_spec) if "rating" in r]
    assert ratings == ["low", "ok", "high"]


def test_mcmc_rhat_rejects_missing_values() -> None:
    with pytest.raises(ValidationError):
        mcmc_rhat({"a": float("nan")}, config=CONFIG)
    with pytest.raises(ValidationError):
        mcmc_rhat({}, config=CONFIG)


def test_energy_frame_centers_and_differences() -> None:
    frame = pl.DataFrame({"chain": [1, 1, 1, 2, 2], "energy__": [1.0, 2.0, 6.0, 5.0, 5.0]})
    data = energy_frame(frame)
    centered = data.filter(pl.col("kind") == "E - mean(E)").get_column("value").to_list()
    delta = data.filter(pl.col("kind") == "Delta E").get_column("value").to_list()
    assert centered == pytest.approx([-2.0, -1.0, 3.0, 0.0, 0.0])
    assert delta == pytest.approx([1.0, 4.0, 0.0])


def test_mcmc_nuts_energy_histograms() -> None:
    spec = mcmc_nuts_energy(_diagnostics(), config=CONFIG).to_dict()
    assert spec["facet"]["field"] == "chain"
    assert find_in_spec(spec, lambda d: d.get("aggregate") == "count" and d.get("stack") is None)
    assert find_in_spec(spec, lambda d: d.get("domain") == ["E - mean(E)", "Delta E"])

    merged = mcmc_nuts_energy(_diagnostics(), merge_chains=True, config=CONFIG).to_dict()
    assert "facet" not in merged
    assert mark_is("bar")(merged)


def test_mcmc_nuts_energy_requires_energy() -> None:
    with pytest.raises(ValidationError, match="energy__"):
        mcmc_nuts_energy(pl.DataFrame({"divergent__": [0, 1]}), config=CONFIG)

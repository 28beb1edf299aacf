"""Tests for configuration and the end-to-end conjugate estimate."""

from __future__ import annotations

import copy
from pathlib import Path

import polars as pl
import pytest

from edibility.core.config import DEFAULT_CONFIG, build_config, resolve_prior
from edibility.core.errors import InputValidationError
from edibility.core.models import OutcomeCounts, PosteriorParameters
from edibility.data.species.simulate import simulate_species
from edibility.pipeline.estimate import (
    estimate_edible_proportion,
    estimate_from_table,
    species_table,
)

SCENARIO = OutcomeCounts(trials=200, successes=40)


# ---------------------------------------------------------------------------
# Configuration


def test_default_config_uses_informative_prior() -> None:
    assert DEFAULT_CONFIG["prior"] == {"name": "informative", "alpha": 10.0, "beta": 90.0}
    assert DEFAULT_CONFIG["interval"]["mass"] == 0.95
    assert DEFAULT_CONFIG["population"] == {
        "lower_bound_species": 342_000,
        "upper_bound_species": 369_000,
    }


def test_build_config_leaves_defaults_untouched() -> None:
    before = copy.deepcopy(DEFAULT_CONFIG)
    config = build_config(prior="flat", interval={"mass": 0.89, "method": "analytic"})
    assert config["prior"] == {"name": "flat", "alpha": 1.0, "beta": 1.0}
    assert config["interval"]["mass"] == 0.89
    assert config["interval"]["n_samples"] == 10_000
    assert DEFAULT_CONFIG == before
    config["population"]["lower_bound_species"] = 1
    assert DEFAULT_CONFIG == before


def test_resolve_prior_accepts_pairs() -> None:
    assert resolve_prior((2, 8)) == {"name": "custom", "alpha": 2.0, "beta": 8.0}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"prior": "jeffreys"},
        {"prior": (0, 1)},
        {"interval": {"width": 0.5}},
        {"plotting": {}},
        {"population": {"lower_bound_species": 400_000}},
        {"population": {"lower_bound_species": 0}},
    ],
)
def test_build_config_rejects_invalid_overrides(kwargs: dict) -> None:
    with pytest.raises(InputValidationError):
        build_config(**kwargs)


# ---------------------------------------------------------------------------
# Estimate


def test_reference_scenario() -> None:
    result = estimate_edible_proportion(SCENARIO)
    assert result.posterior == PosteriorParameters(50.0, 250.0)
    assert result.estimate.mean_percentage == pytest.approx(16.6667, abs=1e-3)
    assert result.estimate.expected_edible[342_000] == pytest.approx(57_000, abs=1)

    lower, upper = result.estimate.credible_percentage
    assert 12.0 < lower < 13.5
    assert 20.5 < upper < 21.5
    assert result.interval.method == "sampling"
    assert result.interval.n_samples == 10_000


def test_to_dict_exposes_structured_result() -> None:
    payload = estimate_edible_proportion(SCENARIO).to_dict()
    assert set(payload) == {
        "mean_percentage",
        "credible_interval_percentage",
        "total_edible_species_range",
    }
    assert set(payload["total_edible_species_range"]) == {342_000, 369_000}
    lo, hi = payload["total_edible_species_range"][369_000]
    assert lo < hi


def test_estimate_is_reproducible() -> None:
    assert estimate_edible_proportion(SCENARIO) == estimate_edible_proportion(SCENARIO)


def test_analytic_and_sampling_intervals_agree() -> None:
    sampled = estimate_edible_proportion(SCENARIO)
    analytic = estimate_edible_proportion(
        SCENARIO, build_config(interval={"method": "analytic"})
    )
    assert analytic.interval.method == "analytic"
    assert analytic.interval.lower == pytest.approx(sampled.interval.lower, abs=0.005)
    assert analytic.interval.upper == pytest.approx(sampled.interval.upper, abs=0.005)


def test_flat_prior_follows_the_data() -> None:
    result = estimate_edible_proportion(SCENARIO, build_config(prior="flat"))
    assert result.posterior == PosteriorParameters(41.0, 161.0)
    assert result.estimate.mean_percentage == pytest.approx(100 * 41 / 202)


def test_zero_trials_returns_prior() -> None:
    result = estimate_edible_proportion(OutcomeCounts(0, 0))
    assert result.posterior == PosteriorParameters(10.0, 90.0)
    assert result.estimate.mean_percentage == pytest.approx(10.0)


def test_custom_population_bounds() -> None:
    config = build_config(
        population={"lower_bound_species": 1_000, "upper_bound_species": 2_000}
    )
    result = estimate_edible_proportion(SCENARIO, config)
    assert result.estimate.species_bounds == (1_000, 2_000)
    assert "1000 to 2000" in result.summary


def test_estimate_from_table_counts_known_outcomes() -> None:
    df = pl.DataFrame({"edible": [True] * 40 + [False] * 160 + [None] * 5})
    result = estimate_from_table(df)
    assert result.counts == SCENARIO
    assert result.posterior == PosteriorParameters(50.0, 250.0)


def test_estimate_from_simulated_table() -> None:
    species = simulate_species(200, seed=123)
    result = estimate_from_table(species)
    assert result.counts.trials == 200
    assert result.interval.lower < result.posterior.mean < result.interval.upper
    assert result.summary.startswith("The estimated proportion")


# ---------------------------------------------------------------------------
# Species table source


@pytest.mark.parametrize("path", [None, "", "   "])
def test_species_table_simulates_without_path(path) -> None:
    config = build_config(simulation={"n_species": 30, "seed": 8})
    assert species_table(config, path).equals(simulate_species(30, seed=8))


def test_species_table_loads_given_file(tmp_path: Path) -> None:
    data = tmp_path / "species.tsv"
    data.write_text("name\toutcome\nA\tedible\nB\ttoxic\n", encoding="utf-8")
    df = species_table(
        DEFAULT_CONFIG,
        str(data),
        separator="\t",
        id_column="name",
        outcome_column="outcome",
    )
    assert df.get_column("edible").to_list() == [True, False]


def test_species_table_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InputValidationError):
        species_table(DEFAULT_CONFIG, tmp_path / "absent.csv")

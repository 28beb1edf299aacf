"""Unit tests for formula parsing, design matrices and the logistic backends."""

from __future__ import annotations

import types

import numpy as np
import polars as pl
import pytest

from edibility.core.errors import InputValidationError, RegressionFitError
from edibility.data.species.simulate import simulate_species
from edibility.stats.regression.backend import (
    LogisticBackend,
    LogisticPriors,
    PosteriorSamples,
    SamplerConfig,
)
from edibility.stats.regression.design import INTERCEPT, design_matrix
from edibility.stats.regression.fit_logistic import DEFAULT_FORMULA, fit_logistic
from edibility.stats.regression.formula import Formula, parse_formula
from edibility.stats.regression.laplace import LaplaceBackend

EXPECTED_NAMES = (
    "Intercept",
    "definitionPartial",
    "definitionProcessed",
    "ethno_reports",
    "toxicity",
    "processingCooked",
    "processingProcessed",
)


@pytest.fixture(scope="module")
def large_table() -> pl.DataFrame:
    return simulate_species(2000, seed=7)


@pytest.fixture(scope="module")
def fitted(large_table: pl.DataFrame) -> PosteriorSamples:
    return fit_logistic(large_table, sampler_config=SamplerConfig(draws=2000, seed=1))


# ---------------------------------------------------------------------------
# Formula


def test_parse_formula_splits_response_and_terms() -> None:
    formula = parse_formula(DEFAULT_FORMULA)
    assert formula == Formula(
        response="edible",
        terms=("definition", "ethno_reports", "toxicity", "processing"),
    )


def test_parse_formula_tolerates_whitespace() -> None:
    assert parse_formula("  y~a+ b ") == Formula("y", ("a", "b"))


@pytest.mark.parametrize(
    "spec",
    [
        "",
        "edible definition",
        "edible ~ a ~ b",
        "edible ~ ",
        "edible ~ a + a",
        "edible ~ edible + a",
        "edible ~ a-b",
        "~ a",
    ],
)
def test_parse_formula_rejects_malformed(spec: str) -> None:
    with pytest.raises(InputValidationError):
        parse_formula(spec)


# ---------------------------------------------------------------------------
# Design matrix


def test_design_matrix_treatment_codes_categories() -> None:
    df = simulate_species(50, seed=2)
    design = design_matrix(df, parse_formula(DEFAULT_FORMULA))
    assert design.names == EXPECTED_NAMES
    assert design.X.shape == (50, len(EXPECTED_NAMES))
    assert np.all(design.X[:, 0] == 1.0)
    assert set(np.unique(design.X[:, 1:3])) <= {0.0, 1.0}
    # At most one dummy per categorical row
    assert np.all(design.X[:, 1:3].sum(axis=1) <= 1)
    assert np.array_equal(design.X[:, 3], df.get_column("ethno_reports").to_numpy())
    assert np.array_equal(design.y, df.get_column("edible").cast(pl.Float64).to_numpy())


def test_design_matrix_drops_incomplete_rows() -> None:
    df = pl.DataFrame(
        {
            "edible": [True, None, False, True],
            "ethno_reports": [1, 2, None, 4],
        }
    )
    design = design_matrix(df, parse_formula("edible ~ ethno_reports"))
    assert design.X.shape == (2, 2)
    assert design.names == (INTERCEPT, "ethno_reports")
    assert design.y.tolist() == [1.0, 1.0]


def test_design_matrix_uses_observed_levels_for_undeclared_columns() -> None:
    df = pl.DataFrame(
        {"edible": [True, False, True], "habit": ["tree", "herb", "shrub"]}
    )
    design = design_matrix(df, parse_formula("edible ~ habit"))
    assert design.names == (INTERCEPT, "habitshrub", "habittree")


def test_design_matrix_rejects_undeclared_level() -> None:
    df = simulate_species(20, seed=2).with_columns(pl.lit("Boiled").alias("definition"))
    with pytest.raises(InputValidationError, match="Boiled"):
        design_matrix(df, parse_formula(DEFAULT_FORMULA))


def test_design_matrix_requires_boolean_response() -> None:
    df = pl.DataFrame({"edible": [1, 0], "ethno_reports": [1, 2]})
    with pytest.raises(InputValidationError):
        design_matrix(df, parse_formula("edible ~ ethno_reports"))


def test_design_matrix_reports_missing_term() -> None:
    with pytest.raises(InputValidationError, match="habit"):
        design_matrix(simulate_species(5), parse_formula("edible ~ habit"))


# ---------------------------------------------------------------------------
# Laplace backend


def test_fit_logistic_recovers_effect_signs(fitted: PosteriorSamples) -> None:
    assert fitted.names == EXPECTED_NAMES
    assert fitted.draws.shape == (2000, len(EXPECTED_NAMES))
    means = fitted.mean()
    assert means["toxicity"] < 0
    assert means["ethno_reports"] > 0
    assert means["Intercept"] < 0


def test_fit_logistic_draws_are_seeded(large_table: pl.DataFrame) -> None:
    config = SamplerConfig(draws=50, seed=9)
    first = fit_logistic(large_table, sampler_config=config)
    second = fit_logistic(large_table, sampler_config=config)
    np.testing.assert_array_equal(first.draws, second.draws)


def test_summary_has_one_row_per_term(fitted: PosteriorSamples) -> None:
    summary = fitted.summary(mass=0.9)
    assert summary.columns == ["term", "mean", "sd", "hdi_lower", "hdi_upper"]
    assert summary.get_column("term").to_list() == list(EXPECTED_NAMES)
    assert (summary.get_column("hdi_lower") <= summary.get_column("mean")).all()
    assert (summary.get_column("mean") <= summary.get_column("hdi_upper")).all()
    assert (summary.get_column("sd") > 0).all()


def test_predict_proportion_tracks_observed_rate(
    fitted: PosteriorSamples, large_table: pl.DataFrame
) -> None:
    design = design_matrix(large_table, parse_formula(DEFAULT_FORMULA))
    predicted = fitted.predict_proportion(design.X)
    assert predicted.shape == (2000,)
    assert np.all((predicted > 0) & (predicted < 1))
    assert predicted.mean() == pytest.approx(design.y.mean(), abs=0.02)


def test_predict_proportion_checks_columns(fitted: PosteriorSamples) -> None:
    with pytest.raises(InputValidationError):
        fitted.predict_proportion(np.ones((3, 2)))


def test_strong_prior_shrinks_coefficients(large_table: pl.DataFrame) -> None:
    tight = fit_logistic(
        large_table,
        priors=LogisticPriors(intercept_sd=0.001, coefficient_sd=0.001),
        sampler_config=SamplerConfig(draws=200, seed=1),
    )
    assert all(abs(v) < 0.01 for v in tight.mean().values())


def test_laplace_backend_rejects_non_binary_response() -> None:
    X = np.column_stack([np.ones(4), np.arange(4.0)])
    with pytest.raises(InputValidationError):
        LaplaceBackend().fit(
            X,
            np.array([0.0, 1.0, 2.0, 1.0]),
            ("Intercept", "x"),
            LogisticPriors(),
            SamplerConfig(draws=10),
        )


def test_laplace_backend_rejects_mismatched_shapes() -> None:
    with pytest.raises(InputValidationError):
        LaplaceBackend().fit(
            np.ones((4, 2)),
            np.zeros(3),
            ("Intercept", "x"),
            LogisticPriors(),
            SamplerConfig(draws=10),
        )


def test_laplace_backend_reports_failed_mode_search(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_minimize(fun, x0, **kwargs):
        return types.SimpleNamespace(
            x=np.full_like(x0, np.nan), success=False, message="diverged"
        )

    monkeypatch.setattr(
        "edibility.stats.regression.laplace.minimize", broken_minimize
    )
    with pytest.raises(RegressionFitError, match="diverged"):
        LaplaceBackend().fit(
            np.ones((4, 1)),
            np.array([0.0, 1.0, 1.0, 0.0]),
            ("Intercept",),
            LogisticPriors(),
            SamplerConfig(draws=10),
        )


def test_laplace_backend_satisfies_protocol() -> None:
    assert isinstance(LaplaceBackend(), LogisticBackend)


# ---------------------------------------------------------------------------
# Custom backends


class _ModeOnlyBackend:
    """Returns every draw at zero; records what it was given."""

    def __init__(self):
        self.calls = []

    def fit(self, X, y, names, priors, sampler_config):
        self.calls.append((X.shape, names, priors, sampler_config))
        return PosteriorSamples(
            names=names, draws=np.zeros((sampler_config.draws, len(names)))
        )


def test_fit_logistic_accepts_custom_backend() -> None:
    backend = _ModeOnlyBackend()
    samples = fit_logistic(
        simulate_species(30, seed=4),
        "edible ~ toxicity",
        sampler_config=SamplerConfig(draws=5),
        backend=backend,
    )
    assert samples.names == (INTERCEPT, "toxicity")
    assert backend.calls[0][0] == (30, 2)
    assert backend.calls[0][2] == LogisticPriors()
    assert samples.predict_proportion(np.ones((2, 2))).tolist() == [0.5] * 5


def test_fit_logistic_rejects_object_without_fit() -> None:
    with pytest.raises(InputValidationError):
        fit_logistic(simulate_species(10), backend=object())


@pytest.mark.parametrize("kwargs", [{"intercept_sd": 0}, {"coefficient_sd": -1}])
def test_logistic_priors_must_be_positive(kwargs: dict) -> None:
    with pytest.raises(InputValidationError):
        LogisticPriors(**kwargs)


def test_sampler_config_needs_two_draws() -> None:
    with pytest.raises(InputValidationError):
        SamplerConfig(draws=1)


def test_posterior_samples_validates_shape() -> None:
    with pytest.raises(InputValidationError):
        PosteriorSamples(names=("a", "b"), draws=np.zeros((10, 3)))

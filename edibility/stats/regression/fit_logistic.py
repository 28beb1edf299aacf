"""Fit a Bayesian logistic regression on a species table."""

__all__ = ["fit_logistic", "DEFAULT_FORMULA"]

import polars as pl

from edibility.core.errors import InputValidationError

from .backend import LogisticBackend, LogisticPriors, PosteriorSamples, SamplerConfig
from .design import design_matrix
from .formula import Formula, parse_formula
from .laplace import LaplaceBackend

DEFAULT_FORMULA = "edible ~ definition + ethno_reports + toxicity + processing"


def fit_logistic(
    data: pl.DataFrame,
    formula_spec: str | Formula = DEFAULT_FORMULA,
    priors: LogisticPriors | None = None,
    sampler_config: SamplerConfig | None = None,
    backend: LogisticBackend | None = None,
) -> PosteriorSamples:
    """
    Posterior draws of logistic regression coefficients.

    Args:
        data: Species table
        formula_spec: Formula string or parsed Formula
        priors: Coefficient priors (defaults to LogisticPriors())
        sampler_config: Draw count and seed (defaults to SamplerConfig())
        backend: Any LogisticBackend (defaults to LaplaceBackend())

    Returns:
        PosteriorSamples with one column per design-matrix term

    Example:
        >>> samples = fit_logistic(simulate_species(200))
        >>> samples.summary()  # term, mean, sd, hdi_lower, hdi_upper
    """
    formula = (
        formula_spec if isinstance(formula_spec, Formula) else parse_formula(formula_spec)
    )
    backend = backend or LaplaceBackend()
    if not isinstance(backend, LogisticBackend):
        raise InputValidationError(f"{type(backend).__name__} has no fit() method")

    design = design_matrix(data, formula)
    return backend.fit(
        design.X,
        design.y,
        design.names,
        priors or LogisticPriors(),
        sampler_config or SamplerConfig(),
    )

"""
Posterior-to-estimate pipeline.

    counts → posterior_update → hdi → extrapolate → format_summary

Every stage receives its inputs as arguments; the config mapping only
supplies values, it is never mutated.
"""

__all__ = [
    "EstimateResult",
    "estimate_edible_proportion",
    "estimate_from_table",
    "species_table",
]

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import polars as pl

from edibility.core.config import DEFAULT_CONFIG, EstimateConfigDict
from edibility.core.models import (
    CredibleInterval,
    EdibleEstimate,
    OutcomeCounts,
    PosteriorParameters,
)
from edibility.data.species.count_outcomes import count_outcomes
from edibility.data.species.load import load_species
from edibility.data.species.schema import OUTCOME_COLUMN
from edibility.data.species.simulate import simulate_species
from edibility.stats.bayesian.beta import posterior_update
from edibility.stats.bayesian.extrapolate import extrapolate, format_summary
from edibility.stats.bayesian.hdi import hdi


@dataclass(frozen=True)
class EstimateResult:
    """Outputs of every pipeline stage for one run."""

    counts: OutcomeCounts
    posterior: PosteriorParameters
    interval: CredibleInterval
    estimate: EdibleEstimate
    summary: str

    def to_dict(self) -> dict[str, Any]:
        """Structured result with percentages and per-bound species ranges."""
        return {
            "mean_percentage": self.estimate.mean_percentage,
            "credible_interval_percentage": self.estimate.credible_percentage,
            "total_edible_species_range": dict(
                self.estimate.total_edible_species_range
            ),
        }


def estimate_edible_proportion(
    counts: OutcomeCounts,
    config: EstimateConfigDict = DEFAULT_CONFIG,
) -> EstimateResult:
    """
    Run the conjugate estimate on aggregate counts.

    Args:
        counts: Observed trials and edible successes
        config: Prior, interval and population settings

    Returns:
        EstimateResult

    Example:
        >>> result = estimate_edible_proportion(OutcomeCounts(200, 40))
        >>> result.posterior
        PosteriorParameters(alpha=50.0, beta=250.0)
    """
    prior = config["prior"]
    interval_cfg = config["interval"]
    population = config["population"]

    posterior = posterior_update(
        prior["alpha"],
        prior["beta"],
        trials=counts.trials,
        successes=counts.successes,
    )
    logging.info(
        f"Prior {prior['name']} Beta({prior['alpha']:g}, {prior['beta']:g}) → "
        f"posterior Beta({posterior.alpha:g}, {posterior.beta:g})"
    )

    interval = hdi(
        posterior,
        mass=interval_cfg["mass"],
        method=interval_cfg["method"],
        n_samples=interval_cfg["n_samples"],
        seed=interval_cfg["seed"],
    )
    estimate = extrapolate(
        posterior.mean,
        interval,
        species_bounds=(
            population["lower_bound_species"],
            population["upper_bound_species"],
        ),
    )
    summary = format_summary(estimate, mass=interval.mass)
    logging.info(summary)

    return EstimateResult(
        counts=counts,
        posterior=posterior,
        interval=interval,
        estimate=estimate,
        summary=summary,
    )


def estimate_from_table(
    df: pl.DataFrame,
    config: EstimateConfigDict = DEFAULT_CONFIG,
    outcome_column: str = OUTCOME_COLUMN,
) -> EstimateResult:
    """Count outcomes in a species table, then run the estimate."""
    return estimate_edible_proportion(
        count_outcomes(df, outcome_column=outcome_column),
        config=config,
    )


def species_table(
    config: EstimateConfigDict = DEFAULT_CONFIG,
    path: Optional[str | Path] = None,
    **load_options: str,
) -> pl.DataFrame:
    """
    Load the species table at ``path``, or simulate one when no path is given.

    Args:
        config: Supplies the simulation size and seed
        path: Delimited species file; None or a blank string means simulate
        **load_options: Passed to load_species (separator, id_column,
            outcome_column)
    """
    if path is None or not str(path).strip():
        logging.info("No data given, simulating species table")
        return simulate_species(
            n=config["simulation"]["n_species"],
            seed=config["simulation"]["seed"],
        )
    return load_species(str(path).strip(), **load_options)

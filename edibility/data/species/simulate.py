"""Simulate a species table with a known edibility model."""

__all__ = ["SimulationEffects", "simulate_species"]

import logging
from dataclasses import dataclass, field

import numpy as np
import polars as pl
from scipy.special import expit

from edibility.core.errors import InputValidationError

from .schema import (
    DEFINITION_COLUMN,
    DEFINITION_LEVELS,
    ETHNO_REPORTS_COLUMN,
    ID_COLUMN,
    OUTCOME_COLUMN,
    PROCESSING_COLUMN,
    PROCESSING_LEVELS,
    TOXICITY_COLUMN,
)


@dataclass(frozen=True)
class SimulationEffects:
    """Log-odds effects used to draw the edibility outcome."""

    intercept: float = -2.0
    # Per level, relative to the first level
    definition: dict[str, float] = field(
        default_factory=lambda: {"Partial": 0.5, "Processed": 1.0}
    )
    ethno_reports: float = 0.15
    toxicity: float = -1.5
    processing: dict[str, float] = field(
        default_factory=lambda: {"Cooked": 0.4, "Processed": 0.8}
    )
    # Mean of the Poisson report count
    reports_rate: float = 3.0
    toxicity_rate: float = 0.2


def simulate_species(
    n: int = 200,
    seed: int | None = 123,
    effects: SimulationEffects | None = None,
) -> pl.DataFrame:
    """
    Draw a synthetic species table.

    Attributes are drawn independently (uniform categories, Poisson report
    counts, Bernoulli toxicity); the outcome is Bernoulli with a logistic
    link over those attributes.

    Args:
        n: Number of species
        seed: Seed for the generator
        effects: Log-odds effects (defaults to SimulationEffects())

    Returns:
        DataFrame with columns species_id, definition, ethno_reports,
        toxicity, processing, edible

    Example:
        >>> df = simulate_species(200, seed=123)
        >>> df.height
        200
    """
    if n <= 0:
        raise InputValidationError(f"n must be positive, got {n}")
    effects = effects or SimulationEffects()
    rng = np.random.default_rng(seed)

    definition = rng.choice(DEFINITION_LEVELS, size=n)
    ethno_reports = rng.poisson(effects.reports_rate, size=n)
    toxicity = rng.random(n) < effects.toxicity_rate
    processing = rng.choice(PROCESSING_LEVELS, size=n)

    log_odds = (
        effects.intercept
        + np.array([effects.definition.get(d, 0.0) for d in definition])
        + effects.ethno_reports * ethno_reports
        + effects.toxicity * toxicity
        + np.array([effects.processing.get(p, 0.0) for p in processing])
    )
    edible = rng.random(n) < expit(log_odds)

    df = pl.DataFrame(
        {
            ID_COLUMN: [f"sp{i:04d}" for i in range(1, n + 1)],
            DEFINITION_COLUMN: definition.tolist(),
            ETHNO_REPORTS_COLUMN: ethno_reports.astype(np.int64),
            TOXICITY_COLUMN: toxicity,
            PROCESSING_COLUMN: processing.tolist(),
            OUTCOME_COLUMN: edible,
        }
    )
    logging.info(f"Simulated {df.height:,} species (seed={seed})")
    return df

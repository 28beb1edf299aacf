"""
Population extrapolation of a posterior proportion.

Maps the posterior mean and credible interval of the edible proportion onto
the total number of vascular plant species, given as a (lower, upper) range
of estimates.
"""

__all__ = ["extrapolate", "format_summary", "DEFAULT_SPECIES_BOUNDS"]

import math
from typing import Final

from edibility.core.errors import InputValidationError
from edibility.core.models import CredibleInterval, EdibleEstimate

# Estimates of described vascular plant species worldwide
DEFAULT_SPECIES_BOUNDS: Final[tuple[int, int]] = (342_000, 369_000)


def _check_proportion(name: str, value: float) -> float:
    if not math.isfinite(value) or not (0.0 <= value <= 1.0):
        raise InputValidationError(f"{name} must be in [0, 1], got {value}")
    return float(value)


def _check_bounds(species_bounds: tuple[int, int]) -> tuple[int, int]:
    if len(species_bounds) != 2:
        raise InputValidationError(
            f"species_bounds must be a (lower, upper) pair, got {species_bounds!r}",
        )
    lower, upper = species_bounds
    if not (0 < lower <= upper):
        raise InputValidationError(
            f"Species bounds must satisfy 0 < lower <= upper, got ({lower}, {upper})",
        )
    return lower, upper


def extrapolate(
    mean_proportion: float,
    interval: CredibleInterval | tuple[float, float],
    species_bounds: tuple[int, int] = DEFAULT_SPECIES_BOUNDS,
) -> EdibleEstimate:
    """
    Convert a posterior proportion into percentages and species counts.

    For each species bound N the credible interval [L, U] gives the absolute
    range (L × N, U × N); the posterior mean gives the expected count.
    Results are keyed by N, so equal bounds give a single entry and one
    range instead of two.

    Args:
        mean_proportion: Posterior mean α / (α + β)
        interval: Credible interval on the proportion scale
        species_bounds: (lower, upper) estimates of total species

    Returns:
        EdibleEstimate with percentages and per-bound counts

    Example:
        >>> est = extrapolate(50 / 300, (0.13, 0.21))
        >>> round(est.mean_percentage, 2)
        16.67
        >>> round(est.expected_edible[342_000])
        57000
    """
    mean = _check_proportion("mean_proportion", mean_proportion)
    if isinstance(interval, CredibleInterval):
        lower, upper = interval.lower, interval.upper
    else:
        lower, upper = interval
    lower = _check_proportion("interval lower bound", lower)
    upper = _check_proportion("interval upper bound", upper)
    if lower > upper:
        raise InputValidationError(
            f"Interval lower bound {lower} exceeds upper bound {upper}",
        )
    bounds = _check_bounds(species_bounds)

    return EdibleEstimate(
        mean_percentage=mean * 100,
        credible_percentage=(lower * 100, upper * 100),
        total_edible_species_range={n: (lower * n, upper * n) for n in bounds},
        expected_edible={n: mean * n for n in bounds},
    )


def format_summary(estimate: EdibleEstimate, mass: float = 0.95) -> str:
    """
    Render an estimate as one sentence.

    Percentages carry two decimals and species counts none.
    """
    lo_pct, hi_pct = estimate.credible_percentage
    n_low, n_high = estimate.species_bounds[0], estimate.species_bounds[-1]
    low_range = estimate.total_edible_species_range[n_low]
    high_range = estimate.total_edible_species_range[n_high]

    return (
        f"The estimated proportion of edible vascular plant species is "
        f"{estimate.mean_percentage:.2f}% "
        f"({mass:.0%} credible interval: {lo_pct:.2f}% to {hi_pct:.2f}%). "
        f"Assuming {n_low:.0f} to {n_high:.0f} vascular plant species in total, "
        f"this corresponds to between {low_range[0]:.0f} and {low_range[1]:.0f} "
        f"edible species for {n_low:.0f} species, and between "
        f"{high_range[0]:.0f} and {high_range[1]:.0f} edible species "
        f"for {n_high:.0f} species."
    )

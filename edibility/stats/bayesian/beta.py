"""
Beta distribution utilities for Bayesian inference on a binomial proportion.

Provides computations for Beta posterior distributions including:
- Conjugate Beta-Binomial update from aggregate counts
- Equal-tailed credible intervals
"""

__all__ = ["posterior_update", "credible_interval"]

import math
import numbers

from scipy.special import betaincinv

from edibility.core.errors import InputValidationError
from edibility.core.models import PosteriorParameters


def _check_count(name: str, value) -> int:
    if isinstance(value, bool):
        raise InputValidationError(f"{name} must be an integer, got {value!r}")
    if not isinstance(value, numbers.Integral):
        if isinstance(value, numbers.Real) and float(value).is_integer():
            value = int(value)
        else:
            raise InputValidationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InputValidationError(f"{name} must be non-negative, got {value}")
    return int(value)


def posterior_update(
    alpha_prior: float,
    beta_prior: float,
    trials: int,
    successes: int,
) -> PosteriorParameters:
    """
    Conjugate Beta-Binomial update.

        α_post = α_prior + successes
        β_post = β_prior + trials - successes

    Args:
        alpha_prior: Prior pseudo-count of successes (> 0)
        beta_prior: Prior pseudo-count of failures (> 0)
        trials: Number of species observed
        successes: Number of edible species among them

    Returns:
        Posterior Beta parameters

    Raises:
        InputValidationError: Non-positive priors, negative or non-integral
            counts, or successes > trials

    Example:
        >>> posterior_update(10, 90, trials=200, successes=40)
        PosteriorParameters(alpha=50.0, beta=250.0)
    """
    for name, value in (("alpha_prior", alpha_prior), ("beta_prior", beta_prior)):
        if not math.isfinite(value) or value <= 0:
            raise InputValidationError(f"{name} must be positive, got {value}")

    n = _check_count("trials", trials)
    k = _check_count("successes", successes)
    if k > n:
        raise InputValidationError(
            f"successes ({k}) cannot exceed trials ({n})",
        )

    return PosteriorParameters(
        alpha=float(alpha_prior) + k,
        beta=float(beta_prior) + (n - k),
    )


def credible_interval(
    params: PosteriorParameters,
    probability: float = 0.95,
) -> tuple[float, float]:
    """
    Compute equal-tailed credible interval for Beta(α, β).

    Returns the interval [L, U] such that:
        P(θ < L) = (1 - probability) / 2
        P(θ > U) = (1 - probability) / 2

    For skewed posteriors this is wider than the HDI; it is kept for
    comparison with ``edibility.stats.bayesian.hdi``.
    """
    if not isinstance(params, PosteriorParameters):
        raise InputValidationError(
            f"Expected PosteriorParameters, got {type(params).__name__}",
        )
    if not (0 < probability < 1):
        raise InputValidationError(
            f"probability must be in (0, 1), got {probability}",
        )
    tail = (1 - probability) / 2
    lower = float(betaincinv(params.alpha, params.beta, tail))
    upper = float(betaincinv(params.alpha, params.beta, 1 - tail))
    return lower, upper


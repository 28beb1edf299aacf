"""
Highest-density credible intervals for Beta posteriors.

Two interchangeable strategies:

- sampling: draw from Beta(α, β) with an explicit seed and take the narrowest
  window over the sorted draws holding the requested mass. The error of each
  bound shrinks as 1/√n; 10,000 draws is the default.
- analytic: minimize the interval width F⁻¹(p + m) - F⁻¹(p) over the lower
  tail probability p, using the inverse regularized incomplete beta function.
  Deterministic, and exact for unimodal posteriors.
"""

__all__ = [
    "hdi",
    "hdi_from_samples",
    "hdi_beta",
    "interval_mass",
]

import logging
import math

import numpy as np
from scipy.optimize import minimize_scalar
from scipy.special import betainc, betaincinv

from edibility.core.errors import InputValidationError
from edibility.core.models import CredibleInterval, PosteriorParameters

from .sample import sample_posterior

_METHODS = ("sampling", "analytic")


def _check_mass(mass: float) -> float:
    if not (0 < mass < 1):
        raise InputValidationError(f"mass must be in (0, 1), got {mass}")
    return float(mass)


def hdi_from_samples(
    samples: np.ndarray,
    mass: float = 0.95,
) -> tuple[float, float]:
    """
    Compute the empirical highest-density interval of a sample.

    The interval spans ceil(mass × n) sorted draws and is the narrowest such
    window.

    Args:
        samples: 1-D array of draws
        mass: Probability mass inside the interval

    Returns:
        Tuple of (lower, upper)

    Example:
        >>> hdi_from_samples(np.array([0.1, 0.2, 0.3, 0.4, 0.9]), mass=0.8)
        (0.1, 0.4)
    """
    mass = _check_mass(mass)
    ordered = np.sort(np.asarray(samples, dtype=float).ravel())
    n = ordered.size
    if n < 2:
        raise InputValidationError(f"Need at least 2 samples, got {n}")
    if not np.all(np.isfinite(ordered)):
        raise InputValidationError("Samples contain non-finite values")

    n_inside = min(n, max(2, math.ceil(mass * n)))
    widths = ordered[n_inside - 1 :] - ordered[: n - n_inside + 1]
    start = int(np.argmin(widths))
    return float(ordered[start]), float(ordered[start + n_inside - 1])


def hdi_beta(
    params: PosteriorParameters,
    mass: float = 0.95,
) -> tuple[float, float]:
    """
    Compute the highest-density interval of Beta(α, β) numerically.

    For J-shaped posteriors (α ≤ 1 or β ≤ 1) the optimum sits on the boundary
    of [0, 1 - mass], which the bounded search reaches.
    """
    mass = _check_mass(mass)
    a, b = params.alpha, params.beta

    def width(p: float) -> float:
        return float(betaincinv(a, b, min(p + mass, 1.0)) - betaincinv(a, b, p))

    result = minimize_scalar(
        width,
        bounds=(0.0, 1.0 - mass),
        method="bounded",
        options={"xatol": 1e-10},
    )
    p_lower = float(result.x)
    # bounded search never evaluates the end points exactly
    for edge in (0.0, 1.0 - mass):
        if width(edge) < width(p_lower):
            p_lower = edge

    lower = float(betaincinv(a, b, p_lower))
    upper = float(betaincinv(a, b, min(p_lower + mass, 1.0)))
    return lower, upper


def interval_mass(
    params: PosteriorParameters,
    lower: float,
    upper: float,
) -> float:
    """Exact probability of [lower, upper] under Beta(α, β)."""
    lo = min(max(lower, 0.0), 1.0)
    hi = min(max(upper, 0.0), 1.0)
    a, b = params.alpha, params.beta
    return float(betainc(a, b, hi) - betainc(a, b, lo))


def hdi(
    params: PosteriorParameters,
    mass: float = 0.95,
    method: str = "sampling",
    n_samples: int = 10_000,
    seed: int | None = 123,
) -> CredibleInterval:
    """
    Highest-density credible interval of a Beta posterior.

    Args:
        params: Posterior Beta parameters
        mass: Probability mass inside the interval, in (0, 1)
        method: "sampling" or "analytic"
        n_samples: Number of draws for the sampling method
        seed: Seed for the sampling method

    Returns:
        CredibleInterval recording the method and draw count used

    Example:
        >>> ci = hdi(PosteriorParameters(50, 250), 0.95, seed=123)
        >>> # roughly (0.126, 0.209)
    """
    mass = _check_mass(mass)
    if method not in _METHODS:
        raise InputValidationError(
            f"Unknown interval method {method!r}, expected one of {_METHODS}",
        )

    if method == "analytic":
        lower, upper = hdi_beta(params, mass)
        interval = CredibleInterval(lower, upper, mass, method="analytic")
    else:
        draws = sample_posterior(params, n_samples=n_samples, seed=seed)
        lower, upper = hdi_from_samples(draws, mass)
        interval = CredibleInterval(
            lower, upper, mass, method="sampling", n_samples=int(n_samples)
        )

    logging.debug(
        f"HDI {mass:.0%} ({method}): [{interval.lower:.4f}, {interval.upper:.4f}]"
    )
    return interval

"""Draw samples from a Beta posterior."""

__all__ = ["sample_posterior"]

import numpy as np

from edibility.core.errors import InputValidationError
from edibility.core.models import PosteriorParameters


def sample_posterior(
    params: PosteriorParameters,
    n_samples: int = 10_000,
    seed: int | None = 123,
) -> np.ndarray:
    """
    Draw independent samples from Beta(α, β).

    A fresh generator is built from ``seed`` on every call, so the same seed
    always returns the same draws.
    """
    if n_samples < 2:
        raise InputValidationError(f"n_samples must be at least 2, got {n_samples}")
    rng = np.random.default_rng(seed)
    return rng.beta(params.alpha, params.beta, size=int(n_samples))

"""
Logistic regression capability interface.

A backend turns a design matrix and priors into posterior draws of the
coefficients. The conjugate Beta-Binomial path never depends on it.
"""

__all__ = [
    "LogisticPriors",
    "SamplerConfig",
    "PosteriorSamples",
    "LogisticBackend",
]

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
import polars as pl
from scipy.special import expit

from edibility.core.errors import InputValidationError
from edibility.stats.bayesian.hdi import hdi_from_samples


@dataclass(frozen=True)
class LogisticPriors:
    """Independent Normal(0, sd) priors on the log-odds scale."""

    # Weakly informative scale (Gelman et al., 2008)
    intercept_sd: float = 2.5
    coefficient_sd: float = 2.5

    def __post_init__(self):
        if self.intercept_sd <= 0 or self.coefficient_sd <= 0:
            raise InputValidationError("Prior standard deviations must be positive")

    def scales(self, n_coefficients: int) -> np.ndarray:
        """Prior sd per column, intercept first."""
        sd = np.full(n_coefficients, self.coefficient_sd, dtype=float)
        sd[0] = self.intercept_sd
        return sd


@dataclass(frozen=True)
class SamplerConfig:
    """Number of posterior draws and the seed used to produce them."""

    draws: int = 4000
    seed: int | None = 123

    def __post_init__(self):
        if self.draws < 2:
            raise InputValidationError(f"draws must be at least 2, got {self.draws}")


@dataclass(frozen=True)
class PosteriorSamples:
    """Posterior draws of regression coefficients, one column per term."""

    names: tuple[str, ...]
    draws: np.ndarray

    def __post_init__(self):
        if self.draws.ndim != 2 or self.draws.shape[1] != len(self.names):
            raise InputValidationError(
                f"draws shape {self.draws.shape} does not match {len(self.names)} names",
            )

    def mean(self) -> dict[str, float]:
        return dict(zip(self.names, self.draws.mean(axis=0).tolist()))

    def summary(self, mass: float = 0.95) -> pl.DataFrame:
        """Posterior mean, sd and HDI per term."""
        intervals = [
            hdi_from_samples(self.draws[:, j], mass) for j in range(len(self.names))
        ]
        return pl.DataFrame(
            {
                "term": list(self.names),
                "mean": self.draws.mean(axis=0),
                "sd": self.draws.std(axis=0, ddof=1),
                "hdi_lower": [lo for lo, _ in intervals],
                "hdi_upper": [hi for _, hi in intervals],
            }
        )

    def predict_proportion(self, X: np.ndarray) -> np.ndarray:
        """
        Posterior draws of the mean predicted probability over the rows of X.
        """
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != len(self.names):
            raise InputValidationError(
                f"X must have {len(self.names)} columns, got shape {X.shape}",
            )
        return expit(self.draws @ X.T).mean(axis=1)


@runtime_checkable
class LogisticBackend(Protocol):
    """Anything that can fit a Bayesian logistic regression."""

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        names: tuple[str, ...],
        priors: LogisticPriors,
        sampler_config: SamplerConfig,
    ) -> PosteriorSamples: ...

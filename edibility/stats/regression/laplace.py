"""
Laplace approximation backend for Bayesian logistic regression.

The posterior is approximated by a multivariate normal centred on its mode,
with covariance equal to the inverse Hessian of the negative log posterior:

    -log p(w | X, y) = Σ [log(1 + exp(x·w)) - y (x·w)] + Σ w² / (2 sd²)
    gradient         = Xᵀ (σ(Xw) - y) + w / sd²
    Hessian          = Xᵀ diag(σ(1 - σ)) X + diag(1 / sd²)
"""

__all__ = ["LaplaceBackend"]

import logging

import numpy as np
from scipy.optimize import minimize
from scipy.special import expit

from edibility.core.errors import InputValidationError, RegressionFitError

from .backend import LogisticPriors, PosteriorSamples, SamplerConfig


class LaplaceBackend:
    """Fit by mode finding plus a normal approximation."""

    def __init__(self, method: str = "BFGS", gtol: float = 1e-8):
        self.method = method
        self.gtol = gtol

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        names: tuple[str, ...],
        priors: LogisticPriors,
        sampler_config: SamplerConfig,
    ) -> PosteriorSamples:
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)
        if X.ndim != 2 or X.shape[0] != y.shape[0] or X.shape[1] != len(names):
            raise InputValidationError(
                f"Inconsistent shapes: X {X.shape}, y {y.shape}, {len(names)} names",
            )
        if not np.isin(y, (0.0, 1.0)).all():
            raise InputValidationError("Response must be 0/1")

        precision = 1.0 / priors.scales(X.shape[1]) ** 2

        def objective(w: np.ndarray) -> tuple[float, np.ndarray]:
            eta = X @ w
            nll = np.sum(np.logaddexp(0.0, eta) - y * eta)
            penalty = 0.5 * np.sum(precision * w**2)
            grad = X.T @ (expit(eta) - y) + precision * w
            return nll + penalty, grad

        result = minimize(
            objective,
            x0=np.zeros(X.shape[1]),
            jac=True,
            method=self.method,
            options={"gtol": self.gtol, "maxiter": 1000},
        )
        if not np.all(np.isfinite(result.x)):
            raise RegressionFitError(f"Mode search failed: {result.message}")
        if not result.success:
            logging.warning(f"Mode search did not fully converge: {result.message}")

        mode = result.x
        p = expit(X @ mode)
        hessian = (X * (p * (1 - p))[:, None]).T @ X + np.diag(precision)
        try:
            covariance = np.linalg.inv(hessian)
        except np.linalg.LinAlgError as e:
            raise RegressionFitError("Hessian at the posterior mode is singular") from e
        covariance = (covariance + covariance.T) / 2

        rng = np.random.default_rng(sampler_config.seed)
        draws = rng.multivariate_normal(mode, covariance, size=sampler_config.draws)
        logging.info(
            f"Laplace fit: {X.shape[0]} rows, {X.shape[1]} terms, "
            f"{sampler_config.draws} draws"
        )
        return PosteriorSamples(names=tuple(names), draws=draws)

"""Error types raised by the estimator."""

__all__ = ["InputValidationError", "ExternalFetchError", "RegressionFitError"]


class InputValidationError(ValueError):
    """Invalid counts, probabilities, parameters, bounds or columns."""


class ExternalFetchError(RuntimeError):
    """Network, HTTP or parse failure while fetching an external page."""


class RegressionFitError(RuntimeError):
    """Posterior mode or curvature could not be computed."""

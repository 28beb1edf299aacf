"""
Core configuration, models and errors for the edibility estimator.

This module provides the foundational types used throughout the package.
"""

from .config import (
    DEFAULT_CONFIG,
    DEFAULT_PRIOR,
    PRIOR_PRESETS,
    EstimateConfigDict,
    build_config,
    resolve_prior,
)
from .errors import ExternalFetchError, InputValidationError, RegressionFitError
from .models import (
    CredibleInterval,
    EdibleEstimate,
    OutcomeCounts,
    PosteriorParameters,
    SpeciesRecord,
)

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "DEFAULT_PRIOR",
    "PRIOR_PRESETS",
    "EstimateConfigDict",
    "build_config",
    "resolve_prior",
    # Errors
    "InputValidationError",
    "ExternalFetchError",
    "RegressionFitError",
    # Models
    "SpeciesRecord",
    "OutcomeCounts",
    "PosteriorParameters",
    "CredibleInterval",
    "EdibleEstimate",
]

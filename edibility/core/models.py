"""
Data models shared across the estimate pipeline.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from .errors import InputValidationError

__all__ = [
    "SpeciesRecord",
    "OutcomeCounts",
    "PosteriorParameters",
    "CredibleInterval",
    "EdibleEstimate",
]


@dataclass(frozen=True)
class SpeciesRecord:
    """One species row of the analysis table."""

    species_id: str
    definition: str
    ethno_reports: int
    toxicity: bool
    processing: str
    edible: bool


@dataclass(frozen=True)
class OutcomeCounts:
    """Aggregate binomial counts over a species table."""

    trials: int
    successes: int

    def __post_init__(self):
        if self.trials < 0 or self.successes < 0:
            raise InputValidationError(
                f"Counts must be non-negative, got trials={self.trials}, "
                f"successes={self.successes}",
            )
        if self.successes > self.trials:
            raise InputValidationError(
                f"successes ({self.successes}) cannot exceed trials ({self.trials})",
            )

    @property
    def failures(self) -> int:
        return self.trials - self.successes


@dataclass(frozen=True)
class PosteriorParameters:
    """Shape parameters of a Beta(α, β) posterior."""

    alpha: float
    beta: float

    def __post_init__(self):
        for name, value in (("alpha", self.alpha), ("beta", self.beta)):
            if not math.isfinite(value) or value <= 0:
                raise InputValidationError(f"{name} must be positive, got {value}")

    @property
    def mean(self) -> float:
        """Posterior mean α / (α + β)."""
        return self.alpha / (self.alpha + self.beta)


@dataclass(frozen=True)
class CredibleInterval:
    """Credible interval on the proportion scale."""

    lower: float
    upper: float
    mass: float
    method: str = "sampling"
    n_samples: Optional[int] = None

    def __post_init__(self):
        if not (0.0 <= self.lower <= self.upper <= 1.0):
            raise InputValidationError(
                f"Interval must satisfy 0 <= lower <= upper <= 1, "
                f"got [{self.lower}, {self.upper}]",
            )

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class EdibleEstimate:
    """Posterior estimate expressed as percentages and species counts.

    Ranges and expected counts are keyed by total species count; equal
    lower and upper bounds share one key.
    """

    mean_percentage: float
    credible_percentage: tuple[float, float]
    total_edible_species_range: dict[int, tuple[float, float]] = field(
        default_factory=dict
    )
    expected_edible: dict[int, float] = field(default_factory=dict)

    @property
    def species_bounds(self) -> tuple[int, ...]:
        return tuple(sorted(self.total_edible_species_range))

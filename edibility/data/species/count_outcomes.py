"""Reduce a species table to binomial counts."""

__all__ = ["count_outcomes"]

import logging

import polars as pl

from edibility.core.errors import InputValidationError
from edibility.core.models import OutcomeCounts

from .schema import OUTCOME_COLUMN


def count_outcomes(
    df: pl.DataFrame,
    outcome_column: str = OUTCOME_COLUMN,
) -> OutcomeCounts:
    """
    Count species with a known outcome (trials) and edible ones (successes).

    Rows with a null outcome are not counted.
    """
    if outcome_column not in df.columns:
        raise InputValidationError(
            f"Missing outcome column {outcome_column!r}\n"
            f"  Available: {sorted(df.columns)}",
        )
    outcome = df.get_column(outcome_column)
    if outcome.dtype != pl.Boolean:
        raise InputValidationError(
            f"Outcome column {outcome_column!r} must be boolean, got {outcome.dtype}",
        )

    known = outcome.drop_nulls()
    counts = OutcomeCounts(trials=known.len(), successes=int(known.sum()))
    if known.len() < outcome.len():
        logging.info(f"Skipped {outcome.len() - known.len()} species without outcome")
    logging.info(f"Outcomes: {counts.successes}/{counts.trials} edible")
    return counts

"""Build a numeric design matrix from a species table."""

__all__ = ["DesignMatrix", "design_matrix"]

import logging
from dataclasses import dataclass

import numpy as np
import polars as pl

from edibility.core.errors import InputValidationError
from edibility.data.species.load import validate_columns
from edibility.data.species.schema import CATEGORY_LEVELS

from .formula import Formula

INTERCEPT = "Intercept"


@dataclass(frozen=True)
class DesignMatrix:
    """Predictor matrix X, binary response y and column names."""

    X: np.ndarray
    y: np.ndarray
    names: tuple[str, ...]


def _levels(series: pl.Series, declared: dict[str, tuple[str, ...]]) -> list[str]:
    observed = series.drop_nulls().unique().sort().to_list()
    if series.name not in declared:
        return observed
    levels = list(declared[series.name])
    extra = sorted(set(observed) - set(levels))
    if extra:
        raise InputValidationError(
            f"Column {series.name!r} has values {extra} outside {levels}",
        )
    return levels


def design_matrix(
    df: pl.DataFrame,
    formula: Formula,
    levels: dict[str, tuple[str, ...]] | None = None,
) -> DesignMatrix:
    """
    Encode formula terms as numeric columns.

    - intercept column of ones
    - text/categorical columns: treatment coding against the first level
      (declared levels from ``levels``, else sorted observed values)
    - boolean columns: 0/1
    - numeric columns: as-is

    Rows with a null in the response or any term are dropped.
    """
    declared = CATEGORY_LEVELS if levels is None else levels
    validate_columns(df, [formula.response, *formula.terms], name="design matrix")

    used = df.select([formula.response, *formula.terms]).drop_nulls()
    if used.height < df.height:
        logging.info(f"Dropped {df.height - used.height} rows with missing values")
    if used.is_empty():
        raise InputValidationError("No complete rows left for model fitting")

    response = used.get_column(formula.response)
    if response.dtype != pl.Boolean:
        raise InputValidationError(
            f"Response {formula.response!r} must be boolean, got {response.dtype}",
        )

    columns = [np.ones(used.height)]
    names = [INTERCEPT]
    for term in formula.terms:
        series = used.get_column(term)
        if series.dtype == pl.Boolean:
            columns.append(series.cast(pl.Float64).to_numpy())
            names.append(term)
        elif series.dtype.is_numeric():
            columns.append(series.cast(pl.Float64).to_numpy())
            names.append(term)
        elif series.dtype in (pl.Utf8, pl.Categorical) or isinstance(
            series.dtype, pl.Enum
        ):
            series = series.cast(pl.Utf8)
            for level in _levels(series, declared)[1:]:
                columns.append((series == level).cast(pl.Float64).to_numpy())
                names.append(f"{term}{level}")
        else:
            raise InputValidationError(
                f"Unsupported dtype {series.dtype} for term {term!r}",
            )

    X = np.column_stack(columns)
    y = response.cast(pl.Float64).to_numpy()
    return DesignMatrix(X=X, y=y, names=tuple(names))

"""Load a species table from a delimited file."""

__all__ = ["validate_columns", "normalize_outcome", "load_species"]

import logging
from collections.abc import Iterable
from pathlib import Path

import polars as pl

from edibility.core.errors import InputValidationError

from .schema import (
    CATEGORY_LEVELS,
    ETHNO_REPORTS_COLUMN,
    ID_COLUMN,
    OUTCOME_COLUMN,
    TOXICITY_COLUMN,
)

# Keys are lower-cased, stripped cell values
_BOOLEAN_VALUES: dict[str, bool | None] = {
    "true": True,
    "t": True,
    "yes": True,
    "y": True,
    "1": True,
    "false": False,
    "f": False,
    "no": False,
    "n": False,
    "0": False,
    "": None,
    "na": None,
}

# Labels produced by the Wikipedia classifier
_LABEL_VALUES: dict[str, bool | None] = {
    "edible": True,
    "toxic": False,
    "unknown": None,
}


def validate_columns(
    df: pl.DataFrame,
    required: Iterable[str],
    name: str,
) -> pl.DataFrame:
    """Validate dataframe has required columns with helpful error messages."""
    missing = set(required) - set(df.columns)
    if missing:
        raise InputValidationError(
            f"{name}: Missing columns {sorted(missing)}\n"
            f"  Available: {sorted(df.columns)}\n"
            f"  Required: {sorted(required)}",
        )
    logging.debug(f"{name}: ✓ {df.height:,} rows")
    return df


def normalize_outcome(
    df: pl.DataFrame,
    column: str,
    allow_labels: bool = True,
) -> pl.DataFrame:
    """
    Cast a text column of yes/no style values to Boolean.

    Accepts true/false, yes/no, 1/0 and, when ``allow_labels`` is set, the
    classifier labels edible/toxic/unknown. Empty cells become null.
    """
    mapping = dict(_BOOLEAN_VALUES)
    if allow_labels:
        mapping.update(_LABEL_VALUES)

    key = pl.col(column).cast(pl.Utf8).str.strip_chars().str.to_lowercase()
    unknown = (
        df.select(key.alias("value"))
        .filter(pl.col("value").is_not_null() & ~pl.col("value").is_in(list(mapping)))
        .get_column("value")
        .unique()
        .sort()
        .to_list()
    )
    if unknown:
        raise InputValidationError(
            f"Column {column!r} has unrecognized values {unknown[:10]}",
        )
    return df.with_columns(
        key.replace_strict(mapping, default=None, return_dtype=pl.Boolean).alias(column)
    )


def _check_levels(df: pl.DataFrame, column: str, levels: tuple[str, ...]) -> None:
    values = df.get_column(column).drop_nulls()
    bad = values.filter(~values.is_in(list(levels))).unique().sort().to_list()
    if bad:
        raise InputValidationError(
            f"Column {column!r} has values {bad} outside {list(levels)}",
        )


def load_species(
    path: str | Path,
    separator: str = ",",
    id_column: str = ID_COLUMN,
    outcome_column: str = OUTCOME_COLUMN,
) -> pl.DataFrame:
    """
    Read a species table.

    Only the identifier and outcome columns are required. Attribute columns
    (definition, ethno_reports, toxicity, processing) are validated and cast
    when present. Identifier and outcome columns are renamed to the standard
    ``species_id`` and ``edible``.

    Args:
        path: CSV/TSV file
        separator: Field delimiter
        id_column: Column holding species identifiers or names
        outcome_column: Column holding the edibility outcome

    Returns:
        DataFrame with a Boolean ``edible`` column (null when unknown)
    """
    path = Path(path)
    if not path.exists():
        raise InputValidationError(f"Species table not found: {path}")

    df = pl.read_csv(path, separator=separator, infer_schema_length=0)
    validate_columns(df, [id_column, outcome_column], name=path.name)
    df = df.rename({id_column: ID_COLUMN, outcome_column: OUTCOME_COLUMN})

    if df.get_column(ID_COLUMN).null_count():
        raise InputValidationError(f"{path.name}: empty species identifiers")

    df = normalize_outcome(df, OUTCOME_COLUMN)

    if TOXICITY_COLUMN in df.columns:
        df = normalize_outcome(df, TOXICITY_COLUMN, allow_labels=False)

    if ETHNO_REPORTS_COLUMN in df.columns:
        try:
            df = df.with_columns(pl.col(ETHNO_REPORTS_COLUMN).cast(pl.Int64, strict=True))
        except (pl.exceptions.InvalidOperationError, pl.exceptions.ComputeError) as e:
            raise InputValidationError(
                f"Column {ETHNO_REPORTS_COLUMN!r} must hold integers",
            ) from e
        if (df.get_column(ETHNO_REPORTS_COLUMN) < 0).any():
            raise InputValidationError(
                f"Column {ETHNO_REPORTS_COLUMN!r} must be non-negative",
            )

    for column, levels in CATEGORY_LEVELS.items():
        if column in df.columns:
            _check_levels(df, column, levels)

    logging.info(f"✓ Loaded {df.height:,} species from {path.name}")
    return df

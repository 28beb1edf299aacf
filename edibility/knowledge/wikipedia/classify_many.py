"""Classify every species of a DataFrame column."""

__all__ = ["classify_many"]

import logging
from collections.abc import Callable

import polars as pl

from edibility.data.species.load import validate_columns

from .classify import classify
from .constants import LABELS, UNKNOWN
from .fetch_text import fetch_text


def classify_many(
    df: pl.DataFrame,
    name_column: str,
    output_column: str = "wikipedia_edibility",
    fetch: Callable[[str], str] = fetch_text,
) -> pl.DataFrame:
    """Add a column of edible/toxic/unknown labels, one lookup per distinct name."""
    validate_columns(df, [name_column], name="classification input")

    names = df.get_column(name_column).drop_nulls().unique().to_list()
    labels = {name: classify(name, fetch=fetch) for name in names}
    logging.info(
        f"Classified {len(labels)} names: "
        + ", ".join(
            f"{label}={sum(v == label for v in labels.values())}"
            for label in LABELS
        )
    )
    return df.with_columns(
        pl.col(name_column)
        .replace_strict(labels, default=UNKNOWN, return_dtype=pl.Utf8)
        .fill_null(UNKNOWN)
        .alias(output_column)
    )

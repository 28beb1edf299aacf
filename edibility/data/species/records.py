"""Convert species table rows into SpeciesRecord values."""

__all__ = ["to_records"]

import polars as pl

from edibility.core.errors import InputValidationError
from edibility.core.models import SpeciesRecord

from .load import validate_columns
from .schema import CATEGORY_LEVELS, COLUMNS, ETHNO_REPORTS_COLUMN


def to_records(df: pl.DataFrame) -> list[SpeciesRecord]:
    """
    Build immutable records from a complete species table.

    Every column of the schema must be present and non-null.
    """
    validate_columns(df, COLUMNS, name="species table")
    records = []
    for row in df.select(COLUMNS).iter_rows(named=True):
        missing = [name for name, value in row.items() if value is None]
        if missing:
            raise InputValidationError(
                f"Species {row['species_id']!r} has empty fields {missing}",
            )
        for column, levels in CATEGORY_LEVELS.items():
            if row[column] not in levels:
                raise InputValidationError(
                    f"Species {row['species_id']!r}: {column}={row[column]!r} "
                    f"not in {list(levels)}",
                )
        if row[ETHNO_REPORTS_COLUMN] < 0:
            raise InputValidationError(
                f"Species {row['species_id']!r}: negative report count",
            )
        records.append(
            SpeciesRecord(
                species_id=str(row["species_id"]),
                definition=row["definition"],
                ethno_reports=int(row["ethno_reports"]),
                toxicity=bool(row["toxicity"]),
                processing=row["processing"],
                edible=bool(row["edible"]),
            )
        )
    return records

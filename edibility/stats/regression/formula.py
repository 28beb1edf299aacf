"""Parse a `response ~ term + term` model formula."""

__all__ = ["Formula", "parse_formula"]

import re
from dataclasses import dataclass

from edibility.core.errors import InputValidationError

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Formula:
    """Response column and additive predictor terms."""

    response: str
    terms: tuple[str, ...]


def parse_formula(spec: str) -> Formula:
    """
    Parse an additive formula into response and terms.

    Example:
        >>> parse_formula("edible ~ definition + ethno_reports")
        Formula(response='edible', terms=('definition', 'ethno_reports'))
    """
    if not spec or spec.count("~") != 1:
        raise InputValidationError(f"Formula must contain one '~', got {spec!r}")

    lhs, rhs = (part.strip() for part in spec.split("~"))
    terms = tuple(t.strip() for t in rhs.split("+") if t.strip())

    for name in (lhs, *terms):
        if not _NAME_PATTERN.match(name):
            raise InputValidationError(f"Invalid formula term {name!r} in {spec!r}")
    if not terms:
        raise InputValidationError(f"Formula has no predictors: {spec!r}")
    if len(set(terms)) != len(terms):
        raise InputValidationError(f"Duplicate terms in {spec!r}")
    if lhs in terms:
        raise InputValidationError(f"Response {lhs!r} also used as predictor")

    return Formula(response=lhs, terms=terms)

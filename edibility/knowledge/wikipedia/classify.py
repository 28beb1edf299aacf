"""Classify a species as edible, toxic or unknown from its Wikipedia article."""

__all__ = ["classify", "classify_text"]

import logging
from collections.abc import Callable

from edibility.core.errors import ExternalFetchError

from .constants import (
    EDIBLE,
    EDIBLE_KEYWORDS,
    TOXIC,
    TOXIC_KEYWORDS,
    UNKNOWN,
    WIKIPEDIA_WIKI_PREFIX,
)
from .fetch_text import fetch_text
from .url_from_name import url_from_name


def classify_text(text: str) -> str:
    """
    Label lower-cased article text by keyword.

    Keywords match anywhere in the text, so "inedible" contains "edible".

    Example:
        >>> classify_text("the fruit is eaten raw")
        'edible'
        >>> classify_text("all parts are poisonous")
        'toxic'
    """
    if any(keyword in text for keyword in EDIBLE_KEYWORDS):
        return EDIBLE
    if any(keyword in text for keyword in TOXIC_KEYWORDS):
        return TOXIC
    return UNKNOWN


def classify(
    species_name: str,
    fetch: Callable[[str], str] = fetch_text,
    base_url: str = WIKIPEDIA_WIKI_PREFIX,
) -> str:
    """
    Classify a species from its English Wikipedia article.

    Never raises on fetch problems: a missing page, network error or
    unparseable HTML yields "unknown".

    Args:
        species_name: Scientific or common name, e.g. "Malus domestica"
        fetch: Callable returning lower-cased paragraph text for a URL
        base_url: Article URL prefix

    Returns:
        "edible", "toxic" or "unknown"
    """
    if not species_name or not species_name.strip():
        return UNKNOWN

    url = url_from_name(species_name, prefix=base_url)
    try:
        text = fetch(url)
    except ExternalFetchError as e:
        logging.warning(f"{species_name}: {e}")
        return UNKNOWN

    label = classify_text(text.lower())
    logging.debug(f"{species_name}: {label}")
    return label

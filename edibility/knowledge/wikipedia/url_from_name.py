"""Build a Wikipedia article URL from a species name."""

__all__ = ["url_from_name"]

import urllib.parse

from .constants import WIKIPEDIA_WIKI_PREFIX


def url_from_name(species_name: str, prefix: str = WIKIPEDIA_WIKI_PREFIX) -> str:
    """
    Build the article URL for a species name.

    Example:
        >>> url_from_name("Malus domestica")
        'https://en.wikipedia.org/wiki/Malus_domestica'
    """
    title = "_".join(species_name.split())
    return f"{prefix}{urllib.parse.quote(title, safe='_()')}"

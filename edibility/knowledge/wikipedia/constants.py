"""Wikipedia URL and keyword constants."""

__all__ = [
    "WIKIPEDIA_WIKI_PREFIX",
    "EDIBLE_KEYWORDS",
    "TOXIC_KEYWORDS",
    "LABELS",
    "EDIBLE",
    "TOXIC",
    "UNKNOWN",
]

WIKIPEDIA_WIKI_PREFIX = "https://en.wikipedia.org/wiki/"

EDIBLE = "edible"
TOXIC = "toxic"
UNKNOWN = "unknown"
LABELS = (EDIBLE, TOXIC, UNKNOWN)

# Checked in this order: edible first, then toxic
EDIBLE_KEYWORDS = ("edible", "consumed", "food", "eaten", "nutrition")
TOXIC_KEYWORDS = ("toxic", "poisonous", "inedible", "harmful")

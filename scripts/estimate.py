"""
Command-line entry point for the edible species estimate.

Runs the conjugate estimate on a simulated or loaded species table, or
classifies species names from their Wikipedia articles.

Usage:
    python scripts/estimate.py run [--data species.csv] [--prior flat]
    python scripts/estimate.py run --method analytic --mass 0.89
    python scripts/estimate.py classify "Malus domestica" "Atropa belladonna"
"""

import functools
import inspect
import json
import logging
import sys
from typing import Optional

import fire
from loguru import logger

from edibility.core.config import build_config
from edibility.knowledge.wikipedia.classify import classify as classify_species
from edibility.knowledge.wikipedia.fetch_text import fetch_text
from edibility.pipeline.estimate import estimate_from_table, species_table


class InterceptHandler(logging.Handler):
    """Route standard logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # Find the caller that issued the record, outside the logging module
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def run(
    data: Optional[str] = None,
    separator: str = ",",
    id_column: str = "species_id",
    outcome_column: str = "edible",
    prior: str = "informative",
    mass: float = 0.95,
    method: str = "sampling",
    n_samples: int = 10_000,
    seed: int = 123,
    n_species: int = 200,
    as_json: bool = False,
    verbose: bool = False,
) -> str:
    """
    Estimate the proportion and number of edible vascular plant species.

    Args:
        data: Delimited species table; a simulated table is used when omitted
        separator: Field delimiter of the table
        id_column: Species identifier column of the table
        outcome_column: Edibility outcome column of the table
        prior: Prior preset ("informative" = Beta(10, 90), "flat" = Beta(1, 1))
        mass: Credible interval mass
        method: "sampling" or "analytic" HDI
        n_samples: Posterior draws for the sampling HDI
        seed: Seed for simulation and sampling
        n_species: Size of the simulated table
        as_json: Print the structured result instead of the sentence
        verbose: Log debug messages

    Returns:
        Summary sentence or JSON result
    """
    _setup_logging(verbose)
    config = build_config(
        prior=prior,
        interval={
            "mass": mass,
            "method": method,
            "n_samples": n_samples,
            "seed": seed,
        },
        simulation={"n_species": n_species, "seed": seed},
    )

    species = species_table(
        config,
        data,
        separator=separator,
        id_column=id_column,
        outcome_column=outcome_column,
    )

    result = estimate_from_table(species, config)
    if as_json:
        payload = result.to_dict()
        payload["total_edible_species_range"] = {
            str(n): list(bounds)
            for n, bounds in payload["total_edible_species_range"].items()
        }
        payload["credible_interval_percentage"] = list(
            payload["credible_interval_percentage"]
        )
        return json.dumps(payload, indent=2)
    return result.summary


def classify(*names: str, timeout: int = 30, verbose: bool = False) -> str:
    """
    Classify species as edible, toxic or unknown from Wikipedia.

    Args:
        *names: Species names
        timeout: Per-request timeout in seconds
        verbose: Log debug messages

    Returns:
        One "name<TAB>label" line per species
    """
    _setup_logging(verbose)
    config = build_config(wikipedia={"timeout": timeout})
    fetch = functools.partial(
        fetch_text,
        timeout=config["wikipedia"]["timeout"],
        user_agent=config["wikipedia"]["user_agent"],
    )
    base_url = config["wikipedia"]["base_url"]
    return "\n".join(
        f"{name}\t{classify_species(name, fetch=fetch, base_url=base_url)}"
        for name in names
    )


if __name__ == "__main__":
    fire.Fire({"run": run, "classify": classify})

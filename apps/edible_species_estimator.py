# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "altair==6.0.0",
#     "marimo",
#     "numpy==2.4.1",
#     "polars==1.37.1",
#     "scipy==1.17.0",
# ]
# ///
"""
Bayesian Estimate of Edible Vascular Plant Species

How many of the world's vascular plant species are edible?

===========================================================================
WHAT THIS NOTEBOOK DOES
===========================================================================

1. Builds a species table (simulated, or loaded from a CSV path entered in
   the notebook) with, for each species: how "edible" is defined (raw,
   partially, after processing), the number of ethnobotanical reports, a
   toxicity flag, the processing level required, and whether it is edible.
   A loaded table needs only species and outcome columns; the regression
   variant is skipped when the attribute columns are missing.
2. Regression variant: fits a Bayesian logistic regression of edibility on
   those attributes (Laplace approximation, Normal(0, 2.5) priors).
3. Conjugate variant: updates a Beta prior with the edible/total counts,
   computes the 95% highest-density interval (HDI) of the proportion and
   extrapolates it to 342,000 to 369,000 vascular plant species.

===========================================================================
KEY CONCEPTS
===========================================================================

Beta-Binomial update
--------------------
Prior Beta(α₀, β₀), k edible out of n → posterior Beta(α₀ + k, β₀ + n − k).
The default prior Beta(10, 90) encodes "about 10% edible" worth 100
pseudo-species; Beta(1, 1) (flat) is available from the prior selector.

Highest-density interval
------------------------
The narrowest interval holding 95% of the posterior. Computed from 10,000
seeded posterior draws, or numerically from the Beta quantile function.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

import marimo

__generated_with = "0.19.6"
app = marimo.App(width="medium", app_title="Edible Plant Species Estimator")

with app.setup:
    import logging

    import altair as alt
    import marimo as mo
    import numpy as np
    import polars as pl
    from scipy.stats import beta as beta_dist

    from edibility.core.config import PRIOR_PRESETS, build_config
    from edibility.pipeline.estimate import estimate_from_table, species_table
    from edibility.stats.bayesian.beta import credible_interval
    from edibility.stats.regression.backend import LogisticPriors, SamplerConfig
    from edibility.stats.regression.design import design_matrix
    from edibility.stats.regression.fit_logistic import DEFAULT_FORMULA, fit_logistic
    from edibility.stats.regression.formula import parse_formula

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    DENSITY_POINTS = 400


@app.function
def posterior_chart(alpha: float, beta: float, lower: float, upper: float):
    """Posterior density with the credible interval shaded."""
    lo_q, hi_q = beta_dist.ppf([1e-4, 1 - 1e-4], alpha, beta)
    theta = np.linspace(lo_q, hi_q, DENSITY_POINTS)
    density = pl.DataFrame(
        {
            "proportion": theta,
            "density": beta_dist.pdf(theta, alpha, beta),
        }
    ).with_columns(
        pl.col("proportion").is_between(lower, upper).alias("in_interval")
    )

    base = alt.Chart(density).encode(
        x=alt.X(
            "proportion:Q",
            title="Proportion of edible species",
            axis=alt.Axis(format="%"),
        ),
        y=alt.Y("density:Q", title="Posterior density"),
    )
    line = base.mark_line(color="#006699")
    band = (
        base.transform_filter(alt.datum.in_interval)
        .mark_area(color="#339966", opacity=0.4)
    )
    return (band + line).properties(width=600, height=250)


@app.cell
def header():
    mo.md("""
    # Edible Vascular Plant Species

    Bayesian estimate of the proportion of edible plant species, extrapolated
    to the global species count.
    """)
    return


@app.cell
def controls():
    prior_choice = mo.ui.dropdown(
        options=list(PRIOR_PRESETS),
        value="informative",
        label="Prior",
    )
    mass_slider = mo.ui.slider(0.5, 0.99, step=0.01, value=0.95, label="Credible mass")
    method_choice = mo.ui.dropdown(
        options=["sampling", "analytic"],
        value="sampling",
        label="Interval method",
    )
    seed_input = mo.ui.number(start=0, stop=2**31 - 1, value=123, label="Seed")
    data_path = mo.ui.text(
        value="",
        label="Species CSV",
        placeholder="blank: simulate 200 species",
        full_width=True,
    )
    mo.vstack(
        [
            mo.hstack([prior_choice, mass_slider, method_choice, seed_input]),
            data_path,
        ]
    )
    return data_path, mass_slider, method_choice, prior_choice, seed_input


@app.cell
def apply_config(mass_slider, method_choice, prior_choice, seed_input):
    effective_config = build_config(
        prior=prior_choice.value,
        interval={
            "mass": mass_slider.value,
            "method": method_choice.value,
            "seed": int(seed_input.value),
        },
    )
    return (effective_config,)


@app.cell
def load_data(data_path, effective_config):
    species = species_table(effective_config, data_path.value)
    mo.vstack(
        [
            mo.md(f"## Species table ({species.height:,} species)"),
            mo.ui.table(species, selection=None, page_size=10),
        ]
    )
    return (species,)


@app.cell
def regression(effective_config, species):
    _missing = sorted(set(parse_formula(DEFAULT_FORMULA).terms) - set(species.columns))
    mo.stop(
        bool(_missing),
        mo.callout(
            mo.md(f"**Regression variant skipped:** no {_missing} columns"),
            kind="warn",
        ),
    )
    samples = fit_logistic(
        species,
        DEFAULT_FORMULA,
        priors=LogisticPriors(),
        sampler_config=SamplerConfig(
            draws=4000,
            seed=effective_config["interval"]["seed"],
        ),
    )
    coefficients = samples.summary(mass=effective_config["interval"]["mass"])
    predicted = samples.predict_proportion(
        design_matrix(species, parse_formula(DEFAULT_FORMULA)).X
    )

    mo.vstack(
        [
            mo.md("## Regression variant"),
            mo.md(f"`{DEFAULT_FORMULA}` (log-odds scale)"),
            mo.ui.table(coefficients, selection=None),
            mo.md(
                f"Mean predicted probability of edibility: "
                f"**{predicted.mean():.2%}**"
            ),
        ]
    )
    return


@app.cell
def conjugate(effective_config, species):
    result = estimate_from_table(species, effective_config)
    eti_lower, eti_upper = credible_interval(
        result.posterior,
        result.interval.mass,
    )
    return eti_lower, eti_upper, result


@app.cell
def conjugate_view(eti_lower, eti_upper, result):
    mo.vstack(
        [
            mo.md("## Conjugate variant"),
            mo.md(f"""
    - Observed: **{result.counts.successes}** edible of **{result.counts.trials}** species
    - Posterior: Beta({result.posterior.alpha:g}, {result.posterior.beta:g}),
      mean {result.posterior.mean:.2%}
    - {result.interval.mass:.0%} HDI ({result.interval.method}): [{result.interval.lower:.2%}, {result.interval.upper:.2%}]
    - Equal-tailed interval for comparison: [{float(eti_lower):.2%}, {float(eti_upper):.2%}]
    """),
            posterior_chart(
                result.posterior.alpha,
                result.posterior.beta,
                result.interval.lower,
                result.interval.upper,
            ),
        ]
    )
    return


@app.cell
def summary(result):
    _rows = [
        {
            "total_species": n,
            "edible_lower": round(lo),
            "edible_expected": round(result.estimate.expected_edible[n]),
            "edible_upper": round(hi),
        }
        for n, (lo, hi) in sorted(result.estimate.total_edible_species_range.items())
    ]
    mo.vstack(
        [
            mo.md("## Extrapolation"),
            mo.ui.table(pl.DataFrame(_rows), selection=None),
            mo.callout(mo.md(result.summary), kind="success"),
        ]
    )
    return


@app.cell
def footer():
    mo.md("""
    ---
    **Code:** `apps/edible_species_estimator.py` |
    **License:**
    <a href="https://www.gnu.org/licenses/agpl-3.0.html" style="color:#484848;">AGPL-3.0</a>
    """)
    return


if __name__ == "__main__":
    app.run()

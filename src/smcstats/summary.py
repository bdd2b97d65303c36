"""
Univariate summaries and diagnostics of weighted particle sets.

Combines the weighted accumulators into the marginal summary of one particle
component: moment statistics up to an order, quantiles at probability levels
and, for discrete components, the weighted mode. The effective sample size
diagnosis flags particle sets whose weights are too degenerate for these
estimates to be trusted.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Integral

import numpy as np
from loguru import logger

from smcstats.errors import (
    DegenerateInputError,
    InvalidArgumentError,
    LengthMismatchError,
)
from smcstats.facade import AccumulationFacade, NumericInput
from smcstats.schemas import EssDiagnosis, MomentStatistics, ParticleSummary

__all__ = ["diagnose_particles", "effective_sample_size", "summarize_particles"]


def effective_sample_size(weights: NumericInput) -> float:
    """
    Effective sample size of a set of particle weights, (sum w)^2 / sum w^2.

    :param weights: Non-negative particle weights, normalized or not
    :return: Effective number of equally weighted particles
    :raises InvalidArgumentError: If a weight is negative
    :raises DegenerateInputError: If the total weight is zero
    """
    weights_arr = np.asarray(weights, dtype=float)
    if np.any(~(weights_arr >= 0.0)):
        raise InvalidArgumentError("weights must be non-negative")

    total = math.fsum(weights_arr.tolist())
    if not total > 0.0:
        raise DegenerateInputError("effective sample size needs positive total weight")

    # scale first so squaring tiny or huge weights cannot underflow or overflow
    scaled = weights_arr / total

    return 1.0 / math.fsum((scaled * scaled).tolist())


def diagnose_particles(
    weights: NumericInput,
    ess_threshold: float | None = None,
    facade: AccumulationFacade | None = None,
) -> EssDiagnosis:
    """
    Check that the effective sample size of the particles exceeds a threshold.

    :param weights: Non-negative particle weights
    :param ess_threshold: Threshold the ESS must exceed; defaults to the
        configured ess_threshold
    :param facade: Façade whose configuration supplies the default threshold
    :return: Diagnosis with the ESS and whether it passed
    """
    facade = facade or AccumulationFacade()
    threshold = (
        facade.config.ess_threshold if ess_threshold is None else float(ess_threshold)
    )
    if not threshold >= 0.0:
        raise InvalidArgumentError(
            f"ess_threshold must be non-negative, got {threshold}"
        )

    ess = effective_sample_size(weights)
    diagnosis = EssDiagnosis(ess=ess, threshold=threshold, valid=ess > threshold)

    if not diagnosis.valid:
        logger.warning(
            f"The effective sample size is too low: {ess:.2f} <= {threshold:.2f}. "
            "Estimates may be poor; increase the number of particles."
        )

    return diagnosis


def summarize_particles(
    values: NumericInput,
    weights: NumericInput,
    probs: Sequence[float] = (),
    order: int | None = None,
    mode: bool | None = None,
    discrete: bool = False,
    facade: AccumulationFacade | None = None,
) -> ParticleSummary:
    """
    Marginal summary of one weighted particle component.

    :param values: Particle values
    :param weights: Non-negative particle weights aligned with the values
    :param probs: Probability levels for quantiles; empty for none
    :param order: Moment statistics up to this order (0-4) are computed;
        defaults to 0 when the mode is computed and 1 otherwise
    :param mode: Compute the weighted mode; defaults to ``discrete``
    :param discrete: Whether the component takes discrete values
    :param facade: Façade used to run the requests
    :return: Summary holding the requested statistics
    :raises StatisticsError: Subclass describing the first rejected request
    """
    if len(values) != len(weights):
        raise LengthMismatchError("values and weights must have same length")

    facade = facade or AccumulationFacade()
    if mode is None:
        mode = discrete
    if order is None:
        order = 0 if mode else 1

    if isinstance(order, bool) or not isinstance(order, Integral) or order < 0:
        raise InvalidArgumentError(
            f"moment order must be an integer between 0 and 4, got {order!r}"
        )

    order = int(order)
    moments = (
        facade.statistics(values, weights, order).unwrap()
        if order > 0
        else MomentStatistics()
    )
    quantiles = (
        facade.quantiles(values, weights, probs).unwrap() if len(probs) > 0 else None
    )
    mode_value = facade.mode(values, weights).unwrap() if mode else None

    return ParticleSummary(
        n_part=len(values),
        ess=effective_sample_size(weights),
        moments=moments,
        quantiles=quantiles,
        mode=mode_value,
    )

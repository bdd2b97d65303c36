"""
Accumulation façade over the weighted accumulators.

Each request validates that values and weights pair up, validates its own
arguments and the weights before any observation is pushed, builds exactly one
accumulator, feeds it every pair in input order, and extracts the finished
statistics. Failures come back as error values inside a StatisticsResult rather
than as exceptions, so no partial result ever reaches the caller. The module
level ``wtd_*`` helpers unwrap those results, returning plain values and raising
the typed error instead.

Example:
::
    facade = AccumulationFacade(AccumulationSettings(verbose=True))
    result = facade.statistics([1.0, 2.0, 4.0], [0.2, 0.5, 0.3], order=2)
    if result.ok:
        print(result.value.as_dict())
    else:
        print(result.error.kind, result.error.message)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

import numpy as np
from loguru import logger

from smcstats.accumulators import (
    DiscreteAccumulator,
    StatFeature,
    WeightedMomentAccumulator,
    WeightedQuantileAccumulator,
    features_for_order,
)
from smcstats.errors import InvalidArgumentError, LengthMismatchError, StatisticsError
from smcstats.schemas import (
    DiscreteHistogram,
    MomentStatistics,
    QuantileStatistics,
    StatisticsErrorInfo,
    StatisticsResult,
)
from smcstats.settings import AccumulationSettings

__all__ = [
    "AccumulationFacade",
    "NumericInput",
    "wtd_kurt",
    "wtd_mean",
    "wtd_median",
    "wtd_mode",
    "wtd_quantile",
    "wtd_skew",
    "wtd_stat",
    "wtd_table",
    "wtd_var",
]

NumericInput = Sequence[float] | np.ndarray
AccumulatorT = TypeVar(
    "AccumulatorT",
    WeightedMomentAccumulator,
    WeightedQuantileAccumulator,
    DiscreteAccumulator,
)
ValueT = TypeVar("ValueT")


class AccumulationFacade:
    """
    Runs single statistics requests over paired values and weights.

    The façade holds no state between requests; its configuration is an explicit
    value supplied at construction.
    """

    def __init__(self, config: AccumulationSettings | None = None):
        """
        :param config: Accumulation settings; defaults to AccumulationSettings()
        """
        self.config = config if config is not None else AccumulationSettings()

    def statistics(
        self, values: NumericInput, weights: NumericInput, order: int = 1
    ) -> StatisticsResult[MomentStatistics]:
        """
        Weighted moment statistics up to an order.

        :param values: Observed values
        :param weights: Non-negative weights aligned with the values
        :param order: Highest statistic among mean (1), var (2), skew (3) and
            kurt (4)
        :return: Result holding the statistics truncated to the order
        """

        def _extract(accu: WeightedMomentAccumulator) -> MomentStatistics:
            return MomentStatistics(
                mean=accu.mean(),
                var=accu.variance() if order >= 2 else None,  # noqa: PLR2004
                skew=accu.skewness() if order >= 3 else None,  # noqa: PLR2004
                kurt=accu.kurtosis() if order >= 4 else None,  # noqa: PLR2004
            )

        return self._run(
            "wtd_stat",
            values,
            weights,
            lambda: WeightedMomentAccumulator(features_for_order(order)),
            _extract,
        )

    def mean(
        self, values: NumericInput, weights: NumericInput
    ) -> StatisticsResult[float]:
        return self._moment("wtd_mean", values, weights, StatFeature.MEAN)

    def variance(
        self, values: NumericInput, weights: NumericInput
    ) -> StatisticsResult[float]:
        return self._moment("wtd_var", values, weights, StatFeature.VARIANCE)

    def skewness(
        self, values: NumericInput, weights: NumericInput
    ) -> StatisticsResult[float]:
        return self._moment("wtd_skew", values, weights, StatFeature.SKEWNESS)

    def kurtosis(
        self, values: NumericInput, weights: NumericInput
    ) -> StatisticsResult[float]:
        return self._moment("wtd_kurt", values, weights, StatFeature.KURTOSIS)

    def quantiles(
        self, values: NumericInput, weights: NumericInput, probs: Sequence[float]
    ) -> StatisticsResult[QuantileStatistics]:
        """
        Weighted inverse-CDF quantiles.

        :param values: Observed values
        :param weights: Non-negative weights aligned with the values
        :param probs: Probability levels, each in [0, 1]
        :return: Result holding estimates aligned with the probability levels
        """
        return self._run(
            "wtd_quantile",
            values,
            weights,
            lambda: WeightedQuantileAccumulator(
                probs, tolerance=self.config.quantile_tolerance
            ),
            lambda accu: QuantileStatistics(
                probs=list(accu.probs), quantiles=accu.quantiles()
            ),
        )

    def median(
        self, values: NumericInput, weights: NumericInput
    ) -> StatisticsResult[float]:
        """
        Weighted median, the quantile at the single level 0.5.
        """
        return self._run(
            "wtd_median",
            values,
            weights,
            lambda: WeightedQuantileAccumulator(
                (0.5,), tolerance=self.config.quantile_tolerance
            ),
            lambda accu: accu.quantile(0),
        )

    def table(
        self,
        values: NumericInput,
        weights: NumericInput,
        normalize: bool | None = None,
    ) -> StatisticsResult[DiscreteHistogram]:
        """
        Weighted frequency table over the exact observed values.

        :param values: Observed discrete values
        :param weights: Non-negative weights aligned with the values
        :param normalize: Scale frequencies to sum to one; defaults to the
            configured normalize_tables
        :return: Result holding the histogram
        """
        if normalize is None:
            normalize = self.config.normalize_tables

        return self._run(
            "wtd_table",
            values,
            weights,
            DiscreteAccumulator,
            lambda accu: accu.pdf().normalized() if normalize else accu.pdf(),
        )

    def mode(
        self, values: NumericInput, weights: NumericInput
    ) -> StatisticsResult[float]:
        """
        Most heavily weighted value; ties go to the smallest value.
        """
        return self._run(
            "wtd_mode", values, weights, DiscreteAccumulator, lambda accu: accu.mode()
        )

    def _moment(
        self,
        name: str,
        values: NumericInput,
        weights: NumericInput,
        feature: StatFeature,
    ) -> StatisticsResult[float]:
        accessors: dict[StatFeature, Callable[[WeightedMomentAccumulator], float]] = {
            StatFeature.MEAN: WeightedMomentAccumulator.mean,
            StatFeature.VARIANCE: WeightedMomentAccumulator.variance,
            StatFeature.SKEWNESS: WeightedMomentAccumulator.skewness,
            StatFeature.KURTOSIS: WeightedMomentAccumulator.kurtosis,
        }

        return self._run(
            name,
            values,
            weights,
            lambda: WeightedMomentAccumulator(feature),
            accessors[feature],
        )

    def _run(
        self,
        name: str,
        values: NumericInput,
        weights: NumericInput,
        build: Callable[[], AccumulatorT],
        extract: Callable[[AccumulatorT], ValueT],
    ) -> StatisticsResult[ValueT]:
        level = "INFO" if self.config.verbose else "DEBUG"

        try:
            values_arr, weights_arr = _paired_arrays(values, weights)
            accumulator = build()
            _check_weights(weights_arr)
            accumulator.init()

            for value, weight in zip(
                values_arr.tolist(), weights_arr.tolist(), strict=True
            ):
                accumulator.push(value, weight)

            result = extract(accumulator)
        except StatisticsError as err:
            if err.kind is None:
                raise
            logger.log(level, f"{name} rejected ({err.kind.value}): {err}")

            return StatisticsResult(
                error=StatisticsErrorInfo(kind=err.kind, message=str(err))
            )

        logger.log(level, f"{name} computed over {len(values_arr)} observations")

        return StatisticsResult(value=result)


def _paired_arrays(
    values: NumericInput, weights: NumericInput
) -> tuple[np.ndarray, np.ndarray]:
    if len(values) != len(weights):
        raise LengthMismatchError(
            "values and weights must have same length "
            f"(got {len(values)} values and {len(weights)} weights)"
        )

    try:
        values_arr = np.asarray(values, dtype=float)
        weights_arr = np.asarray(weights, dtype=float)
    except (TypeError, ValueError) as err:
        raise InvalidArgumentError(
            f"values and weights must be numeric: {err}"
        ) from err

    if values_arr.ndim != 1 or weights_arr.ndim != 1:
        raise InvalidArgumentError("values and weights must be one-dimensional")

    return values_arr, weights_arr


def _check_weights(weights: np.ndarray):
    invalid = np.flatnonzero(~(weights >= 0.0))
    if len(invalid) > 0:
        index = int(invalid[0])
        raise InvalidArgumentError(
            f"weights must be non-negative, got {weights[index]} at index {index}"
        )


def wtd_stat(
    values: NumericInput,
    weights: NumericInput,
    order: int = 1,
    config: AccumulationSettings | None = None,
) -> dict[str, float]:
    """
    :return: Ordered mapping of mean, var, skew and kurt truncated to the order
    :raises StatisticsError: Subclass describing why the request was rejected
    """
    result = AccumulationFacade(config).statistics(values, weights, order)

    return result.unwrap().as_dict()


def wtd_mean(values: NumericInput, weights: NumericInput) -> float:
    return AccumulationFacade().mean(values, weights).unwrap()


def wtd_var(values: NumericInput, weights: NumericInput) -> float:
    return AccumulationFacade().variance(values, weights).unwrap()


def wtd_skew(values: NumericInput, weights: NumericInput) -> float:
    return AccumulationFacade().skewness(values, weights).unwrap()


def wtd_kurt(values: NumericInput, weights: NumericInput) -> float:
    return AccumulationFacade().kurtosis(values, weights).unwrap()


def wtd_quantile(
    values: NumericInput,
    weights: NumericInput,
    probs: Sequence[float],
    config: AccumulationSettings | None = None,
) -> list[tuple[str, float]]:
    """
    :return: (probability label, quantile estimate) pairs aligned with the
        probability levels; repeated levels keep one pair each
    :raises StatisticsError: Subclass describing why the request was rejected
    """
    result = AccumulationFacade(config).quantiles(values, weights, probs)

    return result.unwrap().as_pairs()


def wtd_median(
    values: NumericInput,
    weights: NumericInput,
    config: AccumulationSettings | None = None,
) -> float:
    return AccumulationFacade(config).median(values, weights).unwrap()


def wtd_table(
    values: NumericInput,
    weights: NumericInput,
    normalize: bool | None = None,
    config: AccumulationSettings | None = None,
) -> DiscreteHistogram:
    return AccumulationFacade(config).table(values, weights, normalize).unwrap()


def wtd_mode(values: NumericInput, weights: NumericInput) -> float:
    return AccumulationFacade().mode(values, weights).unwrap()

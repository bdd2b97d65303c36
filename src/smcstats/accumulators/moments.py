"""
Online weighted central moments.

Folds (value, weight) observations into a running total weight, a running mean
and, only when requested, the central power sums M2, M3 and M4 about that mean.
Every push is the pairwise combination of the current state with a single
weighted point, so pushes and merges of independent partial streams share the
same update and a single pass suffices without summing raw powers.

Example:
::
    accu = WeightedMomentAccumulator([StatFeature.MEAN, StatFeature.VARIANCE])
    accu.init()
    for value, weight in zip(values, weights):
        accu.push(value, weight)
    print(accu.mean(), accu.variance())
"""

from __future__ import annotations

from collections.abc import Iterable

from smcstats.accumulators.base import AccumulatorLifecycle, check_weight
from smcstats.accumulators.features import StatFeature, power_order
from smcstats.errors import DegenerateInputError, InvalidArgumentError

__all__ = ["WeightedMomentAccumulator"]


class WeightedMomentAccumulator(AccumulatorLifecycle):
    """
    Weighted mean, variance, skewness and excess kurtosis from a stream.

    Results are population statistics normalized by the total weight, with no
    small-sample bias correction. Kurtosis is excess kurtosis, so a normal
    sample gives values near 0.
    """

    def __init__(self, features: Iterable[StatFeature] | StatFeature = ()):
        """
        :param features: Statistics to track, added before init
        """
        super().__init__()
        self._features = (
            StatFeature(features)
            if isinstance(features, StatFeature)
            else StatFeature.combine(features)
        )
        self._order = 0
        self.count = 0
        self.total_weight = 0.0
        self._mean = 0.0
        self._m2 = 0.0
        self._m3 = 0.0
        self._m4 = 0.0

    @property
    def features(self) -> StatFeature:
        """
        :return: Registered statistics
        """
        return self._features

    @property
    def order(self) -> int:
        """
        :return: Highest power sum tracked, fixed by init
        """
        return self._order

    def add_feature(self, feature: StatFeature):
        """
        Register interest in a statistic.

        :param feature: Statistic to track
        :raises AccumulatorStateError: If called after init
        """
        self._require_not_initialized()
        self._features |= StatFeature(feature)

    def init(self):
        """
        Reset the running state and fix the power sums to track.

        :raises AccumulatorStateError: If called more than once
        """
        self._mark_initialized()
        self._order = power_order(self._features)
        self.count = 0
        self.total_weight = 0.0
        self._mean = self._m2 = self._m3 = self._m4 = 0.0

    def push(self, value: float, weight: float):
        """
        Fold one observation into the running state.

        :param value: Observed value
        :param weight: Non-negative importance weight
        :raises InvalidArgumentError: If the weight is negative
        :raises AccumulatorStateError: If init has not been called
        """
        self._require_initialized()
        weight = check_weight(weight)
        self.count += 1

        if weight > 0.0:
            self._combine(weight, float(value), 0.0, 0.0, 0.0)

    def merge(self, other: WeightedMomentAccumulator):
        """
        Fold the state of an independently accumulated partial stream.

        :param other: Initialized accumulator tracking at least the same order
        :raises InvalidArgumentError: If other tracks fewer power sums
        """
        self._require_initialized()
        other._require_initialized()  # noqa: SLF001
        if other.order < self.order:
            raise InvalidArgumentError(
                f"cannot merge an accumulator of order {other.order} into one of "
                f"order {self.order}"
            )

        self.count += other.count
        if other.total_weight > 0.0:
            self._combine(
                other.total_weight,
                other._mean,  # noqa: SLF001
                other._m2,  # noqa: SLF001
                other._m3,  # noqa: SLF001
                other._m4,  # noqa: SLF001
            )

    def mean(self) -> float:
        """
        :return: Weighted mean
        :raises DegenerateInputError: If the total weight is zero
        """
        self._require_weight()

        return self._mean

    def variance(self) -> float:
        """
        :return: Weighted population variance, M2 / W
        :raises DegenerateInputError: If the total weight is zero
        """
        self._require_order(2, "variance")
        self._require_weight()

        return self._m2 / self.total_weight

    def skewness(self) -> float:
        """
        :return: Weighted skewness, (M3 / W) / variance^1.5
        :raises DegenerateInputError: If the total weight or the variance is zero
        """
        self._require_order(3, "skewness")
        variance = self._nonzero_variance("skewness")

        return (self._m3 / self.total_weight) / variance**1.5

    def kurtosis(self) -> float:
        """
        :return: Weighted excess kurtosis, (M4 / W) / variance^2 - 3
        :raises DegenerateInputError: If the total weight or the variance is zero
        """
        self._require_order(4, "kurtosis")
        variance = self._nonzero_variance("kurtosis")

        return (self._m4 / self.total_weight) / variance**2 - 3.0

    def _combine(self, weight: float, mean: float, m2: float, m3: float, m4: float):
        # pairwise update of (W, mean, M2, M3, M4) with another weighted state;
        # higher sums read the lower sums before those are updated
        prev_weight = self.total_weight
        total = prev_weight + weight
        ratio_a = prev_weight / total
        ratio_b = weight / total
        delta = mean - self._mean
        delta_sq = delta * delta
        cross = delta_sq * prev_weight * ratio_b

        if self._order >= 4:  # noqa: PLR2004
            self._m4 += (
                m4
                + cross * delta_sq * (ratio_a**2 - ratio_a * ratio_b + ratio_b**2)
                + 6.0 * delta_sq * (ratio_a**2 * m2 + ratio_b**2 * self._m2)
                + 4.0 * delta * (ratio_a * m3 - ratio_b * self._m3)
            )
        if self._order >= 3:  # noqa: PLR2004
            self._m3 += (
                m3
                + cross * delta * (ratio_a - ratio_b)
                + 3.0 * delta * (ratio_a * m2 - ratio_b * self._m2)
            )
        if self._order >= 2:  # noqa: PLR2004
            self._m2 += m2 + cross

        self._mean += delta * ratio_b
        self.total_weight = total

    def _require_order(self, order: int, name: str):
        self._require_initialized()
        if self._order < order:
            raise InvalidArgumentError(f"{name} was not requested before init()")

    def _require_weight(self):
        self._require_initialized()
        if not self.total_weight > 0.0:
            raise DegenerateInputError("total weight must be positive")

    def _nonzero_variance(self, name: str) -> float:
        self._require_weight()
        variance = self._m2 / self.total_weight
        if not variance > 0.0:
            raise DegenerateInputError(f"{name} is undefined for zero variance")

        return variance

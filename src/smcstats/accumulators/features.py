"""
Moment statistic selection for the weighted moment accumulator.

Statistics are represented as bit flags so a feature set is resolved once, at
accumulator construction, into the highest power-sum order to maintain. Higher
order statistics imply every lower order power sum.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag
from numbers import Integral

from smcstats.errors import InvalidArgumentError

__all__ = [
    "MAX_MOMENT_ORDER",
    "StatFeature",
    "features_for_order",
    "power_order",
]

MAX_MOMENT_ORDER = 4


class StatFeature(IntFlag):
    """
    Weighted moment statistics that can be requested from the accumulator.
    """

    NONE = 0
    MEAN = 1
    VARIANCE = 2
    SKEWNESS = 4
    KURTOSIS = 8

    @classmethod
    def combine(cls, features: Iterable[StatFeature]) -> StatFeature:
        """
        :param features: Features to merge; duplicates are ignored
        :return: Single flag holding every given feature
        """
        combined = cls.NONE
        for feature in features:
            combined |= cls(feature)

        return combined


_FEATURE_ORDERS: tuple[tuple[StatFeature, int], ...] = (
    (StatFeature.KURTOSIS, 4),
    (StatFeature.SKEWNESS, 3),
    (StatFeature.VARIANCE, 2),
    (StatFeature.MEAN, 1),
)


def power_order(features: StatFeature) -> int:
    """
    Highest central power sum needed to serve a feature set.

    :param features: Requested statistics
    :return: 0 when nothing is requested, otherwise the order (1-4) of the
        highest requested statistic
    """
    for feature, order in _FEATURE_ORDERS:
        if feature in features:
            return order

    return 0


def features_for_order(order: int) -> StatFeature:
    """
    Feature set of every moment statistic up to an order.

    :param order: Moment order between 1 and 4
    :return: Flags for mean, then variance, skewness and kurtosis as the order
        allows
    :raises InvalidArgumentError: If the order is outside 1-4
    """
    if isinstance(order, bool) or not isinstance(order, Integral):
        raise InvalidArgumentError(f"moment order must be an integer, got {order!r}")

    if not 1 <= order <= MAX_MOMENT_ORDER:
        raise InvalidArgumentError(
            f"moment order must be between 1 and {MAX_MOMENT_ORDER}, got {order}"
        )

    return StatFeature.combine(
        feature for feature, feature_order in _FEATURE_ORDERS if feature_order <= order
    )

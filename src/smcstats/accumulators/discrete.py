"""
Weighted frequency tables over exact discrete values.

Accumulates weight per distinct observed value, keyed by exact equality rather
than by bins, and exports the table as positions sorted ascending with aligned
frequencies. Used for categorical or integer-valued particles where a binned
histogram would blur the support.
"""

from __future__ import annotations

import math

from smcstats.accumulators.base import AccumulatorLifecycle, check_weight
from smcstats.schemas import DiscreteHistogram

__all__ = ["DiscreteAccumulator"]

_NAN_KEY = math.nan


def _position_key(position: float) -> tuple[bool, float]:
    return (math.isnan(position), position)


class DiscreteAccumulator(AccumulatorLifecycle):
    """
    Weighted histogram and mode of a stream of discrete values.

    Every NaN value falls in a single bucket, sorted after all other positions.
    Values observed only with zero weight keep a bucket with zero frequency.
    """

    def __init__(self):
        super().__init__()
        self._table: dict[float, float] = {}
        self.count = 0

    def init(self):
        """
        Reset the frequency mapping.

        :raises AccumulatorStateError: If called more than once
        """
        self._mark_initialized()
        self._table = {}
        self.count = 0

    def push(self, value: float, weight: float):
        """
        Add a weight to the bucket of an exact value.

        :param value: Observed discrete value
        :param weight: Non-negative importance weight
        :raises InvalidArgumentError: If the weight is negative
        """
        self._require_initialized()
        weight = check_weight(weight)
        value = float(value)
        key = _NAN_KEY if math.isnan(value) else value
        self._table[key] = self._table.get(key, 0.0) + weight
        self.count += 1

    def merge(self, other: DiscreteAccumulator):
        """
        Add the frequency mapping of another accumulator.

        :param other: Initialized accumulator over a disjoint partial stream
        """
        self._require_initialized()
        other._require_initialized()  # noqa: SLF001
        for key, weight in other._table.items():  # noqa: SLF001
            self._table[key] = self._table.get(key, 0.0) + weight
        self.count += other.count

    def pdf(self) -> DiscreteHistogram:
        """
        :return: Histogram with positions sorted ascending and aligned weights
        """
        self._require_initialized()
        positions = sorted(self._table, key=_position_key)

        return DiscreteHistogram(
            positions=positions,
            frequencies=[self._table[position] for position in positions],
        )

    def mode(self) -> float:
        """
        :return: Position with the largest weight, smallest position on ties
        :raises DegenerateInputError: If the stream is empty or has zero weight
        """
        return self.pdf().mode()

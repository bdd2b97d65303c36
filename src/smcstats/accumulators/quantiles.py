"""
Weighted inverse-CDF quantiles.

Collects every (value, weight) pair and, on the first query after a push, builds
a sorted cumulative weight table. The quantile at probability p is the smallest
value whose cumulative weight reaches p times the total weight; ties between
equal cumulative weights resolve to the lowest qualifying value. Memory grows
with the number of observations, which is bounded by the particle population.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from smcstats.accumulators.base import AccumulatorLifecycle, check_weight
from smcstats.errors import DegenerateInputError, InvalidArgumentError

__all__ = ["DEFAULT_QUANTILE_TOLERANCE", "WeightedQuantileAccumulator", "check_probs"]

DEFAULT_QUANTILE_TOLERANCE = 1e-12
"""Relative slack on the cumulative weight threshold to absorb rounding."""


def check_probs(probs: Iterable[float]) -> list[float]:
    """
    Validate probability levels.

    :param probs: Probability levels
    :return: Levels as a list of floats
    :raises InvalidArgumentError: If any level is not a number in [0, 1]
    """
    checked = []
    for prob in probs:
        try:
            prob = float(prob)
        except (TypeError, ValueError) as err:
            raise InvalidArgumentError(
                f"probabilities must be numbers in [0, 1], got {prob!r}"
            ) from err

        if not 0.0 <= prob <= 1.0:
            raise InvalidArgumentError(f"probabilities must be in [0, 1], got {prob}")
        checked.append(prob)

    return checked


class WeightedQuantileAccumulator(AccumulatorLifecycle):
    """
    Weighted quantiles at a fixed set of probability levels.

    The weighted median is the special case of a single 0.5 level.
    """

    def __init__(
        self,
        probs: Iterable[float],
        tolerance: float = DEFAULT_QUANTILE_TOLERANCE,
    ):
        """
        :param probs: Probability levels, each in [0, 1]; fixed for the lifetime
            of the accumulator
        :param tolerance: Relative slack applied to the cumulative weight
            threshold
        :raises InvalidArgumentError: If a level is outside [0, 1] or the
            tolerance is negative
        """
        super().__init__()
        self._probs = tuple(check_probs(probs))
        if not tolerance >= 0.0:
            raise InvalidArgumentError(
                f"tolerance must be non-negative, got {tolerance}"
            )
        self.tolerance = tolerance
        self._values: list[float] = []
        self._weights: list[float] = []
        self._cdf: tuple[np.ndarray, np.ndarray] | None = None

    @property
    def probs(self) -> tuple[float, ...]:
        """
        :return: Probability levels fixed at construction
        """
        return self._probs

    @property
    def count(self) -> int:
        """
        :return: Number of observations pushed
        """
        return len(self._values)

    def init(self):
        """
        Prepare empty storage.

        :raises AccumulatorStateError: If called more than once
        """
        self._mark_initialized()
        self._values = []
        self._weights = []
        self._cdf = None

    def push(self, value: float, weight: float):
        """
        Record one observation.

        :param value: Observed value
        :param weight: Non-negative importance weight
        :raises InvalidArgumentError: If the weight is negative
        """
        self._require_initialized()
        weight = check_weight(weight)
        self._values.append(float(value))
        self._weights.append(weight)
        self._cdf = None

    def merge(self, other: WeightedQuantileAccumulator):
        """
        Append the observations of another accumulator, keeping these levels.

        :param other: Initialized accumulator over a disjoint partial stream
        """
        self._require_initialized()
        other._require_initialized()  # noqa: SLF001
        self._values.extend(other._values)  # noqa: SLF001
        self._weights.extend(other._weights)  # noqa: SLF001
        self._cdf = None

    def quantile(self, index: int) -> float:
        """
        Quantile estimate for the probability level at an index.

        :param index: Position of the level in the construction-time levels
        :return: Smallest value whose cumulative weight reaches the level
        :raises InvalidArgumentError: If the index is out of range
        :raises DegenerateInputError: If the stream is empty or has zero weight
        """
        self._require_initialized()
        if not 0 <= index < len(self._probs):
            raise InvalidArgumentError(
                f"quantile index {index} out of range for {len(self._probs)} "
                "probability levels"
            )
        values, cumulative = self._cumulative()
        total = cumulative[-1]
        target = self._probs[index] * total - self.tolerance * total
        position = int(np.searchsorted(cumulative, target, side="left"))

        return values[min(position, len(values) - 1)].item()

    def quantiles(self) -> list[float]:
        """
        :return: Quantile estimates for every level, in construction order
        """
        return [self.quantile(index) for index in range(len(self._probs))]

    def _cumulative(self) -> tuple[np.ndarray, np.ndarray]:
        if self._cdf is not None:
            return self._cdf

        if not self._values:
            raise DegenerateInputError("quantiles are undefined for an empty stream")

        values = np.asarray(self._values, dtype=float)
        weights = np.asarray(self._weights, dtype=float)

        # zero weights carry no mass and must not qualify for the 0 level
        keep = weights > 0.0
        values, weights = values[keep], weights[keep]
        if len(values) == 0 or not math.fsum(weights) > 0.0:
            raise DegenerateInputError("quantiles are undefined for zero total weight")

        order = np.argsort(values, kind="stable")
        self._cdf = (values[order], np.cumsum(weights[order]))

        return self._cdf

"""
Observation validation and lifecycle checks shared by the weighted accumulators.
"""

from __future__ import annotations

from smcstats.errors import AccumulatorStateError, InvalidArgumentError

__all__ = ["AccumulatorLifecycle", "check_weight"]


def check_weight(weight: float) -> float:
    """
    Validate an observation weight.

    :param weight: Weight to validate
    :return: The weight as a float
    :raises InvalidArgumentError: If the weight is negative or NaN
    """
    weight = float(weight)
    if not weight >= 0.0:
        raise InvalidArgumentError(f"weights must be non-negative, got {weight}")

    return weight


class AccumulatorLifecycle:
    """
    Tracks the init-once-then-push lifecycle of an accumulator.
    """

    def __init__(self):
        self._initialized = False

    @property
    def initialized(self) -> bool:
        """
        :return: True once init has been called
        """
        return self._initialized

    def _mark_initialized(self):
        if self._initialized:
            raise AccumulatorStateError(
                f"{self.__class__.__name__}.init() must be called exactly once"
            )
        self._initialized = True

    def _require_initialized(self):
        if not self._initialized:
            raise AccumulatorStateError(
                f"{self.__class__.__name__}.init() must be called before use"
            )

    def _require_not_initialized(self):
        if self._initialized:
            raise AccumulatorStateError(
                f"{self.__class__.__name__} cannot be configured after init()"
            )

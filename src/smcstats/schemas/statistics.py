"""
Result models for weighted statistics requests.

Holds the finished outputs of the accumulators in serializable form: ordered
moment statistics truncated to the requested order, quantile estimates aligned
with their probability levels, discrete weighted frequency tables, and the
combined particle summary and effective sample size diagnosis. The
StatisticsResult wrapper carries either a value or a typed error description
across the façade boundary so no partial result is ever returned.
"""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import Field

from smcstats.errors import DegenerateInputError, ErrorKind, error_for_kind
from smcstats.schemas.base import StandardBaseModel

__all__ = [
    "MOMENT_NAMES",
    "DiscreteHistogram",
    "EssDiagnosis",
    "MomentStatistics",
    "ParticleSummary",
    "QuantileStatistics",
    "StatisticsErrorInfo",
    "StatisticsResult",
    "ValueT",
    "format_number",
]

ValueT = TypeVar("ValueT")

MOMENT_NAMES: tuple[str, ...] = ("mean", "var", "skew", "kurt")
"""Output names of the moment statistics, in order of increasing order."""


def format_number(value: float) -> str:
    """
    Exact label for a probability level or a discrete position, e.g. ``0.025``,
    ``1`` or ``1234567``.

    :param value: Number to label
    :return: Shortest string that round-trips to the same float, without a
        trailing ``.0``
    """
    label = repr(float(value))

    return label[:-2] if label.endswith(".0") else label


class MomentStatistics(StandardBaseModel):
    """
    Weighted moment statistics up to a requested order.

    Statistics above the requested order are left unset; ``as_dict`` returns the
    set statistics in the fixed mean, var, skew, kurt order. Kurtosis is reported
    as excess kurtosis.
    """

    mean: float | None = Field(description="Weighted mean", default=None)
    var: float | None = Field(description="Weighted population variance", default=None)
    skew: float | None = Field(description="Weighted skewness", default=None)
    kurt: float | None = Field(description="Weighted excess kurtosis", default=None)

    @property
    def order(self) -> int:
        """
        :return: Number of statistics set on the model
        """
        return len(self.as_dict())

    def as_dict(self) -> dict[str, float]:
        """
        :return: Ordered mapping of statistic name to value for set statistics
        """
        return {
            name: getattr(self, name)
            for name in MOMENT_NAMES
            if getattr(self, name) is not None
        }


class QuantileStatistics(StandardBaseModel):
    """
    Weighted quantile estimates aligned positionally with their probabilities.
    """

    probs: list[float] = Field(description="Requested probability levels")
    quantiles: list[float] = Field(
        description="Quantile estimates, one per probability level"
    )

    @property
    def labels(self) -> list[str]:
        """
        :return: Label for each probability level
        """
        return [format_number(prob) for prob in self.probs]

    def as_pairs(self) -> list[tuple[str, float]]:
        """
        :return: (probability label, quantile estimate) pairs in level order,
            one per requested level including repeated levels
        """
        return list(zip(self.labels, self.quantiles, strict=True))


class DiscreteHistogram(StandardBaseModel):
    """
    Weighted frequency table over exact discrete values.

    Positions are distinct and sorted ascending (a NaN position, if any, sorts
    last); frequencies are aligned with positions and hold accumulated weights,
    or probabilities once normalized.
    """

    positions: list[float] = Field(
        description="Distinct observed values, sorted ascending", default_factory=list
    )
    frequencies: list[float] = Field(
        description="Accumulated weight for each position", default_factory=list
    )

    @property
    def total_weight(self) -> float:
        """
        :return: Sum of the frequencies
        """
        return math.fsum(self.frequencies)

    def normalized(self) -> DiscreteHistogram:
        """
        Scale frequencies so they sum to one.

        :return: New histogram with the same positions and normalized frequencies
        :raises DegenerateInputError: If the total weight is zero
        """
        total = self.total_weight
        if total <= 0.0:
            raise DegenerateInputError(
                "cannot normalize a histogram with zero total weight"
            )

        return DiscreteHistogram(
            positions=list(self.positions),
            frequencies=[freq / total for freq in self.frequencies],
        )

    def mode(self) -> float:
        """
        Position with the maximum frequency; ties go to the smallest position.

        :return: Most frequent position
        :raises DegenerateInputError: If the histogram is empty or has zero weight
        """
        if not self.positions or self.total_weight <= 0.0:
            raise DegenerateInputError("mode is undefined for zero total weight")

        best_index = 0
        for index in range(1, len(self.frequencies)):
            # strict comparison keeps the earliest, i.e. smallest, tied position
            if self.frequencies[index] > self.frequencies[best_index]:
                best_index = index

        return self.positions[best_index]

    def as_dict(self) -> dict[str, float]:
        """
        :return: Mapping of position label to frequency
        """
        return {
            format_number(position): freq
            for position, freq in zip(self.positions, self.frequencies, strict=True)
        }


class ParticleSummary(StandardBaseModel):
    """
    Univariate marginal summary of one weighted particle component.
    """

    n_part: int = Field(description="Number of particles summarized")
    ess: float = Field(description="Effective sample size of the particle weights")
    moments: MomentStatistics = Field(
        description="Moment statistics up to the requested order",
        default_factory=MomentStatistics,
    )
    quantiles: QuantileStatistics | None = Field(
        description="Quantiles at the requested probability levels", default=None
    )
    mode: float | None = Field(description="Most probable value", default=None)


class EssDiagnosis(StandardBaseModel):
    """
    Effective sample size check of a particle set against a threshold.
    """

    ess: float = Field(description="Effective sample size of the particle weights")
    threshold: float = Field(description="Threshold the ESS must exceed")
    valid: bool = Field(description="Whether the ESS is above the threshold")


class StatisticsErrorInfo(StandardBaseModel):
    """
    Description of a rejected statistics request.
    """

    kind: ErrorKind = Field(description="Category of the failure")
    message: str = Field(description="Human readable diagnostic")


class StatisticsResult(StandardBaseModel, Generic[ValueT]):
    """
    Outcome of a statistics request: a value on success or an error otherwise.
    """

    value: ValueT | None = Field(description="Computed statistic", default=None)
    error: StatisticsErrorInfo | None = Field(
        description="Failure description when the request was rejected", default=None
    )

    @property
    def ok(self) -> bool:
        """
        :return: True if the request produced a value
        """
        return self.error is None

    def unwrap(self) -> ValueT:
        """
        :return: The computed value
        :raises StatisticsError: Subclass matching the error kind if the request
            was rejected
        """
        if self.error is not None:
            raise error_for_kind(self.error.kind, self.error.message)

        return self.value  # type: ignore[return-value]

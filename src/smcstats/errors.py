"""
Error taxonomy for weighted statistics requests.

Every failure raised by the accumulators is local to a single request: a
mismatched input pair, an invalid argument, or input that leaves the requested
statistic undefined. The façade converts these into error values so callers can
present targeted diagnostics without relying on exception handling.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "AccumulatorStateError",
    "DegenerateInputError",
    "ErrorKind",
    "InvalidArgumentError",
    "LengthMismatchError",
    "StatisticsError",
    "error_for_kind",
]


class ErrorKind(str, Enum):
    """
    Distinguishable categories of request failures.
    """

    LENGTH_MISMATCH = "length_mismatch"
    INVALID_ARGUMENT = "invalid_argument"
    DEGENERATE_INPUT = "degenerate_input"


class StatisticsError(Exception):
    """Base class for all errors raised by the statistics engine."""

    kind: ErrorKind | None = None


class LengthMismatchError(StatisticsError):
    """Values and weights sequences differ in length."""

    kind = ErrorKind.LENGTH_MISMATCH


class InvalidArgumentError(StatisticsError, ValueError):
    """
    A negative weight, a probability outside [0, 1], or a moment order outside
    1-4.
    """

    kind = ErrorKind.INVALID_ARGUMENT


class DegenerateInputError(StatisticsError):
    """Total weight is zero or the requested statistic is undefined."""

    kind = ErrorKind.DEGENERATE_INPUT


class AccumulatorStateError(StatisticsError, RuntimeError):
    """An accumulator was used outside of its add_feature/init/push lifecycle."""


_KIND_ERRORS: dict[ErrorKind, type[StatisticsError]] = {
    ErrorKind.LENGTH_MISMATCH: LengthMismatchError,
    ErrorKind.INVALID_ARGUMENT: InvalidArgumentError,
    ErrorKind.DEGENERATE_INPUT: DegenerateInputError,
}


def error_for_kind(kind: ErrorKind | str, message: str) -> StatisticsError:
    """
    Build the exception matching an error kind.

    :param kind: Error kind or its string value
    :param message: Message to attach to the exception
    :return: Instance of the exception class registered for the kind
    """
    return _KIND_ERRORS[ErrorKind(kind)](message)

"""
Pydantic schema models for smcstats results.

Provides the serializable outputs of the weighted accumulators and the result
wrapper used by the accumulation façade to report values or typed errors.
"""

from __future__ import annotations

from .base import StandardBaseModel
from .statistics import (
    MOMENT_NAMES,
    DiscreteHistogram,
    EssDiagnosis,
    MomentStatistics,
    ParticleSummary,
    QuantileStatistics,
    StatisticsErrorInfo,
    StatisticsResult,
    ValueT,
    format_number,
)

__all__ = [
    "MOMENT_NAMES",
    "DiscreteHistogram",
    "EssDiagnosis",
    "MomentStatistics",
    "ParticleSummary",
    "QuantileStatistics",
    "StandardBaseModel",
    "StatisticsErrorInfo",
    "StatisticsResult",
    "ValueT",
    "format_number",
]

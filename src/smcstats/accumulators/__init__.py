"""
Weighted accumulators for moments, quantiles and discrete frequency tables.
"""

from __future__ import annotations

from .base import AccumulatorLifecycle, check_weight
from .discrete import DiscreteAccumulator
from .features import MAX_MOMENT_ORDER, StatFeature, features_for_order, power_order
from .moments import WeightedMomentAccumulator
from .quantiles import (
    DEFAULT_QUANTILE_TOLERANCE,
    WeightedQuantileAccumulator,
    check_probs,
)

__all__ = [
    "DEFAULT_QUANTILE_TOLERANCE",
    "MAX_MOMENT_ORDER",
    "AccumulatorLifecycle",
    "DiscreteAccumulator",
    "StatFeature",
    "WeightedMomentAccumulator",
    "WeightedQuantileAccumulator",
    "check_probs",
    "check_weight",
    "features_for_order",
    "power_order",
]

"""
smcstats is a package that provides weight-aware statistics for importance
weighted particles: moments, quantiles and discrete frequency tables.
"""

from .accumulators import (
    DiscreteAccumulator,
    StatFeature,
    WeightedMomentAccumulator,
    WeightedQuantileAccumulator,
)
from .errors import (
    AccumulatorStateError,
    DegenerateInputError,
    ErrorKind,
    InvalidArgumentError,
    LengthMismatchError,
    StatisticsError,
)
from .facade import (
    AccumulationFacade,
    wtd_kurt,
    wtd_mean,
    wtd_median,
    wtd_mode,
    wtd_quantile,
    wtd_skew,
    wtd_stat,
    wtd_table,
    wtd_var,
)
from .logger import configure_logger, logger
from .settings import (
    AccumulationSettings,
    LoggingSettings,
    Settings,
    print_config,
    reload_settings,
    settings,
)
from .summary import diagnose_particles, effective_sample_size, summarize_particles

__all__ = [
    "AccumulationFacade",
    "AccumulationSettings",
    "AccumulatorStateError",
    "DegenerateInputError",
    "DiscreteAccumulator",
    "ErrorKind",
    "InvalidArgumentError",
    "LengthMismatchError",
    "LoggingSettings",
    "Settings",
    "StatFeature",
    "StatisticsError",
    "WeightedMomentAccumulator",
    "WeightedQuantileAccumulator",
    "configure_logger",
    "diagnose_particles",
    "effective_sample_size",
    "logger",
    "print_config",
    "reload_settings",
    "settings",
    "summarize_particles",
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

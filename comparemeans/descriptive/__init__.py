"""
Descriptive aggregates.

Public API:
    mean(x), variance(x), std_dev(x), std_error(x) -> float | None
    median(x), trimmed_mean(x, proportion) -> float | None
    t_interval(estimate, se, df, conf_level) -> (lower, upper)
    describe(x, conf_level) -> Descriptives
"""

from comparemeans.descriptive._aggregate import (
    DEFAULT_CONF_LEVEL,
    Descriptives,
    describe,
    descriptives_row,
    mean,
    median,
    std_dev,
    std_error,
    t_interval,
    trimmed_mean,
    variance,
)

__all__ = [
    "DEFAULT_CONF_LEVEL",
    "Descriptives",
    "describe",
    "descriptives_row",
    "mean",
    "median",
    "std_dev",
    "std_error",
    "t_interval",
    "trimmed_mean",
    "variance",
]

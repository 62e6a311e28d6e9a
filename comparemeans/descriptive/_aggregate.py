"""
Descriptive aggregates shared by every calculator.

Conventions:
- mean of an empty sample is None, not an exception; a sum that overflows
  gives an inf mean without a RuntimeWarning
- std_dev / std_error use the n - 1 denominator and are None for n <= 1
- interval bounds are None whenever the standard error or df is undefined
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike
from scipy import stats as sp_stats

from comparemeans.core.distributions import t_critical

DEFAULT_CONF_LEVEL = 0.95
TRIM_PROPORTION = 0.05


@dataclass(frozen=True)
class Descriptives:
    """One row of a descriptives table."""
    n: int
    mean: float | None
    std_dev: float | None
    std_error: float | None
    lower: float | None
    upper: float | None
    minimum: float | None
    maximum: float | None


def _as_array(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).ravel()


def mean(values: ArrayLike) -> float | None:
    """Arithmetic mean; None for an empty sample."""
    x = _as_array(values)
    if x.size == 0:
        return None
    with np.errstate(over='ignore', invalid='ignore'):
        return float(np.mean(x))


def variance(values: ArrayLike) -> float | None:
    """Sample variance (ddof=1); None for n <= 1."""
    x = _as_array(values)
    if x.size <= 1:
        return None
    return float(np.var(x, ddof=1))


def std_dev(values: ArrayLike) -> float | None:
    """Sample standard deviation (ddof=1); None for n <= 1."""
    var = variance(values)
    return None if var is None else math.sqrt(var)


def std_error(values: ArrayLike) -> float | None:
    """Standard error of the mean, sd / sqrt(n); None for n <= 1."""
    x = _as_array(values)
    sd = std_dev(x)
    return None if sd is None else sd / math.sqrt(x.size)


def median(values: ArrayLike) -> float | None:
    x = _as_array(values)
    if x.size == 0:
        return None
    return float(np.median(x))


def trimmed_mean(values: ArrayLike, proportion: float = TRIM_PROPORTION) -> float | None:
    """Mean after cutting floor(n * proportion) values from each end."""
    x = _as_array(values)
    if x.size == 0:
        return None
    return float(sp_stats.trim_mean(x, proportion))


def t_interval(
    estimate: float | None,
    se: float | None,
    df: float | None,
    conf_level: float = DEFAULT_CONF_LEVEL,
) -> tuple[float | None, float | None]:
    """Two-sided t interval estimate -/+ t_crit * se, or (None, None)."""
    if estimate is None or se is None:
        return None, None
    t_crit = t_critical(conf_level, df)
    if t_crit is None:
        return None, None
    margin = t_crit * se
    return estimate - margin, estimate + margin


def describe(values: ArrayLike, conf_level: float = DEFAULT_CONF_LEVEL) -> Descriptives:
    """
    N, mean, sd, se, t interval for the mean, min and max of one sample.

    Args:
        values: 1D sample
        conf_level: Confidence level of the interval for the mean

    Returns:
        Descriptives with None for every quantity the sample cannot support
    """
    x = _as_array(values)
    n = int(x.size)
    m = mean(x)
    se = std_error(x)
    lower, upper = t_interval(m, se, n - 1, conf_level)
    return Descriptives(
        n=n,
        mean=m,
        std_dev=std_dev(x),
        std_error=se,
        lower=lower,
        upper=upper,
        minimum=float(np.min(x)) if n else None,
        maximum=float(np.max(x)) if n else None,
    )


def descriptives_row(label: str, d: Descriptives) -> dict[str, Any]:
    """Wire form of a Descriptives row."""
    return {
        'factor': label,
        'N': d.n,
        'Mean': d.mean,
        'StdDeviation': d.std_dev,
        'StdError': d.std_error,
        'LowerBound': d.lower,
        'UpperBound': d.upper,
        'Minimum': d.minimum,
        'Maximum': d.maximum,
    }

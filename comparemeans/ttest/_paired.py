"""
Paired-samples t-test and the correlation of the paired values.

The test is a one-sample t-test of the row-wise differences
d = x1 - x2 against zero. The correlation is Pearson's r of (x1, x2) with
t = r sqrt((n - 2) / (1 - r^2)) on n - 2 df.
"""

import math

import numpy as np
from numpy.typing import ArrayLike

from comparemeans.core.distributions import t_two_tailed_p
from comparemeans.descriptive import mean, std_dev
from comparemeans.ttest._common import (
    AVERAGE_OF_VARIANCES,
    CORRECTED_STANDARD_DEVIATION,
    STANDARD_DEVIATION,
    EffectSizeParams,
    TTestParams,
)
from comparemeans.ttest._one_sample import one_sample_test


def paired_test(differences: ArrayLike, conf_level: float = 0.95) -> TTestParams:
    """t-test of mean(differences) = 0."""
    return one_sample_test(differences, 0.0, conf_level)


def pearson(x1: ArrayLike, x2: ArrayLike) -> tuple[float | None, float | None]:
    """
    Pearson's r and its two-tailed p-value.

    r is None for n < 2 or when either series is constant. p is None for
    n < 3; |r| = 1 gives p = 0.
    """
    a = np.asarray(x1, dtype=np.float64)
    b = np.asarray(x2, dtype=np.float64)
    n = a.size
    if n < 2:
        return None, None

    da = a - mean(a)
    db = b - mean(b)
    denominator = math.sqrt(float(np.sum(da * da)) * float(np.sum(db * db)))
    if denominator == 0:
        return None, None
    r = float(np.sum(da * db)) / denominator
    r = max(-1.0, min(1.0, r))

    if n < 3:
        return r, None
    if abs(r) == 1.0:
        return r, 0.0
    t_stat = r * math.sqrt((n - 2) / (1.0 - r * r))
    return r, t_two_tailed_p(t_stat, n - 2)


def paired_effect_size(
    x1: ArrayLike,
    x2: ArrayLike,
    differences: ArrayLike,
    r: float | None,
    standardizer: str = STANDARD_DEVIATION,
) -> EffectSizeParams:
    """
    Cohen's d for paired samples, mean(differences) / standardizer.

    standardizer:
        standardDeviation           sd of the differences
        correctedStandardDeviation  sqrt((s1^2 + s2^2) / 2) * sqrt(2 (1 - r))
        averageOfVariances          (s1 + s2) / 2
    """
    d = np.asarray(differences, dtype=np.float64)
    s1, s2 = std_dev(x1), std_dev(x2)

    scale = None
    if standardizer == STANDARD_DEVIATION:
        scale = std_dev(d)
    elif standardizer == CORRECTED_STANDARD_DEVIATION:
        if s1 is not None and s2 is not None and r is not None:
            scale = math.sqrt((s1 * s1 + s2 * s2) / 2.0) * math.sqrt(2.0 * (1.0 - r))
    elif standardizer == AVERAGE_OF_VARIANCES:
        if s1 is not None and s2 is not None:
            scale = (s1 + s2) / 2.0
    else:
        raise ValueError(f"unknown standardizer {standardizer!r}")

    estimate = None
    if scale and d.size:
        estimate = mean(d) / scale
    return EffectSizeParams(standardizer, scale, estimate)

"""
Two-sample t-tests for independent groups.

Pooled (Student's):
    df = n1 + n2 - 2
    sp^2 = ((n1 - 1) s1^2 + (n2 - 1) s2^2) / df
    se = sqrt(sp^2 (1/n1 + 1/n2))

Welch:
    se = sqrt(s1^2/n1 + s2^2/n2)
    df = (v1 + v2)^2 / (v1^2/(n1 - 1) + v2^2/(n2 - 1)),  v = s^2/n
    (fractional, not rounded)

Both report the difference mean(group1) - mean(group2) with a 95% interval
at their own df.
"""

import math

import numpy as np
from numpy.typing import ArrayLike

from comparemeans.core.distributions import t_two_tailed_p
from comparemeans.core.variables import as_number
from comparemeans.descriptive import mean, std_dev, t_interval, variance
from comparemeans.ttest._common import EffectSizeParams, TTestParams

POOLED = 'pooledStandardDeviation'
GLASS = 'group2StandardDeviation'


def _finish(diff: float | None, se: float | None, df: float | None) -> TTestParams:
    if diff is None or se is None or se == 0 or df is None or df <= 0:
        return TTestParams(None, df, None, diff, se, None, None)
    t_stat = diff / se
    lower, upper = t_interval(diff, se, df)
    return TTestParams(
        t=t_stat,
        df=df,
        p_value=t_two_tailed_p(t_stat, df),
        mean_diff=diff,
        se=se,
        ci_lower=lower,
        ci_upper=upper,
    )


def _difference(x1: np.ndarray, x2: np.ndarray) -> float | None:
    m1, m2 = mean(x1), mean(x2)
    if m1 is None or m2 is None:
        return None
    return m1 - m2


def _pooled_variance(x1: np.ndarray, x2: np.ndarray) -> float | None:
    n1, n2 = len(x1), len(x2)
    df = n1 + n2 - 2
    if n1 == 0 or n2 == 0 or df <= 0:
        return None
    # a single-observation group carries no within-group spread
    ss = sum((len(x) - 1) * (variance(x) or 0.0) for x in (x1, x2))
    return ss / df


def pooled_test(group1: ArrayLike, group2: ArrayLike) -> TTestParams:
    """Equal-variance t-test; df is None when either group is empty."""
    x1 = np.asarray(group1, dtype=np.float64)
    x2 = np.asarray(group2, dtype=np.float64)
    diff = _difference(x1, x2)
    sp2 = _pooled_variance(x1, x2)
    if sp2 is None:
        return TTestParams(None, None, None, diff, None, None, None)
    se = math.sqrt(sp2 * (1.0 / len(x1) + 1.0 / len(x2)))
    return _finish(diff, se, len(x1) + len(x2) - 2)


def welch_test(group1: ArrayLike, group2: ArrayLike) -> TTestParams:
    """Unequal-variance t-test; needs at least two observations per group."""
    x1 = np.asarray(group1, dtype=np.float64)
    x2 = np.asarray(group2, dtype=np.float64)
    diff = _difference(x1, x2)
    var1, var2 = variance(x1), variance(x2)
    if var1 is None or var2 is None:
        return TTestParams(None, None, None, diff, None, None, None)

    n1, n2 = len(x1), len(x2)
    v1 = var1 / n1
    v2 = var2 / n2
    se = math.sqrt(v1 + v2)
    if se == 0:
        return TTestParams(None, None, None, diff, se, None, None)
    denominator = v1 * v1 / (n1 - 1) + v2 * v2 / (n2 - 1)
    df = as_number((v1 + v2) * (v1 + v2) / denominator) if denominator > 0 else None
    return _finish(diff, se, df)


def independent_effect_sizes(
    group1: ArrayLike,
    group2: ArrayLike,
) -> tuple[EffectSizeParams, EffectSizeParams]:
    """
    Cohen's d (pooled sd) and Glass's delta (group 2 sd).

    Estimates are None when their standardizer is undefined or zero.
    """
    x1 = np.asarray(group1, dtype=np.float64)
    x2 = np.asarray(group2, dtype=np.float64)
    diff = _difference(x1, x2)

    sp2 = _pooled_variance(x1, x2)
    sp = None if sp2 is None else math.sqrt(sp2)
    s2 = std_dev(x2)

    def ratio(scale: float | None) -> float | None:
        if diff is None or not scale:
            return None
        return diff / scale

    return (
        EffectSizeParams(POOLED, sp, ratio(sp)),
        EffectSizeParams(GLASS, s2, ratio(s2)),
    )

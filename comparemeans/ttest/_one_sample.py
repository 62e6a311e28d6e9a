"""
One-sample t-test: H0 mean(x) = test value.

t = (mean - test_value) / se, df = n - 1, two-tailed p, and an interval
for the mean difference at the requested confidence level.
"""

import numpy as np
from numpy.typing import ArrayLike

from comparemeans.core.distributions import t_two_tailed_p
from comparemeans.descriptive import mean, std_dev, std_error, t_interval
from comparemeans.ttest._common import STANDARD_DEVIATION, EffectSizeParams, TTestParams


def one_sample_test(
    values: ArrayLike,
    test_value: float = 0.0,
    conf_level: float = 0.95,
) -> TTestParams:
    """
    Test statistics for one sample.

    Only the mean difference is reported when n <= 1 or the standard
    error is zero; t, df, p and the bounds are None.
    """
    x = np.asarray(values, dtype=np.float64).ravel()
    m = mean(x)
    se = std_error(x)
    mean_diff = None if m is None else m - test_value

    if se is None or se == 0:
        return TTestParams(None, None, None, mean_diff, se, None, None)

    df = x.size - 1
    t_stat = mean_diff / se
    lower, upper = t_interval(mean_diff, se, df, conf_level)
    return TTestParams(
        t=t_stat,
        df=df,
        p_value=t_two_tailed_p(t_stat, df),
        mean_diff=mean_diff,
        se=se,
        ci_lower=lower,
        ci_upper=upper,
    )


def one_sample_effect_size(values: ArrayLike, test_value: float = 0.0) -> EffectSizeParams:
    """Cohen's d = (mean - test_value) / sd; None when sd is undefined or zero."""
    m = mean(values)
    sd = std_dev(values)
    d = None
    if m is not None and sd:
        d = (m - test_value) / sd
    return EffectSizeParams(STANDARD_DEVIATION, sd, d)

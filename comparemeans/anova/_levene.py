"""
Levene's test for homogeneity of variances.

Algorithm: transform each observation to |y_i - center(group_j)|, then run
a one-way ANOVA on the transformed values. Centers:
    'mean'     classic Levene test
    'median'   Brown-Forsythe variant; optionally with df2 adjusted by a
               Welch-Satterthwaite style approximation
    'trimmed'  5% trimmed mean

Shared by the one-way ANOVA (all four variants) and the independent-samples
t-test (mean-centred, two groups).
"""

from collections.abc import Sequence
import math

import numpy as np
from numpy.typing import ArrayLike

from comparemeans.anova._common import LeveneParams
from comparemeans.core.distributions import f_sig
from comparemeans.core.variables import as_number
from comparemeans.descriptive import mean, median, trimmed_mean

CENTERS = ('mean', 'median', 'trimmed')


def _center(y: np.ndarray, center: str) -> float:
    if center == 'mean':
        return mean(y)
    if center == 'median':
        return median(y)
    return trimmed_mean(y)


def levene_test_impl(
    groups: Sequence[ArrayLike],
    *,
    center: str = 'mean',
    adjusted_df: bool = False,
) -> LeveneParams:
    """
    Compute one Levene variant over already-split groups.

    Args:
        groups: One 1D array of observations per group
        center: 'mean', 'median' or 'trimmed'
        adjusted_df: Replace df2 by (sum u)^2 / sum(u^2 / v), where u is a
            group's sum of squared deviations of the transformed values and
            v = n - 1 (groups with v = 0 are skipped)

    Returns:
        LeveneParams; statistic and p_value are None when the test is
        undefined (fewer than two groups, an empty group, no within df,
        zero within-group spread of the deviations, or sums of squares too
        large to represent)
    """
    if center not in CENTERS:
        raise ValueError(f"center must be one of {CENTERS}, got {center!r}")

    arrays = [np.asarray(g, dtype=np.float64).ravel() for g in groups]
    k = len(arrays)
    n = sum(a.size for a in arrays)
    df1 = k - 1
    df2: float = n - k

    if k < 2 or any(a.size == 0 for a in arrays):
        return LeveneParams(center, adjusted_df, None, df1, df2, None)

    ss_between = 0.0
    ss_within = 0.0
    u_sum = 0.0
    u_sq_over_v = 0.0
    # Overflow on extreme data yields inf/nan, caught by the finiteness checks.
    with np.errstate(over='ignore', invalid='ignore'):
        z = [np.abs(a - _center(a, center)) for a in arrays]
        z_grand_mean = mean(np.concatenate(z))
        for z_group in z:
            z_mean = mean(z_group)
            u = float(np.sum(np.square(z_group - z_mean)))
            ss_between += float(z_group.size * np.square(z_mean - z_grand_mean))
            ss_within += u
            v = z_group.size - 1
            u_sum += u
            if v > 0:
                u_sq_over_v += u * u / v

    if adjusted_df and u_sq_over_v > 0:
        df2 = u_sum * u_sum / u_sq_over_v

    if not (math.isfinite(ss_between) and math.isfinite(ss_within) and math.isfinite(df2)):
        return LeveneParams(center, adjusted_df, None, df1, n - k, None)
    if df2 <= 0 or ss_within == 0:
        return LeveneParams(center, adjusted_df, None, df1, df2, None)

    # The statistic always uses the unadjusted within df; only the reference
    # F distribution changes under adjusted_df.
    statistic = as_number(((n - k) / df1) * ss_between / ss_within)
    if statistic is None:
        return LeveneParams(center, adjusted_df, None, df1, float(df2), None)
    return LeveneParams(
        center=center,
        adjusted_df=adjusted_df,
        statistic=statistic,
        df1=df1,
        df2=float(df2),
        p_value=f_sig(statistic, df1, df2),
    )


def levene_variants(groups: Sequence[ArrayLike]) -> tuple[LeveneParams, ...]:
    """The four variants in display order: mean, median, adjusted median, trimmed."""
    return (
        levene_test_impl(groups, center='mean'),
        levene_test_impl(groups, center='median'),
        levene_test_impl(groups, center='median', adjusted_df=True),
        levene_test_impl(groups, center='trimmed'),
    )

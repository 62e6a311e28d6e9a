"""
Sum-of-squares decomposition for a one-way layout.

SSb = sum n_j (mean_j - grand)^2, SSw = sum_j sum_i (x_ij - mean_j)^2,
SSt = SSb + SSw with df k - 1, N - k and N - 1.
"""

from collections.abc import Sequence

import numpy as np

from comparemeans.anova._common import AnovaEffectSize, AnovaTable, AnovaTableRow
from comparemeans.core.distributions import f_sig
from comparemeans.core.groups import Group
from comparemeans.core.variables import as_number
from comparemeans.descriptive import mean


def oneway_table(groups: Sequence[Group]) -> AnovaTable | None:
    """
    Build the ANOVA table for already-formed groups.

    Returns None for fewer than two groups. Mean squares, F and Sig are
    None when their denominators are zero, and any sum of squares that
    overflows is None.
    """
    k = len(groups)
    if k < 2:
        return None

    n = sum(g.n for g in groups)
    grand_mean = mean(np.concatenate([g.values for g in groups]))
    means = np.array([mean(g.values) for g in groups], dtype=np.float64)
    sizes = np.array([g.n for g in groups], dtype=np.float64)

    # Overflow on extreme data yields inf/nan here, reported below as None.
    with np.errstate(over='ignore', invalid='ignore'):
        ss_between = float(np.sum(sizes * np.square(means - grand_mean)))
        ss_within = float(sum(
            np.sum(np.square(g.values - m)) for g, m in zip(groups, means)
        ))
        ss_total = ss_between + ss_within

    df_between = k - 1
    df_within = n - k
    ms_between = as_number(ss_between / df_between)
    ms_within = as_number(ss_within / df_within) if df_within > 0 else None

    f_value = None
    if ms_between is not None and ms_within is not None and ms_within > 0:
        f_value = as_number(ms_between / ms_within)

    return AnovaTable(
        between=AnovaTableRow(
            term='Between Groups',
            df=df_between,
            sum_sq=as_number(ss_between),
            mean_sq=ms_between,
            f_value=f_value,
            p_value=f_sig(f_value, df_between, df_within),
        ),
        within=AnovaTableRow(
            term='Within Groups',
            df=df_within,
            sum_sq=as_number(ss_within),
            mean_sq=ms_within,
            f_value=None,
            p_value=None,
        ),
        total=AnovaTableRow(
            term='Total',
            df=n - 1,
            sum_sq=as_number(ss_total),
            mean_sq=None,
            f_value=None,
            p_value=None,
        ),
        n_obs=n,
        n_groups=k,
        grand_mean=as_number(grand_mean),
    )


def effect_sizes(table: AnovaTable) -> AnovaEffectSize:
    """
    Eta-, epsilon- and omega-squared for the between-groups term.

    eta^2 = SSb / SSt
    epsilon^2 = (SSb - dfb * MSw) / SSt
    omega^2 = (SSb - dfb * MSw) / (SSt + MSw)
    """
    ss_b = table.between.sum_sq
    ss_t = table.total.sum_sq
    df_b = table.between.df
    ms_w = table.within.mean_sq

    if ss_b is None or ss_t is None or ss_t <= 0:
        return AnovaEffectSize(None, None, None)

    eta = ss_b / ss_t
    if ms_w is None:
        return AnovaEffectSize(eta, None, None)

    return AnovaEffectSize(
        eta_squared=eta,
        epsilon_squared=(ss_b - df_b * ms_w) / ss_t,
        omega_squared=(ss_b - df_b * ms_w) / (ss_t + ms_w),
    )

"""
Tukey HSD pairwise comparisons.

Uses the studentized range distribution (scipy.stats.studentized_range)
for adjusted p-values and simultaneous confidence intervals. Every ordered
pair (i, j), i != j, gets a row, so the table is antisymmetric in the mean
difference and symmetric in Sig.
"""

from collections.abc import Sequence
import math

from comparemeans.anova._common import CONF_LEVEL, TUKEY, PostHocComparison
from comparemeans.core.distributions import q_critical, q_sig
from comparemeans.core.groups import Group
from comparemeans.descriptive import mean


def tukey_hsd(
    groups: Sequence[Group],
    mse: float | None,
    df_error: int,
    *,
    conf_level: float = CONF_LEVEL,
) -> tuple[PostHocComparison, ...]:
    """
    Tukey's Honestly Significant Difference test.

    Args:
        groups: Groups in display order
        mse: Within-groups mean square from the ANOVA table
        df_error: Within-groups degrees of freedom
        conf_level: Confidence level for the intervals

    Returns:
        One PostHocComparison per ordered pair; se, Sig and bounds are None
        when mse or df_error cannot support them
    """
    k = len(groups)
    means = [mean(g.values) for g in groups]
    usable = mse is not None and df_error > 0

    # q_crit / sqrt(2) turns the studentized-range quantile into a
    # multiplier for the SE of a difference
    margin_factor = None
    if usable:
        q_crit = q_critical(conf_level, k, df_error)
        if q_crit is not None:
            margin_factor = q_crit / math.sqrt(2.0)

    comparisons: list[PostHocComparison] = []
    for i, g1 in enumerate(groups):
        for j, g2 in enumerate(groups):
            if i == j:
                continue
            diff = means[i] - means[j]

            se = p_val = lower = upper = None
            if usable:
                se = math.sqrt(mse * (1.0 / g1.n + 1.0 / g2.n))
                if se > 0:
                    q_stat = abs(diff) / (se / math.sqrt(2.0))
                    p_val = q_sig(q_stat, k, df_error)
                if margin_factor is not None:
                    lower = diff - margin_factor * se
                    upper = diff + margin_factor * se

            comparisons.append(PostHocComparison(
                method=TUKEY,
                group1=g1.label,
                group2=g2.label,
                diff=diff,
                se=se,
                p_value=p_val,
                ci_lower=lower,
                ci_upper=upper,
            ))

    return tuple(comparisons)

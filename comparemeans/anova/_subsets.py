"""
Homogeneous subsets by a step-down range search.

Groups are sorted by mean. Starting from the lowest mean, the widest span
[i..j] whose mean range is within the critical range is accepted as a
subset and the scan resumes after it. Groups no span captures become
singleton subsets. The critical range is q * sqrt(MSE / n_h), with n_h the
harmonic mean of the group sizes and q a studentized-range quantile:

    Tukey   q(0.95; k, df) for every span
    Duncan  q(0.95^(p-1); p, df) for a span of p means

The trailing significance row is evaluated on each subset's own spread,
with k means for Tukey and the subset size for Duncan.
"""

from collections.abc import Sequence
import math

from comparemeans.anova._common import (
    CONF_LEVEL,
    DUNCAN,
    POSTHOC_METHODS,
    TUKEY,
    HomogeneousSubsetTable,
    SubsetRow,
)
from comparemeans.core.distributions import q_critical, q_sig
from comparemeans.core.groups import Group
from comparemeans.descriptive import mean


def _critical_q(method: str, p: int, k: int, df_error: int) -> float | None:
    if method == TUKEY:
        return q_critical(CONF_LEVEL, k, df_error)
    alpha_p = 1.0 - CONF_LEVEL ** (p - 1)
    return q_critical(1.0 - alpha_p, p, df_error)


def _search(
    means: Sequence[float],
    se: float | None,
    method: str,
    df_error: int,
) -> list[tuple[int, int]]:
    """Accepted spans as inclusive (start, end) index pairs into means."""
    k = len(means)
    spans: list[tuple[int, int]] = []
    if se is None:
        return spans

    i = 0
    while i < k:
        accepted = False
        for j in range(k - 1, i - 1, -1):
            p = j - i + 1
            if p < 2:
                continue
            q_crit = _critical_q(method, p, k, df_error)
            if q_crit is None:
                continue
            if means[j] - means[i] <= q_crit * se:
                spans.append((i, j))
                i = j + 1
                accepted = True
                break
        if not accepted:
            i += 1
    return spans


def homogeneous_subsets(
    groups: Sequence[Group],
    mse: float | None,
    df_error: int,
    *,
    method: str = TUKEY,
) -> HomogeneousSubsetTable:
    """
    Partition groups into homogeneous subsets.

    Args:
        groups: Groups in any order
        mse: Within-groups mean square
        df_error: Within-groups degrees of freedom
        method: 'Tukey HSD' or 'Duncan'

    Returns:
        HomogeneousSubsetTable; every group belongs to exactly one subset
    """
    if method not in POSTHOC_METHODS:
        raise ValueError(f"method must be one of {POSTHOC_METHODS}, got {method!r}")

    k = len(groups)
    ordered = sorted(groups, key=lambda g: mean(g.values))
    means = [mean(g.values) for g in ordered]

    se = None
    if mse is not None and df_error > 0 and k > 0:
        n_harmonic = k / sum(1.0 / g.n for g in ordered)
        se = math.sqrt(mse / n_harmonic)

    spans = _search(means, se, method, df_error)
    covered = {idx for start, end in spans for idx in range(start, end + 1)}
    spans.extend((idx, idx) for idx in range(k) if idx not in covered)
    # number subsets by their lowest-mean member
    spans.sort()

    subset_of = {}
    significance: list[float | None] = []
    for number, (start, end) in enumerate(spans, start=1):
        for idx in range(start, end + 1):
            subset_of[idx] = number
        if start == end:
            significance.append(1.0)
            continue
        size = end - start + 1
        spread = means[end] - means[start]
        q_stat = spread / se if se else None
        significance.append(q_sig(q_stat, size if method == DUNCAN else k, df_error))

    rows = tuple(
        SubsetRow(group=g.label, n=g.n, mean=means[idx], subsets=(subset_of[idx],))
        for idx, g in enumerate(ordered)
    )
    return HomogeneousSubsetTable(
        method=method,
        subsets=tuple(
            tuple(ordered[idx].label for idx in range(start, end + 1))
            for start, end in spans
        ),
        rows=rows,
        significance=tuple(significance),
    )

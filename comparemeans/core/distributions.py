"""
Thin wrappers over scipy.stats distributions.

Each helper returns None when its inputs make the quantity undefined
(non-finite statistic, non-positive degrees of freedom) instead of
propagating NaN, so "not applicable" never looks like a number.
"""

from functools import lru_cache
import math

from scipy import stats as sp_stats

from comparemeans.core.exceptions import NumericalError


def _usable(*values: float | None) -> bool:
    return all(v is not None and math.isfinite(v) for v in values)


def t_two_tailed_p(t_stat: float | None, df: float | None) -> float | None:
    """Two-tailed p-value 2 * (1 - T_cdf(|t|, df))."""
    if not _usable(t_stat, df) or df <= 0:
        return None
    return float(2.0 * sp_stats.t.sf(abs(t_stat), df))


def t_critical(conf_level: float, df: float | None) -> float | None:
    """Two-tailed critical value at 1 - (1 - conf_level) / 2."""
    if not _usable(df) or df <= 0:
        return None
    alpha = 1.0 - conf_level
    return _checked(sp_stats.t.ppf(1.0 - alpha / 2.0, df), 't.ppf')


def f_sig(f_stat: float | None, df1: float, df2: float) -> float | None:
    """Upper-tail F probability, 1 - F_cdf(f, df1, df2)."""
    if not _usable(f_stat, df1, df2) or df1 <= 0 or df2 <= 0:
        return None
    return float(sp_stats.f.sf(f_stat, df1, df2))


def q_sig(q_stat: float | None, k: int, df: float) -> float | None:
    """Upper-tail studentized range probability, 1 - Q_cdf(q, k, df)."""
    if not _usable(q_stat, df) or k < 2 or df <= 0:
        return None
    return float(min(sp_stats.studentized_range.sf(q_stat, k, df), 1.0))


def q_critical(prob: float, k: int, df: float) -> float | None:
    """Studentized range quantile at prob for k means and df error df."""
    if not _usable(df) or k < 2 or df <= 0:
        return None
    return _q_ppf(float(prob), int(k), float(df))


@lru_cache(maxsize=256)
def _q_ppf(prob: float, k: int, df: float) -> float:
    # studentized_range.ppf integrates numerically; the step-down search
    # asks for the same (prob, k, df) many times
    return _checked(sp_stats.studentized_range.ppf(prob, k, df), 'studentized_range.ppf')


def _checked(value: float, function: str) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise NumericalError(
            f"{function} returned a non-finite value ({value})",
            function=function,
        )
    return value

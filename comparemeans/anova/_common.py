"""
Common data types for one-way ANOVA.

Contains the frozen payloads produced by the ANOVA computations.
Each payload is a pure data container; the to_dict() methods only rename
fields into the wire form.
"""

from dataclasses import dataclass
from typing import Any

ALPHA = 0.05
CONF_LEVEL = 1.0 - ALPHA

TUKEY = 'Tukey HSD'
DUNCAN = 'Duncan'
POSTHOC_METHODS = (TUKEY, DUNCAN)


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (Between Groups, Within Groups, Total)."""
    term: str
    df: int
    sum_sq: float | None
    mean_sq: float | None     # None for the Total row
    f_value: float | None     # None except for Between Groups
    p_value: float | None     # None except for Between Groups


@dataclass(frozen=True)
class AnovaTable:
    """Sum-of-squares decomposition of a one-way design."""
    between: AnovaTableRow
    within: AnovaTableRow
    total: AnovaTableRow
    n_obs: int
    n_groups: int
    grand_mean: float | None

    @property
    def rows(self) -> tuple[AnovaTableRow, ...]:
        return (self.between, self.within, self.total)

    def to_dict(self) -> dict[str, Any]:
        return {
            'SumOfSquares': self.between.sum_sq,
            'df': self.between.df,
            'MeanSquare': self.between.mean_sq,
            'F': self.between.f_value,
            'Sig': self.between.p_value,
            'withinGroupsSumOfSquares': self.within.sum_sq,
            'withinGroupsDf': self.within.df,
            'withinGroupsMeanSquare': self.within.mean_sq,
            'totalSumOfSquares': self.total.sum_sq,
            'totalDf': self.total.df,
        }


@dataclass(frozen=True)
class LeveneParams:
    """One Levene variant: statistic, df and significance."""
    center: str            # 'mean', 'median' or 'trimmed'
    adjusted_df: bool
    statistic: float | None
    df1: int
    df2: float
    p_value: float | None

    @property
    def label(self) -> str:
        if self.center == 'mean':
            return 'Based on Mean'
        if self.center == 'median':
            return 'Based on Median and with adjusted df' if self.adjusted_df else 'Based on Median'
        return 'Based on trimmed mean'

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.label,
            'LeveneStatistic': self.statistic,
            'df1': self.df1,
            'df2': self.df2,
            'Sig': self.p_value,
        }


@dataclass(frozen=True)
class PostHocComparison:
    """One ordered pair (factor1 vs factor2) of a multiple-comparison table."""
    method: str
    group1: str
    group2: str
    diff: float            # mean(group1) - mean(group2)
    se: float | None
    p_value: float | None
    ci_lower: float | None
    ci_upper: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            'method': self.method,
            'factor1': self.group1,
            'factor2': self.group2,
            'meanDifference': self.diff,
            'stdError': self.se,
            'Sig': self.p_value,
            'lowerBound': self.ci_lower,
            'upperBound': self.ci_upper,
        }


@dataclass(frozen=True)
class SubsetRow:
    """A group's line in a homogeneous-subset table."""
    group: str
    n: int
    mean: float
    subsets: tuple[int, ...]       # 1-based subset numbers containing the group


@dataclass(frozen=True)
class HomogeneousSubsetTable:
    """
    Homogeneous subsets found by a step-down range procedure.

    rows are ordered by ascending mean; significance[i] belongs to
    subset number i + 1.
    """
    method: str
    subsets: tuple[tuple[str, ...], ...]
    rows: tuple[SubsetRow, ...]
    significance: tuple[float | None, ...]

    @property
    def subset_count(self) -> int:
        return len(self.subsets)

    def to_dict(self) -> dict[str, Any]:
        output: list[dict[str, Any]] = []
        for row in self.rows:
            line: dict[str, Any] = {'method': self.method, 'factor': row.group, 'N': row.n}
            for number in row.subsets:
                line[f'subset{number}'] = row.mean
            output.append(line)
        sig_line: dict[str, Any] = {'method': self.method, 'factor': 'Sig.'}
        for i, sig in enumerate(self.significance):
            sig_line[f'subset{i + 1}'] = sig
        output.append(sig_line)
        return {
            'method': self.method,
            'output': output,
            'subsetCount': self.subset_count,
        }


@dataclass(frozen=True)
class AnovaEffectSize:
    """Variance-explained effect sizes for the between-groups term."""
    eta_squared: float | None
    epsilon_squared: float | None
    omega_squared: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            'etaSquared': self.eta_squared,
            'epsilonSquared': self.epsilon_squared,
            'omegaSquared': self.omega_squared,
        }
